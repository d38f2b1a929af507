from backend.engine.gamewin.detector import WinDetector

__all__ = ["WinDetector"]
