from backend.engine.gamestate.state import GameState, SessionState, format_elapsed

__all__ = ["GameState", "SessionState", "format_elapsed"]
