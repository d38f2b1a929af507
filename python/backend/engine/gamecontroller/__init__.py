from backend.engine.gamecontroller.controller import (
    Renderer,
    SequenceController,
    WinPhase,
)

__all__ = ["Renderer", "SequenceController", "WinPhase"]
