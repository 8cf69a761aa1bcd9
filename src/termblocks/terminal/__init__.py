"""Terminal front end: ANSI screen, raw keyboard and widgets."""

from .keyboard import InputUnavailableError, KeyboardInput
from .screen import DisplaySurface, TerminalScreen
from .widgets import Drawable, HelpPanel, PieceSprite, PlayfieldPanel, ScorePanel, TerminalView

__all__ = [
    "InputUnavailableError",
    "KeyboardInput",
    "DisplaySurface",
    "TerminalScreen",
    "Drawable",
    "HelpPanel",
    "PieceSprite",
    "PlayfieldPanel",
    "ScorePanel",
    "TerminalView",
]
