from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional


class Command(Enum):
    QUIT = "quit"
    LEFT = "left"
    RIGHT = "right"
    ROTATE = "rotate"
    DOWN = "down"
    DROP = "drop"
    TOGGLE_HELP = "toggle_help"
    TOGGLE_NEXT = "toggle_next"
    TOGGLE_COLOR = "toggle_color"


ESCAPE = "\x1b"

KEY_TO_COMMAND: Dict[str, Command] = {
    "\x03": Command.QUIT,
    "q": Command.QUIT,
    "a": Command.LEFT,
    "d": Command.RIGHT,
    "s": Command.ROTATE,
    " ": Command.DROP,
    "h": Command.TOGGLE_HELP,
    "n": Command.TOGGLE_NEXT,
    "c": Command.TOGGLE_COLOR,
}

# final byte of the "ESC [ x" cursor key sequences
ARROW_TO_COMMAND: Dict[str, Command] = {
    "A": Command.ROTATE,
    "B": Command.DOWN,
    "C": Command.RIGHT,
    "D": Command.LEFT,
}


class KeyDecoder:
    """Turns a stream of single characters into commands.

    Keeps the last three characters seen so that arrow keys, which the
    terminal sends as ``ESC [ A`` .. ``ESC [ D``, map to movement while the
    same letters typed on their own keep their plain bindings.
    """

    def __init__(self) -> None:
        self._window: List[str] = ["", "", ""]

    def reset(self) -> None:
        self._window = ["", "", ""]

    def feed(self, key: str) -> Optional[Command]:
        self._window = self._window[1:] + [key]
        if self._window[0] == ESCAPE and self._window[1] == "[":
            return ARROW_TO_COMMAND.get(key)
        return KEY_TO_COMMAND.get(key.lower())
