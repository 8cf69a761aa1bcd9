from __future__ import annotations

import sys
from typing import IO, Optional, Protocol

from termblocks.game.pieces import Color


class DisplaySurface(Protocol):
    """Primitive drawing operations the views are written against."""

    def print(self, text: str) -> None: ...

    def xyprint(self, x: int, y: int, text: str) -> None: ...

    def set_fg(self, color: Color) -> None: ...

    def set_bg(self, color: Color) -> None: ...

    def reset_colors(self) -> None: ...

    def set_bold(self) -> None: ...

    def clear_screen(self) -> None: ...

    def show_cursor(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def toggle_color(self) -> None: ...

    def flush(self) -> None: ...


class TerminalScreen:
    """ANSI escape sequence writer.

    Everything is buffered and written to the stream in one go on `flush`,
    so a frame never appears half drawn. Coordinates are 1-based columns
    (`x`) and rows (`y`).
    """

    def __init__(self, stream: Optional[IO[str]] = None, use_color: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.use_color = use_color
        self._buffer = []

    def print(self, text: str) -> None:
        self._buffer.append(text)

    def xyprint(self, x: int, y: int, text: str) -> None:
        self._buffer.append(f"\x1b[{y};{x}H{text}")

    def show_cursor(self) -> None:
        self._buffer.append("\x1b[?25h")

    def hide_cursor(self) -> None:
        self._buffer.append("\x1b[?25l")

    def set_fg(self, color: Color) -> None:
        if self.use_color:
            self._buffer.append(f"\x1b[3{int(color)}m")

    def set_bg(self, color: Color) -> None:
        if self.use_color:
            self._buffer.append(f"\x1b[4{int(color)}m")

    def reset_colors(self) -> None:
        self._buffer.append("\x1b[0m")

    def set_bold(self) -> None:
        self._buffer.append("\x1b[1m")

    def clear_screen(self) -> None:
        self._buffer.append("\x1b[2J")

    def toggle_color(self) -> None:
        self.use_color = not self.use_color

    def flush(self) -> None:
        if not self._buffer:
            return
        self.stream.write("".join(self._buffer))
        self.stream.flush()
        self._buffer = []
