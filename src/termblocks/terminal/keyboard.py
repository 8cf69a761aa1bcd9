from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from typing import IO, List, Optional


logger = logging.getLogger(__name__)


class InputUnavailableError(RuntimeError):
    """The keyboard cannot be put into raw mode (e.g. stdin is not a TTY)."""


class KeyboardInput:
    """Raw, unechoed keyboard reader for the duration of a ``with`` block.

    The previous terminal attributes are restored when the block exits,
    whether the game ended normally or with an exception.
    """

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self.stream = stream or sys.stdin
        self._fd: Optional[int] = None
        self._saved: Optional[List] = None

    def __enter__(self) -> "KeyboardInput":
        try:
            fd = self.stream.fileno()
        except (AttributeError, ValueError, OSError) as exc:
            raise InputUnavailableError("standard input has no file descriptor") from exc
        if not os.isatty(fd):
            raise InputUnavailableError("standard input is not a terminal")
        try:
            self._saved = termios.tcgetattr(fd)
            tty.setraw(fd)
        except termios.error as exc:
            raise InputUnavailableError(f"cannot switch terminal to raw mode: {exc}") from exc
        self._fd = fd
        logger.debug("terminal switched to raw mode")
        return self

    def __exit__(self, *exc_info) -> None:
        if self._fd is not None and self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            logger.debug("terminal attributes restored")
        self._fd = None
        self._saved = None

    def read_key(self, timeout: float) -> Optional[str]:
        if self._fd is None:
            raise InputUnavailableError("keyboard used outside of its context")
        ready, _, _ = select.select([self._fd], [], [], max(timeout, 0.0))
        if not ready:
            return None
        try:
            data = os.read(self._fd, 1)
        except OSError as exc:
            raise InputUnavailableError(f"cannot read from standard input: {exc}") from exc
        if not data:
            raise InputUnavailableError("standard input was closed")
        return data.decode("latin-1")
