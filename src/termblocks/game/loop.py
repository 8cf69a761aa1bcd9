from __future__ import annotations

import time
from typing import Callable, Optional, Protocol

from .core import GameController
from .keys import Command, KeyDecoder


class InputSource(Protocol):
    def read_key(self, timeout: float) -> Optional[str]:
        """Next key typed within `timeout` seconds, or None."""
        ...


class GameLoop:
    """Races player input against the gravity timer.

    Every iteration waits for whichever comes first: a key, or the next
    gravity tick. A key is decoded and dispatched; an expired wait sends
    `Command.DOWN`. The loop stops once the controller is no longer running.
    """

    def __init__(
        self,
        game: GameController,
        keys: InputSource,
        decoder: Optional[KeyDecoder] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.game = game
        self.keys = keys
        self.decoder = decoder or KeyDecoder()
        self.clock = clock

    def run(self) -> None:
        gravity = self.game.gravity
        last_tick = self.clock()
        while self.game.running:
            now = self.clock()
            timeout = gravity.value - (now - last_tick)
            if timeout < 0:
                last_tick = now
                timeout = gravity.value
            key = self.keys.read_key(timeout)
            if key is None:
                command: Optional[Command] = Command.DOWN
                last_tick = self.clock()
            else:
                command = self.decoder.feed(key)
            if command is not None:
                self.game.process(command)
