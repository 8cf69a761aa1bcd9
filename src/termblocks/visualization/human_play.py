from __future__ import annotations

import time
from typing import Callable, Dict, List, Optional

import pygame

from termblocks.game import GameConfig, GameController, GameLoop, ScoreTracker
from termblocks.terminal.widgets import TerminalView
from .renderer import WindowScreen


GAME_OVER_PAUSE = 3.0

# pygame arrow keys become the same "ESC [ x" sequences a terminal sends
ARROW_SUFFIX: Dict[int, str] = {
    pygame.K_UP: "A",
    pygame.K_DOWN: "B",
    pygame.K_RIGHT: "C",
    pygame.K_LEFT: "D",
}


def key_sequence(event: pygame.event.Event) -> str:
    if event.type == pygame.QUIT:
        return "q"
    if event.type != pygame.KEYDOWN:
        return ""
    suffix = ARROW_SUFFIX.get(event.key)
    if suffix is not None:
        return "\x1b[" + suffix
    return event.unicode or ""


class PygameKeys:
    """Input source reading key presses from the pygame event queue."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._pending: List[str] = []

    def read_key(self, timeout: float) -> Optional[str]:
        if self._pending:
            return self._pending.pop(0)
        deadline = self.clock() + max(timeout, 0.0)
        while True:
            remaining = deadline - self.clock()
            if remaining <= 0:
                return None
            event = pygame.event.wait(max(1, int(remaining * 1000)))
            if event.type == pygame.NOEVENT:
                return None
            sequence = key_sequence(event)
            if sequence:
                self._pending.extend(sequence[1:])
                return sequence[0]


def run(config: Optional[GameConfig] = None) -> ScoreTracker:
    config = config or GameConfig()
    pygame.init()
    try:
        surface = pygame.display.set_mode(WindowScreen.window_size())
        pygame.display.set_caption("termblocks")
        pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])

        screen = WindowScreen(surface, use_color=config.use_color)
        view = TerminalView(screen, show_help=config.show_help)
        game = GameController(config, view=view)
        keys = PygameKeys()
        GameLoop(game, keys).run()

        # leave the final board up for a moment, any key closes it
        keys.read_key(GAME_OVER_PAUSE)
        return game.score
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
