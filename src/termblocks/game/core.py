from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Protocol

from .grid import Playfield
from .keys import Command
from .pieces import Piece, PieceFactory, Position
from .rules import DELAY_FACTOR, INITIAL_DELAY, LEVEL_UP, GravityDelay, ScoreTracker


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    initial_delay: float = INITIAL_DELAY
    delay_factor: float = DELAY_FACTOR
    level_up: int = LEVEL_UP
    use_color: bool = True
    show_next: bool = True
    show_help: bool = True


class PieceSlot(Enum):
    CURRENT = "current"
    NEXT = "next"


class GameView(Protocol):
    """Redraw requests emitted by the controller after each state change."""

    def show_piece(self, piece: Piece, slot: PieceSlot) -> None: ...

    def hide_piece(self, piece: Piece, slot: PieceSlot) -> None: ...

    def toggle_piece(self, piece: Piece, slot: PieceSlot) -> None: ...

    def show_playfield(self, playfield: Playfield) -> None: ...

    def show_score(self, score: ScoreTracker) -> None: ...

    def toggle_help(self) -> None: ...

    def toggle_color(self) -> None: ...

    def redraw(self, game: "GameController") -> None: ...

    def game_over(self) -> None: ...

    def flush(self) -> None: ...


class NullView:
    """View that ignores every request, for headless play and tests."""

    def show_piece(self, piece: Piece, slot: PieceSlot) -> None:
        pass

    def hide_piece(self, piece: Piece, slot: PieceSlot) -> None:
        pass

    def toggle_piece(self, piece: Piece, slot: PieceSlot) -> None:
        pass

    def show_playfield(self, playfield: Playfield) -> None:
        pass

    def show_score(self, score: ScoreTracker) -> None:
        pass

    def toggle_help(self) -> None:
        pass

    def toggle_color(self) -> None:
        pass

    def redraw(self, game: "GameController") -> None:
        pass

    def game_over(self) -> None:
        pass

    def flush(self) -> None:
        pass


class GameController:
    """Owns the falling piece and mediates between playfield, score and view.

    Illegal moves are simply ignored. A spawn that collides with the stack
    ends the game: `running` turns false and the playfield is left as is.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        view: Optional[GameView] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.view: GameView = view or NullView()
        self.new_piece = PieceFactory(rng or random.Random(self.config.random_seed))
        self.playfield = Playfield()
        self.gravity = GravityDelay(self.config.initial_delay, self.config.delay_factor)
        self.score = ScoreTracker(self.gravity, self.config.level_up)
        self.show_next = self.config.show_next
        self.running = True
        self.game_over = False
        self.current: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self._handlers: Dict[Command, Callable[[], object]] = {
            Command.QUIT: self.quit,
            Command.LEFT: self.move_left,
            Command.RIGHT: self.move_right,
            Command.ROTATE: self.rotate,
            Command.DOWN: self.down,
            Command.DROP: self.drop,
            Command.TOGGLE_HELP: self.toggle_help,
            Command.TOGGLE_NEXT: self.toggle_next,
            Command.TOGGLE_COLOR: self.toggle_color,
        }
        self.reset()

    @property
    def spawn_position(self) -> Position:
        return Position((self.playfield.width - 4) // 2, 0, 0)

    def reset(self) -> None:
        self.playfield.reset()
        self.score.reset()
        self.show_next = self.config.show_next
        self.running = True
        self.game_over = False
        self.current = None
        self._generate_next()
        self.spawn()
        self.view.redraw(self)
        self.view.flush()

    def _generate_next(self) -> None:
        self.next_piece = self.new_piece(visible=self.show_next)
        self.view.show_piece(self.next_piece, PieceSlot.NEXT)

    def spawn(self) -> bool:
        """Promote the next piece to the top of the well."""
        assert self.next_piece is not None
        piece = self.next_piece
        self.view.hide_piece(piece, PieceSlot.NEXT)
        x, y, _ = self.spawn_position
        piece.position = Position(x, y, piece.rotation)
        if not self.playfield.is_position_valid(piece):
            logger.info("no room to spawn %s, game over with score %d", piece.kind.name, self.score.score)
            self.current = None
            self.game_over = True
            self.quit()
            return False
        piece.visible = True
        self.current = piece
        self.view.show_piece(piece, PieceSlot.CURRENT)
        logger.debug("spawned %s rotation %d", piece.kind.name, piece.rotation)
        self._generate_next()
        return True

    def _move(self, dx: int, dy: int, drotation: int) -> bool:
        if self.current is None:
            return False
        candidate = self.current.moved(dx, dy, drotation)
        if not self.playfield.is_position_valid(self.current, candidate):
            return False
        self.view.hide_piece(self.current, PieceSlot.CURRENT)
        self.current.position = candidate
        self.view.show_piece(self.current, PieceSlot.CURRENT)
        return True

    def move_left(self) -> bool:
        return self._move(-1, 0, 0)

    def move_right(self) -> bool:
        return self._move(1, 0, 0)

    def rotate(self) -> bool:
        return self._move(0, 0, 1)

    def _lock(self) -> int:
        assert self.current is not None
        self.playfield.merge(self.current)
        lines = self.playfield.clear_completed_lines()
        logger.debug("locked %s at %s, %d line(s)", self.current.kind.name, self.current.position, lines)
        if lines:
            self.score.record_clear(lines)
            self.view.show_score(self.score)
            self.view.show_playfield(self.playfield)
        return lines

    def down(self) -> bool:
        """Move one row down. Returns False once the piece has landed."""
        if self.current is None:
            return False
        if self._move(0, 1, 0):
            return True
        self._lock()
        self.spawn()
        return False

    def drop(self) -> None:
        while self.down():
            pass

    def quit(self) -> None:
        self.running = False
        self.view.game_over()

    def toggle_help(self) -> None:
        self.view.toggle_help()

    def toggle_next(self) -> None:
        self.show_next = not self.show_next
        if self.next_piece is not None:
            self.view.toggle_piece(self.next_piece, PieceSlot.NEXT)

    def toggle_color(self) -> None:
        self.view.toggle_color()
        self.view.redraw(self)

    def process(self, command: Command) -> None:
        if not self.running:
            return
        self._handlers[command]()
        self.view.flush()
