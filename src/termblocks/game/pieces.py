from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, NamedTuple, Optional, Tuple


Coordinate = Tuple[int, int]


class TetrominoType(IntEnum):
    O = 1
    I = 2
    S = 3
    Z = 4
    L = 5
    J = 6
    T = 7


class Color(IntEnum):
    """Piece palette. Values match the ANSI color indices; 0 means empty."""

    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


def _decode(state: str) -> Tuple[Coordinate, ...]:
    # each hex digit is a cell index inside a 4x4 box
    return tuple((int(c, 16) & 3, (int(c, 16) >> 2) & 3) for c in state)


@dataclass(frozen=True)
class Shape:
    kind: TetrominoType
    rotations: Tuple[Tuple[Coordinate, ...], ...]

    @property
    def symmetry(self) -> int:
        return len(self.rotations)


SHAPES: Dict[TetrominoType, Shape] = {
    kind: Shape(kind, tuple(_decode(s) for s in states))
    for kind, states in (
        (TetrominoType.O, ("1256",)),
        (TetrominoType.I, ("159d", "4567")),
        (TetrominoType.S, ("4512", "0459")),
        (TetrominoType.Z, ("0156", "1548")),
        (TetrominoType.L, ("159a", "8456", "0159", "2654")),
        (TetrominoType.J, ("1598", "0456", "2159", "a654")),
        (TetrominoType.T, ("1456", "1596", "4569", "4159")),
    )
}


class Position(NamedTuple):
    x: int
    y: int
    rotation: int


@dataclass
class Piece:
    kind: TetrominoType
    color: Color
    rotation: int = 0
    x: int = 0
    y: int = 0
    visible: bool = field(default=True, compare=False)

    def __setattr__(self, name: str, value: object) -> None:
        # kind and color are set once by __init__
        if name in ("kind", "color") and name in self.__dict__:
            raise AttributeError(f"{name} cannot change after the piece is created")
        super().__setattr__(name, value)

    @property
    def shape(self) -> Shape:
        return SHAPES[self.kind]

    @property
    def symmetry(self) -> int:
        return self.shape.symmetry

    @property
    def position(self) -> Position:
        return Position(self.x, self.y, self.rotation)

    @position.setter
    def position(self, value: Position) -> None:
        self.x, self.y, self.rotation = value

    def cells(self, position: Optional[Position] = None) -> List[Coordinate]:
        """Absolute grid cells at `position` (defaults to the current one)."""
        x, y, rotation = position if position is not None else self.position
        offsets = self.shape.rotations[rotation % self.symmetry]
        return [(x + dx, y + dy) for dx, dy in offsets]

    def moved(self, dx: int, dy: int, drotation: int = 0) -> Position:
        return Position(self.x + dx, self.y + dy, (self.rotation + drotation) % self.symmetry)


class PieceFactory:
    """Random piece source; pass a seeded `random.Random` for reproducible games."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def __call__(self, visible: bool = True) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        rotation = self.rng.randrange(SHAPES[kind].symmetry)
        color = self.rng.choice(list(Color))
        return Piece(kind=kind, color=color, rotation=rotation, visible=visible)
