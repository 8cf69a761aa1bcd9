"""Game module for termblocks.

Exports the game-state engine and supporting classes:
- Playfield: Occupancy grid and line clearing
- Piece: Tetromino instance with rotation states
- TetrominoType / Color: Shape kinds and the display palette
- ScoreTracker / GravityDelay: Scoring, leveling and gravity speed
- GameController: Spawning, movement and locking
- GameLoop: Gravity timer raced against player input
"""

from .grid import Playfield
from .pieces import Color, Piece, PieceFactory, Position, SHAPES, Shape, TetrominoType
from .rules import GravityDelay, ScoreTracker
from .keys import Command, KeyDecoder
from .core import GameConfig, GameController, GameView, NullView, PieceSlot
from .loop import GameLoop, InputSource

__all__ = [
    "Playfield",
    "Color",
    "Piece",
    "PieceFactory",
    "Position",
    "SHAPES",
    "Shape",
    "TetrominoType",
    "GravityDelay",
    "ScoreTracker",
    "Command",
    "KeyDecoder",
    "GameConfig",
    "GameController",
    "GameView",
    "NullView",
    "PieceSlot",
    "GameLoop",
    "InputSource",
]
