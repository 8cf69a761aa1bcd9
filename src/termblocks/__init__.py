"""termblocks: a falling-block puzzle game for character-cell terminals."""

__version__ = "0.1.0"
