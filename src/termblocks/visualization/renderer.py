from __future__ import annotations

from typing import Dict, Optional, Tuple

import pygame

from termblocks.game.pieces import Color


COLUMNS = 80
ROWS = 25

BACKGROUND = (10, 10, 14)
FOREGROUND = (200, 200, 200)

PALETTE: Dict[Color, Tuple[int, int, int]] = {
    Color.RED: (240, 0, 0),
    Color.GREEN: (0, 240, 0),
    Color.YELLOW: (240, 240, 0),
    Color.BLUE: (0, 0, 240),
    Color.MAGENTA: (160, 0, 240),
    Color.CYAN: (0, 240, 240),
    Color.WHITE: (240, 240, 240),
}

Cell = Tuple[str, Optional[Color], Optional[Color], bool]


class WindowScreen:
    """Character-cell display surface drawn into a pygame window.

    Mirrors the ANSI terminal primitives: text is written at a cursor
    position into a cell buffer, and `flush` paints the whole buffer and
    flips the display.
    """

    def __init__(self, surface: pygame.Surface, font_size: int = 18, use_color: bool = True) -> None:
        self.surface = surface
        self.use_color = use_color
        self.font = pygame.font.SysFont("monospace", font_size)
        self.bold_font = pygame.font.SysFont("monospace", font_size, bold=True)
        self.cell_w, self.cell_h = self.font.size("M")
        self.cells: Dict[Tuple[int, int], Cell] = {}
        self.cursor = (1, 1)
        self.cursor_visible = True
        self._fg: Optional[Color] = None
        self._bg: Optional[Color] = None
        self._bold = False
        self._glyphs: Dict[Tuple[str, Tuple[int, int, int], bool], pygame.Surface] = {}

    @staticmethod
    def window_size(font_size: int = 18) -> Tuple[int, int]:
        font = pygame.font.SysFont("monospace", font_size)
        w, h = font.size("M")
        return COLUMNS * w, ROWS * h

    def print(self, text: str) -> None:
        x, y = self.cursor
        for ch in text:
            self.cells[(x, y)] = (ch, self._fg, self._bg, self._bold)
            x += 1
        self.cursor = (x, y)

    def xyprint(self, x: int, y: int, text: str) -> None:
        self.cursor = (x, y)
        self.print(text)

    def set_fg(self, color: Color) -> None:
        if self.use_color:
            self._fg = color

    def set_bg(self, color: Color) -> None:
        if self.use_color:
            self._bg = color

    def reset_colors(self) -> None:
        self._fg = None
        self._bg = None
        self._bold = False

    def set_bold(self) -> None:
        self._bold = True

    def clear_screen(self) -> None:
        self.cells.clear()

    def show_cursor(self) -> None:
        self.cursor_visible = True

    def hide_cursor(self) -> None:
        self.cursor_visible = False

    def toggle_color(self) -> None:
        self.use_color = not self.use_color

    def _glyph(self, ch: str, rgb: Tuple[int, int, int], bold: bool) -> pygame.Surface:
        key = (ch, rgb, bold)
        if key not in self._glyphs:
            font = self.bold_font if bold else self.font
            self._glyphs[key] = font.render(ch, True, rgb)
        return self._glyphs[key]

    def flush(self) -> None:
        self.surface.fill(BACKGROUND)
        for (x, y), (ch, fg, bg, bold) in self.cells.items():
            rect = pygame.Rect((x - 1) * self.cell_w, (y - 1) * self.cell_h, self.cell_w, self.cell_h)
            if bg is not None:
                pygame.draw.rect(self.surface, PALETTE[bg], rect)
            if ch != " ":
                rgb = PALETTE[fg] if fg is not None else FOREGROUND
                self.surface.blit(self._glyph(ch, rgb, bold), rect.topleft)
        pygame.display.flip()
