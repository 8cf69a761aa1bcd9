from __future__ import annotations

from typing import Protocol, Tuple

from termblocks.game.core import GameController, PieceSlot
from termblocks.game.grid import Playfield
from termblocks.game.pieces import Color, Piece
from termblocks.game.rules import ScoreTracker

from .screen import DisplaySurface


PLAYFIELD_X = 30
PLAYFIELD_Y = 1
BORDER_COLOR = Color.YELLOW

HELP_X = 58
HELP_Y = 1
HELP_COLOR = Color.CYAN

SCORE_X = 1
SCORE_Y = 2
SCORE_COLOR = Color.GREEN

NEXT_X = 14
NEXT_Y = 11

GAMEOVER_X = 1
GAMEOVER_Y = 23

NEXT_EMPTY_CELL = "  "
PLAYFIELD_EMPTY_CELL = " ."
FILLED_CELL = "[]"

HELP_TEXT = (
    "  Use cursor keys",
    "       or",
    "    s: rotate",
    "a: left,  d: right",
    "    space: drop",
    "      q: quit",
    "  c: toggle color",
    "n: toggle show next",
    "h: toggle this help",
)


class Drawable(Protocol):
    """Something that can be drawn, erased, or have its visibility flipped."""

    visible: bool

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def toggle(self) -> None: ...


class HelpPanel:
    def __init__(self, screen: DisplaySurface, visible: bool = True) -> None:
        self.screen = screen
        self.visible = visible

    def show(self) -> None:
        if self.visible:
            self.draw(True)

    def hide(self) -> None:
        if self.visible:
            self.draw(False)

    def toggle(self) -> None:
        self.visible = not self.visible
        self.draw(self.visible)

    def draw(self, visible: bool) -> None:
        self.screen.set_bold()
        self.screen.set_fg(HELP_COLOR)
        for i, line in enumerate(HELP_TEXT):
            self.screen.xyprint(HELP_X, HELP_Y + i, line if visible else " " * len(line))
        self.screen.reset_colors()


class PieceSprite:
    """A piece drawn at a screen origin; visibility lives on the piece itself."""

    def __init__(self, screen: DisplaySurface, piece: Piece, origin: Tuple[int, int], empty_cell: str) -> None:
        self.screen = screen
        self.piece = piece
        self.origin = origin
        self.empty_cell = empty_cell

    @property
    def visible(self) -> bool:
        return self.piece.visible

    @visible.setter
    def visible(self, value: bool) -> None:
        self.piece.visible = value

    def show(self) -> None:
        if self.visible:
            self.draw(True)

    def hide(self) -> None:
        if self.visible:
            self.draw(False)

    def toggle(self) -> None:
        self.visible = not self.visible
        self.draw(self.visible)

    def draw(self, visible: bool) -> None:
        if visible:
            self.screen.set_fg(self.piece.color)
            self.screen.set_bg(self.piece.color)
        ox, oy = self.origin
        for x, y in self.piece.cells():
            # cells are two characters wide
            self.screen.xyprint(ox + x * 2, oy + y, FILLED_CELL if visible else self.empty_cell)
        self.screen.reset_colors()


class PlayfieldPanel:
    def __init__(self, screen: DisplaySurface, playfield: Playfield) -> None:
        self.screen = screen
        self.playfield = playfield

    def show(self) -> None:
        for y, row in enumerate(self.playfield.rows()):
            self.screen.xyprint(PLAYFIELD_X, PLAYFIELD_Y + y, "")
            for color in row:
                if color is None:
                    self.screen.print(PLAYFIELD_EMPTY_CELL)
                else:
                    self.screen.set_fg(color)
                    self.screen.set_bg(color)
                    self.screen.print(FILLED_CELL)
                    self.screen.reset_colors()

    def draw_border(self) -> None:
        width, height = self.playfield.width, self.playfield.height
        self.screen.set_bold()
        self.screen.set_fg(BORDER_COLOR)
        for y in range(PLAYFIELD_Y, PLAYFIELD_Y + height + 1):
            self.screen.xyprint(PLAYFIELD_X - 2, y, "<|")
            self.screen.xyprint(PLAYFIELD_X + width * 2, y, "|>")
        for i, edge in enumerate(("==", "\\/")):
            self.screen.xyprint(PLAYFIELD_X, PLAYFIELD_Y + height + i, edge * width)
        self.screen.reset_colors()


class ScorePanel:
    def __init__(self, screen: DisplaySurface, score: ScoreTracker) -> None:
        self.screen = screen
        self.score = score

    def show(self) -> None:
        self.screen.set_bold()
        self.screen.set_fg(SCORE_COLOR)
        self.screen.xyprint(SCORE_X, SCORE_Y, f"Lines completed: {self.score.lines_completed}")
        self.screen.xyprint(SCORE_X, SCORE_Y + 1, f"Level:           {self.score.level}")
        self.screen.xyprint(SCORE_X, SCORE_Y + 2, f"Score:           {self.score.score}")
        self.screen.reset_colors()


class TerminalView:
    """Translates controller redraw requests into drawing on a display surface."""

    def __init__(self, screen: DisplaySurface, show_help: bool = True) -> None:
        self.screen = screen
        self.help = HelpPanel(screen, visible=show_help)

    def _sprite(self, piece: Piece, slot: PieceSlot) -> PieceSprite:
        if slot is PieceSlot.CURRENT:
            return PieceSprite(self.screen, piece, (PLAYFIELD_X, PLAYFIELD_Y), PLAYFIELD_EMPTY_CELL)
        return PieceSprite(self.screen, piece, (NEXT_X, NEXT_Y), NEXT_EMPTY_CELL)

    def show_piece(self, piece: Piece, slot: PieceSlot) -> None:
        self._sprite(piece, slot).show()

    def hide_piece(self, piece: Piece, slot: PieceSlot) -> None:
        self._sprite(piece, slot).hide()

    def toggle_piece(self, piece: Piece, slot: PieceSlot) -> None:
        self._sprite(piece, slot).toggle()

    def show_playfield(self, playfield: Playfield) -> None:
        PlayfieldPanel(self.screen, playfield).show()

    def show_score(self, score: ScoreTracker) -> None:
        ScorePanel(self.screen, score).show()

    def toggle_help(self) -> None:
        self.help.toggle()

    def toggle_color(self) -> None:
        self.screen.toggle_color()

    def redraw(self, game: GameController) -> None:
        self.screen.clear_screen()
        self.screen.hide_cursor()
        panel = PlayfieldPanel(self.screen, game.playfield)
        panel.draw_border()
        self.help.show()
        panel.show()
        self.show_score(game.score)
        if game.next_piece is not None:
            self.show_piece(game.next_piece, PieceSlot.NEXT)
        if game.current is not None:
            self.show_piece(game.current, PieceSlot.CURRENT)

    def game_over(self) -> None:
        self.screen.xyprint(GAMEOVER_X, GAMEOVER_Y, "Game over!")
        self.screen.xyprint(GAMEOVER_X, GAMEOVER_Y + 1, "")
        self.screen.show_cursor()

    def flush(self) -> None:
        self.screen.flush()
