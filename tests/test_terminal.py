import io
import os
import random
import termios
import types
from unittest import mock

import pytest

from termblocks.game import Color, Command, GameController, KeyDecoder, Piece, PieceSlot, TetrominoType
from termblocks.terminal import (
    HelpPanel,
    InputUnavailableError,
    KeyboardInput,
    PieceSprite,
    TerminalScreen,
    TerminalView,
)


def test_screen_buffers_until_flush():
    out = io.StringIO()
    screen = TerminalScreen(out)
    screen.xyprint(5, 3, "hi")
    screen.set_fg(Color.RED)
    screen.set_bg(Color.CYAN)
    screen.reset_colors()
    assert out.getvalue() == ""
    screen.flush()
    assert out.getvalue() == "\x1b[3;5Hhi\x1b[31m\x1b[46m\x1b[0m"
    screen.flush()
    assert out.getvalue().count("hi") == 1


def test_screen_color_toggle_drops_color_codes():
    out = io.StringIO()
    screen = TerminalScreen(out, use_color=False)
    screen.set_fg(Color.GREEN)
    screen.print("x")
    screen.toggle_color()
    screen.set_fg(Color.GREEN)
    screen.flush()
    assert out.getvalue() == "x\x1b[32m"


def test_cursor_and_clear_sequences():
    out = io.StringIO()
    screen = TerminalScreen(out)
    screen.clear_screen()
    screen.hide_cursor()
    screen.show_cursor()
    screen.set_bold()
    screen.flush()
    assert out.getvalue() == "\x1b[2J\x1b[?25l\x1b[?25h\x1b[1m"


def test_piece_sprite_draws_and_erases_two_column_cells():
    out = io.StringIO()
    screen = TerminalScreen(out, use_color=False)
    piece = Piece(TetrominoType.O, Color.RED, x=0, y=0)
    sprite = PieceSprite(screen, piece, (30, 1), " .")
    sprite.show()
    screen.flush()
    assert "\x1b[1;32H[]" in out.getvalue()
    assert "\x1b[2;34H[]" in out.getvalue()
    sprite.toggle()
    assert piece.visible is False
    screen.flush()
    assert "\x1b[1;32H ." in out.getvalue()


def test_hidden_drawables_do_not_draw():
    out = io.StringIO()
    screen = TerminalScreen(out)
    HelpPanel(screen, visible=False).show()
    PieceSprite(screen, Piece(TetrominoType.T, Color.RED, visible=False), (14, 11), "  ").hide()
    screen.flush()
    assert out.getvalue() == ""


def test_help_toggle_blanks_text():
    out = io.StringIO()
    screen = TerminalScreen(out, use_color=False)
    panel = HelpPanel(screen)
    panel.toggle()
    screen.flush()
    assert panel.visible is False
    assert "rotate" not in out.getvalue()
    assert "\x1b[1;58H" in out.getvalue()


def test_view_renders_full_game():
    out = io.StringIO()
    game = GameController(rng=random.Random(8), view=TerminalView(TerminalScreen(out)))
    text = out.getvalue()
    assert "\x1b[2J\x1b[?25l" in text
    assert "Lines completed: 0" in text
    assert "Level:           1" in text
    assert "<|" in text and "|>" in text
    assert "space: drop" in text

    game.process(Command.QUIT)
    assert "Game over!" in out.getvalue()
    assert out.getvalue().endswith("\x1b[?25h")


def test_view_updates_score_after_clear():
    out = io.StringIO()
    game = GameController(rng=random.Random(8), view=TerminalView(TerminalScreen(out)))
    game.playfield.grid[19, 1:] = int(Color.RED)
    game.current = Piece(TetrominoType.I, Color.CYAN, rotation=0, x=-1, y=0)
    game.process(Command.DROP)
    assert "Score:           1" in out.getvalue()


def test_view_next_slot_uses_preview_origin():
    out = io.StringIO()
    view = TerminalView(TerminalScreen(out, use_color=False))
    view.show_piece(Piece(TetrominoType.O, Color.RED), PieceSlot.NEXT)
    view.flush()
    assert "\x1b[11;16H[]" in out.getvalue()


def test_keyboard_requires_a_terminal():
    with pytest.raises(InputUnavailableError):
        with KeyboardInput(io.StringIO()):
            pass


def test_keyboard_outside_context_is_an_error():
    with pytest.raises(InputUnavailableError):
        KeyboardInput().read_key(0)


@pytest.fixture
def pty_pair():
    master, slave = os.openpty()
    yield master, slave
    os.close(master)
    os.close(slave)


def _stream(fd):
    return types.SimpleNamespace(fileno=lambda: fd)


def test_keyboard_raw_mode_is_restored_after_an_error(pty_pair):
    master, slave = pty_pair
    before = termios.tcgetattr(slave)
    keyboard = KeyboardInput(_stream(slave))
    with pytest.raises(RuntimeError, match="crash"):
        with keyboard:
            lflag = termios.tcgetattr(slave)[3]
            assert not lflag & termios.ECHO
            assert not lflag & termios.ICANON
            os.write(master, b"\x1b[C")
            keys = [keyboard.read_key(1.0) for _ in range(3)]
            assert keys == ["\x1b", "[", "C"]
            assert keyboard.read_key(0) is None
            raise RuntimeError("crash")
    assert termios.tcgetattr(slave) == before


def test_keyboard_arrow_bytes_decode_to_movement(pty_pair):
    master, slave = pty_pair
    decoder = KeyDecoder()
    with KeyboardInput(_stream(slave)) as keyboard:
        os.write(master, b"\x1b[Da")
        commands = [decoder.feed(keyboard.read_key(1.0)) for _ in range(4)]
    assert commands == [None, None, Command.LEFT, Command.LEFT]


@pytest.mark.parametrize("read", [mock.Mock(return_value=b""), mock.Mock(side_effect=OSError(5, "EIO"))])
def test_keyboard_closed_input_is_an_error(pty_pair, read):
    master, slave = pty_pair
    before = termios.tcgetattr(slave)
    with KeyboardInput(_stream(slave)) as keyboard:
        os.write(master, b"x")
        with mock.patch("termblocks.terminal.keyboard.os.read", read):
            with pytest.raises(InputUnavailableError):
                keyboard.read_key(1.0)
    assert termios.tcgetattr(slave) == before
