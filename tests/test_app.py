import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from olivechess.app import BONE, OLIVE, RED, WHITE, Game, main
from olivechess.board import TILE_SIZE, Board
from olivechess.menu import GameMode, MenuResult
from olivechess.pieces import Bishop, King, Knight, Queen, Rook


@pytest.fixture
def game():
    g = Game()
    g.init()
    pygame.event.clear()
    yield g
    pygame.quit()


def _pixel(game, x, y):
    return tuple(game.screen.get_at((x, y)))[:3]


def _click(x, y):
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(x, y), button=1))


def test_board_squares_alternate_colours(game):
    board = Board()
    game.draw_board(board)
    assert _pixel(game, 5, 3 * TILE_SIZE + 5) == BONE
    assert _pixel(game, 5, 2 * TILE_SIZE + 5) == OLIVE
    assert _pixel(game, TILE_SIZE + 5, 2 * TILE_SIZE + 5) == BONE


def test_valid_move_dots_drawn(game):
    board = Board()
    board.handle_click(10, TILE_SIZE + 10)
    assert board.valid_moves == [(2, 0), (3, 0)]
    game.draw_board(board)
    centre = TILE_SIZE // 2
    assert _pixel(game, centre, 2 * TILE_SIZE + centre) == WHITE
    assert _pixel(game, centre, 3 * TILE_SIZE + centre) == WHITE
    assert _pixel(game, 2, 2 * TILE_SIZE + 2) == OLIVE


def test_checked_king_highlighted(game):
    board = Board()
    board.pieces = [King(0, 4, True), Rook(5, 4, False), King(7, 0, False)]
    game.draw_board(board)
    assert _pixel(game, 4 * TILE_SIZE + 2, 2) == RED


def test_render_text_places_at_position(game):
    rect = game.render_text(game.font, "Check!", WHITE, 10, 20)
    assert rect.topleft == (10, 20)
    assert rect.width > 0


def test_play_move_sound_plays_loaded_sound(game):
    class FakeSound:
        def __init__(self):
            self.plays = 0

        def play(self):
            self.plays += 1

    sound = FakeSound()
    game.move_sound = sound
    game.play_move_sound()
    game.play_move_sound()
    assert sound.plays == 2


@pytest.mark.parametrize(
    "x, kind",
    [(150, Queen), (250, Rook), (330, Knight), (450, Bishop)],
)
def test_promotion_menu_returns_chosen_piece(game, x, kind):
    _click(x, 420)
    piece = game.show_promotion_menu(7, 3, True)
    assert isinstance(piece, kind)
    assert (piece.row, piece.col, piece.is_white) == (7, 3, True)


def test_promotion_menu_ignores_clicks_outside_buttons(game):
    _click(10, 10)
    _click(150, 420)
    piece = game.show_promotion_menu(0, 5, False)
    assert isinstance(piece, Queen)
    assert piece.is_white is False


def test_promotion_menu_closed_returns_none(game):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert game.show_promotion_menu(7, 0, True) is None


def test_menu_quit_returns_no_mode(game):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert game.show_menu() == MenuResult(GameMode.NONE, 0)


def test_menu_start_uses_default_time(game):
    _click(250, 270)
    assert game.show_menu() == MenuResult(GameMode.PLAYER_VS_PLAYER, 300)


def test_menu_time_button_cycles_limit(game):
    _click(250, 340)
    _click(250, 270)
    assert game.show_menu() == MenuResult(GameMode.PLAYER_VS_PLAYER, 600)


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit):
        main(["--no-such-option"])