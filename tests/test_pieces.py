import pytest

from olivechess.pieces import (
    Bishop,
    King,
    Knight,
    Pawn,
    PieceType,
    Queen,
    Rook,
    starting_pieces,
)


def _find(pieces, row, col):
    return next(p for p in pieces if p.row == row and p.col == col)


def test_starting_layout_has_one_piece_per_square():
    pieces = starting_pieces()
    squares = {(p.row, p.col) for p in pieces}
    assert len(squares) == len(pieces) == 32
    assert sum(p.is_white for p in pieces) == 16


def test_starting_kings_and_pawns():
    pieces = starting_pieces()
    kings = [p for p in pieces if p.piece_type is PieceType.KING]
    assert {(k.row, k.col, k.is_white) for k in kings} == {(0, 4, True), (7, 4, False)}
    pawns = [p for p in pieces if isinstance(p, Pawn)]
    assert {p.row for p in pawns if p.is_white} == {1}
    assert {p.row for p in pawns if not p.is_white} == {6}


def test_knight_moves_from_start():
    pieces = starting_pieces()
    knight = _find(pieces, 0, 1)
    assert knight.possible_moves(pieces) == [(2, 0), (2, 2)]


def test_blocked_pieces_have_no_moves_at_start():
    pieces = starting_pieces()
    for square in [(0, 0), (0, 2), (0, 3), (0, 4)]:
        assert _find(pieces, *square).possible_moves(pieces) == []


def test_possible_moves_are_valid_and_on_board():
    pieces = starting_pieces()
    for piece in pieces:
        for r, c in piece.possible_moves(pieces):
            assert 0 <= r < 8 and 0 <= c < 8
            assert piece.is_valid_move(r, c, pieces)


def test_pawn_double_step_and_block():
    pawn = Pawn(1, 3, True)
    pieces = [pawn]
    assert pawn.is_valid_move(3, 3, pieces)
    pieces.append(Knight(2, 3, False))
    assert not pawn.is_valid_move(3, 3, pieces)
    assert not pawn.is_valid_move(2, 3, pieces)


def test_pawn_double_step_only_from_start_row():
    pawn = Pawn(2, 3, True)
    assert not pawn.is_valid_move(4, 3, [pawn])
    black = Pawn(6, 0, False)
    assert black.is_valid_move(4, 0, [black])


def test_pawn_diagonal_needs_enemy():
    pawn = Pawn(3, 3, True)
    friend = Bishop(4, 4, True)
    enemy = Bishop(4, 2, False)
    pieces = [pawn, friend, enemy]
    assert pawn.can_move_to(4, 2, pieces)
    assert not pawn.can_move_to(4, 4, pieces)


def test_pawn_move_tracks_two_step():
    pawn = Pawn(6, 4, False)
    pawn.move(4, 4)
    assert pawn.two_stepped
    pawn.move(3, 4)
    assert not pawn.two_stepped


def test_en_passant_only_in_is_valid_move():
    white = Pawn(4, 4, True)
    black = Pawn(6, 5, False)
    black.move(4, 5)
    pieces = [white, black]
    assert white.is_valid_move(5, 5, pieces)
    assert not white.can_move_to(5, 5, pieces)
    black.two_stepped = False
    assert not white.is_valid_move(5, 5, pieces)


def test_rook_lines_and_blocking():
    rook = Rook(0, 0, True)
    pieces = [rook, Pawn(0, 3, True), Pawn(4, 0, False)]
    assert rook.is_valid_move(0, 2, pieces)
    assert not rook.is_valid_move(0, 3, pieces)
    assert not rook.is_valid_move(0, 5, pieces)
    assert rook.is_valid_move(4, 0, pieces)
    assert not rook.is_valid_move(5, 0, pieces)
    assert not rook.is_valid_move(1, 1, pieces)


def test_rook_and_queen_own_square_rejected_when_listed():
    rook = Rook(3, 3, True)
    queen = Queen(5, 5, False)
    assert not rook.can_move_to(3, 3, [rook])
    assert not queen.can_move_to(5, 5, [queen])
    assert queen.can_move_to(5, 5, [])


def test_queen_lines_diagonals_and_bounds():
    queen = Queen(3, 3, True)
    pieces = [queen]
    assert queen.is_valid_move(7, 7, pieces)
    assert queen.is_valid_move(3, 0, pieces)
    assert not queen.is_valid_move(5, 4, pieces)
    assert not queen.is_valid_move(8, 8, pieces)
    pieces.append(Pawn(5, 5, True))
    assert not queen.is_valid_move(6, 6, pieces)
    assert not queen.is_valid_move(5, 5, pieces)


def test_bishop_rules():
    bishop = Bishop(2, 2, True)
    pieces = [bishop, Knight(4, 4, False)]
    assert not bishop.can_move_to(2, 2, pieces)
    assert not bishop.can_move_to(2, 5, pieces)
    assert bishop.can_move_to(4, 4, pieces)
    assert not bishop.can_move_to(5, 5, pieces)
    assert bishop.can_move_to(0, 0, pieces)
    assert not bishop.can_move_to(-1, -1, pieces)


def test_knight_capture_and_friendly_block():
    knight = Knight(4, 4, True)
    pieces = [knight, Pawn(6, 5, True), Pawn(2, 3, False)]
    assert not knight.is_valid_move(6, 5, pieces)
    assert knight.is_valid_move(2, 3, pieces)
    assert not knight.is_valid_move(5, 5, pieces)


def test_king_steps_and_never_attacks():
    king = King(4, 4, True)
    pieces = [king, Pawn(5, 5, True)]
    assert king.is_valid_move(3, 3, pieces)
    assert not king.is_valid_move(5, 5, pieces)
    assert not king.is_valid_move(4, 4, pieces)
    assert not king.can_move_to(3, 3, pieces)


def test_king_step_has_no_bounds_check():
    king = King(0, 0, True)
    assert king.is_valid_move(-1, 0, [king])


@pytest.mark.parametrize("piece_cls", [King, Rook])
def test_move_marks_king_and_rook(piece_cls):
    piece = piece_cls(0, 0, True)
    assert not piece.has_moved
    piece.move(1, 0)
    assert piece.has_moved
    assert (piece.row, piece.col) == (1, 0)


def test_bishop_move_keeps_has_moved_flag():
    bishop = Bishop(0, 2, True)
    bishop.move(2, 4)
    assert not bishop.has_moved
    assert (bishop.row, bishop.col) == (2, 4)


def _castle_setup():
    king = King(0, 4, True)
    short_rook = Rook(0, 7, True)
    long_rook = Rook(0, 0, True)
    enemy_king = King(7, 0, False)
    return king, short_rook, long_rook, [king, short_rook, long_rook, enemy_king]


def test_castling_needs_moved_flags():
    king, short_rook, long_rook, pieces = _castle_setup()
    assert not king.is_valid_move(0, 6, pieces)
    king.has_moved = True
    assert not king.is_valid_move(0, 6, pieces)
    short_rook.has_moved = True
    long_rook.has_moved = True
    assert king.is_valid_move(0, 6, pieces)
    assert king.is_valid_move(0, 2, pieces)


def test_castling_blocked_by_attack_or_piece():
    king, short_rook, long_rook, pieces = _castle_setup()
    for piece in (king, short_rook, long_rook):
        piece.has_moved = True
    pieces.append(Rook(7, 5, False))
    assert not king.is_valid_move(0, 6, pieces)
    pieces.append(Knight(0, 1, True))
    assert not king.is_valid_move(0, 2, pieces)