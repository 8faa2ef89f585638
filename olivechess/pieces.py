"""Chess pieces and their movement rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from itertools import product
from typing import ClassVar, Optional, Sequence

BOARD_SIZE = 8


class PieceType(IntEnum):
    """Kind of a chess piece; the value indexes the piece artwork."""

    KING = 0
    QUEEN = 1
    ROOK = 2
    BISHOP = 3
    KNIGHT = 4
    PAWN = 5


def _on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def _occupant(pieces: Sequence["Piece"], row: int, col: int) -> Optional["Piece"]:
    """Return the first piece standing on the given square, if any."""
    return next((p for p in pieces if p.row == row and p.col == col), None)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _path_squares(row: int, col: int, new_row: int, new_col: int):
    """Yield the squares strictly between two squares on a line."""
    step_row = _sign(new_row - row)
    step_col = _sign(new_col - col)
    r, c = row + step_row, col + step_col
    while r != new_row or c != new_col:
        yield r, c
        r += step_row
        c += step_col


@dataclass(eq=False)
class Piece:
    """A piece on the board. The base piece has no moves."""

    row: int
    col: int
    is_white: bool
    two_stepped: bool = field(default=False, kw_only=True)
    has_moved: bool = field(default=False, kw_only=True)

    piece_type: ClassVar[PieceType]

    def move(self, row: int, col: int) -> None:
        """Place the piece on a new square."""
        self.row = row
        self.col = col

    def is_valid_move(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        """Whether the piece may move to the square."""
        return False

    def can_move_to(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        """Whether the piece attacks or may reach the square."""
        return False

    def possible_moves(self, pieces: Sequence[Piece]) -> list[tuple[int, int]]:
        """All on-board squares the piece may move to, in row-major order."""
        return [
            (r, c)
            for r, c in product(range(BOARD_SIZE), repeat=2)
            if self.is_valid_move(r, c, pieces)
        ]


class King(Piece):
    piece_type = PieceType.KING

    def move(self, row: int, col: int) -> None:
        super().move(row, col)
        self.has_moved = True

    def is_valid_move(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        dx = abs(row - self.row)
        dy = abs(col - self.col)
        if dx <= 1 and dy <= 1 and dx + dy > 0:
            return not any(
                p.row == row and p.col == col and p.is_white == self.is_white
                for p in pieces
            )

        if not (self.has_moved and row == self.row):
            return False

        enemies = [p for p in pieces if p.is_white != self.is_white]

        def attacked(r: int, c: int) -> bool:
            return any(enemy.is_valid_move(r, c, pieces) for enemy in enemies)

        if col == self.col + 2:
            return self._can_castle(pieces, attacked, direction=1, rook_offset=3)
        if col == self.col - 2:
            return self._can_castle(pieces, attacked, direction=-1, rook_offset=4)
        return False

    def _can_castle(self, pieces, attacked, direction: int, rook_offset: int) -> bool:
        between = {self.col + direction * step for step in range(1, rook_offset)}
        if any(p.row == self.row and p.col in between for p in pieces):
            return False
        if any(attacked(self.row, self.col + direction * step) for step in range(3)):
            return False
        rook_col = self.col + direction * rook_offset
        return any(
            isinstance(p, Rook)
            and p.is_white == self.is_white
            and p.row == self.row
            and p.col == rook_col
            and p.has_moved
            for p in pieces
        )


class Queen(Piece):
    piece_type = PieceType.QUEEN

    def can_move_to(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        if not _on_board(row, col):
            return False
        d_row = row - self.row
        d_col = col - self.col
        if d_row != 0 and d_col != 0 and abs(d_row) != abs(d_col):
            return False
        for r, c in _path_squares(self.row, self.col, row, col):
            if _occupant(pieces, r, c) is not None:
                return False
        return not any(
            p.row == row and p.col == col and p.is_white == self.is_white
            for p in pieces
        )

    def is_valid_move(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        return self.can_move_to(row, col, pieces)


class Rook(Piece):
    piece_type = PieceType.ROOK

    def move(self, row: int, col: int) -> None:
        super().move(row, col)
        self.has_moved = True

    def can_move_to(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        if row != self.row and col != self.col:
            return False
        if not _on_board(row, col):
            return False
        for r, c in _path_squares(self.row, self.col, row, col):
            if _occupant(pieces, r, c) is not None:
                return False
        return not any(
            p.row == row and p.col == col and p.is_white == self.is_white
            for p in pieces
        )

    def is_valid_move(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        return self.can_move_to(row, col, pieces)


class Bishop(Piece):
    piece_type = PieceType.BISHOP

    def can_move_to(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        if row == self.row and col == self.col:
            return False
        if not _on_board(row, col):
            return False
        if abs(row - self.row) != abs(col - self.col):
            return False
        for r, c in _path_squares(self.row, self.col, row, col):
            if _occupant(pieces, r, c) is not None:
                return False
        target = _occupant(pieces, row, col)
        return target is None or target.is_white != self.is_white

    def is_valid_move(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        return self.can_move_to(row, col, pieces)


class Knight(Piece):
    piece_type = PieceType.KNIGHT

    def can_move_to(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        if not _on_board(row, col):
            return False
        if sorted((abs(row - self.row), abs(col - self.col))) != [1, 2]:
            return False
        target = _occupant(pieces, row, col)
        return target is None or target.is_white != self.is_white

    def is_valid_move(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        return self.can_move_to(row, col, pieces)


class Pawn(Piece):
    piece_type = PieceType.PAWN

    @property
    def _direction(self) -> int:
        return 1 if self.is_white else -1

    def move(self, row: int, col: int) -> None:
        self.two_stepped = abs(row - self.row) == 2
        super().move(row, col)

    def can_move_to(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        direction = self._direction
        if col == self.col and row == self.row + direction:
            return _occupant(pieces, row, col) is None

        start_row = 1 if self.is_white else 6
        if col == self.col and row == self.row + 2 * direction and self.row == start_row:
            return (
                _occupant(pieces, self.row + direction, col) is None
                and _occupant(pieces, row, col) is None
            )

        if abs(col - self.col) == 1 and row == self.row + direction:
            return any(
                p.row == row and p.col == col and p.is_white != self.is_white
                for p in pieces
            )
        return False

    def is_valid_move(self, row: int, col: int, pieces: Sequence[Piece]) -> bool:
        if self.can_move_to(row, col, pieces):
            return True
        if abs(col - self.col) == 1 and row == self.row + self._direction:
            return any(
                p.row == self.row
                and p.col == col
                and p.is_white != self.is_white
                and p.two_stepped
                for p in pieces
            )
        return False


_BACK_RANK = (
    (King, 4),
    (Queen, 3),
    (Rook, 0),
    (Rook, 7),
    (Bishop, 2),
    (Bishop, 5),
    (Knight, 1),
    (Knight, 6),
)


def starting_pieces() -> list[Piece]:
    """The 32 pieces of a new game, white first."""
    pieces: list[Piece] = []
    for is_white, back_row, pawn_row in ((True, 0, 1), (False, 7, 6)):
        pieces.extend(kind(back_row, col, is_white) for kind, col in _BACK_RANK)
        pieces.extend(Pawn(pawn_row, col, is_white) for col in range(BOARD_SIZE))
    return pieces