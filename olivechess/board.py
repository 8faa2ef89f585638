"""Game state and rules of a two-player chess board."""

from __future__ import annotations

from typing import Callable, Optional

from .pieces import (
    BOARD_SIZE,
    Pawn,
    Piece,
    PieceType,
    starting_pieces,
)

TILE_SIZE = 75
DEFAULT_TIME_LIMIT = 300

_KING_STEPS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)

PromotionChooser = Callable[[int, int, bool], Optional[Piece]]


class Board:
    """The pieces, whose turn it is, the clocks and the click-driven move logic."""

    def __init__(
        self,
        on_move: Optional[Callable[[], None]] = None,
        promote: Optional[PromotionChooser] = None,
        time_limit: int = DEFAULT_TIME_LIMIT,
    ) -> None:
        self.on_move = on_move
        self.promote = promote
        self.pieces: list[Piece] = []
        self.selected_piece: Optional[Piece] = None
        self.valid_moves: list[tuple[int, int]] = []
        self.old_row = 0
        self.old_col = 0
        self.reset(time_limit)

    def reset(self, time_limit: int) -> None:
        """Set up a new game with both clocks at the given number of seconds."""
        self.pieces = starting_pieces()
        self.white_time_left = time_limit
        self.black_time_left = time_limit
        self.turn_is_white = True
        self.game_over = False
        self.selected_piece = None
        self.valid_moves = []

    def piece_at(self, row: int, col: int) -> Optional[Piece]:
        """The first piece standing on the square, if any."""
        return next((p for p in self.pieces if p.row == row and p.col == col), None)

    def _remove(self, piece: Piece) -> None:
        self.pieces = [p for p in self.pieces if p is not piece]

    def handle_click(self, x: int, y: int) -> None:
        """Select a piece or move the selected one, given a click in pixels."""
        if self.game_over:
            return
        row = y // TILE_SIZE
        col = x // TILE_SIZE

        if self.selected_piece is None:
            self._select(row, col)
            return

        if (row, col) not in self.valid_moves:
            print("Invalid move!")
            self.selected_piece = None
            self.valid_moves = []
            return

        self._play(row, col)

    def _select(self, row: int, col: int) -> None:
        piece = next(
            (
                p
                for p in self.pieces
                if p.row == row and p.col == col and p.is_white == self.turn_is_white
            ),
            None,
        )
        if piece is None:
            print("Please choose a valid piece")
            return
        self.selected_piece = piece
        self.old_row = piece.row
        self.old_col = piece.col
        self.valid_moves = piece.possible_moves(self.pieces)

    def _castle_rook(self, row: int, from_col: int, to_col: int) -> None:
        rook = next(
            (
                p
                for p in self.pieces
                if p.piece_type == PieceType.ROOK
                and p.row == row
                and p.col == from_col
                and not p.has_moved
            ),
            None,
        )
        if rook is not None:
            rook.move(row, to_col)

    def _play(self, row: int, col: int) -> None:
        selected = self.selected_piece
        assert selected is not None

        if selected.piece_type == PieceType.KING and abs(col - self.old_col) == 2:
            if col > self.old_col:
                selected.move(row, 6)
                self._castle_rook(row, 7, 5)
            else:
                selected.move(row, 2)
                self._castle_rook(row, 0, 3)

        if isinstance(selected, Pawn):
            forward = 1 if selected.is_white else -1
            if abs(col - selected.col) == 1 and row - selected.row == forward:
                passed = next(
                    (
                        p
                        for p in self.pieces
                        if p.row == selected.row
                        and p.col == col
                        and p.is_white != selected.is_white
                        and p.two_stepped
                    ),
                    None,
                )
                if passed is not None:
                    print("En Passant", end="")
                    self._remove(passed)

        captured = next(
            (
                p
                for p in self.pieces
                if p.row == row and p.col == col and p.is_white != selected.is_white
            ),
            None,
        )
        if captured is not None:
            print(f"Captured opponent's piece at ({row}, {col})")
            if captured.piece_type == PieceType.KING:
                print("White wins!" if self.turn_is_white else "Black wins!")
                self.game_over = True
            self._remove(captured)

        from_row, from_col = selected.row, selected.col
        selected.move(row, col)
        if self.on_move is not None:
            self.on_move()

        if self.is_in_check(self.turn_is_white):
            print("Check! The king is in check!")
            selected.move(from_row, from_col)
            return

        if self.is_stalemate() or self.is_insufficient_material():
            print("The game has ended in a draw!")
            self.game_over = True

        if self.is_checkmate(not self.turn_is_white):
            print("Checkmate! " + ("White wins!" if self.turn_is_white else "Black wins!"))
            self.game_over = True

        last_rank = BOARD_SIZE - 1 if selected.is_white else 0
        if selected.piece_type == PieceType.PAWN and row == last_rank:
            print("Pawn reached the last rank.")
            promoted = (
                self.promote(row, col, selected.is_white) if self.promote else None
            )
            if promoted is not None:
                self.pieces.append(promoted)
                self._remove(selected)
                print("Pawn promoted successfully.")

        self.turn_is_white = not self.turn_is_white
        self.selected_piece = None
        self.valid_moves = []

    def is_in_check(self, white: bool) -> bool:
        """Whether the king of the given side is attacked; never while the game is over."""
        if self.game_over:
            return False
        king = self.get_king(white)
        if king is None:
            return False
        return any(
            p.is_white != white and p.can_move_to(king.row, king.col, self.pieces)
            for p in self.pieces
        )

    def get_king(self, white: bool) -> Optional[Piece]:
        """The king of the given side, if still on the board."""
        return next(
            (
                p
                for p in self.pieces
                if p.piece_type == PieceType.KING and p.is_white == white
            ),
            None,
        )

    def king_can_move(self, king: Piece) -> bool:
        """Whether the king has a neighbouring square that leaves it out of check."""
        from_row, from_col = king.row, king.col
        for d_row, d_col in _KING_STEPS:
            row, col = from_row + d_row, from_col + d_col
            if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
                continue
            target = self.piece_at(row, col)
            if target is not None and target.is_white == king.is_white:
                continue
            king.move(row, col)
            in_check = self.is_in_check(king.is_white)
            king.move(from_row, from_col)
            if not in_check:
                return True
        return False

    def is_square_under_attack(self, row: int, col: int, white_king: bool) -> bool:
        """Whether a piece of the side opposing white_king reaches the square."""
        return any(
            p.is_white != white_king and p.can_move_to(row, col, self.pieces)
            for p in self.pieces
        )

    def is_checkmate(self, white: bool) -> bool:
        """Whether the given side is in check with no escape."""
        if not self.is_in_check(white):
            return False
        king = self.get_king(white)
        if king is None:
            return False
        if self.king_can_move(king):
            return False

        for piece in list(self.pieces):
            if piece.is_white != white or piece.piece_type == PieceType.KING:
                continue
            for row in range(BOARD_SIZE):
                for col in range(BOARD_SIZE):
                    if not piece.can_move_to(row, col, self.pieces):
                        continue
                    captured = self.piece_at(row, col)
                    from_row, from_col = piece.row, piece.col
                    if captured is not None:
                        self._remove(captured)
                    piece.move(row, col)
                    still_in_check = self.is_in_check(white)
                    piece.move(from_row, from_col)
                    if captured is not None:
                        self.pieces.append(captured)
                    if not still_in_check:
                        return False
        return True

    def is_king_in_check(self, is_white: bool) -> bool:
        """Whether an enemy piece has a valid move onto the king's square."""
        king = self.get_king(is_white)
        if king is None:
            return False
        return any(
            p.is_white != is_white and p.is_valid_move(king.row, king.col, self.pieces)
            for p in self.pieces
        )

    def is_stalemate(self) -> bool:
        """Whether the side to move is not in check and has no valid move."""
        if self.is_king_in_check(self.turn_is_white):
            return False
        return not any(
            piece.possible_moves(self.pieces)
            for piece in self.pieces
            if piece.is_white == self.turn_is_white
        )

    def is_insufficient_material(self) -> bool:
        """Whether neither side has enough pieces left to mate."""
        minor = (PieceType.BISHOP, PieceType.KNIGHT)
        white = [p for p in self.pieces if p.is_white and p.piece_type != PieceType.KING]
        black = [
            p for p in self.pieces if not p.is_white and p.piece_type != PieceType.KING
        ]
        if not white and not black:
            return True
        white_minor = any(p.piece_type in minor for p in white)
        black_minor = any(p.piece_type in minor for p in black)
        return (len(white) == 1 and white_minor and not black) or (
            len(black) == 1 and black_minor and not white
        )