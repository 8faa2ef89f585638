# olivechess

olivechess is a chess game for two players who share one screen. It is
played with the mouse on an olive-and-bone board, with a clock for each side.

## Installing

```
pip install .
```

This installs pygame as well.

The game loads its font (`times.ttf`), backgrounds (`background.jpg`,
`background1.png`) and sounds (`menu.wav`, `start.wav`, `move.wav`,
`winner.wav`) from a `run/` directory under the working directory, and the
piece images (`king1.png` … `pawn2.png`, 1 for white and 2 for black) from
`/ChessGame/img`. None of these files come with the package. A missing file
is reported on standard error and the game carries on without it: the
default pygame font is used in place of the font, and missing images and
sounds are simply not drawn or played.

## Playing

```
olivechess
```

The menu shows up first. Click **Time** to change each player's clock, which
goes 5, 10, 15, 30 minutes and then back to 5. Click **Start** to begin.

- Click one of your pieces to select it. The squares it can move to get a
  white dot, and enemy pieces it can capture get a red highlight.
- Click a highlighted square to move there. Clicking anywhere else cancels
  the selection.
- En passant and pawn promotion are supported. When a pawn reaches the last
  rank, pick the queen, rook, knight or bishop from the buttons that appear.
- When the king is moved two squares sideways, the rook on that side is
  moved next to it.
- If a move leaves your own king in check, the piece is put back on its
  square and it is still your turn.
- The side to move has its king highlighted in red and a "Check!" banner is
  shown while it is in check.
- The game is over on checkmate, on a captured king, on stalemate, when
  neither side has enough material left to mate, or when a clock runs out.
  You can then choose **Rematch** or go back to the **Menu**.

## Using the rules in code

The rules in `olivechess.pieces` and `olivechess.board` do not depend on the
display, so you can use them on their own:

```python
from olivechess.pieces import starting_pieces, PieceType

pieces = starting_pieces()
pawn = next(
    p for p in pieces
    if p.piece_type is PieceType.PAWN and p.col == 4 and p.is_white
)
pawn.is_valid_move(3, 4, pieces)   # True: a two-square opening move
pawn.possible_moves(pieces)        # [(2, 4), (3, 4)]
```

Rows run from 0 (white's back rank) to 7 (black's back rank). Each piece
class (`King`, `Queen`, `Rook`, `Bishop`, `Knight`, `Pawn`) has `move`,
`is_valid_move`, `can_move_to` and `possible_moves`.

`olivechess.board.Board` keeps the full game state: the pieces, whose turn
it is, the selected piece, the clocks, and check, checkmate, stalemate and
insufficient-material detection (`is_in_check`, `is_checkmate`,
`is_stalemate`, `is_insufficient_material`). It takes board clicks as pixel
coordinates through `Board.handle_click`, with 75-pixel squares. An
`on_move` callback is called after each move, and a `promote` callback,
given the row, column and colour, returns the piece a pawn becomes.

`olivechess.menu` holds the menu helpers: `next_time_limit`, `format_clock`,
`promotion_choice_at` and `overlay_action_at`.

## What it does not do

There is no computer opponent, no network play, no saving or loading of
games and no move notation; both players play at the same window.

## Running the tests

```
pip install .[test]
pytest
```