"""Menu state, clock display and hit-testing for the on-screen buttons."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .pieces import PieceType

TIME_LIMITS = (300, 600, 900, 1800)
DEFAULT_TIME_LIMIT = TIME_LIMITS[0]


class GameMode(Enum):
    """What the main menu asked for."""

    NONE = 0
    PLAYER_VS_PLAYER = 1


@dataclass(frozen=True)
class MenuResult:
    """The outcome of the main menu: a mode and the clock for each side."""

    mode: GameMode
    time_limit: int


class OverlayAction(Enum):
    """Buttons on the game-over panel."""

    REMATCH = "rematch"
    MENU = "menu"


@dataclass(frozen=True)
class Button:
    """A screen rectangle whose edges count as inside."""

    x: int
    y: int
    w: int
    h: int

    def contains(self, px: int, py: int) -> bool:
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h

    @property
    def rect(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.w, self.h)


START_BUTTON = Button(200, 250, 200, 50)
TIME_BUTTON = Button(200, 320, 200, 40)

REMATCH_BUTTON = Button(301, 289, 179, 53)
MENU_BUTTON = Button(323, 359, 134, 53)

PROMOTION_BUTTONS: tuple[tuple[PieceType, Button], ...] = (
    (PieceType.QUEEN, Button(100, 400, 100, 50)),
    (PieceType.ROOK, Button(210, 400, 100, 50)),
    (PieceType.KNIGHT, Button(320, 400, 100, 50)),
    (PieceType.BISHOP, Button(430, 400, 100, 50)),
)


def next_time_limit(limit: int) -> int:
    """The clock setting that follows the given one; unknown settings go back to the first."""
    try:
        index = TIME_LIMITS.index(limit)
    except ValueError:
        return DEFAULT_TIME_LIMIT
    return TIME_LIMITS[(index + 1) % len(TIME_LIMITS)]


def format_clock(seconds: int) -> str:
    """Minutes and seconds as shown on the clock, seconds padded below ten."""
    sign = -1 if seconds < 0 else 1
    minutes, secs = divmod(abs(seconds), 60)
    minutes *= sign
    secs *= sign
    pad = "0" if secs < 10 else ""
    return f"{minutes}:{pad}{secs}"


def promotion_choice_at(x: int, y: int) -> Optional[PieceType]:
    """The piece type whose promotion button covers the point, if any."""
    return next(
        (kind for kind, button in PROMOTION_BUTTONS if button.contains(x, y)),
        None,
    )


def overlay_action_at(x: int, y: int) -> Optional[OverlayAction]:
    """The game-over panel button under the point, if any."""
    if REMATCH_BUTTON.contains(x, y):
        return OverlayAction.REMATCH
    if MENU_BUTTON.contains(x, y):
        return OverlayAction.MENU
    return None