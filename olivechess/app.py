"""The windowed game: main menu, board drawing, clocks, sound and the event loop."""

from __future__ import annotations

import argparse
import sys
from itertools import product
from pathlib import Path
from typing import Optional

import pygame

from .board import TILE_SIZE, Board
from .menu import (
    DEFAULT_TIME_LIMIT,
    MENU_BUTTON,
    PROMOTION_BUTTONS,
    REMATCH_BUTTON,
    START_BUTTON,
    TIME_BUTTON,
    GameMode,
    MenuResult,
    OverlayAction,
    format_clock,
    next_time_limit,
    overlay_action_at,
    promotion_choice_at,
)
from .pieces import BOARD_SIZE, Bishop, Knight, Piece, PieceType, Queen, Rook

WINDOW_SIZE = (800, 600)
WINDOW_TITLE = "Chess"
FRAME_DELAY_MS = 16

ASSET_DIR = Path("run")
IMAGE_DIR = Path("/ChessGame/img")

OLIVE = (107, 142, 35)
BONE = (227, 218, 201)
RED = (255, 0, 0)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GREY = (169, 169, 169)

_IMAGE_NAMES = {
    PieceType.KING: "king",
    PieceType.QUEEN: "queen",
    PieceType.ROOK: "rook",
    PieceType.BISHOP: "bishop",
    PieceType.KNIGHT: "knight",
    PieceType.PAWN: "pawn",
}

_PROMOTED = {
    PieceType.QUEEN: Queen,
    PieceType.ROOK: Rook,
    PieceType.KNIGHT: Knight,
    PieceType.BISHOP: Bishop,
}

_CHOICE_NAMES = {
    PieceType.QUEEN: "Queen",
    PieceType.ROOK: "Rook",
    PieceType.KNIGHT: "Knight",
    PieceType.BISHOP: "Bishop",
}


def _warn(message: str) -> None:
    print(message, file=sys.stderr)


class Game:
    """Owns the window, fonts, images and sounds, and drives the game."""

    def __init__(self) -> None:
        self.screen: Optional[pygame.Surface] = None
        self.font: Optional[pygame.font.Font] = None
        self.start_sound = None
        self.move_sound = None
        self.win_sound = None
        self.background: Optional[pygame.Surface] = None
        self.piece_images: dict[tuple[PieceType, bool], Optional[pygame.Surface]] = {}
        self._audio = False

    # ------------------------------------------------------------------ setup

    def init(self) -> None:
        """Open the window and load fonts, images and sounds."""
        pygame.mixer.pre_init(44100, -16, 2, 2048)
        pygame.init()
        self.screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)

        self.font = self._load_font(48)
        self.background = self._load_image(ASSET_DIR / "background1.png", WINDOW_SIZE)
        self.piece_images = {
            (kind, is_white): self._load_image(
                IMAGE_DIR / f"{name}{1 if is_white else 2}.png",
                (TILE_SIZE, TILE_SIZE),
            )
            for kind, name in _IMAGE_NAMES.items()
            for is_white in (True, False)
        }

        self._audio = self._open_audio()
        if self._audio:
            if self._load_music(ASSET_DIR / "menu.wav"):
                pygame.mixer.music.play(-1)
            self.start_sound = self._load_sound(ASSET_DIR / "start.wav")
            self.move_sound = self._load_sound(ASSET_DIR / "move.wav")
            self.win_sound = self._load_sound(ASSET_DIR / "winner.wav")

    @staticmethod
    def _load_font(size: int) -> pygame.font.Font:
        path = ASSET_DIR / "times.ttf"
        try:
            return pygame.font.Font(str(path), size)
        except (OSError, pygame.error) as exc:
            _warn(f"Failed to load font: {exc}")
            return pygame.font.Font(None, size)

    @staticmethod
    def _load_image(path: Path, size: tuple[int, int]) -> Optional[pygame.Surface]:
        try:
            image = pygame.image.load(str(path))
        except (OSError, pygame.error) as exc:
            _warn(f"Unable to load image! Error: {exc}")
            return None
        return pygame.transform.smoothscale(image.convert_alpha(), size)

    @staticmethod
    def _open_audio() -> bool:
        if pygame.mixer.get_init():
            return True
        try:
            pygame.mixer.init(44100, -16, 2, 2048)
        except pygame.error as exc:
            _warn(f"Audio could not initialize! Error: {exc}")
            return False
        return True

    @staticmethod
    def _load_music(path: Path) -> bool:
        try:
            pygame.mixer.music.load(str(path))
        except (OSError, pygame.error) as exc:
            _warn(f"Failed to load menu music: {exc}")
            return False
        return True

    @staticmethod
    def _load_sound(path: Path):
        try:
            return pygame.mixer.Sound(str(path))
        except (OSError, pygame.error) as exc:
            _warn(f"Failed to load {path.name}: {exc}")
            return None

    def _stop_music(self) -> None:
        if self._audio:
            pygame.mixer.music.stop()
            pygame.mixer.music.unload()

    def _stop_sounds(self) -> None:
        if self._audio:
            pygame.mixer.stop()

    # ------------------------------------------------------------------ sound

    def play_move_sound(self) -> None:
        """Play the move sound, if it was loaded."""
        if self.move_sound is not None:
            self.move_sound.play()

    # ---------------------------------------------------------------- drawing

    def render_text(self, font, text: str, color, x: int, y: int) -> pygame.Rect:
        """Draw text with its top-left corner at (x, y); return the area drawn."""
        surface = font.render(text, True, color)
        return self.screen.blit(surface, (x, y))

    def _render_centered(self, font, text: str, color, rect: pygame.Rect) -> None:
        width, height = font.size(text)
        self.render_text(
            font,
            text,
            color,
            rect.x + (rect.w - width) // 2,
            rect.y + (rect.h - height) // 2,
        )

    def draw_board(self, board: Board) -> None:
        """Draw the squares, move hints, a checked king and the pieces."""
        for row, col in product(range(BOARD_SIZE), repeat=2):
            color = OLIVE if (row + col) % 2 == 0 else BONE
            self.screen.fill(color, (col * TILE_SIZE, row * TILE_SIZE, TILE_SIZE, TILE_SIZE))

        for row, col in board.valid_moves:
            target = board.piece_at(row, col)
            if target is not None and target.is_white != board.turn_is_white:
                self.screen.fill(
                    RED, (col * TILE_SIZE, row * TILE_SIZE, TILE_SIZE, TILE_SIZE)
                )
            else:
                self.screen.fill(
                    WHITE,
                    (
                        col * TILE_SIZE + TILE_SIZE // 2 - 6,
                        row * TILE_SIZE + TILE_SIZE // 2 - 6,
                        12,
                        12,
                    ),
                )

        king = board.get_king(board.turn_is_white)
        if king is not None and board.is_in_check(board.turn_is_white):
            self.screen.fill(
                RED, (king.col * TILE_SIZE, king.row * TILE_SIZE, TILE_SIZE, TILE_SIZE)
            )

        for piece in board.pieces:
            image = self.piece_images.get((piece.piece_type, piece.is_white))
            if image is not None:
                self.screen.blit(image, (piece.col * TILE_SIZE, piece.row * TILE_SIZE))

    def _draw_check_banner(self) -> None:
        rect = pygame.Rect(620, 250, 160, 60)
        self.screen.fill(RED, rect)
        self._render_centered(self.font, "Check!", WHITE, rect)

    def _draw_clocks(self, board: Board) -> None:
        self.render_text(self.font, format_clock(board.white_time_left), WHITE, 655, 5)
        self.render_text(self.font, format_clock(board.black_time_left), BLACK, 655, 550)

    def _draw_game_over(self, board: Board) -> None:
        if board.is_stalemate() or board.is_insufficient_material():
            message = "    Draw!"
        else:
            message = "Game Over"
        box = pygame.Rect(150, 200, 500, 250)
        self.screen.fill(BLACK, box)
        pygame.draw.rect(self.screen, WHITE, box, 1)
        self.render_text(self.font, message, RED, 270, 240)

        self.screen.fill(GREY, REMATCH_BUTTON.rect)
        self.screen.fill(GREY, MENU_BUTTON.rect)
        self.render_text(self.font, "Rematch", WHITE, 300, 285)
        self.render_text(self.font, "Menu", WHITE, 330, 350)

        if self._audio and self.win_sound is not None and not pygame.mixer.get_busy():
            self.win_sound.play()

    # -------------------------------------------------------------- promotion

    def show_promotion_menu(self, row: int, col: int, is_white: bool) -> Optional[Piece]:
        """Show the promotion buttons and wait for a choice; None if the window closes."""
        print("Inside promotion menu")
        for _, button in PROMOTION_BUTTONS:
            self.screen.fill(WHITE, button.rect)
        for kind, button in PROMOTION_BUTTONS:
            image = self.piece_images.get((kind, True))
            if image is not None:
                self.screen.blit(
                    pygame.transform.smoothscale(image, (50, 50)), (button.x, button.y)
                )
        pygame.display.flip()

        while True:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                print("User closed the promotion menu")
                return None
            if event.type == pygame.MOUSEBUTTONDOWN:
                kind = promotion_choice_at(*event.pos)
                if kind is not None:
                    print(f"{_CHOICE_NAMES[kind]} selected!")
                    return _PROMOTED[kind](row, col, is_white)

    # ------------------------------------------------------------------- menu

    def show_menu(self) -> MenuResult:
        """Run the title menu until Start is pressed or the window closes."""
        time_limit = DEFAULT_TIME_LIMIT
        background = self._load_image(ASSET_DIR / "background.jpg", WINDOW_SIZE)
        large_font = self._load_font(120)
        regular_font = self._load_font(30)

        title = "CHESS"
        title_w, _ = large_font.size(title)
        title_x = 300 - title_w // 2
        title_y = 50

        start_rect = pygame.Rect(START_BUTTON.rect)
        time_rect = pygame.Rect(TIME_BUTTON.rect)
        overlay = pygame.Surface(WINDOW_SIZE, pygame.SRCALPHA)
        alpha = 0
        fading_out = False

        def clear() -> None:
            self.screen.fill(BLACK)
            if background is not None:
                self.screen.blit(background, (0, 0))

        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return MenuResult(GameMode.NONE, 0)
                if event.type != pygame.MOUSEBUTTONDOWN:
                    continue
                x, y = event.pos
                if START_BUTTON.contains(x, y):
                    clear()
                    self.screen.fill((180, 180, 180), start_rect)
                    self._render_centered(regular_font, "Start", WHITE, start_rect)
                    pygame.display.flip()
                    if self.start_sound is not None:
                        self.start_sound.play()
                    pygame.time.delay(300)
                    fading_out = True
                elif TIME_BUTTON.contains(x, y):
                    time_limit = next_time_limit(time_limit)

            clear()
            self.render_text(large_font, title, BLACK, title_x + 3, title_y + 3)
            self.render_text(large_font, title, WHITE, title_x, title_y)

            self.screen.fill((100, 100, 100), start_rect)
            self._render_centered(regular_font, "Start", WHITE, start_rect)

            self.screen.fill((80, 80, 80), time_rect)
            self._render_centered(
                regular_font, f"Time: {time_limit // 60} min", WHITE, time_rect
            )

            if fading_out:
                alpha = min(alpha + 5, 255)
                overlay.fill((0, 0, 0, alpha))
                self.screen.blit(overlay, (0, 0))
                pygame.display.flip()
                pygame.time.delay(5)
                if alpha == 255:
                    pygame.time.delay(1)
                    return MenuResult(GameMode.PLAYER_VS_PLAYER, time_limit)
            else:
                pygame.display.flip()

            pygame.time.delay(FRAME_DELAY_MS)

    def _menu_from_game(self) -> MenuResult:
        self._stop_sounds()
        if self._audio and self._load_music(ASSET_DIR / "menu.wav"):
            pygame.mixer.music.play(-1)
        result = self.show_menu()
        self._stop_music()
        return result

    # ------------------------------------------------------------------- loop

    def run(self) -> None:
        """Show the menu, then play games until the window is closed."""
        board = Board(
            on_move=self.play_move_sound,
            promote=self.show_promotion_menu,
        )
        menu_result = self.show_menu()
        if menu_result.mode == GameMode.NONE:
            return
        self._stop_music()

        board.reset(menu_result.time_limit)
        last_second = pygame.time.get_ticks()
        game_over_notified = False
        running = True

        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    x, y = event.pos
                    board.handle_click(x, y)
                    if not board.game_over:
                        continue
                    action = overlay_action_at(x, y)
                    if action == OverlayAction.REMATCH:
                        self._stop_sounds()
                        board.reset(menu_result.time_limit)
                        game_over_notified = False
                    elif action == OverlayAction.MENU:
                        menu_result = self._menu_from_game()
                        if menu_result.mode == GameMode.NONE:
                            running = False
                            break
                        board.reset(menu_result.time_limit)
                        game_over_notified = False
                        last_second = pygame.time.get_ticks()

            if not running:
                break

            self.screen.fill(BLACK)
            if self.background is not None:
                self.screen.blit(self.background, (0, 0))

            now = pygame.time.get_ticks()
            if now - last_second >= 1000 and not board.game_over:
                if board.turn_is_white:
                    board.white_time_left -= 1
                else:
                    board.black_time_left -= 1
                last_second = now

            if (
                board.white_time_left <= 0 or board.black_time_left <= 0
            ) and not game_over_notified:
                board.game_over = True
                game_over_notified = True
                print(
                    "time up! "
                    + ("Black wins!" if board.white_time_left <= 0 else "White wins!")
                )

            if (
                board.is_stalemate() or board.is_insufficient_material()
            ) and not game_over_notified:
                board.game_over = True
                game_over_notified = True
                print("The game has ended in a draw!")

            self.draw_board(board)
            if board.is_in_check(board.turn_is_white):
                self._draw_check_banner()
            self._draw_clocks(board)
            if board.game_over:
                self._draw_game_over(board)

            pygame.display.flip()
            pygame.time.delay(FRAME_DELAY_MS)

        pygame.quit()


def main(argv=None) -> int:
    """Start the game window."""
    parser = argparse.ArgumentParser(
        prog="olivechess", description="Two-player chess on one screen."
    )
    parser.parse_args(argv)
    game = Game()
    game.init()
    game.run()
    return 0