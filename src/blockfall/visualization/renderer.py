from __future__ import annotations

from typing import Optional, Tuple

import pygame

from blockfall.game import TetrisGame, cells_at
from blockfall.game.pieces import PieceInstance


BACKGROUND = (10, 10, 14)
COURT_BG = (30, 30, 36)
OUTLINE = (0, 0, 0)
TEXT = (230, 230, 230)

PREVIEW_SIZE = 5


def score_text(vscore: int) -> str:
    return f"{int(vscore):05d}"[-5:]


class Renderer:
    """Draws a TetrisGame, touching only regions whose dirty flag is set."""

    def __init__(self, cell_size: int = 28, margin: int = 20, font: Optional[pygame.font.Font] = None) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.font = font

    def window_size(self, game: TetrisGame) -> Tuple[int, int]:
        w = self.margin * 3 + (game.board.width + PREVIEW_SIZE) * self.cell_size
        h = self.margin * 2 + game.board.height * self.cell_size
        return w, h

    def _panel_x(self, game: TetrisGame) -> int:
        return self.margin * 2 + game.board.width * self.cell_size

    def _block(self, surf: pygame.Surface, ox: float, oy: float, x: float, y: float, color) -> None:
        rect = pygame.Rect(
            int(ox + x * self.cell_size),
            int(oy + y * self.cell_size),
            self.cell_size,
            self.cell_size,
        )
        pygame.draw.rect(surf, color, rect)
        pygame.draw.rect(surf, OUTLINE, rect, 1)

    def _piece(self, surf: pygame.Surface, ox: float, oy: float, piece: PieceInstance,
               x: float, y: float) -> None:
        for cx, cy in cells_at(piece.type, 0, 0, piece.rotation):
            self._block(surf, ox, oy, x + cx, y + cy, piece.type.color2)

    def draw_court(self, screen: pygame.Surface, game: TetrisGame) -> None:
        w = game.board.width * self.cell_size
        h = game.board.height * self.cell_size
        court = pygame.Rect(self.margin, self.margin, w, h)
        pygame.draw.rect(screen, COURT_BG, court)
        if game.playing and game.current is not None:
            self._piece(screen, self.margin, self.margin, game.current, game.current.x, game.current.y)
        for x, y, piece_type in game.board.occupied_cells():
            self._block(screen, self.margin, self.margin, x, y, piece_type.color)
        pygame.draw.rect(screen, OUTLINE, court, 1)

    def draw_next(self, screen: pygame.Surface, game: TetrisGame) -> None:
        ox = self._panel_x(game)
        oy = self.margin
        frame = pygame.Rect(ox, oy, PREVIEW_SIZE * self.cell_size, PREVIEW_SIZE * self.cell_size)
        pygame.draw.rect(screen, COURT_BG, frame)
        if game.next is not None:
            padding = (PREVIEW_SIZE - game.next.type.size) / 2
            self._piece(screen, ox, oy, game.next, padding, padding)
        pygame.draw.rect(screen, OUTLINE, frame, 1)

    def _label(self, screen: pygame.Surface, game: TetrisGame, line: int, text: str) -> None:
        if self.font is None:
            return
        x = self._panel_x(game)
        y = self.margin + (PREVIEW_SIZE + 1) * self.cell_size + line * 28
        area = pygame.Rect(x, y, PREVIEW_SIZE * self.cell_size, 24)
        pygame.draw.rect(screen, BACKGROUND, area)
        screen.blit(self.font.render(text, True, TEXT), area.topleft)

    def draw_score(self, screen: pygame.Surface, game: TetrisGame) -> None:
        self._label(screen, game, 0, f"Score {score_text(game.vscore)}")

    def draw_rows(self, screen: pygame.Surface, game: TetrisGame) -> None:
        self._label(screen, game, 1, f"Rows  {game.rows}")

    def draw(self, screen: pygame.Surface, game: TetrisGame) -> bool:
        """Redraw dirty regions; returns True if anything was drawn."""
        drawn = False
        invalid = game.invalid
        if invalid.consume("court"):
            self.draw_court(screen, game)
            drawn = True
        if invalid.consume("next"):
            self.draw_next(screen, game)
            drawn = True
        if invalid.consume("score"):
            self.draw_score(screen, game)
            drawn = True
        if invalid.consume("rows"):
            self.draw_rows(screen, game)
            drawn = True
        return drawn
