from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from blockfall.game import Action, GameConfig, TetrisGame
from .renderer import BACKGROUND, TEXT, Renderer


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)s <%(name)s.%(funcName)s> %(message)s'

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_RETURN: Action.HARD_DROP,
}


def handle_key(game: TetrisGame, key: int) -> bool:
    """Route a key press to the game; returns True if the key was used."""
    if game.playing:
        if key == pygame.K_ESCAPE:
            game.lose()
            return True
        action = KEY_TO_ACTION.get(key)
        if action is not None:
            game.enqueue(action)
            return True
        return False
    if key == pygame.K_SPACE:
        game.play()
        return True
    return False


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Blockfall with the keyboard.")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--cell_size", type=int, default=28)
    p.add_argument("--log-level", dest="log_level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _draw_start_prompt(screen: pygame.Surface, font: pygame.font.Font) -> None:
    text = font.render("Press SPACE to play", True, TEXT)
    rect = text.get_rect(center=(screen.get_width() // 2, 12))
    screen.blit(text, rect)


def run(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    game = TetrisGame(GameConfig(width=args.width, height=args.height, random_seed=args.seed))

    pygame.init()
    try:
        clock = pygame.time.Clock()
        font = pygame.font.SysFont(None, 24)
        renderer = Renderer(cell_size=args.cell_size, font=font)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Blockfall")
        screen.fill(BACKGROUND)
        game.invalid.invalidate_all()

        was_playing = None
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    handle_key(game, event.key)

            # Clock.tick returns milliseconds since the previous frame
            game.update(clock.tick(args.fps) / 1000.0)

            if game.playing != was_playing:
                screen.fill(BACKGROUND)
                game.invalid.invalidate_all()
            drawn = renderer.draw(screen, game)
            if game.playing != was_playing:
                if not game.playing:
                    _draw_start_prompt(screen, font)
                was_playing = game.playing
                drawn = True
            if drawn:
                pygame.display.flip()
    finally:
        pygame.quit()
    logger.info("session closed: %s", game.stats())


def main() -> None:
    run()


if __name__ == "__main__":  # pragma: no cover
    main()
