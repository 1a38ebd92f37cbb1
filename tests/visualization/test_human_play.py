import unittest

import pygame

from blockfall.game import Action, GameConfig, TetrisGame
from blockfall.rl import train_ppo
from blockfall.rl.random_agent import run_random
from blockfall.visualization.human_play import build_parser, handle_key
from blockfall.visualization.renderer import Renderer, score_text


class TestHandleKey(unittest.TestCase):
    def setUp(self):
        self.game = TetrisGame(GameConfig(random_seed=0))

    def test_space_starts(self):
        self.assertFalse(handle_key(self.game, pygame.K_LEFT))
        self.assertTrue(handle_key(self.game, pygame.K_SPACE))
        self.assertTrue(self.game.playing)

    def test_keys_enqueue_actions(self):
        self.game.play()
        for key in (pygame.K_LEFT, pygame.K_RIGHT, pygame.K_UP, pygame.K_DOWN, pygame.K_RETURN):
            self.assertTrue(handle_key(self.game, key))
        self.assertEqual([Action.LEFT, Action.RIGHT, Action.ROTATE, Action.DOWN, Action.HARD_DROP],
                         list(self.game.actions))
        self.assertFalse(handle_key(self.game, pygame.K_SPACE))

    def test_escape_loses_immediately(self):
        self.game.play()
        self.game.add_score(40)
        self.assertTrue(handle_key(self.game, pygame.K_ESCAPE))
        self.assertFalse(self.game.playing)
        self.assertEqual(40, self.game.vscore)

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        self.assertEqual((10, 20, 60), (args.width, args.height, args.fps))
        self.assertIsNone(args.seed)


class TestRenderer(unittest.TestCase):
    def test_score_text(self):
        self.assertEqual("00000", score_text(0))
        self.assertEqual("00042", score_text(42))
        self.assertEqual("23456", score_text(123456))

    def test_draw_consumes_flags(self):
        game = TetrisGame(GameConfig(random_seed=0))
        game.play()
        renderer = Renderer(cell_size=8, margin=4)
        screen = pygame.Surface(renderer.window_size(game))
        game.invalid.invalidate_all()
        self.assertTrue(renderer.draw(screen, game))
        self.assertFalse(game.invalid.any())
        self.assertFalse(renderer.draw(screen, game))

    def test_window_size(self):
        game = TetrisGame(GameConfig(random_seed=0))
        self.assertEqual((3 * 20 + 15 * 28, 2 * 20 + 20 * 28), Renderer().window_size(game))


class TestAgents(unittest.TestCase):
    def test_random_agent_runs(self):
        self.assertGreaterEqual(run_random(steps=200, seed=0), 0.0)

    def test_train_parser(self):
        args = train_ppo.build_parser().parse_args(["--timesteps", "10"])
        self.assertEqual(10, args.timesteps)
        self.assertEqual(4, args.n_envs)


if __name__ == '__main__':
    unittest.main()
