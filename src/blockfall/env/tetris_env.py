from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import PIECES, Action, GameConfig, PieceBag, TetrisGame
from blockfall.game.pieces import color_for_index


NOOP = 0


class FallingBlocksEnv(gym.Env):
    """Real-time game sampled at a fixed frame rate.

    Each step optionally queues one input and advances the game by
    ``frame_seconds``. Action 0 is a no-op; 1..5 map to ``Action`` values.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 frame_seconds: float = 1.0 / 60.0, max_episode_steps: int = 100_000) -> None:
        super().__init__()
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.frame_seconds = float(frame_seconds)
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.board.height, self.game.board.width
        n = len(PIECES)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n, high=n, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(n + 1),
            }
        )
        self.action_space = spaces.Discrete(len(Action) + 1)
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_index = self.game.next.type.index if self.game.next is not None else 0
        return {"board": self.game.get_state(), "next": next_index}

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.stats()
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None,
              options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.generator = PieceBag(random.Random(seed), self.game.config.bag_copies)
        self.game.lose()
        self.game.play()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        if not self.action_space.contains(int(action)):
            raise ValueError(f"invalid action {action!r}")
        before = self.game.score
        if int(action) != NOOP:
            self.game.enqueue(Action(int(action) - 1))
        self.game.update(self.frame_seconds)
        self._steps += 1

        reward = float(self.game.score - before)
        terminated = not self.game.playing
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = color_for_index(v, falling=v < 0)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
