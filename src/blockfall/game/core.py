from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Deque, Optional

import numpy as np

from .grid import Board
from .invalidation import DirtyFlags
from .pieces import Direction, PieceInstance
from .placement import cells_at, for_each_cell, is_occupied, is_unoccupied
from .randomizer import PieceBag
from .rules import GameSpeed, ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    DOWN = 3
    HARD_DROP = 4


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    max_frame_seconds: float = 1.0
    bag_copies: int = 4
    speed: GameSpeed = field(default_factory=GameSpeed)
    rules: ScoringRules = field(default_factory=ScoringRules)

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        if self.bag_copies < 1:
            raise ValueError(f"bag_copies must be positive, got {self.bag_copies}")


class TetrisGame:
    """Falling-block game session.

    Two states: idle (``playing`` is False, last score frozen) and playing.
    Inputs are queued with ``enqueue`` and applied one per ``update`` tick,
    ahead of gravity, so all board mutation happens inside ``update``.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.rules = self.config.rules
        self.speed = self.config.speed
        self.invalid = DirtyFlags()
        self.board = Board(self.config.width, self.config.height, self.invalid)
        self.generator = PieceBag(random.Random(self.config.random_seed), self.config.bag_copies)
        self.actions: Deque[Action] = deque()
        self.playing = False
        self.dt = 0.0
        self.score = 0
        self.vscore = 0
        self.rows = 0
        self.drop_interval = self.speed.start
        self.pieces_locked = 0
        self.current: Optional[PieceInstance] = None
        self.next: Optional[PieceInstance] = None
        self.reset()

    # ------------------------------------------------------------------
    # State transitions

    def play(self) -> None:
        if self.playing:
            return
        self.reset()
        self.playing = True
        logger.info("game started (%dx%d)", self.board.width, self.board.height)

    def lose(self) -> None:
        if not self.playing:
            return
        self.set_visual_score()
        self.playing = False
        logger.info("game over: score=%d rows=%d pieces=%d", self.score, self.rows, self.pieces_locked)

    def reset(self) -> None:
        self.dt = 0.0
        self.pieces_locked = 0
        self.clear_actions()
        self.board.clear_all_cells()
        self.set_rows(0)
        self.set_score(0)
        self.set_current_piece()
        self.set_next_piece()

    # ------------------------------------------------------------------
    # Session values

    def set_visual_score(self, n: Optional[int] = None) -> None:
        self.vscore = self.score if n is None else n
        self.invalid.invalidate_score()

    def set_score(self, n: int) -> None:
        self.score = n
        self.set_visual_score(n)

    def add_score(self, n: int) -> None:
        self.score += n

    def set_rows(self, n: int) -> None:
        self.rows = n
        self.drop_interval = self.speed.interval_for_rows(n)
        self.invalid.invalidate_rows()

    def add_rows(self, n: int) -> None:
        self.set_rows(self.rows + n)

    def clear_actions(self) -> None:
        self.actions.clear()

    def set_current_piece(self, piece: Optional[PieceInstance] = None) -> None:
        self.current = piece or self.generator.spawn(self.board.width)
        self.invalid.invalidate()

    def set_next_piece(self, piece: Optional[PieceInstance] = None) -> None:
        self.next = piece or self.generator.spawn(self.board.width)
        self.invalid.invalidate_next()

    # ------------------------------------------------------------------
    # Tick and input

    def enqueue(self, action: Action) -> None:
        if self.playing:
            self.actions.append(Action(action))

    def update(self, idt: float) -> None:
        if not self.playing:
            return
        idt = min(max(0.0, float(idt)), self.config.max_frame_seconds)
        if self.vscore < self.score:
            self.set_visual_score(self.vscore + 1)
        if self.actions:
            self.handle(self.actions.popleft())
            if not self.playing:
                return
        self.dt += idt
        if self.dt > self.drop_interval:
            self.dt -= self.drop_interval
            self.drop()

    def handle(self, action: Action) -> None:
        if action == Action.LEFT:
            self.move(Direction.LEFT)
        elif action == Action.RIGHT:
            self.move(Direction.RIGHT)
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.DOWN:
            self.drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()

    def move(self, direction: Direction) -> bool:
        assert self.current is not None
        x, y = self.current.x, self.current.y
        if direction == Direction.RIGHT:
            x += 1
        elif direction == Direction.LEFT:
            x -= 1
        elif direction == Direction.DOWN:
            y += 1
        if is_unoccupied(self.board, self.current.type, x, y, self.current.rotation):
            self.current.x = x
            self.current.y = y
            self.invalid.invalidate()
            return True
        return False

    def rotate(self) -> bool:
        assert self.current is not None
        new_rotation = Direction(self.current.rotation).next()
        if is_unoccupied(self.board, self.current.type, self.current.x, self.current.y, new_rotation):
            self.current.rotation = new_rotation
            self.invalid.invalidate()
            return True
        return False

    def drop(self) -> bool:
        """Move the current piece down one row, or lock it if it cannot move.

        Returns True when the piece moved.
        """
        if self.move(Direction.DOWN):
            return True
        self.add_score(self.rules.lock_points)
        self._drop_piece()
        self._remove_lines()
        self.set_current_piece(self.next)
        self.set_next_piece()
        self.clear_actions()
        assert self.current is not None
        if is_occupied(self.board, self.current.type, self.current.x, self.current.y, self.current.rotation):
            self.lose()
        return False

    def hard_drop(self) -> None:
        while self.drop():
            pass

    def _drop_piece(self) -> None:
        current = self.current
        assert current is not None
        for_each_cell(current.type, current.x, current.y, current.rotation,
                      lambda x, y: self.board.set_cell(x, y, current.type))
        self.pieces_locked += 1

    def _remove_lines(self) -> None:
        n = self.board.find_complete_rows()
        if n > 0:
            self.add_rows(n)
            self.add_score(self.rules.score_for_lines(n))
            logger.debug("cleared %d row(s), rows=%d interval=%.3fs", n, self.rows, self.drop_interval)

    # ------------------------------------------------------------------
    # Read-only views

    def get_state(self) -> np.ndarray:
        # Falling piece overlaid as negative indices
        state = self.board.to_array()
        if self.current is not None and self.playing:
            current = self.current
            for x, y in cells_at(current.type, current.x, current.y, current.rotation):
                if self.board.is_inside(x, y):
                    state[y, x] = -current.type.index
        return state

    def stats(self) -> dict:
        return {
            "score": self.score,
            "displayed_score": self.vscore,
            "rows": self.rows,
            "pieces_locked": self.pieces_locked,
            "playing": self.playing,
            "drop_interval": self.drop_interval,
        }
