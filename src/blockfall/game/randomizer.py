from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .pieces import PIECES, Direction, PieceInstance, PieceType


class PieceBag:
    """Shuffle bag holding ``copies`` of every piece type.

    Draws remove a uniformly chosen entry; the bag refills only once empty.
    """

    def __init__(self, rng: Optional[random.Random] = None, copies: int = 4,
                 pieces: Sequence[PieceType] = PIECES) -> None:
        self.rng = rng or random.Random()
        self.copies = int(copies)
        self.pieces = tuple(pieces)
        self._bag: List[PieceType] = []

    def __len__(self) -> int:
        return len(self._bag)

    def refill(self) -> None:
        self._bag = [p for p in self.pieces for _ in range(self.copies)]

    def draw(self) -> PieceType:
        if not self._bag:
            self.refill()
        return self._bag.pop(self.rng.randrange(len(self._bag)))

    def spawn(self, width: int) -> PieceInstance:
        """Draw a type and place it at a random column on the top row, facing UP."""
        piece_type = self.draw()
        x = self.rng.randint(0, max(0, width - piece_type.size))
        return PieceInstance(piece_type, Direction.UP, x, 0)
