from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from .invalidation import DirtyFlags
from .pieces import PieceType


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class Board:
    """Fixed-size court holding locked cells.

    Cells are stored sparsely as ``(x, y) -> PieceType``; y=0 is the top row.
    Every mutation marks the court dirty on the shared ``DirtyFlags``.
    """

    def __init__(self, width: int = 10, height: int = 20, invalid: Optional[DirtyFlags] = None) -> None:
        self.width = int(width)
        self.height = int(height)
        self.invalid = invalid if invalid is not None else DirtyFlags()
        self._cells: Dict[Coordinate, PieceType] = {}

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Optional[PieceType]:
        return self._cells.get((x, y))

    def set_cell(self, x: int, y: int, piece_type: Optional[PieceType]) -> None:
        if not self.is_inside(x, y):
            return
        if piece_type is None:
            self._cells.pop((x, y), None)
        else:
            self._cells[(x, y)] = piece_type
        self.invalid.invalidate()

    def clear_all_cells(self) -> None:
        self._cells = {}
        self.invalid.invalidate()

    def is_row_complete(self, y: int) -> bool:
        return all((x, y) in self._cells for x in range(self.width))

    def remove_row(self, n: int) -> None:
        """Shift every row above ``n`` down by one; row 0 becomes empty."""
        for y in range(n, -1, -1):
            for x in range(self.width):
                self.set_cell(x, y, None if y == 0 else self.get_cell(x, y - 1))

    def find_complete_rows(self) -> int:
        """Remove complete rows bottom-up and return how many were removed.

        After a removal the same index is examined again, since the row above
        has just moved into it.
        """
        removed = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_complete(y):
                self.remove_row(y)
                removed += 1
            else:
                y -= 1
        if removed:
            logger.debug("removed %d complete row(s)", removed)
        return removed

    def occupied_cells(self) -> Iterator[Tuple[int, int, PieceType]]:
        for (x, y), piece_type in sorted(self._cells.items(), key=lambda kv: (kv[0][1], kv[0][0])):
            yield x, y, piece_type

    def count(self) -> int:
        return len(self._cells)

    def to_array(self) -> np.ndarray:
        state = np.zeros((self.height, self.width), dtype=np.int8)
        for (x, y), piece_type in self._cells.items():
            state[y, x] = piece_type.index
        return state

    def copy(self) -> "Board":
        new_board = Board(self.width, self.height, DirtyFlags())
        new_board._cells = dict(self._cells)
        return new_board
