"""Piece geometry and the collision predicate.

All code that needs to know which cells a piece covers (locking, collision,
drawing) goes through ``cells_at``.
"""

from __future__ import annotations

from typing import Callable, List

from .grid import Board, Coordinate
from .pieces import PieceType


def cells_at(piece_type: PieceType, x: int, y: int, rotation: int) -> List[Coordinate]:
    """Decode the rotation mask into absolute cells, row-major from bit 0x8000."""
    blocks = piece_type.mask(rotation)
    cells: List[Coordinate] = []
    row = col = 0
    bit = 0x8000
    while bit > 0:
        if blocks & bit:
            cells.append((x + col, y + row))
        col += 1
        if col == 4:
            col = 0
            row += 1
        bit >>= 1
    return cells


def for_each_cell(piece_type: PieceType, x: int, y: int, rotation: int,
                  visit: Callable[[int, int], None]) -> None:
    for cx, cy in cells_at(piece_type, x, y, rotation):
        visit(cx, cy)


def is_occupied(board: Board, piece_type: PieceType, x: int, y: int, rotation: int) -> bool:
    for cx, cy in cells_at(piece_type, x, y, rotation):
        if not board.is_inside(cx, cy) or board.get_cell(cx, cy) is not None:
            return True
    return False


def is_unoccupied(board: Board, piece_type: PieceType, x: int, y: int, rotation: int) -> bool:
    return not is_occupied(board, piece_type, x, y, rotation)
