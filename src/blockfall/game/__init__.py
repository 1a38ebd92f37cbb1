"""Game module for Blockfall.

Exports the core game engine and supporting classes:
- PieceType / PIECES: Static tetromino catalog with rotation masks
- Board: Sparse court of locked cells and row removal
- cells_at / is_occupied: Piece geometry and collision
- PieceBag: Shuffle-bag piece generator
- ScoringRules / GameSpeed: Points and drop-speed progression
- DirtyFlags: Redraw markers shared with renderers
- TetrisGame: Session state machine driven by update ticks
"""

from .pieces import PIECES, Direction, PieceInstance, PieceType, piece_by_id, piece_by_index
from .grid import Board
from .invalidation import DirtyFlags
from .placement import cells_at, for_each_cell, is_occupied, is_unoccupied
from .randomizer import PieceBag
from .rules import GameSpeed, ScoringRules
from .core import Action, GameConfig, TetrisGame

__all__ = [
    "PIECES",
    "Direction",
    "PieceInstance",
    "PieceType",
    "piece_by_id",
    "piece_by_index",
    "Board",
    "DirtyFlags",
    "cells_at",
    "for_each_cell",
    "is_occupied",
    "is_unoccupied",
    "PieceBag",
    "GameSpeed",
    "ScoringRules",
    "Action",
    "GameConfig",
    "TetrisGame",
]
