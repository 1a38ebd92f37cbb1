from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple


Color = Tuple[int, int, int]


class Direction(IntEnum):
    """Rotation indices, ordered clockwise."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @classmethod
    def min(cls) -> "Direction":
        return cls.UP

    @classmethod
    def max(cls) -> "Direction":
        return cls.LEFT

    def next(self) -> "Direction":
        if self is Direction.max():
            return Direction.min()
        return Direction(self + 1)


@dataclass(frozen=True)
class PieceType:
    """Static definition of one tetromino.

    ``blocks`` holds one 16-bit mask per Direction. Bit 0x8000 is the top-left
    cell of a 4x4 window; bits run left to right, then top to bottom.
    """

    id: str
    index: int
    size: int
    blocks: Tuple[int, int, int, int]
    color: Color
    color2: Color

    def mask(self, rotation: int) -> int:
        return self.blocks[rotation % 4]

    def __str__(self) -> str:
        return self.id


I = PieceType("i", 1, 4, (0x0F00, 0x2222, 0x00F0, 0x4444), (0, 200, 220), (102, 224, 255))  # noqa: E741
J = PieceType("j", 2, 3, (0x44C0, 0x8E00, 0x6440, 0x0E20), (40, 60, 220), (106, 119, 255))
L = PieceType("l", 3, 3, (0x4460, 0x0E80, 0xC440, 0x2E00), (230, 130, 40), (255, 158, 94))
O = PieceType("o", 4, 2, (0xCC00, 0xCC00, 0xCC00, 0xCC00), (230, 200, 40), (255, 224, 102))  # noqa: E741
S = PieceType("s", 5, 3, (0x06C0, 0x8C40, 0x6C00, 0x4620), (40, 190, 90), (94, 224, 142))
T = PieceType("t", 6, 3, (0x0E40, 0x4C40, 0x4E00, 0x4640), (150, 60, 220), (200, 119, 255))
Z = PieceType("z", 7, 3, (0x0C60, 0x4C80, 0xC600, 0x2640), (220, 50, 60), (255, 102, 119))

PIECES: Tuple[PieceType, ...] = (I, J, L, O, S, T, Z)

_BY_ID: Dict[str, PieceType] = {p.id: p for p in PIECES}
_BY_INDEX: Dict[int, PieceType] = {p.index: p for p in PIECES}


def piece_by_id(piece_id: str) -> PieceType:
    return _BY_ID[piece_id.lower()]


def piece_by_index(index: int) -> PieceType:
    return _BY_INDEX[index]


def color_for_index(index: int, falling: bool = False) -> Color:
    piece = _BY_INDEX.get(abs(index))
    if piece is None:
        return (20, 20, 26)
    return piece.color2 if falling else piece.color


@dataclass
class PieceInstance:
    """A piece on the court: its type, rotation and the top-left of its 4x4 window."""

    type: PieceType
    rotation: Direction = Direction.UP
    x: int = 0
    y: int = 0
