import random
import unittest

from blockfall.game import PIECES, Board, Direction, for_each_cell, is_occupied, is_unoccupied
from blockfall.game import pieces


def expected_occupied(board, piece_type, x, y, rotation):
    bits = format(piece_type.blocks[rotation], '016b')
    for i, b in enumerate(bits):
        if b != '1':
            continue
        cx, cy = x + i % 4, y + i // 4
        if cx < 0 or cx >= board.width or cy < 0 or cy >= board.height:
            return True
        if board.get_cell(cx, cy) is not None:
            return True
    return False


class TestBounds(unittest.TestCase):
    def setUp(self):
        self.board = Board(10, 20)

    def test_left_and_right_walls(self):
        b = self.board
        self.assertTrue(is_occupied(b, pieces.I, -1, 0, Direction.UP))
        self.assertFalse(is_occupied(b, pieces.I, 0, 0, Direction.UP))
        self.assertFalse(is_occupied(b, pieces.I, 6, 0, Direction.UP))
        self.assertTrue(is_occupied(b, pieces.I, 7, 0, Direction.UP))

    def test_empty_window_columns_may_hang_outside(self):
        # I facing LEFT only uses column 1 of its window
        self.assertTrue(is_unoccupied(self.board, pieces.I, -1, 0, Direction.LEFT))
        self.assertTrue(is_occupied(self.board, pieces.I, -2, 0, Direction.LEFT))

    def test_floor_and_ceiling(self):
        b = self.board
        self.assertFalse(is_occupied(b, pieces.I, 0, 18, Direction.UP))
        self.assertTrue(is_occupied(b, pieces.I, 0, 19, Direction.UP))
        self.assertTrue(is_occupied(b, pieces.O, 0, -1, Direction.UP))
        self.assertFalse(is_occupied(b, pieces.I, 0, -1, Direction.UP))

    def test_board_cells(self):
        b = self.board
        b.set_cell(5, 10, pieces.Z)
        self.assertTrue(is_occupied(b, pieces.O, 4, 9, Direction.UP))
        self.assertTrue(is_occupied(b, pieces.O, 5, 10, Direction.UP))
        self.assertFalse(is_occupied(b, pieces.O, 6, 10, Direction.UP))
        self.assertFalse(is_occupied(b, pieces.O, 3, 9, Direction.UP))


class TestRandomBoards(unittest.TestCase):
    def test_occupied_matches_definition(self):
        rng = random.Random(1234)
        for _ in range(50):
            board = Board(rng.randint(4, 12), rng.randint(4, 22))
            density = rng.random()
            for y in range(board.height):
                for x in range(board.width):
                    if rng.random() < density * 0.5:
                        board.set_cell(x, y, rng.choice(PIECES))
            for _ in range(100):
                p = rng.choice(PIECES)
                rotation = Direction(rng.randrange(4))
                x = rng.randint(-4, board.width)
                y = rng.randint(-4, board.height)
                want = expected_occupied(board, p, x, y, rotation)
                self.assertEqual(want, is_occupied(board, p, x, y, rotation))
                self.assertEqual(not want, is_unoccupied(board, p, x, y, rotation))


class TestForEachCell(unittest.TestCase):
    def test_visits_four_cells(self):
        for p in PIECES:
            for rotation in Direction:
                visited = []
                for_each_cell(p, 2, 3, rotation, lambda x, y: visited.append((x, y)))
                self.assertEqual(4, len(visited))
                self.assertEqual(4, len(set(visited)))
                self.assertEqual(sorted(visited, key=lambda c: (c[1], c[0])), visited)


if __name__ == '__main__':
    unittest.main()
