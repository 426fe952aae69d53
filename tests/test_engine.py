"""
Tests for engine.py - movement, collision, food placement and speed rules.
"""

import random

import pytest

from snake_arcade.constants import CELL_SIZE, DIRECTIONS, STILL
from snake_arcade.engine import (
    BoardFull,
    SnakeArcadeError,
    advance,
    check_collision,
    grow,
    is_reverse,
    place_food,
    speed_for_score,
    vacated_cell,
)
from snake_arcade.grid import in_bounds, to_pixels
from snake_arcade.models import Snake


class TestGrid:
    def test_corners_are_in_bounds(self):
        assert in_bounds((0, 0))
        assert in_bounds((19, 19))

    def test_cells_outside_are_out_of_bounds(self):
        assert not in_bounds((-1, 0))
        assert not in_bounds((0, -1))
        assert not in_bounds((20, 5))
        assert not in_bounds((5, 20))

    def test_to_pixels_scales_by_cell_size(self):
        assert CELL_SIZE == 25
        assert to_pixels((5, 5)) == (125, 125)
        assert to_pixels((6, 5)) == (150, 125)


class TestAdvance:
    def test_head_only_snake_moves_head(self):
        snake = Snake(head=(5, 5))
        moved = advance(snake, DIRECTIONS["right"])
        assert moved.head == (6, 5)
        assert moved.body == []

    def test_body_follows_head_in_order(self):
        """Each segment takes the cell of the one ahead of it."""
        snake = Snake(head=(5, 5), body=[(4, 5), (3, 5), (3, 6)])
        moved = advance(snake, DIRECTIONS["up"])
        assert moved.head == (5, 4)
        assert moved.body == [(5, 5), (4, 5), (3, 5)]

    def test_advance_does_not_mutate_input(self):
        snake = Snake(head=(5, 5), body=[(4, 5)])
        advance(snake, DIRECTIONS["right"])
        assert snake.head == (5, 5)
        assert snake.body == [(4, 5)]

    def test_still_heading_keeps_head_in_place(self):
        moved = advance(Snake(head=(5, 5)), STILL)
        assert moved.head == (5, 5)

    def test_vacated_cell_is_tail(self):
        assert vacated_cell(Snake(head=(5, 5), body=[(4, 5), (3, 5)])) == (3, 5)
        assert vacated_cell(Snake(head=(5, 5))) == (5, 5)

    def test_grow_appends_at_tail(self):
        snake = Snake(head=(6, 5), body=[(5, 5)])
        grow(snake, (4, 5))
        assert snake.cells() == [(6, 5), (5, 5), (4, 5)]
        assert len(snake) == 3


class TestCollision:
    def test_no_collision_inside_board(self):
        assert check_collision(Snake(head=(6, 5))) is None

    @pytest.mark.parametrize("head", [(-1, 0), (20, 0), (0, -1), (0, 20)])
    def test_wall_collision(self, head):
        assert check_collision(Snake(head=head)) == "wall"

    def test_self_collision(self):
        snake = Snake(head=(5, 5), body=[(5, 6), (4, 6), (4, 5), (5, 5)])
        assert check_collision(snake) == "self"

    def test_following_own_tail_is_safe(self):
        """The tail cell is freed by the same move, so chasing it is legal."""
        snake = Snake(head=(5, 5), body=[(5, 6), (4, 6), (4, 5)])
        moved = advance(snake, DIRECTIONS["left"])
        assert moved.head == (4, 5)
        assert check_collision(moved) is None

    def test_collision_check_runs_on_moved_snake(self):
        """A head at the edge is only fatal once it has moved off the board."""
        snake = Snake(head=(0, 0))
        assert check_collision(snake) is None
        assert check_collision(advance(snake, DIRECTIONS["left"])) == "wall"


class TestReverse:
    def test_exact_reverse_is_detected(self):
        for name, opposite in (("up", "down"), ("left", "right")):
            assert is_reverse(DIRECTIONS[name], DIRECTIONS[opposite])
            assert is_reverse(DIRECTIONS[opposite], DIRECTIONS[name])

    def test_turns_and_same_direction_are_allowed(self):
        assert not is_reverse(DIRECTIONS["up"], DIRECTIONS["left"])
        assert not is_reverse(DIRECTIONS["up"], DIRECTIONS["up"])

    def test_anything_allowed_from_still(self):
        for heading in DIRECTIONS.values():
            assert not is_reverse(STILL, heading)


class TestPlaceFood:
    def test_food_avoids_occupied_cells(self):
        rng = random.Random(3)
        occupied = {(x, y) for x in range(20) for y in range(20) if (x, y) != (7, 11)}
        assert place_food(occupied, rng=rng) == (7, 11)

    def test_food_is_inside_board(self):
        rng = random.Random(1)
        for _ in range(200):
            cell = place_food({(5, 5)}, rng=rng)
            assert in_bounds(cell)
            assert cell != (5, 5)

    def test_full_board_raises(self):
        occupied = {(x, y) for x in range(3) for y in range(3)}
        with pytest.raises(BoardFull):
            place_food(occupied, width=3, height=3)

    def test_board_full_is_a_snake_arcade_error(self):
        assert issubclass(BoardFull, SnakeArcadeError)


class TestSpeed:
    def test_progression(self):
        assert speed_for_score(0) == 100
        assert speed_for_score(10) == 95
        assert speed_for_score(20) == 90

    def test_floor(self):
        assert speed_for_score(100) == 50
        assert speed_for_score(1000) == 50

    def test_monotonic_non_increasing(self):
        speeds = [speed_for_score(score) for score in range(0, 500, 10)]
        assert all(a >= b for a, b in zip(speeds, speeds[1:]))
        assert min(speeds) >= 50
