"""Movement, collision, food placement and speed rules.

Everything here is a plain function over values so the per-tick ordering in
``GameState.tick`` (move, then check, then eat) can be tested piece by piece.
"""

import random
from typing import Optional

from .constants import GRID_W, GRID_H, INITIAL_SPEED, MIN_SPEED, SPEED_INCREMENT, STILL
from .grid import in_bounds
from .models import Cell, Snake


class SnakeArcadeError(Exception):
    pass


class BoardFull(SnakeArcadeError):
    """Raised when there is no free cell left to put food on."""


def advance(snake: Snake, heading: tuple[int, int]) -> Snake:
    """Return the snake moved one step along ``heading``.

    Every body segment takes the cell of the segment ahead of it, the first
    one taking the old head cell. The input snake is left untouched.
    """
    dx, dy = heading
    hx, hy = snake.head
    body = [snake.head, *snake.body[:-1]] if snake.body else []
    return Snake(head=(hx + dx, hy + dy), body=body)


def vacated_cell(snake: Snake) -> Cell:
    """Cell freed when ``snake`` takes its next step."""
    return snake.body[-1] if snake.body else snake.head


def grow(snake: Snake, tail: Cell) -> None:
    """Lengthen ``snake`` by one segment after it ate.

    ``tail`` is the cell the tail just left (see ``vacated_cell``), so the
    old tail stays occupied for one more tick. Appending the food cell
    instead would stack the new segment on the head until the next move;
    from the next tick on both give the same body.
    """
    snake.body.append(tail)


def check_collision(snake: Snake, width: int = GRID_W, height: int = GRID_H) -> Optional[str]:
    if not in_bounds(snake.head, width, height):
        return "wall"
    if snake.head in snake.body:
        return "self"
    return None


def is_reverse(current: tuple[int, int], new: tuple[int, int]) -> bool:
    if current == STILL:
        return False
    return (new[0], new[1]) == (-current[0], -current[1])


def place_food(occupied, width: int = GRID_W, height: int = GRID_H, rng=random) -> Cell:
    """Pick a random free cell by rejection sampling."""
    occupied = set(occupied)
    if len(occupied) >= width * height:
        raise BoardFull(f"no free cell on a {width}x{height} board")
    while True:
        cell = (rng.randrange(width), rng.randrange(height))
        if cell not in occupied:
            return cell


def speed_for_score(score: int) -> float:
    return float(max(MIN_SPEED, INITIAL_SPEED - score * SPEED_INCREMENT))
