"""Playing field geometry."""

from .constants import GRID_W, GRID_H, CELL_SIZE
from .models import Cell


def in_bounds(cell: Cell, width: int = GRID_W, height: int = GRID_H) -> bool:
    x, y = cell
    return 0 <= x < width and 0 <= y < height


def to_pixels(cell: Cell, cell_size: int = CELL_SIZE) -> tuple[int, int]:
    x, y = cell
    return x * cell_size, y * cell_size


def cells_to_list(cells) -> list[list[int]]:
    return [[x, y] for x, y in cells]
