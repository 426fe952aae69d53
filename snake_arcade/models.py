"""Data models."""

from dataclasses import dataclass, field
from enum import Enum

from .constants import START_CELL

Cell = tuple[int, int]


class GamePhase(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    OVER = "over"


@dataclass
class Snake:
    head: Cell = START_CELL
    body: list[Cell] = field(default_factory=list)

    def cells(self) -> list[Cell]:
        return [self.head, *self.body]

    def __len__(self):
        return 1 + len(self.body)
