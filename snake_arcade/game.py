"""Core game state and logic."""

import logging
import random
from typing import Callable, Optional

from .constants import (
    GRID_W, GRID_H, CELL_SIZE, START_CELL, INITIAL_SPEED, SCORE_PER_FOOD,
    STILL, DIRECTIONS, KEY_BINDINGS,
)
from .engine import BoardFull, advance, check_collision, grow, is_reverse, place_food, speed_for_score, vacated_cell
from .highscore import MemoryStore, load_high_score, save_high_score
from .models import Cell, GamePhase, Snake

logger = logging.getLogger(__name__)

# Receives the current tick interval in ms, or None when ticking should stop.
IntervalListener = Callable[[Optional[float]], None]


class GameState:
    def __init__(self, store=None, rng=None, width: int = GRID_W, height: int = GRID_H):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self.store = store if store is not None else MemoryStore()
        self.high_score = load_high_score(self.store)
        self.interval_listeners: list[IntervalListener] = []
        self._init_round()

    def _init_round(self):
        self.phase = GamePhase.NOT_STARTED
        self.snake = Snake(head=START_CELL)
        self.heading = STILL
        self.food: Optional[Cell] = None
        self.score = 0
        self.speed = float(INITIAL_SPEED)
        self.won = False
        self.crash_reason: Optional[str] = None

    def use_store(self, store):
        """Swap the durable store and reload the high score from it."""
        self.store = store
        self.high_score = load_high_score(store)

    def add_interval_listener(self, listener: IntervalListener):
        self.interval_listeners.append(listener)

    def remove_interval_listener(self, listener: IntervalListener):
        if listener in self.interval_listeners:
            self.interval_listeners.remove(listener)

    def _notify_interval(self, interval: Optional[float]):
        for listener in list(self.interval_listeners):
            listener(interval)

    @property
    def show_restart(self) -> bool:
        return self.phase == GamePhase.OVER

    def start(self) -> bool:
        if self.phase != GamePhase.NOT_STARTED:
            return False
        self.phase = GamePhase.RUNNING
        self.food = place_food(self.snake.cells(), self.width, self.height, self.rng)
        logger.info("Game started, food at %s", self.food)
        self._notify_interval(self.speed)
        return True

    def reset(self):
        self._notify_interval(None)
        self._init_round()
        logger.info("Game reset (high score %d)", self.high_score)

    def handle_input(self, direction: str) -> bool:
        """Turn the snake. Ignored unless running, and never straight back."""
        if self.phase != GamePhase.RUNNING:
            return False
        heading = DIRECTIONS.get(direction)
        if heading is None or is_reverse(self.heading, heading):
            return False
        self.heading = heading
        return True

    def handle_key(self, code: str) -> bool:
        direction = KEY_BINDINGS.get(code)
        if direction is None:
            return False
        return self.handle_input(direction)

    def tick(self) -> Optional[str]:
        if self.phase != GamePhase.RUNNING:
            return None

        tail = vacated_cell(self.snake)
        self.snake = advance(self.snake, self.heading)

        reason = check_collision(self.snake, self.width, self.height)
        if reason:
            self.crash_reason = reason
            self._end_game()
            return "crashed"

        if self.snake.head != self.food:
            return "moved"

        grow(self.snake, tail)
        try:
            self.food = place_food(self.snake.cells(), self.width, self.height, self.rng)
        except BoardFull:
            self.food = None
            self.won = True
        self.on_food_eaten()
        if self.won:
            self._end_game()
            return "won"
        return "ate"

    def on_food_eaten(self):
        self.score += SCORE_PER_FOOD
        speed = speed_for_score(self.score)
        if speed != self.speed:
            self.speed = speed
            logger.debug("Score %d, tick interval now %.1fms", self.score, speed)
            if self.phase == GamePhase.RUNNING and not self.won:
                self._notify_interval(speed)
        self._record_high_score()

    def _record_high_score(self):
        if self.score > self.high_score:
            self.high_score = self.score
            save_high_score(self.store, self.high_score)

    def _end_game(self):
        self.phase = GamePhase.OVER
        self._notify_interval(None)
        self._record_high_score()
        if self.won:
            logger.info("Board filled, game won with score %d", self.score)
        else:
            logger.info("Game over (%s) with score %d", self.crash_reason, self.score)

    def snapshot(self) -> dict:
        return {
            "grid": [self.width, self.height],
            "cell_size": CELL_SIZE,
            "snake": self.snake.cells(),
            "food": self.food,
            "heading": self.heading,
            "score": self.score,
            "high_score": self.high_score,
            "speed": self.speed,
            "phase": self.phase.value,
            "show_restart": self.show_restart,
            "won": self.won,
        }
