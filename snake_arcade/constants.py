"""Game constants."""

GRID_W, GRID_H = 20, 20
CELL_SIZE = 25
START_CELL = (5, 5)

INITIAL_SPEED = 100
MIN_SPEED = 50
SPEED_INCREMENT = 0.5
SCORE_PER_FOOD = 10

HIGH_SCORE_KEY = "highScore"

STILL = (0, 0)
DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

KEY_BINDINGS = {
    "ArrowUp": "up",
    "ArrowDown": "down",
    "ArrowLeft": "left",
    "ArrowRight": "right",
}
