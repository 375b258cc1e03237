"""
Configuration constants and settings for the hex_gen project.

This module contains the constants used throughout the project, including
generation defaults, dataset labels and output locations.
"""

from hex_gen.enums import DatasetFormat

# Output locations
DATA_DIR_NAME = "data"
METADATA_DIR_NAME = "metadata"
DEFAULT_LOG_FILE = "logs/hex_generation.log"

# Generation defaults
DEFAULT_TOTAL_GAMES = 200000
DEFAULT_MIN_BOARD_DIM = 3
DEFAULT_MAX_BOARD_DIM = 15
DEFAULT_FORMAT = DatasetFormat.COORD.value
DEFAULT_MOVES_BEFORE_END = 0
DEFAULT_STARTING_PLAYER = "blue"
DEFAULT_MAX_WORKERS = 6

STARTING_PLAYER_CHOICES = ["blue", "red", "random"]

# Cell values in the coord projection
BLUE_CELL = 1
RED_CELL = -1
EMPTY_CELL = 0

# Cell symbols in the string projection
BLUE_SYMBOL = "X"
RED_SYMBOL = "O"
EMPTY_SYMBOL = " "
GRID_EMPTY_SYMBOL = "."

# Dataset labels
NO_WINNER_LABEL = -1
STARTING_PLAYER_COLUMN = "starting_player"
WINNER_COLUMN = "winner"
BOARD_COLUMN = "board"
CELL_COLUMN_PREFIX = "cell"

METADATA_HEADERS = [
    "Filename",
    "Board Dimension",
    "Total Games",
    "Unique Games",
    "Player X Wins",
    "Player O Wins",
    "Format",
    "Timestamp",
    "Moves Before End",
    "Removed Moves",
]
