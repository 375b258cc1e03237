"""
Centralized enum definitions for hex_gen semantic types.

This module is the single source of truth for representing players, winners,
game status and dataset formats. Other modules should import these Enums rather
than duplicating constants.
"""

from enum import Enum


class StrictEnum(Enum):
    """Base class for enums that prevent cross-type comparisons."""
    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            raise TypeError(f"Cannot compare {self.__class__.__name__} with {type(other).__name__}")
        return super().__eq__(other)

    def __hash__(self):
        """Make enums hashable so they can be used as dictionary keys."""
        return hash(self.value)


class Player(StrictEnum):
    """Player constants. BLUE ('X') joins top and bottom, RED ('O') joins left and right."""
    BLUE = 0
    RED = 1

    @property
    def opponent(self) -> "Player":
        return Player.RED if self is Player.BLUE else Player.BLUE


class Winner(StrictEnum):
    BLUE = 0
    RED = 1


class GameStatus(StrictEnum):
    """Coarse state of a single game on an engine instance."""
    EMPTY = "empty"
    PLAYING = "playing"
    WON = "won"
    FULL = "full"


class DatasetFormat(StrictEnum):
    """Row layouts for exported datasets."""
    COORD = "coord"
    STRING = "string"


# ============================================================================
# Helper Functions for Enum-Primitive Conversion
# ============================================================================

def player_to_int(player: Player) -> int:
    """Convert Player enum to integer representation."""
    return player.value


def int_to_player(player_int: int) -> Player:
    """Convert integer to Player enum."""
    if player_int not in (Player.BLUE.value, Player.RED.value):
        raise ValueError(f"Invalid player integer: {player_int}")
    return Player(player_int)


def player_to_winner(player: Player) -> Winner:
    """The Winner corresponding to a Player."""
    return Winner(player.value)


def str_to_player(name: str) -> Player:
    """Convert 'blue'/'red' (case-insensitive) to a Player."""
    mapping = {"blue": Player.BLUE, "red": Player.RED}
    key = name.strip().lower()
    if key not in mapping:
        raise ValueError(f"Invalid player name: {name}")
    return mapping[key]


def str_to_dataset_format(name: str) -> DatasetFormat:
    """Convert 'coord'/'string' to a DatasetFormat."""
    for fmt in DatasetFormat:
        if fmt.value == name:
            return fmt
    raise ValueError(f"Invalid dataset format: {name}")
