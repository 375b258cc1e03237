"""
Format conversion utilities for hex_gen.

This module provides utilities for converting between the coordinate systems
used by the engine (logical and padded indices, row/col pairs) and the text
layouts used by the exported datasets.
"""

import logging
import re
from typing import List, Sequence, Tuple

from hex_gen.config import (
    BOARD_COLUMN, CELL_COLUMN_PREFIX, STARTING_PLAYER_COLUMN, WINNER_COLUMN
)
from hex_gen.enums import DatasetFormat

logger = logging.getLogger(__name__)


# --- Index conversion ---

def padded_width(board_dim: int) -> int:
    """Width of the sentinel-padded grid."""
    return board_dim + 2


def logical_to_rowcol(position: int, board_dim: int) -> Tuple[int, int]:
    """Convert a logical index to (row, col) on the playable area."""
    if not (0 <= position < board_dim * board_dim):
        raise ValueError(f"Logical position {position} out of range for {board_dim}x{board_dim} board")
    return position // board_dim, position % board_dim


def rowcol_to_logical(row: int, col: int, board_dim: int) -> int:
    """Convert (row, col) on the playable area to a logical index."""
    if not (0 <= row < board_dim and 0 <= col < board_dim):
        raise ValueError(f"Cell ({row}, {col}) out of range for {board_dim}x{board_dim} board")
    return row * board_dim + col


def logical_to_padded(position: int, board_dim: int) -> int:
    """Convert a logical index to its index on the padded grid."""
    row, col = logical_to_rowcol(position, board_dim)
    return (row + 1) * padded_width(board_dim) + (col + 1)


def padded_to_logical(padded: int, board_dim: int) -> int:
    """Convert a padded-grid index of a playable cell to its logical index."""
    width = padded_width(board_dim)
    row = padded // width - 1
    col = padded % width - 1
    if not (0 <= row < board_dim and 0 <= col < board_dim):
        raise ValueError(f"Padded index {padded} is a border cell on a {board_dim}x{board_dim} board")
    return row * board_dim + col


# --- Dataset layout ---

def cell_column_names(board_dim: int) -> List[str]:
    """Column names cell<row>_<col> in row-major order."""
    return [f"{CELL_COLUMN_PREFIX}{row}_{col}"
            for row in range(board_dim)
            for col in range(board_dim)]


def dataset_header(board_dim: int, fmt: DatasetFormat) -> List[str]:
    """
    Header row for a dataset file.

    Args:
        board_dim: Board dimension N
        fmt: Row layout of the dataset

    Returns:
        List of column names
    """
    if fmt == DatasetFormat.COORD:
        board_columns = cell_column_names(board_dim)
    else:
        board_columns = [BOARD_COLUMN]
    return board_columns + [STARTING_PLAYER_COLUMN, WINNER_COLUMN]


def encode_removed_moves(removed_moves_per_game: Sequence[Sequence[int]]) -> str:
    """Encode removed moves as {{a,b},{c,d}}, one inner group per game."""
    groups = ["{" + ",".join(str(move) for move in moves) + "}"
              for moves in removed_moves_per_game]
    return "{" + ",".join(groups) + "}"


_GROUP_PATTERN = re.compile(r"\{([^{}]*)\}")


def decode_removed_moves(encoded: str) -> List[List[int]]:
    """Inverse of encode_removed_moves."""
    encoded = encoded.strip()
    if not (encoded.startswith("{") and encoded.endswith("}")):
        raise ValueError(f"Invalid removed moves encoding: {encoded}")
    inner = encoded[1:-1]
    groups = []
    for match in _GROUP_PATTERN.finditer(inner):
        body = match.group(1)
        groups.append([int(move) for move in body.split(",")] if body else [])
    return groups
