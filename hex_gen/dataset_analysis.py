"""
Dataset analysis and metadata for generated game files.

Re-reads a finished dataset to count games, distinct positions and wins per
player, and records those numbers together with the moves removed from each
game in a one-row metadata CSV.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from hex_gen.config import (
    BOARD_COLUMN, CELL_COLUMN_PREFIX, METADATA_HEADERS, WINNER_COLUMN
)
from hex_gen.enums import DatasetFormat, Winner
from hex_gen.utils.format_conversion import decode_removed_moves, encode_removed_moves

logger = logging.getLogger(__name__)


@dataclass
class DatasetSummary:
    total_games: int
    unique_games: int
    wins_player_x: int
    wins_player_o: int

    @property
    def duplicate_games(self) -> int:
        return self.total_games - self.unique_games


def load_dataset(filename: Union[str, Path]) -> pd.DataFrame:
    """Load a dataset CSV with every column kept as text."""
    return pd.read_csv(filename, dtype=str, keep_default_na=False, na_filter=False)


def board_columns(df: pd.DataFrame, fmt: DatasetFormat) -> List[str]:
    """Columns that together identify a board position."""
    if fmt == DatasetFormat.COORD:
        return [col for col in df.columns if col.startswith(CELL_COLUMN_PREFIX)]
    return [BOARD_COLUMN]


def analyze_game_file(filename: Union[str, Path], fmt: DatasetFormat) -> DatasetSummary:
    """
    Count games, unique positions and wins per player in a dataset file.

    Args:
        filename: Dataset CSV written by DatasetWriter
        fmt: Row layout of the dataset

    Returns:
        DatasetSummary for the file

    Raises:
        FileNotFoundError: If the file does not exist
    """
    filename = Path(filename)
    if not filename.exists():
        logger.error(f"Failed to open the file: {filename}")
        raise FileNotFoundError(f"Dataset file does not exist: {filename}")

    df = load_dataset(filename)
    columns = board_columns(df, fmt)
    if not columns or WINNER_COLUMN not in df.columns:
        raise ValueError(f"{filename} does not look like a {fmt.value} dataset")

    winners = df[WINNER_COLUMN].astype(int)
    summary = DatasetSummary(
        total_games=len(df),
        unique_games=len(df.drop_duplicates(subset=columns)),
        wins_player_x=int((winners == Winner.BLUE.value).sum()),
        wins_player_o=int((winners == Winner.RED.value).sum()),
    )
    logger.debug(f"Analyzed {filename}: {summary}")
    return summary


def save_metadata(metadata_filename: Union[str, Path], dataset_filename: str, board_dim: int,
                  summary: DatasetSummary, fmt: DatasetFormat, timestamp: str,
                  removed_moves_per_game: Sequence[Sequence[int]], moves_before_end: int) -> None:
    """
    Save dataset metadata, including the moves removed from every game, to a CSV file.
    """
    metadata_filename = Path(metadata_filename)
    row = [
        dataset_filename,
        f"{board_dim}x{board_dim}",
        summary.total_games,
        summary.unique_games,
        summary.wins_player_x,
        summary.wins_player_o,
        fmt.value,
        timestamp,
        moves_before_end,
        encode_removed_moves(removed_moves_per_game),
    ]
    with open(metadata_filename, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(METADATA_HEADERS)
        writer.writerow(row)
    logger.info(f"Metadata saved to {metadata_filename}")


def load_metadata(metadata_filename: Union[str, Path]) -> Dict[str, Any]:
    """Read a metadata CSV back into a dictionary with decoded removed moves."""
    df = pd.read_csv(metadata_filename, dtype=str, keep_default_na=False)
    if len(df) != 1:
        raise ValueError(f"Expected one metadata row in {metadata_filename}, found {len(df)}")
    metadata = df.iloc[0].to_dict()
    for key in ("Total Games", "Unique Games", "Player X Wins", "Player O Wins", "Moves Before End"):
        metadata[key] = int(metadata[key])
    metadata["Removed Moves"] = decode_removed_moves(metadata["Removed Moves"])
    return metadata
