"""
CSV output for generated games.

The parent process owns the only DatasetWriter for a file, so records coming
back from parallel workers are appended by a single writer.
"""

import csv
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from hex_gen.config import NO_WINNER_LABEL
from hex_gen.enums import DatasetFormat, Player, Winner
from hex_gen.utils.format_conversion import dataset_header

from .workers import GameRecord

logger = logging.getLogger(__name__)


def player_label(player: Player) -> int:
    return player.value


def winner_label(winner: Optional[Winner]) -> int:
    """0 for BLUE, 1 for RED, -1 when the game ended without a winner."""
    if winner is None:
        return NO_WINNER_LABEL
    return winner.value


def record_to_row(record: GameRecord, fmt: DatasetFormat) -> List[Union[int, str]]:
    """Flatten a game record into one CSV row."""
    if fmt == DatasetFormat.COORD:
        board_values = [int(value) for value in record.cells]
    else:
        board_values = [record.board_string]
    return board_values + [player_label(record.starting_player), winner_label(record.winner)]


class DatasetWriter:
    """Writes the header and appends batches of game records to one dataset file."""

    def __init__(self, path: Union[str, Path], board_dim: int, fmt: DatasetFormat):
        self.path = Path(path)
        self.board_dim = board_dim
        self.fmt = fmt
        self.rows_written = 0

    def write_header(self) -> None:
        """Create the file with its header row, replacing any previous content."""
        with open(self.path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(dataset_header(self.board_dim, self.fmt))
        logger.debug(f"Created dataset file: {self.path}")

    def append_records(self, records: Iterable[GameRecord]) -> int:
        """
        Append records to the dataset.

        Returns:
            Number of rows written
        """
        count = 0
        with open(self.path, 'a', newline='') as f:
            writer = csv.writer(f)
            for record in records:
                if record.board_dim != self.board_dim:
                    raise ValueError(
                        f"Record for {record.board_dim}x{record.board_dim} board written to "
                        f"{self.board_dim}x{self.board_dim} dataset {self.path}"
                    )
                writer.writerow(record_to_row(record, self.fmt))
                count += 1
        self.rows_written += count
        logger.info(f"Writing {count} games to {self.board_dim}x{self.board_dim} dataset")
        return count
