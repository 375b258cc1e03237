"""
Tests for dataset writing, analysis and metadata.
"""

import csv
import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest

from hex_gen.config import METADATA_HEADERS
from hex_gen.dataset_analysis import (
    DatasetSummary, analyze_game_file, load_dataset, load_metadata, save_metadata
)
from hex_gen.enums import DatasetFormat, Player, Winner
from hex_gen.generation.workers import GameRecord
from hex_gen.generation.writer import DatasetWriter, record_to_row, winner_label


def make_record(cells, board_string, winner, starting_player=Player.BLUE, removed=None):
    return GameRecord(
        board_dim=2,
        cells=np.array(cells, dtype=np.int8),
        board_string=board_string,
        starting_player=starting_player,
        winner=winner,
        num_moves=int(np.count_nonzero(cells)),
        removed_moves=removed or [],
    )


RECORDS = [
    make_record([1, -1, 1, 0], "XOX ", Winner.BLUE),
    make_record([1, -1, 1, 0], "XOX ", Winner.BLUE),
    make_record([-1, -1, 1, 0], "OOX ", Winner.RED, starting_player=Player.RED),
    make_record([0, 0, 0, 0], "    ", None),
]


class TestDatasetFiles:
    """Write small datasets and read them back."""

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def teardown_method(self):
        shutil.rmtree(self.temp_dir)

    def write(self, fmt, records=RECORDS):
        path = self.temp_dir / f"2x2_{fmt.value}.csv"
        writer = DatasetWriter(path, 2, fmt)
        writer.write_header()
        writer.append_records(records[:2])
        writer.append_records(records[2:])
        assert writer.rows_written == len(records)
        return path

    def test_coord_layout(self):
        path = self.write(DatasetFormat.COORD)
        with open(path, newline='') as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["cell0_0", "cell0_1", "cell1_0", "cell1_1", "starting_player", "winner"]
        assert rows[1] == ["1", "-1", "1", "0", "0", "0"]
        assert rows[3] == ["-1", "-1", "1", "0", "1", "1"]
        assert rows[4] == ["0", "0", "0", "0", "0", "-1"]

    def test_string_layout_keeps_spaces(self):
        path = self.write(DatasetFormat.STRING)
        df = load_dataset(path)
        assert list(df.columns) == ["board", "starting_player", "winner"]
        assert list(df["board"]) == ["XOX ", "XOX ", "OOX ", "    "]

    @pytest.mark.parametrize("fmt", [DatasetFormat.COORD, DatasetFormat.STRING])
    def test_analyze_counts(self, fmt):
        path = self.write(fmt)
        summary = analyze_game_file(path, fmt)
        assert summary == DatasetSummary(total_games=4, unique_games=3, wins_player_x=2, wins_player_o=1)
        assert summary.duplicate_games == 1

    def test_analyze_header_only(self):
        path = self.write(DatasetFormat.COORD, records=[])
        summary = analyze_game_file(path, DatasetFormat.COORD)
        assert summary.total_games == 0
        assert summary.unique_games == 0

    def test_analyze_missing_file(self):
        with pytest.raises(FileNotFoundError):
            analyze_game_file(self.temp_dir / "missing.csv", DatasetFormat.COORD)

    def test_analyze_wrong_format(self):
        path = self.write(DatasetFormat.STRING)
        with pytest.raises(ValueError):
            analyze_game_file(path, DatasetFormat.COORD)

    def test_writer_rejects_other_dimensions(self):
        path = self.temp_dir / "3x3.csv"
        writer = DatasetWriter(path, 3, DatasetFormat.COORD)
        writer.write_header()
        with pytest.raises(ValueError):
            writer.append_records(RECORDS[:1])

    def test_metadata_round_trip(self):
        path = self.write(DatasetFormat.COORD)
        summary = analyze_game_file(path, DatasetFormat.COORD)
        metadata_path = self.temp_dir / f"metadata_{path.name}"
        removed = [[3], [1], [0, 2], []]
        save_metadata(metadata_path, path.name, 2, summary, DatasetFormat.COORD,
                      "20241018:120000.000", removed, 1)

        with open(metadata_path, newline='') as f:
            rows = list(csv.reader(f))
        assert rows[0] == METADATA_HEADERS
        assert rows[1][1] == "2x2"
        assert rows[1][-1] == "{{3},{1},{0,2},{}}"

        metadata = load_metadata(metadata_path)
        assert metadata["Filename"] == path.name
        assert metadata["Total Games"] == 4
        assert metadata["Unique Games"] == 3
        assert metadata["Player X Wins"] == 2
        assert metadata["Player O Wins"] == 1
        assert metadata["Format"] == "coord"
        assert metadata["Timestamp"] == "20241018:120000.000"
        assert metadata["Moves Before End"] == 1
        assert metadata["Removed Moves"] == removed


def test_row_helpers():
    assert winner_label(None) == -1
    assert winner_label(Winner.RED) == 1
    assert record_to_row(RECORDS[2], DatasetFormat.STRING) == ["OOX ", 1, 1]
    assert record_to_row(RECORDS[0], DatasetFormat.COORD) == [1, -1, 1, 0, 0, 0]
