"""
Configuration management for dataset generation.

This module provides a configuration class that can be easily serialized for
multiprocessing and provides validation.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from hex_gen.config import (
    DATA_DIR_NAME, DEFAULT_FORMAT, DEFAULT_MAX_BOARD_DIM, DEFAULT_MAX_WORKERS,
    DEFAULT_MIN_BOARD_DIM, DEFAULT_MOVES_BEFORE_END, DEFAULT_STARTING_PLAYER,
    DEFAULT_TOTAL_GAMES, METADATA_DIR_NAME, STARTING_PLAYER_CHOICES
)
from hex_gen.enums import DatasetFormat, str_to_dataset_format


class GenerationConfig:
    """Configuration for a dataset generation run."""

    def __init__(self,
                 total_games: int = DEFAULT_TOTAL_GAMES,
                 min_board_dim: int = DEFAULT_MIN_BOARD_DIM,
                 max_board_dim: int = DEFAULT_MAX_BOARD_DIM,
                 format: str = DEFAULT_FORMAT,
                 moves_before_end: int = DEFAULT_MOVES_BEFORE_END,
                 batch_size: Optional[int] = None,
                 starting_player: str = DEFAULT_STARTING_PLAYER,
                 seed: Optional[int] = None,
                 output_root: str = ".",
                 max_workers: int = DEFAULT_MAX_WORKERS):
        """
        Initialize generation configuration.

        Args:
            total_games: Games to simulate per board dimension
            min_board_dim: Smallest board dimension (inclusive)
            max_board_dim: Largest board dimension (inclusive)
            format: Dataset row layout, "coord" or "string"
            moves_before_end: Plies to undo from each finished game
            batch_size: Games per worker chunk and per CSV append (default: total_games)
            starting_player: "blue", "red" or "random" (drawn per game)
            seed: Root seed for reproducible runs (default: OS entropy)
            output_root: Directory that holds the data/ and metadata/ directories
            max_workers: Number of worker processes to use
        """
        self.total_games = total_games
        self.min_board_dim = min_board_dim
        self.max_board_dim = max_board_dim
        self.format = format
        self.moves_before_end = moves_before_end
        self.batch_size = batch_size
        self.starting_player = starting_player
        self.seed = seed
        self.output_root = Path(output_root)
        self.max_workers = max_workers

    @property
    def data_dir(self) -> Path:
        return self.output_root / DATA_DIR_NAME

    @property
    def metadata_dir(self) -> Path:
        return self.output_root / METADATA_DIR_NAME

    @property
    def dataset_format(self) -> DatasetFormat:
        return str_to_dataset_format(self.format)

    @property
    def effective_batch_size(self) -> int:
        """Games per chunk, never larger than total_games."""
        if self.batch_size is None:
            return self.total_games
        return min(self.batch_size, self.total_games)

    def board_dims(self) -> range:
        return range(self.min_board_dim, self.max_board_dim + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for multiprocessing serialization."""
        return {
            'total_games': self.total_games,
            'min_board_dim': self.min_board_dim,
            'max_board_dim': self.max_board_dim,
            'format': self.format,
            'moves_before_end': self.moves_before_end,
            'batch_size': self.batch_size,
            'starting_player': self.starting_player,
            'seed': self.seed,
            'output_root': str(self.output_root),
            'max_workers': self.max_workers
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'GenerationConfig':
        """Create config from dictionary."""
        return cls(**config_dict)

    def validate(self) -> None:
        """Validate configuration and raise ValueError if invalid."""
        if self.total_games < 1:
            raise ValueError(f"total_games must be at least 1, got {self.total_games}")

        if self.min_board_dim < 1:
            raise ValueError(f"min_board_dim must be at least 1, got {self.min_board_dim}")

        if self.max_board_dim < self.min_board_dim:
            raise ValueError(
                f"max_board_dim ({self.max_board_dim}) must not be smaller than "
                f"min_board_dim ({self.min_board_dim})"
            )

        if self.format not in [fmt.value for fmt in DatasetFormat]:
            raise ValueError(f"Invalid format: {self.format}")

        if self.moves_before_end < 0:
            raise ValueError(f"moves_before_end must be non-negative, got {self.moves_before_end}")

        # The shortest game is a straight N-stone chain by the starting player
        shortest_game = 2 * self.min_board_dim - 1
        if self.moves_before_end > shortest_game:
            raise ValueError(
                f"moves_before_end ({self.moves_before_end}) exceeds the shortest possible "
                f"game on a {self.min_board_dim}x{self.min_board_dim} board ({shortest_game} moves)"
            )

        if self.batch_size is not None and self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")

        if self.starting_player not in STARTING_PLAYER_CHOICES:
            raise ValueError(f"Invalid starting_player: {self.starting_player}")

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

    def __repr__(self) -> str:
        """String representation of configuration."""
        return (f"GenerationConfig(total_games={self.total_games}, "
                f"board_dims={self.min_board_dim}..{self.max_board_dim}, "
                f"format='{self.format}', "
                f"moves_before_end={self.moves_before_end}, "
                f"batch_size={self.batch_size}, "
                f"starting_player='{self.starting_player}', "
                f"seed={self.seed}, "
                f"output_root='{self.output_root}', "
                f"max_workers={self.max_workers})")
