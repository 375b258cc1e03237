"""
Dataset generation module

This module provides multiprocessing capabilities for simulating random Hex
games and exporting them as CSV datasets with metadata.
"""

from .config import GenerationConfig
from .processor import DatasetGenerator, ParallelGenerator, SequentialGenerator
from .workers import GameRecord, generate_games_worker, simulate_game
from .writer import DatasetWriter
from .cli import main

__all__ = [
    'GenerationConfig',
    'DatasetGenerator',
    'ParallelGenerator',
    'SequentialGenerator',
    'GameRecord',
    'generate_games_worker',
    'simulate_game',
    'DatasetWriter',
    'main'
]
