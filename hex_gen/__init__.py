"""
hex_gen: random Hex game simulation and dataset generation

Plays uniformly random Hex games with an incremental win-detection engine and
exports final or near-final positions as CSV datasets for classifier training.
"""

# Version info
__version__ = "2025.1.0"

# Core modules that should be available
__all__ = [
    "engine",
    "generation",
    "dataset_analysis",
    "HexEngine",
]

# Import core modules - let import errors propagate
from . import engine
from . import generation
from . import dataset_analysis
from .engine import HexEngine
