"""
Random seed utilities for deterministic behavior.
"""

from typing import List, Optional

import numpy as np


def spawn_seed_sequences(seed: Optional[int], count: int) -> List[np.random.SeedSequence]:
    """
    Derive independent child seed sequences, one per worker chunk.

    Children of one SeedSequence produce statistically independent streams, so
    parallel workers never generate correlated games.

    Args:
        seed: Root seed, or None for fresh OS entropy
        count: Number of children to spawn

    Returns:
        List of picklable SeedSequence objects
    """
    return np.random.SeedSequence(seed).spawn(count)


def make_generator(seed_sequence: Optional[np.random.SeedSequence] = None) -> np.random.Generator:
    """Create a private Generator for one worker."""
    return np.random.default_rng(seed_sequence)
