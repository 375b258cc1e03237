"""
Error handling utilities for hex_gen.

This module provides the engine's exception taxonomy and failure reporting for
dataset generation runs.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

logger = logging.getLogger(__name__)


class HexEngineError(Exception):
    """Base class for engine contract violations."""
    pass


class ExhaustedBoardError(HexEngineError):
    """Raised when a stone is placed on a board with no open cells."""
    pass


class InsufficientHistoryError(HexEngineError):
    """Raised when more moves are undone than have been played."""
    pass


class RewoundBoardError(HexEngineError):
    """Raised when play resumes on a board that has been rewound with undo."""
    pass


def check_generation_errors(results: List[Dict[str, Any]], error_log_dir: Union[str, Path]) -> None:
    """
    Checks chunk results after a generation run. If any chunk failed, writes an
    error log and raises RuntimeError.

    Args:
        results: Chunk result dictionaries ('success', 'error', 'chunk_idx', 'board_dim')
        error_log_dir: Directory to write error.log
    """
    failures = [r for r in results if not r['success']]
    if not failures:
        return

    error_log_dir = Path(error_log_dir)
    error_log_dir.mkdir(parents=True, exist_ok=True)
    log_path = error_log_dir / "error.log"
    with open(log_path, "w") as f:
        f.write("Game generation error summary:\n")
        f.write(f"Chunks attempted: {len(results)}\n")
        f.write(f"Chunks with errors: {len(failures)}\n\n")
        f.write("Details:\n")
        for failure in failures:
            f.write(f"{failure.get('board_dim')}x{failure.get('board_dim')} "
                    f"chunk {failure.get('chunk_idx')}: {failure.get('error')}\n")

    logger.error(f"{len(failures)} of {len(results)} chunks failed; see {log_path}")
    raise RuntimeError(
        f"Game generation failed: {len(failures)} out of {len(results)} chunks failed. "
        f"See error log at {log_path} for details."
    )
