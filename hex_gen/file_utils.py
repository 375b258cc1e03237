"""
File handling utilities for dataset generation.

This module provides:
- Graceful shutdown handling for long-running generation runs
- Output directory creation
- Timestamps for dataset and metadata names
- Collision-free dataset paths
"""

import logging
import signal
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class GracefulShutdown:
    """Handle graceful shutdown on SIGTERM/SIGINT."""

    def __init__(self):
        self.shutdown_requested = False
        self.signal_count = 0

        # Register signal handlers
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, signum, frame):
        self.signal_count += 1
        if self.signal_count == 1:
            logger.info(f"Received signal {signum} - finishing current batch before stopping...")
            self.shutdown_requested = True
        else:
            logger.warning(f"Received signal {signum} again - forcing exit!")
            sys.exit(1)


def ensure_directory_exists(directory: Union[str, Path]) -> bool:
    """
    Create a directory (and parents) if it does not exist yet.

    Returns:
        True if the directory was created, False if it already existed
    """
    directory = Path(directory)
    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"{directory} exists and is not a directory")
        return False
    logger.info(f"Creating directory: {directory}")
    directory.mkdir(parents=True, exist_ok=True)
    return True


def generate_timestamp(detailed: bool = False, now: Optional[datetime] = None) -> str:
    """
    Timestamp for file names and metadata.

    Args:
        detailed: If True, return YYYYmmdd:HHMMSS.mmm; otherwise HHMMSS
        now: Time to format (default: current local time)
    """
    now = now or datetime.now()
    if detailed:
        return now.strftime("%Y%m%d:%H%M%S") + f".{now.microsecond // 1000:03d}"
    return now.strftime("%H%M%S")


def get_unique_path(base_path: Path) -> Path:
    """
    Get a path that won't overwrite an existing file.

    Returns base_path if it doesn't exist; otherwise appends _1, _2, ... to the
    stem until an unused name is found.

    Example:
        If "5x5_1000_coord_101500_0.csv" exists, returns "5x5_1000_coord_101500_0_1.csv"
    """
    if not base_path.exists():
        return base_path

    stem = base_path.stem
    suffix = base_path.suffix
    counter = 1
    new_path = base_path.parent / f"{stem}_{counter}{suffix}"
    while new_path.exists():
        counter += 1
        new_path = base_path.parent / f"{stem}_{counter}{suffix}"
    return new_path
