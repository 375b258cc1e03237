"""
Command-line interface for dataset generation.

This module provides the CLI functionality for generating random Hex game
datasets, separating the command-line logic from the core generation logic.
"""

import argparse
import logging
import sys
from pathlib import Path

from hex_gen.config import (
    DEFAULT_FORMAT, DEFAULT_LOG_FILE, DEFAULT_MAX_BOARD_DIM, DEFAULT_MAX_WORKERS,
    DEFAULT_MIN_BOARD_DIM, DEFAULT_MOVES_BEFORE_END, DEFAULT_STARTING_PLAYER,
    DEFAULT_TOTAL_GAMES, STARTING_PLAYER_CHOICES
)
from hex_gen.enums import DatasetFormat
from hex_gen.file_utils import GracefulShutdown

from .config import GenerationConfig
from .processor import DatasetGenerator

logger = logging.getLogger(__name__)


def setup_logging(log_file: str = DEFAULT_LOG_FILE, verbose: bool = False):
    """Configure logging for the CLI."""
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Generate datasets of uniformly random Hex games")
    parser.add_argument("--total-games", type=int, default=DEFAULT_TOTAL_GAMES, help="Games to simulate per board dimension")
    parser.add_argument("--min-board-dim", type=int, default=DEFAULT_MIN_BOARD_DIM, help="Smallest board dimension")
    parser.add_argument("--max-board-dim", type=int, default=DEFAULT_MAX_BOARD_DIM, help="Largest board dimension")
    parser.add_argument("--format", default=DEFAULT_FORMAT, choices=[fmt.value for fmt in DatasetFormat], help="Dataset row layout")
    parser.add_argument("--moves-before-end", type=int, default=DEFAULT_MOVES_BEFORE_END, help="Plies to undo from the end of every game")
    parser.add_argument("--batch-size", type=int, help="Games per worker chunk and CSV append (default: all games in one chunk)")
    parser.add_argument("--starting-player", default=DEFAULT_STARTING_PLAYER, choices=STARTING_PLAYER_CHOICES, help="Player who moves first")
    parser.add_argument("--seed", type=int, help="Root random seed for reproducible datasets")
    parser.add_argument("--output-root", default=".", help="Directory that receives data/ and metadata/")
    parser.add_argument("--max-workers", type=int, default=DEFAULT_MAX_WORKERS, help=f"Number of worker processes to use (default: {DEFAULT_MAX_WORKERS})")
    parser.add_argument("--sequential", action="store_true", help="Simulate in a single process (for debugging)")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE, help="Log file path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def create_config_from_args(args):
    """Create GenerationConfig from parsed arguments."""
    return GenerationConfig(
        total_games=args.total_games,
        min_board_dim=args.min_board_dim,
        max_board_dim=args.max_board_dim,
        format=args.format,
        moves_before_end=args.moves_before_end,
        batch_size=args.batch_size,
        starting_player=args.starting_player,
        seed=args.seed,
        output_root=args.output_root,
        max_workers=1 if args.sequential else args.max_workers
    )


def print_output_summary(config, summaries):
    """Print summary of output files."""
    logger.info("")
    logger.info("OUTPUT FILES:")
    for entry in summaries:
        logger.info(f"  Dataset: {entry['dataset_path']}")
        logger.info(f"  Metadata: {entry['metadata_path']}")
    logger.info(f"  Error log (if any): {config.metadata_dir / 'error.log'}")
    logger.info("")


def main(argv=None):
    """Main CLI entry point."""
    args = parse_arguments(argv)

    # Setup logging
    setup_logging(args.log_file, args.verbose)

    # Create configuration
    config = create_config_from_args(args)
    logger.info(f"Configuration: {config}")

    # Create shutdown handler
    shutdown_handler = GracefulShutdown()

    try:
        generator = DatasetGenerator(config, shutdown_handler=shutdown_handler)
        summaries = generator.generate_all()

        print_output_summary(config, summaries)

        # Final status report
        if shutdown_handler.shutdown_requested:
            logger.warning("Generation stopped early after shutdown request; datasets are incomplete")
            sys.exit(1)
        else:
            logger.info("Generation completed successfully")

    except KeyboardInterrupt:
        logger.info("Generation interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Generation failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
