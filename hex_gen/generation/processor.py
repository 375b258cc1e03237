"""
Processing orchestrators for dataset generation.

This module provides both parallel and sequential chunk execution with a clean
interface, and the DatasetGenerator that turns chunk results into dataset and
metadata files, one pair per board dimension.
"""

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Optional

from tqdm import tqdm

from hex_gen.dataset_analysis import DatasetSummary, analyze_game_file, save_metadata
from hex_gen.error_handling import check_generation_errors
from hex_gen.file_utils import GracefulShutdown, ensure_directory_exists, generate_timestamp, get_unique_path
from hex_gen.utils.random_utils import spawn_seed_sequences

from .config import GenerationConfig
from .workers import generate_games_worker
from .writer import DatasetWriter

logger = logging.getLogger(__name__)

ResultHandler = Callable[[Dict[str, Any]], None]


class ParallelGenerator:
    """
    Runs game chunks in parallel using ProcessPoolExecutor.

    Each chunk carries its own seed sequence, so workers own private engines
    and random streams and never share state.
    """

    def __init__(self, max_workers: int = 6, shutdown_handler: Optional[GracefulShutdown] = None):
        self.max_workers = max_workers
        self.shutdown_handler = shutdown_handler

    def process_chunks(self, chunk_infos: List[Dict], handle_result: ResultHandler) -> List[Dict]:
        """
        Process chunks in parallel.

        Args:
            chunk_infos: Chunk descriptions for generate_games_worker
            handle_result: Called in this process for every finished chunk

        Returns:
            List of chunk results (records stripped)
        """
        results = []
        with ProcessPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(generate_games_worker, info): info for info in chunk_infos}

            for future in tqdm(as_completed(futures), total=len(futures), desc="Simulating chunks"):
                chunk_info = futures[future]
                try:
                    result = future.result()
                except Exception as e:
                    # Handle unexpected errors in the future itself
                    result = {
                        'success': False,
                        'error': f"Unexpected error: {str(e)}",
                        'board_dim': chunk_info['board_dim'],
                        'chunk_idx': chunk_info['chunk_idx']
                    }
                results.append(_handle(result, handle_result))

                if self.shutdown_handler is not None and self.shutdown_handler.shutdown_requested:
                    cancelled = sum(1 for f in futures if f.cancel())
                    # Whatever was neither handled nor cancelled is already running
                    discarded = len(futures) - len(results) - cancelled
                    logger.warning(f"Shutdown requested - cancelled {cancelled} pending chunks, "
                                   f"discarding results of {discarded} running chunks")
                    break

        return results


class SequentialGenerator:
    """
    Runs game chunks one at a time in this process.

    Same interface as ParallelGenerator, useful for debugging and tests.
    """

    def __init__(self, shutdown_handler: Optional[GracefulShutdown] = None):
        self.shutdown_handler = shutdown_handler

    def process_chunks(self, chunk_infos: List[Dict], handle_result: ResultHandler) -> List[Dict]:
        results = []
        for chunk_info in tqdm(chunk_infos, desc="Simulating chunks"):
            if self.shutdown_handler is not None and self.shutdown_handler.shutdown_requested:
                logger.warning("Shutdown requested - skipping remaining chunks")
                break
            result = generate_games_worker(chunk_info)
            results.append(_handle(result, handle_result))
        return results


def _handle(result: Dict[str, Any], handle_result: ResultHandler) -> Dict[str, Any]:
    """Pass a chunk result to the handler and return it without its records."""
    if result['success']:
        handle_result(result)
    else:
        logger.error(f"✗ Failed {result['board_dim']}x{result['board_dim']} chunk "
                     f"{result['chunk_idx']}: {result['error']}")
    summary = {key: value for key, value in result.items() if key != 'records'}
    summary['num_games'] = len(result.get('records', []))
    return summary


class _OrderedChunkSink:
    """
    Writes chunk results in chunk order, whatever order they finish in.

    Keeps output identical between parallel and sequential runs with the same seed.
    """

    def __init__(self, writer: DatasetWriter):
        self.writer = writer
        self.pending: Dict[int, Dict[str, Any]] = {}
        self.next_chunk = 0
        self.removed_moves_per_game: List[List[int]] = []

    def __call__(self, result: Dict[str, Any]) -> None:
        self.pending[result['chunk_idx']] = result
        while self.next_chunk in self.pending:
            records = self.pending.pop(self.next_chunk)['records']
            self.writer.append_records(records)
            self.removed_moves_per_game.extend(record.removed_moves for record in records)
            self.next_chunk += 1


class DatasetGenerator:
    """
    Main orchestrator for dataset generation.

    For every board dimension in the configuration this writes one dataset
    CSV under data/ and one metadata CSV under metadata/.
    """

    def __init__(self, config: GenerationConfig, shutdown_handler: Optional[GracefulShutdown] = None):
        """
        Initialize the generator with configuration.

        Args:
            config: Generation configuration
            shutdown_handler: Optional handler whose flag stops the run between chunks
        """
        self.config = config
        self.config.validate()
        self.shutdown_handler = shutdown_handler

        ensure_directory_exists(self.config.data_dir)
        ensure_directory_exists(self.config.metadata_dir)

        # Choose processor based on worker count
        if self.config.max_workers == 1:
            self.processor = SequentialGenerator(shutdown_handler)
        else:
            self.processor = ParallelGenerator(self.config.max_workers, shutdown_handler)

    def generate_all(self) -> List[Dict[str, Any]]:
        """
        Generate datasets for every configured board dimension.

        Returns:
            One summary dictionary per dimension that was generated
        """
        board_dims = list(self.config.board_dims())
        dim_seeds = spawn_seed_sequences(self.config.seed, len(board_dims))

        summaries = []
        for board_dim, dim_seed in zip(board_dims, dim_seeds):
            summaries.append(self.generate_for_dimension(board_dim, dim_seed))
            if self._shutdown_requested():
                logger.warning(f"Stopping after {board_dim}x{board_dim} due to shutdown request")
                break

        self._log_summary(summaries)
        return summaries

    def generate_for_dimension(self, board_dim: int, seed_sequence=None) -> Dict[str, Any]:
        """
        Simulate total_games games on one board dimension and write their files.

        Raises:
            RuntimeError: If any chunk failed
        """
        config = self.config
        fmt = config.dataset_format
        dataset_path = self._dataset_path(board_dim)

        writer = DatasetWriter(dataset_path, board_dim, fmt)
        writer.write_header()
        logger.info(f"Generating {config.total_games} games on {board_dim}x{board_dim} board -> {dataset_path}")

        chunk_infos = self._prepare_chunk_infos(board_dim, seed_sequence)
        sink = _OrderedChunkSink(writer)
        results = self.processor.process_chunks(chunk_infos, sink)

        check_generation_errors(results, config.metadata_dir)

        summary = analyze_game_file(dataset_path, fmt)
        metadata_path = config.metadata_dir / f"metadata_{dataset_path.name}"
        save_metadata(
            metadata_path,
            dataset_path.name,
            board_dim,
            summary,
            fmt,
            generate_timestamp(detailed=True),
            sink.removed_moves_per_game,
            config.moves_before_end,
        )

        return {
            'board_dim': board_dim,
            'dataset_path': dataset_path,
            'metadata_path': metadata_path,
            'summary': summary,
            'chunks': len(results),
            'complete': summary.total_games == config.total_games,
        }

    def _dataset_path(self, board_dim: int):
        config = self.config
        filename = (f"{board_dim}x{board_dim}_{config.total_games}_{config.format}_"
                    f"{generate_timestamp()}_{config.moves_before_end}.csv")
        return get_unique_path(config.data_dir / filename)

    def _prepare_chunk_infos(self, board_dim: int, seed_sequence=None) -> List[Dict]:
        """Split total_games into chunks of at most batch_size games."""
        config = self.config
        batch_size = config.effective_batch_size
        chunk_sizes = [batch_size] * (config.total_games // batch_size)
        if config.total_games % batch_size:
            chunk_sizes.append(config.total_games % batch_size)

        if seed_sequence is None:
            seed_sequence = spawn_seed_sequences(config.seed, 1)[0]
        chunk_seeds = seed_sequence.spawn(len(chunk_sizes))

        return [
            {
                'board_dim': board_dim,
                'chunk_idx': chunk_idx,
                'num_games': num_games,
                'moves_before_end': config.moves_before_end,
                'starting_player': config.starting_player,
                'seed_sequence': chunk_seed,
            }
            for chunk_idx, (num_games, chunk_seed) in enumerate(zip(chunk_sizes, chunk_seeds))
        ]

    def _shutdown_requested(self) -> bool:
        return self.shutdown_handler is not None and self.shutdown_handler.shutdown_requested

    def _log_summary(self, summaries: List[Dict[str, Any]]):
        """Log a summary of the generated datasets."""
        logger.info("")
        logger.info("GENERATION SUMMARY:")
        for entry in summaries:
            summary: DatasetSummary = entry['summary']
            dim = entry['board_dim']
            logger.info(f"  {dim}x{dim}: {summary.total_games} games, {summary.unique_games} unique, "
                        f"X wins {summary.wins_player_x}, O wins {summary.wins_player_o}")
            if not entry['complete']:
                logger.warning(f"  {dim}x{dim}: incomplete dataset ({summary.total_games} of "
                               f"{self.config.total_games} games)")
