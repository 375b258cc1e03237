"""
Worker functions for multiprocessing game generation.

This module contains worker functions that can be safely pickled and used
with multiprocessing. All functions must be at module level (not nested)
to avoid pickling issues.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from hex_gen.engine.game_engine import HexEngine
from hex_gen.enums import Player, Winner, player_to_winner, str_to_player
from hex_gen.utils.random_utils import make_generator

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """One finished (and possibly rewound) game, ready for export."""
    board_dim: int
    cells: np.ndarray
    board_string: str
    starting_player: Player
    winner: Optional[Winner]
    num_moves: int
    winning_position: Optional[int] = None
    removed_moves: List[int] = field(default_factory=list)


def choose_starting_player(choice: str, rng: np.random.Generator) -> Player:
    """Resolve 'blue', 'red' or 'random' to a Player."""
    if choice == "random":
        return Player(int(rng.integers(2)))
    return str_to_player(choice)


def simulate_game(engine: HexEngine, starting_player: Player, moves_before_end: int = 0) -> GameRecord:
    """
    Play one uniformly random game to completion on a reused engine.

    Players alternate from starting_player until check_win reports a win or
    the board fills, then the last moves_before_end plies are undone.

    Raises:
        InsufficientHistoryError: If the game is shorter than moves_before_end
    """
    engine.init()

    player = starting_player
    winner = None
    winning_position = None
    while not engine.is_full():
        position = engine.place_random(player)
        if engine.check_win(player, position):
            winner = player_to_winner(player)
            winning_position = position
            break
        player = player.opponent

    num_moves = len(engine.moves)
    removed_moves = engine.undo_last_n(moves_before_end)

    return GameRecord(
        board_dim=engine.board_dim,
        cells=engine.to_cell_vector(),
        board_string=engine.to_display_string(),
        starting_player=starting_player,
        winner=winner,
        num_moves=num_moves,
        winning_position=winning_position,
        removed_moves=removed_moves,
    )


def generate_games_direct(board_dim: int, num_games: int, moves_before_end: int,
                          starting_player: str, rng: np.random.Generator) -> List[GameRecord]:
    """Simulate num_games games with one private engine."""
    engine = HexEngine(board_dim, rng=rng)
    records = []
    for _ in range(num_games):
        first = choose_starting_player(starting_player, rng)
        records.append(simulate_game(engine, first, moves_before_end))
    return records


def generate_games_worker(chunk_info: Dict[str, Any]) -> Dict[str, Any]:
    """
    Worker function for simulating one chunk of games.

    This function must be at module level (not nested) to be picklable.
    It receives all necessary information as a single dictionary to avoid
    complex argument passing.

    Args:
        chunk_info: Dict containing:
            - board_dim: int - Board dimension
            - chunk_idx: int - Index of the chunk within its dimension
            - num_games: int - Games to simulate
            - moves_before_end: int - Plies to undo per game
            - starting_player: str - "blue", "red" or "random"
            - seed_sequence: SeedSequence - Private random stream for this chunk

    Returns:
        Dict with results:
            - success: bool - Whether the chunk completed
            - records: list - GameRecord objects (if successful)
            - error: str - Error message (if failed)
            - board_dim: int - Board dimension
            - chunk_idx: int - Chunk index
    """
    try:
        board_dim = chunk_info['board_dim']
        chunk_idx = chunk_info['chunk_idx']
        rng = make_generator(chunk_info.get('seed_sequence'))

        logger.debug(f"Simulating {chunk_info['num_games']} games on {board_dim}x{board_dim} (chunk {chunk_idx})")
        records = generate_games_direct(
            board_dim,
            chunk_info['num_games'],
            chunk_info.get('moves_before_end', 0),
            chunk_info.get('starting_player', 'blue'),
            rng,
        )

        return {
            'success': True,
            'records': records,
            'board_dim': board_dim,
            'chunk_idx': chunk_idx
        }

    except Exception as e:
        return {
            'success': False,
            'error': f"{type(e).__name__}: {e}",
            'board_dim': chunk_info.get('board_dim', -1),
            'chunk_idx': chunk_info.get('chunk_idx', -1)
        }
