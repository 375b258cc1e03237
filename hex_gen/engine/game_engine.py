"""
Game engine for random Hex play.

This module provides the core simulation logic: a sentinel-padded board,
uniformly random move placement, incremental win detection and terminal-only
undo for producing near-terminal positions.

Win detection is lazy. Each player's start edge is pre-marked as connected in
the border sentinels, and a new stone only triggers a flood fill when one of
its six neighbours already carries a connectivity mark. The fill marks every
same-player cell it reaches, so per-move cost is proportional to the chain
being extended rather than to the whole board.
"""

from typing import List, Optional

import numpy as np

from hex_gen.config import (
    BLUE_CELL, BLUE_SYMBOL, EMPTY_CELL, EMPTY_SYMBOL, GRID_EMPTY_SYMBOL, RED_CELL, RED_SYMBOL
)
from hex_gen.enums import GameStatus, Player, Winner, player_to_winner
from hex_gen.error_handling import ExhaustedBoardError, InsufficientHistoryError, RewoundBoardError
from hex_gen.utils.format_conversion import logical_to_padded, padded_to_logical, padded_width

NUM_PLAYERS = 2


class HexEngine:
    """
    Hex board with random placement and incremental win detection.

    One instance is built per board dimension and reused across games via
    init(). Player.BLUE connects the top and bottom edges, Player.RED the left
    and right edges.
    """

    def __init__(self, board_dim: int, rng: Optional[np.random.Generator] = None):
        """
        Args:
            board_dim: Board dimension N (N×N playable cells)
            rng: Private random generator; a fresh one is created if omitted
        """
        if isinstance(board_dim, bool) or not isinstance(board_dim, (int, np.integer)) or board_dim < 1:
            raise ValueError(f"board_dim must be a positive integer, got {board_dim!r}")
        self.board_dim = int(board_dim)
        self.width = padded_width(self.board_dim)
        self.rng = rng if rng is not None else np.random.default_rng()

        num_cells = self.width * self.width
        self.board = np.zeros((num_cells, NUM_PLAYERS), dtype=bool)
        self.connected = np.zeros((num_cells, NUM_PLAYERS), dtype=bool)
        self.open_positions = np.zeros(self.board_dim * self.board_dim, dtype=np.int64)
        self._open_slot = np.full(num_cells, -1, dtype=np.int64)
        self.number_of_open_positions = 0
        self.moves: List[int] = []
        self.neighbors = (
            -self.width + 1, -self.width, -1, 1, self.width, self.width - 1
        )

        # Row-major padded indices of the playable area
        rows = np.arange(1, self.board_dim + 1)
        cols = np.arange(1, self.board_dim + 1)
        self._playable = (rows[:, None] * self.width + cols[None, :]).ravel()

        self._winner: Optional[Winner] = None
        self._rewound = False
        self.init()

    def init(self) -> None:
        """Reset to an empty board of the configured dimension."""
        self.board[:] = False

        self.connected[:] = False
        grid = self.connected.reshape(self.width, self.width, NUM_PLAYERS)
        grid[0, :, Player.BLUE.value] = True
        grid[:, 0, Player.RED.value] = True

        self.open_positions[:] = self._playable
        self._open_slot[:] = -1
        self._open_slot[self._playable] = np.arange(self._playable.size)
        self.number_of_open_positions = self._playable.size

        self.moves = []
        self._winner = None
        self._rewound = False

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def place_random(self, player: Player) -> int:
        """
        Place a stone for player on a uniformly random open cell.

        Connectivity marks are not updated; call check_win afterwards.

        Returns:
            Logical index of the chosen cell

        Raises:
            ExhaustedBoardError: If no open cell remains
            RewoundBoardError: If the board has been rewound with undo_last_n
        """
        self._check_playable()
        slot = int(self.rng.integers(self.number_of_open_positions))
        return self._occupy_slot(player, slot)

    def place(self, player: Player, position: int) -> int:
        """
        Place a stone for player at a given logical index.

        Used to replay scripted move sequences.

        Raises:
            ValueError: If position is out of range or already occupied
            ExhaustedBoardError: If no open cell remains
            RewoundBoardError: If the board has been rewound with undo_last_n
        """
        self._check_playable()
        padded = logical_to_padded(position, self.board_dim)
        slot = int(self._open_slot[padded])
        if slot < 0:
            raise ValueError(f"Cell {position} is already occupied")
        return self._occupy_slot(player, slot)

    def _check_playable(self) -> None:
        if self._rewound:
            raise RewoundBoardError("Cannot place stones after undo_last_n; call init() first")
        if self.number_of_open_positions == 0:
            raise ExhaustedBoardError(
                f"No open positions left on {self.board_dim}x{self.board_dim} board"
            )

    def _occupy_slot(self, player: Player, slot: int) -> int:
        padded = int(self.open_positions[slot])
        self.board[padded, player.value] = True

        logical_position = padded_to_logical(padded, self.board_dim)
        self.moves.append(logical_position)

        # Swap-remove from the live prefix
        last = self.number_of_open_positions - 1
        moved = int(self.open_positions[last])
        self.open_positions[slot] = moved
        self._open_slot[moved] = slot
        self._open_slot[padded] = -1
        self.number_of_open_positions = last

        return logical_position

    # ------------------------------------------------------------------
    # Win detection
    # ------------------------------------------------------------------

    def check_win(self, player: Player, position: int) -> bool:
        """
        Check whether player's stone at position completes a winning chain.

        Args:
            player: Player who owns the stone
            position: Logical index of the stone

        Returns:
            True if the stone joins player's start edge to their goal edge
        """
        p = player.value
        padded = logical_to_padded(position, self.board_dim)
        for offset in self.neighbors:
            if self.connected[padded + offset, p]:
                if self._connect(player, padded):
                    self._winner = player_to_winner(player)
                    return True
                return False
        return False

    def _connect(self, player: Player, padded: int) -> bool:
        """Flood fill from a cell known to touch the start edge."""
        p = player.value
        self.connected[padded, p] = True
        stack = [padded]
        while stack:
            cell = stack.pop()
            if self._on_goal_edge(player, cell):
                return True
            for offset in self.neighbors:
                neighbor = cell + offset
                if self.board[neighbor, p] and not self.connected[neighbor, p]:
                    self.connected[neighbor, p] = True
                    stack.append(neighbor)
        return False

    def _on_goal_edge(self, player: Player, padded: int) -> bool:
        if player is Player.BLUE:
            return padded // self.width == self.board_dim
        return padded % self.width == self.board_dim

    # ------------------------------------------------------------------
    # Undo
    # ------------------------------------------------------------------

    def undo_last_n(self, n: int) -> List[int]:
        """
        Remove the n most recent moves from the board.

        Only occupancy and history are rewound. The open set and connectivity
        marks keep their terminal values, so no further stones may be placed
        until init().

        Returns:
            Removed logical positions, oldest first

        Raises:
            InsufficientHistoryError: If n is negative or exceeds the move history
        """
        if n < 0 or n > len(self.moves):
            raise InsufficientHistoryError(
                f"Cannot undo {n} moves with only {len(self.moves)} in history"
            )
        if n == 0:
            return []

        removed = self.moves[-n:]
        del self.moves[-n:]
        for position in removed:
            padded = logical_to_padded(position, self.board_dim)
            self.board[padded, :] = False
        self._rewound = True
        return removed

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def is_full(self) -> bool:
        return self.number_of_open_positions == 0

    @property
    def winner(self) -> Optional[Winner]:
        """Winner recorded by check_win, or None."""
        return self._winner

    @property
    def rewound(self) -> bool:
        return self._rewound

    @property
    def status(self) -> GameStatus:
        if self._winner is not None:
            return GameStatus.WON
        if self.is_full():
            return GameStatus.FULL
        if self.number_of_open_positions == self.board_dim * self.board_dim:
            return GameStatus.EMPTY
        return GameStatus.PLAYING

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def _playable_occupancy(self) -> np.ndarray:
        """Occupancy flags of the playable area, shape (N*N, 2)."""
        return self.board[self._playable]

    def to_cell_vector(self) -> np.ndarray:
        """Row-major cell values: +1 for BLUE, -1 for RED, 0 for empty."""
        occupancy = self._playable_occupancy()
        cells = np.full(occupancy.shape[0], EMPTY_CELL, dtype=np.int8)
        cells[occupancy[:, Player.BLUE.value]] = BLUE_CELL
        cells[occupancy[:, Player.RED.value]] = RED_CELL
        return cells

    def to_display_string(self) -> str:
        """Row-major string of 'X', 'O' and ' ', one character per cell."""
        symbols = {BLUE_CELL: BLUE_SYMBOL, RED_CELL: RED_SYMBOL, EMPTY_CELL: EMPTY_SYMBOL}
        return "".join(symbols[int(value)] for value in self.to_cell_vector())

    def to_ascii_grid(self) -> str:
        """Indented rhombus view of the board for diagnostics."""
        symbols = {BLUE_CELL: BLUE_SYMBOL, RED_CELL: RED_SYMBOL, EMPTY_CELL: GRID_EMPTY_SYMBOL}
        cells = self.to_cell_vector().reshape(self.board_dim, self.board_dim)
        lines = []
        for row in range(self.board_dim):
            line = " " * row + "".join(" " + symbols[int(value)] for value in cells[row])
            lines.append(line)
        return "\n".join(lines)

    def __str__(self) -> str:
        return (f"HexEngine({self.board_dim}x{self.board_dim}, moves={len(self.moves)}, "
                f"status={self.status.value})\n" + self.to_ascii_grid())

    def __repr__(self) -> str:
        return self.__str__()
