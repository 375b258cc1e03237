"""
Hex simulation engine: board state, random play and win detection.
"""

from .game_engine import HexEngine
from .board_display import display_hex_board, render_hex_board

__all__ = ['HexEngine', 'display_hex_board', 'render_hex_board']
