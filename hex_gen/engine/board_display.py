"""
Terminal rendering of Hex boards.

Draws a row-major cell vector (as produced by HexEngine.to_cell_vector()) as
the usual rhombus, each row shifted one space right of the one above, with a
header of column indices, unicode stones and optional ANSI colour and move
highlighting.
"""

import math
import sys
from typing import Optional, Sequence

from hex_gen.config import BLUE_CELL, EMPTY_CELL, RED_CELL


def ansi_colored(text, color):
    colors = {
        'blue': '\033[34m',
        'red': '\033[31m',
        'reset': '\033[0m',
    }
    return f"{colors.get(color, '')}{text}{colors['reset']}"


def get_cell_unicode_symbol(value: int) -> str:
    """Get the unicode symbol for a cell value."""
    symbols = {
        EMPTY_CELL: "◯",
        BLUE_CELL: "●",
        RED_CELL: "●"
    }
    return symbols[value]


def render_hex_board(cells: Sequence[int], board_dim: Optional[int] = None,
                     highlight_position: Optional[int] = None, use_color: bool = False) -> str:
    """
    Render a row-major cell vector as a rhombus-shaped Hex board.
    Args:
        cells: N*N values, +1 blue, -1 red, 0 empty (e.g. HexEngine.to_cell_vector())
        board_dim: N; inferred from len(cells) if omitted
        highlight_position: logical index to mark with '*', or None
        use_color: wrap stones in ANSI colour codes
    """
    if board_dim is None:
        board_dim = math.isqrt(len(cells))
    if board_dim * board_dim != len(cells):
        raise ValueError(f"Expected {board_dim * board_dim} cells, got {len(cells)}")

    highlight_symbol = '*'
    lines = []
    header = '   ' + ' '.join(str(i) for i in range(board_dim))
    lines.append(header)

    for row in range(board_dim):
        indent = ' ' * row
        row_str = f"{row:2d} " + indent
        for col in range(board_dim):
            position = row * board_dim + col
            value = int(cells[position])
            symbol = get_cell_unicode_symbol(value)

            if highlight_position is not None and position == highlight_position:
                row_str += highlight_symbol + ' '
            else:
                if use_color:
                    if value == BLUE_CELL:
                        symbol = ansi_colored(symbol, 'blue')
                    elif value == RED_CELL:
                        symbol = ansi_colored(symbol, 'red')
                row_str += symbol + ' '
        lines.append(row_str)

    return '\n'.join(lines)


def display_hex_board(cells: Sequence[int], board_dim: Optional[int] = None, file=None,
                      highlight_position: Optional[int] = None) -> None:
    """
    Display a Hex board as ASCII art, with optional move highlighting.
    Colour is used only when printing to an interactive stdout.
    """
    use_color = file is None and sys.stdout.isatty()
    output = render_hex_board(cells, board_dim, highlight_position=highlight_position, use_color=use_color)
    if file is not None:
        print(output, file=file)
    else:
        print(output)
