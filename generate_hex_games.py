#!/usr/bin/env python3
"""
Generate datasets of uniformly random Hex games.

This script:
1. Simulates random games for every board dimension in the configured range
2. Optionally undoes the last moves of each game to produce near-terminal positions
3. Writes one CSV dataset per dimension under data/
4. Writes a metadata CSV per dataset under metadata/ (counts, wins, removed moves)

Example:
    python generate_hex_games.py --total-games 10000 --min-board-dim 5 --max-board-dim 7 --moves-before-end 2
"""

from hex_gen.generation.cli import main

if __name__ == "__main__":
    main()
