"""
Heuristic Minesweeper Solver

Minesweeper game logic plus a single-pass deduction solver:
- Board model: random mine placement, adjacency counts, flood-fill opening
- Deduction: flag forced mines, open neighbors of satisfied cells
- Random fallback: guess an unopened cell when no deduction applies
- Batch runs: estimate the solver's win rate over many random boards
"""

from .engine import Board, Cell
from .solver import MinesweeperSolver
from .analysis import (
    run_solver_single_test,
    run_solver_outcomes,
    run_solver_many_tests,
    run_solver_density_analysis,
)
from .cli import play_cli, validate_game_config

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Board",
    "Cell",
    "MinesweeperSolver",
    # CLI
    "play_cli",
    "validate_game_config",
    # Analysis functions
    "run_solver_single_test",
    "run_solver_outcomes",
    "run_solver_many_tests",
    "run_solver_density_analysis",
]
