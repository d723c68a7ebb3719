"""Batch evaluation and plotting tools for the Minesweeper solver."""

import logging
import random
import time
from collections import defaultdict
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .engine import Board
from .solver import MinesweeperSolver

logger = logging.getLogger(__name__)


def _iter_trials(
    size: int,
    mines_count: int,
    runs: int,
    seed: Optional[int],
) -> Iterator[Tuple[int, Dict[str, Any]]]:
    """Yield (status, payload) for `runs` fresh boards sharing one random stream."""
    if runs <= 0:
        raise ValueError("runs must be positive.")

    rng = random.Random(seed)
    for run in range(runs):
        board = Board(size, mines_count, rng=rng)
        board.initialize()
        status, payload = MinesweeperSolver(board).solve()
        if status not in (-1, 1):
            raise RuntimeError(f"Unexpected solver status: {status}")
        logger.debug("Run %d finished with status %d", run, status)
        yield status, payload


def run_solver_single_test(
    size: int,
    mines_count: int,
    *,
    seed: Optional[int] = None,
    show_boards: bool = False,
) -> Dict[str, Any]:
    """
    Run one end-to-end game with MinesweeperSolver on a fresh board.

    Args:
        size: Board side length.
        mines_count: Total number of mines on the board.
        seed: Optional seed for mine placement and solver guesses.
        show_boards: If True, print the final board state and the solution.

    Returns:
        The solver's payload augmented with "status" (-1 loss, 1 win).
    """
    board = Board(size, mines_count, rng=random.Random(seed))
    board.initialize()
    status, payload = MinesweeperSolver(board).solve()

    if show_boards:
        print("Final board ('x' unopened, 'F' flagged by the solver):")
        board.print_board()
        print()
        print("Solution:")
        board.print_solution()
        print()
        print(f"Finished with status {status}.")

    out = dict(payload)
    out["status"] = status
    return out


def run_solver_outcomes(
    size: int,
    mines_count: int,
    runs: int,
    *,
    seed: Optional[int] = None,
) -> List[int]:
    """Return the status of each of `runs` sequential games (1 win, -1 loss)."""
    return [status for status, _ in _iter_trials(size, mines_count, runs, seed)]


def run_solver_many_tests(
    size: int,
    mines_count: int,
    runs: int,
    *,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Run many independent solver games and return win statistics and averaged metrics.

    Args:
        size: Board side length.
        mines_count: Total number of mines on the board.
        runs: Number of independent games to run.
        seed: Optional seed; the same seed reproduces the same games.

    Returns:
        Averages of numeric payload metrics (prefixed with "avg_"), plus:
        - runs
        - wins
        - win_rate (fraction of games won)
        - elapsed_seconds (wall-clock time for all runs)
    """
    sums: Dict[str, float] = defaultdict(float)
    wins = 0

    start = time.perf_counter()
    for status, payload in _iter_trials(size, mines_count, runs, seed):
        if status == 1:
            wins += 1
        for k, v in payload.items():
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                sums[f"avg_{k}"] += float(v)
    elapsed = time.perf_counter() - start

    out: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    out["runs"] = float(runs)
    out["wins"] = float(wins)
    out["win_rate"] = wins / runs
    out["elapsed_seconds"] = elapsed

    logger.debug(
        "%dx%d board with %d mines: %d/%d wins in %.3fs",
        size, size, mines_count, wins, runs, elapsed,
    )
    return out


def run_solver_density_analysis(
    size: int,
    mine_counts: Sequence[int],
    runs: int,
    *,
    seed: Optional[int] = None,
    show: bool = True,
) -> Dict[int, Dict[str, float]]:
    """
    Run batches for several mine counts on one board size and plot the win rates.

    Args:
        size: Board side length.
        mine_counts: Mine counts to evaluate.
        runs: Number of games per mine count.
        seed: Optional seed; each mine count gets the same seed.
        show: If True, display the plots.

    Returns:
        Mapping from mine count to the statistics dict returned by
        run_solver_many_tests().
    """
    if not mine_counts:
        raise ValueError("mine_counts must not be empty.")

    results: Dict[int, Dict[str, float]] = {}
    for m in mine_counts:
        results[m] = run_solver_many_tests(size, m, runs, seed=seed)

    x = np.arange(len(mine_counts))
    labels = [str(m) for m in mine_counts]
    density = np.array(mine_counts, dtype=float) / (size * size)

    # 1) Win rate by mine count
    win_rates = [results[m]["win_rate"] for m in mine_counts]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, win_rates)  # type: ignore[misc]
    plt.xticks(x, [f"{m}\n({d:.0%})" for m, d in zip(labels, density)])  # type: ignore[misc]
    plt.xlabel("Mines (density)")  # type: ignore[misc]
    plt.ylabel("Win rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title(f"Win rate on a {size}x{size} board")  # type: ignore[misc]
    plt.tight_layout()

    # 2) Deductions vs guesses
    safe = [results[m]["avg_safe_inferences_count"] for m in mine_counts]
    guesses = [results[m]["avg_random_guesses_count"] for m in mine_counts]
    flagged = [results[m]["avg_flagged_cells_count"] for m in mine_counts]

    bar_w = 0.25
    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w, safe, width=bar_w, label="safe")  # type: ignore[misc]
    plt.bar(x, flagged, width=bar_w, label="flagged")  # type: ignore[misc]
    plt.bar(x + bar_w, guesses, width=bar_w, label="guesses")  # type: ignore[misc]
    plt.xticks(x, labels)  # type: ignore[misc]
    plt.xlabel("Mines")  # type: ignore[misc]
    plt.ylabel("Average count per game")  # type: ignore[misc]
    plt.title("Average deductions and guesses per game")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()

    if show:
        plt.show()  # type: ignore[misc]

    return results
