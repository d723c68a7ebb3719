"""Command-line entry points: interactive play and batch solver runs."""

import argparse
import logging
import random
import sys
import time
from typing import List, Optional

from .analysis import run_solver_density_analysis, run_solver_many_tests
from .engine import Board


def validate_game_config(size: int, mines_count: int) -> None:
    """
    Check board parameters for interactive play.

    The number of mines is bounded by the side length, not the cell count.

    Raises:
        ValueError: If the configuration is rejected.
    """
    if mines_count > size:
        raise ValueError(
            f"Incorrect number of mines. Number of mines should not be greater than {size}"
        )
    if size < 2:
        raise ValueError(f"Matrix size should be > 1: {size}")
    if mines_count <= 0:
        raise ValueError(f"Number of mines should be > 0: {mines_count}")


def _prompt_int(prompt: str) -> int:
    while True:
        s = input(prompt).strip()
        try:
            return int(s)
        except ValueError:
            print("Invalid input. Please enter an integer.")


def play_cli(board: Board) -> int:
    """
    Run a simple terminal UI for playing Minesweeper.

    Args:
        board: An initialized Board to play on.

    Returns:
        1 if the player won, -1 if a mine was opened, 0 if the player quit.
    """
    n = board.size
    print("To play the game, enter a 0-based 'row col' of the cell to open. Type 'q' to quit.\n")
    start = time.perf_counter()

    while True:
        print(board.format_board(reveal_all=False))
        s = input("\nMove (row col): ").strip()
        if s.lower() in {"q", "quit", "exit"}:
            print("Quit.")
            return 0

        parts = s.replace(",", " ").split()
        if len(parts) != 2:
            print("Invalid input. Example: 3 5")
            continue

        try:
            row = int(parts[0])
            col = int(parts[1])
        except ValueError:
            print("Invalid input. Coordinates must be integers.")
            continue

        if row < 0 or row >= n or col < 0 or col >= n:
            print("The indices fall outside of the board. Please pick another one.")
            continue

        cell = board.cell(row, col)
        if not board.is_unopened(cell):
            print("This cell has already been opened. Please pick another one.")
            continue

        if not board.open_cell(cell):
            print("\nBOOM! You lose!! Board solution:")
            print(board.format_board(reveal_all=True))
            return -1

        if board.is_solved():
            elapsed = time.perf_counter() - start
            print(f"\nYou win!! Solved in {elapsed:.3f}s. Board solution:")
            print(board.format_board(reveal_all=True))
            return 1


def _cmd_play(args: argparse.Namespace) -> int:
    size = args.size if args.size is not None else _prompt_int("Enter (NxN) board size where N>1: ")
    mines = (
        args.mines if args.mines is not None
        else _prompt_int("Enter number of mines <= N (board size): ")
    )
    try:
        validate_game_config(size, mines)
    except ValueError as e:
        print(e)
        return 1

    board = Board(size, mines, rng=random.Random(args.seed))
    board.initialize()
    play_cli(board)
    return 0


def _cmd_bench(args: argparse.Namespace) -> int:
    try:
        if args.plot:
            results = run_solver_density_analysis(
                args.size, args.plot, args.runs, seed=args.seed, show=True
            )
            for m, stats in results.items():
                print(f"{m:4d} mines: {stats['win_rate'] * 100:5.1f}% win rate")
            return 0

        print(f"Running minesweeper solver over {args.runs} runs...")
        results = run_solver_many_tests(args.size, args.mines, args.runs, seed=args.seed)
    except ValueError as e:
        print(e)
        return 1

    print(f"Number of wins out of {args.runs}: {int(results['wins'])}")
    print(f"Win rate {results['win_rate'] * 100:.2f}%")
    print(f"Time taken for {args.runs} runs: {results['elapsed_seconds']:.3f} s")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sweeper", description="Minesweeper game and heuristic solver.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play interactively in the terminal")
    play.add_argument("--size", type=int, default=None, help="Board side length N (prompted if omitted)")
    play.add_argument("--mines", type=int, default=None, help="Number of mines (prompted if omitted)")
    play.add_argument("--seed", type=int, default=None, help="RNG seed for mine placement")
    play.set_defaults(func=_cmd_play)

    bench = sub.add_parser("bench", help="Estimate the solver's win rate")
    bench.add_argument("--size", type=int, default=10)
    bench.add_argument("--mines", type=int, default=10)
    bench.add_argument("--runs", type=int, default=1000)
    bench.add_argument("--seed", type=int, default=None, help="RNG seed; omitted uses OS entropy")
    bench.add_argument(
        "--plot", type=int, nargs="+", default=None, metavar="MINES",
        help="Plot win rate for each of these mine counts instead of a single run",
    )
    bench.set_defaults(func=_cmd_bench)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
