"""
Quickstart example for the heuristic Minesweeper solver.

This script demonstrates basic usage of the board and the solver.
"""

import random

from sweeper import (
    Board,
    MinesweeperSolver,
    run_solver_many_tests,
)


def main():
    print("=" * 60)
    print("Heuristic Minesweeper Solver - Quickstart Example")
    print("=" * 60)

    # Example 1: Solve a single game
    print("\n1. Solving a single game (10x10, 10 mines)...")
    print("-" * 60)

    board = Board(10, 10, rng=random.Random(7))
    board.initialize()

    solver = MinesweeperSolver(board)
    status, payload = solver.solve()

    result = "WON" if status == 1 else "LOST"
    print(f"Result: {result}")
    print(f"Reveal moves: {payload['reveal_moves_count']}")
    print(f"Cells revealed: {payload['revealed_cells_count']}")
    print(f"Mines flagged: {payload['flagged_cells_count']}")
    print(f"Safe inferences: {payload['safe_inferences_count']}")
    print(f"Random guesses: {payload['random_guesses_count']}")

    # Example 2: Show final board state
    print("\n2. Final board state and solution:")
    print("-" * 60)
    board.print_board()
    print()
    board.print_solution()

    # Example 3: Run multiple games for statistics
    print("\n3. Running 200 games for win rate statistics...")
    print("-" * 60)

    results = run_solver_many_tests(10, 10, 200, seed=1)

    print(f"Wins: {int(results['wins'])} / {int(results['runs'])}")
    print(f"Win rate: {results['win_rate']*100:.1f}%")
    print(f"Average guesses per game: {results['avg_random_guesses_count']:.1f}")
    print(f"Time taken: {results['elapsed_seconds']:.2f} s")

    # Example 4: Compare mine densities
    print("\n4. Win rates by mine count on a 10x10 board (100 games each)...")
    print("-" * 60)

    for m in (5, 10, 15, 20):
        results = run_solver_many_tests(10, m, 100, seed=1)
        print(f"{m:3d} mines: {results['win_rate']*100:5.1f}% win rate")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
