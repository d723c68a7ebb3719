"""Tests for the deduction solver."""

import random
from typing import Callable, List

import pytest

from sweeper.engine import Board, Cell
from sweeper.solver import MinesweeperSolver


def _forced_mines(board: Board) -> List[Cell]:
    """Unopened cells that some opened cell proves to be mines by counting alone."""
    forced: List[Cell] = []
    for cell in board.opened_cells.values():
        neighbors = [n for n in board.neighbors(cell) if not n.is_open]
        unopened = [n for n in neighbors if board.is_unopened(n)]
        flagged = len(neighbors) - len(unopened)
        if unopened and cell.adjacent_mines == flagged + len(unopened):
            forced.extend(unopened)
    return forced


def test_requires_initialized_board() -> None:
    with pytest.raises(ValueError):
        MinesweeperSolver(Board(3, 1))


def test_falls_back_to_random_guess(make_board: Callable[..., Board]) -> None:
    board = make_board(2, [0], picks=[1])
    board.open_cell(board.cell(1, 1))
    solver = MinesweeperSolver(board)

    chosen = solver.choose_cells()

    # Unopened cells in row-major order are (0,0), (0,1), (1,0); pick #1.
    assert [c.position for c in chosen] == [(0, 1)]
    assert solver.random_guesses_count == 1
    assert solver.moves_sequence == [(0, 1, "G")]


def test_flags_forced_mines_and_reports_solved(make_board: Callable[..., Board]) -> None:
    board = make_board(3, [0])
    board.open_cell(board.cell(2, 2))
    solver = MinesweeperSolver(board)

    chosen = solver.choose_cells()

    assert chosen == []
    assert set(board.flagged_cells) == {0}
    assert not board.unopened_cells
    assert solver.moves_sequence == [(0, 0, "F")]


def test_satisfied_cell_returns_unopened_neighbors(make_board: Callable[..., Board]) -> None:
    board = make_board(3, [0, 6])
    board.open_cell(board.cell(1, 0))
    assert set(board.opened_cells) == {3}
    board.flag_cells([board.cell(0, 0), board.cell(2, 0)])
    solver = MinesweeperSolver(board)

    chosen = solver.choose_cells()

    assert [c.position for c in chosen] == [(0, 1), (1, 1), (2, 1)]
    assert all(not c.is_mine for c in chosen)
    assert solver.safe_inferences_count == 3
    assert solver.random_guesses_count == 0


def test_zero_mine_cells_never_declare_neighbors_safe(
    make_board: Callable[..., Board], reveal_only: Callable[[Board, Cell], None]
) -> None:
    """The safe rule needs at least one adjacent mine."""
    board = make_board(3, [8])
    cell = board.cell(0, 0)
    assert cell.adjacent_mines == 0
    reveal_only(board, cell)
    solver = MinesweeperSolver(board, rng=random.Random(3))

    chosen = solver.choose_cells()

    assert len(chosen) == 1
    assert solver.moves_sequence[-1][2] == "G"


def test_solve_wins_after_single_flood(make_board: Callable[..., Board]) -> None:
    board = make_board(3, [0], picks=[8])

    status, payload = MinesweeperSolver(board).solve()

    assert status == 1
    assert payload["reveal_moves_count"] == 1
    assert payload["revealed_cells_count"] == 8
    assert payload["flagged_cells_count"] == 1
    assert payload["random_guesses_count"] == 1
    assert payload["moves_sequence"] == [(2, 2, "G"), (0, 0, "F")]


def test_solve_loses_on_first_guess(make_board: Callable[..., Board]) -> None:
    board = make_board(3, [0], picks=[0])

    status, payload = MinesweeperSolver(board).solve()

    assert status == -1
    assert payload["revealed_cells_count"] == 0
    assert board.detonated is board.cell(0, 0)


def test_solve_guesses_until_mine_is_forced(make_board: Callable[..., Board]) -> None:
    board = make_board(2, [0], picks=[3, 1, 1])

    status, payload = MinesweeperSolver(board).solve()

    assert status == 1
    assert payload["moves_sequence"] == [
        (1, 1, "G"),
        (0, 1, "G"),
        (1, 0, "G"),
        (0, 0, "F"),
    ]
    assert payload["random_guesses_count"] == 3
    assert board.is_solved()


def test_all_mine_board_is_always_lost() -> None:
    board = Board(2, 4, rng=random.Random(5))
    board.initialize()

    status, _ = MinesweeperSolver(board).solve()

    assert status == -1


@pytest.mark.parametrize("seed", range(30))
def test_deductions_are_sound(seed: int) -> None:
    """Flags are always mines, and a won board has every safe cell opened."""
    board = Board(8, 10, rng=random.Random(seed))
    board.initialize()

    status, _ = MinesweeperSolver(board).solve()

    assert all(c.is_mine for c in board.flagged_cells.values())
    assert not any(c.is_mine for c in board.opened_cells.values())
    if status == 1:
        assert board.is_solved()
        assert not board.unopened_cells
    else:
        assert board.detonated is not None


@pytest.mark.parametrize("seed", range(10))
def test_no_forced_mine_left_after_full_pass(seed: int) -> None:
    """A pass that falls through to a guess has flagged every forced mine."""
    board = Board(9, 12, rng=random.Random(seed))
    board.initialize()
    solver = MinesweeperSolver(board)

    queue = [solver.choose_cells()[0]]
    while queue:
        cell = queue.pop(0)
        if not board.open_cell(cell):
            break
        guesses_before = solver.random_guesses_count
        chosen = solver.choose_cells()
        if solver.random_guesses_count > guesses_before or not chosen:
            assert _forced_mines(board) == []
        queue.extend(chosen)


def test_same_seed_reproduces_game() -> None:
    def play(seed: int):
        board = Board(10, 10, rng=random.Random(seed))
        board.initialize()
        return MinesweeperSolver(board).solve()

    assert play(99) == play(99)


def test_first_satisfied_cell_stops_the_pass(make_board: Callable[..., Board]) -> None:
    """A safe set found early in row-major order skips flagging further down the grid."""
    # Mines in the four corners: every other cell shows 1, so opening never spreads.
    board = make_board(4, [0, 3, 12, 15])
    for position in [(0, 1), (2, 1), (2, 2), (2, 3), (3, 1), (3, 2)]:
        assert board.open_cell(board.cell(*position)) is True
    assert len(board.opened_cells) == 6
    board.flag_cells([board.cell(0, 0)])
    solver = MinesweeperSolver(board)

    chosen = solver.choose_cells()

    assert [c.position for c in chosen] == [(0, 2), (1, 0), (1, 1), (1, 2)]
    assert set(board.flagged_cells) == {0}
    assert 15 in board.unopened_cells


def test_later_forced_mine_flagged_without_earlier_safe_set(
    make_board: Callable[..., Board],
) -> None:
    """Without a satisfied cell the pass reaches (3, 2) and flags the corner it forces."""
    board = make_board(4, [0, 3, 12, 15], picks=[0])
    for position in [(0, 1), (2, 1), (2, 2), (2, 3), (3, 1), (3, 2)]:
        board.open_cell(board.cell(*position))
    solver = MinesweeperSolver(board)

    chosen = solver.choose_cells()

    assert set(board.flagged_cells) == {15}
    assert (3, 3, "F") in solver.moves_sequence
    assert [c.position for c in chosen] == [(0, 0)]
    assert solver.moves_sequence[-1] == (0, 0, "G")


@pytest.mark.parametrize("seed", range(20))
def test_safe_inferences_count_distinct_cells(seed: int) -> None:
    """Safe sets returned again on later passes are counted once per cell."""
    board = Board(10, 10, rng=random.Random(seed))
    board.initialize()

    _, payload = MinesweeperSolver(board).solve()

    safe = [(r, c) for r, c, kind in payload["moves_sequence"] if kind == "S"]
    assert len(safe) == len(set(safe))
    assert payload["safe_inferences_count"] == len(safe)
