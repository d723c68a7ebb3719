"""Shared fixtures for the sweeper test suite."""

import random
from typing import Callable, Iterable, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import pytest

from sweeper.engine import Board, Cell


class ScriptedRandom:
    """Stand-in random source whose randrange() returns scripted values (modulo the range)."""

    def __init__(self, values: Sequence[int]) -> None:
        self._values: List[int] = list(values)

    def randrange(self, start: int, stop: Optional[int] = None) -> int:
        n = start if stop is None else stop - start
        return self._values.pop(0) % n


@pytest.fixture()
def make_board() -> Callable[..., Board]:
    """Build an initialized board with fixed mines and an optional scripted random source."""

    def factory(
        size: int,
        mine_locations: Iterable[int],
        picks: Optional[Sequence[int]] = None,
    ) -> Board:
        locations = list(mine_locations)
        rng = ScriptedRandom(picks) if picks is not None else random.Random(0)
        board = Board(size, len(locations), rng=rng)
        board.initialize(locations)
        return board

    return factory


@pytest.fixture()
def reveal_only() -> Callable[[Board, Cell], None]:
    """Open a single cell without flood fill, for states open_cell() never produces."""

    def reveal(board: Board, cell: Cell) -> None:
        board._mark_open(cell)

    return reveal
