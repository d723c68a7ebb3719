"""Tests for the grid neighborhood helpers."""

import pytest

from sweeper.utils import cell_index, cell_position, get_neighborhoods


def test_corner_edge_and_interior_neighbors() -> None:
    """Neighbors are clipped to the grid and listed row by row."""
    nbrs = get_neighborhoods(3)

    assert nbrs[0] == (1, 3, 4)
    assert nbrs[1] == (0, 2, 3, 4, 5)
    assert nbrs[4] == (0, 1, 2, 3, 5, 6, 7, 8)
    assert nbrs[8] == (4, 5, 7)


def test_single_cell_grid_has_no_neighbors() -> None:
    assert get_neighborhoods(1) == ((),)


def test_neighborhoods_are_cached() -> None:
    assert get_neighborhoods(5) is get_neighborhoods(5)


@pytest.mark.parametrize("size", [0, -3])
def test_invalid_size_rejected(size: int) -> None:
    with pytest.raises(ValueError):
        get_neighborhoods(size)


def test_index_position_roundtrip() -> None:
    assert cell_index(2, 3, 5) == 13
    assert cell_position(13, 5) == (2, 3)
