"""Utility functions for the Minesweeper board and solver."""

from typing import Dict, List, Tuple

# Module-level cache: size -> ((neighbor ids of cell 0), (neighbor ids of cell 1), ...)
_NEIGHBORHOODS_CACHE: Dict[int, Tuple[Tuple[int, ...], ...]] = {}


def cell_index(row: int, col: int, size: int) -> int:
    """Flatten a (row, col) position on a size x size grid into a cell id."""
    return row * size + col


def cell_position(index: int, size: int) -> Tuple[int, int]:
    """Inverse of cell_index: return the (row, col) of a flattened cell id."""
    return divmod(index, size)


def get_neighborhoods(size: int) -> Tuple[Tuple[int, ...], ...]:
    """
    Precompute and cache 8-connected neighbor ids for every cell in a square grid.

    Args:
        size: Grid side length. Must be positive.

    Returns:
        A tuple indexed by cell id; entry i holds the ids of the cells
        adjacent to cell i, ordered by row offset then column offset.

    Raises:
        ValueError: If size is non-positive.
    """
    if size <= 0:
        raise ValueError("size must be positive.")

    cached = _NEIGHBORHOODS_CACHE.get(size)
    if cached is not None:
        return cached

    neighborhoods: List[Tuple[int, ...]] = []
    for row in range(size):
        for col in range(size):
            nbrs: List[int] = []
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    if dr == 0 and dc == 0:
                        continue
                    nr, nc = row + dr, col + dc
                    if 0 <= nr < size and 0 <= nc < size:
                        nbrs.append(cell_index(nr, nc, size))
            neighborhoods.append(tuple(nbrs))

    result = tuple(neighborhoods)
    _NEIGHBORHOODS_CACHE[size] = result
    return result
