"""Minesweeper board model: mine placement, adjacency wiring and flood-fill opening."""

import random
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Set, Tuple

from .utils import cell_index, cell_position, get_neighborhoods


class Cell:
    """One position on the board with its mine flag, open state and adjacency."""

    __slots__ = ("row", "col", "index", "is_mine", "is_open", "adjacent_mines", "adjacency")

    def __init__(self, row: int, col: int, index: int, is_mine: bool = False) -> None:
        self.row: int = row
        self.col: int = col
        self.index: int = index
        self.is_mine: bool = is_mine
        self.is_open: bool = False
        self.adjacent_mines: int = 0
        # Ids of neighboring cells, wired by Board.initialize().
        self.adjacency: Tuple[int, ...] = ()

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.col

    def __repr__(self) -> str:
        return (
            f"Cell(row={self.row}, col={self.col}, is_mine={self.is_mine}, "
            f"is_open={self.is_open}, adjacent_mines={self.adjacent_mines})"
        )


class Board:
    """Square Minesweeper board owning its cells and their open/unopened/flagged partitions."""

    def __init__(
        self,
        size: int,
        mines_count: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Create an empty board. Call initialize() before playing.

        Args:
            size: Side length N of the N x N grid, must be > 0.
            mines_count: Number of mines, must be in [1, N*N].
            rng: Random source used for mine placement. A fresh unseeded
                random.Random is used when omitted.

        Raises:
            ValueError: If size or mines_count is out of range.
        """
        if size <= 0:
            raise ValueError("size must be positive.")
        if mines_count < 1 or mines_count > size * size:
            raise ValueError(
                f"mines_count must be between 1 and {size * size} for a {size}x{size} board."
            )

        self.size: int = size
        self.mines_count: int = mines_count
        self.rng: random.Random = rng if rng is not None else random.Random()

        self._neighborhoods: Tuple[Tuple[int, ...], ...] = get_neighborhoods(size)

        # Flattened row-major storage; cell id = row * size + col.
        self.cells: List[Cell] = []
        self.mine_locations: Set[int] = set()

        # Disjoint partitions of all cells, keyed by cell id in row-major order.
        self.unopened_cells: Dict[int, Cell] = {}
        self.opened_cells: Dict[int, Cell] = {}
        self.flagged_cells: Dict[int, Cell] = {}

        # The mine that ended the game; rendered as "!".
        self.detonated: Optional[Cell] = None
        self.initialized: bool = False

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def generate_mine_locations(self) -> Set[int]:
        """Pick mines_count distinct flattened positions, resampling on collision."""
        total = self.size * self.size
        locations: Set[int] = set()
        for _ in range(self.mines_count):
            candidate = self.rng.randrange(total)
            while candidate in locations:
                candidate = self.rng.randrange(total)
            locations.add(candidate)
        return locations

    def initialize(self, mine_locations: Optional[Iterable[int]] = None) -> None:
        """
        Place mines, build every cell and compute adjacency and mine counts.

        Args:
            mine_locations: Optional explicit flattened mine ids. When omitted,
                positions are drawn from the board's random source.

        Raises:
            ValueError: If the board was already initialized or the explicit
                mine locations are not mines_count distinct in-range ids.
        """
        if self.initialized:
            raise ValueError("The board is already initialized.")

        if mine_locations is None:
            self.mine_locations = self.generate_mine_locations()
        else:
            locations = set(mine_locations)
            if len(locations) != self.mines_count:
                raise ValueError(
                    f"Expected {self.mines_count} distinct mine locations, got {len(locations)}."
                )
            if any(loc < 0 or loc >= self.size * self.size for loc in locations):
                raise ValueError("Mine locations must lie on the board.")
            self.mine_locations = locations

        for index in range(self.size * self.size):
            row, col = cell_position(index, self.size)
            cell = Cell(row, col, index, is_mine=index in self.mine_locations)
            self.cells.append(cell)
            self.unopened_cells[index] = cell

        for cell in self.cells:
            cell.adjacency = self._neighborhoods[cell.index]
            cell.adjacent_mines = sum(1 for n in cell.adjacency if self.cells[n].is_mine)

        self.initialized = True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def cell(self, row: int, col: int) -> Cell:
        """
        Return the cell at (row, col).

        Raises:
            IndexError: If the position is outside the board.
        """
        if row < 0 or row >= self.size or col < 0 or col >= self.size:
            raise IndexError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} board.")
        return self.cells[cell_index(row, col, self.size)]

    def neighbors(self, cell: Cell) -> List[Cell]:
        return [self.cells[n] for n in cell.adjacency]

    def is_unopened(self, cell: Cell) -> bool:
        return cell.index in self.unopened_cells

    def is_flagged(self, cell: Cell) -> bool:
        return cell.index in self.flagged_cells

    def is_solved(self) -> bool:
        """True once every cell left unopened (or flagged) is a mine."""
        return len(self.unopened_cells) + len(self.flagged_cells) == self.mines_count

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def _mark_open(self, cell: Cell) -> None:
        cell.is_open = True
        self.opened_cells[cell.index] = cell
        self.unopened_cells.pop(cell.index, None)
        self.flagged_cells.pop(cell.index, None)

    def open_cell(self, cell: Cell) -> bool:
        """
        Open a cell, flood-filling through connected zero cells.

        A fill only propagates through cells with no adjacent mines; a zero
        cell additionally opens its numbered neighbors without expanding them.

        Args:
            cell: The cell to open; expected to be unopened.

        Returns:
            False if the cell is a mine (the board is left unchanged apart
            from recording the detonated cell), True otherwise.
        """
        if cell.is_mine:
            self.detonated = cell
            return False

        frontier: Deque[Cell] = deque([cell])
        queued: Set[int] = {cell.index}

        while frontier:
            current = frontier.popleft()
            self._mark_open(current)

            for neighbor in self.neighbors(current):
                if neighbor.is_open or neighbor.is_mine or neighbor.index in queued:
                    continue
                if neighbor.adjacent_mines == 0:
                    queued.add(neighbor.index)
                    frontier.append(neighbor)
                elif current.adjacent_mines == 0:
                    self._mark_open(neighbor)

        return True

    def flag_cells(self, cells: Iterable[Cell]) -> List[Cell]:
        """
        Move unopened cells into the flagged partition.

        Returns:
            The cells that were newly flagged.
        """
        flagged: List[Cell] = []
        for cell in cells:
            if self.unopened_cells.pop(cell.index, None) is not None:
                self.flagged_cells[cell.index] = cell
                flagged.append(cell)
        return flagged

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_COORD = "\033[96m"
    _ANSI_MINE = "\033[91m"

    def _c(self, s: str) -> str:
        """Wrap string in coordinate color."""
        return f"{self._ANSI_COORD}{s}{self._ANSI_RESET}"

    def _m(self, s: str) -> str:
        """Wrap string in mine color (red)."""
        return f"{self._ANSI_MINE}{s}{self._ANSI_RESET}"

    def cell_symbol(self, cell: Cell, reveal_all: bool = False) -> str:
        """
        Return the plain display symbol for a cell.

        '!' the detonated mine, 'x' unopened, 'F' flagged, 'M' mine, '.' no
        adjacent mines, otherwise the adjacent mine count.
        """
        if cell is self.detonated:
            return "!"
        if not reveal_all and not cell.is_open:
            return "F" if self.is_flagged(cell) else "x"
        if cell.is_mine:
            return "M"
        if cell.adjacent_mines == 0:
            return "."
        return str(cell.adjacent_mines)

    def format_board(self, reveal_all: bool = False, color: bool = True) -> str:
        """
        Render the board as a multi-line string for terminal display.

        Args:
            reveal_all: If True, show mines and all underlying values.
            color: If False, omit ANSI escape codes.

        Returns:
            A formatted multi-line string with coordinate labels and the board grid.
        """
        n = self.size
        coord = self._c if color else str
        mine = self._m if color else str

        def cell_str(cell: Cell) -> str:
            symbol = self.cell_symbol(cell, reveal_all)
            return mine(symbol) if symbol in ("M", "!") else symbol

        # Header: column numbers
        header_cells = " ".join(f"{col:2d}" for col in range(n))
        out = [coord("   ") + coord(header_cells)]

        # Separator line
        out.append(coord("   " + "-" * (3 * n - 1)))

        # Rows with row number at left
        for row in range(n):
            row_cells = " ".join(f" {cell_str(self.cells[row * n + col])}" for col in range(n))
            out.append(coord(f"{row:2d} ") + coord("|") + row_cells)

        return "\n".join(out)

    def print_board(self) -> None:
        """Print the current visible board state to stdout."""
        print(self.format_board(reveal_all=False))

    def print_solution(self) -> None:
        """Print the fully revealed underlying board to stdout."""
        print(self.format_board(reveal_all=True))
