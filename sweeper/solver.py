"""Heuristic Minesweeper solver: single-cell constraint deduction with random fallback."""

import logging
import random
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Set, Tuple

from .engine import Board, Cell

logger = logging.getLogger(__name__)


class MinesweeperSolver:
    """
    Plays a board to completion using a cheap, incomplete deduction rule.

    Each pass scans the opened cells in row-major order. For an opened cell
    with n adjacent mines, f flagged neighbors and the list u of still
    unopened neighbors:

    1. n == f (n > 0) and u non-empty: every cell of u is safe; the pass
       stops and returns u.
    2. n == f + len(u): every cell of u is a mine and gets flagged; the pass
       continues.

    When no safe set turns up, a random unopened cell is guessed. There is
    no backtracking, so the solver can lose boards that are solvable.
    """

    def __init__(self, board: Board, rng: Optional[random.Random] = None) -> None:
        """
        Bind the solver to an initialized board.

        Args:
            board: The board to play.
            rng: Random source for the opening move and fallback guesses.
                Defaults to the board's own random source, so seeding the
                board reproduces the whole game.
        """
        if not board.initialized:
            raise ValueError("The board must be initialized before solving.")
        self.board = board
        self.rng: random.Random = rng if rng is not None else board.rng

        # Metrics / counters (for analysis)
        self.reveal_moves_count: int = 0
        self.safe_inferences_count: int = 0
        self.random_guesses_count: int = 0
        self.deduction_passes_count: int = 0

        self.moves_sequence: List[Tuple[int, int, str]] = []
        # Ids already counted as deduced-safe; later passes may return them again.
        self._inferred_safe: Set[int] = set()

    def _random_unopened_cell(self) -> Cell:
        candidates = list(self.board.unopened_cells.values())
        cell = candidates[self.rng.randrange(len(candidates))]
        self.random_guesses_count += 1
        self.moves_sequence.append((cell.row, cell.col, "G"))
        return cell

    def choose_cells(self) -> List[Cell]:
        """
        Run one deduction pass over the whole grid and pick the next cells to open.

        Returns:
            The unopened neighbors of the first opened cell whose mine count
            is fully accounted for by flags; otherwise a single random
            unopened cell; an empty list once nothing is left unopened.
        """
        board = self.board
        self.deduction_passes_count += 1

        for cell in board.cells:
            if not cell.is_open:
                continue

            unopened: List[Cell] = []
            flagged_count = 0
            for neighbor in board.neighbors(cell):
                if neighbor.is_open:
                    continue
                if board.is_unopened(neighbor):
                    unopened.append(neighbor)
                else:
                    flagged_count += 1

            if cell.adjacent_mines != 0 and cell.adjacent_mines == flagged_count and unopened:
                for safe in unopened:
                    if safe.index not in self._inferred_safe:
                        self._inferred_safe.add(safe.index)
                        self.safe_inferences_count += 1
                        self.moves_sequence.append((safe.row, safe.col, "S"))
                logger.debug(
                    "Cell (%d, %d) satisfied by %d flags; %d neighbors safe",
                    cell.row, cell.col, flagged_count, len(unopened),
                )
                return unopened

            if unopened and cell.adjacent_mines == flagged_count + len(unopened):
                for flagged in board.flag_cells(unopened):
                    self.moves_sequence.append((flagged.row, flagged.col, "F"))
                logger.debug(
                    "Cell (%d, %d) forces %d mines", cell.row, cell.col, len(unopened)
                )

        if board.unopened_cells:
            return [self._random_unopened_cell()]
        return []

    def solve(self) -> Tuple[int, Dict[str, Any]]:
        """
        Play the board until a mine is hit or nothing is left to open.

        Returns:
            Tuple of (status, payload) where status is:
                - 1: Win (every remaining cell is a flagged mine)
                - -1: Mine hit (loss)
                - 0: Neither was recorded

            Payload contains the solver metrics and the moves sequence.
        """
        board = self.board
        status = 0

        queue: Deque[Cell] = deque()
        if board.unopened_cells:
            queue.append(self._random_unopened_cell())

        while queue:
            cell = queue.popleft()
            self.reveal_moves_count += 1
            if not board.open_cell(cell):
                logger.debug("Opened mine at (%d, %d)", cell.row, cell.col)
                status = -1
                break

            queue.extend(self.choose_cells())
            if not queue:
                status = 1

        logger.debug(
            "Game finished with status %d after %d reveals and %d guesses",
            status, self.reveal_moves_count, self.random_guesses_count,
        )
        return status, self.payload()

    def payload(self) -> Dict[str, Any]:
        """Return the solver metrics collected so far."""
        return {
            "reveal_moves_count": self.reveal_moves_count,
            "revealed_cells_count": len(self.board.opened_cells),
            "flagged_cells_count": len(self.board.flagged_cells),
            "safe_inferences_count": self.safe_inferences_count,
            "random_guesses_count": self.random_guesses_count,
            "deduction_passes_count": self.deduction_passes_count,
            "moves_sequence": list(self.moves_sequence),
        }
