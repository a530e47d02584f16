"""Simulated Minesweeper game implementing the board interface, with first-click safety."""

import random
from collections import deque
from typing import Deque, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from .board import FLAGGED, HIDDEN, Action, CellState, Coord, GameStatus, Move
from .errors import InvalidCoordinate
from .utils import get_neighborhoods

MINE_GENERATION_ALGORITHMS = ("safe_first_action_rule", "safe_neighborhood_rule")


class Minesweeper:
    """Minesweeper game with 1-indexed (row, col) cells and lazy mine placement."""

    def __init__(
        self,
        rows: int,
        cols: int,
        mines_count: int,
        mines_generation_algorithm: str = "safe_neighborhood_rule",
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize a Minesweeper game.

        Mines are placed on the first reveal so that the first move is safe.

        Args:
            rows: Board height, must be > 0.
            cols: Board width, must be > 0.
            mines_count: Total number of mines to place, must be >= 0.
            mines_generation_algorithm: Mine placement rule; one of
                {"safe_first_action_rule", "safe_neighborhood_rule"}.
            rng: Random source for mine placement.

        Raises:
            ValueError: If dimensions are invalid or algorithm is unrecognized.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive.")
        if mines_count < 0:
            raise ValueError("mines_count must be non-negative.")
        if mines_generation_algorithm not in MINE_GENERATION_ALGORITHMS:
            raise ValueError(
                'mines_generation_algorithm must be "safe_first_action_rule" '
                'or "safe_neighborhood_rule".'
            )

        reserved = 1 if mines_generation_algorithm == "safe_first_action_rule" else 9
        if mines_count > rows * cols - reserved:
            raise ValueError(
                f"Cannot place {mines_count} mines and satisfy {mines_generation_algorithm}."
            )

        self.rows: int = rows
        self.cols: int = cols
        self.mines_count: int = mines_count
        self.mines_generation_algorithm: str = mines_generation_algorithm
        self.rng: random.Random = rng if rng is not None else random.Random()

        self.mines: Set[Coord] = set()
        self.clues: List[List[int]] = [[0] * cols for _ in range(rows)]
        self.revealed: List[List[bool]] = [[False] * cols for _ in range(rows)]
        self.flagged: Set[Coord] = set()
        self.mines_placed: bool = False
        self.hit_mine: Optional[Coord] = None
        self.unrevealed_count: int = rows * cols - mines_count

        self._neighborhoods = get_neighborhoods(rows, cols)

    @classmethod
    def from_layout(cls, lines: Sequence[str]) -> "Minesweeper":
        """
        Build a game with fixed mines from text rows ('*' mine, '.' safe).

        Useful for tests and reproducible demos.
        """
        grid = ["".join(line.split()) for line in lines if line.strip()]
        if not grid or any(len(line) != len(grid[0]) for line in grid):
            raise ValueError("Layout must be a non-empty rectangle.")

        mines = [
            (r, c)
            for r, line in enumerate(grid, start=1)
            for c, ch in enumerate(line, start=1)
            if ch == "*"
        ]
        game = cls(len(grid), len(grid[0]), 0, "safe_first_action_rule")
        game.set_mines(mines)
        return game

    def reset(self) -> None:
        """Hide every cell again, keeping the mines where they are."""
        self.revealed = [[False] * self.cols for _ in range(self.rows)]
        self.flagged = set()
        self.hit_mine = None
        self.unrevealed_count = self.rows * self.cols - self.mines_count

    def neighbors(self, row: int, col: int) -> Tuple[Coord, ...]:
        return self._neighborhoods[(row, col)]

    def _check(self, row: int, col: int) -> None:
        if not (1 <= row <= self.rows and 1 <= col <= self.cols):
            raise InvalidCoordinate(row, col, self.rows, self.cols)

    # -------------------------------------------------------------------------
    # Mine placement
    # -------------------------------------------------------------------------

    def set_mines(self, mines: Iterable[Coord]) -> None:
        """Place mines at exact positions and compute every clue."""
        if self.mines_placed:
            raise ValueError("Mines are already placed.")

        mine_set = set(mines)
        for r, c in mine_set:
            self._check(r, c)

        self.mines = mine_set
        self.mines_count = len(mine_set)
        self.unrevealed_count = self.rows * self.cols - self.mines_count
        for r in range(1, self.rows + 1):
            for c in range(1, self.cols + 1):
                self.clues[r - 1][c - 1] = sum(
                    1 for n in self.neighbors(r, c) if n in mine_set
                )
        self.mines_placed = True

    def place_mines(self, first_row: int, first_col: int) -> None:
        """
        Place mines randomly, keeping the first revealed cell safe.

        With "safe_neighborhood_rule" the neighbors of the first cell are safe too.
        """
        safe: Set[Coord] = {(first_row, first_col)}
        if self.mines_generation_algorithm == "safe_neighborhood_rule":
            safe.update(self.neighbors(first_row, first_col))

        eligible: List[Coord] = [
            (r, c)
            for r in range(1, self.rows + 1)
            for c in range(1, self.cols + 1)
            if (r, c) not in safe
        ]
        self.set_mines(self.rng.sample(eligible, self.mines_count))

    # -------------------------------------------------------------------------
    # Board interface
    # -------------------------------------------------------------------------

    def dimensions(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def cell_state(self, row: int, col: int) -> CellState:
        self._check(row, col)
        if self.revealed[row - 1][col - 1]:
            return CellState.opened(self.clues[row - 1][col - 1])
        if (row, col) in self.flagged:
            return FLAGGED
        return HIDDEN

    def game_status(self) -> GameStatus:
        if self.hit_mine is not None:
            return GameStatus.LOST
        if self.mines_placed and self.unrevealed_count == 0:
            return GameStatus.WON
        return GameStatus.IN_PROGRESS

    def apply_move(self, move: Move) -> None:
        row, col = move.target
        if move.action is Action.FLAG:
            self.flag(row, col)
        else:
            self.reveal(row, col)

    # -------------------------------------------------------------------------
    # Game actions
    # -------------------------------------------------------------------------

    def flag(self, row: int, col: int) -> None:
        """Mark a hidden cell as a mine. Open cells cannot be flagged."""
        self._check(row, col)
        if self.game_status().is_terminal or self.revealed[row - 1][col - 1]:
            return
        self.flagged.add((row, col))

    def flood_fill(self, row: int, col: int) -> List[Coord]:
        """
        Reveal the connected region starting at (row, col).

        Zero cells open their neighbors; flagged cells stay closed.

        Returns:
            Newly revealed cells.
        """
        frontier: Deque[Coord] = deque([(row, col)])
        visited: Set[Coord] = {(row, col)}
        revealed_cells: List[Coord] = []

        while frontier:
            r, c = frontier.popleft()
            if self.revealed[r - 1][c - 1]:
                continue

            self.revealed[r - 1][c - 1] = True
            self.unrevealed_count -= 1
            revealed_cells.append((r, c))

            if self.clues[r - 1][c - 1] == 0:
                for n in self.neighbors(r, c):
                    if n in visited or n in self.flagged:
                        continue
                    visited.add(n)
                    frontier.append(n)

        return revealed_cells

    def reveal(self, row: int, col: int) -> GameStatus:
        """
        Reveal a cell. Flagged and already-open cells are left alone.

        Raises:
            InvalidCoordinate: If coordinates are out of bounds.
        """
        self._check(row, col)
        status = self.game_status()
        if status.is_terminal:
            return status
        if self.revealed[row - 1][col - 1] or (row, col) in self.flagged:
            return status

        if not self.mines_placed:
            self.place_mines(row, col)

        if (row, col) in self.mines:
            self.revealed[row - 1][col - 1] = True
            self.hit_mine = (row, col)
            return GameStatus.LOST

        self.flood_fill(row, col)
        return self.game_status()

    def all_mines(self) -> FrozenSet[Coord]:
        return frozenset(self.mines)

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

    def format_board(self, reveal_all: bool = False, color: bool = True) -> str:
        """
        Render the board as a multi-line string for terminal display.

        Args:
            reveal_all: If True, show mines and all underlying clues.
            color: If False, emit plain text without ANSI escapes.

        Returns:
            A formatted multi-line string with 1-indexed coordinate labels.
        """
        c = self._c if color else str
        m = self._m if color else str

        def cell_str(r: int, col: int) -> str:
            if (r, col) == self.hit_mine:
                return m("!")
            if reveal_all or self.revealed[r - 1][col - 1]:
                if (r, col) in self.mines:
                    return m("*")
                return str(self.clues[r - 1][col - 1])
            if (r, col) in self.flagged:
                return "F"
            return "."

        header_cells = " ".join(f"{col:2d}" for col in range(1, self.cols + 1))
        out = [c("   ") + c(header_cells)]
        out.append(c("   " + "-" * (3 * self.cols - 1)))

        for r in range(1, self.rows + 1):
            row_cells = " ".join(f" {cell_str(r, col)}" for col in range(1, self.cols + 1))
            out.append(c(f"{r:2d} ") + c("|") + row_cells)

        return "\n".join(out)

    def print_board(self) -> None:
        """Print the current visible board state to stdout."""
        print(self.format_board(reveal_all=False))

    def print_full_board(self) -> None:
        """Print the fully revealed underlying board to stdout (for debugging)."""
        print(self.format_board(reveal_all=True))
