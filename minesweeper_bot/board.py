"""Board model: cell states, moves and the board interface the solver drives."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, NamedTuple, Protocol, Sequence, Tuple

from .errors import InvalidCoordinate

# (row, col), both 1-indexed.
Coord = Tuple[int, int]


class CellKind(str, Enum):
    """What is currently visible on a cell."""

    HIDDEN = "hidden"
    FLAGGED = "flagged"
    OPEN = "open"


@dataclass(frozen=True)
class CellState:
    """
    Visible state of a single cell.

    Attributes:
        kind: Hidden, flagged or open.
        clue: Number of adjacent mines; only meaningful for open cells.
    """

    kind: CellKind
    clue: int = 0

    def __post_init__(self) -> None:
        if self.kind is CellKind.OPEN and not 0 <= self.clue <= 8:
            raise ValueError(f"Clue must be in 0..8, got {self.clue}.")

    @classmethod
    def opened(cls, clue: int) -> "CellState":
        return cls(CellKind.OPEN, clue)

    @property
    def is_hidden(self) -> bool:
        return self.kind is CellKind.HIDDEN

    @property
    def is_flagged(self) -> bool:
        return self.kind is CellKind.FLAGGED

    @property
    def is_open(self) -> bool:
        return self.kind is CellKind.OPEN

    @property
    def is_closed(self) -> bool:
        """Hidden or flagged, i.e. not opened yet."""
        return self.kind is not CellKind.OPEN

    def to_char(self) -> str:
        if self.kind is CellKind.HIDDEN:
            return "."
        if self.kind is CellKind.FLAGGED:
            return "F"
        return str(self.clue)

    @classmethod
    def from_char(cls, ch: str) -> "CellState":
        if ch == ".":
            return HIDDEN
        if ch == "F":
            return FLAGGED
        if ch.isdigit():
            return cls.opened(int(ch))
        raise ValueError(f"Unrecognized cell character: {ch!r}")


HIDDEN = CellState(CellKind.HIDDEN)
FLAGGED = CellState(CellKind.FLAGGED)


class Action(str, Enum):
    REVEAL = "reveal"
    FLAG = "flag"


class Move(NamedTuple):
    """A request to reveal or flag a cell; applying it is the interface's job."""

    target: Coord
    action: Action


class GameStatus(str, Enum):
    """Possible game states."""

    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.IN_PROGRESS


class BoardInterface(Protocol):
    """Authoritative game the solver reads from and sends moves to."""

    def dimensions(self) -> Tuple[int, int]:
        ...

    def cell_state(self, row: int, col: int) -> CellState:
        ...

    def game_status(self) -> GameStatus:
        ...

    def apply_move(self, move: Move) -> None:
        ...


class Board:
    """
    In-memory snapshot of every cell's visible state.

    Coordinates are 1-indexed: rows in [1, rows], columns in [1, cols].
    Enumeration is row-major.
    """

    def __init__(self, rows: int, cols: int) -> None:
        """
        Create a board with every cell hidden.

        Args:
            rows: Number of rows, must be > 0.
            cols: Number of columns, must be > 0.

        Raises:
            ValueError: If dimensions are not positive.
        """
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive.")

        self.rows: int = rows
        self.cols: int = cols
        self._states: List[List[CellState]] = [
            [HIDDEN for _ in range(cols)] for _ in range(rows)
        ]

    @classmethod
    def from_interface(cls, interface: BoardInterface) -> "Board":
        """Build a board sized from the interface and read every cell."""
        rows, cols = interface.dimensions()
        board = cls(rows, cols)
        board.refresh(interface)
        return board

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Board":
        """
        Parse a board from text rows ('.' hidden, 'F' flagged, '0'-'8' open).

        Whitespace inside a row is ignored.
        """
        grid = ["".join(line.split()) for line in lines]
        grid = [line for line in grid if line]
        if not grid:
            raise ValueError("Board text is empty.")
        width = len(grid[0])
        if any(len(line) != width for line in grid):
            raise ValueError("All board rows must have the same length.")

        board = cls(len(grid), width)
        for r, line in enumerate(grid, start=1):
            for c, ch in enumerate(line, start=1):
                board.set_state(r, c, CellState.from_char(ch))
        return board

    def refresh(self, interface: BoardInterface) -> None:
        """Re-read every cell from the interface, replacing the snapshot."""
        rows, cols = interface.dimensions()
        if (rows, cols) != (self.rows, self.cols):
            raise ValueError(
                f"Interface is {rows}x{cols}, board is {self.rows}x{self.cols}."
            )
        self._states = [
            [interface.cell_state(r, c) for c in range(1, cols + 1)]
            for r in range(1, rows + 1)
        ]

    def in_bounds(self, row: int, col: int) -> bool:
        return 1 <= row <= self.rows and 1 <= col <= self.cols

    def check(self, row: int, col: int) -> None:
        """Raise InvalidCoordinate if (row, col) is off the board."""
        if not self.in_bounds(row, col):
            raise InvalidCoordinate(row, col, self.rows, self.cols)

    def state(self, row: int, col: int) -> CellState:
        self.check(row, col)
        return self._states[row - 1][col - 1]

    def set_state(self, row: int, col: int, state: CellState) -> None:
        self.check(row, col)
        self._states[row - 1][col - 1] = state

    def __getitem__(self, cell: Coord) -> CellState:
        return self.state(*cell)

    def coords(self) -> Iterator[Coord]:
        """Yield every coordinate in row-major order."""
        for r in range(1, self.rows + 1):
            for c in range(1, self.cols + 1):
                yield (r, c)

    def cells(self) -> Iterator[Tuple[Coord, CellState]]:
        """Yield (coordinate, state) pairs in row-major order."""
        for r, row in enumerate(self._states, start=1):
            for c, state in enumerate(row, start=1):
                yield (r, c), state

    def hidden_cells(self) -> List[Coord]:
        return [cell for cell, state in self.cells() if state.is_hidden]

    def copy(self) -> "Board":
        clone = Board(self.rows, self.cols)
        clone._states = [list(row) for row in self._states]
        return clone

    def to_strings(self) -> List[str]:
        return ["".join(s.to_char() for s in row) for row in self._states]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._states == other._states

    def __repr__(self) -> str:
        return f"Board({self.rows}x{self.cols})"
