"""Exceptions raised by the Minesweeper bot."""


class MinesweeperBotError(Exception):
    """Base class for all bot errors."""


class InvalidCoordinate(MinesweeperBotError, ValueError):
    """A cell coordinate lies outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside the {rows}x{cols} board."
        )
        self.row = row
        self.col = col


class NoCandidate(MinesweeperBotError):
    """No hidden cell is left for a fallback guess."""
