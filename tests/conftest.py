import os

os.environ.setdefault("MPLBACKEND", "Agg")

from typing import List, Sequence, Tuple

import pytest

from minesweeper_bot import Board, CellState, GameStatus, Move


class ScriptedInterface:
    """Board interface backed by a fixed snapshot that records applied moves."""

    def __init__(self, lines: Sequence[str], statuses: Sequence[GameStatus] = ()) -> None:
        self.board = Board.from_strings(lines)
        self.statuses: List[GameStatus] = list(statuses)
        self.applied: List[Move] = []

    def dimensions(self) -> Tuple[int, int]:
        return self.board.rows, self.board.cols

    def cell_state(self, row: int, col: int) -> CellState:
        return self.board.state(row, col)

    def game_status(self) -> GameStatus:
        # Pop scripted statuses one call at a time; the last one sticks.
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        if self.statuses:
            return self.statuses[0]
        return GameStatus.IN_PROGRESS

    def apply_move(self, move: Move) -> None:
        self.applied.append(move)


@pytest.fixture
def scripted():
    return ScriptedInterface
