"""
Minesweeper Bot

Plays Minesweeper through a board interface using two single-cell rules:
- Flag-complete: a clue equal to its closed neighbors flags every hidden one
- Reveal-complete: a clue matched by flagged neighbors reveals every hidden one
When neither rule applies, a random hidden cell is revealed.
"""

from .analysis import (
    format_board,
    run_solver_level_analysis,
    run_solver_many_tests,
    run_solver_single_test,
)
from .board import (
    FLAGGED,
    HIDDEN,
    Action,
    Board,
    BoardInterface,
    CellKind,
    CellState,
    GameStatus,
    Move,
)
from .config import Mode, SolverConfig
from .engine import Minesweeper
from .errors import InvalidCoordinate, MinesweeperBotError, NoCandidate
from .solver import (
    LoopState,
    MinesweeperSolver,
    clue_cells,
    deduce_moves,
    flag_moves,
    pick_fallback,
    reveal_moves,
)
from .utils import get_neighborhoods, neighbors

__version__ = "1.0.0"

__all__ = [
    # Board model
    "Action",
    "Board",
    "BoardInterface",
    "CellKind",
    "CellState",
    "FLAGGED",
    "GameStatus",
    "HIDDEN",
    "Move",
    # Neighbor index
    "get_neighborhoods",
    "neighbors",
    # Solver
    "LoopState",
    "MinesweeperSolver",
    "clue_cells",
    "deduce_moves",
    "flag_moves",
    "pick_fallback",
    "reveal_moves",
    # Configuration
    "Mode",
    "SolverConfig",
    # Simulated game
    "Minesweeper",
    # Analysis functions
    "format_board",
    "run_solver_single_test",
    "run_solver_many_tests",
    "run_solver_level_analysis",
    # Errors
    "InvalidCoordinate",
    "MinesweeperBotError",
    "NoCandidate",
]
