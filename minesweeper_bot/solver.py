"""Single-cell Minesweeper solver: clue scan, two deduction rules and a random fallback."""

import logging
import random
import time
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .board import Action, Board, BoardInterface, Coord, GameStatus, Move
from .config import Mode, SolverConfig
from .errors import NoCandidate
from .utils import neighbors

logger = logging.getLogger(__name__)

Clue = Tuple[Coord, int]


# -------------------------------------------------------------------------
# Clue extraction and deduction
# -------------------------------------------------------------------------


def clue_cells(board: Board) -> Iterator[Clue]:
    """Yield (cell, clue) for every open cell with a positive clue, row-major."""
    for cell, state in board.cells():
        if state.is_open and state.clue > 0:
            yield cell, state.clue


def flag_moves(board: Board, clues: Sequence[Clue]) -> List[Move]:
    """
    Rule A: if a clue equals its number of closed (hidden or flagged)
    neighbors, every hidden one of them is a mine.
    """
    moves: List[Move] = []
    for cell, clue in clues:
        closed = [n for n in neighbors(board, cell) if board[n].is_closed]
        if len(closed) != clue:
            continue
        moves.extend(Move(n, Action.FLAG) for n in closed if board[n].is_hidden)
    return moves


def reveal_moves(board: Board, clues: Sequence[Clue]) -> List[Move]:
    """
    Rule B: if a clue is already matched by flagged neighbors, every hidden
    neighbor is safe.
    """
    moves: List[Move] = []
    for cell, clue in clues:
        nbrs = neighbors(board, cell)
        flagged_count = sum(1 for n in nbrs if board[n].is_flagged)
        if clue - flagged_count != 0:
            continue
        moves.extend(Move(n, Action.REVEAL) for n in nbrs if board[n].is_hidden)
    return moves


def deduce_moves(board: Board) -> List[Move]:
    """
    Run both rules over one snapshot: all flags first, then all reveals.

    The reveal pass reads the same snapshot as the flag pass; flags proposed
    in this call are not taken into account until the board is re-read.

    Returns:
        Moves deduplicated by (target, action), in first-occurrence order.
    """
    clues = list(clue_cells(board))
    moves = flag_moves(board, clues) + reveal_moves(board, clues)
    return list(dict.fromkeys(moves))


def pick_fallback(board: Board, rng: random.Random) -> Coord:
    """
    Pick a hidden cell uniformly at random. Flagged and open cells are never chosen.

    Raises:
        NoCandidate: If no hidden cell is left.
    """
    candidates = board.hidden_cells()
    if not candidates:
        raise NoCandidate("No hidden cell left to reveal.")
    return rng.choice(candidates)


# -------------------------------------------------------------------------
# Solve loop
# -------------------------------------------------------------------------


class LoopState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    WON = "won"
    LOST = "lost"
    STOPPED = "stopped"  # nothing left to reveal, or max_ticks reached


class MinesweeperSolver:
    """
    Tick-driven solver bound to a board interface.

    Each tick reads the whole board from the interface, deduces moves with
    the flag-complete and reveal-complete rules, applies them, and reveals a
    random hidden cell when nothing can be deduced. Ticks are driven either
    by the caller through step() or by run().
    """

    def __init__(
        self,
        interface: BoardInterface,
        config: Optional[SolverConfig] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize a solver for one game.

        Args:
            interface: The game to read state from and send moves to.
            config: Solver settings. Defaults to a config sized to the interface.
            rng: Random source for the first move and fallback guesses.
                Defaults to random.Random(config.seed).
            sleep: Function used by run() to wait between ticks.

        Raises:
            ValueError: If the configured grid size differs from the interface.
        """
        rows, cols = interface.dimensions()
        if config is None:
            config = SolverConfig(rows=rows, cols=cols)
        elif (config.rows, config.cols) != (rows, cols):
            raise ValueError(
                f"Configured grid is {config.rows}x{config.cols}, "
                f"interface is {rows}x{cols}."
            )

        self.interface = interface
        self.config = config
        self.rng: random.Random = rng if rng is not None else random.Random(config.seed)
        self._sleep = sleep

        self.state: LoopState = LoopState.IDLE
        self.board: Board = Board(rows, cols)

        # Metrics / counters (for analysis)
        self.ticks_count: int = 0
        self.flags_count: int = 0
        self.deduced_reveals_count: int = 0
        self.guesses_count: int = 0
        self.discarded_moves_count: int = 0

        self.moves_sequence: List[Tuple[int, int, str]] = []
        self.steps_history: List[Dict[str, Any]] = []

    @property
    def is_running(self) -> bool:
        return self.state is LoopState.RUNNING

    def start(self) -> None:
        """
        Leave IDLE and reveal a uniformly random cell.

        The first move of a game can never be deduced.
        """
        if self.state is not LoopState.IDLE:
            raise RuntimeError(f"Solver already started (state: {self.state.value}).")

        self.board = Board.from_interface(self.interface)
        self.state = LoopState.RUNNING
        logger.info("Starting %dx%d game.", self.board.rows, self.board.cols)

        cell = (
            self.rng.randint(1, self.board.rows),
            self.rng.randint(1, self.board.cols),
        )
        applied = self._apply_moves([Move(cell, Action.REVEAL)])
        self._record_step("first_move", applied)

    def step(self) -> bool:
        """
        Run one tick: status check, refresh, deduce, act.

        Returns:
            True if another tick should be scheduled.
        """
        if self.state is not LoopState.RUNNING:
            return False

        status = self.interface.game_status()
        if status.is_terminal:
            self._finish(status)
            return False

        max_ticks = self.config.max_ticks
        if max_ticks is not None and self.ticks_count >= max_ticks:
            logger.warning("Stopping after %d ticks.", self.ticks_count)
            self.state = LoopState.STOPPED
            return False

        self.ticks_count += 1
        self.board.refresh(self.interface)

        moves = deduce_moves(self.board)
        method = "deduction"
        if not moves:
            logger.info("No deducible cells found. Revealing random cell.")
            try:
                cell = pick_fallback(self.board, self.rng)
            except NoCandidate:
                logger.info("No hidden cells left; stopping.")
                self.state = LoopState.STOPPED
                return False
            moves = [Move(cell, Action.REVEAL)]
            method = "fallback"

        logger.debug("Tick %d: %d move(s) by %s.", self.ticks_count, len(moves), method)
        applied = self._apply_moves(moves)
        self._record_step(method, applied)
        return self.state is LoopState.RUNNING

    def run(self) -> LoopState:
        """
        Start the game if needed and drive ticks until the loop stops.

        In FAST mode ticks run back to back; in TIMED mode the loop sleeps
        tick_interval_ms between ticks.

        Returns:
            The final loop state.
        """
        if self.state is LoopState.IDLE:
            if self.config.start_delay_ms:
                self._sleep(self.config.start_delay)
            self.start()

        timed = self.config.mode is Mode.TIMED
        while True:
            if timed:
                self._sleep(self.config.tick_interval)
            if not self.step():
                break
        return self.state

    def solve(self) -> Tuple[GameStatus, Dict[str, Any]]:
        """
        Play the game end-to-end and report how it went.

        Returns:
            Tuple of (status, payload) where status is the interface's final
            game status and payload holds the solver's metrics.
        """
        self.run()
        status = self.interface.game_status()
        return status, self.metrics(status)

    def metrics(self, status: Optional[GameStatus] = None) -> Dict[str, Any]:
        return {
            "status": status,
            "loop_state": self.state,
            "ticks_count": self.ticks_count,
            "reveal_moves_count": sum(
                1 for _, _, action in self.moves_sequence if action == Action.REVEAL.value
            ),
            "flags_count": self.flags_count,
            "deduced_reveals_count": self.deduced_reveals_count,
            "guesses_count": self.guesses_count,
            "discarded_moves_count": self.discarded_moves_count,
            "moves_sequence": self.moves_sequence,
            "steps_history": self.steps_history,
        }

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _finish(self, status: GameStatus) -> None:
        if status is GameStatus.WON:
            logger.info("You win :)")
            self.state = LoopState.WON
        else:
            logger.info("Game over :(")
            self.state = LoopState.LOST

    def _apply_moves(self, moves: Sequence[Move]) -> List[Move]:
        """
        Send moves to the interface one at a time.

        The game status is checked before each move; once the game is over
        the remaining moves are dropped.
        """
        applied: List[Move] = []
        for i, move in enumerate(moves):
            status = self.interface.game_status()
            if status.is_terminal:
                self.discarded_moves_count += len(moves) - i
                self._finish(status)
                break
            self.interface.apply_move(move)
            applied.append(move)
            self.moves_sequence.append((move.target[0], move.target[1], move.action.value))
        return applied

    def _record_step(self, method: str, applied: Sequence[Move]) -> None:
        if method == "deduction":
            for move in applied:
                if move.action is Action.FLAG:
                    self.flags_count += 1
                else:
                    self.deduced_reveals_count += 1
        elif method == "fallback":
            self.guesses_count += len(applied)

        if not self.config.record_steps:
            return
        self.steps_history.append({
            "step_number": len(self.steps_history),
            "method": method,  # "first_move", "deduction" or "fallback"
            "moves": list(applied),
            "board_snapshot": Board.from_interface(self.interface).to_strings(),
        })
