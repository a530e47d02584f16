"""Analysis and benchmarking tools for the Minesweeper bot."""

import random
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .board import Board, GameStatus
from .config import Mode, SolverConfig
from .engine import Minesweeper
from .solver import MinesweeperSolver

# name -> (rows, cols, mines)
LEVELS: Dict[str, Tuple[int, int, int]] = {
    "beginner": (9, 9, 10),
    "intermediate": (16, 16, 40),
    "expert": (16, 30, 99),
}


def format_board(board: Board, *, show_coords: bool = True) -> str:
    """
    Format a board snapshot as a human-readable string.

    Args:
        board: Snapshot to display.
        show_coords: If True, include 1-indexed coordinate labels and a header.

    Returns:
        A text grid where hidden cells are '.', flags 'F' and open cells their clue.
    """
    lines: List[str] = []
    if show_coords:
        header = " ".join(f"{c:2d}" for c in range(1, board.cols + 1))
        lines.append("   " + header)
        lines.append("   " + "-" * (3 * board.cols - 1))

    for r, text in enumerate(board.to_strings(), start=1):
        row = " ".join(f" {ch}" for ch in text)
        lines.append(f"{r:2d} |" + row if show_coords else row)

    return "\n".join(lines)


def _fast_config(rows: int, cols: int, seed: Optional[int]) -> SolverConfig:
    return SolverConfig(
        rows=rows, cols=cols, mode=Mode.FAST, start_delay_ms=0, seed=seed
    )


def run_solver_single_test(
    rows: int,
    cols: int,
    mines_count: int,
    mines_generation_algorithm: str = "safe_neighborhood_rule",
    *,
    seed: Optional[int] = None,
    show_boards: bool = False,
) -> Dict[str, object]:
    """
    Run one end-to-end game with MinesweeperSolver on a fresh simulated game.

    Args:
        rows: Board height.
        cols: Board width.
        mines_count: Total number of mines on the board.
        mines_generation_algorithm: Mine placement rule
            ("safe_first_action_rule" or "safe_neighborhood_rule").
        seed: Seed for both mine placement and the solver's guesses.
        show_boards: If True, print the underlying board and the final visible board.

    Returns:
        The solver's metrics payload; "status" holds the final GameStatus.
    """
    rng = random.Random(seed)
    game = Minesweeper(
        rows, cols, mines_count, mines_generation_algorithm, rng=rng
    )
    solver = MinesweeperSolver(game, _fast_config(rows, cols, seed), rng=rng)

    status, payload = solver.solve()

    if show_boards:
        print(f"Generation mode: {mines_generation_algorithm}")
        print("Underlying board (mines visible):")
        print(game.format_board(reveal_all=True))
        print()
        print("Final visible board:")
        print(format_board(Board.from_interface(game)))
        print()
        print(f"Finished with status {status.value} after {payload['ticks_count']} ticks.")

    return payload


def run_solver_many_tests(
    rows: int,
    cols: int,
    mines_count: int,
    runs: int,
    mines_generation_algorithm: str = "safe_neighborhood_rule",
    *,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Run many independent games and return averaged metrics plus win rate.

    Args:
        rows: Board height.
        cols: Board width.
        mines_count: Total number of mines on the board.
        runs: Number of independent games to run.
        mines_generation_algorithm: Mine placement rule.
        seed: Base seed; game i uses seed + i. None leaves every game unseeded.

    Returns:
        Averages of the numeric solver metrics (prefixed with "avg_"), plus:
        - win_rate
        - stopped_rate: games that ended with nothing left to reveal
        - avg_guesses_failed: lost games per run, each loss being a failed guess
        - guess_failure_rate: lost games per fallback guess
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    keys = (
        "ticks_count",
        "reveal_moves_count",
        "flags_count",
        "deduced_reveals_count",
        "guesses_count",
    )
    samples = np.zeros((runs, len(keys)), dtype=float)
    statuses: List[GameStatus] = []

    for i in range(runs):
        payload = run_solver_single_test(
            rows,
            cols,
            mines_count,
            mines_generation_algorithm,
            seed=None if seed is None else seed + i,
        )
        samples[i] = [float(payload[k]) for k in keys]  # type: ignore[arg-type]
        statuses.append(payload["status"])  # type: ignore[arg-type]

    out: Dict[str, float] = {
        f"avg_{k}": float(v) for k, v in zip(keys, samples.mean(axis=0))
    }

    wins = np.array([s is GameStatus.WON for s in statuses])
    losses = np.array([s is GameStatus.LOST for s in statuses])
    out["win_rate"] = float(wins.mean())
    out["stopped_rate"] = float(1.0 - wins.mean() - losses.mean())

    # The first move is always safe, so every loss is a failed fallback guess.
    total_guesses = float(samples[:, keys.index("guesses_count")].sum())
    out["avg_guesses_failed"] = float(losses.mean())
    out["guess_failure_rate"] = (
        float(losses.sum()) / total_guesses if total_guesses > 0 else 0.0
    )
    return out


def run_solver_level_analysis(
    runs: int,
    mines_generation_algorithm: str = "safe_neighborhood_rule",
    *,
    seed: Optional[int] = None,
    show: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Run aggregated solver tests on the standard difficulty levels and plot summaries.

    Standard difficulty levels:
        - Beginner: 9x9, 10 mines
        - Intermediate: 16x16, 40 mines
        - Expert: 16x30, 99 mines

    Args:
        runs: Number of independent games to run per level.
        mines_generation_algorithm: Mine placement rule.
        seed: Base seed passed to run_solver_many_tests().
        show: If True, display the figures with plt.show().

    Returns:
        Mapping from level name to statistics dict returned by run_solver_many_tests().
    """
    results: Dict[str, Dict[str, float]] = {}
    for level, (rows, cols, mines) in LEVELS.items():
        results[level] = run_solver_many_tests(
            rows, cols, mines, runs, mines_generation_algorithm, seed=seed
        )

    level_names = list(LEVELS.keys())
    x = np.arange(len(level_names))
    bar_w = 0.35

    # 1) Deduced moves vs guesses
    flags = [results[n]["avg_flags_count"] for n in level_names]
    reveals = [results[n]["avg_deduced_reveals_count"] for n in level_names]
    guesses = [results[n]["avg_guesses_count"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, flags, width=bar_w / 2, label="flags")  # type: ignore[misc]
    plt.bar(x, reveals, width=bar_w / 2, label="deduced reveals")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, guesses, width=bar_w / 2, label="guesses")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average count")  # type: ignore[misc]
    plt.title("Average moves by origin (per game)")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()

    # 2) Win rate by level
    win_rates = [results[n]["win_rate"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, win_rates)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Win rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Win rate by difficulty level")  # type: ignore[misc]
    plt.tight_layout()

    if show:
        plt.show()  # type: ignore[misc]

    return results
