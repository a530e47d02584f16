"""
Quickstart example for the Minesweeper Bot.

This script demonstrates basic usage of the solver.
"""

import logging

from minesweeper_bot import (
    Board,
    Minesweeper,
    MinesweeperSolver,
    Mode,
    SolverConfig,
    deduce_moves,
    format_board,
    run_solver_many_tests,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Minesweeper Bot - Quickstart Example")
    print("=" * 60)

    # Example 1: Deduce moves from a hand-written board
    print("\n1. Deductions on a small board...")
    print("-" * 60)

    board = Board.from_strings([
        "1..",
        "1F.",
        "111",
    ])
    print(format_board(board))
    for move in deduce_moves(board):
        print(f"  {move.action.value} {move.target}")

    # Example 2: Solve a single expert game
    print("\n2. Solving a single Expert game (16x30, 99 mines)...")
    print("-" * 60)

    game = Minesweeper(rows=16, cols=30, mines_count=99)
    config = SolverConfig(rows=16, cols=30, mode=Mode.FAST, start_delay_ms=0, seed=7)
    status, payload = MinesweeperSolver(game, config).solve()

    print(f"Result: {status.value}")
    print(f"Ticks: {payload['ticks_count']}")
    print(f"Flags: {payload['flags_count']}")
    print(f"Deduced reveals: {payload['deduced_reveals_count']}")
    print(f"Random guesses: {payload['guesses_count']}")
    print()
    print(game.format_board(reveal_all=True))

    # Example 3: Win rates by difficulty level
    print("\n3. Win rates by difficulty level (20 games each)...")
    print("-" * 60)
    logging.getLogger("minesweeper_bot").setLevel(logging.WARNING)

    difficulties = [
        ("Beginner", 9, 9, 10),
        ("Intermediate", 16, 16, 40),
        ("Expert", 16, 30, 99),
    ]

    for name, rows, cols, mines in difficulties:
        results = run_solver_many_tests(rows, cols, mines, runs=20, seed=0)
        print(
            f"{name:15s} ({rows}x{cols}, {mines:2d} mines): "
            f"{results['win_rate']*100:5.1f}% win rate, "
            f"{results['avg_guesses_count']:.1f} guesses/game"
        )

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
