import random
from collections import Counter

import pytest

from minesweeper_bot import (
    FLAGGED,
    Action,
    Board,
    CellState,
    GameStatus,
    Minesweeper,
    MinesweeperSolver,
    Mode,
    Move,
    NoCandidate,
    SolverConfig,
    clue_cells,
    deduce_moves,
    flag_moves,
    neighbors,
    pick_fallback,
    reveal_moves,
)


def apply(board, moves):
    """Apply moves to a copy of a snapshot the way a game would show them."""
    out = board.copy()
    for move in moves:
        if move.action is Action.FLAG:
            out.set_state(*move.target, FLAGGED)
        else:
            out.set_state(*move.target, CellState.opened(0))
    return out


def mid_game_boards(count=25, rows=9, cols=9, mines=10):
    """Yield (game, snapshot) pairs taken a few ticks into real games."""
    for seed in range(count):
        game = Minesweeper(rows, cols, mines, rng=random.Random(seed))
        config = SolverConfig(
            rows=rows, cols=cols, mode=Mode.FAST, start_delay_ms=0,
            seed=seed, max_ticks=1 + seed % 4,
        )
        MinesweeperSolver(game, config).run()
        if game.game_status() is GameStatus.IN_PROGRESS:
            yield game, Board.from_interface(game)


class TestClueCells:
    def test_only_positive_open_cells_row_major(self):
        board = Board.from_strings(["0 1 .", "F 3 0", "2 . ."])
        assert list(clue_cells(board)) == [((1, 2), 1), ((2, 2), 3), ((3, 1), 2)]

    def test_no_clues(self):
        assert list(clue_cells(Board.from_strings(["...", ".0.", "..."]))) == []


class TestDeduction:
    def test_flag_when_closed_matches_clue(self):
        board = Board.from_strings([
            "1..",
            "11.",
            "...",
        ])
        assert deduce_moves(board) == [Move((1, 2), Action.FLAG)]

    def test_reveal_after_flag_on_next_tick(self):
        board = Board.from_strings([
            "1F.",
            "11.",
            "...",
        ])
        moves = deduce_moves(board)
        assert all(m.action is Action.REVEAL for m in moves)
        assert [m.target for m in moves] == [(3, 1), (3, 2), (1, 3), (2, 3), (3, 3)]

        hidden_around_center = {
            n for n in neighbors(board, (2, 2)) if board[n].is_hidden
        }
        assert hidden_around_center <= {m.target for m in moves}

    def test_already_flagged_neighbors_are_not_reflagged(self):
        board = Board.from_strings(["2F", ".0"])
        assert deduce_moves(board) == [Move((2, 1), Action.FLAG)]

    def test_duplicate_flags_are_merged(self):
        board = Board.from_strings(["1.1"])
        assert deduce_moves(board) == [Move((1, 2), Action.FLAG)]

    def test_reveal_pass_reads_pre_tick_snapshot(self):
        # (1,3) would become reveal-complete only once (1,2) is flagged.
        board = Board.from_strings(["1.1."])
        assert deduce_moves(board) == [Move((1, 2), Action.FLAG)]

        board.set_state(1, 2, FLAGGED)
        assert deduce_moves(board) == [Move((1, 4), Action.REVEAL)]

    def test_flags_come_before_reveals(self):
        board = Board.from_strings(["1.F1."])
        assert deduce_moves(board) == [
            Move((1, 2), Action.FLAG),
            Move((1, 5), Action.REVEAL),
        ]

    def test_inconsistent_clue_yields_nothing(self):
        board = Board.from_strings(["4.", ".."])
        assert deduce_moves(board) == []

    def test_zero_clue_board(self):
        assert deduce_moves(Board.from_strings(["...", ".0.", "..."])) == []

    def test_same_snapshot_same_moves(self):
        board = Board.from_strings(["1..", "11.", "..."])
        assert deduce_moves(board) == deduce_moves(board)

    def test_applied_moves_are_not_repeated(self):
        board = Board.from_strings(["1..", "11.", "..."])
        after = apply(board, deduce_moves(board))
        assert Move((1, 2), Action.FLAG) not in deduce_moves(after)

    def test_rules_on_real_games(self):
        for game, board in mid_game_boards():
            clues = list(clue_cells(board))
            flags = flag_moves(board, clues)
            reveals = reveal_moves(board, clues)

            for move in flags + reveals:
                assert board.in_bounds(*move.target)
                assert board[move.target].is_hidden
            # Every flag the bot has placed so far is a mine, so both rules are sound.
            assert {m.target for m in flags} <= game.mines
            assert not {m.target for m in reveals} & game.mines

    def test_rule_a_leaves_no_hidden_neighbors(self):
        for _, board in mid_game_boards():
            after = apply(board, flag_moves(board, list(clue_cells(board))))
            for cell, clue in clue_cells(board):
                closed = [n for n in neighbors(board, cell) if board[n].is_closed]
                if len(closed) == clue:
                    assert not any(after[n].is_hidden for n in neighbors(board, cell))

    def test_rule_b_reveals_every_hidden_neighbor(self):
        for _, board in mid_game_boards():
            after = apply(board, reveal_moves(board, list(clue_cells(board))))
            for cell, clue in clue_cells(board):
                nbrs = neighbors(board, cell)
                if clue == sum(1 for n in nbrs if board[n].is_flagged):
                    assert not any(after[n].is_hidden for n in nbrs)


class TestFallback:
    def test_never_picks_flagged_or_open(self):
        board = Board.from_strings(["F0.", "1F2"])
        rng = random.Random(3)
        assert {pick_fallback(board, rng) for _ in range(50)} == {(1, 3)}

    def test_no_candidate(self):
        with pytest.raises(NoCandidate):
            pick_fallback(Board.from_strings(["F01", "2F3"]), random.Random(0))

    def test_uniform_over_hidden_cells(self):
        board = Board.from_strings(["..", "..", "00"])
        rng = random.Random(11)
        counts = Counter(pick_fallback(board, rng) for _ in range(4000))
        assert set(counts) == {(1, 1), (1, 2), (2, 1), (2, 2)}
        assert all(800 < n < 1200 for n in counts.values())

    def test_seeded_replay(self):
        board = Board(16, 30)
        first = [pick_fallback(board, random.Random(42)) for _ in range(3)]
        assert len(set(first)) == 1
