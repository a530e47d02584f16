import pytest

from minesweeper_bot import (
    FLAGGED,
    HIDDEN,
    Board,
    CellKind,
    CellState,
    GameStatus,
    InvalidCoordinate,
    get_neighborhoods,
    neighbors,
)


class TestCellState:
    def test_char_round_trip(self):
        for ch in ".F012345678":
            assert CellState.from_char(ch).to_char() == ch

    def test_open_clue_range(self):
        with pytest.raises(ValueError):
            CellState.opened(9)

    def test_blank_is_open_not_hidden(self):
        blank = CellState.opened(0)
        assert blank.is_open
        assert not blank.is_closed
        assert HIDDEN.is_closed and FLAGGED.is_closed
        assert blank != HIDDEN

    def test_unknown_char(self):
        with pytest.raises(ValueError):
            CellState.from_char("x")


class TestBoard:
    def test_default_is_all_hidden(self):
        board = Board(16, 30)
        assert len(board.hidden_cells()) == 16 * 30
        assert board.state(16, 30) is HIDDEN

    def test_rejects_non_positive_dimensions(self):
        with pytest.raises(ValueError):
            Board(0, 5)

    def test_one_indexed_bounds(self):
        board = Board(3, 4)
        assert board.in_bounds(1, 1)
        assert board.in_bounds(3, 4)
        for row, col in [(0, 1), (1, 0), (4, 1), (1, 5)]:
            with pytest.raises(InvalidCoordinate):
                board.state(row, col)

    def test_invalid_coordinate_is_value_error(self):
        with pytest.raises(ValueError):
            Board(2, 2).state(3, 3)

    def test_from_strings(self):
        board = Board.from_strings(["1F.", "0 2 ."])
        assert (board.rows, board.cols) == (2, 3)
        assert board[(1, 1)] == CellState.opened(1)
        assert board[(1, 2)].kind is CellKind.FLAGGED
        assert board[(2, 3)].is_hidden
        assert board.to_strings() == ["1F.", "02."]

    def test_from_strings_ragged(self):
        with pytest.raises(ValueError):
            Board.from_strings(["..", "..."])

    def test_cells_row_major(self):
        board = Board(2, 2)
        assert [cell for cell, _ in board.cells()] == [(1, 1), (1, 2), (2, 1), (2, 2)]
        assert list(board.coords()) == [(1, 1), (1, 2), (2, 1), (2, 2)]

    def test_refresh_replaces_snapshot(self, scripted):
        iface = scripted(["..", ".."])
        board = Board.from_interface(iface)
        iface.board.set_state(1, 1, CellState.opened(2))
        assert board[(1, 1)].is_hidden
        board.refresh(iface)
        assert board[(1, 1)] == CellState.opened(2)

    def test_refresh_size_mismatch(self, scripted):
        with pytest.raises(ValueError):
            Board(3, 3).refresh(scripted(["..", ".."]))

    def test_copy_is_independent(self):
        board = Board.from_strings(["1."])
        clone = board.copy()
        clone.set_state(1, 2, FLAGGED)
        assert board[(1, 2)].is_hidden
        assert clone != board


class TestGameStatus:
    def test_terminal(self):
        assert not GameStatus.IN_PROGRESS.is_terminal
        assert GameStatus.WON.is_terminal
        assert GameStatus.LOST.is_terminal


class TestNeighbors:
    def test_corner_edge_interior(self):
        board = Board(16, 30)
        assert set(neighbors(board, (1, 1))) == {(1, 2), (2, 1), (2, 2)}
        assert len(neighbors(board, (1, 15))) == 5
        assert len(neighbors(board, (8, 15))) == 8
        assert set(neighbors(board, (16, 30))) == {(15, 29), (15, 30), (16, 29)}

    def test_excludes_self_and_stays_in_bounds(self):
        board = Board(3, 4)
        for cell in board.coords():
            nbrs = neighbors(board, cell)
            assert cell not in nbrs
            assert all(board.in_bounds(r, c) for r, c in nbrs)
            assert all(max(abs(r - cell[0]), abs(c - cell[1])) == 1 for r, c in nbrs)

    def test_stable_order(self):
        board = Board(3, 3)
        assert neighbors(board, (2, 2)) == (
            (1, 1), (1, 2), (1, 3), (2, 1), (2, 3), (3, 1), (3, 2), (3, 3),
        )
        assert neighbors(board, (2, 2)) == neighbors(Board(3, 3), (2, 2))

    def test_out_of_grid(self):
        with pytest.raises(InvalidCoordinate):
            neighbors(Board(3, 3), (4, 1))

    def test_single_cell_board(self):
        assert neighbors(Board(1, 1), (1, 1)) == ()

    def test_neighborhoods_cached(self):
        assert get_neighborhoods(5, 7) is get_neighborhoods(5, 7)

    def test_neighborhoods_reject_bad_size(self):
        with pytest.raises(ValueError):
            get_neighborhoods(0, 3)
