"""Unit tests for the Board: construction, placement, removal and rendering."""

from __future__ import annotations

import numpy as np
import pytest

from datepuzzle.board import WALL_CELLS, Board, Cell, cell_symbol, symbol_value
from datepuzzle.errors import InvalidDateError, InvariantViolationError
from datepuzzle.puzzle_date import all_dates
from datepuzzle.shapes import Catalog, Orientation


# =============================================================================
# Construction Tests
# =============================================================================


class TestForDate:
    """Tests for Board.for_date."""

    def test_sentinels(self, jan_first: Board) -> None:
        for cell in WALL_CELLS:
            assert jan_first[cell] == Cell.WALL
        assert jan_first[0, 0] == Cell.MONTH
        assert jan_first[2, 0] == Cell.DAY

    def test_month_and_day_cells(self) -> None:
        board = Board.for_date(12, 31)
        assert board[1, 5] == Cell.MONTH
        assert board[6, 2] == Cell.DAY

        board = Board.for_date(7, 14)
        assert board[1, 0] == Cell.MONTH
        assert board[3, 6] == Cell.DAY

    def test_render(self, jan_first: Board) -> None:
        assert jan_first.render().splitlines() == [
            "M.....X",
            "......X",
            "D......",
            ".......",
            ".......",
            ".......",
            "...XXXX",
        ]

    @pytest.mark.parametrize("month, day", [(13, 1), (0, 1), (1, 0), (1, 32), (-1, 5)])
    def test_invalid_date_raises(self, month: int, day: int) -> None:
        with pytest.raises(InvalidDateError):
            Board.for_date(month, day)

    def test_invalid_date_is_a_value_error(self) -> None:
        with pytest.raises(ValueError, match="Month"):
            Board.for_date(13, 1)

    def test_open_cells_match_piece_area_for_every_date(self, catalog: Catalog) -> None:
        for date in all_dates():
            board = Board.for_date(date.month, date.day)
            assert board.count_open() == catalog.total_area

    def test_wrong_data_length_raises(self) -> None:
        with pytest.raises(ValueError, match="expected 6"):
            Board([0] * 5, 2, 3)


class TestFromRows:
    """Tests for parsing rendered boards."""

    def test_round_trip(self, jan_first: Board) -> None:
        assert Board.from_rows(jan_first.render().splitlines()) == jan_first

    def test_piece_symbols(self) -> None:
        board = Board.from_rows(["1A", "X."])
        assert board.data.tolist() == [1, 10, Cell.WALL, Cell.OPEN]

    def test_ragged_rows_raise(self) -> None:
        with pytest.raises(ValueError, match="same length"):
            Board.from_rows(["..", "."])

    def test_unknown_symbol_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown board symbol"):
            symbol_value("?")

    def test_cell_symbol(self) -> None:
        assert cell_symbol(Cell.DAY) == "D"
        assert cell_symbol(8) == "8"
        assert cell_symbol(-42) == "?"


# =============================================================================
# Placement Tests
# =============================================================================


class TestPlaceLayout:
    """Tests for place_layout and remove_layout."""

    def test_place_stamps_the_multiplier(self, jan_first: Board, catalog: Catalog) -> None:
        orientation = catalog.orientations[1][0]  # 3x2 rectangle, multiplier 2
        assert jan_first.place_layout(orientation, 1, 0)
        assert jan_first.to_array()[0:2, 1:4].tolist() == [[2, 2, 2], [2, 2, 2]]
        assert jan_first.count_open() == 41 - 6

    def test_round_trip_restores_board(self, jan_first: Board, catalog: Catalog) -> None:
        for orientations in catalog.orientations:
            for orientation in orientations:
                for y in range(jan_first.n_rows):
                    for x in range(jan_first.n_cols):
                        before = jan_first.copy()
                        if jan_first.place_layout(orientation, x, y):
                            assert jan_first != before
                            jan_first.remove_layout(orientation, x, y, strict=True)
                        assert jan_first == before

    def test_overlap_leaves_board_unchanged(self, jan_first: Board, catalog: Catalog) -> None:
        first = catalog.orientations[1][0]
        second = catalog.orientations[6][0]  # U, multiplier 7
        assert jan_first.place_layout(first, 1, 0)
        before = jan_first.copy()
        assert not jan_first.place_layout(second, 2, 1)
        assert jan_first == before

    def test_overlap_with_sentinel_fails(self, jan_first: Board) -> None:
        orientation = Orientation(np.array([[5, 5]]))
        before = jan_first.copy()
        assert not jan_first.place_layout(orientation, 5, 0)  # covers the wall at (0, 6)
        assert not jan_first.place_layout(orientation, 0, 0)  # covers the month
        assert jan_first == before

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (6, 0), (0, 6), (7, 7)])
    def test_outside_grid_fails(self, jan_first: Board, x: int, y: int) -> None:
        orientation = Orientation(np.array([[1, 1], [1, 1]]))
        before = jan_first.copy()
        assert not jan_first.place_layout(orientation, x, y)
        assert jan_first == before

    def test_no_cell_holds_a_sum_of_pieces(self, jan_first: Board, catalog: Catalog) -> None:
        jan_first.place_layout(catalog.orientations[1][0], 1, 0)
        jan_first.place_layout(catalog.orientations[1][0], 2, 1)
        allowed = {Cell.OPEN, Cell.WALL, Cell.MONTH, Cell.DAY, 2}
        assert set(jan_first.data) <= allowed

    def test_strict_remove_without_placement_raises(
        self, jan_first: Board, catalog: Catalog
    ) -> None:
        with pytest.raises(InvariantViolationError, match="No piece"):
            jan_first.remove_layout(catalog.orientations[0][0], 1, 0, strict=True)

    def test_strict_remove_outside_grid_raises(self, jan_first: Board, catalog: Catalog) -> None:
        with pytest.raises(InvariantViolationError, match="outside"):
            jan_first.remove_layout(catalog.orientations[0][0], 6, 6, strict=True)


class TestRowHelpers:
    """Tests for the row scanning helpers used by the search."""

    def test_full_rows(self) -> None:
        board = Board.from_rows(["XX", "X.", ".."])
        assert board.row_is_full(0)
        assert not board.row_is_full(1)
        assert board.first_open_row() == 1
        assert board.first_open_col(1) == 1
        assert board.first_open_col(0) is None

    def test_first_open_row_past_the_end(self) -> None:
        board = Board.from_rows(["X1", "22"])
        assert board.first_open_row() == 2
        assert board.is_solved()
