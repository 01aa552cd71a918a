"""Classes and functions for representing the puzzle board."""

from array import array
from collections.abc import Iterable, Sequence
from enum import IntEnum

import numpy as np

from datepuzzle.errors import InvariantViolationError
from datepuzzle.puzzle_date import PuzzleDate
from datepuzzle.shapes import Orientation

BOARD_ROWS = 7
BOARD_COLS = 7

WALL_CELLS: tuple[tuple[int, int], ...] = ((0, 6), (1, 6), (6, 3), (6, 4), (6, 5), (6, 6))
"""(row, col) of the cells that are never part of the calendar."""


class Cell(IntEnum):
    """Special cell values.

    Any positive value is the multiplier of the piece covering the cell.  The
    sentinels are negative so that no piece value, nor a sum of piece values,
    can be mistaken for one.
    """

    OPEN = 0
    WALL = -1
    MONTH = -2
    DAY = -3


SENTINEL_SYMBOLS: dict[int, str] = {
    Cell.OPEN: ".",
    Cell.WALL: "X",
    Cell.MONTH: "M",
    Cell.DAY: "D",
}

PIECE_SYMBOLS = "123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
"""Symbol for piece multiplier `m` is `PIECE_SYMBOLS[m - 1]`."""


def cell_symbol(value: int) -> str:
    """Return the display character for a cell value."""
    if value in SENTINEL_SYMBOLS:
        return SENTINEL_SYMBOLS[value]
    if 0 < value <= len(PIECE_SYMBOLS):
        return PIECE_SYMBOLS[value - 1]
    return "?"


def symbol_value(symbol: str) -> int:
    """Inverse of `cell_symbol`."""
    for value, sentinel in SENTINEL_SYMBOLS.items():
        if symbol == sentinel:
            return value
    if symbol in PIECE_SYMBOLS:
        return PIECE_SYMBOLS.index(symbol) + 1
    raise ValueError(f"Unknown board symbol: {symbol!r}")


class Board:
    """Store a 2D grid of cell values as a 1D array.

    Contains support for both 1D and 2D indexing.
    """

    def __init__(self, data: Iterable[int], rows: int, cols: int) -> None:
        self.data = array("i", data)
        self.n_rows = rows
        self.n_cols = cols
        if len(self.data) != rows * cols:
            raise ValueError(f"Board data has {len(self.data)} cells, expected {rows * cols}.")

    @classmethod
    def for_date(cls, month: int, day: int) -> "Board":
        """Create the calendar board with the walls, month and day blocked.

        Raises:
            InvalidDateError: If the month or day is out of range.
        """
        date = PuzzleDate(month, day)
        board = cls([Cell.OPEN] * (BOARD_ROWS * BOARD_COLS), BOARD_ROWS, BOARD_COLS)
        for cell in WALL_CELLS:
            board[cell] = Cell.WALL
        board[date.month_cell] = Cell.MONTH
        board[date.day_cell] = Cell.DAY
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Parse a board from rendered rows, e.g. `["..X", "M.D"]`."""
        n_cols = len(rows[0]) if rows else 0
        if any(len(row) != n_cols for row in rows):
            raise ValueError("All board rows must have the same length.")
        return cls((symbol_value(ch) for row in rows for ch in row), len(rows), n_cols)

    def copy(self) -> "Board":
        """Generate a copy of the board."""
        return Board(self.data.__copy__(), self.n_rows, self.n_cols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.n_rows, self.n_cols, self.data) == (other.n_rows, other.n_cols, other.data)

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, idx: int | tuple[int, int]) -> int:
        """Get cell content by 1D (row-major order) or 2D index."""
        if isinstance(idx, int):
            return self.data[idx]
        if isinstance(idx, tuple) and len(idx) == 2:
            row, col = idx
            return self.data[row * self.n_cols + col]
        raise IndexError("Invalid index type for Board.")

    def __setitem__(self, idx: int | tuple[int, int], value: int) -> None:
        """Set cell content by 1D (row-major order) or 2D index."""
        if isinstance(idx, int):
            self.data[idx] = value
            return
        if isinstance(idx, tuple) and len(idx) == 2:
            row, col = idx
            self.data[row * self.n_cols + col] = value
            return
        raise IndexError("Invalid index type for Board.")

    def row_cells(self, row: int) -> array:
        """The cell values of one row."""
        start = row * self.n_cols
        return self.data[start : start + self.n_cols]

    def row_is_full(self, row: int) -> bool:
        """Whether the row has no open cell."""
        return Cell.OPEN not in self.row_cells(row)

    def first_open_col(self, row: int) -> int | None:
        """Column of the leftmost open cell in the row, or None if the row is full."""
        cells = self.row_cells(row)
        return cells.index(Cell.OPEN) if Cell.OPEN in cells else None

    def first_open_row(self, start: int = 0) -> int:
        """First row at or after `start` with an open cell (`n_rows` if none)."""
        row = start
        while row < self.n_rows and self.row_is_full(row):
            row += 1
        return row

    def count_open(self) -> int:
        """Number of open cells."""
        return self.data.count(Cell.OPEN)

    def is_solved(self) -> bool:
        """Whether every cell is covered or blocked."""
        return self.count_open() == 0

    def place_layout(self, orientation: Orientation, x: int, y: int) -> bool:
        """Place an orientation with its top-left corner at column `x`, row `y`.

        The piece value is added to every covered cell first; a covered cell was
        open beforehand exactly when it now holds the piece value.  If any covered
        cell was not open, the addition is undone.

        Returns:
            True if the piece was placed; False (board unchanged) if it does not
            fit inside the grid or overlaps a non-open cell.
        """
        if x < 0 or y < 0:
            return False
        if x + orientation.width > self.n_cols or y + orientation.height > self.n_rows:
            return False

        data = self.data
        value = orientation.value
        n_cols = self.n_cols
        base = y * n_cols + x
        idxs = [base + dy * n_cols + dx for dy, dx in orientation.cells]

        for idx in idxs:
            data[idx] += value
        if all(data[idx] == value for idx in idxs):
            return True

        for idx in idxs:
            data[idx] -= value
        return False

    def remove_layout(
        self, orientation: Orientation, x: int, y: int, *, strict: bool = False
    ) -> None:
        """Undo a successful `place_layout` of the same orientation at the same offset.

        Args:
            orientation (Orientation): The orientation that was placed.
            x (int): Column offset used for the placement.
            y (int): Row offset used for the placement.
            strict (bool): Verify that every covered cell holds the piece value first.

        Raises:
            InvariantViolationError: If `strict` and the cells do not match a placement.
        """
        data = self.data
        value = orientation.value
        base = y * self.n_cols + x
        idxs = [base + dy * self.n_cols + dx for dy, dx in orientation.cells]
        if strict:
            if x < 0 or y < 0 or x + orientation.width > self.n_cols or (
                y + orientation.height > self.n_rows
            ):
                raise InvariantViolationError(
                    f"Removal at ({x}, {y}) lies outside the {self.n_rows}x{self.n_cols} board."
                )
            if any(data[idx] != value for idx in idxs):
                raise InvariantViolationError(
                    f"No piece {value} placed at ({x}, {y}) to remove."
                )
        for idx in idxs:
            data[idx] -= value

    def to_array(self) -> np.ndarray:
        """Return the cells as an `(n_rows, n_cols)` numpy array."""
        return np.array(self.data, dtype=np.int32).reshape(self.n_rows, self.n_cols)

    def render(self) -> str:
        """Multiline picture of the board using the cell symbols."""
        return "\n".join(
            "".join(cell_symbol(value) for value in self.row_cells(row))
            for row in range(self.n_rows)
        )

    def __str__(self) -> str:
        """Returns a string representation of the board."""
        return self.render()

    def print(self) -> None:
        """Print the board to the console."""
        print(self.render())
