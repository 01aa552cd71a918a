"""Calendar dates and where they sit on the board."""

from dataclasses import dataclass

from datepuzzle.errors import InvalidDateError

N_MONTHS = 12
N_DAYS = 31

MONTH_COLS = 6
"""Months fill the first two rows, six per row."""

DAY_COLS = 7
"""Days fill rows 2 onwards, seven per row."""

DAY_FIRST_ROW = 2

ALL_DATES_SENTINEL = 0
"""Passing 0 for both month and day requests every month/day combination."""


@dataclass(frozen=True, order=True)
class PuzzleDate:
    """A month/day pair to solve (1-based)."""

    month: int
    day: int

    def __post_init__(self) -> None:
        """Validate the ranges."""
        if not 1 <= self.month <= N_MONTHS:
            raise InvalidDateError(f"Month must be in 1..{N_MONTHS}, got {self.month}.")
        if not 1 <= self.day <= N_DAYS:
            raise InvalidDateError(f"Day must be in 1..{N_DAYS}, got {self.day}.")

    def __str__(self) -> str:
        return f"{self.month:02d}/{self.day:02d}"

    @property
    def month_cell(self) -> tuple[int, int]:
        """The (row, col) of the month cell."""
        return divmod(self.month - 1, MONTH_COLS)

    @property
    def day_cell(self) -> tuple[int, int]:
        """The (row, col) of the day cell."""
        row, col = divmod(self.day - 1, DAY_COLS)
        return row + DAY_FIRST_ROW, col

    def to_dict(self) -> dict[str, int]:
        """Return a pickle-friendly representation for worker processes."""
        return {"month": self.month, "day": self.day}


def all_dates() -> list[PuzzleDate]:
    """Every month/day combination, month-major (372 dates, including e.g. 02/31)."""
    return [
        PuzzleDate(month, day)
        for month in range(1, N_MONTHS + 1)
        for day in range(1, N_DAYS + 1)
    ]


def requested_dates(month: int, day: int) -> list[PuzzleDate]:
    """Resolve a command-line month/day request.

    Args:
        month (int): Month 1..12, or 0 together with `day == 0` for all dates.
        day (int): Day 1..31, or 0 together with `month == 0` for all dates.

    Raises:
        InvalidDateError: If the pair is neither a valid date nor the all-dates sentinel.
    """
    if month == ALL_DATES_SENTINEL and day == ALL_DATES_SENTINEL:
        return all_dates()
    return [PuzzleDate(month, day)]
