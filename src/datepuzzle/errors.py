"""Exceptions raised by the date puzzle solver."""


class DatePuzzleError(Exception):
    """Base class for all date puzzle errors."""


class InvalidDateError(DatePuzzleError, ValueError):
    """Raised when a month or day is outside the range the board can show."""


class InvariantViolationError(DatePuzzleError, RuntimeError):
    """Raised when an internal contract is broken (e.g. a bad rotation index).

    These indicate a programming error rather than an unsolvable puzzle.
    """
