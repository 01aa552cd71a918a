"""Calendar Date Puzzle Solver.

Covers a 7x7 calendar board with eight polyomino pieces, leaving only the cells of
a chosen month and day uncovered.  Each piece may be rotated and mirrored.  Uses
row-by-row backtracking to find the first tiling.
"""

from sys import argv, exit

from .puzzle_date import requested_dates
from .solver import solver


def main() -> None:
    """Main entry point for the date puzzle solver."""
    # Expect two arguments: month and day (0 0 solves every date)
    if len(argv) != 3:
        print("Usage: python -m datepuzzle <month> <day>   (use 0 0 for all dates)")
        exit(1)
    try:
        dates = requested_dates(int(argv[1]), int(argv[2]))
    except ValueError as e:
        print(f"Invalid date: {e}")
        exit(1)

    results = solver.run(dates)
    n_solved = sum(1 for result in results if result.solved)
    print(f"Solved {n_solved}/{len(results)} dates.")
