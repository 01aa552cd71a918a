"""Backtracking search that tiles a board with every piece of a catalog."""

from dataclasses import dataclass, field
from time import time

from bitarray.util import zeros

from datepuzzle.board import Board
from datepuzzle.shapes import Catalog, get_catalog
from datepuzzle.solver.config import config as solver_config
from datepuzzle.solver.utils import int_comma, time_str


@dataclass
class SearchStats:
    """Statistics collected during a search."""

    placements_tried: int = 0
    """Number of (piece, orientation, offset) candidates attempted."""

    placements_made: int = 0
    """Number of candidates that fit and were kept for a deeper search."""

    backtracks: int = 0
    """Number of placements undone after their subtree failed."""

    max_pieces_placed: int = 0
    """Largest number of pieces on the board at once."""

    start_time: float = field(default_factory=time)
    """Timestamp when the search started."""

    end_time: float | None = None
    """Timestamp when the search finished, None while running."""

    @property
    def elapsed(self) -> float:
        """Seconds spent searching (so far, if still running)."""
        return (self.end_time if self.end_time is not None else time()) - self.start_time

    def summary(self) -> str:
        return (
            f"{int_comma(self.placements_tried)} placements tried, "
            f"{int_comma(self.placements_made)} made, "
            f"{int_comma(self.backtracks)} backtracks, "
            f"time {time_str(self.elapsed)}"
        )


def report_progress(stats: SearchStats, label: str) -> None:
    """Print a one-line progress report to stdout."""
    print(
        f"{label}: {stats.summary()}, deepest {stats.max_pieces_placed} pieces",
        flush=True,
    )


def solve(
    board: Board,
    catalog: Catalog | None = None,
    *,
    anchor_first_open_cell: bool | None = None,
    report_interval: int | None = None,
    stats: SearchStats | None = None,
    label: str = "search",
) -> bool:
    """Place every piece of the catalog on the board, without overlaps.

    Pieces are placed row by row: every placement has its top edge on the first row
    that still has an open cell.  That cell must be covered by a piece whose top
    edge lies on that row, so no tiling is missed.  The first tiling found is kept.

    Args:
        board (Board): The board to fill.  Mutated in place: on success it holds the
            tiling, otherwise it is returned to its initial state.
        catalog (Catalog | None): Pieces to place.  Defaults to the calendar pieces.
        anchor_first_open_cell (bool | None): Only try the column offset that puts an
            orientation's first top-row cell on the first open cell of the row.
            Defaults to the solver config.
        report_interval (int | None): Placement attempts between progress reports
            (0 disables).  Defaults to the solver config.
        stats (SearchStats | None): Statistics object to update.
        label (str): Prefix for progress reports.

    Returns:
        True if every piece was placed, False if the search was exhausted.
    """
    if catalog is None:
        catalog = get_catalog()
    if anchor_first_open_cell is None:
        anchor_first_open_cell = solver_config.anchor_first_open_cell
    if report_interval is None:
        report_interval = solver_config.report_interval
    if stats is None:
        stats = SearchStats()

    # With the piece areas summing to the open area, placing every piece covers the board
    if catalog.total_area != board.count_open():
        stats.end_time = time()
        return False

    n_pieces = len(catalog)
    orientations = catalog.orientations
    used = zeros(n_pieces)
    n_cols = board.n_cols

    def place_next(piece_count: int, current_row: int) -> bool:
        if piece_count == n_pieces:
            return True
        if current_row >= board.n_rows:
            return False

        first_open = board.first_open_col(current_row)

        for piece_idx in range(n_pieces):
            if used[piece_idx]:
                continue
            for orientation in orientations[piece_idx]:
                if anchor_first_open_cell:
                    x = first_open - orientation.lead
                    offsets = range(x, x + 1) if 0 <= x <= n_cols - orientation.width else ()
                else:
                    offsets = range(n_cols - orientation.width + 1)

                for x in offsets:
                    stats.placements_tried += 1
                    if report_interval and stats.placements_tried % report_interval == 0:
                        report_progress(stats, label)

                    if not board.place_layout(orientation, x, current_row):
                        continue
                    stats.placements_made += 1
                    stats.max_pieces_placed = max(stats.max_pieces_placed, piece_count + 1)
                    used[piece_idx] = 1

                    if place_next(piece_count + 1, board.first_open_row(current_row)):
                        return True

                    board.remove_layout(orientation, x, current_row)
                    used[piece_idx] = 0
                    stats.backtracks += 1
        return False

    try:
        return place_next(0, board.first_open_row())
    finally:
        stats.end_time = time()
