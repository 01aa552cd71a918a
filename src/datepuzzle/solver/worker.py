"""Worker processes for the parallel solver: one task per date."""

from dataclasses import dataclass
from multiprocessing.sharedctypes import Synchronized
from time import time

from datepuzzle.board import Board
from datepuzzle.puzzle_date import PuzzleDate
from datepuzzle.shapes import Catalog, get_catalog
from datepuzzle.solver.search import SearchStats, solve
from datepuzzle.solver.utils import time_str


@dataclass(kw_only=True)
class WorkerState:
    """Global state maintained by each worker process."""

    worker_idx: int
    """Index of the worker process."""

    start_time: float
    """Timestamp when the run started, in seconds since the epoch."""

    catalog: Catalog
    """Piece catalog, built once per process and only read afterwards."""

    n_dates_solved: int = 0
    """Number of dates this worker has finished (solved or not)."""


worker_state: WorkerState | None = None
"""Global state for each worker process."""


def init_worker_globals(worker_ctr: "Synchronized[int]", start_time: float) -> None:
    """Initialize global variables for worker processes.

    Args:
        worker_ctr (Synchronized[int]): Shared counter for workers.
        start_time (float): UNIX timestamp when the solver started.
    """
    global worker_state  # noqa: PLW0603
    with worker_ctr.get_lock():
        # Get and set the shared worker counter atomically, using the obtained value
        # as the worker index
        worker_idx = worker_ctr.value
        worker_ctr.value += 1

    worker_state = WorkerState(
        worker_idx=worker_idx,
        start_time=start_time,
        catalog=get_catalog(),
    )
    print(f"Worker {worker_state.worker_idx} initialized.", flush=True)


def worker_task(month: int, day: int) -> tuple[Board, SearchStats, bool]:
    """Worker task to solve the puzzle for one date.

    Args:
        month (int): Month, 1..12.
        day (int): Day, 1..31.

    Returns:
        The final board (the tiling if solved, otherwise the blocked starting board),
        the search statistics, and whether a tiling was found.
    """
    # Ensure worker_state is initialized
    if not worker_state:
        raise RuntimeError("Worker state not initialized. Call init_worker_globals first.")

    date = PuzzleDate(month, day)
    label = f"Worker {worker_state.worker_idx}, {date}"
    board = Board.for_date(month, day)
    stats = SearchStats()

    solved = solve(board, worker_state.catalog, stats=stats, label=label)
    worker_state.n_dates_solved += 1

    run_time = time_str(time() - worker_state.start_time)
    if solved:
        print(f"{label}: solution found! ({stats.summary()}, run time {run_time})", flush=True)
    else:
        print(f"{label}: no solution found. ({stats.summary()}, run time {run_time})", flush=True)

    return board, stats, solved
