"""Main solver module: runs the parallel solver over a batch of dates."""

import os
from concurrent.futures import ProcessPoolExecutor
from datetime import datetime
from multiprocessing import Value
from multiprocessing.sharedctypes import Synchronized
from pathlib import Path
from pprint import pprint
from time import time
from typing import TextIO

from datepuzzle.puzzle_date import PuzzleDate
from datepuzzle.shapes import get_catalog
from datepuzzle.solver.config import config as solver_config
from datepuzzle.solver.parallel import Result, solve_dates
from datepuzzle.solver.utils import TIMESTAMP_FMT, time_str
from datepuzzle.solver.worker import init_worker_globals


def get_executor(*, n_workers: int | None = None, n_tasks: int | None = None) -> ProcessPoolExecutor:
    """Get a ProcessPoolExecutor.

    Args:
        n_workers (int | None): Number of worker processes to create.  If None,
            defaults to number of CPU cores minus one.
        n_tasks (int | None): Number of tasks to be submitted; no more workers than
            tasks are started.

    Returns:
        A ProcessPoolExecutor instance for worker processes.
    """
    worker_ctr: Synchronized[int] = Value("i", 0)

    cpus = os.cpu_count() or 1  # Fallback to 1 if os.cpu_count() is None
    if n_workers is None:
        n_workers = max(1, cpus - 1)  # Leave one core free
    if n_workers < 1:
        raise ValueError(f"Number of workers must be positive, got {n_workers}")
    if n_workers > cpus:
        raise ValueError(
            f"Requested number of workers ({n_workers}) exceeds CPU count ({cpus})",
        )
    if n_tasks is not None:
        n_workers = max(1, min(n_workers, n_tasks))
    return ProcessPoolExecutor(
        max_workers=n_workers,
        initializer=init_worker_globals,
        initargs=(worker_ctr, time()),
    )


def log_path(dates: list[PuzzleDate]) -> Path:
    """Log file for a run: `MM-DD.log` for a single date, else `all-dates.log`."""
    if len(dates) == 1:
        name = f"{dates[0].month:02d}-{dates[0].day:02d}"
    else:
        name = "all-dates"
    return Path(solver_config.log_dir) / f"{name}.log"


def run(dates: list[PuzzleDate]) -> list[Result]:
    """Solve the given dates and print each outcome.

    Args:
        dates (list[PuzzleDate]): Dates to solve.

    Returns:
        One Result per date, sorted by date.
    """
    logfile = log_path(dates)
    print(f"Log file: {logfile}")
    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        results = solve_batch(dates, logf=logf)

    for result in results:
        print_result(result)
    return results


def print_result(result: Result, file: TextIO | None = None) -> None:
    """Print the rendered board for a solved date, or a no-solution line."""
    if result.solved and result.board is not None:
        print(f"Date {result.label}:", file=file)
        print(result.board.render(), file=file)
    elif result.status == "no_solution":
        print(f"Date {result.label}: no solution", file=file)
    else:
        print(f"Date {result.label}: error", file=file)
    print(file=file)


def solve_batch(dates: list[PuzzleDate], *, logf: TextIO) -> list[Result]:
    """Solve a batch of dates in worker processes, logging the run to `logf`.

    Args:
        dates (list[PuzzleDate]): Dates to solve.
        logf: File object to log the solving process.
    """
    start_time = time()
    start_time_str = datetime.fromtimestamp(start_time).astimezone().strftime(TIMESTAMP_FMT)
    print(f"Start time: {start_time_str}", file=logf, flush=True)
    print(f"Dates requested: {len(dates)}", file=logf, flush=True)

    catalog = get_catalog()
    print(
        f"Pieces: {len(catalog)}, total area {catalog.total_area}, "
        f"orientations {[len(o) for o in catalog.orientations]}",
        file=logf,
        flush=True,
    )
    print("Solver config:", file=logf, flush=True)
    pprint(solver_config.model_dump(), stream=logf, width=120)
    print("", file=logf, flush=True)
    print("#" * 80, file=logf, flush=True)
    print("", file=logf, flush=True)

    with get_executor(n_workers=solver_config.max_workers, n_tasks=len(dates)) as executor:
        try:
            results = solve_dates(executor, dates, logf)
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise

    n_solved = sum(1 for result in results if result.solved)
    n_unsolved = sum(1 for result in results if result.status == "no_solution")
    n_errors = len(results) - n_solved - n_unsolved
    print("", file=logf, flush=True)
    for result in results:
        print_result(result, file=logf)
    print(
        f"Solved {n_solved}/{len(results)} dates, {n_unsolved} without solution, "
        f"{n_errors} errors, time {time_str(time() - start_time)}",
        file=logf,
        flush=True,
    )
    return results
