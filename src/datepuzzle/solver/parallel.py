"""Implementation of the parallel solver: task distribution and result collection."""

import traceback
from collections.abc import Iterable
from concurrent.futures import Executor, as_completed
from dataclasses import dataclass
from typing import Literal, TextIO, TypedDict

from datepuzzle.board import Board
from datepuzzle.puzzle_date import PuzzleDate
from datepuzzle.solver.search import SearchStats
from datepuzzle.solver.worker import worker_task


class WorkerTaskPayload(TypedDict):
    """Payload submitted to worker processes."""

    month: int
    """Month to solve, 1..12."""
    day: int
    """Day to solve, 1..31."""


@dataclass
class Result:
    """Wrapper for worker task results."""

    month: int
    day: int
    status: Literal["success", "no_solution", "error"]
    board: Board | None = None
    stats: SearchStats | None = None
    err_msg: str | None = None

    @property
    def label(self) -> str:
        return str(PuzzleDate(self.month, self.day))

    @property
    def solved(self) -> bool:
        return self.status == "success"


def solve_dates(
    executor: Executor,
    dates: Iterable[PuzzleDate],
    logf: TextIO,
) -> list[Result]:
    """Solve every date on the executor, one task per date.

    A date that has no solution, or whose task fails, is recorded in its own result
    and does not stop the other dates.

    Args:
        executor (Executor): Executor running the tasks, with workers initialized by
            `init_worker_globals`.
        dates (Iterable[PuzzleDate]): Dates to solve.
        logf: File object to log the solving process.

    Returns:
        One Result per date, sorted by date.
    """
    tasks: list[WorkerTaskPayload] = [WorkerTaskPayload(**d.to_dict()) for d in dates]
    print(f"Submitting {len(tasks)} task(s)...", file=logf, flush=True)

    futures = {executor.submit(_worker_task, task): task for task in tasks}
    results: list[Result] = []
    for future in as_completed(futures):
        task = futures[future]
        try:
            result = future.result()
        except Exception as e:
            # The task never returned (e.g. the worker process died)
            result = Result(
                month=task["month"],
                day=task["day"],
                status="error",
                err_msg=f"Error retrieving worker result: {str(e)}\n{traceback.format_exc()}",
            )

        if result.status == "success" and result.stats is not None:
            print(f"{result.label}: solved, {result.stats.summary()}", file=logf, flush=True)
        elif result.status == "no_solution":
            print(f"{result.label}: no solution found.", file=logf, flush=True)
        else:
            print(f"{result.label}: encountered an error:", file=logf, flush=True)
            print(result.err_msg, file=logf, flush=True)
        results.append(result)

    results.sort(key=lambda r: (r.month, r.day))
    return results


def _worker_task(args: WorkerTaskPayload) -> Result:
    """Worker task to solve the puzzle for one date.

    Args:
        args (dict): Dictionary received from `executor.submit` containing:
            - "month": The month to solve.
            - "day": The day to solve.

    Returns:
        A Result wrapper.
    """
    try:
        board, stats, solved = worker_task(**args)
        return Result(
            month=args["month"],
            day=args["day"],
            status="success" if solved else "no_solution",
            board=board,
            stats=stats,
        )
    except Exception as e:
        return Result(
            month=args["month"],
            day=args["day"],
            status="error",
            err_msg=f"Worker encountered an error: {str(e)}\n{traceback.format_exc()}",
        )
