import asyncio
import logging
from typing import Callable, Coroutine, List

from volume_stats_exporter.utils.date_utils import parse_duration

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Manages the scheduling and execution of periodic async tasks using asyncio.

    Each job runs in its own task, one run at a time: a run that overruns
    the interval delays the next one instead of overlapping with it.
    """

    def __init__(self):
        self.tasks: List[asyncio.Task] = []
        logger.debug("AsyncScheduler initialized.")

    async def _run_periodically(
        self, interval_seconds: float, job_func: Callable[[], Coroutine], run_immediately: bool
    ):
        """Internal loop to run a job on a fixed cadence."""
        loop = asyncio.get_running_loop()
        job_name = getattr(job_func, "__name__", repr(job_func))
        try:
            if not run_immediately:
                await asyncio.sleep(interval_seconds)
            while True:
                started = loop.time()
                try:
                    await job_func()
                except Exception as e:
                    logger.error(f"Error in scheduled job '{job_name}': {e}", exc_info=True)

                elapsed = loop.time() - started
                await asyncio.sleep(max(0.0, interval_seconds - elapsed))
        except asyncio.CancelledError:
            logger.info(f"Job '{job_name}' cancelled.")
            raise

    def add_job(
        self,
        job_func: Callable[[], Coroutine],
        interval_seconds: float,
        run_immediately: bool = True,
    ) -> asyncio.Task:
        """
        Adds a new async job to the schedule.

        With run_immediately the first run starts right away instead of
        after the first interval.
        """
        if interval_seconds <= 0:
            raise ValueError(f"Interval must be positive, got {interval_seconds}.")

        task = asyncio.create_task(self._run_periodically(interval_seconds, job_func, run_immediately))
        self.tasks.append(task)
        logger.info(
            f"Scheduled job '{getattr(job_func, '__name__', repr(job_func))}' to run every {interval_seconds:g}s."
        )
        return task

    def add_job_from_string(
        self, job_func: Callable[[], Coroutine], interval_str: str, run_immediately: bool = True
    ) -> asyncio.Task:
        """
        Adds a job based on a Go-style duration string like '30s', '1m30s' or '1h'.
        """
        return self.add_job(job_func, parse_duration(interval_str), run_immediately=run_immediately)

    async def stop(self):
        """Cancels all scheduled tasks, including a run in progress."""
        logger.info("Stopping scheduler...")
        for task in self.tasks:
            task.cancel()
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)
        self.tasks.clear()
