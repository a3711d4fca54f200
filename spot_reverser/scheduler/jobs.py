"""
Cron-driven jobs for spot-reverser.

A Job pairs a cron expression with a callable. JobScheduler keeps the jobs,
tells how long until the next one is due and runs the due ones one after
another. Due times come from croniter.

A job run never raises: any failure is logged and the job is rescheduled
for its next tick. Rescheduling starts from the moment the run completes,
so a run that overruns its slot skips the missed ticks instead of being
started twice.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from croniter import croniter

from spot_reverser.core.exceptions import SyncError
from spot_reverser.core.logger import get_logger


logger = get_logger(__name__)

Clock = Callable[[], datetime]


class Job:
    """
    A callable scheduled by a cron expression.

    Attributes:
        cron_expression: 5-field cron expression. Example: "0 * * * *"
        func: Called with no arguments on every tick.
        name: Label used in log messages.
        next_run: Next due time.
        runs: Number of completed runs, successful or not.
        failures: Number of runs that ended with an error.
    """

    def __init__(
        self,
        cron_expression: str,
        func: Callable[[], Any],
        name: str | None = None,
        now: datetime | None = None
    ) -> None:
        if not croniter.is_valid(cron_expression):
            raise ValueError(f"Invalid cron expression: {cron_expression!r}")

        self.cron_expression = cron_expression
        self.func = func
        self.name = name or getattr(func, "__name__", "job")
        self.next_run = self.next_after(now or datetime.now())
        self.runs = 0
        self.failures = 0

    def next_after(self, moment: datetime) -> datetime:
        """Return the first due time strictly after `moment`."""
        return croniter(self.cron_expression, moment).get_next(datetime)

    def is_due(self, now: datetime) -> bool:
        return now >= self.next_run

    def run(self, clock: Clock = datetime.now) -> bool:
        """
        Run the job once and schedule its next tick.

        Returns:
            True if the callable completed, False if it raised.
        """
        logger.info(f"Starting run of {self.name}")
        ok = False

        try:
            self.func()
            ok = True
        except SyncError as e:
            logger.error(f"Run of {self.name} failed: {e}")
        except Exception as e:
            logger.exception(f"Run of {self.name} failed unexpectedly: {e}")
        finally:
            self.runs += 1
            if not ok:
                self.failures += 1
            self.next_run = self.next_after(clock())

        if ok:
            logger.info(f"Run of {self.name} completed")
        else:
            logger.info(f"Will retry {self.name} on next scheduled run")
        return ok

    def __repr__(self) -> str:
        return f"Job(name={self.name!r}, cron={self.cron_expression!r}, next_run={self.next_run!r})"


class JobScheduler:
    """
    Keeps cron jobs and runs the due ones sequentially.

    Args:
        clock: Returns the current time. Defaults to datetime.now (local time,
               like cron).

    Example:
        scheduler = JobScheduler()
        scheduler.add("0 * * * *", do_work, name="reverse")
        remaining = scheduler.time_till_next_job()
    """

    def __init__(self, clock: Clock = datetime.now) -> None:
        self.clock = clock
        self._jobs: list[Job] = []

    @property
    def jobs(self) -> tuple[Job, ...]:
        return tuple(self._jobs)

    def add(self, cron_expression: str, func: Callable[[], Any], name: str | None = None) -> Job:
        """
        Schedule `func` on `cron_expression`.

        Raises:
            ValueError: If the cron expression is invalid.
        """
        job = Job(cron_expression, func, name=name, now=self.clock())
        self._jobs.append(job)
        logger.debug(f"Scheduled {job!r}")
        return job

    def remove(self, job: Job) -> None:
        self._jobs.remove(job)

    def next_job(self) -> Job | None:
        """Return the job due soonest, or None when there are no jobs."""
        if not self._jobs:
            return None
        return min(self._jobs, key=lambda job: job.next_run)

    def time_till_next_job(self) -> timedelta | None:
        """
        Time until the soonest job is due.

        Returns:
            A non-negative timedelta, or None when no job is scheduled.
        """
        job = self.next_job()
        if job is None:
            return None
        return max(job.next_run - self.clock(), timedelta(0))

    def run_pending(self) -> int:
        """
        Run every due job, one after another.

        Returns:
            Number of jobs that were run.
        """
        now = self.clock()
        due = [job for job in self._jobs if job.is_due(now)]
        for job in due:
            job.run(self.clock)
        return len(due)
