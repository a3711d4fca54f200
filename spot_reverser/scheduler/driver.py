"""
Scheduler driver for spot-reverser.

The process alternates between two states:

    Idle:    no run in progress; sleep exactly until the next due tick
    Running: the workflow executes; the driver waits for it to finish

Runs never overlap: the driver only returns to Idle once the run has
completed, successfully or not. A failed run is logged and the next tick
starts a fresh one. The only fatal condition is a scheduler without any
upcoming job.
"""

import time
from collections.abc import Callable
from typing import Any

from spot_reverser.core.config import Config
from spot_reverser.core.exceptions import SchedulerError
from spot_reverser.core.logger import get_logger
from spot_reverser.scheduler.jobs import JobScheduler
from spot_reverser.sync.workflow import run_sync


logger = get_logger(__name__)

JOB_NAME = "reverse-playlist"


def build_scheduler(
    config: Config,
    run: Callable[[Config], Any] | None = None,
    scheduler: JobScheduler | None = None
) -> JobScheduler:
    """
    Create a scheduler running the workflow on the configured cadence.

    Args:
        config: Validated configuration; passed to every run.
        run: Workflow entry point. Defaults to run_sync.
        scheduler: Existing scheduler to add the job to.

    Returns:
        The scheduler with one job added.
    """
    run = run if run is not None else run_sync
    scheduler = scheduler if scheduler is not None else JobScheduler()
    job = scheduler.add(config.schedule.cron, lambda: run(config), name=JOB_NAME)
    logger.info(f"Schedule: {config.schedule.cron}")
    logger.info(f"Next scheduled run: {job.next_run:%Y-%m-%d %H:%M:%S}")
    return scheduler


def run_forever(
    scheduler: JobScheduler,
    sleep: Callable[[float], None] = time.sleep,
    max_ticks: int | None = None
) -> None:
    """
    Drive the scheduler: sleep until the next tick, run, repeat.

    Args:
        scheduler: Scheduler holding the jobs.
        sleep: Sleep function (injected by tests).
        max_ticks: Stop after this many wake-ups. None runs forever.

    Raises:
        SchedulerError: If the scheduler has no upcoming job. This is a
                        configuration defect, unlike a failed run.
    """
    ticks = 0

    while max_ticks is None or ticks < max_ticks:
        remaining = scheduler.time_till_next_job()
        if remaining is None:
            raise SchedulerError("No jobs scheduled")

        logger.debug(f"Sleeping {remaining.total_seconds():.1f}s until next job")
        sleep(remaining.total_seconds())

        scheduler.run_pending()
        ticks += 1
