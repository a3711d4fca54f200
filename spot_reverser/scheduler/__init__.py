"""
Scheduling for spot-reverser.

    - Job, JobScheduler: cron jobs computed with croniter
    - build_scheduler: one job running the workflow on the configured cadence
    - run_forever: Idle/Running driver loop
"""

from spot_reverser.scheduler.driver import build_scheduler, run_forever
from spot_reverser.scheduler.jobs import Job, JobScheduler

__all__ = [
    "Job",
    "JobScheduler",
    "build_scheduler",
    "run_forever",
]
