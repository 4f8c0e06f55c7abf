"""
Update scheduler.

Runs one tick right away, then hands the updater to APScheduler on the
configured crontab. A tick that fires while the previous one is still
running is skipped (max_instances=1) and missed ticks are coalesced.
"""

import logging
from typing import Optional

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from .dns_updater import DNSUpdater

logger = logging.getLogger(__name__)

JOB_ID = "dns-update-tick"


class UpdateScheduler:
    """Drives an updater from a cron expression."""

    def __init__(self, updater: DNSUpdater, cron: str, scheduler: Optional[BlockingScheduler] = None):
        self.updater = updater
        self.trigger = CronTrigger.from_crontab(cron)
        self.scheduler = scheduler or BlockingScheduler()

    def start(self) -> None:
        """Run the initial tick synchronously, then block on the schedule."""
        self.updater.run_tick()

        self.scheduler.add_job(
            func=self.updater.run_tick,
            trigger=self.trigger,
            id=JOB_ID,
            name="DNS update tick",
            max_instances=1,
            coalesce=True,
        )
        logger.info(f"Scheduled updates (Trigger: {self.trigger})")
        self.scheduler.start()

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
