"""Repeat a scrape job on a fixed interval with APScheduler."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from apscheduler.schedulers import SchedulerNotRunningError
from apscheduler.schedulers.blocking import BlockingScheduler

_log = logging.getLogger(__name__)


@dataclass
class SchedulerOptions:
    interval_minutes: int
    max_runs: int | None = None


class ScrapeLoop:
    """Runs ``job`` immediately, then every ``interval_minutes`` until ``max_runs``."""

    def __init__(
        self,
        job: Callable[[], object],
        options: SchedulerOptions,
        scheduler_factory: Callable[[], BlockingScheduler] = BlockingScheduler,
    ) -> None:
        if options.interval_minutes < 1:
            raise ValueError("interval_minutes must be at least 1")
        self.job = job
        self.options = options
        self.runs = 0
        self._scheduler_factory = scheduler_factory
        self._scheduler: BlockingScheduler | None = None

    def _done(self) -> bool:
        return self.options.max_runs is not None and self.runs >= self.options.max_runs

    def _tick(self) -> None:
        self.job()
        self.runs += 1
        _log.info("Scrape run %d complete", self.runs)
        if self._done() and self._scheduler is not None:
            try:
                self._scheduler.shutdown(wait=False)
            except SchedulerNotRunningError:
                pass

    def start(self) -> int:
        self._tick()
        if self._done():
            return self.runs
        self._scheduler = self._scheduler_factory()
        self._scheduler.add_job(self._tick, "interval", minutes=self.options.interval_minutes, id="scrape")
        self._scheduler.start()
        return self.runs


def start_scheduler(job: Callable[[], object], options: SchedulerOptions) -> int:
    return ScrapeLoop(job, options).start()
