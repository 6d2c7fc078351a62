"""Background cadences: full refresh every few minutes, live games every minute."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from dota_tracker.refresh import Refresher

log = logging.getLogger(__name__)


class RefreshScheduler:
    def __init__(self, refresher: Refresher, refresh_interval: float, live_interval: float) -> None:
        self.refresher = refresher
        self.refresh_interval = refresh_interval
        self.live_interval = live_interval
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []

    def start(self) -> None:
        """Run a full refresh now, then keep both cadences going on daemon threads."""
        self._stop.clear()
        self._threads = [
            threading.Thread(
                target=self._loop,
                args=(self.refresher.refresh_all, self.refresh_interval, True),
                name="full-refresh",
                daemon=True,
            ),
            threading.Thread(
                target=self._loop,
                args=(self.refresher.refresh_live, self.live_interval, False),
                name="live-refresh",
                daemon=True,
            ),
        ]
        for thread in self._threads:
            thread.start()

    def stop(self, timeout: float | None = 5) -> None:
        self._stop.set()
        for thread in self._threads:
            thread.join(timeout)
        self._threads = []

    def _loop(self, job: Callable[[], bool], interval: float, run_first: bool) -> None:
        if run_first:
            self._run(job)
        while not self._stop.wait(interval):
            self._run(job)

    def _run(self, job: Callable[[], bool]) -> None:
        # A failing job must not kill its cadence
        try:
            job()
        except Exception:
            log.exception(f"{threading.current_thread().name} crashed")
