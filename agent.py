# ======================================================================
#  File......: agent.py
#  Purpose...: Background poll scheduler (fetch -> estimate -> render ->
#              publish latest report to subscribers).
#  Version...: 1.0.0
#  Date......: 2026-10-19
#  Author....: Edwin Rodriguez
# ======================================================================

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from errors import MonitorError, ProviderError
from models import JobSnapshot, Report
from report import build_report

logger = logging.getLogger(__name__)

IDLE = "idle"
RUNNING = "running"

Subscriber = Callable[[Report], None]


class PollScheduler:
    """
    Runs the monitoring cycle on a fixed period from its own thread.

    The scheduler owns the latest Report. Subscribers are called from the
    polling thread and must marshal onto their own context themselves
    (see presentation.deliver_report).
    """

    def __init__(
        self,
        fetch_jobs: Callable[[], List[JobSnapshot]],
        poll_interval_sec: float = 5.0,
        fetch_timeout_sec: Optional[float] = 30.0,
        isolate_bad_records: bool = False,
    ):
        self.fetch_jobs = fetch_jobs
        self.poll_interval_sec = poll_interval_sec
        self.fetch_timeout_sec = fetch_timeout_sec
        self.isolate_bad_records = isolate_bad_records

        self.stop_flag = threading.Event()
        self.pause_flag = threading.Event()
        self.thread: Optional[threading.Thread] = None
        self._worker: Optional[threading.Thread] = None

        self._cycle_lock = threading.Lock()
        self._report_lock = threading.Lock()
        self._report: Optional[Report] = None
        self._subscribers: List[Subscriber] = []

    # -----------------------------------------------------------------
    # State / subscription
    # -----------------------------------------------------------------

    @property
    def state(self) -> str:
        return RUNNING if self._cycle_lock.locked() else IDLE

    @property
    def latest_report(self) -> Optional[Report]:
        with self._report_lock:
            return self._report

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register for new reports. The current report, if any, is sent right away."""
        with self._report_lock:
            self._subscribers.append(callback)
            current = self._report

        if current is not None:
            self._notify(callback, current)

        def unsubscribe() -> None:
            with self._report_lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, callback: Subscriber, report: Report) -> None:
        try:
            callback(report)
        except Exception:
            logger.exception("Report subscriber %r failed", callback)

    def _publish(self, report: Report) -> None:
        with self._report_lock:
            self._report = report
            subscribers = list(self._subscribers)

        for cb in subscribers:
            self._notify(cb, report)

    # -----------------------------------------------------------------
    # Cycle
    # -----------------------------------------------------------------

    def _fetch(self) -> List[JobSnapshot]:
        """
        Call the provider on a worker thread so a hung query can be abandoned.
        At most one worker exists: while an abandoned one is still stuck, later
        cycles wait for it instead of starting another.
        """
        stuck = self._worker
        if stuck is not None and stuck.is_alive():
            stuck.join(self.fetch_timeout_sec)
            if stuck.is_alive():
                raise ProviderError("Previous storage job provider query is still running")

        result: Dict[str, Any] = {}

        def target() -> None:
            try:
                result["jobs"] = self.fetch_jobs()
            except Exception as e:
                result["error"] = e

        worker = threading.Thread(target=target, name="storage-job-fetch", daemon=True)
        self._worker = worker
        worker.start()
        worker.join(self.fetch_timeout_sec)

        if worker.is_alive():
            raise ProviderError(
                f"Timed out after {self.fetch_timeout_sec:g}s waiting for the storage job provider"
            )
        if "error" in result:
            raise result["error"]
        return result["jobs"]

    def run_cycle(self) -> Optional[Report]:
        """
        Run one fetch/estimate/render pass and publish the result.
        Returns None without doing anything if a cycle is already running.
        """
        if not self._cycle_lock.acquire(blocking=False):
            logger.debug("Poll cycle already in progress; skipping")
            return None

        try:
            started = time.monotonic()
            try:
                jobs = self._fetch()
                report = build_report(jobs, isolate_bad_records=self.isolate_bad_records)
                logger.debug(
                    "Poll cycle: %d job(s) in %.2fs", len(jobs), time.monotonic() - started
                )
            except MonitorError as e:
                logger.warning("Poll cycle failed: %s", e)
                report = Report.error(str(e))
            except Exception as e:
                logger.exception("Unexpected error in poll cycle")
                report = Report.error(str(e))

            self._publish(report)
            return report
        finally:
            self._cycle_lock.release()

    # -----------------------------------------------------------------
    # Timer control
    # -----------------------------------------------------------------

    def start(self, block: bool = True) -> None:
        """
        Run the first cycle, then keep polling on the timer thread.

        With block=False the first cycle runs as the timer thread's first
        iteration, so callers (tray, status page) come up without waiting on
        the provider.
        """
        if self.thread and self.thread.is_alive():
            self.pause_flag.clear()
            return

        self.stop_flag.clear()
        self.pause_flag.clear()

        if block:
            self.run_cycle()

        self.thread = threading.Thread(
            target=self._run_loop, args=(not block,), name="poll-scheduler", daemon=True
        )
        self.thread.start()

    def pause(self) -> None:
        self.pause_flag.set()

    def resume(self) -> None:
        self.pause_flag.clear()

    def refresh(self) -> threading.Thread:
        """Out-of-band cycle (skipped if one is already running)."""
        t = threading.Thread(target=self.run_cycle, name="poll-refresh", daemon=True)
        t.start()
        return t

    def stop(self, timeout: Optional[float] = None) -> None:
        self.stop_flag.set()
        self.pause_flag.clear()
        if self.thread and timeout is not None:
            self.thread.join(timeout)

    def _run_loop(self, run_first: bool = False) -> None:
        interval = self.poll_interval_sec
        if run_first and not self.stop_flag.is_set():
            self.run_cycle()
        next_fire = time.monotonic() + interval

        while not self.stop_flag.wait(max(0.0, next_fire - time.monotonic())):
            next_fire += interval
            if not self.pause_flag.is_set():
                self.run_cycle()

            # a slow cycle drops the fires it overran instead of bunching them
            now = time.monotonic()
            if next_fire < now:
                next_fire += (int((now - next_fire) // interval) + 1) * interval
