"""
Background recomputation of the daily plan.

Inputs change far more often than anyone looks at the result, so requests
supersede each other: only the newest pending request is computed and only
the newest result is kept.
"""
import logging
import threading
from datetime import date
from typing import Any, Generic, Iterable, Optional, Tuple, TypeVar

from .config import PlannerPrefs
from .metrics import SCHEDULE_TIME
from .models import Schedule, Task, TimetableEntry
from .scheduler import compute_schedule

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LatestResult(Generic[T]):
    """Single-slot channel: publishing overwrites, readers see only the newest value."""

    def __init__(self):
        self._cond = threading.Condition()
        self._value: Optional[T] = None
        self._version = 0

    @property
    def version(self) -> int:
        with self._cond:
            return self._version

    def publish(self, value: T) -> int:
        with self._cond:
            self._value = value
            self._version += 1
            self._cond.notify_all()
            return self._version

    def get(self) -> Optional[T]:
        with self._cond:
            return self._value

    def wait_for(self, version: int, timeout: Optional[float] = None) -> Tuple[int, Optional[T]]:
        """
        Block until something newer than `version` has been published.

        Returns:
            (version, value) current when the wait ended; the version equals the
            one passed in if the timeout expired first.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._version > version, timeout=timeout)
            return self._version, self._value


class PlanRecomputer:
    """Owns one worker thread that recomputes the plan for the latest submitted inputs."""

    def __init__(self, prefs: Optional[PlannerPrefs] = None,
                 results: Optional[LatestResult] = None):
        self.prefs = prefs or PlannerPrefs()
        self.results: LatestResult = results if results is not None else LatestResult()
        self._cond = threading.Condition()
        self._pending: Optional[Tuple[int, Any]] = None
        self._generation = 0
        self._running = False
        self._worker: Optional[threading.Thread] = None
        self._worker_live = False  # guarded by _cond; False once _run has decided to exit

    def submit(self, tasks: Iterable[Task],
               commitments: Iterable[TimetableEntry],
               day: date) -> int:
        """Queue a recompute, replacing any request that has not started yet."""
        snapshot = (tuple(tasks), tuple(commitments), day)
        with self._cond:
            self._generation += 1
            if self._pending is not None:
                logger.debug("superseding plan request %d", self._pending[0])
            self._pending = (self._generation, snapshot)
            self._cond.notify()
            return self._generation

    def start(self):
        with self._cond:
            if self._running:
                return
            self._running = True
            if self._worker_live:
                # a previous stop() timed out mid-run; that worker carries on
                logger.info("Plan recompute worker resumed")
                return
            self._worker_live = True
        self._worker = threading.Thread(target=self._run, name="plan-recompute", daemon=True)
        self._worker.start()
        logger.info("Plan recompute worker started")

    def stop(self, timeout: float = 5.0):
        with self._cond:
            self._running = False
            self._cond.notify_all()
        if self._worker:
            self._worker.join(timeout=timeout)
            if self._worker.is_alive():
                logger.warning("Plan recompute worker still busy after %.1fs", timeout)
                return
            self._worker = None
        logger.info("Plan recompute worker stopped")

    def __enter__(self) -> "PlanRecomputer":
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()

    def _take(self) -> Optional[Tuple[int, Any]]:
        with self._cond:
            self._cond.wait_for(lambda: self._pending is not None or not self._running)
            if not self._running:
                self._worker_live = False
                return None
            request, self._pending = self._pending, None
            return request

    def _is_latest(self, generation: int) -> bool:
        with self._cond:
            return generation == self._generation

    def _run(self):
        while True:
            request = self._take()
            if request is None:
                return
            generation, (tasks, commitments, day) = request
            try:
                with SCHEDULE_TIME.time():
                    schedule: Schedule = compute_schedule(tasks, commitments, day, self.prefs)
            except Exception:
                logger.exception("Failed to recompute plan for %s", day)
                continue
            if self._is_latest(generation):
                self.results.publish(schedule)
            else:
                logger.debug("dropping stale plan %d", generation)
