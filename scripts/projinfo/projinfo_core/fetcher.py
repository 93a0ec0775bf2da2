"""Poll-until-complete wrapper around slow data sources."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from projinfo_core.models import Fact

logger = logging.getLogger(__name__)

SourceFn = Callable[[], Iterable[Any]]


@dataclass
class FetchOutcome:
    source_id: str
    facts: list[Fact] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def records_to_facts(records: Iterable[Any]) -> list[Fact]:
    return [Fact(str(record.name), str(record.version)) for record in records]


class AsyncSourceFetcher:
    """At most one in-flight fetch per source, drained by non-blocking poll()."""

    def __init__(self, sources: dict[str, SourceFn], max_workers: int = 2):
        self._sources = dict(sources)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="projinfo-fetch")
        self._lock = threading.Lock()
        self._pending: dict[str, Future] = {}
        self._completed = threading.Event()

    def start(self, source_id: str) -> bool:
        """Issue a fetch unless one is already pending. Returns True if issued."""
        fn = self._sources.get(source_id)
        if fn is None:
            logger.warning("no fetch registered for source: %s", source_id)
            return False

        with self._lock:
            if source_id in self._pending:
                return False
            future = self._executor.submit(fn)
            self._pending[source_id] = future
        future.add_done_callback(lambda _f: self._completed.set())
        logger.debug("fetch started: %s", source_id)
        return True

    def is_pending(self, source_id: str) -> bool:
        with self._lock:
            return source_id in self._pending

    def poll(self) -> FetchOutcome | None:
        with self._lock:
            done_id = next((sid for sid, fut in self._pending.items() if fut.done()), None)
            future = self._pending.pop(done_id) if done_id is not None else None
            self._completed.clear()
            # A fetch may finish between the scan and clear().
            if any(fut.done() for fut in self._pending.values()):
                self._completed.set()
            if future is None:
                return None

        exc = future.exception()
        if exc is not None:
            logger.warning("fetch failed: %s (%s)", done_id, exc)
            return FetchOutcome(done_id, error=str(exc) or type(exc).__name__)
        try:
            facts = records_to_facts(future.result())
        except (AttributeError, TypeError) as exc:
            logger.warning("fetch returned malformed records: %s (%s)", done_id, exc)
            return FetchOutcome(done_id, error=f"malformed records: {exc}")
        logger.debug("fetch completed: %s (%d records)", done_id, len(facts))
        return FetchOutcome(done_id, facts=facts)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until some pending fetch completes; for worker threads only."""
        with self._lock:
            if not self._pending:
                return False
        return self._completed.wait(timeout)

    def shutdown(self) -> None:
        with self._lock:
            self._pending.clear()
        self._executor.shutdown(wait=False, cancel_futures=True)
