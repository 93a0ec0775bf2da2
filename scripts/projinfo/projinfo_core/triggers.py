"""Refresh trigger event source and project change watcher."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from pathlib import Path

from projinfo_core.collectors import file_mtime

logger = logging.getLogger(__name__)

PROJECT_CHANGED = "project-changed"
FOCUS = "focus"
MANUAL = "manual"
INTERVAL = "interval"

WATCHED_FILES = (
    ".git/HEAD",
    ".git/index",
    "pyproject.toml",
    "setup.cfg",
    "requirements.txt",
)

Handler = Callable[[str], None]


class RefreshTrigger:
    def __init__(self):
        self._handlers: dict[str, Handler] = {}

    def subscribe(self, handler: Handler) -> str:
        sub_id = str(uuid.uuid4())
        self._handlers[sub_id] = handler
        return sub_id

    def unsubscribe(self, sub_id: str) -> None:
        self._handlers.pop(sub_id, None)

    def fire(self, reason: str = MANUAL) -> int:
        delivered = 0
        for handler in list(self._handlers.values()):
            try:
                handler(reason)
                delivered += 1
            except Exception:
                logger.exception("refresh handler failed for %s", reason)
        return delivered


class ProjectWatcher:
    """Fires project-changed when any watched file's mtime signature moves."""

    def __init__(
        self,
        project_path: str | Path,
        trigger: RefreshTrigger,
        extra_paths: Iterable[str | Path] = (),
    ):
        root = Path(project_path)
        self.paths = [root / rel for rel in WATCHED_FILES] + [Path(p) for p in extra_paths]
        self.trigger = trigger
        self._signature = self.signature()

    def signature(self) -> tuple[float | None, ...]:
        return tuple(file_mtime(path) for path in self.paths)

    def check(self) -> bool:
        current = self.signature()
        if current == self._signature:
            return False
        self._signature = current
        logger.debug("project change detected")
        self.trigger.fire(PROJECT_CHANGED)
        return True
