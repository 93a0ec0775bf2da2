"""Key/value preference stores for persisted UI state."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from projinfo_core.collectors import read_json

logger = logging.getLogger(__name__)

PREFERENCE_PREFIX = "ProjectInfo."


def preference_key(name: str) -> str:
    return f"{PREFERENCE_PREFIX}{name}"


class MemoryPreferenceStore:
    def __init__(self, values: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(values or {})

    def _get(self, key: str) -> Any:
        return self._values.get(key)

    def _set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def get_bool(self, key: str, default: bool) -> bool:
        value = self._get(key)
        return value if isinstance(value, bool) else default

    def set_bool(self, key: str, value: bool) -> None:
        self._set(key, bool(value))

    def get_string(self, key: str, default: str) -> str:
        value = self._get(key)
        return value if isinstance(value, str) else default

    def set_string(self, key: str, value: str) -> None:
        self._set(key, str(value))

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)


class JsonPreferenceStore(MemoryPreferenceStore):
    """Preferences persisted to a JSON object file, rewritten on every set."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        data = read_json(self.path)
        if data is not None and not isinstance(data, dict):
            logger.warning("ignoring preferences file with non-object payload: %s", self.path)
            data = None
        super().__init__(data)

    def _set(self, key: str, value: Any) -> None:
        super()._set(key, value)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._values, indent=2, sort_keys=True))
        except OSError as exc:
            logger.warning("could not write preferences to %s: %s", self.path, exc)
