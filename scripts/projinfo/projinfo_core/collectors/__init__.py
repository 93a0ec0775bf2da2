"""Collector helpers and package exports."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

PROJECT_GROUP = "Project Info"
GIT_GROUP = "Git"
COMPILATION_GROUP = "Compilation"
PACKAGE_GROUP = "Package"

NO_DATA = "No data"
UNKNOWN = "Unknown"


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text())
    except (OSError, json.JSONDecodeError):
        return None


def file_mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def env_project_dir() -> Path:
    return Path(os.environ.get("PROJINFO_PROJECT_DIR") or os.getcwd())
