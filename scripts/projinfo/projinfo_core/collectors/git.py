"""Git working-copy collector (fail-soft)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from projinfo_core.collectors import NO_DATA
from projinfo_core.models import Fact, Severity
from projinfo_core.runner import DEFAULT_TIMEOUT, run_command

logger = logging.getLogger(__name__)

BRANCH_KEY = "Branch"
COMMIT_KEY = "Commit"
STATUS_KEY = "Status"
AHEAD_BEHIND_KEY = "Ahead/Behind"

BRANCH_ARGS = "rev-parse --abbrev-ref HEAD"
COMMIT_ARGS = "rev-parse --short HEAD"
STATUS_ARGS = "status --porcelain"
AHEAD_BEHIND_ARGS = "rev-list --left-right --count HEAD...@{upstream}"

NO_UPSTREAM = (-1, -1)

Runner = Callable[..., str]


def parse_ahead_behind(output: str) -> tuple[int, int]:
    text = (output or "").strip()
    if not text:
        return NO_UPSTREAM
    parts = text.split("\t")
    if len(parts) != 2:
        return NO_UPSTREAM
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return NO_UPSTREAM


def format_ahead_behind(ahead: int, behind: int) -> tuple[str, Severity]:
    if (ahead, behind) == NO_UPSTREAM:
        return NO_DATA, Severity.UNKNOWN
    if ahead == 0 and behind == 0:
        return "Up to date", Severity.NORMAL

    parts = []
    if ahead > 0:
        parts.append(f"↑{ahead}")
    if behind > 0:
        parts.append(f"↓{behind}")
    return " ".join(parts).strip(), Severity.WARN


def no_data_facts() -> list[Fact]:
    return [
        Fact(BRANCH_KEY, NO_DATA, Severity.UNKNOWN),
        Fact(COMMIT_KEY, NO_DATA, Severity.UNKNOWN),
        Fact(STATUS_KEY, NO_DATA, Severity.UNKNOWN),
        Fact(AHEAD_BEHIND_KEY, NO_DATA, Severity.UNKNOWN),
    ]


def inspect(
    project_path: str | Path | None,
    runner: Runner = run_command,
    executable: str = "git",
    timeout: float = DEFAULT_TIMEOUT,
) -> list[Fact]:
    """Return branch, commit, status and ahead/behind facts, in that order."""
    if not project_path:
        return no_data_facts()

    def git(args: str) -> str:
        return runner(executable, args, project_path, timeout)

    try:
        branch = git(BRANCH_ARGS)
        commit = git(COMMIT_ARGS)
        dirty = bool(git(STATUS_ARGS))
        ahead, behind = parse_ahead_behind(git(AHEAD_BEHIND_ARGS))
        ahead_behind, ahead_behind_severity = format_ahead_behind(ahead, behind)
    except Exception:
        logger.exception("git inspection failed for %s", project_path)
        return no_data_facts()

    return [
        Fact(BRANCH_KEY, branch),
        Fact(COMMIT_KEY, commit),
        Fact(STATUS_KEY, "Dirty", Severity.BAD) if dirty else Fact(STATUS_KEY, "Clean", Severity.GOOD),
        Fact(AHEAD_BEHIND_KEY, ahead_behind, ahead_behind_severity),
    ]
