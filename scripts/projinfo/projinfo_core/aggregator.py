"""Report aggregation: synchronous collectors plus async package merge."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from pathlib import Path

from projinfo_core.collectors import (
    COMPILATION_GROUP,
    GIT_GROUP,
    PACKAGE_GROUP,
    PROJECT_GROUP,
)
from projinfo_core.collectors import compilation, git, project
from projinfo_core.collectors.packages import PACKAGES_SOURCE
from projinfo_core.environment import HostEnvironment
from projinfo_core.fetcher import AsyncSourceFetcher
from projinfo_core.formatting import format_group_text, format_report_text
from projinfo_core.models import Fact, Group, Report
from projinfo_core.preferences import preference_key
from projinfo_core.runner import DEFAULT_TIMEOUT, run_command

logger = logging.getLogger(__name__)

SOURCE_GROUPS = {
    PACKAGES_SOURCE: PACKAGE_GROUP,
}


class ReportAggregator:
    def __init__(
        self,
        preferences,
        fetcher: AsyncSourceFetcher | None = None,
        env: HostEnvironment | None = None,
        git_executable: str = "git",
        command_timeout: float = DEFAULT_TIMEOUT,
        runner=run_command,
        groups: Iterable[str] | None = None,
    ):
        self.preferences = preferences
        self.fetcher = fetcher
        self.env = env or HostEnvironment()
        self.git_executable = git_executable
        self.command_timeout = command_timeout
        self.runner = runner
        # None collects every group.
        self.enabled_groups = set(groups) if groups is not None else None
        self.report = Report()
        self.refreshed_at: float | None = None

    def is_enabled(self, name: str) -> bool:
        return self.enabled_groups is None or name in self.enabled_groups

    def _expanded(self, name: str) -> bool:
        return self.preferences.get_bool(preference_key(name), True)

    def _group(self, name: str, facts: Iterable[Fact]) -> Group:
        return Group(name=name, expanded=self._expanded(name), facts=tuple(facts))

    def _git_facts(self, project_path: str | Path | None) -> list[Fact]:
        return git.inspect(
            project_path,
            runner=self.runner,
            executable=self.git_executable,
            timeout=self.command_timeout,
        )

    def refresh(self, project_path: str | Path | None) -> Report:
        """Rebuild the synchronous groups and kick off the package listing.

        Runs git on the calling thread; each call is bounded by command_timeout.
        Disabled groups are not collected.
        """
        collectors = [
            (PROJECT_GROUP, lambda: project.collect(project_path, self.env)),
            (GIT_GROUP, lambda: self._git_facts(project_path)),
            (COMPILATION_GROUP, lambda: compilation.collect(self.env.build)),
        ]
        groups = [self._group(name, collect()) for name, collect in collectors if self.is_enabled(name)]
        self.report.replace_groups(groups)
        self.refreshed_at = time.time()
        logger.info("report refreshed for %s", project_path or "<no project>")

        if self.fetcher is not None:
            for source_id, name in SOURCE_GROUPS.items():
                if self.is_enabled(name):
                    self.fetcher.start(source_id)
        return self.report

    def on_async_complete(self, source_id: str, facts: Iterable[Fact]) -> None:
        name = SOURCE_GROUPS.get(source_id, source_id)
        current = self.report.get(name)
        if current is not None:
            group = current.with_facts(facts)
        else:
            group = self._group(name, facts)
        self.report.replace_group(group)

    def tick(self) -> bool:
        """Drain one completed fetch. Returns True if the report changed."""
        if self.fetcher is None:
            return False
        outcome = self.fetcher.poll()
        if outcome is None:
            return False
        if not outcome.ok:
            logger.warning("keeping stale %s group: %s", outcome.source_id, outcome.error)
            return False
        self.on_async_complete(outcome.source_id, outcome.facts)
        return True

    def set_expanded(self, name: str, expanded: bool) -> None:
        self.preferences.set_bool(preference_key(name), expanded)
        current = self.report.get(name)
        if current is not None and current.expanded != expanded:
            self.report.replace_group(current.with_expanded(expanded))

    def export_text(self) -> str:
        return format_report_text(self.report.snapshot())

    def copy_group(self, name: str) -> str:
        group = self.report.get(name)
        return format_group_text(group) if group is not None else ""
