"""Shared model contracts for report data flow."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class Severity(str, Enum):
    NORMAL = "normal"
    GOOD = "good"
    BAD = "bad"
    WARN = "warn"
    UNKNOWN = "unknown"


class TitleStrategy(str, Enum):
    DEFAULT = "Default"
    WORKSPACE_NAME = "WorkspaceName"
    PROJECT_NAME = "ProjectName"
    VCS_BRANCH = "VcsBranch"
    WORKSPACE_AND_BRANCH = "WorkspaceAndBranch"


@dataclass(frozen=True)
class Fact:
    key: str
    value: str
    severity: Severity = Severity.NORMAL

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value, "severity": self.severity.value}


@dataclass(frozen=True)
class Group:
    name: str
    expanded: bool = True
    facts: tuple[Fact, ...] = field(default_factory=tuple)

    def fact(self, key: str) -> Fact | None:
        for item in self.facts:
            if item.key == key:
                return item
        return None

    def with_facts(self, facts: Iterable[Fact]) -> "Group":
        return replace(self, facts=tuple(facts))

    def with_expanded(self, expanded: bool) -> "Group":
        return replace(self, expanded=bool(expanded))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "expanded": self.expanded,
            "facts": [item.to_dict() for item in self.facts],
        }


class Report(Mapping[str, Group]):
    """Group name -> Group, mutated only by whole-group swaps.

    Groups are immutable, so a reader holding a Group (or iterating a snapshot)
    never sees one half-built. Writers swap slots under a single lock.
    """

    def __init__(self, groups: Iterable[Group] = ()):
        self._lock = threading.Lock()
        self._groups: dict[str, Group] = {group.name: group for group in groups}

    def __getitem__(self, name: str) -> Group:
        with self._lock:
            return self._groups[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._groups)

    def snapshot(self) -> dict[str, Group]:
        with self._lock:
            return dict(self._groups)

    def replace_group(self, group: Group) -> None:
        with self._lock:
            self._groups[group.name] = group

    def replace_groups(self, groups: Iterable[Group]) -> None:
        staged = list(groups)
        with self._lock:
            for group in staged:
                self._groups[group.name] = group

    def lookup(self, group_name: str, fact_key: str) -> str | None:
        group = self.get(group_name)
        if group is None:
            return None
        item = group.fact(fact_key)
        return item.value if item is not None else None

    def to_dict(self) -> dict[str, Any]:
        return {name: group.to_dict() for name, group in self.snapshot().items()}
