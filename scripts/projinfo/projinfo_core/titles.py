"""Short display title derived from the report."""

from __future__ import annotations

from collections.abc import Mapping

from projinfo_core.collectors import GIT_GROUP, PROJECT_GROUP
from projinfo_core.collectors.git import BRANCH_KEY
from projinfo_core.collectors.project import PROJECT_NAME_KEY, WORKSPACE_KEY
from projinfo_core.models import Group, TitleStrategy
from projinfo_core.preferences import preference_key

DEFAULT_TITLE = "ProjectInfo"
DEFAULT_STRATEGY = TitleStrategy.WORKSPACE_NAME
STRATEGY_PREFERENCE = preference_key("TitleStrategy")

WORKSPACE_LOOKUP = (PROJECT_GROUP, WORKSPACE_KEY)
PROJECT_NAME_LOOKUP = (PROJECT_GROUP, PROJECT_NAME_KEY)
BRANCH_LOOKUP = (GIT_GROUP, BRANCH_KEY)


def _lookup(report: Mapping[str, Group], target: tuple[str, str]) -> str:
    group_name, fact_key = target
    group = report.get(group_name)
    if group is None:
        return DEFAULT_TITLE
    item = group.fact(fact_key)
    return item.value if item is not None else DEFAULT_TITLE


def resolve_title(report: Mapping[str, Group], strategy: TitleStrategy) -> str:
    if strategy == TitleStrategy.WORKSPACE_NAME:
        return _lookup(report, WORKSPACE_LOOKUP)
    if strategy == TitleStrategy.PROJECT_NAME:
        return _lookup(report, PROJECT_NAME_LOOKUP)
    if strategy == TitleStrategy.VCS_BRANCH:
        return _lookup(report, BRANCH_LOOKUP)
    if strategy == TitleStrategy.WORKSPACE_AND_BRANCH:
        return f"{_lookup(report, WORKSPACE_LOOKUP)}:{_lookup(report, BRANCH_LOOKUP)}"
    return DEFAULT_TITLE


def parse_strategy(value: str | None) -> TitleStrategy | None:
    if not value:
        return None
    text = value.strip()
    for strategy in TitleStrategy:
        if text.lower() in (strategy.value.lower(), strategy.name.lower()):
            return strategy
    return None


def load_strategy(prefs) -> TitleStrategy:
    stored = prefs.get_string(STRATEGY_PREFERENCE, DEFAULT_STRATEGY.value)
    return parse_strategy(stored) or DEFAULT_STRATEGY


def store_strategy(prefs, strategy: TitleStrategy) -> None:
    prefs.set_string(STRATEGY_PREFERENCE, strategy.value)
