"""Shared text formatting helpers for exports and panels."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from projinfo_core.models import Fact, Group


def fact_lines(facts: Iterable[Fact], indent: str = "") -> list[str]:
    return [f"{indent}{item.key}: {item.value}" for item in facts]


def format_group_text(group: Group) -> str:
    lines = fact_lines(group.facts)
    return "\n".join(lines) + "\n" if lines else ""


def format_report_text(report: Mapping[str, Group]) -> str:
    """Group name line, indented facts, blank line between groups."""
    lines: list[str] = []
    for name, group in report.items():
        lines.append(name)
        lines.extend(fact_lines(group.facts, indent="  "))
        lines.append("")
    return "\n".join(lines) + ("\n" if lines else "")


def compact_relative_age(age_seconds: float | int | None) -> str:
    if age_seconds is None:
        return "n/a"

    seconds = max(0, int(age_seconds))
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"
