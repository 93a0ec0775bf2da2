"""Panel rendering helpers."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from projinfo_core.models import Fact, Group, Severity

SEVERITY_STYLE = {
    Severity.NORMAL: "default",
    Severity.GOOD: "green",
    Severity.BAD: "red",
    Severity.WARN: "yellow",
    Severity.UNKNOWN: "dim",
}

SEVERITY_BORDER = {
    Severity.BAD: "red",
    Severity.WARN: "yellow",
}


def border_for(group: Group) -> str:
    severities = {item.severity for item in group.facts}
    for severity in (Severity.BAD, Severity.WARN):
        if severity in severities:
            return SEVERITY_BORDER[severity]
    return "cyan"


def empty_panel(title: str, message: str = "No data") -> Panel:
    return Panel(Text(message, style="dim"), title=f"[bold]{title}[/bold]", border_style="cyan")


def fact_table(facts: list[Fact] | tuple[Fact, ...]) -> Table:
    table = Table(box=None, show_header=False, expand=True, pad_edge=False)
    table.add_column("key", style="bold", no_wrap=True)
    table.add_column("value", overflow="fold")
    for item in facts:
        table.add_row(item.key, Text(item.value, style=SEVERITY_STYLE.get(item.severity, "default")))
    return table
