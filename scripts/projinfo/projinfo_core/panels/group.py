"""Report group panel renderer."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from projinfo_core.models import Group
from projinfo_core.panels import border_for, empty_panel, fact_table

MAX_ROWS = 40


def render(group: Group) -> Panel:
    if not group.expanded:
        return Panel(
            Text(f"{len(group.facts)} entries (collapsed)", style="dim"),
            title=f"[bold]▸ {group.name}[/bold]",
            border_style=border_for(group),
        )
    if not group.facts:
        return empty_panel(f"▾ {group.name}")

    shown = group.facts[:MAX_ROWS]
    table = fact_table(shown)
    remaining = len(group.facts) - len(shown)
    if remaining > 0:
        table.add_row("", Text(f"+{remaining} more", style="dim"))
    return Panel(table, title=f"[bold]▾ {group.name}[/bold]", border_style=border_for(group))
