"""Header renderer."""

from __future__ import annotations

from rich.panel import Panel


def render(title: str, strategy: str, project_path: str, refreshed: str, packages_pending: bool) -> Panel:
    text = (
        f"Project: [bold]{project_path}[/bold]   "
        f"Title: [bold]{strategy}[/bold]   "
        f"Refreshed: [bold]{refreshed}[/bold]   "
        f"Packages: [bold]{'loading' if packages_pending else 'ready'}[/bold]"
    )
    return Panel(text, title=f"[bold]{title}[/bold]", border_style="cyan")
