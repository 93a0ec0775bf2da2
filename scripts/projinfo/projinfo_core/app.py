"""Project info dashboard entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import signal
import sys
import time
from datetime import datetime, timezone
from pathlib import Path

from rich.columns import Columns
from rich.console import Console, Group
from rich.live import Live

from projinfo_core.aggregator import ReportAggregator
from projinfo_core.collectors import PACKAGE_GROUP, env_project_dir
from projinfo_core.collectors.packages import PACKAGES_SOURCE, list_installed
from projinfo_core.environment import HostEnvironment
from projinfo_core.fetcher import AsyncSourceFetcher
from projinfo_core.formatting import compact_relative_age, format_report_text
from projinfo_core.logging_setup import configure_logging
from projinfo_core.models import TitleStrategy
from projinfo_core.panels.group import render as render_group
from projinfo_core.panels.header import render as render_header
from projinfo_core.preferences import JsonPreferenceStore
from projinfo_core.settings import ALL_GROUPS, resolve_settings
from projinfo_core.titles import load_strategy, parse_strategy, resolve_title, store_strategy
from projinfo_core.triggers import FOCUS, INTERVAL, ProjectWatcher, RefreshTrigger

logger = logging.getLogger(__name__)

TICK_SECONDS = 0.25
WIDE_LAYOUT_MIN_WIDTH = 140


def build_aggregator(settings: dict) -> ReportAggregator:
    fetcher = AsyncSourceFetcher({PACKAGES_SOURCE: list_installed})
    return ReportAggregator(
        preferences=JsonPreferenceStore(settings["preferences_path"]),
        fetcher=fetcher,
        env=HostEnvironment.from_settings(settings),
        git_executable=settings["git_executable"],
        command_timeout=settings["command_timeout"],
        groups=settings["groups"],
    )


def _visible_groups(aggregator: ReportAggregator, settings: dict) -> list:
    snapshot = aggregator.report.snapshot()
    return [snapshot[name] for name in settings["groups"] if name in snapshot]


def _copy_output(aggregator: ReportAggregator, settings: dict) -> str:
    return format_report_text({group.name: group for group in _visible_groups(aggregator, settings)})


def _install_focus_handler(trigger: RefreshTrigger):
    # SIGCONT arrives when a suspended terminal job is brought back to the foreground.
    sigcont = getattr(signal, "SIGCONT", None)
    if sigcont is None:
        return None
    return signal.signal(sigcont, lambda _signum, _frame: trigger.fire(FOCUS))


def _render(aggregator: ReportAggregator, settings: dict, project_path: Path, width: int):
    strategy = load_strategy(aggregator.preferences)
    age = time.time() - aggregator.refreshed_at if aggregator.refreshed_at else None
    header = render_header(
        title=resolve_title(aggregator.report, strategy),
        strategy=strategy.value,
        project_path=str(project_path),
        refreshed=compact_relative_age(age),
        packages_pending=bool(aggregator.fetcher and aggregator.fetcher.is_pending(PACKAGES_SOURCE)),
    )
    panels = [render_group(group) for group in _visible_groups(aggregator, settings)]
    if width < WIDE_LAYOUT_MIN_WIDTH:
        return Group(header, *panels)
    return Group(header, Columns(panels, equal=True, expand=True))


def _json_output(aggregator: ReportAggregator, settings: dict) -> str:
    strategy = load_strategy(aggregator.preferences)
    payload = {
        "title": resolve_title(aggregator.report, strategy),
        "title_strategy": strategy.value,
        "collected_at": datetime.now(timezone.utc).isoformat(),
        "groups": [group.to_dict() for group in _visible_groups(aggregator, settings)],
    }
    return json.dumps(payload, indent=2)


def _wait_for_packages(aggregator: ReportAggregator, seconds: float) -> None:
    if aggregator.fetcher is None or seconds <= 0:
        return
    deadline = time.monotonic() + seconds
    while aggregator.fetcher.is_pending(PACKAGES_SOURCE):
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.info("package listing still pending after %ss", seconds)
            return
        aggregator.fetcher.wait(remaining)
        aggregator.tick()


def _run_live(aggregator: ReportAggregator, settings: dict, project_path: Path, console: Console) -> int:
    trigger = RefreshTrigger()
    requested: list[str] = []
    trigger.subscribe(requested.append)
    watcher = ProjectWatcher(project_path, trigger)
    previous_sigcont = _install_focus_handler(trigger)
    refresh_seconds = settings["refresh_seconds"]
    next_interval = time.monotonic() + refresh_seconds

    def renderable():
        return _render(aggregator, settings, project_path, console.size.width)

    with Live(renderable(), console=console, refresh_per_second=4, screen=True) as live:
        try:
            while True:
                time.sleep(TICK_SECONDS)
                watcher.check()
                if time.monotonic() >= next_interval:
                    trigger.fire(INTERVAL)
                    next_interval = time.monotonic() + refresh_seconds
                if requested:
                    logger.debug("refresh requested: %s", ", ".join(requested))
                    requested.clear()
                    aggregator.refresh(project_path)
                aggregator.tick()
                live.update(renderable())
        except KeyboardInterrupt:
            return 0
        finally:
            if previous_sigcont is not None:
                signal.signal(signal.SIGCONT, previous_sigcont)
            aggregator.fetcher.shutdown()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Project info dashboard")
    parser.add_argument("-l", "--live", action="store_true", help="Run live dashboard loop")
    parser.add_argument("--json", action="store_true", help="Emit JSON payload")
    parser.add_argument("--copy", action="store_true", help="Emit plain-text export of the configured groups")
    parser.add_argument("--config", help="Optional JSON config file")
    parser.add_argument("--refresh", type=int, help="Refresh interval seconds override")
    parser.add_argument("--project-dir", help="Override PROJINFO_PROJECT_DIR path")
    parser.add_argument(
        "--title",
        help="Persist the title strategy: " + "|".join(s.value for s in TitleStrategy),
    )
    parser.add_argument("--expand", action="append", default=[], metavar="GROUP", help="Persist a group as expanded")
    parser.add_argument("--collapse", action="append", default=[], metavar="GROUP", help="Persist a group as collapsed")
    parser.add_argument("--copy-group", metavar="GROUP", help="Emit plain-text export of one group")
    parser.add_argument("--wait", type=float, default=5.0, help="Seconds to wait for the package listing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    try:
        settings = resolve_settings(args.config)
    except ValueError as exc:
        print(f"projinfo: {exc}", file=sys.stderr)
        return 2
    if args.refresh:
        settings["refresh_seconds"] = max(1, int(args.refresh))

    configure_logging(settings["log_path"] or None, verbose=args.verbose)
    project_path = Path(args.project_dir) if args.project_dir else env_project_dir()
    aggregator = build_aggregator(settings)

    if args.title:
        strategy = parse_strategy(args.title)
        if strategy is None:
            print(f"projinfo: unknown title strategy: {args.title}", file=sys.stderr)
            return 2
        store_strategy(aggregator.preferences, strategy)

    unknown = [name for name in [*args.expand, *args.collapse, args.copy_group] if name and name not in ALL_GROUPS]
    if unknown:
        print(f"projinfo: unknown group: {unknown[0]} (expected one of: {', '.join(ALL_GROUPS)})", file=sys.stderr)
        return 2
    for name in args.expand:
        aggregator.set_expanded(name, True)
    for name in args.collapse:
        aggregator.set_expanded(name, False)

    aggregator.refresh(project_path)
    console = Console()

    if args.live:
        return _run_live(aggregator, settings, project_path, console)

    if PACKAGE_GROUP in settings["groups"]:
        _wait_for_packages(aggregator, args.wait)
    aggregator.fetcher.shutdown()

    if args.json:
        print(_json_output(aggregator, settings))
    elif args.copy_group:
        sys.stdout.write(aggregator.copy_group(args.copy_group))
    elif args.copy:
        sys.stdout.write(_copy_output(aggregator, settings))
    else:
        console.print(_render(aggregator, settings, project_path, console.size.width))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
