"""External command runner (fail-soft)."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 2.0


def run_command(
    executable: str,
    args: str | Sequence[str],
    working_directory: str | Path | None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """Run a command and return its trimmed output, or "" on any failure.

    stderr is returned only when the command wrote nothing to stdout.
    """
    if not working_directory:
        return ""

    argv = [executable, *(shlex.split(args) if isinstance(args, str) else args)]
    try:
        # run() kills and reaps the child before raising TimeoutExpired.
        proc = subprocess.run(
            argv,
            cwd=str(working_directory),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.debug("command timed out after %ss: %s", timeout, " ".join(argv))
        return ""
    except (OSError, ValueError) as exc:
        logger.debug("command unavailable: %s (%s)", " ".join(argv), exc)
        return ""

    stdout = (proc.stdout or "").strip()
    stderr = (proc.stderr or "").strip()
    if stderr and not stdout:
        return stderr
    return stdout
