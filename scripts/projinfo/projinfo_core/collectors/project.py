"""Project identity collector."""

from __future__ import annotations

from pathlib import Path

from projinfo_core.collectors import UNKNOWN
from projinfo_core.environment import HostEnvironment
from projinfo_core.models import Fact

WORKSPACE_KEY = "Workspace"
PROJECT_NAME_KEY = "Project Name"


def _dir_name(path: Path | None) -> str:
    if path is None or not path.name:
        return UNKNOWN
    return path.name


def collect(project_path: str | Path | None, env: HostEnvironment) -> list[Fact]:
    project_dir = Path(project_path).resolve() if project_path else None
    workspace_dir = project_dir.parent if project_dir is not None else None
    project_name = _dir_name(project_dir)

    return [
        Fact(WORKSPACE_KEY, _dir_name(workspace_dir)),
        Fact(PROJECT_NAME_KEY, project_name),
        Fact("Company Name", env.company_name),
        Fact("Product Name", env.product_name or project_name),
        Fact("Version", env.version),
        Fact("Identifier", env.identifier),
        Fact("Python Version", env.runtime_version),
        Fact("Runtime Platform", env.runtime_platform),
        Fact("Build Target", env.build.active_target),
        Fact("Project Path", str(project_dir) if project_dir is not None else UNKNOWN),
        Fact("Log Path", env.log_path),
    ]
