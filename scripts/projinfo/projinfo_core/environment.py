"""Host environment accessors: project identity and build settings."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass, field
from typing import Any


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part for part in value.split(";") if part]
    if isinstance(value, (list, tuple)):
        return [str(part) for part in value]
    return [str(value)]


@dataclass
class BuildSettings:
    active_target: str = ""
    define_symbols: list[str] = field(default_factory=list)
    compiler_arguments: list[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: dict | None) -> "BuildSettings":
        config = config or {}
        return cls(
            active_target=str(config.get("target") or ""),
            define_symbols=_string_list(config.get("define_symbols")),
            compiler_arguments=_string_list(config.get("compiler_arguments")),
        )


@dataclass
class HostEnvironment:
    company_name: str = ""
    product_name: str = ""
    version: str = ""
    identifier: str = ""
    runtime_version: str = field(default_factory=platform.python_version)
    runtime_platform: str = field(default_factory=lambda: sys.platform)
    log_path: str = ""
    build: BuildSettings = field(default_factory=BuildSettings)

    @classmethod
    def from_settings(cls, settings: dict) -> "HostEnvironment":
        project = settings.get("project") or {}
        return cls(
            company_name=str(project.get("company_name") or ""),
            product_name=str(project.get("product_name") or ""),
            version=str(project.get("version") or ""),
            identifier=str(project.get("identifier") or ""),
            log_path=str(settings.get("log_path") or ""),
            build=BuildSettings.from_config(settings.get("build")),
        )
