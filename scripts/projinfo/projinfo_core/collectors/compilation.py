"""Build settings collector."""

from __future__ import annotations

from projinfo_core.environment import BuildSettings
from projinfo_core.models import Fact


def collect(build: BuildSettings) -> list[Fact]:
    return [
        Fact("Active Build Target", build.active_target),
        Fact("Define Symbols", ";".join(build.define_symbols)),
        Fact("Compiler Arguments", ";".join(build.compiler_arguments)),
    ]
