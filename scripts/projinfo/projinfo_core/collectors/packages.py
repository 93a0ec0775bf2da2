"""Installed package listing (local metadata only, no network)."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import metadata

PACKAGES_SOURCE = "packages"


@dataclass(frozen=True)
class PackageRecord:
    name: str
    version: str


def list_installed() -> list[PackageRecord]:
    # Reads distribution metadata from site-packages; never touches the network.
    seen: dict[str, PackageRecord] = {}
    for dist in metadata.distributions():
        meta = dist.metadata
        name = meta.get("Name") if meta is not None else None
        if not name:
            continue
        key = name.lower()
        if key not in seen:
            seen[key] = PackageRecord(name=name, version=dist.version or "")
    return sorted(seen.values(), key=lambda record: record.name.lower())
