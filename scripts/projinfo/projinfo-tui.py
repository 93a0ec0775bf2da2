#!/usr/bin/env python3
"""Thin entrypoint for the project info dashboard."""

from __future__ import annotations

from projinfo_core.app import main


if __name__ == "__main__":
    raise SystemExit(main())
