"""Settings resolution and user config merging."""

from __future__ import annotations

import json
import os
from pathlib import Path

from projinfo_core.collectors import COMPILATION_GROUP, GIT_GROUP, PACKAGE_GROUP, PROJECT_GROUP

ALL_GROUPS = [PROJECT_GROUP, GIT_GROUP, COMPILATION_GROUP, PACKAGE_GROUP]

DEFAULT_SETTINGS: dict = {
    "refresh_seconds": 5,
    "git_executable": "git",
    "command_timeout": 2.0,
    "preferences_path": "~/.config/projinfo/preferences.json",
    "log_path": "",
    "groups": ALL_GROUPS,
    "project": {},
    "build": {},
}


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"config path not found: {config_path}")

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")
    return data


def _resolve_groups(group_config) -> list[str] | None:
    if isinstance(group_config, dict):
        # disable map: {"Package": false}
        return [name for name in ALL_GROUPS if group_config.get(name, True)]
    if isinstance(group_config, list) and group_config:
        # explicit order
        filtered = [name for name in group_config if name in ALL_GROUPS]
        return filtered or None
    return None


def resolve_settings(config_path: str | None = None) -> dict:
    resolved = {
        key: (dict(value) if isinstance(value, dict) else list(value) if isinstance(value, list) else value)
        for key, value in DEFAULT_SETTINGS.items()
    }
    user_config = load_user_config(config_path or os.environ.get("PROJINFO_CONFIG"))

    if "refresh_seconds" in user_config:
        try:
            value = int(user_config["refresh_seconds"])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid refresh_seconds: {user_config['refresh_seconds']!r}") from exc
        resolved["refresh_seconds"] = max(1, value)

    if "command_timeout" in user_config:
        try:
            timeout = float(user_config["command_timeout"])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid command_timeout: {user_config['command_timeout']!r}") from exc
        if timeout <= 0:
            raise ValueError("command_timeout must be positive")
        resolved["command_timeout"] = timeout

    for key in ("git_executable", "preferences_path", "log_path"):
        if user_config.get(key):
            resolved[key] = str(user_config[key])

    for key in ("project", "build"):
        section = user_config.get(key)
        if section is not None and not isinstance(section, dict):
            raise ValueError(f"{key} must be a JSON object")
        if section:
            resolved[key].update(section)

    groups = _resolve_groups(user_config.get("groups"))
    if groups is not None:
        resolved["groups"] = groups

    return resolved
