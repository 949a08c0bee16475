"""Configuration file loading utilities: JSONC parsing, env substitution, deep merge."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict

import commentjson

from ..util.log import Log

log = Log.create({"service": "config.loader"})


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries.

    Nested dicts merge key by key; ``groups`` lists merge by group name so a
    project file can extend or replace a single global group.
    """
    result = base.copy()

    for key, value in override.items():
        if key == "groups" and isinstance(result.get(key), list) and isinstance(value, list):
            result[key] = _merge_groups(result[key], value)
        elif key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _merge_groups(base: list[Any], override: list[Any]) -> list[Any]:
    merged: list[Any] = list(base)
    positions = {
        group.get("name"): i for i, group in enumerate(merged) if isinstance(group, dict)
    }
    for group in override:
        name = group.get("name") if isinstance(group, dict) else None
        if name is not None and name in positions:
            merged[positions[name]] = group
        else:
            positions[name] = len(merged)
            merged.append(group)
    return merged


def substitute_env_vars(text: str) -> str:
    """Replace ``{env:VAR}`` patterns with environment variable values."""
    def replacer(match: re.Match[str]) -> str:
        return os.environ.get(match.group(1), "")

    return re.sub(r'\{env:([^}]+)\}', replacer, text)


def load_json_file(filepath: str) -> Dict[str, Any]:
    """Load a JSON or JSONC file, returning ``{}`` on any I/O or parse error."""
    path = Path(filepath)
    if not path.exists():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
        data = commentjson.loads(substitute_env_vars(text))
    except (OSError, ValueError, UnicodeDecodeError) as e:
        log.error("failed to load config file", {"path": filepath, "error": str(e)})
        return {}

    if not isinstance(data, dict):
        log.error("config file is not an object", {"path": filepath})
        return {}
    return data
