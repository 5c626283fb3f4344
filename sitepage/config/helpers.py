"""Utility helpers shared by the configuration tree and file loader."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from sitepage._constants import CONFIG_SUFFIXES


def _deep_merge(
    target: cabc.MutableMapping[str, typ.Any], source: cabc.Mapping[str, typ.Any]
) -> None:
    """Merge ``source`` into ``target`` in place, descending into mappings."""
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, cabc.MutableMapping) and isinstance(
            value, cabc.Mapping
        ):
            _deep_merge(existing, value)
        else:
            target[key] = value


def _is_plain_key(key: object) -> bool:
    """Return True when ``key`` can name a single entry inside a directory."""
    if not isinstance(key, str) or not key or key.startswith("."):
        return False
    return Path(key).name == key


def _config_file_for(directory: Path, key: str) -> Path | None:
    """Return the first supported config file named ``key`` in ``directory``."""
    for suffix in CONFIG_SUFFIXES:
        candidate = directory / f"{key}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def _discover_keys(directory: Path) -> list[str]:
    """List the keys a directory root can resolve, in sorted order."""
    keys: list[str] = []
    for entry in sorted(directory.iterdir()):
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            name = entry.name
        elif entry.is_file() and entry.suffix.lower() in CONFIG_SUFFIXES:
            name = entry.stem
        else:
            continue
        if name not in keys:
            keys.append(name)
    return keys


__all__ = [
    "_config_file_for",
    "_deep_merge",
    "_discover_keys",
    "_is_plain_key",
]
