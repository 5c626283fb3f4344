"""Nested configuration tree with eager file loads and lazy directory lookups.

A :class:`ConfigTree` behaves like a mutable mapping. Values can be merged in
from individual files with :meth:`ConfigTree.load_file`, or a directory can be
registered with :meth:`ConfigTree.set_dir` so each file or subdirectory in it
becomes a key the first time it is read.

Examples
--------
>>> tree = ConfigTree({"site": {"title": "Example"}})
>>> tree.site["title"]
'Example'
>>> tree.set_dir("conf")  # doctest: +SKIP
>>> tree.menus["main"]  # reads conf/menus.yaml on first access  # doctest: +SKIP
['home', 'about']
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from .helpers import _config_file_for, _deep_merge, _discover_keys, _is_plain_key
from .loader import load_config_mapping, read_config_file

logger = logging.getLogger(__name__)

_MISSING = object()


class ConfigTree(cabc.MutableMapping[str, typ.Any]):
    """Key/value settings store backing a site.

    Keys are also readable as attributes (``tree.site``) unless they collide
    with a method or property of the class; item access always works.
    Values loaded from files are kept as plain Python objects, while
    subdirectories of a registered root resolve to nested trees.
    """

    def __init__(
        self,
        data: cabc.Mapping[str, typ.Any] | None = None,
        *,
        directory: Path | str | None = None,
    ) -> None:
        self._data: dict[str, typ.Any] = dict(data or {})
        self._directory: Path | None = None
        if directory is not None:
            self.set_dir(directory)

    @property
    def directory(self) -> Path | None:
        """Return the registered lazy root, if any."""
        return self._directory

    def set_dir(self, path: Path | str) -> None:
        """Register ``path`` as the root that unknown keys are resolved from.

        Raises
        ------
        NotADirectoryError
            If ``path`` is not an existing directory.
        """
        directory = Path(path)
        if not directory.is_dir():
            msg = f"Configuration directory '{directory}' not found."
            raise NotADirectoryError(msg)
        self._directory = directory
        logger.debug("Using configuration directory %s", directory)

    def load_file(self, path: Path | str) -> None:
        """Parse ``path`` and deep merge its top-level mapping into the tree.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        TypeError
            If the document is not a mapping.
        SiteConfigError
            If the file format is not supported.
        """
        loaded = load_config_mapping(Path(path))
        _deep_merge(self, loaded)
        logger.debug("Loaded configuration file %s", path)

    def __getitem__(self, key: str) -> typ.Any:
        if key in self._data:
            return self._data[key]
        value = self._resolve(key)
        if value is _MISSING:
            raise KeyError(key)
        self._data[key] = value
        return value

    def __setitem__(self, key: str, value: typ.Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> cabc.Iterator[str]:
        keys = list(self._data)
        if self._directory is not None:
            keys.extend(
                name for name in _discover_keys(self._directory) if name not in keys
            )
        return iter(keys)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __getattr__(self, name: str) -> typ.Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError as exc:
            raise AttributeError(name) from exc

    def __repr__(self) -> str:
        return f"ConfigTree({self._data!r}, directory={self._directory!r})"

    def _resolve(self, key: str) -> typ.Any:
        if self._directory is None or not _is_plain_key(key):
            return _MISSING
        candidate = self._directory / key
        if candidate.is_dir():
            logger.debug("Resolved config key %r to directory %s", key, candidate)
            return ConfigTree(directory=candidate)
        file_path = _config_file_for(self._directory, key)
        if file_path is None:
            return _MISSING
        logger.debug("Resolved config key %r to file %s", key, file_path)
        return read_config_file(file_path)


__all__ = ["ConfigTree"]
