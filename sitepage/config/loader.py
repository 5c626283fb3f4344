"""Read JSON, YAML, and TOML configuration documents from disk."""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import tomlkit
from ruamel.yaml import YAML

from .errors import SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def read_config_file(path: Path) -> typ.Any:
    """Parse a configuration document, choosing the format from its suffix.

    Parameters
    ----------
    path : Path
        Filesystem path to a ``.json``, ``.yaml``/``.yml`` or ``.toml`` file.

    Returns
    -------
    Any
        The parsed document as plain Python values (``dict``, ``list``,
        ``str`` and so on). Empty YAML documents yield ``None``.

    Raises
    ------
    FileNotFoundError
        If no file exists at ``path``.
    SiteConfigError
        If the suffix does not name a supported format.

    Examples
    --------
    >>> from pathlib import Path
    >>> read_config_file(Path("conf/site.yaml"))  # doctest: +SKIP
    {'template': 'layouts:site'}
    """
    if not path.is_file():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    match path.suffix.lower():
        case ".yaml" | ".yml":
            loader = YAML(typ="safe")
            loader.version = (1, 2)
            with path.open("r", encoding="utf-8") as handle:
                return loader.load(handle)
        case ".json":
            return msgspec_json.decode(path.read_bytes())
        case ".toml":
            return tomlkit.parse(path.read_text(encoding="utf-8")).unwrap()
        case suffix:
            msg = f"Unsupported configuration format '{suffix}' for '{path}'."
            raise SiteConfigError(msg)


def load_config_mapping(path: Path) -> dict[str, typ.Any]:
    """Parse ``path`` and require a mapping at the top level of the document."""
    loaded = read_config_file(path) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level structure of '{path}' must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


__all__ = ["load_config_mapping", "read_config_file"]
