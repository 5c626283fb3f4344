"""Tagged references describing which template a page is rendered with.

A raw reference is either a filesystem path (``inc/layout.jinja``) or a
``"<loader>:<view>"`` pair naming a registered view loader
(``layouts:site``). :func:`parse_template_ref` resolves the raw value once so
the renderer can dispatch on the variant instead of re-inspecting strings.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import os
import typing as typ
from pathlib import Path

from ._constants import TEMPLATE_SEPARATOR


@dc.dataclass(frozen=True, slots=True)
class FileTemplate:
    """Render the page through a template or script file on disk."""

    path: Path

    def __str__(self) -> str:
        return str(self.path)


@dc.dataclass(frozen=True, slots=True)
class LoaderTemplate:
    """Render the page through the view ``view`` of the loader ``loader``."""

    loader: str
    view: str

    def __str__(self) -> str:
        return f"{self.loader}{TEMPLATE_SEPARATOR}{self.view}"


TemplateRef = FileTemplate | LoaderTemplate


def parse_template_ref(
    value: str | os.PathLike[str] | int | float | TemplateRef,
    loaders: cabc.Container[str],
) -> TemplateRef:
    """Turn a raw template reference into a :data:`TemplateRef`.

    Parameters
    ----------
    value : str, os.PathLike, int, float or TemplateRef
        The configured reference. Path objects and already-parsed references
        are returned as file or loader templates without inspection. Numbers
        are treated as their text form.
    loaders : Container[str]
        Names of the loaders currently registered.

    Returns
    -------
    TemplateRef
        ``LoaderTemplate`` when the text before the first separator names a
        registered loader, otherwise ``FileTemplate`` for the whole value. A
        path that merely contains a colon (``C:/site/layout.jinja``) therefore
        stays a path unless a loader called ``C`` exists.

    Examples
    --------
    >>> parse_template_ref("layouts:site", {"layouts"})
    LoaderTemplate(loader='layouts', view='site')
    >>> parse_template_ref("other:site", {"layouts"})  # doctest: +SKIP
    FileTemplate(path=PosixPath('other:site'))
    """
    match value:
        case FileTemplate() | LoaderTemplate():
            return value
        case str() as text:
            loader, separator, view = text.partition(TEMPLATE_SEPARATOR)
            if separator and loader in loaders:
                return LoaderTemplate(loader=loader, view=view)
            return FileTemplate(Path(text))
        case os.PathLike():
            return FileTemplate(Path(value))
        case int() | float() if not isinstance(value, bool):
            # Unquoted YAML/TOML scalars such as ``template: 404``.
            return parse_template_ref(str(value), loaders)
        case _:
            msg = f"Unsupported template reference {value!r}."
            raise TypeError(msg)


__all__ = ["FileTemplate", "LoaderTemplate", "TemplateRef", "parse_template_ref"]
