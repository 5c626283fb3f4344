"""Shared Jinja environment settings for view loaders and file templates."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

if typ.TYPE_CHECKING:
    from pathlib import Path


def build_environment(searchpath: cabc.Sequence[Path]) -> Environment:
    """Return an environment that loads templates from ``searchpath``."""
    return Environment(
        loader=FileSystemLoader([str(path) for path in searchpath]),
        autoescape=select_autoescape(["html", "htm", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def template_context(page_data: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Copy ``page_data`` with the captured page body marked as safe markup."""
    context = dict(page_data)
    content = context.get("content")
    if isinstance(content, str):
        context["content"] = Markup(content)
    return context


__all__ = ["build_environment", "template_context"]
