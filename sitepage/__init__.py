"""Wrap the output of simple page scripts in a shared site template.

A site bootstrap builds a :class:`SiteContext`, optionally registers named
view loaders, and calls :meth:`PageRenderer.start`. Everything the page prints
afterwards is captured; :meth:`PageRenderer.end` renders the site template
with the captured text as ``content`` and the context as ``core``/``nano``.

Exports
-------
- ``PageRenderer``: start/end orchestration for one page.
- ``SiteContext``: configuration tree, capture buffer, loaders, attributes.
- ``ViewLoader``: Jinja-backed loader addressed as ``"<name>:<view>"``.
- ``ConfigTree``: nested configuration with lazy directory lookups.
- ``OutputCapture``: stdout capture buffer.
- ``render_file``: render a template or script file by path.

Examples
--------
>>> from sitepage import PageRenderer, SiteContext
>>> context = SiteContext()
>>> site = PageRenderer(context).start(template="inc/layout.jinja")  # doctest: +SKIP
>>> print("<p>Hello</p>")  # doctest: +SKIP
>>> site.end()  # doctest: +SKIP
"""

from __future__ import annotations

from .capture import CaptureError, OutputCapture
from .config import ConfigTree, MissingTemplateError, SiteConfigError
from .context import Loader, SiteContext
from .includes import render_file
from .loaders import ViewLoader
from .site import PageRenderer
from .template_ref import FileTemplate, LoaderTemplate, TemplateRef, parse_template_ref

__all__ = [
    "CaptureError",
    "ConfigTree",
    "FileTemplate",
    "Loader",
    "LoaderTemplate",
    "MissingTemplateError",
    "OutputCapture",
    "PageRenderer",
    "SiteConfigError",
    "SiteContext",
    "TemplateRef",
    "ViewLoader",
    "parse_template_ref",
    "render_file",
]
