"""Render a page through a template or script file given by path.

Python files are executed with the page data as their globals and everything
they print becomes the rendered result. Any other file is treated as a Jinja
template whose search path is its own directory, so relative ``include`` and
``extends`` tags resolve next to it.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import os
import runpy
import typing as typ
from pathlib import Path

from ._jinja import build_environment, template_context
from .capture import OutputCapture

logger = logging.getLogger(__name__)


def render_file(
    path: Path | str | os.PathLike[str], page_data: cabc.Mapping[str, typ.Any]
) -> str:
    """Render ``path`` with ``page_data`` and return the output.

    Parameters
    ----------
    path : Path or str
        Template (``.jinja``, ``.html`` and so on) or Python script file.
    page_data : Mapping[str, Any]
        Values exposed to the file: template variables for Jinja, module
        globals for Python scripts.

    Returns
    -------
    str
        Rendered template text, or everything the script printed.

    Raises
    ------
    FileNotFoundError
        If ``path`` is not an existing file.
    """
    template_path = Path(path)
    if not template_path.is_file():
        msg = f"Template file '{template_path}' not found."
        raise FileNotFoundError(msg)

    if template_path.suffix == ".py":
        return _run_script(template_path, page_data)

    env = build_environment([template_path.parent])
    template = env.get_template(template_path.name)
    logger.debug("Rendering template file %s", template_path)
    return template.render(**template_context(page_data))


def _run_script(path: Path, page_data: cabc.Mapping[str, typ.Any]) -> str:
    capture = OutputCapture()
    capture.start()
    try:
        logger.debug("Running template script %s", path)
        runpy.run_path(str(path), init_globals=dict(page_data))
    finally:
        output = capture.end()
    return output


__all__ = ["render_file"]
