"""Named view loaders backed by Jinja templates.

A :class:`ViewLoader` renders views by name from one or more template
directories. Register it on a :class:`~sitepage.context.SiteContext` and refer
to its views as ``"<name>:<view>"``:

>>> from sitepage.context import SiteContext
>>> context = SiteContext()
>>> context.add_loader("layouts", ViewLoader("views"))  # doctest: +SKIP
>>> context["site.template"] = "layouts:site"
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from ._constants import VIEW_SUFFIXES
from ._jinja import build_environment, template_context

if typ.TYPE_CHECKING:
    from jinja2 import Environment

logger = logging.getLogger(__name__)


class ViewLoader:
    """Render views located in an ordered list of template directories."""

    def __init__(
        self,
        *directories: Path | str,
        suffixes: cabc.Sequence[str] = VIEW_SUFFIXES,
    ) -> None:
        """Initialize the loader with its search directories.

        Parameters
        ----------
        *directories : Path or str
            Template directories searched in order.
        suffixes : Sequence[str], optional
            Extensions tried after the bare view name, defaulting to
            ``.jinja``, ``.html`` and ``.j2``.
        """
        self.directories: list[Path] = [Path(path) for path in directories]
        self.suffixes = tuple(suffixes)
        self._env: Environment | None = None

    @property
    def env(self) -> Environment:
        """Return the Jinja environment for the current search path."""
        if self._env is None:
            self._env = build_environment(self.directories)
        return self._env

    def add_dir(self, path: Path | str, *, prepend: bool = False) -> None:
        """Add a template directory, searched first when ``prepend`` is set."""
        directory = Path(path)
        if prepend:
            self.directories.insert(0, directory)
        else:
            self.directories.append(directory)
        self._env = None

    def candidates(self, view: str) -> list[str]:
        """Return the template names tried for ``view``, in order."""
        return [view, *(f"{view}{suffix}" for suffix in self.suffixes)]

    def load(self, view: str, page_data: cabc.Mapping[str, typ.Any]) -> str:
        """Render ``view`` with ``page_data`` as the template context.

        Raises
        ------
        jinja2.TemplatesNotFound
            If none of the candidate names exists in the search directories.
        """
        template = self.env.select_template(self.candidates(view))
        logger.debug("Rendering view %r from %s", view, template.filename)
        return template.render(**template_context(page_data))


__all__ = ["ViewLoader"]
