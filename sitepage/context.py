"""Application context shared by a site bootstrap and its page renderer.

:class:`SiteContext` is the explicit container the renderer reads from: the
configuration tree, the output capture buffer, the named view loaders, and a
small registry of string-keyed attributes such as ``site.conf`` and
``site.template``. Templates receive the context under the ``core`` and
``nano`` names.

Examples
--------
>>> from sitepage.context import SiteContext
>>> context = SiteContext()
>>> context["site.template"] = "layout.jinja"
>>> "site.template" in context
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from .capture import OutputCapture
from .config import ConfigTree


class Loader(typ.Protocol):
    """A named service that renders a view by name."""

    def load(self, view: str, page_data: cabc.Mapping[str, typ.Any]) -> str:
        """Render ``view`` with ``page_data`` and return the result."""
        ...


@dc.dataclass(slots=True)
class SiteContext:
    """Collaborators and registry attributes for one site.

    Attributes
    ----------
    conf : ConfigTree
        Nested configuration store populated by the bootstrap or the renderer.
    capture : OutputCapture
        Buffer that collects the page body between ``start`` and ``end``.
    loaders : dict[str, Loader]
        Named view loaders addressable as ``"<name>:<view>"`` template
        references.
    attributes : dict[str, Any]
        Registry values read through item access, for example ``site.conf``.
    """

    conf: ConfigTree = dc.field(default_factory=ConfigTree)
    capture: OutputCapture = dc.field(default_factory=OutputCapture)
    loaders: dict[str, Loader] = dc.field(default_factory=dict)
    attributes: dict[str, typ.Any] = dc.field(default_factory=dict)

    def __getitem__(self, key: str) -> typ.Any:
        return self.attributes[key]

    def __setitem__(self, key: str, value: typ.Any) -> None:
        self.attributes[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.attributes

    def get(self, key: str, default: typ.Any = None) -> typ.Any:
        """Return the registry attribute ``key`` or ``default`` when unset."""
        return self.attributes.get(key, default)

    def add_loader(self, name: str, loader: Loader) -> None:
        """Register ``loader`` so ``"<name>:<view>"`` references reach it."""
        if not name:
            msg = "Loader name must be a non-empty string."
            raise ValueError(msg)
        self.loaders[name] = loader

    def get_loader(self, name: str) -> Loader | None:
        """Return the loader registered as ``name``, if any."""
        return self.loaders.get(name)


__all__ = ["Loader", "SiteContext"]
