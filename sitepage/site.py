"""Wrap printed page bodies in a site-wide template.

This module holds :class:`PageRenderer`, the piece a site bootstrap calls at
the top and bottom of every page. ``start()`` loads the site configuration,
works out which template to use, and begins capturing printed output;
``end()`` stops the capture and renders the template with the captured body as
``content``.

A bootstrap module shared by every page might look like:

.. code-block:: python

    from sitepage import PageRenderer, SiteContext, ViewLoader

    context = SiteContext()
    context.add_loader("layouts", ViewLoader("views"))
    context["site.conf"] = "conf"
    site = PageRenderer(context).start()

and each page then prints its body and finishes with ``site.end()``.

Template lookup order is: the ``template`` argument, the ``template`` key of
the configuration tree, the ``template`` key of its ``site`` section, and
finally the ``site.template`` registry attribute of the context.
"""

from __future__ import annotations

import collections.abc as cabc
import contextlib
import logging
import os
import sys
import typing as typ
from pathlib import Path

from ._constants import SITE_CONF, SITE_TEMPLATE
from .config import MissingTemplateError
from .includes import render_file
from .template_ref import FileTemplate, LoaderTemplate, TemplateRef, parse_template_ref

if typ.TYPE_CHECKING:
    from .context import SiteContext

logger = logging.getLogger(__name__)

ConfigSource = str | os.PathLike[str]
RawTemplate = str | os.PathLike[str] | TemplateRef


class PageRenderer:
    """Capture a page body and render it inside the site template."""

    def __init__(self, context: SiteContext) -> None:
        self.context = context
        self.template: TemplateRef | None = None
        self.output: str | None = None
        self._capturing = False

    def start(
        self,
        config: ConfigSource | None = None,
        template: RawTemplate | None = None,
    ) -> typ.Self:
        """Load the site configuration and start capturing page output.

        Parameters
        ----------
        config : str or PathLike, optional
            Path to a configuration file or directory. Defaults to the
            ``site.conf`` registry attribute. A directory becomes the lazy root
            of the configuration tree; a file is loaded immediately. Paths that
            do not exist are ignored, leaving the tree as the bootstrap built
            it.
        template : str, PathLike or TemplateRef, optional
            Template for this page. When omitted it is looked up in the
            configuration tree and then in the ``site.template`` attribute.

        Returns
        -------
        Self
            The renderer, so ``PageRenderer(context).start()`` can be kept.

        Raises
        ------
        MissingTemplateError
            If no template is found anywhere. Capture is not started.
        """
        if config is None:
            config = self.context.get(SITE_CONF)
        if config is not None and os.fspath(config).strip():
            self._load_config(Path(config))

        raw = self._find_template(template)
        self.template = parse_template_ref(raw, self.context.loaders)
        logger.debug("Page template resolved to %s", self.template)

        self.output = None
        self.context.capture.start()
        self._capturing = True
        return self

    def end(self, echo_output: bool = True) -> str | None:
        """Stop capturing and render the template around the captured body.

        Parameters
        ----------
        echo_output : bool, optional
            When True (the default) the rendered page is written to
            ``sys.stdout`` and None is returned. When False the rendered page
            is returned for the caller to handle.

        Returns
        -------
        str or None
            See ``echo_output``.

        Raises
        ------
        CaptureError
            If ``start()`` was not called first.
        """
        content = self.context.capture.end()
        self._capturing = False

        page_data = self.page_data(content)
        match self.template:
            case LoaderTemplate(loader=name, view=view):
                output = self.context.loaders[name].load(view, page_data)
            case FileTemplate(path=path):
                output = render_file(path, page_data)
        logger.info("Rendered page with %s (%d characters)", self.template, len(output))

        if echo_output:
            sys.stdout.write(output)
            sys.stdout.flush()
            return None
        self.output = output
        return output

    def page_data(self, content: str) -> dict[str, typ.Any]:
        """Build the values handed to the template for ``content``."""
        return {
            "content": content,
            "core": self.context,
            "nano": self.context,
        }

    @contextlib.contextmanager
    def page(
        self,
        config: ConfigSource | None = None,
        template: RawTemplate | None = None,
        *,
        echo_output: bool = True,
    ) -> cabc.Iterator[typ.Self]:
        """Run ``start`` on entry and ``end`` when the block finishes cleanly.

        If the block raises, the captured output is discarded, nothing is
        rendered, and the exception propagates. A block that already called
        ``end`` itself is not rendered a second time. When ``echo_output`` is False
        the rendered page is available as :attr:`output` after the block.

        Examples
        --------
        >>> with PageRenderer(context).page(echo_output=False) as site:  # doctest: +SKIP
        ...     print("<p>Hello</p>")
        >>> site.output  # doctest: +SKIP
        '<html>...<p>Hello</p>...</html>'
        """
        self.start(config, template)
        try:
            yield self
        except BaseException:
            if self._capturing:
                self.context.capture.end()
                self._capturing = False
            raise
        if self._capturing:
            self.end(echo_output)

    def _load_config(self, path: Path) -> None:
        if not path.exists():
            logger.debug("Configuration source %s does not exist; skipping", path)
            return
        if path.is_dir():
            self.context.conf.set_dir(path)
        else:
            self.context.conf.load_file(path)

    def _find_template(self, template: RawTemplate | None) -> RawTemplate:
        if template is not None:
            logger.debug("Using template passed to start()")
            return template

        conf = self.context.conf
        configured = conf.get("template")
        if configured is not None:
            logger.debug("Using template from the 'template' config key")
            return configured

        site_section = conf.get("site")
        if isinstance(site_section, cabc.Mapping):
            configured = site_section.get("template")
            if configured is not None:
                logger.debug("Using template from the 'site' config section")
                return configured

        configured = self.context.get(SITE_TEMPLATE)
        if configured is not None:
            logger.debug("Using template from the %r attribute", SITE_TEMPLATE)
            return configured

        msg = "No site template was defined"
        raise MissingTemplateError(msg)


__all__ = ["PageRenderer"]
