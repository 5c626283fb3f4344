"""Cyclopts CLI entrypoint for rendering pages through a site template.

The ``sitepage`` console script runs a single page the same way a site
bootstrap would: it builds a :class:`~sitepage.context.SiteContext`, registers
any named view loaders, starts a :class:`~sitepage.site.PageRenderer`, emits
the page body, and renders the result to stdout or a file. Python pages are
executed with ``site`` and ``context`` bound as globals; any other page file
is treated as a ready-made body fragment.

Examples
--------
Render a page with the template named in ``conf/site.yaml``:

>>> from sitepage.cli import app
>>> app(["render", "pages/index.py", "--config", "conf/site.yaml"])  # doctest: +SKIP

Render a fragment through a named loader into a file:

>>> app(
...     [
...         "render",
...         "pages/about.html",
...         "--views",
...         "layouts=views",
...         "--template",
...         "layouts:site",
...         "--output",
...         "public/about.html",
...     ]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import runpy
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .context import SiteContext
from .loaders import ViewLoader
from .site import PageRenderer

app = App(name="sitepage", config=cyclopts.config.Env("SITEPAGE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def parse_view_dirs(entries: cabc.Iterable[str]) -> dict[str, list[Path]]:
    """Parse ``NAME=DIR`` entries into loader names and their directories.

    Repeating a name adds another directory to the same loader.

    Raises
    ------
    ValueError
        If an entry lacks ``=`` or has an empty name or directory.
    """
    views: dict[str, list[Path]] = {}
    for entry in entries:
        name, separator, directory = entry.partition("=")
        name = name.strip()
        directory = directory.strip()
        if not separator or not name or not directory:
            msg = f"Invalid view loader '{entry}'; expected NAME=DIR."
            raise ValueError(msg)
        views.setdefault(name, []).append(Path(directory))
    return views


def build_context(views: cabc.Iterable[str] = ()) -> SiteContext:
    """Create a context with one :class:`ViewLoader` per ``NAME=DIR`` name."""
    context = SiteContext()
    for name, directories in parse_view_dirs(views).items():
        context.add_loader(name, ViewLoader(*directories))
    return context


def _emit_page(page: Path, site: PageRenderer) -> None:
    if page.suffix == ".py":
        runpy.run_path(
            str(page), init_globals={"site": site, "context": site.context}
        )
    else:
        sys.stdout.write(page.read_text(encoding="utf-8"))


@app.command(help="Render a page body through the site template.")
def render(
    page: typ.Annotated[
        Path, Parameter(help="Page body: a Python script or a text fragment")
    ],
    *,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Site config file or directory", env_var="SITEPAGE_CONFIG"),
    ] = None,
    template: typ.Annotated[
        str | None,
        Parameter(
            help="Template path or LOADER:VIEW reference",
            env_var="SITEPAGE_TEMPLATE",
        ),
    ] = None,
    views: typ.Annotated[
        list[str] | None,
        Parameter(help="Named view loader as NAME=DIR (repeatable)"),
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the page here instead of stdout")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Render ``page`` inside the site template.

    Parameters
    ----------
    page : Path
        Python script whose printed output is the page body, or a text file
        used as the body as-is.
    config : Path or None, optional
        Configuration file or directory handed to ``PageRenderer.start``.
    template : str or None, optional
        Template override; falls back to the configuration when omitted.
    views : list[str] or None, optional
        ``NAME=DIR`` pairs registering Jinja view loaders.
    output : Path or None, optional
        Destination file. When omitted the page is written to stdout.
    verbose : bool, optional
        Log template and configuration resolution at DEBUG level.

    Raises
    ------
    FileNotFoundError
        If ``page`` does not exist.
    ValueError
        If a ``views`` entry is malformed.
    MissingTemplateError
        If no template can be resolved.
    """
    _configure_logging(verbose)
    if not page.is_file():
        msg = f"Page file '{page}' not found."
        raise FileNotFoundError(msg)

    context = build_context(views or [])
    renderer = PageRenderer(context)
    with renderer.page(config, template, echo_output=output is None) as site:
        _emit_page(page, site)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        html = renderer.output or ""
        output.write_text(html, encoding="utf-8")
        print(f"wrote {_format_path(output)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``sitepage`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
