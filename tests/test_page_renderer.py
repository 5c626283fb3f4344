"""Unit tests for the page renderer's start/end cycle.

These tests exercise configuration loading, the template lookup order, output
capture, and dispatch between named loaders and file templates.

Usage
-----
Run ``pytest tests/test_page_renderer.py -v``. The tests rely on pytest's
``tmp_path``, ``capsys`` and ``monkeypatch`` fixtures only.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

import pytest

from sitepage import (
    CaptureError,
    ConfigTree,
    FileTemplate,
    LoaderTemplate,
    MissingTemplateError,
    PageRenderer,
    SiteContext,
)


class RecordingLoader:
    """Loader stub that records each call and returns a fixed result."""

    def __init__(self, result: str = "rendered") -> None:
        self.result = result
        self.calls: list[tuple[str, dict[str, typ.Any]]] = []

    def load(self, view: str, page_data: cabc.Mapping[str, typ.Any]) -> str:
        self.calls.append((view, dict(page_data)))
        return self.result


@pytest.fixture
def context() -> cabc.Iterator[SiteContext]:
    """Yield a fresh context and stop any capture a test left running."""
    ctx = SiteContext()
    yield ctx
    while ctx.capture.active:
        ctx.capture.end()


@pytest.fixture
def layout(tmp_path: Path) -> Path:
    path = tmp_path / "layout.jinja"
    path.write_text("<main>{{ content }}</main>\n", encoding="utf-8")
    return path


def test_start_without_config_uses_prepared_tree(
    context: SiteContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A tree populated by the bootstrap needs no config source at all."""
    calls: list[str] = []
    monkeypatch.setattr(ConfigTree, "load_file", lambda self, path: calls.append("file"))
    monkeypatch.setattr(ConfigTree, "set_dir", lambda self, path: calls.append("dir"))
    context.conf["template"] = "layout.jinja"

    renderer = PageRenderer(context).start()

    assert calls == []
    assert renderer.template == FileTemplate(Path("layout.jinja"))
    assert context.capture.active


def test_start_registers_directory_as_lazy_root(
    context: SiteContext, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    (conf_dir / "site.yaml").write_text("template: dir-layout.jinja\n", encoding="utf-8")
    loaded: list[object] = []
    monkeypatch.setattr(ConfigTree, "load_file", lambda self, path: loaded.append(path))

    renderer = PageRenderer(context).start(conf_dir)

    assert loaded == []
    assert context.conf.directory == conf_dir
    assert renderer.template == FileTemplate(Path("dir-layout.jinja"))


def test_start_loads_config_file(context: SiteContext, tmp_path: Path) -> None:
    config = tmp_path / "site.json"
    config.write_text(
        '{"template": "layout.jinja", "title": "Hello"}', encoding="utf-8"
    )

    PageRenderer(context).start(str(config))

    assert context.conf["title"] == "Hello"
    assert context.conf.directory is None


def test_start_uses_registry_default_config(
    context: SiteContext, tmp_path: Path
) -> None:
    config = tmp_path / "site.yaml"
    config.write_text("site:\n  template: layouts:site\n", encoding="utf-8")
    context["site.conf"] = config
    context.add_loader("layouts", RecordingLoader())

    renderer = PageRenderer(context).start()

    assert renderer.template == LoaderTemplate("layouts", "site")


def test_start_ignores_missing_config_source(
    context: SiteContext, tmp_path: Path
) -> None:
    renderer = PageRenderer(context).start(
        tmp_path / "absent.yaml", template="layout.jinja"
    )
    assert len(context.conf) == 0
    assert renderer.template == FileTemplate(Path("layout.jinja"))


def _prioritised_context(levels: set[str]) -> SiteContext:
    ctx = SiteContext()
    if "top" in levels:
        ctx.conf["template"] = "top.jinja"
    if "site" in levels:
        ctx.conf["site"] = {"template": "site.jinja"}
    if "attribute" in levels:
        ctx["site.template"] = "attribute.jinja"
    return ctx


@pytest.mark.parametrize(
    ("explicit", "levels", "expected"),
    [
        ("explicit.jinja", {"top", "site", "attribute"}, "explicit.jinja"),
        (None, {"top", "site", "attribute"}, "top.jinja"),
        (None, {"site", "attribute"}, "site.jinja"),
        (None, {"attribute"}, "attribute.jinja"),
    ],
)
def test_template_lookup_order(
    explicit: str | None, levels: set[str], expected: str
) -> None:
    ctx = _prioritised_context(levels)
    renderer = PageRenderer(ctx).start(template=explicit)
    try:
        assert renderer.template == FileTemplate(Path(expected))
    finally:
        ctx.capture.end()


def test_null_config_values_count_as_unset(context: SiteContext) -> None:
    context.conf["template"] = None
    context.conf["site"] = {"template": None}
    context["site.template"] = "attribute.jinja"

    renderer = PageRenderer(context).start()

    assert renderer.template == FileTemplate(Path("attribute.jinja"))


def test_missing_template_raises_without_capturing(context: SiteContext) -> None:
    context.conf["site"] = {"title": "No layout"}
    with pytest.raises(MissingTemplateError, match="No site template was defined"):
        PageRenderer(context).start()
    assert not context.capture.active


def test_end_echoes_to_stdout(
    context: SiteContext, layout: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    site = PageRenderer(context).start(template=layout)
    print("<p>Hi</p>")
    assert site.end() is None
    assert capsys.readouterr().out == "<main><p>Hi</p>\n</main>\n"


def test_end_returns_output_without_echo(
    context: SiteContext, layout: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    site = PageRenderer(context).start(template=str(layout))
    print("<p>Hi</p>")
    result = site.end(echo_output=False)
    assert result == "<main><p>Hi</p>\n</main>\n"
    assert site.output == result
    assert capsys.readouterr().out == ""


def test_end_dispatches_to_named_loader(context: SiteContext) -> None:
    loader = RecordingLoader("<html>layout</html>")
    context.add_loader("layouts", loader)

    site = PageRenderer(context).start(template="layouts:site")
    print("body")
    result = site.end(echo_output=False)

    assert result == "<html>layout</html>"
    [(view, page_data)] = loader.calls
    assert view == "site"
    assert set(page_data) == {"content", "core", "nano"}
    assert page_data["content"] == "body\n"
    assert page_data["core"] is context
    assert page_data["nano"] is context


def test_unknown_loader_prefix_falls_back_to_file(
    context: SiteContext, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A colon with no matching loader is kept as a literal file path."""
    monkeypatch.chdir(tmp_path)
    Path("missing:layout.jinja").write_text("[{{ content }}]", encoding="utf-8")
    loader = RecordingLoader()
    context.add_loader("layouts", loader)

    site = PageRenderer(context).start(template="missing:layout.jinja")
    print("body")
    result = site.end(echo_output=False)

    assert site.template == FileTemplate(Path("missing:layout.jinja"))
    assert result == "[body\n]"
    assert loader.calls == []


def test_python_layout_receives_context(context: SiteContext, tmp_path: Path) -> None:
    script = tmp_path / "layout.py"
    script.write_text(
        "assert core is nano\n"
        'print(f"<body>{content.strip()}|{core[\'site.name\']}</body>", end="")\n',
        encoding="utf-8",
    )
    context["site.name"] = "Example"

    site = PageRenderer(context).start(template=script)
    print("hello")

    assert site.end(echo_output=False) == "<body>hello|Example</body>"


def test_loader_errors_propagate(context: SiteContext) -> None:
    class FailingLoader:
        def load(self, view: str, page_data: cabc.Mapping[str, typ.Any]) -> str:
            msg = f"cannot render {view}"
            raise RuntimeError(msg)

    context.add_loader("layouts", FailingLoader())
    site = PageRenderer(context).start(template="layouts:site")
    with pytest.raises(RuntimeError, match="cannot render site"):
        site.end(echo_output=False)
    assert not context.capture.active


def test_missing_template_file_propagates(
    context: SiteContext, tmp_path: Path
) -> None:
    site = PageRenderer(context).start(template=tmp_path / "absent.jinja")
    with pytest.raises(FileNotFoundError):
        site.end()


def test_end_before_start_raises(context: SiteContext) -> None:
    with pytest.raises(CaptureError):
        PageRenderer(context).end()


def test_page_context_manager_renders_on_exit(
    context: SiteContext, layout: Path
) -> None:
    renderer = PageRenderer(context)
    with renderer.page(template=layout, echo_output=False) as site:
        assert site is renderer
        print("inside")
    assert renderer.output == "<main>inside\n</main>\n"
    assert not context.capture.active


def test_page_context_manager_discards_output_on_error(
    context: SiteContext, layout: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    renderer = PageRenderer(context)
    with pytest.raises(ValueError, match="page failed"):
        with renderer.page(template=layout):
            print("partial")
            msg = "page failed"
            raise ValueError(msg)
    assert not context.capture.active
    assert renderer.output is None
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("config", ["", "   "])
def test_blank_config_source_is_ignored(
    context: SiteContext,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    config: str,
) -> None:
    """A blank source must not turn the working directory into the config root."""
    monkeypatch.chdir(tmp_path)
    Path("template.json").write_text('"other.jinja"', encoding="utf-8")
    context["site.template"] = "attribute.jinja"

    renderer = PageRenderer(context).start(config)

    assert context.conf.directory is None
    assert renderer.template == FileTemplate(Path("attribute.jinja"))


def test_blank_registry_config_is_ignored(
    context: SiteContext, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    Path("template.json").write_text('"other.jinja"', encoding="utf-8")
    context["site.conf"] = ""
    context["site.template"] = "attribute.jinja"

    renderer = PageRenderer(context).start()

    assert context.conf.directory is None
    assert renderer.template == FileTemplate(Path("attribute.jinja"))


def test_numeric_template_from_yaml_names_a_file(
    context: SiteContext, tmp_path: Path
) -> None:
    config = tmp_path / "site.yaml"
    config.write_text("template: 404\n", encoding="utf-8")

    renderer = PageRenderer(context).start(config)

    assert renderer.template == FileTemplate(Path("404"))


def test_page_block_may_end_the_page_itself(
    context: SiteContext, layout: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    renderer = PageRenderer(context)
    with renderer.page(template=layout) as site:
        print("early")
        result = site.end(echo_output=False)
    assert result == "<main>early\n</main>\n"
    assert renderer.output == result
    assert not context.capture.active
    assert capsys.readouterr().out == ""


def test_error_after_early_end_is_not_masked(
    context: SiteContext, layout: Path
) -> None:
    renderer = PageRenderer(context)
    with pytest.raises(ValueError, match="after render"):
        with renderer.page(template=layout, echo_output=False) as site:
            print("body")
            site.end(echo_output=False)
            msg = "after render"
            raise ValueError(msg)
    assert renderer.output == "<main>body\n</main>\n"
    assert not context.capture.active


def test_page_restarts_cleanly_after_early_end(
    context: SiteContext, layout: Path
) -> None:
    renderer = PageRenderer(context)
    with renderer.page(template=layout, echo_output=False) as site:
        print("first")
        site.end(echo_output=False)
    with renderer.page(template=layout, echo_output=False):
        print("second")
    assert renderer.output == "<main>second\n</main>\n"
    assert not context.capture.active
