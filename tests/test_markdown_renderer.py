from mdeditor.domain.models import ExtensionConfig, HeadingEntry
from mdeditor.services.markdown_renderer import MarkdownRenderer


def test_renderer_to_html_returns_page(renderer: MarkdownRenderer):
    html = renderer.to_html("# Title\n\nSome *text*")
    assert html.lower().startswith("<!doctype html")
    assert '<h1 id="title">Title</h1>' in html
    assert "<em>text</em>" in html


def test_renderer_empty_document(renderer: MarkdownRenderer):
    assert renderer.to_html("") == ""


def test_renderer_asks_css_provider_on_every_render():
    css = {"value": "body{color:red}"}
    r = MarkdownRenderer(css_provider=lambda: css["value"])
    assert "body{color:red}" in r.to_html("x")
    css["value"] = "body{color:blue}"
    assert "body{color:blue}" in r.to_html("x")


def test_renderer_outline_helpers(renderer: MarkdownRenderer):
    text = "# A\n\n## B\n\nOne two three"
    assert renderer.headings(text) == [HeadingEntry(1, "A", "a"), HeadingEntry(2, "B", "b")]
    assert renderer.toc(text) == "- [A](#a)\n  - [B](#b)"
    assert renderer.word_count(text) == 7


def test_renderer_uses_its_config_for_both_paths():
    r = MarkdownRenderer(ExtensionConfig(complete_page=False, auto_heading_ids=False))
    assert r.to_html("# A") == "<h1>A</h1>"
    assert r.toc("# A") == "- [A](#a)"
