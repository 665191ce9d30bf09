"""Tests for Markdown and template rendering."""

import pytest
from jinja2 import TemplateNotFound

from autodoc.rendering import (
    DEFAULT_TEMPLATE,
    DEFAULT_TEMPLATE_DIR,
    HtmlMarkdownRenderer,
    JinjaTemplateEngine,
    MarkdownRenderer,
    TemplateEngine,
    process_internal_links,
)


class TestProcessInternalLinks:
    """Tests for process_internal_links."""

    def test_simple_link(self):
        assert process_internal_links("{@link MyClass}") == '<a href="#MyClass">MyClass</a>'

    def test_member_link(self):
        html = process_internal_links("See {@link Foo.Bar#baz} and {@link Foo.qux}.")

        assert html == 'See <a href="#Foo-Bar-baz">Foo.Bar#baz</a> and <a href="#Foo-qux">Foo.qux</a>.'

    def test_text_without_links(self):
        assert process_internal_links("<p>Nothing here.</p>") == "<p>Nothing here.</p>"


class TestHtmlMarkdownRenderer:
    """Tests for HtmlMarkdownRenderer."""

    def test_paragraph(self):
        assert HtmlMarkdownRenderer().render("Adds *two* numbers.") == "<p>Adds <em>two</em> numbers.</p>"

    def test_empty_text(self):
        assert HtmlMarkdownRenderer().render("") == ""

    def test_inline_code(self):
        assert HtmlMarkdownRenderer().render("Returns `null`.") == "<p>Returns <code>null</code>.</p>"

    def test_fenced_code_block(self):
        html = HtmlMarkdownRenderer().render("Usage:\n\n```\nfoo(1);\n```")

        assert "<pre><code>foo(1);\n</code></pre>" in html

    def test_links_are_processed(self):
        html = HtmlMarkdownRenderer().render("Like {@link Lazy#map}.")

        assert html == '<p>Like <a href="#Lazy-map">Lazy#map</a>.</p>'


def test_renderer_interfaces_are_abstract():
    with pytest.raises(TypeError):
        MarkdownRenderer()
    with pytest.raises(TypeError):
        TemplateEngine()


class TestJinjaTemplateEngine:
    """Tests for JinjaTemplateEngine."""

    def test_uses_bundled_templates_by_default(self):
        engine = JinjaTemplateEngine()

        assert engine.template_dir == DEFAULT_TEMPLATE_DIR
        assert (DEFAULT_TEMPLATE_DIR / DEFAULT_TEMPLATE).exists()

    def test_render_custom_template(self, tmp_path):
        (tmp_path / "hello.txt").write_text("Hello {{ name }}!")

        assert JinjaTemplateEngine(tmp_path).render("hello.txt", {"name": "Lazy"}) == "Hello Lazy!"

    def test_html_templates_are_autoescaped(self, tmp_path):
        (tmp_path / "page.html").write_text("<b>{{ text }}</b>")

        html = JinjaTemplateEngine(tmp_path).render("page.html", {"text": "a < b"})

        assert html == "<b>a &lt; b</b>"

    def test_missing_template(self, tmp_path):
        with pytest.raises(TemplateNotFound):
            JinjaTemplateEngine(tmp_path).render("missing.html", {})

    def test_default_template_renders_empty_library(self):
        html = JinjaTemplateEngine().render(DEFAULT_TEMPLATE, {
            "name": "Empty",
            "description": "",
            "namespaces": [],
            "javascripts": [],
        })

        assert "<h1>Empty</h1>" in html
        assert "<title>Empty API Docs</title>" in html
