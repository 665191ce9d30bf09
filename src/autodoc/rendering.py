"""Markdown and template rendering for extracted documentation."""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "api.html"

_INTERNAL_LINK = re.compile(r"\{@link ([^}]*)\}")


def process_internal_links(html: str) -> str:
    """Replace JSDoc '{@link Foo#bar}' references with anchors.

    Examples:
        >>> process_internal_links("{@link MyClass}")
        '<a href="#MyClass">MyClass</a>'
    """
    def link(match: re.Match) -> str:
        target = match.group(1)
        return f'<a href="#{re.sub(r"[.#]", "-", target)}">{target}</a>'

    return _INTERNAL_LINK.sub(link, html)


class MarkdownRenderer(ABC):
    """Renders Markdown text to markup."""

    @abstractmethod
    def render(self, text: str) -> str:
        pass


class HtmlMarkdownRenderer(MarkdownRenderer):
    """Markdown to HTML using the markdown package, with {@link} anchors."""

    def __init__(self, extensions: list[str] | None = None):
        self.extensions = extensions if extensions is not None else ["fenced_code"]

    def render(self, text: str) -> str:
        html = markdown.markdown(text, extensions=self.extensions)
        return process_internal_links(html)


class TemplateEngine(ABC):
    """Renders a named template with a data mapping."""

    @abstractmethod
    def render(self, template: str, data: dict[str, Any]) -> str:
        pass


class JinjaTemplateEngine(TemplateEngine):
    """Loads templates from a directory with jinja2."""

    def __init__(self, template_dir: Path | None = None):
        if template_dir is None:
            template_dir = DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template: str, data: dict[str, Any]) -> str:
        return self.env.get_template(template).render(**data)
