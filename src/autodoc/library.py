"""Extracting library documentation from source code.

Pipeline: the code parser produces a syntax tree and its comments; function
nodes are indexed by start line; each comment is matched with the function
right below it and turned into a FunctionInfo; the records are filtered,
grouped into namespaces and combined with the library summary.
"""

import logging
from dataclasses import asdict
from typing import Any

from autodoc.associator import associate_comments, index_functions, parse_comment
from autodoc.config import AutodocConfig
from autodoc.doclets import DocletExtractor
from autodoc.models import Comment, FunctionInfo, LibraryInfo, LibrarySummary
from autodoc.namespaces import create_namespace_info, group_by_namespace
from autodoc.parsers.base import CodeParser, CommentParser
from autodoc.parsers.javascript_parser import JavaScriptParser
from autodoc.parsers.jsdoc_parser import JSDocParser
from autodoc.rendering import HtmlMarkdownRenderer, JinjaTemplateEngine, MarkdownRenderer, TemplateEngine

logger = logging.getLogger(__name__)


class Autodoc:
    """Documentation extractor configured with its parsers and renderers.

    Every collaborator is fixed at construction; parse() and generate() keep
    no state between calls.
    """

    def __init__(
        self,
        config: AutodocConfig | None = None,
        code_parser: CodeParser | None = None,
        comment_parser: CommentParser | None = None,
        markdown_renderer: MarkdownRenderer | None = None,
        template_engine: TemplateEngine | None = None,
    ):
        self.config = config or AutodocConfig()
        self.code_parser = code_parser or JavaScriptParser()
        self.comment_parser = comment_parser or JSDocParser()
        self.markdown_renderer = markdown_renderer or HtmlMarkdownRenderer()
        self.template_engine = template_engine or JinjaTemplateEngine(self.config.template_dir)
        self.extractor = DocletExtractor(self.markdown_renderer, self.config.example_handlers)

    def parse(self, code: str) -> LibraryInfo:
        """Parse source code and extract everything needed to document it.

        Args:
            code: The source code to parse

        Returns:
            LibraryInfo with the library summary, namespaces and flat doc list

        Raises:
            SourceParseError: If the code cannot be parsed
            UnknownNodeTypeError: If the code holds a node the walker cannot descend into
            UnformattableTypeError: If a documented type cannot be formatted
        """
        tree = self.code_parser.parse(code)

        # Assumes the header comment carries @fileOverview (and maybe @name)
        summary = self.get_library_summary(tree.comments)

        functions = index_functions(tree)

        docs = []
        for nodes, doc in associate_comments(tree.comments, functions, self.comment_parser):
            info = self.extractor.create_function_info(tree, nodes[0], doc)
            if info is None:
                logger.debug(f"Skipping unnamed function at line {nodes[0].extent.start}")
                continue
            docs.append(info)

        docs = self.filter_by_tags(docs)

        groups = group_by_namespace(docs)
        namespace_names = self.config.namespaces or list(groups)
        namespaces = [create_namespace_info(groups, namespace) for namespace in namespace_names]

        # The first namespace with members is probably what the library is
        # conventionally called (like _ for Underscore or $ for jQuery).
        reference_name = next(
            (ns.namespace.split(".")[0] for ns in namespaces if ns.members),
            None,
        )

        return LibraryInfo(
            name=summary.name or reference_name,
            reference_name=reference_name,
            description=summary.description,
            code=code,
            namespaces=namespaces,
            docs=docs,
        )

    def filter_by_tags(self, docs: list[FunctionInfo]) -> list[FunctionInfo]:
        """Keep only docs carrying one of the configured tags.

        With no configured tags, the presence of any @public function means
        only @public functions are documented.
        """
        tags = list(self.config.tags)
        if not tags and any(doc.is_public for doc in docs):
            tags = ["public"]

        if not tags:
            return docs

        return [doc for doc in docs if any(tag in doc.tags for tag in tags)]

    def get_library_summary(self, comments: list[Comment]) -> LibrarySummary:
        """Get the library name and description from its @fileOverview comment."""
        for comment in comments:
            doc = parse_comment(self.comment_parser, comment)
            if doc is None:
                continue

            overview = next((tag for tag in doc.tags if tag.title == "fileOverview"), None)
            if overview is None:
                continue

            name_tag = next((tag for tag in doc.tags if tag.title == "name"), None)
            return LibrarySummary(
                name=(name_tag.description or "") if name_tag else "",
                description=self.markdown_renderer.render(overview.description or ""),
            )

        return LibrarySummary()

    def template_data(self, library_info: LibraryInfo) -> dict[str, Any]:
        """Flatten library info into template data, with extra options merged in."""
        data = asdict(library_info)
        data["javascripts"] = list(self.config.javascripts)
        data["example_handlers"] = [
            {"pattern": handler.pattern.pattern, "test": handler.test}
            for handler in self.config.example_handlers
        ]
        data.update(self.config.extra_options)
        return data

    def generate(self, source: LibraryInfo | str) -> str:
        """Render documentation for a library.

        Args:
            source: Library info from parse(), or raw source code

        Returns:
            The rendered document
        """
        library_info = self.parse(source) if isinstance(source, str) else source
        return self.template_engine.render(self.config.template, self.template_data(library_info))


def parse(code: str, config: AutodocConfig | None = None) -> LibraryInfo:
    """Parse code with a fresh Autodoc instance."""
    return Autodoc(config).parse(code)


def generate(source: LibraryInfo | str, config: AutodocConfig | None = None) -> str:
    """Generate documentation with a fresh Autodoc instance."""
    return Autodoc(config).generate(source)
