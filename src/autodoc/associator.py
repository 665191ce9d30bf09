"""Pairing doc comments with the functions they document."""

import logging

from autodoc.errors import CommentParseError
from autodoc.models import Comment, Doclet
from autodoc.parsers.base import CommentParser
from autodoc.syntax import Node, SyntaxTree, iter_functions

logger = logging.getLogger(__name__)


def index_functions(tree: SyntaxTree) -> dict[int, list[Node]]:
    """Group every function node in the tree by its start line."""
    functions: dict[int, list[Node]] = {}
    for node in iter_functions(tree):
        functions.setdefault(node.extent.start, []).append(node)
    return functions


def parse_comment(comment_parser: CommentParser, comment: Comment) -> Doclet | None:
    """Parse a comment into a doclet, or None if it cannot be parsed."""
    try:
        return comment_parser.parse("/*" + comment.value + "*/", unwrap=True)
    except CommentParseError as e:
        logger.debug(f"Skipping unparsable comment at line {comment.extent.start}: {e}")
        return None


def associate_comments(
    comments: list[Comment],
    functions: dict[int, list[Node]],
    comment_parser: CommentParser,
) -> list[tuple[list[Node], Doclet]]:
    """Match each comment with the functions starting on the line after it.

    A comment is dropped if nothing starts right after it, if it cannot be
    parsed, or if its doclet has no description.

    Args:
        comments: All comments of the source, in order
        functions: Function nodes keyed by start line (see index_functions)
        comment_parser: Parser turning comment text into a doclet

    Returns:
        (function nodes, doclet) pairs in comment order
    """
    matches = []

    for comment in comments:
        nodes = functions.get(comment.extent.end + 1)
        if not nodes:
            continue

        doc = parse_comment(comment_parser, comment)
        if doc is None or not doc.description:
            logger.debug(f"Skipping comment without description at line {comment.extent.start}")
            continue

        matches.append((nodes, doc))

    return matches
