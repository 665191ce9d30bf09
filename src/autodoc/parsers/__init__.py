from pathlib import Path

from autodoc.parsers.base import CodeParser, CommentParser
from autodoc.parsers.javascript_parser import JavaScriptParser
from autodoc.parsers.jsdoc_parser import JSDocParser

JAVASCRIPT_EXTENSIONS = (".js", ".mjs", ".cjs")


def get_parser_for_file(file_path: Path) -> CodeParser | None:
    """Get the code parser for a file based on its extension.

    Args:
        file_path: Path to the source file

    Returns:
        Parser instance, or None if the file type is not supported
    """
    if file_path.suffix.lower() in JAVASCRIPT_EXTENSIONS:
        return JavaScriptParser()
    return None


__all__ = [
    "CodeParser",
    "CommentParser",
    "JSDocParser",
    "JavaScriptParser",
    "get_parser_for_file",
]
