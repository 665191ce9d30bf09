"""Exceptions raised while extracting documentation."""


class AutodocError(Exception):
    """Base class for all autodoc errors."""


class UnknownNodeTypeError(AutodocError):
    """Raised when the node walker meets a node type it cannot descend into.

    The walker's child table must cover every node type in the input, so this
    aborts the whole extraction rather than silently skipping structure.
    """

    def __init__(self, node_type: str, node=None):
        self.node_type = node_type
        self.node = node
        message = f'Unknown node type "{node_type}"'
        if node is not None:
            # Extents are 0-indexed rows; report the 1-indexed source line
            message += f" at line {node.extent.start + 1}"
        super().__init__(message)


class UnformattableTypeError(AutodocError):
    """Raised when a type expression has no string form."""

    def __init__(self, type_expr):
        self.type_expr = type_expr
        super().__init__(f"Unable to format type {type(type_expr).__name__}: {type_expr!r}")


class SourceParseError(AutodocError):
    """Raised when source code cannot be parsed into a syntax tree."""


class CommentParseError(AutodocError):
    """Raised when a documentation comment cannot be parsed into a doclet."""
