"""Qualified names for documented functions.

A qualified name locates a declaration inside its namespace: 'Foo.bar' is a
static member of Foo, 'Foo#bar' an instance member (Foo.prototype.bar).
"""

import re

from autodoc.models import NameInfo
from autodoc.syntax import Node, SyntaxTree

_SEPARATORS = re.compile(r"[.#]")


def _join(left: str | None, right: str | None) -> str | None:
    if left is None or right is None:
        return None
    return f"{left}.{right}"


def get_identifier_name(tree: SyntaxTree, node: Node | None, _seen: set[int] | None = None) -> str | None:
    """Get the name of whatever identifier is associated with a node.

    Anonymous nodes take their name from their surroundings by climbing parent
    links, so the function in `Foo.prototype.bar = function() {}` is named
    'Foo#bar' and the one in `var Foo = { bar: function() {} }` 'Foo.bar'.

    Args:
        tree: Tree owning the node (resolves parent handles)
        node: Node to name, or None

    Returns:
        The qualified name, or None if no name can be found
    """
    if node is None:
        return None

    # Climbing can come back to a node already on the path (an immediately
    # invoked function names its call, which names its statement, which
    # names the call again); such a node has no name.
    if _seen is None:
        _seen = set()
    if node.handle in _seen:
        return None
    _seen.add(node.handle)

    def name_of(other: Node | None) -> str | None:
        return get_identifier_name(tree, other, _seen)

    if node.type == "Identifier":
        return node.get("name")

    if node.type == "FunctionDeclaration":
        return name_of(node.get("id"))

    if node.type == "AssignmentExpression":
        return name_of(node.get("left"))

    if node.type == "MemberExpression":
        name = _join(name_of(node.get("object")), name_of(node.get("property")))
        if name is None:
            return None
        return name.replace(".prototype.", "#", 1)

    if node.type == "Property":
        return _join(name_of(tree.parent_of(node)), name_of(node.get("key")))

    if node.type == "FunctionExpression":
        return name_of(tree.parent_of(node))

    if node.type == "VariableDeclarator":
        return name_of(node.get("id"))

    if node.type == "ExpressionStatement":
        return name_of(node.get("expression"))

    return name_of(tree.parent_of(node))


def parse_name(name: str) -> NameInfo:
    """Split a qualified name into its parts.

    Examples:
        >>> parse_name("Foo.Bar#baz")
        NameInfo(name='Foo.Bar#baz', short_name='baz', namespace='Foo.Bar', identifier='Foo-Bar-baz')
        >>> parse_name("Foo").namespace is None
        True
    """
    parts = _SEPARATORS.split(name)
    short_name = parts.pop()

    # 'foo#bar#baz' makes no sense, so joining with '.' recreates the namespace
    namespace = ".".join(parts)

    return NameInfo(
        name=name,
        short_name=short_name,
        namespace=namespace or None,
        identifier=_SEPARATORS.sub("-", name),
    )
