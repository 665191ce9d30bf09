"""Arena-backed syntax tree and the generic node walker.

Nodes own their children. The link back to a node's parent is a handle (an
index into the owning SyntaxTree's arena), assigned by walk_nodes() as it
descends, and is only ever read by upward name resolution.
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from autodoc.errors import UnknownNodeTypeError
from autodoc.models import Comment, Location

FUNCTION_TYPES = ("FunctionDeclaration", "FunctionExpression")

# Returned by a walk_nodes() visitor to end the walk.
STOP = object()


@dataclass(eq=False)
class Node:
    """A syntax node tagged by its ESTree type name.

    Attributes:
        type: Type discriminator, e.g. "FunctionDeclaration"
        extent: Source lines spanned by the node
        handle: Index of this node in its tree's arena
        fields: Type-specific fields (child nodes, lists of nodes, or strings)
        parent: Handle of the parent node, set during a walk (None for roots)
    """
    type: str
    extent: Location
    handle: int
    fields: dict[str, Any] = field(default_factory=dict)
    parent: int | None = field(default=None, repr=False)

    def get(self, name: str, default=None):
        return self.fields.get(name, default)


@dataclass
class SyntaxTree:
    """A parsed program: its top-level statements, comments and node arena."""
    body: list[Node] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    nodes: list[Node] = field(default_factory=list, repr=False)

    def add_node(self, node_type: str, extent: Location, **fields) -> Node:
        """Create a node in this tree's arena."""
        node = Node(type=node_type, extent=extent, handle=len(self.nodes), fields=fields)
        self.nodes.append(node)
        return node

    def parent_of(self, node: Node) -> Node | None:
        if node.parent is None:
            return None
        return self.nodes[node.parent]


def _single(name: str) -> Callable[[Node], list[Node]]:
    def children(node: Node) -> list[Node]:
        child = node.get(name)
        return [] if child is None else [child]
    return children


def _many(name: str) -> Callable[[Node], list[Node]]:
    def children(node: Node) -> list[Node]:
        return list(node.get(name) or [])
    return children


def _callee(node: Node) -> list[Node]:
    callee = node.get("callee")
    if callee is not None and callee.type == "FunctionExpression":
        return [callee]
    return []


def _none(node: Node) -> list[Node]:
    return []


# Which children to descend into, per node type. Anything missing here is an
# error: skipping unknown structure could hide documented functions.
CHILDREN: dict[str, Callable[[Node], list[Node]]] = {
    "FunctionDeclaration": _single("body"),
    "FunctionExpression": _single("body"),
    "BlockStatement": _many("body"),
    "ExpressionStatement": _single("expression"),
    "AssignmentExpression": _single("right"),
    "CallExpression": _callee,
    "ObjectExpression": _many("properties"),
    "Property": lambda node: _single("key")(node) + _single("value")(node),
    "VariableDeclaration": _many("declarations"),
    "VariableDeclarator": _single("init"),
    "Identifier": _none,
    "EmptyStatement": _none,
    "ReturnStatement": _none,
}


def node_children(node: Node) -> list[Node]:
    """Get the children the walker descends into for a node.

    Raises:
        UnknownNodeTypeError: If the node's type has no entry in CHILDREN
    """
    try:
        get_children = CHILDREN[node.type]
    except KeyError:
        raise UnknownNodeTypeError(node.type, node) from None
    return get_children(node)


def walk_nodes(
    roots: Node | Iterable[Node],
    visit: Callable[[Node], object] | None = None,
) -> Iterator[Node]:
    """Lazily walk every reachable node, depth-first and pre-order.

    Each child's parent handle is set just before the walk descends into it,
    so walking the same tree again reproduces the same sequence and links.

    Args:
        roots: A root node or an ordered sequence of sibling nodes
        visit: Optional callback run on each node before it is yielded;
            returning STOP ends the walk at every depth

    Yields:
        Nodes in pre-order
    """
    if isinstance(roots, Node):
        roots = [roots]

    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        if visit is not None and visit(node) is STOP:
            return

        yield node

        children = node_children(node)
        for child in children:
            child.parent = node.handle
        stack.extend(reversed(children))


def iter_functions(tree: SyntaxTree) -> Iterator[Node]:
    """Yield every function declaration or expression in the tree."""
    for node in walk_nodes(tree.body):
        if node.type in FUNCTION_TYPES:
            yield node
