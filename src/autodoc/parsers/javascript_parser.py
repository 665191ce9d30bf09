import tree_sitter_javascript
from tree_sitter import Language, Parser

from autodoc.errors import SourceParseError
from autodoc.models import Comment, Location
from autodoc.parsers.base import CodeParser
from autodoc.syntax import Node, SyntaxTree

COMMENT_TYPES = ("comment",)

# tree-sitter node types that keep their structure under an ESTree name
# different from their CamelCased tree-sitter name.
ESTREE_NAMES = {
    "arrow_function": "ArrowFunctionExpression",
    "array": "ArrayExpression",
    "ternary_expression": "ConditionalExpression",
    "this": "ThisExpression",
    "super": "Super",
    "subscript_expression": "ComputedMemberExpression",
    "sequence_expression": "SequenceExpression",
    "class": "ClassExpression",
    "spread_element": "SpreadElement",
}


def _named_children(ts_node) -> list:
    """Named children of a tree-sitter node, without comments."""
    return [child for child in ts_node.named_children if child.type not in COMMENT_TYPES]


def _camel_case(node_type: str) -> str:
    return "".join(part.capitalize() for part in node_type.split("_"))


def _extent(ts_node) -> Location:
    return Location(start=ts_node.start_point[0], end=ts_node.end_point[0])


class _TreeBuilder:
    """Converts a tree-sitter concrete syntax tree into ESTree-named nodes."""

    def __init__(self, tree: SyntaxTree, source: bytes):
        self.tree = tree
        self.source = source
        self.builders = {
            "function_declaration": self._function_declaration,
            "generator_function_declaration": self._function_declaration,
            "function_expression": self._function_expression,
            "function": self._function_expression,
            "generator_function": self._function_expression,
            "statement_block": self._block_statement,
            "expression_statement": self._expression_statement,
            "assignment_expression": self._assignment_expression,
            "augmented_assignment_expression": self._assignment_expression,
            "call_expression": self._call_expression,
            "object": self._object_expression,
            "pair": self._pair,
            "method_definition": self._method_definition,
            "shorthand_property_identifier": self._shorthand_property,
            "variable_declaration": self._variable_declaration,
            "lexical_declaration": self._variable_declaration,
            "variable_declarator": self._variable_declarator,
            "member_expression": self._member_expression,
            "identifier": self._identifier,
            "property_identifier": self._identifier,
            "private_property_identifier": self._identifier,
            "shorthand_property_identifier_pattern": self._identifier,
            "statement_identifier": self._identifier,
            "undefined": self._identifier,
            "return_statement": self._return_statement,
            "empty_statement": self._empty_statement,
            "string": self._literal,
            "number": self._literal,
            "true": self._literal,
            "false": self._literal,
            "null": self._literal,
            "regex": self._literal,
            "template_string": self._literal,
        }

    def text(self, ts_node) -> str:
        return self.source[ts_node.start_byte:ts_node.end_byte].decode("utf8")

    def build(self, ts_node) -> Node | None:
        if ts_node is None:
            return None

        # ESTree has no node for parentheses
        if ts_node.type == "parenthesized_expression":
            inner = _named_children(ts_node)
            if len(inner) == 1:
                return self.build(inner[0])

        builder = self.builders.get(ts_node.type, self._generic)
        return builder(ts_node)

    def build_all(self, ts_nodes) -> list[Node]:
        return [self.build(child) for child in ts_nodes]

    def _add(self, node_type: str, ts_node, **fields) -> Node:
        return self.tree.add_node(node_type, _extent(ts_node), **fields)

    def _params(self, ts_node) -> list[Node]:
        params_node = ts_node.child_by_field_name("parameters")
        if params_node is None:
            return []
        return self.build_all(_named_children(params_node))

    def _function_declaration(self, ts_node) -> Node:
        return self._add(
            "FunctionDeclaration", ts_node,
            id=self.build(ts_node.child_by_field_name("name")),
            params=self._params(ts_node),
            body=self.build(ts_node.child_by_field_name("body")),
        )

    def _function_expression(self, ts_node) -> Node:
        return self._add(
            "FunctionExpression", ts_node,
            id=self.build(ts_node.child_by_field_name("name")),
            params=self._params(ts_node),
            body=self.build(ts_node.child_by_field_name("body")),
        )

    def _block_statement(self, ts_node) -> Node:
        return self._add("BlockStatement", ts_node, body=self.build_all(_named_children(ts_node)))

    def _expression_statement(self, ts_node) -> Node:
        children = _named_children(ts_node)
        return self._add(
            "ExpressionStatement", ts_node,
            expression=self.build(children[0]) if children else None,
        )

    def _assignment_expression(self, ts_node) -> Node:
        return self._add(
            "AssignmentExpression", ts_node,
            left=self.build(ts_node.child_by_field_name("left")),
            right=self.build(ts_node.child_by_field_name("right")),
        )

    def _call_expression(self, ts_node) -> Node:
        args_node = ts_node.child_by_field_name("arguments")
        if args_node is None:
            arguments = []
        elif args_node.type == "arguments":
            arguments = self.build_all(_named_children(args_node))
        else:
            # Tagged template: the template string is the only argument
            arguments = [self.build(args_node)]

        return self._add(
            "CallExpression", ts_node,
            callee=self.build(ts_node.child_by_field_name("function")),
            arguments=arguments,
        )

    def _object_expression(self, ts_node) -> Node:
        return self._add("ObjectExpression", ts_node, properties=self.build_all(_named_children(ts_node)))

    def _pair(self, ts_node) -> Node:
        return self._add(
            "Property", ts_node,
            key=self.build(ts_node.child_by_field_name("key")),
            value=self.build(ts_node.child_by_field_name("value")),
        )

    def _method_definition(self, ts_node) -> Node:
        # ESTree models `{ foo() {} }` as a Property whose value is a function
        value = self._add(
            "FunctionExpression", ts_node,
            id=None,
            params=self._params(ts_node),
            body=self.build(ts_node.child_by_field_name("body")),
        )
        return self._add(
            "Property", ts_node,
            key=self.build(ts_node.child_by_field_name("name")),
            value=value,
        )

    def _shorthand_property(self, ts_node) -> Node:
        return self._add(
            "Property", ts_node,
            key=self._identifier(ts_node),
            value=self._identifier(ts_node),
        )

    def _variable_declaration(self, ts_node) -> Node:
        declarators = [
            child for child in _named_children(ts_node) if child.type == "variable_declarator"
        ]
        return self._add("VariableDeclaration", ts_node, declarations=self.build_all(declarators))

    def _variable_declarator(self, ts_node) -> Node:
        return self._add(
            "VariableDeclarator", ts_node,
            id=self.build(ts_node.child_by_field_name("name")),
            init=self.build(ts_node.child_by_field_name("value")),
        )

    def _member_expression(self, ts_node) -> Node:
        return self._add(
            "MemberExpression", ts_node,
            object=self.build(ts_node.child_by_field_name("object")),
            property=self.build(ts_node.child_by_field_name("property")),
        )

    def _identifier(self, ts_node) -> Node:
        return self._add("Identifier", ts_node, name=self.text(ts_node))

    def _return_statement(self, ts_node) -> Node:
        children = _named_children(ts_node)
        return self._add(
            "ReturnStatement", ts_node,
            argument=self.build(children[0]) if children else None,
        )

    def _empty_statement(self, ts_node) -> Node:
        return self._add("EmptyStatement", ts_node)

    def _literal(self, ts_node) -> Node:
        return self._add("Literal", ts_node, raw=self.text(ts_node))

    def _generic(self, ts_node) -> Node:
        node_type = ESTREE_NAMES.get(ts_node.type) or _camel_case(ts_node.type)
        return self._add(node_type, ts_node, children=self.build_all(_named_children(ts_node)))


class JavaScriptParser(CodeParser):
    """Parser for JavaScript source code using tree-sitter."""

    def __init__(self):
        self.language = Language(tree_sitter_javascript.language())
        self.parser = Parser(self.language)

    def parse(self, source_code: str) -> SyntaxTree:
        """Parse JavaScript into an ESTree-shaped syntax tree.

        Args:
            source_code: JavaScript source code to parse

        Returns:
            SyntaxTree with top-level statements and every comment in source order

        Raises:
            SourceParseError: If the source has syntax errors
        """
        source = bytes(source_code, "utf8")
        root = self.parser.parse(source).root_node

        if root.has_error:
            line = self._first_error_line(root)
            raise SourceParseError(f"Syntax error near line {line}")

        tree = SyntaxTree()
        builder = _TreeBuilder(tree, source)
        tree.body = builder.build_all(_named_children(root))
        tree.comments = self._extract_comments(root, builder)
        return tree

    def _extract_comments(self, root, builder: _TreeBuilder) -> list[Comment]:
        """Collect every comment node, in source order."""
        comments = []
        stack = [root]

        while stack:
            node = stack.pop()
            if node.type in COMMENT_TYPES:
                text = builder.text(node)
                if text.startswith("/*"):
                    comments.append(Comment(value=text[2:-2], extent=_extent(node), kind="Block"))
                else:
                    comments.append(Comment(value=text[2:], extent=_extent(node), kind="Line"))
                continue
            stack.extend(reversed(node.children))

        return comments

    def _first_error_line(self, root) -> int:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node.start_point[0]
            stack.extend(reversed(node.children))
        return root.start_point[0]
