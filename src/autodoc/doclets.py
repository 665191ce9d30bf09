from autodoc.models import Doclet, FunctionInfo, NameInfo, ParameterInfo, ReturnInfo
from autodoc.names import get_identifier_name, parse_name
from autodoc.pairs import get_benchmarks, get_examples
from autodoc.rendering import MarkdownRenderer
from autodoc.syntax import Node, SyntaxTree
from autodoc.type_expressions import format_type


def has_tag(doc: Doclet, tag_name: str) -> bool:
    """Check whether a doclet carries a tag with the given title."""
    return any(tag.title == tag_name for tag in doc.tags)


def get_signature(name: NameInfo, params: list[ParameterInfo]) -> str:
    """Produce a display signature like 'Foo.bar = function(x, y)'."""
    formatted_params = "(" + ", ".join(p.name or "" for p in params) + ")"

    if name.name == name.short_name:
        return "function " + name.short_name + formatted_params
    return name.namespace + "." + name.short_name + " = function" + formatted_params


def _format_optional_type(type_expr) -> str | None:
    if type_expr is None:
        return None
    return format_type(type_expr)


class DocletExtractor:
    """Turns a function node and its doclet into a FunctionInfo."""

    def __init__(self, markdown_renderer: MarkdownRenderer, example_handlers=()):
        self.markdown_renderer = markdown_renderer
        self.example_handlers = list(example_handlers)

    def create_function_info(self, tree: SyntaxTree, node: Node, doc: Doclet) -> FunctionInfo | None:
        """Build the documentation record for one function.

        Args:
            tree: Tree the node belongs to
            node: FunctionDeclaration or FunctionExpression node
            doc: Doclet parsed from the comment preceding the node

        Returns:
            FunctionInfo, or None if no name can be found for the node
        """
        qualified_name = get_identifier_name(tree, node)
        if qualified_name is None:
            return None

        name_info = parse_name(qualified_name)
        params = self.get_params(doc)
        returns = self.get_returns(doc)
        examples = get_examples(doc, self.example_handlers)
        benchmarks = get_benchmarks(doc)

        return FunctionInfo(
            name=name_info.name,
            short_name=name_info.short_name,
            identifier=name_info.identifier,
            namespace=name_info.namespace,
            description=self.markdown_renderer.render(doc.description),
            params=params,
            returns=returns,
            is_constructor=has_tag(doc, "constructor"),
            is_static="#" not in name_info.name,
            is_public=has_tag(doc, "public"),
            has_signature=len(params) > 0 or returns is not None,
            signature=get_signature(name_info, params),
            examples=examples,
            has_examples=len(examples.list) > 0,
            benchmarks=benchmarks,
            has_benchmarks=len(benchmarks.list) > 0,
            tags=[tag.title for tag in doc.tags],
        )

    def get_params(self, doc: Doclet) -> list[ParameterInfo]:
        """Get the documented parameters of a function, in order."""
        return [
            ParameterInfo(
                name=tag.name,
                type=_format_optional_type(tag.type),
                description=self.markdown_renderer.render(tag.description or ""),
            )
            for tag in doc.tags
            if tag.title == "param"
        ]

    def get_returns(self, doc: Doclet) -> ReturnInfo | None:
        """Get the documented return value from the first @returns tag."""
        for tag in doc.tags:
            if tag.title == "returns":
                return ReturnInfo(
                    type=_format_optional_type(tag.type),
                    description=self.markdown_renderer.render(tag.description or ""),
                )
        return None
