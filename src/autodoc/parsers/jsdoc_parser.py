"""JSDoc comment parsing.

Turns a comment like

    /**
     * Adds two numbers.
     *
     * @param {number} a The first number.
     * @param {number=} b The second number.
     * @returns {number} The sum.
     */

into a Doclet with a description and ordered tags, parsing each {type} into a
type expression.
"""

import re

from autodoc.errors import CommentParseError
from autodoc.models import Doclet, Tag
from autodoc.parsers.base import CommentParser
from autodoc.type_expressions import (
    AllLiteral,
    FieldType,
    FunctionType,
    NameExpression,
    NonNullableType,
    NullableType,
    NullLiteral,
    OptionalType,
    RecordType,
    RestType,
    TypeApplication,
    TypeExpr,
    UnionType,
)

# Tags read as '{type} name description'
NAMED_TAGS = ("param", "arg", "argument", "property", "prop")

# Tags read as '{type} description'
TYPED_TAGS = ("returns", "return", "type", "throws", "typedef")

_TAG_START = re.compile(r"^\s*@(\w+)")
_GUTTER = re.compile(r"^\s*\*(?!/) ?")
_NAME_CHARS = re.compile(r"[\w$.]+")


def unwrap_comment(comment: str) -> str:
    """Strip comment delimiters and the leading '*' of each line."""
    text = re.sub(r"^/\*\*?", "", comment.strip())
    text = re.sub(r"\*/$", "", text)
    lines = [_GUTTER.sub("", line) for line in text.split("\n")]
    return "\n".join(lines).strip()


class _TypeReader:
    """Recursive-descent reader for Closure Compiler type expressions."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message: str) -> CommentParseError:
        return CommentParseError(f"{message} at offset {self.pos} in type '{self.text}'")

    def skip_space(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self, token: str) -> bool:
        self.skip_space()
        return self.text.startswith(token, self.pos)

    def accept(self, token: str) -> bool:
        if self.peek(token):
            self.pos += len(token)
            return True
        return False

    def expect(self, token: str):
        if not self.accept(token):
            raise self.error(f"Expected '{token}'")

    def read(self) -> TypeExpr:
        type_expr = self.read_union()
        self.skip_space()
        if self.pos != len(self.text):
            raise self.error("Unexpected text")
        return type_expr

    def read_union(self) -> TypeExpr:
        elements = [self.read_postfix()]
        while self.accept("|"):
            elements.append(self.read_postfix())
        if len(elements) == 1:
            return elements[0]
        return UnionType(elements=elements)

    def read_postfix(self) -> TypeExpr:
        if self.accept("?"):
            return NullableType(expression=self.read_postfix())
        if self.accept("!"):
            return NonNullableType(expression=self.read_postfix())
        if self.accept("..."):
            return RestType(expression=self.read_postfix())

        type_expr = self.read_primary()
        while True:
            if self.accept("[]"):
                type_expr = TypeApplication(
                    expression=NameExpression(name="Array"), applications=[type_expr]
                )
            elif self.accept("="):
                type_expr = OptionalType(expression=type_expr)
            else:
                return type_expr

    def read_primary(self) -> TypeExpr:
        if self.accept("*"):
            return AllLiteral()

        if self.accept("("):
            type_expr = self.read_union()
            self.expect(")")
            if not isinstance(type_expr, UnionType):
                type_expr = UnionType(elements=[type_expr])
            return type_expr

        if self.accept("{"):
            return self.read_record()

        name = self.read_name()

        if name == "null":
            return NullLiteral()

        if name == "function" and self.peek("("):
            return self.read_function()

        type_expr = NameExpression(name=name)
        if self.accept(".<") or self.accept("<"):
            applications = [self.read_union()]
            while self.accept(","):
                applications.append(self.read_union())
            self.expect(">")
            type_expr = TypeApplication(expression=type_expr, applications=applications)
        return type_expr

    def read_name(self) -> str:
        self.skip_space()
        match = _NAME_CHARS.match(self.text, self.pos)
        if not match:
            raise self.error("Expected a type name")
        name = match.group(0)
        # A trailing '.' belongs to a '.<' type application
        if name.endswith(".") and self.text.startswith("<", match.end()):
            name = name[:-1]
        self.pos += len(name)
        return name

    def read_record(self) -> RecordType:
        fields = []
        if not self.accept("}"):
            while True:
                key = self.read_name()
                self.expect(":")
                fields.append(FieldType(key=key, value=self.read_union()))
                if self.accept("}"):
                    break
                self.expect(",")
        return RecordType(fields=fields)

    def read_function(self) -> FunctionType:
        self.expect("(")
        params = []
        if not self.accept(")"):
            while True:
                params.append(self.read_union())
                if self.accept(")"):
                    break
                self.expect(",")

        result = None
        if self.accept(":"):
            result = self.read_union()
        return FunctionType(params=params, result=result)


def parse_type(text: str) -> TypeExpr:
    """Parse the text between a tag's braces into a type expression.

    Raises:
        CommentParseError: If the type is malformed
    """
    return _TypeReader(text).read()


def _split_braced(text: str) -> tuple[str | None, str]:
    """Split a leading '{...}' (nested braces allowed) from the rest of the text."""
    stripped = text.lstrip()
    if not stripped.startswith("{"):
        return None, text

    depth = 0
    for index, char in enumerate(stripped):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return stripped[1:index], stripped[index + 1:]

    raise CommentParseError(f"Unbalanced braces in '{stripped}'")


def _clean_description(text: str) -> str | None:
    text = text.strip()
    if text.startswith("- "):
        text = text[2:].lstrip()
    return text or None


class JSDocParser(CommentParser):
    """Parser for JSDoc-style documentation comments."""

    def parse(self, comment: str, unwrap: bool = True) -> Doclet:
        """Parse a '/** ... */' comment into a doclet.

        Args:
            comment: Comment text including its delimiters
            unwrap: Strip the delimiters and leading '*' gutters first

        Returns:
            Doclet whose description is the text before the first tag

        Raises:
            CommentParseError: If a tag's type or name is malformed
        """
        text = unwrap_comment(comment) if unwrap else comment

        description_lines = []
        tag_blocks: list[tuple[str, list[str]]] = []

        for line in text.split("\n"):
            match = _TAG_START.match(line)
            if match:
                tag_blocks.append((match.group(1), [line[match.end():]]))
            elif tag_blocks:
                tag_blocks[-1][1].append(line)
            else:
                description_lines.append(line)

        tags = [self._parse_tag(title, "\n".join(lines)) for title, lines in tag_blocks]

        return Doclet(description="\n".join(description_lines).strip(), tags=tags)

    def _parse_tag(self, title: str, content: str) -> Tag:
        if title in NAMED_TAGS:
            return self._parse_named_tag(title, content)

        if title in TYPED_TAGS:
            type_text, rest = _split_braced(content)
            return Tag(
                title=title,
                type=parse_type(type_text) if type_text is not None else None,
                description=_clean_description(rest),
            )

        # Everything else (examples, fileOverview, name, ...) keeps its text
        # as is, apart from the surrounding whitespace.
        return Tag(title=title, description=content.strip() or None)

    def _parse_named_tag(self, title: str, content: str) -> Tag:
        type_text, rest = _split_braced(content)
        type_expr = parse_type(type_text) if type_text is not None else None

        rest = rest.lstrip()
        if rest.startswith("["):
            # [name] or [name=default] marks an optional parameter
            end = rest.find("]")
            if end == -1:
                raise CommentParseError(f"Unclosed optional name in @{title}")
            name = rest[1:end].split("=", 1)[0].strip()
            rest = rest[end + 1:]
            if type_expr is not None and not isinstance(type_expr, OptionalType):
                type_expr = OptionalType(expression=type_expr)
        else:
            parts = rest.split(None, 1)
            name = parts[0] if parts else ""
            rest = parts[1] if len(parts) > 1 else ""

        if not name:
            raise CommentParseError(f"Missing name for @{title}")

        return Tag(title=title, name=name, type=type_expr, description=_clean_description(rest))
