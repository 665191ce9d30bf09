"""Type expressions found in doc tags, and their canonical string form.

The variants mirror the Closure Compiler type grammar used by JSDoc:

    string                 NameExpression
    *                      AllLiteral
    null                   NullLiteral
    Array.<string>         TypeApplication
    {key: number}          RecordType
    string=                OptionalType
    (string|number)        UnionType
    ...string              RestType
    function(string):bool  FunctionType

?string and !Object parse to NullableType and NonNullableType, which have no
string form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from autodoc.errors import UnformattableTypeError


@dataclass
class NameExpression:
    name: str


@dataclass
class AllLiteral:
    pass


@dataclass
class NullLiteral:
    pass


@dataclass
class TypeApplication:
    expression: TypeExpr
    applications: list[TypeExpr] = field(default_factory=list)


@dataclass
class FieldType:
    """A single key/value entry of a RecordType (not a type on its own)."""
    key: str
    value: TypeExpr


@dataclass
class RecordType:
    fields: list[FieldType] = field(default_factory=list)


@dataclass
class OptionalType:
    expression: TypeExpr


@dataclass
class UnionType:
    elements: list[TypeExpr] = field(default_factory=list)


@dataclass
class RestType:
    expression: TypeExpr


@dataclass
class FunctionType:
    params: list[TypeExpr] = field(default_factory=list)
    result: TypeExpr | None = None


# Parsed from '?T' and '!T'. Neither has a string form, so format_type()
# raises on them.
@dataclass
class NullableType:
    expression: TypeExpr


@dataclass
class NonNullableType:
    expression: TypeExpr


TypeExpr = Union[
    NameExpression,
    AllLiteral,
    NullLiteral,
    TypeApplication,
    RecordType,
    OptionalType,
    UnionType,
    RestType,
    FunctionType,
]


def format_type(type_expr: TypeExpr) -> str:
    """Produce the string form of a type expression.

    Args:
        type_expr: Any of the TypeExpr variants

    Returns:
        Canonical string, e.g. "Array.<string>" or "function(number):boolean"

    Raises:
        UnformattableTypeError: If type_expr is not one of the known variants
    """
    if isinstance(type_expr, NameExpression):
        return type_expr.name

    if isinstance(type_expr, AllLiteral):
        return "*"

    if isinstance(type_expr, NullLiteral):
        return "null"

    if isinstance(type_expr, TypeApplication):
        applications = "|".join(format_type(t) for t in type_expr.applications)
        return format_type(type_expr.expression) + ".<" + applications + ">"

    if isinstance(type_expr, RecordType):
        # No closing brace; this is the long-standing rendered form.
        return "{" + ", ".join(
            f"{f.key}:{format_type(f.value)}" for f in type_expr.fields
        )

    if isinstance(type_expr, OptionalType):
        return format_type(type_expr.expression) + "?"

    if isinstance(type_expr, UnionType):
        return "|".join(format_type(t) for t in type_expr.elements)

    if isinstance(type_expr, RestType):
        return "..." + format_type(type_expr.expression)

    if isinstance(type_expr, FunctionType):
        params = ", ".join(format_type(t) for t in type_expr.params)
        if type_expr.result is None:
            return f"function({params})"
        return f"function({params}):" + format_type(type_expr.result)

    raise UnformattableTypeError(type_expr)
