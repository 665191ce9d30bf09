import pytest

from autodoc.errors import CommentParseError
from autodoc.parsers.jsdoc_parser import JSDocParser, parse_type, unwrap_comment
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
    UnionType,
    format_type,
)


def test_unwrap_comment():
    comment = """/**
     * First line.
     *   indented
     */"""

    assert unwrap_comment(comment) == "First line.\n  indented"


def test_unwrap_single_line_comment():
    assert unwrap_comment("/** Short. */") == "Short."


def test_parse_description_only():
    doc = JSDocParser().parse("/**\n * Adds things.\n *\n * More detail.\n */")

    assert doc.description == "Adds things.\n\nMore detail."
    assert doc.tags == []


def test_parse_param_and_returns():
    source = """/**
 * Checks foo.
 * @param {string} x The input.
 * @returns {boolean} Whether it worked.
 */"""

    doc = JSDocParser().parse(source)

    assert doc.description == "Checks foo."
    param, returns = doc.tags
    assert param.title == "param"
    assert param.name == "x"
    assert param.type == NameExpression(name="string")
    assert param.description == "The input."
    assert returns.title == "returns"
    assert returns.name is None
    assert returns.type == NameExpression(name="boolean")
    assert returns.description == "Whether it worked."


def test_parse_param_without_type():
    doc = JSDocParser().parse("/**\n * x\n * @param foo The foo.\n */")

    assert doc.tags[0].name == "foo"
    assert doc.tags[0].type is None
    assert doc.tags[0].description == "The foo."


def test_parse_param_with_dash_before_description():
    doc = JSDocParser().parse("/**\n * x\n * @param {number} n - How many.\n */")

    assert doc.tags[0].description == "How many."


def test_parse_optional_param_name():
    doc = JSDocParser().parse("/**\n * x\n * @param {number} [n=1] How many.\n */")

    tag = doc.tags[0]
    assert tag.name == "n"
    assert tag.type == OptionalType(expression=NameExpression(name="number"))
    assert tag.description == "How many."


def test_parse_missing_param_name_raises():
    with pytest.raises(CommentParseError):
        JSDocParser().parse("/**\n * x\n * @param {number}\n */")


def test_parse_flag_tags():
    doc = JSDocParser().parse("/**\n * Makes one.\n * @public\n * @constructor\n */")

    assert [tag.title for tag in doc.tags] == ["public", "constructor"]
    assert all(tag.description is None for tag in doc.tags)


def test_parse_examples_keeps_lines():
    source = """/**
 * Sums.
 *
 * @examples
 * var nums = [1, 2];
 * sum(nums) // => 3
 *
 * sum([])   // => 0
 */"""

    doc = JSDocParser().parse(source)

    assert doc.tags[0].title == "examples"
    assert doc.tags[0].description == "var nums = [1, 2];\nsum(nums) // => 3\n\nsum([])   // => 0"


def test_parse_file_overview_and_name():
    doc = JSDocParser().parse("/**\n * @fileOverview A *small* library.\n * @name Tiny\n */")

    assert doc.description == ""
    assert doc.tags[0].title == "fileOverview"
    assert doc.tags[0].description == "A *small* library."
    assert doc.tags[1].title == "name"
    assert doc.tags[1].description == "Tiny"


def test_parse_without_unwrap():
    doc = JSDocParser().parse("Plain text.\n@public", unwrap=False)

    assert doc.description == "Plain text."
    assert doc.tags[0].title == "public"


def test_parse_malformed_type_raises():
    with pytest.raises(CommentParseError):
        JSDocParser().parse("/**\n * x\n * @param {Array.<string} x\n */")


def test_parse_unbalanced_braces_raises():
    with pytest.raises(CommentParseError):
        JSDocParser().parse("/**\n * x\n * @returns {string\n */")


def test_parse_nullable_param_type():
    doc = JSDocParser().parse("/**\n * x\n * @param {?string} x The x.\n * @returns {!Object}\n */")

    assert doc.tags[0].type == NullableType(expression=NameExpression(name="string"))
    assert doc.tags[1].type == NonNullableType(expression=NameExpression(name="Object"))


class TestParseType:
    """Tests for parse_type."""

    @pytest.mark.parametrize("text, expected", [
        ("string", NameExpression(name="string")),
        ("Foo.Bar", NameExpression(name="Foo.Bar")),
        ("*", AllLiteral()),
        ("null", NullLiteral()),
        ("string=", OptionalType(expression=NameExpression(name="string"))),
        ("...number", RestType(expression=NameExpression(name="number"))),
        ("string|number", UnionType(elements=[NameExpression(name="string"), NameExpression(name="number")])),
        ("(string|number)", UnionType(elements=[NameExpression(name="string"), NameExpression(name="number")])),
        ("Array.<string>", TypeApplication(expression=NameExpression(name="Array"), applications=[NameExpression(name="string")])),
        ("Array<string>", TypeApplication(expression=NameExpression(name="Array"), applications=[NameExpression(name="string")])),
        ("string[]", TypeApplication(expression=NameExpression(name="Array"), applications=[NameExpression(name="string")])),
        ("{x: number}", RecordType(fields=[FieldType(key="x", value=NameExpression(name="number"))])),
        ("function(string, number):boolean", FunctionType(
            params=[NameExpression(name="string"), NameExpression(name="number")],
            result=NameExpression(name="boolean"),
        )),
        ("function()", FunctionType(params=[], result=None)),
        ("?string", NullableType(expression=NameExpression(name="string"))),
        ("!Object", NonNullableType(expression=NameExpression(name="Object"))),
        ("Array.<?number>", TypeApplication(
            expression=NameExpression(name="Array"),
            applications=[NullableType(expression=NameExpression(name="number"))],
        )),
    ])
    def test_parse_type(self, text, expected):
        assert parse_type(text) == expected

    @pytest.mark.parametrize("text, formatted", [
        ("Object.<string, number>", "Object.<string|number>"),
        ("Array.<function(*):*>", "Array.<function(*):*>"),
        ("{a: string, b: Array.<number>}", "{a:string, b:Array.<number>"),
        ("...*", "...*"),
    ])
    def test_parsed_types_format(self, text, formatted):
        assert format_type(parse_type(text)) == formatted

    @pytest.mark.parametrize("text", ["", "Array.<", "?", "{x}", "string number", "function(string"])
    def test_malformed_types_raise(self, text):
        with pytest.raises(CommentParseError):
            parse_type(text)
