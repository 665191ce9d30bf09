import pytest

from autodoc.errors import SourceParseError
from autodoc.parsers.javascript_parser import JavaScriptParser
from autodoc.syntax import iter_functions


def test_parse_function_declaration():
    source = """function add(a, b) {
  return a + b;
}
"""
    parser = JavaScriptParser()

    tree = parser.parse(source)

    assert len(tree.body) == 1
    fn = tree.body[0]
    assert fn.type == "FunctionDeclaration"
    assert fn.get("id").get("name") == "add"
    assert [p.get("name") for p in fn.get("params")] == ["a", "b"]
    assert fn.extent.start == 0
    assert fn.extent.end == 2
    assert fn.get("body").type == "BlockStatement"
    assert fn.get("body").get("body")[0].type == "ReturnStatement"


def test_line_numbers_are_zero_indexed():
    source = """// A comment on line 0
function foo() {}
"""
    tree = JavaScriptParser().parse(source)

    assert tree.body[0].extent.start == 1


def test_extract_block_and_line_comments():
    source = """/**
 * Does foo.
 */
function foo() {}
// trailing
"""
    tree = JavaScriptParser().parse(source)

    block, line = tree.comments
    assert block.value == "*\n * Does foo.\n "
    assert block.kind == "Block"
    assert block.extent.start == 0
    assert block.extent.end == 2
    assert line.value == " trailing"
    assert line.kind == "Line"
    assert line.extent.start == 4


def test_comments_inside_functions_are_extracted_in_order():
    source = """/** Outer. */
function outer() {
  /** Inner. */
  function inner() {}
}
/** Last. */
"""
    tree = JavaScriptParser().parse(source)

    assert [c.value for c in tree.comments] == ["* Outer. ", "* Inner. ", "* Last. "]
    assert [c.extent.start for c in tree.comments] == [0, 2, 5]


def test_comments_are_not_syntax_nodes():
    tree = JavaScriptParser().parse("// just a comment\n")

    assert tree.body == []
    assert len(tree.comments) == 1


def test_parse_prototype_assignment():
    tree = JavaScriptParser().parse("Foo.prototype.bar = function(x) {};\n")

    statement = tree.body[0]
    assert statement.type == "ExpressionStatement"
    assignment = statement.get("expression")
    assert assignment.type == "AssignmentExpression"

    left = assignment.get("left")
    assert left.type == "MemberExpression"
    assert left.get("property").get("name") == "bar"
    assert left.get("object").type == "MemberExpression"
    assert left.get("object").get("object").get("name") == "Foo"
    assert left.get("object").get("property").get("name") == "prototype"

    right = assignment.get("right")
    assert right.type == "FunctionExpression"
    assert right.get("id") is None
    assert [p.get("name") for p in right.get("params")] == ["x"]


def test_parse_variable_declarations():
    tree = JavaScriptParser().parse("var a = 1, b;\nlet c = 'x';\nconst d = function() {};\n")

    assert [node.type for node in tree.body] == ["VariableDeclaration"] * 3

    first, second = tree.body[0].get("declarations")
    assert first.type == "VariableDeclarator"
    assert first.get("id").get("name") == "a"
    assert first.get("init").type == "Literal"
    assert first.get("init").get("raw") == "1"
    assert second.get("init") is None

    assert tree.body[1].get("declarations")[0].get("init").get("raw") == "'x'"
    assert tree.body[2].get("declarations")[0].get("init").type == "FunctionExpression"


def test_parse_object_literal_properties():
    source = """var o = {
  a: function() {},
  b() {},
  c
};
"""
    tree = JavaScriptParser().parse(source)

    obj = tree.body[0].get("declarations")[0].get("init")
    assert obj.type == "ObjectExpression"

    a, b, c = obj.get("properties")
    assert [p.type for p in (a, b, c)] == ["Property"] * 3
    assert a.get("key").get("name") == "a"
    assert a.get("value").type == "FunctionExpression"
    assert b.get("key").get("name") == "b"
    assert b.get("value").type == "FunctionExpression"
    assert b.get("value").extent.start == 2
    assert c.get("key").get("name") == "c"
    assert c.get("value").type == "Identifier"


def test_parentheses_are_unwrapped():
    tree = JavaScriptParser().parse("(function() {})();\n")

    call = tree.body[0].get("expression")
    assert call.type == "CallExpression"
    assert call.get("callee").type == "FunctionExpression"
    assert call.get("arguments") == []


def test_call_arguments():
    tree = JavaScriptParser().parse("define('lib', function() {});\n")

    call = tree.body[0].get("expression")
    assert call.get("callee").get("name") == "define"
    assert [arg.type for arg in call.get("arguments")] == ["Literal", "FunctionExpression"]


def test_empty_and_return_statements():
    tree = JavaScriptParser().parse(";\nfunction f() { return; }\n")

    assert tree.body[0].type == "EmptyStatement"
    ret = tree.body[1].get("body").get("body")[0]
    assert ret.type == "ReturnStatement"
    assert ret.get("argument") is None


def test_other_statements_keep_estree_names():
    tree = JavaScriptParser().parse("if (x) {}\nwhile (y) {}\nvar f = () => 1;\n")

    assert tree.body[0].type == "IfStatement"
    assert tree.body[1].type == "WhileStatement"
    assert tree.body[2].get("declarations")[0].get("init").type == "ArrowFunctionExpression"


def test_functions_found_by_walking():
    source = """var lib = {
  make: function() {
    return function inner() {};
  }
};
(function() {
  function hidden() {}
})();
"""
    tree = JavaScriptParser().parse(source)

    functions = list(iter_functions(tree))

    assert [fn.extent.start for fn in functions] == [1, 5, 6]
    assert functions[2].get("id").get("name") == "hidden"


def test_syntax_error_raises():
    with pytest.raises(SourceParseError) as exc_info:
        JavaScriptParser().parse("function foo( {\n")

    assert "Syntax error" in str(exc_info.value)


def test_parser_is_reusable():
    parser = JavaScriptParser()

    first = parser.parse("function a() {}\n")
    second = parser.parse("function b() {}\n")

    assert first.body[0].get("id").get("name") == "a"
    assert second.body[0].get("id").get("name") == "b"
    assert len(second.nodes) == len(first.nodes)
