"""Examples and benchmarks written as 'input // => output' lines.

An @examples tag reads like:

    @examples
    var nums = [1, 2, 3];   <- preamble (setup code)
    sum(nums)   // => 6     <- pair
    sum([])     // => 0     <- pair

and a @benchmarks tag names what is being measured after the arrow:

    @benchmarks
    sum(nums)    // => native loop
    reduce(nums) // => Array#reduce - Ops/sec
"""

import json
import re

from autodoc.models import (
    BenchmarkCase,
    BenchmarkCollection,
    BenchmarkInfo,
    Doclet,
    ExampleCollection,
    ExampleInfo,
    PairBlock,
    PairInfo,
)

_PAIR = re.compile(r"^(.*)\s*//[ ]*(?:=>)?\s*(.*)$")

DEFAULT_BENCHMARK_LABEL = "Ops/second"


def trim(string: str) -> str:
    return string.strip()


def divide(string: str, divider: str) -> list[str]:
    """Split a string around the first occurrence of a divider.

    Examples:
        >>> divide("a->b->c", "->")
        ['a', 'b->c']
        >>> divide("foo", "xyz")
        ['foo']
    """
    seam = string.find(divider)
    if seam == -1:
        return [string]
    return [string[:seam], string[seam + len(divider):]]


def escape_for_js(string: str) -> str:
    """Escape single quotes so the string can sit inside a '...' script literal."""
    return string.replace("'", "\\'")


def parse_pair(line: str) -> PairInfo | None:
    """Parse a line like 'input // => output' into a pair.

    The '=>' is optional and whitespace around both sides is trimmed.

    Examples:
        >>> parse_pair("foo(bar)//=>5")
        PairInfo(left='foo(bar)', right='5')
        >>> parse_pair("no comment here") is None
        True
    """
    match = _PAIR.match(line)
    if not match:
        return None
    return PairInfo(left=trim(match.group(1)), right=trim(match.group(2)))


def parse_comment_lines(text: str) -> PairBlock:
    """Split a tag body into its preamble and its pairs.

    Lines before the first pair make up the preamble (line breaks kept);
    lines after it that are not pairs are dropped.
    """
    initial_lines = []
    pairs = []

    for line in text.split("\n"):
        pair = parse_pair(line)
        if pair is not None:
            pairs.append(pair)
        elif not pairs:
            initial_lines.append(line)

    return PairBlock(content=text, preamble="\n".join(initial_lines), pairs=pairs)


def get_tag_description(doc: Doclet, tag_name: str) -> str:
    """Get the description of the first tag with the given title, or ''."""
    for tag in doc.tags:
        if tag.title == tag_name:
            return tag.description or ""
    return ""


def _find_handler(output: str, handlers) -> int | None:
    for index, handler in enumerate(handlers):
        if handler.pattern.search(output):
            return index
    return None


def get_examples(doc: Doclet, handlers=()) -> ExampleCollection:
    """Build the examples for a doclet from its @examples tag.

    Args:
        doc: The function's doclet
        handlers: Ordered ExampleHandler entries; the first whose pattern
            matches an example's output is recorded on that example

    Returns:
        ExampleCollection with ids numbered from 1
    """
    block = parse_comment_lines(get_tag_description(doc, "examples"))

    examples = []
    for example_id, pair in enumerate(block.pairs, start=1):
        handler_index = _find_handler(pair.right, handlers)
        examples.append(ExampleInfo(
            id=example_id,
            input=pair.left,
            input_for_js=escape_for_js(pair.left),
            output=pair.right,
            output_for_js=escape_for_js(pair.right),
            has_custom_handler=handler_index is not None,
            handler_index=handler_index,
            output_pattern=json.dumps(pair.right) if handler_index is not None else None,
        ))

    return ExampleCollection(code=block.content, setup=block.preamble, list=examples)


def get_benchmarks(doc: Doclet) -> BenchmarkCollection:
    """Build the benchmarks for a doclet from its @benchmarks tag.

    Each pair's right side reads 'benchmark name - label'. Cases sharing a
    benchmark name are grouped in order of first appearance; case ids keep
    counting across groups.
    """
    block = parse_comment_lines(get_tag_description(doc, "benchmarks"))

    groups: dict[str, list[BenchmarkCase]] = {}
    for case_id, pair in enumerate(block.pairs, start=1):
        parts = divide(pair.right, " - ")
        case = BenchmarkCase(
            case_id=case_id,
            impl=pair.left,
            name=parts[0],
            label=parts[1] if len(parts) > 1 and parts[1] else DEFAULT_BENCHMARK_LABEL,
        )
        groups.setdefault(case.name, []).append(case)

    benchmarks = [
        BenchmarkInfo(id=benchmark_id, name=name, cases=cases)
        for benchmark_id, (name, cases) in enumerate(groups.items(), start=1)
    ]

    return BenchmarkCollection(
        code=block.content,
        setup=block.preamble,
        cases=benchmarks[0].cases if benchmarks else [],
        list=benchmarks,
    )
