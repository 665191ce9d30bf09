from __future__ import annotations

from dataclasses import dataclass, field

from autodoc.type_expressions import TypeExpr


@dataclass
class Location:
    """Represents a line range in a source file (0-indexed, inclusive)."""
    start: int
    end: int


@dataclass
class Comment:
    """A raw source comment, without its delimiters."""
    value: str
    extent: Location
    kind: str = "Block"  # "Block" for /* */, "Line" for //


@dataclass
class Tag:
    """One @directive entry of a doclet."""
    title: str
    name: str | None = None
    type: TypeExpr | None = None
    description: str | None = None


@dataclass
class Doclet:
    """A parsed documentation comment."""
    description: str = ""
    tags: list[Tag] = field(default_factory=list)


@dataclass
class NameInfo:
    """Name parts derived from a qualified name like 'Foo.Bar#baz'."""
    name: str
    short_name: str
    namespace: str | None
    identifier: str


@dataclass
class ParameterInfo:
    name: str | None
    type: str | None
    description: str


@dataclass
class ReturnInfo:
    type: str | None
    description: str


@dataclass
class PairInfo:
    """One 'left // => right' line from an examples or benchmarks block."""
    left: str
    right: str


@dataclass
class PairBlock:
    """A tag body split into its preamble and its pairs."""
    content: str
    preamble: str
    pairs: list[PairInfo] = field(default_factory=list)


@dataclass
class ExampleInfo:
    id: int
    input: str
    input_for_js: str
    output: str
    output_for_js: str
    has_custom_handler: bool = False
    handler_index: int | None = None
    output_pattern: str | None = None  # JSON-serialized output, set for handled examples


@dataclass
class ExampleCollection:
    code: str
    setup: str
    list: list[ExampleInfo] = field(default_factory=list)


@dataclass
class BenchmarkCase:
    case_id: int
    impl: str
    name: str
    label: str


@dataclass
class BenchmarkInfo:
    id: int
    name: str
    cases: list[BenchmarkCase] = field(default_factory=list)


@dataclass
class BenchmarkCollection:
    code: str
    setup: str
    cases: list[BenchmarkCase] = field(default_factory=list)
    list: list[BenchmarkInfo] = field(default_factory=list)


@dataclass
class FunctionInfo:
    """Documentation record for one function, built from its node and doclet."""
    name: str
    short_name: str
    identifier: str
    namespace: str | None
    description: str
    params: list[ParameterInfo]
    returns: ReturnInfo | None
    is_constructor: bool
    is_static: bool
    is_public: bool
    has_signature: bool
    signature: str
    examples: ExampleCollection
    has_examples: bool
    benchmarks: BenchmarkCollection
    has_benchmarks: bool
    tags: list[str]
    section_type: str = field(init=False)

    def __post_init__(self):
        self.section_type = "constructor" if self.is_constructor else "method"


@dataclass
class NamespaceInfo:
    """A constructor and its members, in display order."""
    namespace: str
    constructor: FunctionInfo | None
    members: list[FunctionInfo]
    all_members: list[FunctionInfo]
    has_examples: bool
    has_benchmarks: bool


@dataclass
class LibrarySummary:
    name: str = ""
    description: str = ""


@dataclass
class LibraryInfo:
    """Everything the rendering stage needs to document one library."""
    name: str | None
    reference_name: str | None
    description: str
    code: str
    namespaces: list[NamespaceInfo]
    docs: list[FunctionInfo]
