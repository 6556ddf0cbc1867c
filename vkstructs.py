"""Vulkan registry struct extractor.

Streams the Khronos vk.xml registry once and rebuilds a typed model of every
struct-category entity: its members, each member's type, pointer/const
qualifiers, array dimensions and documentation metadata. The resulting
sequence of Struct records is what the code-generation backend consumes.

Usage:
    python vkstructs.py --vk-xml gen_src/vk.xml
"""

import argparse
import io
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import BinaryIO, NamedTuple

DEFAULT_VK_XML = Path("gen_src") / "vk.xml"
DEFAULT_CHUNK_SIZE = 64 * 1024


# ===--- CLI config contracts ---=== #


@dataclass(frozen=True)
class ExtractConfig:
    vk_xml: Path
    chunk_size: int
    trace: bool
    summary_only: bool


VALID_ERROR_CODES = {
    "PATH_NOT_FOUND",
    "INVALID_CHUNK_SIZE",
}


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


def validate_path_exists(
    path: Path | None, flag: str, suggestion: str | None = None
) -> Path:
    if path is None:
        raise ConfigError(
            "PATH_NOT_FOUND",
            f"{flag} is required: no path provided.",
            suggestion or f"Pass the path explicitly: {flag} /path/to/resource",
        )
    if path.exists():
        return path
    raise ConfigError(
        "PATH_NOT_FOUND",
        f"Path for {flag} does not exist: {path}",
        suggestion or "Provide an existing path for this flag.",
    )


def validate_chunk_size(chunk_size: int) -> int:
    if chunk_size >= 1:
        return chunk_size
    raise ConfigError(
        "INVALID_CHUNK_SIZE",
        f"Invalid --chunk-size: {chunk_size}",
        "Pass a positive number of bytes, for example --chunk-size 65536.",
    )


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract struct definitions from the Vulkan registry"
    )

    parser.add_argument("--vk-xml", type=Path, default=DEFAULT_VK_XML)
    parser.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE)
    parser.add_argument("--trace", action="store_true", default=False)
    parser.add_argument("--summary-only", action="store_true", default=False)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> ExtractConfig:
    vk_xml = validate_path_exists(
        args.vk_xml,
        "--vk-xml",
        "Clone Vulkan-Docs and point at its registry:\n"
        "  git clone https://github.com/KhronosGroup/Vulkan-Docs.git\n"
        "Or pass a custom path: --vk-xml /your/path/to/vk.xml",
    )
    return ExtractConfig(
        vk_xml=vk_xml,
        chunk_size=validate_chunk_size(args.chunk_size),
        trace=bool(args.trace),
        summary_only=bool(args.summary_only),
    )


def build_config(argv: list[str] | None = None) -> ExtractConfig:
    return validate_config(parse_args(argv))


# ===--- Schema errors ---=== #


VALID_SCHEMA_ERROR_CODES = {
    "UNKNOWN_ATTRIBUTE",
    "UNKNOWN_TAG",
    "UNKNOWN_TOKEN",
    "MALFORMED_ARRAY_SIZE",
    "UNKNOWN_TYPE",
    "MISSING_STRUCT_NAME",
    "MISSING_MEMBER_NAME",
    "MISSING_MEMBER_TYPE",
    "MEMBER_ALREADY_OPEN",
    "STRUCT_ALREADY_OPEN",
}


class SchemaError(Exception):
    """The registry broke an assumption the extractor relies on.

    Raised for unknown attributes, tags, stray tokens and types, and for
    structural violations such as a member opened inside another member.
    These are never recovered from; the CLI exits on them.
    """

    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_SCHEMA_ERROR_CODES:
            raise ValueError(f"Unknown schema error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


# ===--- Constants ---=== #

PRIMITIVE_TYPES = {
    "float": "f32",
    "int32_t": "i32",
    "uint32_t": "u32",
    "char": "i8",
    "uint8_t": "u8",
    "void": "()",
}

FUNCPOINTER_PREFIX = "PFN_"
NATIVE_TYPE_PREFIX = "Vk"

STRUCT_ATTRIBUTES = frozenset(
    {"category", "name", "returnedonly", "structextends", "comment"}
)
MEMBER_ATTRIBUTES = frozenset(
    {"values", "optional", "len", "noautovalidity", "altlen", "externsync"}
)

# Registry attribute name -> model field name.
BOOLEAN_ATTRIBUTES = {
    "optional": "optional",
    "noautovalidity": "no_auto_validity",
    "externsync": "extern_sync",
    "returnedonly": "returned_only",
}
STRING_ATTRIBUTES = {
    "name": "name",
    "structextends": "extends",
    "comment": "comment",
    "values": "values",
    "len": "len",
    "altlen": "alt_len",
}

INDENT = "    "


# ===--- Data classes ---=== #


@dataclass
class Member:
    type_name: str = ""
    field_name: str = ""
    is_pointer: bool = False
    is_const: bool = False
    is_struct_keyword: bool = False
    optional: bool = False
    no_auto_validity: bool = False
    extern_sync: bool = False
    array_size: str | None = None
    comment: str | None = None
    values: str | None = None
    len: str | None = None
    alt_len: str | None = None


@dataclass
class Struct:
    name: str
    returned_only: bool = False
    extends: str | None = None
    comment: str = ""
    members: list[Member] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionResult:
    """Ordered structs collected by one scan.

    error is the source-stream failure that cut the scan short, or None when
    the event stream was consumed to the end. Structs sealed before the
    failure are kept either way.

    Attributes:
        structs: Completed structs in document order.
        error: Description of the source error, or None.
    """

    structs: tuple[Struct, ...]
    error: str | None = None

    @property
    def count(self) -> int:
        return len(self.structs)


# ===--- Parse events ---=== #


@dataclass(frozen=True)
class StartElement:
    name: str
    attributes: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class EndElement:
    name: str


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class SourceError:
    description: str


ParseEvent = StartElement | EndElement | Text | SourceError


class _OpenElement:
    def __init__(self, element: ET.Element):
        self.element = element
        self.last_child: ET.Element | None = None


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _take_pending_text(frame: _OpenElement) -> str | None:
    if frame.last_child is None:
        return frame.element.text
    text = frame.last_child.tail
    # The builder has already flushed this tail; the child is no longer needed.
    frame.element.remove(frame.last_child)
    return text


def _drain_events(
    parser: ET.XMLPullParser, stack: list[_OpenElement]
) -> Iterator[ParseEvent]:
    for kind, element in parser.read_events():
        if kind == "start":
            if stack:
                parent = stack[-1]
                text = _take_pending_text(parent)
                if text and text.strip():
                    yield Text(text)
                parent.last_child = element
            stack.append(_OpenElement(element))
            yield StartElement(
                _local_name(element.tag),
                tuple(
                    (_local_name(name), value)
                    for name, value in element.attrib.items()
                ),
            )
        else:
            frame = stack.pop()
            text = _take_pending_text(frame)
            if text and text.strip():
                yield Text(text)
            yield EndElement(_local_name(element.tag))
            # tail is still owned by the tree builder; leave it alone.
            element.attrib.clear()
            element.text = None


def iter_xml_events(
    stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[ParseEvent]:
    """Yield start/end/text events from a binary XML stream, in document order.

    The stream is fed to an XMLPullParser in chunk_size pieces and read once.
    Whitespace-only text is skipped. A parse failure, including a document
    truncated before its root closes, ends the sequence with a SourceError.

    Args:
        stream: Binary file-like object positioned at the document start.
        chunk_size: Bytes read per feed.

    Yields:
        StartElement, EndElement and Text events, then at most one SourceError.
    """
    parser = ET.XMLPullParser(events=("start", "end"))
    stack: list[_OpenElement] = []
    try:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            parser.feed(chunk)
            yield from _drain_events(parser, stack)
        parser.close()
        yield from _drain_events(parser, stack)
    except ET.ParseError as err:
        yield SourceError(str(err))


def iter_file_events(
    path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[ParseEvent]:
    with open(path, "rb") as stream:
        yield from iter_xml_events(stream, chunk_size)


def iter_string_events(document: str) -> Iterator[ParseEvent]:
    yield from iter_xml_events(io.BytesIO(document.encode("utf-8")))


# ===--- Type normalization ---=== #


def convert_type(raw: str) -> str:
    """Map a registry type token to its target name.

    Primitive C types come from PRIMITIVE_TYPES. Anything else is passed
    through unchanged when it is a PFN_ function pointer typedef or a Vk
    native type; every other token is an unknown type.
    """
    if raw in PRIMITIVE_TYPES:
        return PRIMITIVE_TYPES[raw]
    if raw.startswith(FUNCPOINTER_PREFIX) or raw.startswith(NATIVE_TYPE_PREFIX):
        return raw
    raise SchemaError(
        "UNKNOWN_TYPE",
        f"unknown type: {raw}",
        "Add the C type to PRIMITIVE_TYPES.",
    )


class TypeCategory(Enum):
    STRUCT = auto()
    UNION = auto()
    ENUM = auto()
    OTHER = auto()


def type_category(value: str) -> TypeCategory:
    if value == "struct":
        return TypeCategory.STRUCT
    if value == "union":
        return TypeCategory.UNION
    if value == "enum":
        return TypeCategory.ENUM
    return TypeCategory.OTHER


def _is_struct_category(event: StartElement) -> bool:
    if event.name != "type":
        return False
    for name, value in event.attributes:
        if name == "category" and type_category(value) is TypeCategory.STRUCT:
            return True
    return False


# ===--- Attribute validation ---=== #


def validate_attributes(
    tag: str,
    attributes: Iterable[tuple[str, str]],
    recognized: frozenset[str],
) -> dict[str, object]:
    """Turn an attribute list into model field values.

    Boolean attributes are true only for the exact literal "true" and are
    OR-ed into any earlier value. String attributes are copied verbatim.
    Recognized attributes without a model field (category) are dropped.

    Args:
        tag: Element kind, used in the error message.
        attributes: (name, value) pairs in document order.
        recognized: Attribute names allowed on this element kind.

    Returns:
        Field name -> value mapping for Struct or Member construction.

    Raises:
        SchemaError: UNKNOWN_ATTRIBUTE for any name outside recognized.
    """
    fields: dict[str, object] = {}
    for name, value in attributes:
        if name not in recognized:
            raise SchemaError(
                "UNKNOWN_ATTRIBUTE",
                f"unknown {tag} attribute: {name!r}={value!r}",
                "Add the attribute to STRUCT_ATTRIBUTES or MEMBER_ATTRIBUTES.",
            )
        if name in BOOLEAN_ATTRIBUTES:
            field_name = BOOLEAN_ATTRIBUTES[name]
            fields[field_name] = bool(fields.get(field_name)) or value == "true"
        elif name in STRING_ATTRIBUTES:
            fields[STRING_ATTRIBUTES[name]] = value
    return fields


def build_struct(attributes: Iterable[tuple[str, str]]) -> Struct:
    fields = validate_attributes("struct", attributes, STRUCT_ATTRIBUTES)
    if "name" not in fields:
        raise SchemaError("MISSING_STRUCT_NAME", "no struct name found")
    return Struct(**fields)


def build_member(attributes: Iterable[tuple[str, str]]) -> Member:
    return Member(**validate_attributes("member", attributes, MEMBER_ATTRIBUTES))


# ===--- Stray token classification ---=== #


class TokenKind(Enum):
    SYMBOLIC_BRACKET = auto()
    CONST = auto()
    STRUCT_KEYWORD = auto()
    POINTER = auto()
    ARRAY_SIZE = auto()
    UNRECOGNIZED = auto()


class StrayToken(NamedTuple):
    kind: TokenKind
    text: str
    array_size: str | None = None


_DIGITS = frozenset("0123456789")


def _scan_array_size(token: str) -> str:
    digits = []
    for index, char in enumerate(token):
        if char == "[":
            continue
        if char == "]":
            if index != len(token) - 1:
                raise SchemaError(
                    "MALFORMED_ARRAY_SIZE",
                    f"closing bracket before end of array size: {token}",
                )
            continue
        if char not in _DIGITS:
            raise SchemaError(
                "MALFORMED_ARRAY_SIZE",
                f"unexpected character found while parsing array size: {char}",
            )
        digits.append(char)
    if not digits:
        raise SchemaError("MALFORMED_ARRAY_SIZE", f"empty array size: {token}")
    return "".join(digits)


def classify_stray_text(text: str) -> StrayToken:
    """Classify member text that sits outside any named sub-element.

    Lone brackets frame an <enum> length reference and carry nothing.
    Leading "const", "struct" and "*" are qualifiers. Any other token
    starting with "[" must be a bracketed decimal literal such as [4].

    Raises:
        SchemaError: MALFORMED_ARRAY_SIZE when a bracketed literal holds
            anything but digits, or closes before its last character.
    """
    token = text.strip()
    if token in ("[", "]"):
        return StrayToken(TokenKind.SYMBOLIC_BRACKET, token)
    if token.startswith("const"):
        return StrayToken(TokenKind.CONST, token)
    if token.startswith("struct"):
        return StrayToken(TokenKind.STRUCT_KEYWORD, token)
    if token.startswith("*"):
        return StrayToken(TokenKind.POINTER, token)
    if token.startswith("["):
        return StrayToken(TokenKind.ARRAY_SIZE, token, _scan_array_size(token))
    return StrayToken(TokenKind.UNRECOGNIZED, token)


def apply_stray_token(token: StrayToken, member: Member) -> None:
    if token.kind is TokenKind.SYMBOLIC_BRACKET:
        return
    if token.kind is TokenKind.CONST:
        member.is_const = True
    elif token.kind is TokenKind.STRUCT_KEYWORD:
        member.is_struct_keyword = True
    elif token.kind is TokenKind.POINTER:
        member.is_pointer = True
    elif token.kind is TokenKind.ARRAY_SIZE:
        member.array_size = token.array_size
    else:
        raise SchemaError(
            "UNKNOWN_TOKEN", f"unknown characters present: {token.text!r}"
        )


# ===--- Member accumulator ---=== #


class MemberState(Enum):
    IDLE = auto()
    OPEN = auto()
    ARMED_TYPE = auto()
    ARMED_NAME = auto()
    ARMED_ARRAY_SIZE = auto()
    ARMED_COMMENT = auto()


# Member sub-element tag -> state that captures its text.
MEMBER_SUB_ELEMENTS = {
    "type": MemberState.ARMED_TYPE,
    "name": MemberState.ARMED_NAME,
    "enum": MemberState.ARMED_ARRAY_SIZE,
    "comment": MemberState.ARMED_COMMENT,
}


class MemberAccumulator:
    """Builds one Member across the events between <member> and </member>."""

    def __init__(self):
        self.state = MemberState.IDLE
        self.member: Member | None = None
        self.start_depth = 0

    @property
    def is_open(self) -> bool:
        return self.state is not MemberState.IDLE

    def open(self, attributes: Iterable[tuple[str, str]], depth: int) -> None:
        if self.is_open:
            raise SchemaError(
                "MEMBER_ALREADY_OPEN",
                f"member opened at depth {depth} while the member opened at "
                f"depth {self.start_depth} is still open",
            )
        self.member = build_member(attributes)
        self.start_depth = depth
        self.state = MemberState.OPEN

    def arm(self, tag: str) -> None:
        if tag not in MEMBER_SUB_ELEMENTS:
            raise SchemaError("UNKNOWN_TAG", f'unknown tag: "{tag}"')
        self.state = MEMBER_SUB_ELEMENTS[tag]

    def disarm(self) -> None:
        if self.is_open:
            self.state = MemberState.OPEN

    def accept_text(self, text: str) -> None:
        member = self.member
        if self.state is MemberState.ARMED_TYPE:
            member.type_name = convert_type(text)
        elif self.state is MemberState.ARMED_NAME:
            member.field_name = text
        elif self.state is MemberState.ARMED_ARRAY_SIZE:
            member.array_size = text
        elif self.state is MemberState.ARMED_COMMENT:
            member.comment = text
        else:
            apply_stray_token(classify_stray_text(text), member)
        self.state = MemberState.OPEN

    def close(self) -> Member:
        member = self.member
        if not member.field_name:
            raise SchemaError("MISSING_MEMBER_NAME", "member has no <name>")
        if not member.type_name:
            raise SchemaError(
                "MISSING_MEMBER_TYPE", f"member {member.field_name!r} has no <type>"
            )
        self.member = None
        self.state = MemberState.IDLE
        return member


# ===--- Struct accumulator ---=== #


class StructState(Enum):
    IDLE = auto()
    OPEN = auto()
    ARMED_COMMENT = auto()


class StructAccumulator:
    """Builds one Struct from its opening element, comment and members."""

    def __init__(self):
        self.state = StructState.IDLE
        self.struct: Struct | None = None
        self.tag = ""
        self.start_depth = 0
        self.member = MemberAccumulator()

    @property
    def is_open(self) -> bool:
        return self.state is not StructState.IDLE

    def open(self, event: StartElement, depth: int) -> None:
        if self.is_open:
            raise SchemaError(
                "STRUCT_ALREADY_OPEN",
                f"struct opened inside struct {self.struct.name!r}",
            )
        self.struct = build_struct(event.attributes)
        self.tag = event.name
        self.start_depth = depth
        self.state = StructState.OPEN

    def start_child(self, event: StartElement, depth: int) -> None:
        if event.name == "member":
            self.member.open(event.attributes, depth)
        elif self.member.is_open:
            self.member.arm(event.name)
        elif event.name == "comment":
            self.state = StructState.ARMED_COMMENT
        else:
            raise SchemaError(
                "UNKNOWN_TAG",
                f'unknown tag: "{event.name}" in struct {self.struct.name!r}',
            )

    def end_child(self) -> None:
        if self.member.is_open:
            self.member.disarm()
        elif self.state is StructState.ARMED_COMMENT:
            self.state = StructState.OPEN

    def accept_text(self, text: str) -> None:
        if self.member.is_open:
            self.member.accept_text(text)
        elif self.state is StructState.ARMED_COMMENT:
            self.struct.comment = text
            self.state = StructState.OPEN

    def close_member(self) -> None:
        self.struct.members.append(self.member.close())

    def close(self) -> Struct:
        struct = self.struct
        self.struct = None
        self.tag = ""
        self.state = StructState.IDLE
        return struct


# ===--- Extraction loop ---=== #


class StructExtractor:
    """Drives the struct and member accumulators from a flat event stream.

    depth counts open elements. It is incremented after a start element is
    handled and decremented before an end element is handled, so an end
    element closes an accumulator exactly when the decremented depth equals
    the depth recorded when that accumulator opened.
    """

    def __init__(self, trace: Callable[[str], None] | None = None):
        self.depth = 0
        self.accumulator = StructAccumulator()
        self.structs: list[Struct] = []
        self.trace = trace

    def feed(self, event: ParseEvent) -> None:
        if isinstance(event, StartElement):
            self._start(event)
        elif isinstance(event, EndElement):
            self._end(event)
        elif isinstance(event, Text):
            self._text(event)

    def _emit_trace(self, event: ParseEvent, depth: int) -> None:
        if self.trace is None:
            return
        line = format_trace_line(event, depth)
        if line is not None:
            self.trace(line)

    def _start(self, event: StartElement) -> None:
        acc = self.accumulator
        if _is_struct_category(event):
            acc.open(event, self.depth)
        elif acc.is_open:
            acc.start_child(event, self.depth)
        if acc.is_open:
            self._emit_trace(event, self.depth)
        self.depth += 1

    def _end(self, event: EndElement) -> None:
        self.depth -= 1
        acc = self.accumulator
        if not acc.is_open:
            return
        self._emit_trace(event, self.depth)
        member = acc.member
        if (
            event.name == "member"
            and member.is_open
            and self.depth == member.start_depth
        ):
            acc.close_member()
        elif event.name == acc.tag and self.depth == acc.start_depth:
            self.structs.append(acc.close())
        else:
            acc.end_child()

    def _text(self, event: Text) -> None:
        acc = self.accumulator
        if not acc.is_open or not event.text.strip():
            return
        self._emit_trace(event, self.depth)
        acc.accept_text(event.text)


def extract_structs(
    events: Iterable[ParseEvent],
    trace: Callable[[str], None] | None = None,
) -> ExtractionResult:
    """Collect every struct-category entity from an event stream.

    Events are consumed one at a time, in order, exactly once. A SourceError
    event stops the scan; the structs sealed before it are returned with the
    error description.

    Args:
        events: Parse events, typically from iter_file_events.
        trace: Optional sink for indented pseudo-XML lines of every event
            seen inside a struct.

    Returns:
        ExtractionResult with structs in document order.

    Raises:
        SchemaError: The registry violates the extractor's schema.
    """
    extractor = StructExtractor(trace=trace)
    for event in events:
        if isinstance(event, SourceError):
            return ExtractionResult(
                structs=tuple(extractor.structs), error=event.description
            )
        extractor.feed(event)
    return ExtractionResult(structs=tuple(extractor.structs))


def extract_structs_from_file(
    path: Path,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    trace: Callable[[str], None] | None = None,
) -> ExtractionResult:
    return extract_structs(iter_file_events(path, chunk_size), trace=trace)


# ===--- Formatters ---=== #


def format_trace_line(event: ParseEvent, depth: int) -> str | None:
    indent = INDENT * depth
    if isinstance(event, StartElement):
        attributes = "".join(f' {name}="{value}"' for name, value in event.attributes)
        return f"{indent}<{event.name}{attributes}>"
    if isinstance(event, EndElement):
        return f"{indent}</{event.name}>"
    if isinstance(event, Text):
        return f"{indent}{event.text}"
    return None


def format_member(member: Member) -> str:
    """Render one member as a C-like declaration plus annotations.

    Example:

        const i8* label  [optional] len=null-terminated  // display name
    """
    decl = ""
    if member.is_const:
        decl += "const "
    if member.is_struct_keyword:
        decl += "struct "
    decl += member.type_name
    if member.is_pointer:
        decl += "*"
    decl += f" {member.field_name}"
    if member.array_size is not None:
        decl += f"[{member.array_size}]"

    flags = [
        label
        for label, enabled in (
            ("optional", member.optional),
            ("noautovalidity", member.no_auto_validity),
            ("externsync", member.extern_sync),
        )
        if enabled
    ]
    parts = [decl]
    if flags:
        parts.append(f"[{', '.join(flags)}]")
    for label, value in (
        ("values", member.values),
        ("len", member.len),
        ("altlen", member.alt_len),
    ):
        if value is not None:
            parts.append(f"{label}={value}")

    line = "  ".join(parts)
    if member.comment:
        line += f"  // {member.comment}"
    return line


def format_struct(struct: Struct) -> str:
    """Return a struct header line followed by one indented line per member.

    Output format:

        struct VkExampleInfo (returnedonly, extends VkBaseInfo)  // comment
            VkStructureType sType  values=VK_STRUCTURE_TYPE_EXAMPLE_INFO
            i32 count

    Returns:
        Formatted multi-line string including trailing newline.
    """
    traits = []
    if struct.returned_only:
        traits.append("returnedonly")
    if struct.extends is not None:
        traits.append(f"extends {struct.extends}")

    header = f"struct {struct.name}"
    if traits:
        header += f" ({', '.join(traits)})"
    if struct.comment:
        header += f"  // {struct.comment}"

    lines = [header]
    for member in struct.members:
        lines.append(f"{INDENT}{format_member(member)}")
    lines.append("")
    return "\n".join(lines)


def format_extraction_summary(result: ExtractionResult) -> str:
    lines = [f"{result.count} structs parsed"]
    if result.error is not None:
        lines.append(f"Error: {result.error}")
    lines.append("")
    return "\n".join(lines)


def print_extraction_report(result: ExtractionResult, config: ExtractConfig) -> None:
    """Print the struct dump (unless summary_only) and the summary lines.

    Thin wrapper around format_struct and format_extraction_summary, kept
    separate so the formatters stay testable without stdout capture.
    """
    if not config.summary_only:
        for struct in result.structs:
            print(format_struct(struct))
    print(format_extraction_summary(result), end="")


# ===--- Main ---=== #


def run_extract(config: ExtractConfig) -> ExtractionResult:
    """Scan config.vk_xml and print the report.

    Raises:
        OSError: vk.xml not readable.
        SchemaError: The registry violates the extractor's schema.
    """
    print(f"Parsing: {config.vk_xml}")
    trace = print if config.trace else None
    result = extract_structs_from_file(config.vk_xml, config.chunk_size, trace)
    print_extraction_report(result, config)
    return result


def main(argv: list[str] | None = None):
    try:
        config = build_config(argv)
    except ConfigError as err:
        print(f"Config error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err

    try:
        result = run_extract(config)
    except SchemaError as err:
        print(f"Schema error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err
    except OSError as err:
        print(f"Error: {err}")
        raise SystemExit(1) from err

    if result.error is not None:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
