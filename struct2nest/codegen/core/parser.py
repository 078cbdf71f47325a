"""
Struct and tag parsing for Go source text.

Only the narrow part of Go needed here is understood: ``type X struct {...}``
blocks and field lines carrying a ``json:"..." bson:"..."`` tag. Field lines
are tokenized and checked against a small grammar so that malformed tags are
reported as :class:`TagIssue` records instead of disappearing.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Optional, Tuple

from ...logging_config import get_logger
from .schema import FieldDescriptor

logger = get_logger(__name__)

STRUCT_PATTERN = re.compile(r"\btype\s+(\w+)\s+struct\s*\{(.*?)\}", re.DOTALL)

TOKEN_SPEC = [
    ("TAG", r"`[^`]*`"),
    ("STRING", r'"(?:[^"\\\n]|\\.)*"'),
    ("COMMENT", r"//[^\n]*"),
    ("IDENT", r"[A-Za-z_]\w*"),
    ("NUMBER", r"\d+"),
    ("NEWLINE", r"\n"),
    ("SEMI", r";"),
    ("SKIP", r"[ \t\r]+"),
    ("PUNCT", r"[\[\]\*\.\{\}\(\),]"),
    ("MISMATCH", r"."),
]
TOKEN_PATTERN = re.compile("|".join(f"(?P<{kind}>{rx})" for kind, rx in TOKEN_SPEC))

TAG_PAIR_PATTERN = re.compile(r'(\w+):"((?:[^"\\]|\\.)*)"')
TAG_NAME_PATTERN = re.compile(r"^\w+$")
OMITEMPTY = "omitempty"


class Token(NamedTuple):
    kind: str
    value: str
    line: int


@dataclass(frozen=True)
class TagIssue:
    """A tagged field line that does not fit the json/bson tag grammar."""

    line: int
    text: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.reason} ({self.text})"


@dataclass
class ParseResult:
    """Field descriptors in source order plus any grammar issues."""

    fields: List[FieldDescriptor] = field(default_factory=list)
    issues: List[TagIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


@dataclass(frozen=True)
class StructBlock:
    """A ``type Name struct { body }`` block found in a source file."""

    name: str
    body: str


class TagSyntaxError(ValueError):
    """Raised internally when one tag fails the grammar."""

    pass


def tokenize(text: str) -> Iterator[Token]:
    """Split Go field text into tokens, dropping whitespace."""
    line = 1
    for match in TOKEN_PATTERN.finditer(text):
        kind = match.lastgroup
        value = match.group()
        if kind == "SKIP":
            continue
        yield Token(kind, value, line)
        # Raw string tags may span lines
        line += value.count("\n")


def _statements(tokens: Iterator[Token]) -> Iterator[List[Token]]:
    """Group tokens into field statements separated by newlines or ';'."""
    current: List[Token] = []
    for token in tokens:
        if token.kind in ("NEWLINE", "SEMI"):
            if current:
                yield current
            current = []
        elif token.kind == "COMMENT":
            continue
        else:
            current.append(token)
    if current:
        yield current


def _parse_tag_value(key: str, value: str) -> Tuple[str, bool]:
    """Split ``name[,omitempty]`` into the name and the omitempty flag."""
    name, _, options = value.partition(",")
    if not TAG_NAME_PATTERN.match(name):
        raise TagSyntaxError(f"{key} tag name {name!r} is not an identifier")
    if options and options != OMITEMPTY:
        raise TagSyntaxError(f"unsupported {key} tag option {options!r}")
    return name, bool(options)


def parse_tag(tag: str) -> Tuple[str, bool]:
    """
    Parse a backtick struct tag.

    Args:
        tag: Raw tag including the surrounding backticks

    Returns:
        Tuple of (bson name, required flag)

    Raises:
        TagSyntaxError: If the tag does not start with a json component
            immediately followed by a bson component
    """
    content = tag.strip("`")
    pairs = []
    position = 0
    for match in TAG_PAIR_PATTERN.finditer(content):
        gap = content[position : match.start()].strip()
        if gap:
            raise TagSyntaxError(f"unexpected text in tag: {gap!r}")
        pairs.append((match.group(1), match.group(2)))
        position = match.end()
    trailing = content[position:].strip()
    if trailing:
        raise TagSyntaxError(f"unexpected text in tag: {trailing!r}")

    if len(pairs) < 2:
        raise TagSyntaxError("expected json and bson tag components")
    (first_key, json_value), (second_key, bson_value) = pairs[0], pairs[1]
    if first_key != "json":
        raise TagSyntaxError(f"expected json tag first, found {first_key!r}")
    if second_key != "bson":
        raise TagSyntaxError(f"expected bson tag after json, found {second_key!r}")

    _, json_omitempty = _parse_tag_value("json", json_value)
    bson_name, _ = _parse_tag_value("bson", bson_value)
    return bson_name, not json_omitempty


class TagParser:
    """Extracts field descriptors from the body of a Go struct."""

    def parse(self, block_text: str) -> List[FieldDescriptor]:
        """
        Return the recognized fields of ``block_text`` in source order.

        Tagged lines that fail the grammar are skipped; use
        :meth:`parse_detailed` to see them.
        """
        return self.parse_detailed(block_text).fields

    def parse_detailed(self, block_text: str) -> ParseResult:
        """Parse ``block_text`` and keep a record of every rejected tag."""
        result = ParseResult()
        if not block_text or not block_text.strip():
            return result

        for statement in _statements(tokenize(block_text)):
            tags = [t for t in statement if t.kind == "TAG"]
            if not tags:
                # Untagged, embedded or otherwise not a field line
                continue

            text = " ".join(t.value for t in statement)
            try:
                result.fields.append(self._parse_statement(statement))
            except TagSyntaxError as e:
                issue = TagIssue(line=statement[0].line, text=text, reason=str(e))
                logger.debug("Skipping field %s", issue)
                result.issues.append(issue)

        return result

    def _parse_statement(self, statement: List[Token]) -> FieldDescriptor:
        """Apply ``Name TypeExpr `tag``` to one statement."""
        tag_index = next(i for i, t in enumerate(statement) if t.kind == "TAG")
        if tag_index != len(statement) - 1:
            raise TagSyntaxError("tag must end the field declaration")
        if tag_index < 2:
            raise TagSyntaxError("expected a field name and a type before the tag")

        name_token = statement[0]
        type_token = statement[tag_index - 1]
        if name_token.kind != "IDENT":
            raise TagSyntaxError(f"invalid field name {name_token.value!r}")
        if type_token.kind != "IDENT":
            raise TagSyntaxError(f"invalid field type {type_token.value!r}")
        if any(t.kind in ("MISMATCH", "STRING") for t in statement[1:tag_index]):
            raise TagSyntaxError("invalid type expression")

        bson_name, required = parse_tag(statement[tag_index].value)
        return FieldDescriptor(
            name=bson_name,
            source_type=type_token.value,
            required=required,
            go_name=name_token.value,
            line=name_token.line,
        )


def find_struct(source: str) -> Optional[StructBlock]:
    """Return the first struct block in ``source``, if any."""
    match = STRUCT_PATTERN.search(source)
    if match is None:
        return None
    return StructBlock(name=match.group(1), body=match.group(2))


def find_structs(source: str) -> List[StructBlock]:
    """Return every struct block in ``source`` in file order."""
    return [
        StructBlock(name=m.group(1), body=m.group(2))
        for m in STRUCT_PATTERN.finditer(source)
    ]
