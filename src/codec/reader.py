"""Reader for the dependency declaration text format.

The format declares dependencies per target bundle::

    my.bundle-a-b
        runtime: 1.0
            optional: true
        main, test, classpath: [2.0, 3)
            optional: true
            meta-data: "first line
        second line"

Indentation is significant but not fixed: the first kind line of a block
determines its indentation and every later line of the block must start with
exactly that text (tabs and spaces are never normalized). Metadata lines use
a longer indentation that starts with the kind line indentation. Blank lines
are ignored everywhere.

If the target bundle has the same name as the declaring bundle, the word
``this`` in version ranges is replaced with the declaring bundle version.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, Iterator, List, Optional, Union

from bundle.dependency import DependencyBuilder, is_reserved_name, is_valid_metadata_name
from bundle.dependency_information import DependencyInformation
from bundle.dependency_list import DependencyList
from bundle.errors import (
    FormatError,
    NestDepsError,
    StructuralError,
    UnterminatedValueError,
)
from bundle.identifier import Identifier
from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants
from versioning.parser import parse_version_range

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_KIND_SPLIT = re.compile(r"[, \t]+")
_INDENT_CHARS = " \t"

Source = Union[str, bytes, bytearray, Iterable]


def _is_whitespace_only(text: str) -> bool:
    return all(c in _INDENT_CHARS for c in text)


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip(_INDENT_CHARS))]


def _starts_with_quote(text: str) -> bool:
    stripped = text.lstrip(_INDENT_CHARS)
    return stripped.startswith('"')


def _describe_indent(indent: str) -> str:
    return indent.replace("\t", "\\t")


def _split_lines(text: str) -> List[str]:
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _iter_physical_lines(source: Source) -> Iterator[str]:
    """Yield the lines of ``source`` without their terminators.

    ``source`` may be text, UTF-8 bytes, or a text or binary stream.
    """
    if isinstance(source, str):
        yield from _split_lines(source)
        return
    if isinstance(source, (bytes, bytearray)):
        yield from _split_lines(_decode(bytes(source), 1))
        return
    count = 0
    for chunk in source:
        if isinstance(chunk, (bytes, bytearray)):
            chunk = _decode(bytes(chunk), count + 1)
        for line in _split_lines(chunk):
            count += 1
            yield line


def _decode(data: bytes, line_number: int) -> str:
    try:
        return data.decode(Constants.ENCODING)
    except UnicodeDecodeError as e:
        raise FormatError("Input is not valid UTF-8", line_number=line_number) from e


class LinePeekIterator:
    """Forward iterator over non-blank lines with one line of lookahead.

    ``line_number`` is the 1-based physical line number of the most recently
    consumed line.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self._physical = 0
        self._next_line: Optional[str] = None
        self._next_number = 0
        self.line_number = 0
        self._advance()

    def _advance(self) -> None:
        for line in self._lines:
            self._physical += 1
            if _is_whitespace_only(line):
                continue
            self._next_line = line
            self._next_number = self._physical
            return
        self._next_line = None

    def has_next(self) -> bool:
        return self._next_line is not None

    def peek(self) -> str:
        if self._next_line is None:
            raise LookupError("No more lines")
        return self._next_line

    def move(self) -> None:
        self.peek()
        self.line_number = self._next_number
        self._advance()

    def next(self) -> str:
        line = self.peek()
        self.move()
        return line


def _located(error: NestDepsError, line_number: int) -> NestDepsError:
    return error.with_line(line_number) if error.line_number is None else error


def read_dependency_information(
    source: Source,
    declaring: Optional[Union[Identifier, str]] = None,
) -> DependencyInformation:
    """Parse dependency declarations.

    Args:
        source: Declaration text, UTF-8 bytes, or a text/binary stream. Streams
            are read but not closed.
        declaring: Identifier of the bundle the declarations belong to. Used
            only to substitute ``this`` in version ranges of dependencies on
            bundles with the same name.

    Returns:
        DependencyInformation: The parsed declarations.

    Raises:
        FormatError: On malformed identifiers, kinds, metadata names or ranges.
        StructuralError: On indentation, duplicate or reserved name violations.
        UnterminatedValueError: If a quoted metadata value is never closed.
    """
    if source is None:
        raise TypeError("source must not be None")
    if isinstance(declaring, str):
        declaring = Identifier.parse(declaring)
    declaring_name = declaring.name if declaring is not None else None
    declaring_version = declaring.version_number if declaring is not None else None

    with Timer() as t:
        lines = LinePeekIterator(_iter_physical_lines(source))
        result = _read_declarations(lines, declaring_name, declaring_version)
        info = DependencyInformation.create(result)
    if is_debug_enabled(logger):
        logger.debug(
            "Parsed dependency declarations",
            extra=extra_context(
                event="parse",
                component="codec_reader",
                outcome="success",
                count=len(info),
                duration_ms=t.duration_ms(),
                target=str(declaring) if declaring is not None else None,
            ),
        )
    return info


def _read_declarations(
    lines: LinePeekIterator,
    declaring_name: Optional[str],
    declaring_version: Optional[str],
) -> Dict[Identifier, DependencyList]:
    result: Dict[Identifier, DependencyList] = {}
    while lines.has_next():
        line = lines.next()
        line_number = lines.line_number
        if _leading_whitespace(line):
            raise StructuralError("Illegal indentation (Expected bundle identifier)", line_number)
        try:
            bundle_id = Identifier.parse(line.rstrip(_INDENT_CHARS))
        except NestDepsError as e:
            raise _located(e, line_number) from e
        if bundle_id.meta_qualifiers:
            raise StructuralError(
                f"Cannot specify meta qualifiers for bundle dependency: {bundle_id}", line_number
            )
        if bundle_id in result:
            raise StructuralError(f"Multiple dependency declarations for bundle: {bundle_id}", line_number)
        this_version = declaring_version if bundle_id.name == declaring_name else None
        result[bundle_id] = _read_dependency_block(lines, bundle_id, line_number, this_version)
    return result


def _read_dependency_block(
    lines: LinePeekIterator,
    bundle_id: Identifier,
    identifier_line: int,
    this_version: Optional[str],
) -> DependencyList:
    indent = _leading_whitespace(lines.peek()) if lines.has_next() else ""
    if not indent:
        raise StructuralError(f"No dependency description found for: {bundle_id}", identifier_line)
    dependencies = []
    while lines.has_next():
        line = lines.peek()
        if not line.startswith(indent):
            break
        lines.move()
        line_number = lines.line_number
        if _leading_whitespace(line) != indent:
            raise StructuralError(
                f'Illegal indentation for dependency information (Expected "{_describe_indent(indent)}")',
                line_number,
            )
        builder = _parse_kind_line(line[len(indent):], line_number, this_version)
        if lines.has_next():
            metadata_indent = _leading_whitespace(lines.peek())
            if metadata_indent.startswith(indent) and len(metadata_indent) > len(indent):
                _read_metadata_block(lines, builder, indent, metadata_indent)
        try:
            dependencies.append(builder.build())
        except NestDepsError as e:
            raise _located(e, line_number) from e
    return DependencyList.create(dependencies)


def _parse_kind_line(text: str, line_number: int, this_version: Optional[str]) -> DependencyBuilder:
    colon = text.find(":")
    if colon < 0:
        raise FormatError("Malformed dependency (Expected kind and version)", text=text, line_number=line_number)
    kinds_text = text[:colon]
    range_text = text[colon + 1:]
    if this_version is not None:
        range_text = range_text.replace(Constants.THIS_VERSION_TOKEN, this_version)

    builder = DependencyBuilder()
    try:
        builder.set_range(parse_version_range(range_text))
    except FormatError as e:
        raise FormatError(
            f"Failed to parse dependency version range: {range_text.strip()}",
            text=range_text,
            line_number=line_number,
        ) from e

    kinds = [kind for kind in _KIND_SPLIT.split(kinds_text) if kind]
    if not kinds:
        raise FormatError("No dependency kind specified", text=kinds_text, line_number=line_number)
    for kind in kinds:
        try:
            builder.add_kind(kind)
        except NestDepsError as e:
            raise _located(e, line_number) from e
    return builder


def _read_metadata_block(
    lines: LinePeekIterator,
    builder: DependencyBuilder,
    indent: str,
    metadata_indent: str,
) -> None:
    while lines.has_next():
        line = lines.peek()
        if not line.startswith(metadata_indent):
            return
        lines.move()
        line_number = lines.line_number
        if _leading_whitespace(line) != metadata_indent:
            raise StructuralError(
                "Illegal indentation for dependency information "
                f'(Expected "{_describe_indent(metadata_indent)}" or "{_describe_indent(indent)}")',
                line_number,
            )
        colon = line.find(":")
        if colon < 0:
            raise FormatError("Malformed metadata (Expected name and content)", text=line, line_number=line_number)
        name = line[:colon].strip()
        if not name:
            raise FormatError("Empty metadata name", text=line, line_number=line_number)
        if not is_valid_metadata_name(name):
            raise FormatError(f"Invalid metadata name: {name}", text=name, line_number=line_number)
        if builder.has_metadata(name):
            raise StructuralError(f"Multiple metadata specified with name: {name}", line_number)
        if is_reserved_name(name):
            raise StructuralError(f"Reserved metadata name: {name}", line_number)
        builder.add_metadata(name, _read_metadata_value(lines, line[colon + 1:]))


def _read_metadata_value(lines: LinePeekIterator, tail: str) -> str:
    """Read the value after a metadata name's colon.

    Unquoted values are trimmed and end with the line. A value whose first
    non-blank character is a quote continues until a line whose last quote
    is followed only by whitespace. A trailing backslash on an unclosed line
    is removed; the line break itself is always kept as ``\\n``.
    """
    if not _starts_with_quote(tail):
        return tail.strip()
    segment = tail[tail.index('"') + 1:]
    parts = []
    while True:
        last_quote = segment.rfind('"')
        if last_quote >= 0 and _is_whitespace_only(segment[last_quote + 1:]):
            parts.append(segment[:last_quote])
            return "".join(parts)
        last_slash = segment.rfind("\\")
        if last_slash >= 0 and _is_whitespace_only(segment[last_slash + 1:]):
            parts.append(segment[:last_slash])
        else:
            parts.append(segment)
        parts.append("\n")
        if not lines.has_next():
            raise UnterminatedValueError("Unclosed quotes", line_number=lines.line_number)
        segment = lines.next()
