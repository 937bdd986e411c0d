"""Version range parsing.

Accepted forms (spaces and tabs between tokens are ignored):

- ``1.0``: the version and any version extending it
- ``[1.0)``: at least 1.0; ``(1.0]``: at most 1.0; ``[1.0]``: exactly 1.0
- ``[1.0, 2.0)``: bounded; either brace may be ``(``/``)`` or ``[``/``]``
- ``{r1 | r2}``: any of the members; ``{}`` includes nothing
- ``r1 & r2``: all of the members
"""

from __future__ import annotations

from typing import List

from bundle.errors import FormatError
from bundle.identifier import is_valid_version_number
from bundle.version_order import compare_version_numbers

from .models import (
    UNSATISFIABLE,
    BaseVersionRange,
    BoundedVersionRange,
    ExactVersionRange,
    IntersectionVersionRange,
    MaximumVersionRange,
    MinimumVersionRange,
    UnionVersionRange,
    VersionRange,
)

_WHITESPACE = " \t"
_NUMBER_CHARS = "0123456789."


class _RangeScanner:
    """Cursor over range text that skips insignificant whitespace."""

    def __init__(self, text: str):
        self.text = text
        self.index = 0

    def _skip(self) -> None:
        while self.index < len(self.text) and self.text[self.index] in _WHITESPACE:
            self.index += 1

    def has_next(self) -> bool:
        self._skip()
        return self.index < len(self.text)

    def peek(self) -> str:
        if not self.has_next():
            raise self.error("Unexpected end of range")
        return self.text[self.index]

    def move(self) -> None:
        self.index += 1

    def read_number(self) -> str:
        """Read a run of digits and dots, possibly empty."""
        self._skip()
        start = self.index
        while self.index < len(self.text) and self.text[self.index] in _NUMBER_CHARS:
            self.index += 1
        return self.text[start:self.index]

    def error(self, message: str) -> FormatError:
        return FormatError(f"{message} at index: {self.index} in {self.text}", text=self.text)


def parse_version_range(text: str) -> VersionRange:
    """Parse version range text.

    Raises:
        FormatError: If the text is not a valid range.
    """
    if text is None:
        raise TypeError("range text must not be None")
    if not text:
        raise FormatError("Empty range.", text=text)
    scanner = _RangeScanner(text)
    if not scanner.has_next():
        raise FormatError(f"Invalid range: {text}", text=text)
    result = _parse_expression(scanner)
    if scanner.has_next():
        raise scanner.error("Extra characters")
    return result


def _parse_expression(scanner: _RangeScanner) -> VersionRange:
    members = [_parse_atom(scanner)]
    while scanner.has_next() and scanner.peek() == "&":
        scanner.move()
        members.append(_parse_atom(scanner))
    return IntersectionVersionRange.create(members)


def _parse_atom(scanner: _RangeScanner) -> VersionRange:
    c = scanner.peek()
    if c.isdigit():
        return BaseVersionRange(_version_number(scanner, scanner.read_number()))
    if c in "([":
        scanner.move()
        return _parse_braced(scanner, c)
    if c == "{":
        scanner.move()
        return _parse_union(scanner)
    raise scanner.error(f"Invalid range character: {c}")


def _version_number(scanner: _RangeScanner, version: str) -> str:
    if not is_valid_version_number(version):
        raise scanner.error(f"Invalid version number: {version}")
    return version


def _parse_braced(scanner: _RangeScanner, opening: str) -> VersionRange:
    left = scanner.read_number()
    if not scanner.has_next():
        raise scanner.error("Missing range closing brace")
    c = scanner.peek()
    if c == ",":
        if not left:
            raise scanner.error("Empty left range bound")
        left = _version_number(scanner, left)
        scanner.move()
        right = scanner.read_number()
        if not right:
            raise scanner.error("Empty right range bound")
        right = _version_number(scanner, right)
        closing = scanner.peek()
        if closing not in ")]":
            raise scanner.error(f"Invalid range ending character: {closing}")
        scanner.move()
        if compare_version_numbers(left, right) >= 0:
            raise scanner.error(f"Invalid range bounds: {opening}{left}, {right}{closing}")
        return BoundedVersionRange(left, right, opening == "[", closing == "]")
    if c in ")]":
        scanner.move()
        if not left:
            raise scanner.error("Empty range bound")
        version = _version_number(scanner, left)
        if opening == "[":
            return ExactVersionRange(version) if c == "]" else MinimumVersionRange(version)
        if c == ")":
            raise scanner.error(f"Illegal range definition: ({version})")
        return MaximumVersionRange(version)
    raise scanner.error(f"Invalid range character: {c}")


def _parse_union(scanner: _RangeScanner) -> VersionRange:
    if not scanner.has_next():
        raise scanner.error("Unclosed {")
    if scanner.peek() == "}":
        scanner.move()
        return UNSATISFIABLE
    members: List[VersionRange] = []
    while True:
        members.append(_parse_expression(scanner))
        if not scanner.has_next():
            raise scanner.error("Unclosed {")
        c = scanner.peek()
        scanner.move()
        if c == "}":
            return UnionVersionRange.create(members)
        if c != "|":
            raise scanner.error(f"Unexpected character: {c}")
