"""Version range models.

A version range is a predicate over version numbers, built from text by
:func:`versioning.parser.parse_version_range`. Every range renders back to a
string that parses to an equal range.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable

from bundle.version_order import compare_version_numbers


class VersionRange:
    """Base class of all version range kinds."""

    def includes(self, version: str) -> bool:
        """Return True if ``version`` satisfies this range."""
        raise NotImplementedError

    @staticmethod
    def parse(text: str) -> "VersionRange":
        """Parse ``text`` into a range; see :mod:`versioning.parser`."""
        from .parser import parse_version_range  # pylint: disable=import-outside-toplevel

        return parse_version_range(text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


@dataclass(frozen=True, repr=False)
class BaseVersionRange(VersionRange):
    """A bare version number: matches it and every version extending it.

    ``1.2`` includes ``1.2``, ``1.2.0`` and ``1.2.7.1`` but not ``1.3``.
    """

    version: str

    def includes(self, version: str) -> bool:
        cmp = compare_version_numbers(self.version, version)
        if cmp == 0:
            return True
        return cmp < 0 and version.startswith(self.version + ".")

    def __str__(self) -> str:
        return self.version


@dataclass(frozen=True, repr=False)
class ExactVersionRange(VersionRange):
    version: str

    def includes(self, version: str) -> bool:
        return self.version == version

    def __str__(self) -> str:
        return f"[{self.version}]"


@dataclass(frozen=True, repr=False)
class MinimumVersionRange(VersionRange):
    """Versions at least ``minimum``."""

    minimum: str

    def includes(self, version: str) -> bool:
        return compare_version_numbers(self.minimum, version) <= 0

    def __str__(self) -> str:
        return f"[{self.minimum})"


@dataclass(frozen=True, repr=False)
class MaximumVersionRange(VersionRange):
    """Versions at most ``maximum``."""

    maximum: str

    def includes(self, version: str) -> bool:
        return compare_version_numbers(self.maximum, version) >= 0

    def __str__(self) -> str:
        return f"({self.maximum}]"


@dataclass(frozen=True, repr=False)
class BoundedVersionRange(VersionRange):
    """Interval between two version numbers; ``left`` must be less than ``right``."""

    left: str
    right: str
    left_inclusive: bool = True
    right_inclusive: bool = False

    def includes(self, version: str) -> bool:
        lcmp = compare_version_numbers(self.left, version)
        rcmp = compare_version_numbers(self.right, version)
        lower_ok = lcmp <= 0 if self.left_inclusive else lcmp < 0
        upper_ok = rcmp >= 0 if self.right_inclusive else rcmp > 0
        return lower_ok and upper_ok

    def __str__(self) -> str:
        lbrace = "[" if self.left_inclusive else "("
        rbrace = "]" if self.right_inclusive else ")"
        return f"{lbrace}{self.left}, {self.right}{rbrace}"


@dataclass(frozen=True, repr=False)
class UnsatisfiableVersionRange(VersionRange):
    """Includes no version at all; written as ``{}``."""

    def includes(self, version: str) -> bool:
        return False

    def __str__(self) -> str:
        return "{}"


UNSATISFIABLE = UnsatisfiableVersionRange()


@dataclass(frozen=True, repr=False)
class UnionVersionRange(VersionRange):
    ranges: FrozenSet[VersionRange]

    @classmethod
    def create(cls, ranges: Iterable[VersionRange]) -> VersionRange:
        """Union of ``ranges``; nested unions are flattened."""
        members = set()
        for r in ranges:
            if isinstance(r, UnionVersionRange):
                members.update(r.ranges)
            else:
                members.add(r)
        if not members:
            return UNSATISFIABLE
        if len(members) == 1:
            return next(iter(members))
        return cls(frozenset(members))

    def includes(self, version: str) -> bool:
        return any(r.includes(version) for r in self.ranges)

    def __str__(self) -> str:
        return "{" + " | ".join(sorted(str(r) for r in self.ranges)) + "}"


@dataclass(frozen=True, repr=False)
class IntersectionVersionRange(VersionRange):
    ranges: FrozenSet[VersionRange]

    @classmethod
    def create(cls, ranges: Iterable[VersionRange]) -> VersionRange:
        """Intersection of ``ranges``; nested intersections are flattened."""
        members = set()
        for r in ranges:
            if isinstance(r, IntersectionVersionRange):
                members.update(r.ranges)
            else:
                members.add(r)
        if not members:
            return UNSATISFIABLE
        if len(members) == 1:
            return next(iter(members))
        return cls(frozenset(members))

    def includes(self, version: str) -> bool:
        return all(r.includes(version) for r in self.ranges)

    def __str__(self) -> str:
        return " & ".join(sorted(str(r) for r in self.ranges))
