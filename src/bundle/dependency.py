"""A single dependency entry: kinds, version range and metadata."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Iterable, Mapping, Optional, Tuple

from constants import Constants

from .errors import FormatError, StructuralError

if TYPE_CHECKING:
    from versioning.models import VersionRange

PATTERN_KIND = re.compile(r"[a-zA-Z_\-0-9]+")
PATTERN_METADATA_NAME = re.compile(r"[a-zA-Z_\-0-9]+")


def is_valid_kind(kind: Optional[str]) -> bool:
    return kind is not None and PATTERN_KIND.fullmatch(kind) is not None


def is_valid_metadata_name(name: Optional[str]) -> bool:
    return name is not None and PATTERN_METADATA_NAME.fullmatch(name) is not None


def is_reserved_name(name: str) -> bool:
    """True if ``name`` starts with the reserved prefix, ignoring case."""
    return name.lower().startswith(Constants.RESERVED_PREFIX)


def _is_true(value: Optional[str]) -> bool:
    return value is not None and value.lower() == "true"


class Dependency:
    """Immutable (kinds, range, metadata) triple.

    Kinds are kept sorted; metadata keeps its insertion order but compares
    like a plain mapping. Build instances with :meth:`builder`.
    """

    __slots__ = ("_kinds", "_range", "_metadata")

    def __init__(self, kinds: Iterable[str], version_range: VersionRange, metadata: Optional[Mapping[str, str]] = None):
        self._kinds: Tuple[str, ...] = tuple(sorted(set(kinds)))
        self._range = version_range
        self._metadata: Tuple[Tuple[str, str], ...] = tuple((metadata or {}).items())

    @staticmethod
    def builder(copy: Optional["Dependency"] = None) -> "DependencyBuilder":
        return DependencyBuilder(copy)

    @property
    def kinds(self) -> Tuple[str, ...]:
        return self._kinds

    @property
    def range(self) -> VersionRange:
        return self._range

    @property
    def metadata(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self._metadata))

    def has_kind(self, kind: Optional[str]) -> bool:
        return kind is not None and kind in self._kinds

    def is_optional(self) -> bool:
        return _is_true(self.metadata.get(Constants.DEPENDENCY_META_OPTIONAL))

    def is_private(self) -> bool:
        return _is_true(self.metadata.get(Constants.DEPENDENCY_META_PRIVATE))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Dependency):
            return NotImplemented
        return (
            self._kinds == other._kinds
            and self._range == other._range
            and dict(self._metadata) == dict(other._metadata)
        )

    def __hash__(self) -> int:
        return hash((self._kinds, self._range, frozenset(self._metadata)))

    def __repr__(self) -> str:
        return f"Dependency(kinds={list(self._kinds)}, range={str(self._range)!r}, metadata={dict(self._metadata)})"


class DependencyBuilder:
    """Mutable builder validating kinds and metadata names eagerly."""

    def __init__(self, copy: Optional[Dependency] = None):
        self._kinds = set()
        self._range: Optional[VersionRange] = None
        self._metadata: Dict[str, str] = {}
        if copy is not None:
            self._kinds.update(copy.kinds)
            self._range = copy.range
            self._metadata.update(copy.metadata)

    def set_range(self, version_range: VersionRange) -> "DependencyBuilder":
        self._range = version_range
        return self

    def add_kind(self, kind: str) -> "DependencyBuilder":
        """Add a dependency kind.

        Raises:
            FormatError: If the kind has an invalid format.
            StructuralError: If the kind uses the reserved prefix.
        """
        if kind is None:
            raise TypeError("kind must not be None")
        if not is_valid_kind(kind):
            raise FormatError(f"Invalid dependency kind format: {kind}", text=kind)
        if is_reserved_name(kind):
            raise StructuralError(f"Reserved dependency kind: {kind}")
        self._kinds.add(kind)
        return self

    def add_metadata(self, name: str, content: str) -> "DependencyBuilder":
        """Set a metadata entry, replacing any previous value for ``name``.

        Raises:
            FormatError: If the name has an invalid format.
            StructuralError: If the name uses the reserved prefix.
        """
        if name is None or content is None:
            raise TypeError("metadata name and content must not be None")
        if not is_valid_metadata_name(name):
            raise FormatError(f"Invalid dependency metadata name format: {name}", text=name)
        if is_reserved_name(name):
            raise StructuralError(f"Reserved metadata name: {name}")
        self._metadata[name] = content
        return self

    def has_metadata(self, name: str) -> bool:
        return name in self._metadata

    def clear_kinds(self) -> "DependencyBuilder":
        self._kinds.clear()
        return self

    def clear_metadata(self) -> "DependencyBuilder":
        self._metadata.clear()
        return self

    def build(self) -> Dependency:
        if self._range is None:
            raise StructuralError("Version range not set.")
        if not self._kinds:
            raise StructuralError("No kinds specified.")
        return Dependency(self._kinds, self._range, self._metadata)
