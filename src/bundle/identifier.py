"""Bundle identifiers: canonical name + qualifiers + meta-qualifiers.

An identifier string has the form ``name[-qualifier]*``. Input is
case-insensitive; the canonical form is lower-case with plain qualifiers
sorted first, followed by the sorted meta-qualifiers::

    >>> str(Identifier.parse("My.Bundle-V1.0-Q2-q1"))
    'my.bundle-q1-q2-v1.0'

Meta-qualifiers are qualifiers with a meaning known to the repository. The
only kind currently recognized is the version qualifier (``v1.2.3``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from .errors import AmbiguousVersionError, FormatError
from .version_order import VERSION_QUALIFIER_MARKERS

PATTERN_IDENTIFIER = re.compile(r"[a-zA-Z_0-9]+(\.[a-zA-Z_0-9]+)*(-[a-zA-Z0-9_.]+)*")
PATTERN_NAME = re.compile(r"[a-zA-Z_0-9]+(\.[a-zA-Z_0-9]+)*")
PATTERN_QUALIFIER = re.compile(r"[a-zA-Z0-9_.]+")
PATTERN_VERSION_QUALIFIER = re.compile(r"[vV](0|[1-9][0-9]*)(\.(0|[1-9][0-9]*))*")
PATTERN_VERSION_NUMBER = re.compile(r"(0|[1-9][0-9]*)(\.(0|[1-9][0-9]*))*")


def _sorted_unique(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(sorted(set(values)))


@dataclass(frozen=True, order=True)
class Identifier:
    """Immutable bundle identifier.

    Equality, hashing and ordering are defined on
    ``(name, sorted qualifiers, sorted meta-qualifiers)``.
    The constructor validates and canonicalizes its arguments the same way
    :meth:`parse` does: parts are lower-cased and version qualifiers are
    always kept among the meta-qualifiers.
    """

    name: str
    qualifiers: Tuple[str, ...] = field(default=())
    meta_qualifiers: Tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        if not is_valid_name(self.name):
            raise FormatError(f"Invalid bundle name format: {self.name}", text=self.name)
        qualifiers = set()
        meta_qualifiers = set()
        version_qualifier = None
        for qualifier in tuple(self.qualifiers) + tuple(self.meta_qualifiers):
            if not is_valid_qualifier(qualifier):
                raise FormatError(f"Invalid bundle qualifier format: {qualifier}", text=qualifier)
            qualifier = qualifier.lower()
            if not is_meta_qualifier(qualifier):
                qualifiers.add(qualifier)
                continue
            if is_valid_version_qualifier(qualifier):
                if version_qualifier is not None and version_qualifier != qualifier:
                    raise AmbiguousVersionError(
                        f"Multiple version qualifiers in bundle identifier: {self.name.lower()}"
                        f"-{version_qualifier}-{qualifier}"
                    )
                version_qualifier = qualifier
            meta_qualifiers.add(qualifier)
        object.__setattr__(self, "name", self.name.lower())
        object.__setattr__(self, "qualifiers", _sorted_unique(qualifiers))
        object.__setattr__(self, "meta_qualifiers", _sorted_unique(meta_qualifiers))

    @classmethod
    def parse(cls, text: str) -> "Identifier":
        """Parse an identifier string.

        Raises:
            FormatError: If the text does not match the identifier grammar.
            AmbiguousVersionError: If two different version qualifiers are present.
        """
        if text is None:
            raise TypeError("identifier text must not be None")
        if not PATTERN_IDENTIFIER.fullmatch(text):
            raise FormatError(f"Invalid bundle identifier format: {text}", text=text)
        name, *segments = text.split("-")
        return cls(name, tuple(segments))

    @staticmethod
    def compare(left: "Identifier", right: "Identifier") -> int:
        """Three-way comparison of two identifiers."""
        if left == right:
            return 0
        return -1 if left < right else 1

    @property
    def all_qualifiers(self) -> Tuple[str, ...]:
        """Plain and meta-qualifiers together, sorted."""
        if not self.qualifiers:
            return self.meta_qualifiers
        if not self.meta_qualifiers:
            return self.qualifiers
        return _sorted_unique(self.qualifiers + self.meta_qualifiers)

    @property
    def version_qualifier(self) -> Optional[str]:
        return find_version_qualifier(self.meta_qualifiers)

    @property
    def version_number(self) -> Optional[str]:
        qualifier = self.version_qualifier
        if qualifier is None:
            return None
        return qualifier[1:]

    def has_any_qualifiers(self) -> bool:
        return bool(self.qualifiers or self.meta_qualifiers)

    def has_meta_qualifiers(self) -> bool:
        return bool(self.meta_qualifiers)

    def has_normal_qualifiers(self) -> bool:
        return bool(self.qualifiers)

    def without_meta_qualifiers(self) -> "Identifier":
        if not self.meta_qualifiers:
            return self
        return Identifier(self.name, self.qualifiers)

    def without_qualifiers(self) -> "Identifier":
        if not self.qualifiers:
            return self
        return Identifier(self.name, (), self.meta_qualifiers)

    def without_any_qualifiers(self) -> "Identifier":
        if not self.qualifiers and not self.meta_qualifiers:
            return self
        return Identifier(self.name)

    def __str__(self) -> str:
        parts = [self.name]
        parts.extend(self.qualifiers)
        parts.extend(self.meta_qualifiers)
        return "-".join(parts)

    def __repr__(self) -> str:
        return f"Identifier({str(self)!r})"


def find_version_qualifier(qualifiers: Optional[Iterable[str]]) -> Optional[str]:
    """Return the single version qualifier among ``qualifiers``.

    Returns None when there is none, or when more than one is present since
    the version cannot be determined then.
    """
    if qualifiers is None:
        return None
    result = None
    for qualifier in qualifiers:
        if is_valid_version_qualifier(qualifier):
            if result is not None:
                return None
            result = qualifier
    return result


def has_version_qualifier(qualifiers: Optional[Iterable[str]]) -> bool:
    if qualifiers is None:
        return False
    return any(is_valid_version_qualifier(q) for q in qualifiers)


def make_version_qualifier(version_number: str) -> str:
    if version_number is None:
        raise TypeError("version number must not be None")
    return "v" + version_number


def get_version_qualifier_version_number_part(version_qualifier: str) -> str:
    if not version_qualifier:
        raise FormatError("Empty version qualifier argument.")
    if version_qualifier[0] not in VERSION_QUALIFIER_MARKERS:
        raise FormatError(f"Invalid version qualifier: {version_qualifier}", text=version_qualifier)
    return version_qualifier[1:]


def is_valid_identifier(text: Optional[str]) -> bool:
    return text is not None and PATTERN_IDENTIFIER.fullmatch(text) is not None


def is_valid_name(name: Optional[str]) -> bool:
    return name is not None and PATTERN_NAME.fullmatch(name) is not None


def is_valid_qualifier(qualifier: Optional[str]) -> bool:
    return qualifier is not None and PATTERN_QUALIFIER.fullmatch(qualifier) is not None


def is_valid_version_number(version: Optional[str]) -> bool:
    return version is not None and PATTERN_VERSION_NUMBER.fullmatch(version) is not None


def is_valid_version_qualifier(qualifier: Optional[str]) -> bool:
    return qualifier is not None and PATTERN_VERSION_QUALIFIER.fullmatch(qualifier) is not None


def is_meta_qualifier(qualifier: Optional[str]) -> bool:
    # Identifier construction relies on this being the only meta-qualifier kind
    return is_valid_version_qualifier(qualifier)
