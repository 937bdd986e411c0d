"""Ordering of dot-separated version numbers and version qualifiers.

The order is defined over the *shape* of the version string, not its numeric
value: when every shared component is equal, the string with more components
is greater, so ``"1" < "1.0" < "1.0.0"``. This makes ``v + ".0"`` the strict
immediate successor of ``v``.
"""

from __future__ import annotations

import re
from typing import List

from .errors import FormatError

VERSION_QUALIFIER_MARKERS = ("v", "V")
_DIGITS = re.compile(r"[0-9]+")


def _components(version: str) -> List[int]:
    parts = version.split(".")
    if not all(_DIGITS.fullmatch(part) for part in parts):
        raise FormatError(f"Invalid version number: {version}", text=version)
    return [int(part) for part in parts]


def _compare_components(left: str, right: str) -> int:
    if left == right:
        return 0
    lparts = _components(left)
    rparts = _components(right)
    for lnum, rnum in zip(lparts, rparts):
        if lnum != rnum:
            return -1 if lnum < rnum else 1
    if len(lparts) == len(rparts):
        return 0
    return -1 if len(lparts) < len(rparts) else 1


def compare_version_numbers(left: str, right: str) -> int:
    """Compare two version numbers, returning -1, 0 or 1.

    Args:
        left: Version number such as ``"1.2.3"``.
        right: Version number to compare against.

    Raises:
        FormatError: If either argument is empty or has a non-numeric component.
    """
    if not left or not right:
        raise FormatError(f"Invalid version numbers: {left} - {right}")
    return _compare_components(left, right)


def compare_version_qualifiers(left: str, right: str) -> int:
    """Compare two version qualifiers (``v1.0`` style), returning -1, 0 or 1."""
    if (
        len(left) < 2
        or len(right) < 2
        or left[0] not in VERSION_QUALIFIER_MARKERS
        or right[0] not in VERSION_QUALIFIER_MARKERS
    ):
        raise FormatError(f"Invalid version qualifiers: {left} - {right}")
    if left[1:] == right[1:]:
        return 0
    return _compare_components(left[1:], right[1:])


def next_version_number_in_natural_order(version: str) -> str:
    """Return the smallest version number strictly greater than ``version``."""
    if not version:
        raise FormatError("Empty version argument.")
    return version + ".0"


def get_version_number_component_count(version: str) -> int:
    """Number of dot-separated components in ``version``."""
    if not version:
        raise FormatError("Empty version number argument.")
    return 1 + version.count(".")
