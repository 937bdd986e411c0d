"""Error taxonomy for bundle identifiers and dependency declarations."""

from __future__ import annotations

from typing import Optional


class NestDepsError(ValueError):
    """Base class for all identifier, range and declaration errors.

    Args:
        message: Human readable description.
        line_number: 1-based input line where the problem was detected, if any.
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} at line: {line_number}"
        super().__init__(message)

    def with_line(self, line_number: int) -> "NestDepsError":
        """Return a copy of this error located at the given line."""
        if self.line_number is not None:
            return self
        return self._relocated(line_number)

    def _relocated(self, line_number: int) -> "NestDepsError":
        return type(self)(self.message, line_number=line_number)


class FormatError(NestDepsError):
    """Malformed identifier, kind, metadata name or version range text."""

    def __init__(self, message: str, text: Optional[str] = None, line_number: Optional[int] = None):
        self.text = text
        super().__init__(message, line_number=line_number)

    def _relocated(self, line_number: int) -> "FormatError":
        return type(self)(self.message, text=self.text, line_number=line_number)


class UnterminatedValueError(FormatError):
    """A quoted metadata value was never closed."""


class StructuralError(NestDepsError):
    """Well-formed text that violates a structural rule.

    Raised for duplicate targets, empty dependency blocks, reserved names,
    duplicate metadata names and illegal indentation.
    """


class AmbiguousVersionError(StructuralError):
    """An identifier carries more than one distinct version qualifier."""
