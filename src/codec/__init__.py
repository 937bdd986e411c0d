"""Text codec for dependency declarations.

This package provides:
- reader.py: the indentation-sensitive parser
- writer.py: the canonical writer

Public API: ``parse`` and ``write``.
"""

from .reader import LinePeekIterator, read_dependency_information  # noqa: F401
from .writer import (  # noqa: F401
    format_dependency_information,
    format_metadata_value,
    write_dependency_information,
)

parse = read_dependency_information
write = write_dependency_information

__all__ = [
    "LinePeekIterator",
    "format_dependency_information",
    "format_metadata_value",
    "parse",
    "read_dependency_information",
    "write",
    "write_dependency_information",
]
