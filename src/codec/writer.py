"""Canonical writer for the dependency declaration text format.

Output uses one tab before kind lines and two tabs before metadata lines.
Reading the output back with the same declaring bundle yields equal
declarations.
"""

from __future__ import annotations

import io
import logging
import re
from typing import IO, List, Optional

from bundle.dependency import Dependency
from bundle.dependency_information import DependencyInformation
from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants

logger = logging.getLogger(__name__)

KIND_INDENT = "\t"
METADATA_INDENT = "\t\t"
KIND_SEPARATOR = ", "

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_INDENT_CHARS = " \t"


def _needs_line_escape(line: str) -> bool:
    # A trailing quote would close the value, a trailing backslash would be
    # eaten as a continuation marker and a blank line would be skipped.
    stripped = line.rstrip(_INDENT_CHARS)
    return not stripped or stripped.endswith('"') or stripped.endswith("\\")


def format_metadata_value(value: str) -> str:
    """Render a metadata value as it appears after ``name: ``.

    Returns an empty string for an empty value.
    """
    if not value:
        return ""
    value_lines = _LINE_BREAK.split(value)
    if len(value_lines) == 1:
        if value.startswith('"') or value != value.strip():
            return f'"{value}"'
        return value
    rendered = []
    for line in value_lines[:-1]:
        rendered.append(line + "\\" if _needs_line_escape(line) else line)
    rendered.append(value_lines[-1])
    return '"' + "\n".join(rendered) + '"'


def _dependency_lines(dependency: Dependency) -> List[str]:
    lines = [f"{KIND_INDENT}{KIND_SEPARATOR.join(dependency.kinds)}: {dependency.range}"]
    for name, value in dependency.metadata.items():
        rendered = format_metadata_value(value)
        if rendered:
            lines.append(f"{METADATA_INDENT}{name}: {rendered}")
        else:
            lines.append(f"{METADATA_INDENT}{name}:")
    return lines


def format_dependency_information(info: DependencyInformation) -> str:
    """Return the canonical text of ``info``."""
    lines: List[str] = []
    for bundle_id, dependency_list in info.dependencies.items():
        if dependency_list.is_empty():
            continue
        lines.append(str(bundle_id))
        for dependency in dependency_list:
            lines.extend(_dependency_lines(dependency))
    return "".join(line + "\n" for line in lines)


def _write_to_stream(stream: IO, text: str) -> None:
    # Anything that rejects str is treated as a binary stream
    if isinstance(stream, io.TextIOBase):
        stream.write(text)
        return
    try:
        stream.write(text)
    except TypeError:
        stream.write(text.encode(Constants.ENCODING))


def write_dependency_information(info: DependencyInformation, stream: Optional[IO] = None) -> Optional[str]:
    """Write ``info`` in canonical form.

    Args:
        info: Declarations to write.
        stream: Text or binary stream to write to. It is not closed. When
            omitted, the text is returned instead.

    Returns:
        The text when no stream is given, otherwise None.
    """
    if info is None:
        raise TypeError("info must not be None")
    with Timer() as t:
        text = format_dependency_information(info)
        if stream is not None:
            _write_to_stream(stream, text)
    if is_debug_enabled(logger):
        logger.debug(
            "Wrote dependency declarations",
            extra=extra_context(
                event="write",
                component="codec_writer",
                outcome="success",
                count=len(info),
                duration_ms=t.duration_ms(),
            ),
        )
    return text if stream is None else None
