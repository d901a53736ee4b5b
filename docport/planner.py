"""Turns resolved pointers into source insertions."""

from __future__ import annotations

from .models import Declaration, Edit, ResolvedPointer

INCLUDE_TEMPLATE = '/// <include file="{file}" path="{path}" />'


def include_tag(pointer: ResolvedPointer) -> str:
    return INCLUDE_TEMPLATE.format(file=pointer.artifact_relative_path, path=pointer.locator)


def line_indent(text: str, offset: int) -> str:
    """Return the whitespace between the start of the line and ``offset``."""
    line_start = max(text.rfind("\n", 0, offset), text.rfind("\r", 0, offset)) + 1
    prefix = text[line_start:offset]
    return prefix[: len(prefix) - len(prefix.lstrip(" \t"))]


def line_ending(text: str) -> str:
    """Return the first line terminator used in ``text``, defaulting to LF."""
    index = text.find("\n")
    if index > 0 and text[index - 1] == "\r":
        return "\r\n"
    if index == -1 and "\r" in text:
        return "\r"
    return "\n"


class EditPlanner:
    """Plans the include line for a declaration.

    The tag goes right before the declaration's first token and is followed by a
    line break plus the declaration's own indentation, so the declaration keeps
    its column.
    """

    def plan(self, declaration: Declaration, pointer: ResolvedPointer, source_text: str) -> Edit:
        offset = declaration.location.offset
        text = include_tag(pointer) + line_ending(source_text) + line_indent(source_text, offset)
        return Edit(path=declaration.location.path, offset=offset, text=text)


__all__ = ["EditPlanner", "INCLUDE_TEMPLATE", "include_tag", "line_ending", "line_indent"]
