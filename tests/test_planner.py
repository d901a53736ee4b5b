"""Tests for edit planning."""

from __future__ import annotations

from pathlib import Path

from docport.models import ResolvedPointer
from docport.planner import EditPlanner, include_tag, line_ending, line_indent

from tests._fixtures.docs_builder import make_member, make_type

POINTER = ResolvedPointer(
    "../docs/Microsoft.Maui.Controls/Grid.xml",
    "Type[@FullName='Microsoft.Maui.Controls.Grid']/Docs",
)


def test_include_tag_names_file_and_locator() -> None:
    assert include_tag(POINTER) == (
        '/// <include file="../docs/Microsoft.Maui.Controls/Grid.xml" '
        "path=\"Type[@FullName='Microsoft.Maui.Controls.Grid']/Docs\" />"
    )


def test_plan_inserts_before_declaration_and_keeps_indentation() -> None:
    source = "namespace Microsoft.Maui.Controls\n{\n\tpublic class Grid\n\t{\n\t}\n}\n"
    offset = source.index("public class Grid")
    declaration = make_type("Grid", path=Path("/src/Grid.cs"), offset=offset)

    edit = EditPlanner().plan(declaration, POINTER, source)

    assert edit.path == Path("/src/Grid.cs")
    assert edit.offset == offset
    assert edit.text == include_tag(POINTER) + "\n\t"
    updated = source[: edit.offset] + edit.text + source[edit.offset :]
    assert f"\t{include_tag(POINTER)}\n\tpublic class Grid" in updated


def test_plan_preserves_crlf_line_endings() -> None:
    source = "namespace N\r\n{\r\n    public class Grid\r\n    {\r\n        public void Add() { }\r\n    }\r\n}\r\n"
    offset = source.index("public void Add")
    grid = make_type("Grid")
    declaration = make_member("Add", grid, offset=offset, path=Path("/src/Grid.cs"))

    edit = EditPlanner().plan(declaration, POINTER, source)

    assert edit.text.endswith("\r\n        ")


def test_line_helpers() -> None:
    assert line_indent("    int x;", 4) == "    "
    assert line_indent("{ public int X; }", 2) == ""
    assert line_ending("a\nb") == "\n"
    assert line_ending("a\r\nb") == "\r\n"
    assert line_ending("single line") == "\n"
