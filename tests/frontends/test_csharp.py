"""Tests for the tree-sitter C# front end."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

pytest.importorskip("tree_sitter_c_sharp")

from docport.frontends import CSharpDeclarationSource  # noqa: E402
from docport.frontends.csharp import _OffsetMap  # noqa: E402
from docport.models import Accessibility, DeclarationKind, MemberKind, TypeKind  # noqa: E402

SOURCE = textwrap.dedent(
    """\
    using System;

    namespace Microsoft.Maui.Controls
    {
        /// <summary>Documented.</summary>
        public class Documented { }

        public class Grid
        {
            public Grid() { }

            public void Add(View view, int row) { }

            internal void Hidden() { }

            public int Count { get; }

            public string Name, Other;

            public class Nested
            {
                public void Inner() { }
            }
        }

        public enum Orientation
        {
            Vertical,
            Horizontal
        }

        public interface IView
        {
            void Measure(double width);
        }
    }
    """
)


@pytest.fixture(scope="module")
def source() -> CSharpDeclarationSource:
    return CSharpDeclarationSource()


def _by_name(declarations):  # type: ignore[no-untyped-def]
    return {declaration.name: declaration for declaration in declarations}


def test_supports_only_csharp_files(source: CSharpDeclarationSource) -> None:
    assert source.supports(Path("Grid.cs"))
    assert not source.supports(Path("Grid.xml"))


def test_extracts_types_and_members_in_source_order(source: CSharpDeclarationSource) -> None:
    declarations = list(source.declarations(Path("Grid.cs"), SOURCE))

    assert [declaration.name for declaration in declarations] == [
        "Documented",
        "Grid",
        "Grid",
        "Add",
        "Hidden",
        "Count",
        "Name",
        "Nested",
        "Inner",
        "Orientation",
        "Vertical",
        "Horizontal",
        "IView",
        "Measure",
    ]
    assert all(declaration.namespace == "Microsoft.Maui.Controls" for declaration in declarations)


def test_reports_kinds_visibility_and_doc_comments(source: CSharpDeclarationSource) -> None:
    declarations = list(source.declarations(Path("Grid.cs"), SOURCE))
    named = _by_name(declarations)
    grid_type, constructor = declarations[1], declarations[2]

    assert named["Documented"].has_inline_doc
    assert not grid_type.has_inline_doc
    assert grid_type.kind is DeclarationKind.TYPE
    assert grid_type.type_kind is TypeKind.CLASS
    assert grid_type.accessibility is Accessibility.PUBLIC
    assert constructor.member_kind is MemberKind.CONSTRUCTOR
    assert constructor.container is grid_type
    assert named["Hidden"].accessibility is Accessibility.OTHER
    assert named["Count"].member_kind is MemberKind.PROPERTY
    assert named["Name"].member_kind is MemberKind.FIELD
    assert named["Inner"].container is named["Nested"]
    assert named["Nested"].container is grid_type
    assert named["Orientation"].type_kind is TypeKind.ENUM
    assert named["Vertical"].member_kind is MemberKind.ENUM_MEMBER
    assert named["Vertical"].container is named["Orientation"]
    assert named["IView"].type_kind is TypeKind.INTERFACE
    assert named["Measure"].container is named["IView"]


def test_reports_parameter_types_and_offsets(source: CSharpDeclarationSource) -> None:
    named = _by_name(source.declarations(Path("Grid.cs"), SOURCE))

    assert named["Add"].parameters == ("View", "int")
    assert named["Measure"].parameters == ("double",)
    assert named["Count"].parameters == ()
    assert named["Add"].location.offset == SOURCE.index("public void Add")
    assert named["Orientation"].location.offset == SOURCE.index("public enum Orientation")


def test_file_scoped_and_nested_namespaces(source: CSharpDeclarationSource) -> None:
    file_scoped = "namespace Microsoft.Maui.Controls;\n\npublic class Label\n{\n    public string Text { get; set; }\n}\n"
    nested = "namespace Outer\n{\n    namespace Inner\n    {\n        public class Thing { }\n    }\n}\n"

    label, text = source.declarations(Path("Label.cs"), file_scoped)
    (thing,) = source.declarations(Path("Thing.cs"), nested)

    assert label.namespace == "Microsoft.Maui.Controls"
    assert text.container is label
    assert thing.namespace == "Outer.Inner"


def test_offsets_are_character_offsets_for_non_ascii_text(source: CSharpDeclarationSource) -> None:
    text = "// café ünïcode\nnamespace N\n{\n    public class Grid { }\n}\n"

    (grid,) = source.declarations(Path("Grid.cs"), text)

    assert grid.location.offset == text.index("public class Grid")


def test_plain_comment_is_not_documentation(source: CSharpDeclarationSource) -> None:
    text = "namespace N\n{\n    // not a doc comment\n    public class Grid { }\n}\n"

    (grid,) = source.declarations(Path("Grid.cs"), text)

    assert not grid.has_inline_doc


def test_offset_map_converts_multibyte_positions() -> None:
    text = "aé😀b"
    offsets = _OffsetMap(text)
    encoded = text.encode("utf-8")

    assert [offsets.to_char(encoded.index(char.encode("utf-8"))) for char in text] == [0, 1, 2, 3]
    assert offsets.to_char(len(encoded)) == len(text)
    assert _OffsetMap("plain").to_char(3) == 3


def test_every_declaration_after_non_ascii_text_gets_character_offsets(
    source: CSharpDeclarationSource,
) -> None:
    text = (
        "namespace N\n{\n"
        "    // Größe\n    public class Sizer\n    {\n"
        "        // Überlauf 😀\n        public void Grow(int x) { var s = \"größer\"; }\n"
        "        public int Wert { get; }\n    }\n}\n"
    )

    declarations = list(source.declarations(Path("Sizer.cs"), text))

    assert [declaration.location.offset for declaration in declarations] == [
        text.index("public class Sizer"),
        text.index("public void Grow"),
        text.index("public int Wert"),
    ]
