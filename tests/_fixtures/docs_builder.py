"""Builders for throwaway docs trees and hand-made declarations used across tests."""

from __future__ import annotations

import textwrap
from html import escape
from pathlib import Path
from typing import Iterable, Sequence, Tuple

from docport.models import (
    Accessibility,
    Declaration,
    DeclarationKind,
    MemberKind,
    SourceLocation,
    TypeKind,
)
from docport.namespaces import NamespaceMap

LEGACY_NS = "Xamarin.Forms"
CURRENT_NS = "Microsoft.Maui.Controls"


class DocsBuilder:
    """Writes legacy/current mdoc trees and C# sources into a throwaway directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.base = tmp_path.resolve()
        self.legacy_root = self.base / "legacy-docs"
        self.docs_root = self.base / "project" / "docs"
        self.src_root = self.base / "project" / "src"
        for path in (self.legacy_root, self.docs_root, self.src_root):
            path.mkdir(parents=True, exist_ok=True)
        self.namespace_map = NamespaceMap(LEGACY_NS, CURRENT_NS)

    def artifact(
        self,
        namespace: str,
        unit: str,
        members: Iterable[Tuple[str, str]] = (),
        *,
        legacy: bool = True,
    ) -> Path:
        """Write ``<unit>.xml`` with ``(member name, C# signature)`` entries."""
        root = self.legacy_root if legacy else self.docs_root
        path = root / namespace / f"{unit}.xml"
        path.parent.mkdir(parents=True, exist_ok=True)
        member_xml = "".join(
            f'    <Member MemberName="{name}">\n'
            f'      <MemberSignature Language="C#" Value="{escape(signature, quote=True)}" />\n'
            f"      <Docs><summary>{name}</summary></Docs>\n"
            f"    </Member>\n"
            for name, signature in members
        )
        path.write_text(
            f'<Type Name="{unit}" FullName="{namespace}.{unit}">\n'
            f"  <Docs><summary>{unit} in {namespace}</summary></Docs>\n"
            f"  <Members>\n{member_xml}  </Members>\n"
            f"</Type>\n",
            encoding="utf-8",
        )
        return path

    def source(self, relative: str, content: str) -> Path:
        path = self.src_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path.resolve()


def make_type(
    name: str,
    *,
    namespace: str = CURRENT_NS,
    path: Path = Path("/src/File.cs"),
    offset: int = 0,
    public: bool = True,
    documented: bool = False,
    type_kind: TypeKind = TypeKind.CLASS,
    container: Declaration | None = None,
) -> Declaration:
    return Declaration(
        kind=DeclarationKind.TYPE,
        name=name,
        namespace=namespace,
        location=SourceLocation(path, offset),
        accessibility=Accessibility.PUBLIC if public else Accessibility.OTHER,
        has_inline_doc=documented,
        member_kind=MemberKind.TYPE,
        type_kind=type_kind,
        container=container,
    )


def make_member(
    name: str,
    container: Declaration | None,
    *,
    member_kind: MemberKind = MemberKind.METHOD,
    parameters: Sequence[str] = (),
    public: bool = True,
    documented: bool = False,
    offset: int = 0,
    path: Path | None = None,
    namespace: str | None = None,
) -> Declaration:
    if path is None:
        path = container.location.path if container is not None else Path("/src/File.cs")
    if namespace is None:
        namespace = container.namespace if container is not None else CURRENT_NS
    return Declaration(
        kind=DeclarationKind.MEMBER,
        name=name,
        namespace=namespace,
        location=SourceLocation(path, offset),
        accessibility=Accessibility.PUBLIC if public else Accessibility.OTHER,
        has_inline_doc=documented,
        parameters=tuple(parameters),
        member_kind=member_kind,
        container=container,
    )
