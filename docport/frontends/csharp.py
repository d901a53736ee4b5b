"""Tree-sitter powered C# declaration front end."""

from __future__ import annotations

from bisect import bisect_left
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser

from .base import DeclarationSource
from ..models import (
    Accessibility,
    Declaration,
    DeclarationKind,
    MemberKind,
    SourceLocation,
    TypeKind,
)

_TYPE_NODES = {
    "class_declaration": TypeKind.CLASS,
    "struct_declaration": TypeKind.STRUCT,
    "interface_declaration": TypeKind.INTERFACE,
    "enum_declaration": TypeKind.ENUM,
}

_MEMBER_NODES = {
    "method_declaration": MemberKind.METHOD,
    "constructor_declaration": MemberKind.CONSTRUCTOR,
    "property_declaration": MemberKind.PROPERTY,
    "field_declaration": MemberKind.FIELD,
    "enum_member_declaration": MemberKind.ENUM_MEMBER,
}

_BODY_NODES = {"declaration_list", "enum_member_declaration_list"}
_DOC_COMMENT_PREFIXES = ("///", "/**")


class _OffsetMap:
    """Converts tree-sitter byte offsets into character offsets of the source text.

    Non-ASCII files get a table of the byte offset at which each character
    starts, built once per file and searched with ``bisect``.
    """

    def __init__(self, text: str) -> None:
        self._starts: Optional[List[int]] = None
        if not text.isascii():
            starts = []
            position = 0
            for char in text:
                starts.append(position)
                position += len(char.encode("utf-8"))
            self._starts = starts

    def to_char(self, byte_offset: int) -> int:
        if self._starts is None:
            return byte_offset
        return bisect_left(self._starts, byte_offset)


class CSharpDeclarationSource(DeclarationSource):
    """Extracts type and member declarations from C# files."""

    def __init__(self) -> None:
        self._parser = Parser(Language(tree_sitter_c_sharp.language()))

    def supports(self, path: Path) -> bool:
        return Path(path).suffix.lower() == ".cs"

    def declarations(self, path: Path, text: str) -> Iterable[Declaration]:
        source_bytes = text.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        offsets = _OffsetMap(text)
        context = _FileContext(Path(path), source_bytes, offsets)
        return list(context.walk(tree.root_node.children, namespace="", container=None))


class _FileContext:
    def __init__(self, path: Path, source_bytes: bytes, offsets: _OffsetMap) -> None:
        self.path = path
        self.source_bytes = source_bytes
        self.offsets = offsets

    def walk(
        self,
        children: Sequence[Node],
        *,
        namespace: str,
        container: Optional[Declaration],
    ) -> Iterator[Declaration]:
        current_ns = namespace
        for child in children:
            if child.type == "file_scoped_namespace_declaration":
                # Depending on the grammar version the following declarations are
                # either children of this node or its siblings.
                current_ns = _join(namespace, self._name(child))
                yield from self.walk(child.children, namespace=current_ns, container=container)
            elif child.type == "namespace_declaration":
                inner_ns = _join(current_ns, self._name(child))
                body = self._body(child)
                if body is not None:
                    yield from self.walk(body.children, namespace=inner_ns, container=container)
            elif child.type in _TYPE_NODES:
                declaration = self._type_declaration(child, current_ns, container)
                if declaration is None:
                    continue
                yield declaration
                body = self._body(child)
                if body is not None:
                    yield from self.walk(body.children, namespace=current_ns, container=declaration)
            elif child.type in _MEMBER_NODES and container is not None:
                declaration = self._member_declaration(child, current_ns, container)
                if declaration is not None:
                    yield declaration

    def _type_declaration(
        self, node: Node, namespace: str, container: Optional[Declaration]
    ) -> Optional[Declaration]:
        name = self._name(node)
        if not name:
            return None
        return Declaration(
            kind=DeclarationKind.TYPE,
            name=name,
            namespace=namespace,
            location=self._location(node),
            accessibility=self._accessibility(node),
            has_inline_doc=self._has_doc_comment(node),
            member_kind=MemberKind.TYPE,
            type_kind=_TYPE_NODES[node.type],
            container=container,
        )

    def _member_declaration(
        self, node: Node, namespace: str, container: Declaration
    ) -> Optional[Declaration]:
        member_kind = _MEMBER_NODES[node.type]
        if member_kind is MemberKind.FIELD:
            # Only the first variable of "public int x, y;" is considered.
            name = self._field_name(node)
        else:
            name = self._name(node)
        if not name:
            return None
        return Declaration(
            kind=DeclarationKind.MEMBER,
            name=name,
            namespace=namespace,
            location=self._location(node),
            accessibility=self._accessibility(node),
            has_inline_doc=self._has_doc_comment(node),
            parameters=self._parameters(node),
            member_kind=member_kind,
            container=container,
        )

    def _text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")

    def _location(self, node: Node) -> SourceLocation:
        return SourceLocation(path=self.path, offset=self.offsets.to_char(node.start_byte))

    def _name(self, node: Node) -> str:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            name_node = _first_child(node, ("identifier", "qualified_name"))
        return self._text(name_node) if name_node is not None else ""

    def _field_name(self, node: Node) -> str:
        variable = _first_child(node, ("variable_declaration",))
        if variable is None:
            return ""
        declarator = _first_child(variable, ("variable_declarator",))
        if declarator is None:
            return ""
        return self._name(declarator)

    @staticmethod
    def _body(node: Node) -> Optional[Node]:
        body = node.child_by_field_name("body")
        if body is not None and body.type in _BODY_NODES:
            return body
        return _first_child(node, tuple(_BODY_NODES))

    def _accessibility(self, node: Node) -> Accessibility:
        for child in node.children:
            if child.type in {"modifier", "public"} and self._text(child).strip() == "public":
                return Accessibility.PUBLIC
        return Accessibility.OTHER

    def _has_doc_comment(self, node: Node) -> bool:
        sibling = node.prev_named_sibling
        while sibling is not None and sibling.type == "comment":
            if self._text(sibling).lstrip().startswith(_DOC_COMMENT_PREFIXES):
                return True
            sibling = sibling.prev_named_sibling
        return False

    def _parameters(self, node: Node) -> Tuple[str, ...]:
        parameter_list = node.child_by_field_name("parameters")
        if parameter_list is None:
            parameter_list = _first_child(node, ("parameter_list",))
        if parameter_list is None:
            return ()
        types = []
        for parameter in parameter_list.named_children:
            if parameter.type != "parameter":
                continue
            type_node = parameter.child_by_field_name("type")
            if type_node is not None:
                types.append(self._text(type_node))
        return tuple(types)


def _first_child(node: Node, types: Tuple[str, ...]) -> Optional[Node]:
    for child in node.children:
        if child.type in types:
            return child
    return None


def _join(outer: str, inner: str) -> str:
    if not outer:
        return inner
    if not inner:
        return outer
    return f"{outer}.{inner}"


__all__ = ["CSharpDeclarationSource"]
