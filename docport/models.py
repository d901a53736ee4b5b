"""Core data models shared across docport components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class DeclarationKind(str, Enum):
    """Discriminant for the two declaration shapes the front end produces."""

    TYPE = "type"
    MEMBER = "member"


class TypeKind(str, Enum):
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    ENUM = "enum"


class MemberKind(str, Enum):
    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"
    ENUM_MEMBER = "enum_member"
    CONSTRUCTOR = "constructor"
    TYPE = "type"


class Accessibility(str, Enum):
    PUBLIC = "public"
    OTHER = "other"


@dataclass(frozen=True)
class SourceLocation:
    """Absolute source path and character offset of a declaration's first token."""

    path: Path
    offset: int


@dataclass(frozen=True)
class Declaration:
    """A named unit of source structure reported by a declaration front end.

    ``container`` points at the immediately enclosing type declaration (if any);
    it is how members find the artifact that documents them and how enum members
    inherit visibility from their enum.
    """

    kind: DeclarationKind
    name: str
    namespace: str
    location: SourceLocation
    accessibility: Accessibility = Accessibility.OTHER
    has_inline_doc: bool = False
    parameters: Tuple[str, ...] = ()
    member_kind: MemberKind = MemberKind.TYPE
    type_kind: Optional[TypeKind] = None
    container: Optional["Declaration"] = field(default=None, repr=False, compare=False)

    @property
    def is_type(self) -> bool:
        return self.kind is DeclarationKind.TYPE

    @property
    def is_public(self) -> bool:
        return self.accessibility is Accessibility.PUBLIC


@dataclass(frozen=True)
class ArtifactHandle:
    """An artifact in the current documentation store.

    ``readable_path`` differs from ``path`` only for read-only stores, where a
    legacy artifact stands in for the not-yet-copied destination.
    """

    namespace: str
    unit_name: str
    path: Path
    readable_path: Path


@dataclass(frozen=True)
class MemberEntry:
    """A ``<Member>`` element of an artifact, in document order."""

    name: str
    signature: Optional[str]
    order: int


@dataclass(frozen=True)
class ResolvedPointer:
    artifact_relative_path: str
    locator: str


@dataclass(frozen=True)
class Edit:
    """A single text insertion into a source file."""

    path: Path
    offset: int
    text: str


@dataclass(frozen=True)
class Finding:
    """An eligible declaration paired with the pointer its reference should use."""

    declaration: Declaration
    pointer: ResolvedPointer
    kind: str
    ambiguous: bool = False


__all__ = [
    "Accessibility",
    "ArtifactHandle",
    "Declaration",
    "DeclarationKind",
    "Edit",
    "Finding",
    "MemberEntry",
    "MemberKind",
    "ResolvedPointer",
    "SourceLocation",
    "TypeKind",
]
