"""Eligibility rules for declarations that need an include reference."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .errors import MalformedDeclarationError
from .models import Declaration, MemberKind, TypeKind

CONSTRUCTOR_UNIT_NAME = ".ctor"

TYPE_FINDING = "type"
MEMBER_FINDING = "member"

# Interfaces can hold documented members but are not documented at type level.
_TYPE_LEVEL_KINDS = {TypeKind.CLASS, TypeKind.STRUCT, TypeKind.ENUM}


@dataclass(frozen=True)
class EnclosingType:
    declaration: Declaration

    @property
    def name(self) -> str:
        return self.declaration.name


@dataclass(frozen=True)
class NoEnclosing:
    pass


EnclosingResult = Union[EnclosingType, NoEnclosing]


@dataclass(frozen=True)
class Eligible:
    """A declaration that should receive a reference.

    ``artifact_unit`` names the artifact to look up: the type itself for type
    declarations, the enclosing type for members.
    """

    unit_name: str
    artifact_unit: str
    finding_kind: str


@dataclass(frozen=True)
class Ineligible:
    reason: str


Classification = Union[Eligible, Ineligible]


def find_enclosing(declaration: Declaration) -> EnclosingResult:
    """Return the nearest enclosing class, struct, interface or enum."""
    parent: Optional[Declaration] = declaration.container
    while parent is not None:
        if parent.type_kind is not None:
            return EnclosingType(parent)
        parent = parent.container
    return NoEnclosing()


class DeclarationClassifier:
    """Decides whether a declaration is public, undocumented and supported."""

    def classify(self, declaration: Declaration) -> Classification:
        if declaration.has_inline_doc:
            return Ineligible("has inline documentation")

        if declaration.is_type:
            if declaration.type_kind not in _TYPE_LEVEL_KINDS:
                return Ineligible(f"type kind {declaration.type_kind} is not documented at type level")
            if not declaration.is_public:
                return Ineligible("not public")
            return Eligible(
                unit_name=declaration.name,
                artifact_unit=declaration.name,
                finding_kind=TYPE_FINDING,
            )

        enclosing = find_enclosing(declaration)
        if isinstance(enclosing, NoEnclosing):
            raise MalformedDeclarationError(
                f"Member {declaration.name!r} at {declaration.location.path}:"
                f"{declaration.location.offset} has no enclosing type declaration"
            )

        if not self._is_public_member(declaration):
            return Ineligible("not public")

        return Eligible(
            unit_name=self.unit_name(declaration),
            artifact_unit=enclosing.name,
            finding_kind=MEMBER_FINDING,
        )

    @staticmethod
    def unit_name(declaration: Declaration) -> str:
        if declaration.member_kind is MemberKind.CONSTRUCTOR:
            return CONSTRUCTOR_UNIT_NAME
        return declaration.name

    @staticmethod
    def _is_public_member(declaration: Declaration) -> bool:
        # Enum members never carry an accessibility keyword; they follow their enum.
        if declaration.member_kind is MemberKind.ENUM_MEMBER:
            parent = declaration.container
            return (
                parent is not None
                and parent.type_kind is TypeKind.ENUM
                and parent.is_public
            )
        return declaration.is_public


__all__ = [
    "CONSTRUCTOR_UNIT_NAME",
    "Classification",
    "DeclarationClassifier",
    "Eligible",
    "EnclosingResult",
    "EnclosingType",
    "Ineligible",
    "MEMBER_FINDING",
    "NoEnclosing",
    "TYPE_FINDING",
    "find_enclosing",
]
