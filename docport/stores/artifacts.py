"""Read-only access to mdoc XML documentation artifacts."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional

from ..models import MemberEntry

_SIGNATURE_LANGUAGE = "C#"


class ArtifactFormatError(ValueError):
    """Raised when an artifact is not well-formed XML."""


def load_member_entries(path: Path, member_name: str) -> List[MemberEntry]:
    """Return the ``<Member>`` entries named ``member_name`` in document order.

    Entries without a C# ``MemberSignature`` keep their position in the
    overload list but carry ``signature=None`` and never match a declaration.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise ArtifactFormatError(f"Malformed documentation artifact {path}: {exc}") from exc

    entries: List[MemberEntry] = []
    for member in root.iter("Member"):
        if member.get("MemberName") != member_name:
            continue
        signature: Optional[str] = None
        for element in member.findall("MemberSignature"):
            if element.get("Language") == _SIGNATURE_LANGUAGE:
                signature = element.get("Value")
                break
        entries.append(MemberEntry(name=member_name, signature=signature, order=len(entries)))
    return entries


__all__ = ["ArtifactFormatError", "load_member_entries"]
