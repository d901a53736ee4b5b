"""Overload disambiguation against stored member signatures."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .signatures import UNSUPPORTED, normalize, normalize_signature
from .stores.artifacts import load_member_entries


@dataclass(frozen=True)
class OverloadMatch:
    """Outcome of matching a declaration against a member's stored overloads."""

    index: Optional[int]
    candidates: int

    @property
    def suffix(self) -> str:
        return f"[{self.index}]" if self.index is not None else ""

    @property
    def ambiguous(self) -> bool:
        """True when several overloads exist but none could be selected."""
        return self.candidates > 1 and self.index is None


class OverloadDisambiguator:
    """Selects the ``<Member>`` entry whose signature matches a declaration.

    Stored document order is authoritative: the first matching candidate wins
    and candidates are never re-sorted.
    """

    def disambiguate(
        self, parameters: Sequence[str], artifact_path: Path, member_name: str
    ) -> OverloadMatch:
        entries = load_member_entries(artifact_path, member_name)
        if len(entries) < 2:
            return OverloadMatch(index=None, candidates=len(entries))

        wanted = normalize(parameters)
        if wanted is UNSUPPORTED:
            return OverloadMatch(index=None, candidates=len(entries))

        for entry in entries:
            if entry.signature is None:
                continue
            if normalize_signature(entry.signature) == wanted:
                return OverloadMatch(index=entry.order, candidates=len(entries))
        return OverloadMatch(index=None, candidates=len(entries))


__all__ = ["OverloadDisambiguator", "OverloadMatch"]
