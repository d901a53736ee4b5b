"""Resolution of eligible declarations to documentation pointers."""

from __future__ import annotations

from typing import Optional

from .classifier import DeclarationClassifier, Eligible, Ineligible, TYPE_FINDING
from .logging import get_logger
from .models import Declaration, Finding, ResolvedPointer
from .overloads import OverloadDisambiguator, OverloadMatch
from .stores.artifacts import ArtifactFormatError
from .stores.doc_store import DocumentationStore

TYPE_LOCATOR = "Type[@FullName='{namespace}.{unit}']/Docs"
MEMBER_LOCATOR = "//Member[@MemberName='{member}']{suffix}/Docs"


def type_locator(namespace: str, unit_name: str) -> str:
    return TYPE_LOCATOR.format(namespace=namespace, unit=unit_name)


def member_locator(member_name: str, suffix: str = "") -> str:
    return MEMBER_LOCATOR.format(member=member_name, suffix=suffix)


class FindingResolver:
    """Classifies a declaration and, when eligible, points it at its artifact.

    Safe to call from several threads: classification and signature matching
    are pure, and the store serialises its own mutations.
    """

    def __init__(
        self,
        store: DocumentationStore,
        classifier: DeclarationClassifier | None = None,
        disambiguator: OverloadDisambiguator | None = None,
    ) -> None:
        self.store = store
        self.classifier = classifier or DeclarationClassifier()
        self.disambiguator = disambiguator or OverloadDisambiguator()
        self.logger = get_logger("resolver")

    def resolve(self, declaration: Declaration) -> Optional[Finding]:
        """Return a finding, or ``None`` when no reference should be added.

        Raises :class:`~docport.errors.MalformedDeclarationError` for members
        without an enclosing type.
        """
        verdict = self.classifier.classify(declaration)
        if isinstance(verdict, Ineligible):
            return None
        return self.resolve_eligible(declaration, verdict)

    def resolve_eligible(self, declaration: Declaration, verdict: Eligible) -> Optional[Finding]:
        handle = self.store.resolve(declaration.namespace, verdict.artifact_unit)
        if handle is None:
            self.logger.debug(
                "Was looking for docs for %s, didn't find anything", verdict.unit_name
            )
            return None

        relative = self.store.relative_path(handle, declaration.location.path)
        if verdict.finding_kind == TYPE_FINDING:
            pointer = ResolvedPointer(relative, type_locator(handle.namespace, verdict.unit_name))
            return Finding(declaration, pointer, verdict.finding_kind)

        try:
            match = self.disambiguator.disambiguate(
                declaration.parameters, handle.readable_path, verdict.unit_name
            )
        except ArtifactFormatError as exc:
            self.logger.warning("%s; referencing %s without an overload index", exc, verdict.unit_name)
            match = OverloadMatch(index=None, candidates=0)
        if match.ambiguous:
            self.logger.debug(
                "Could not pick one of %d overloads of %s.%s; leaving the index off",
                match.candidates,
                verdict.artifact_unit,
                verdict.unit_name,
            )
        pointer = ResolvedPointer(relative, member_locator(verdict.unit_name, match.suffix))
        return Finding(declaration, pointer, verdict.finding_kind, ambiguous=match.ambiguous)


__all__ = ["FindingResolver", "MEMBER_LOCATOR", "TYPE_LOCATOR", "member_locator", "type_locator"]
