"""Documentation store with copy-on-miss migration from the legacy store."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import List, Optional

from ..logging import get_logger
from ..models import ArtifactHandle
from ..namespaces import NamespaceMap

ARTIFACT_SUFFIX = ".xml"


def build_artifact_path(docs_root: Path, namespace: str, unit_name: str) -> Path:
    """Return ``docs_root/<namespace>/<unit_name>.xml``."""
    return docs_root / namespace / f"{unit_name}{ARTIFACT_SUFFIX}"


class DocumentationStore:
    """Resolves ``(namespace, unit name)`` pairs to artifacts in the current docs tree.

    Artifacts missing from the current tree are copied from the legacy tree the
    first time they are requested, and every occurrence of the legacy namespace
    root in the copy is rewritten to the current root. Probe, copy and rewrite
    all happen under one store-wide lock, so concurrent resolvers see either no
    artifact or a fully rewritten one.

    A ``read_only`` store never writes; misses that exist in the legacy tree
    resolve to the destination path with the legacy file as ``readable_path``.
    """

    def __init__(
        self,
        docs_root: Path,
        legacy_docs_root: Path,
        namespace_map: NamespaceMap,
        *,
        read_only: bool = False,
    ) -> None:
        self.docs_root = Path(docs_root)
        self.legacy_docs_root = Path(legacy_docs_root)
        self.namespace_map = namespace_map
        self.read_only = read_only
        self._lock = threading.Lock()
        self._created: List[Path] = []
        self.logger = get_logger("store")

    @property
    def created(self) -> List[Path]:
        """Artifacts copied into the current tree during this run."""
        with self._lock:
            return list(self._created)

    @property
    def copies(self) -> int:
        with self._lock:
            return len(self._created)

    def resolve(self, namespace: str, unit_name: str) -> Optional[ArtifactHandle]:
        current_ns = self.namespace_map.to_current(namespace)
        if current_ns is None:
            self.logger.debug("Namespace %s is outside the mapped roots", namespace)
            return None
        destination = build_artifact_path(self.docs_root, current_ns, unit_name)

        with self._lock:
            if destination.is_file():
                return ArtifactHandle(current_ns, unit_name, destination, destination)

            legacy_ns = self.namespace_map.to_legacy(namespace)
            if legacy_ns is None:
                return None
            source = build_artifact_path(self.legacy_docs_root, legacy_ns, unit_name)
            if not source.is_file():
                self.logger.debug("No documentation for %s.%s in either store", current_ns, unit_name)
                return None

            if self.read_only:
                return ArtifactHandle(current_ns, unit_name, destination, source)

            self._copy_and_rewrite(source, destination)
            self._created.append(destination)

        self.logger.debug("Copied %s to %s", source, destination)
        return ArtifactHandle(current_ns, unit_name, destination, destination)

    def relative_path(self, handle: ArtifactHandle, source_file: Path) -> str:
        """Return the artifact path relative to the directory holding ``source_file``."""
        relative = os.path.relpath(handle.path, start=Path(source_file).parent)
        return Path(relative).as_posix()

    def _copy_and_rewrite(self, source: Path, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        payload = source.read_bytes()
        # "x" mode refuses to replace an artifact that appeared behind our back.
        with destination.open("xb") as handle:
            handle.write(payload)

        with destination.open("r", encoding="utf-8", newline="") as handle:
            content = handle.read()
        rewritten = content.replace(
            self.namespace_map.legacy_root, self.namespace_map.current_root
        )
        if rewritten != content:
            with destination.open("w", encoding="utf-8", newline="") as handle:
                handle.write(rewritten)


__all__ = ["ARTIFACT_SUFFIX", "DocumentationStore", "build_artifact_path"]
