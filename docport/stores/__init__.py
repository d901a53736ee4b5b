"""Documentation artifact stores."""

from .artifacts import ArtifactFormatError, load_member_entries
from .doc_store import DocumentationStore, build_artifact_path

__all__ = [
    "ArtifactFormatError",
    "DocumentationStore",
    "build_artifact_path",
    "load_member_entries",
]
