"""Source file snapshots and transactional edit application."""

from __future__ import annotations

import os
import shutil
import tempfile
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from .errors import CommitError
from .logging import get_logger
from .models import Edit


def _read(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


class SourceWorkspace:
    """Holds the text of every loaded source file and applies edit batches atomically.

    Edits are expressed against the text as it was when the file was loaded.
    Batches committed earlier in the run shift later offsets; the workspace
    records its own insertions and translates offsets accordingly.
    """

    def __init__(self) -> None:
        self._loaded: Dict[Path, str] = {}
        self._current: Dict[Path, str] = {}
        self._insertions: Dict[Path, List[Tuple[int, int]]] = defaultdict(list)
        self._modified: Set[Path] = set()
        self.logger = get_logger("workspace")

    def load(self, path: Path) -> str:
        resolved = Path(path).resolve()
        text = self._current.get(resolved)
        if text is None:
            text = _read(resolved)
            self._loaded[resolved] = text
            self._current[resolved] = text
        return text

    def original(self, path: Path) -> str:
        """Return the text of ``path`` as it was when first loaded."""
        resolved = Path(path).resolve()
        if resolved not in self._loaded:
            self.load(resolved)
        return self._loaded[resolved]

    def text(self, path: Path) -> str:
        """Return the current text of a loaded file."""
        try:
            return self._current[Path(path).resolve()]
        except KeyError:
            raise KeyError(f"{path} has not been loaded into the workspace") from None

    @property
    def paths(self) -> List[Path]:
        return sorted(self._current)

    @property
    def modified(self) -> List[Path]:
        return sorted(self._modified)

    def translate(self, path: Path, offset: int) -> int:
        """Map an offset in the loaded text to the same position in the current text.

        Insertions made at exactly ``offset`` are counted: the result is where the
        character originally at ``offset`` now sits, after any text inserted in
        front of it. New text placed there lands after earlier insertions.
        """
        insertions = self._insertions.get(Path(path).resolve(), ())
        shift = sum(length for start, length in insertions if start <= offset)
        return offset + shift

    def apply(self, edits: Iterable[Edit]) -> int:
        """Apply ``edits`` as one transaction and return how many were applied.

        Either every affected file is rewritten or none is; a failure raises
        :class:`~docport.errors.CommitError` and leaves files as they were.
        """
        grouped: Dict[Path, List[Edit]] = defaultdict(list)
        for edit in edits:
            grouped[Path(edit.path).resolve()].append(edit)
        if not grouped:
            return 0

        staged: Dict[Path, str] = {}
        for path, file_edits in grouped.items():
            staged[path] = self._render(path, file_edits)

        self._write_all(staged)

        for path, file_edits in grouped.items():
            self._current[path] = staged[path]
            self._insertions[path].extend((edit.offset, len(edit.text)) for edit in file_edits)
            self._modified.add(path)
        return sum(len(file_edits) for file_edits in grouped.values())

    def _render(self, path: Path, edits: Sequence[Edit]) -> str:
        if path not in self._current:
            raise CommitError(f"{path} has not been loaded into the workspace")
        expected = self._current[path]
        try:
            on_disk = _read(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise CommitError(f"Could not re-read {path}: {exc}") from exc
        if on_disk != expected:
            raise CommitError(f"{path} changed on disk since it was loaded")

        offsets = [edit.offset for edit in edits]
        if len(set(offsets)) != len(offsets):
            raise CommitError(f"Overlapping edits for {path}")

        text = expected
        for edit in sorted(edits, key=lambda item: item.offset, reverse=True):
            position = self.translate(path, edit.offset)
            if not 0 <= position <= len(text):
                raise CommitError(f"Edit offset {edit.offset} is outside {path}")
            text = text[:position] + edit.text + text[position:]
        return text

    def _write_all(self, staged: Dict[Path, str]) -> None:
        temporaries: Dict[Path, Path] = {}
        replaced: List[Path] = []
        try:
            for path, content in staged.items():
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    newline="",
                    delete=False,
                    dir=str(path.parent),
                    prefix=f".{path.name}.",
                    suffix=".docport",
                ) as handle:
                    temporaries[path] = Path(handle.name)
                    handle.write(content)
                shutil.copymode(path, temporaries[path])
            for path, temporary in temporaries.items():
                os.replace(temporary, path)
                replaced.append(path)
        except OSError as exc:
            self._roll_back(replaced)
            raise CommitError(f"Failed to write edits: {exc}") from exc
        finally:
            for path, temporary in temporaries.items():
                if path not in replaced and temporary.exists():
                    temporary.unlink()

    def _roll_back(self, replaced: Sequence[Path]) -> None:
        for path in replaced:
            try:
                with path.open("w", encoding="utf-8", newline="") as handle:
                    handle.write(self._current[path])
            except OSError as exc:
                self.logger.error("Could not restore %s after a failed commit: %s", path, exc)


__all__ = ["SourceWorkspace"]
