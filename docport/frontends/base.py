"""Base classes for declaration front ends."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from ..models import Declaration


class DeclarationSource(ABC):
    """Contract for front ends that turn source text into declarations."""

    @abstractmethod
    def supports(self, path: Path) -> bool:
        """Return True when this front end can parse ``path``."""

    @abstractmethod
    def declarations(self, path: Path, text: str) -> Iterable[Declaration]:
        """Yield declarations of ``text`` with offsets into ``text``."""
