"""Translation between the legacy and current namespace roots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NamespaceMap:
    """Maps namespaces between a legacy root (e.g. ``Xamarin.Forms``) and its successor.

    Namespaces under neither root are unresolvable and map to ``None``.
    """

    legacy_root: str
    current_root: str

    def __post_init__(self) -> None:
        if not self.legacy_root or not self.current_root:
            raise ValueError("Namespace roots must be non-empty")
        if self.legacy_root.startswith(self.current_root) or self.current_root.startswith(
            self.legacy_root
        ):
            raise ValueError(
                f"Namespace roots {self.legacy_root!r} and {self.current_root!r} overlap"
            )

    def to_current(self, namespace: str) -> Optional[str]:
        return self._translate(namespace, source=self.legacy_root, target=self.current_root)

    def to_legacy(self, namespace: str) -> Optional[str]:
        return self._translate(namespace, source=self.current_root, target=self.legacy_root)

    @staticmethod
    def _translate(namespace: str, *, source: str, target: str) -> Optional[str]:
        if namespace.startswith(target):
            return namespace
        if not namespace.startswith(source):
            return None
        return target + namespace[len(source):]


__all__ = ["NamespaceMap"]
