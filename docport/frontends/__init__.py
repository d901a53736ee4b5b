"""Declaration front ends."""

from .base import DeclarationSource
from .csharp import CSharpDeclarationSource

__all__ = ["CSharpDeclarationSource", "DeclarationSource"]
