"""Git integration for committing docport edits."""

from .publisher import Publisher

__all__ = ["Publisher"]
