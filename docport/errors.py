"""Exception hierarchy for docport."""

from __future__ import annotations


class DocportError(RuntimeError):
    """Base class for docport failures."""


class ConfigError(DocportError):
    """Raised when the configuration file cannot be parsed or is incomplete."""


class MalformedDeclarationError(DocportError):
    """Raised when the front end reports a member with no enclosing type.

    This means the declaration tree is inconsistent; the run stops rather than
    filing the member under a guessed artifact.
    """


class CommitError(DocportError):
    """Raised when a batch of edits could not be applied as one transaction."""


__all__ = ["CommitError", "ConfigError", "DocportError", "MalformedDeclarationError"]
