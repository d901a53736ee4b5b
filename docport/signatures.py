"""Canonical parameter signatures for overload matching.

Declarations report parameter *types* straight from source, while artifacts
store a full C# member signature (``public void Add (Microsoft.Maui.Controls.View view,
int column);``). Both are reduced to ``"(View, int)"`` so they compare by equality.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Union


class _Unsupported:
    """Sentinel for signatures that cannot be normalized (generic parameters)."""

    _instance: "_Unsupported | None" = None

    def __new__(cls) -> "_Unsupported":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSUPPORTED"

    def __bool__(self) -> bool:
        return False


UNSUPPORTED = _Unsupported()

NormalizedSignature = Union[str, _Unsupported]

_PARAMETER_MODIFIERS = {"ref", "out", "in", "params", "this", "scoped", "readonly"}
# Attribute lists only lead a parameter; brackets later on are array ranks.
_ATTRIBUTE_PATTERN = re.compile(r"^\s*(?:\[[^\]]*\]\s*)+")
_WHITESPACE = re.compile(r"\s+")


def normalize(parameters: Iterable[str]) -> NormalizedSignature:
    """Return ``"(T1, T2, ...)"`` for a sequence of parameter type names."""
    simple: List[str] = []
    for raw in parameters:
        if "<" in raw:
            return UNSUPPORTED
        simple.append(_simplify_type(raw))
    return f"({', '.join(simple)})"


def parameters_from_signature(signature: str) -> List[str]:
    """Extract the parameter types from a stored C# member signature.

    Parameter names and default values are dropped; a signature without a
    parameter list (properties, fields) yields an empty list.
    """
    start = signature.find("(")
    if start == -1:
        return []
    end = signature.rfind(")")
    if end < start:
        return []
    inner = signature[start + 1 : end].strip()
    if not inner:
        return []
    types: List[str] = []
    for part in _split_parameters(inner):
        part = part.split("=", 1)[0].strip()
        part = _ATTRIBUTE_PATTERN.sub("", part)
        tokens = part.split()
        if len(tokens) > 1:
            # the trailing token is the parameter name
            tokens = tokens[:-1]
        types.append(" ".join(tokens))
    return types


def normalize_signature(signature: str) -> NormalizedSignature:
    """Normalize a stored member signature string."""
    return normalize(parameters_from_signature(signature))


def _split_parameters(inner: str) -> List[str]:
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in inner:
        if char in "<[(":
            depth += 1
        elif char in ">])":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    if current:
        parts.append("".join(current).strip())
    return [part for part in parts if part]


def _simplify_type(raw: str) -> str:
    text = _ATTRIBUTE_PATTERN.sub("", raw).replace("?", "")
    tokens = [token for token in _WHITESPACE.split(text.strip()) if token]
    tokens = [token for token in tokens if token not in _PARAMETER_MODIFIERS]
    simple = []
    for token in tokens:
        dot = token.rfind(".")
        simple.append(token[dot + 1 :] if dot > 0 else token)
    return " ".join(simple)


__all__ = [
    "NormalizedSignature",
    "UNSUPPORTED",
    "normalize",
    "normalize_signature",
    "parameters_from_signature",
]
