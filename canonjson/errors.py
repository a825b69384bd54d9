"""
Canonicalization errors
"""

from typing import Any


class CanonicalizationError(ValueError):
    """Base class: the input cannot be represented in canonical JSON."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class InvalidNumber(CanonicalizationError):
    """NaN, Infinity, or an integer outside the double range."""


class InvalidString(CanonicalizationError):
    """String (value or key) containing an unpaired surrogate."""


class InvalidType(CanonicalizationError, TypeError):
    """Value with no JSON shape at top level, or a non-string object key."""
