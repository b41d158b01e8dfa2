"""Accent- and case-insensitive text helpers used by search filters."""

import unicodedata
from typing import Optional


def normalize(text: Optional[str]) -> str:
    """
    Fold text for accent-insensitive comparison.

    Decomposes to NFD, drops nonspacing marks (category Mn), then lowercases.

    Example:
        >>> normalize("Érick")
        'erick'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return stripped.lower()


def contains_ignoring_accents(haystack: Optional[str], needle: Optional[str]) -> bool:
    """Return True if needle appears in haystack, ignoring accents and case."""
    return normalize(needle) in normalize(haystack)
