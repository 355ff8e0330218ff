"""String helpers for presenting analysis values."""

from __future__ import annotations


def capitalize(text: str) -> str:
    """Return ``text`` with its first character upper-cased and the rest lower-cased."""
    if not text:
        return text
    return text[0].upper() + text[1:].lower()
