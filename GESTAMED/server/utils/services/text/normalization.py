from __future__ import annotations

import unicodedata
from typing import Any

import pandas as pd


# -----------------------------------------------------------------------------
def coerce_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        return text or None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    text = str(value).strip()
    return text or None


# -----------------------------------------------------------------------------
def strip_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


# -----------------------------------------------------------------------------
def normalize_text(value: str) -> str:
    """Lower-case, decompose (NFD) and drop combining marks, then trim."""
    if not value:
        return ""
    return strip_diacritics(value.lower()).strip()


__all__ = [
    "coerce_text",
    "normalize_text",
    "strip_diacritics",
]
