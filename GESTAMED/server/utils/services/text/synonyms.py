from __future__ import annotations

from typing import Any

from GESTAMED.server.utils.services.text.normalization import coerce_text


# -----------------------------------------------------------------------------
def is_synonym_sequence(value: Any) -> bool:
    return value is None or isinstance(value, (list, tuple))


# -----------------------------------------------------------------------------
def extract_synonym_strings(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        collected: list[str] = []
        for entry in value:
            collected.extend(extract_synonym_strings(entry))
        return collected
    text = coerce_text(value)
    if text is None:
        return []
    return [text]


# -----------------------------------------------------------------------------
def parse_synonym_list(value: Any) -> list[str]:
    """Flatten a list of synonym names into an ordered list of unique names.

    Nested lists are flattened and every string is kept whole, so names that
    contain commas or slashes survive unchanged. Duplicates are detected
    case-insensitively and only the first spelling is kept.
    """
    if not is_synonym_sequence(value):
        raise TypeError(f"Synonyms must be a list of names, got {type(value).__name__}")
    synonyms: list[str] = []
    seen: set[str] = set()
    for text in extract_synonym_strings(value):
        marker = text.casefold()
        if marker in seen:
            continue
        seen.add(marker)
        synonyms.append(text)
    return synonyms


__all__ = [
    "extract_synonym_strings",
    "is_synonym_sequence",
    "parse_synonym_list",
]
