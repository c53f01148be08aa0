from __future__ import annotations

import re

# -----------------------------------------------------------------------------
# Dosage phrase building blocks (applied to normalized text)
# -----------------------------------------------------------------------------
# Anything up to the quantity without crossing a sentence boundary
SAME_SENTENCE_GAP = r"[^.]*?"
# Integer or decimal quantity ("50", "2.5", "2,5")
QUANTITY = r"\d+(?:[.,]\d+)?"
# Optional count preceding a frequency term ("2 veces")
FREQUENCY_COUNT = r"(?:\d+\s*)?"

DOSAGE_PATTERN_TEMPLATE = (
    r"{name}"
    + SAME_SENTENCE_GAP
    + QUANTITY
    + r"\s*(?:{units})\b"
    + r"(?:\s*"
    + FREQUENCY_COUNT
    + r"(?:{frequencies})\b)*"
)

WHITESPACE_RE = re.compile(r"\s+")


# -----------------------------------------------------------------------------
def escape_phrase(phrase: str) -> str:
    """Escape a literal phrase, letting any run of whitespace match."""
    tokens = [re.escape(token) for token in WHITESPACE_RE.split(phrase.strip()) if token]
    return r"\s+".join(tokens)


# -----------------------------------------------------------------------------
def build_alternation(phrases: tuple[str, ...]) -> str:
    # longest first so that "mcg" is preferred over "mg"-like prefixes
    ordered = sorted({phrase for phrase in phrases if phrase}, key=len, reverse=True)
    return "|".join(escape_phrase(phrase) for phrase in ordered)
