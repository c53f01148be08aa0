from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache

from GESTAMED.server.utils.configurations import server_settings
from GESTAMED.server.utils.patterns import (
    DOSAGE_PATTERN_TEMPLATE,
    build_alternation,
    escape_phrase,
)
from GESTAMED.server.utils.services.text.normalization import normalize_text


# -----------------------------------------------------------------------------
@lru_cache(maxsize=1024)
def compile_dosage_pattern(
    name: str, units: tuple[str, ...], frequencies: tuple[str, ...]
) -> re.Pattern[str] | None:
    if not name or not units:
        return None
    pattern = DOSAGE_PATTERN_TEMPLATE.format(
        name=escape_phrase(name),
        units=build_alternation(units),
        # an empty alternation would match everywhere
        frequencies=build_alternation(frequencies) or r"(?!)",
    )
    return re.compile(pattern, re.IGNORECASE)


###############################################################################
class DosageExtractor:
    """Best-effort lexical scanner for dosage phrases next to a drug name.

    A phrase starts at the drug name, reaches the first quantity followed by a
    unit in the same sentence and may carry trailing frequency terms
    (``2 veces al dia``). Matching runs on normalized text, so returned
    phrases are lower-case and accent-free. Malformed input never raises, it
    simply yields fewer phrases.
    """

    def __init__(
        self,
        units: Iterable[str] | None = None,
        frequency_terms: Iterable[str] | None = None,
    ) -> None:
        settings = server_settings.matching
        self.units = self._normalize_terms(
            settings.dosage_units if units is None else units
        )
        self.frequency_terms = self._normalize_terms(
            settings.frequency_terms if frequency_terms is None else frequency_terms
        )

    # -------------------------------------------------------------------------
    @staticmethod
    def _normalize_terms(terms: Iterable[str]) -> tuple[str, ...]:
        normalized: list[str] = []
        for term in terms:
            text = normalize_text(term) if isinstance(term, str) else ""
            if text and text not in normalized:
                normalized.append(text)
        return tuple(normalized)

    # -------------------------------------------------------------------------
    def extract_from_normalized(self, normalized_text: str, name: str) -> list[str]:
        pattern = compile_dosage_pattern(
            normalize_text(name), self.units, self.frequency_terms
        )
        if pattern is None or not normalized_text:
            return []
        return [match.group(0) for match in pattern.finditer(normalized_text)]

    # -------------------------------------------------------------------------
    def extract(self, raw_text: str, name: str) -> list[str]:
        return self.extract_from_normalized(normalize_text(raw_text or ""), name)


# -----------------------------------------------------------------------------
def extract_dosage(raw_text: str, name: str) -> list[str]:
    return DosageExtractor().extract(raw_text, name)


__all__ = ["DosageExtractor", "compile_dosage_pattern", "extract_dosage"]
