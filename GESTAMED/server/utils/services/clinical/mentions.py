from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum

from GESTAMED.server.utils.configurations import server_settings
from GESTAMED.server.utils.logger import logger
from GESTAMED.server.utils.services.clinical.dosage import DosageExtractor
from GESTAMED.server.utils.services.clinical.lexicon import DrugLexicon
from GESTAMED.server.utils.services.text.normalization import normalize_text


###############################################################################
class MergePolicy(str, Enum):
    """How repeated matches of the same drug within one document combine.

    - ``overwrite``: the last matching name in lexicon order wins (canonical
      key first, then synonyms in their listed order).
    - ``keep_first``: the first matching name wins, later ones are ignored.
    - ``union_dosages``: the first matching name is reported and dosage
      phrases of every matching name are concatenated without duplicates.

    """

    OVERWRITE = "overwrite"
    KEEP_FIRST = "keep_first"
    UNION_DOSAGES = "union_dosages"


###############################################################################
@dataclass(slots=True)
class Mention:
    drug_key: str
    matched_name: str
    dosage_phrases: list[str] = field(default_factory=list)


###############################################################################
class MentionFinder:
    def __init__(
        self,
        lexicon: DrugLexicon,
        dosage_extractor: DosageExtractor | None = None,
        merge_policy: MergePolicy | str | None = None,
    ) -> None:
        self.lexicon = lexicon
        self.dosage_extractor = dosage_extractor or DosageExtractor()
        self.merge_policy = MergePolicy(
            merge_policy or server_settings.matching.merge_policy
        )

    # -------------------------------------------------------------------------
    def merge(self, current: Mention | None, candidate: Mention) -> Mention:
        if current is None or self.merge_policy is MergePolicy.OVERWRITE:
            return candidate
        if self.merge_policy is MergePolicy.KEEP_FIRST:
            return current
        merged = list(current.dosage_phrases)
        for phrase in candidate.dosage_phrases:
            if phrase not in merged:
                merged.append(phrase)
        return Mention(
            drug_key=current.drug_key,
            matched_name=current.matched_name,
            dosage_phrases=merged,
        )

    # -------------------------------------------------------------------------
    def find_mentions(self, document_text: str) -> dict[str, Mention]:
        start_time = time.perf_counter()
        normalized_document = normalize_text(document_text or "")
        mentions: dict[str, Mention] = {}
        if not normalized_document:
            return mentions

        for record in self.lexicon:
            for name in record.names:
                normalized_name = normalize_text(name)
                if not normalized_name or normalized_name not in normalized_document:
                    continue
                candidate = Mention(
                    drug_key=record.key,
                    matched_name=name,
                    dosage_phrases=self.dosage_extractor.extract_from_normalized(
                        normalized_document, name
                    ),
                )
                mentions[record.key] = self.merge(mentions.get(record.key), candidate)

        elapsed = time.perf_counter() - start_time
        logger.info(
            "Detected %d drug mentions in %d characters (%.4f s)",
            len(mentions),
            len(normalized_document),
            elapsed,
        )
        return mentions


__all__ = ["Mention", "MentionFinder", "MergePolicy"]
