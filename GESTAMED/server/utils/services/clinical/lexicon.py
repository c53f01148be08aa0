from __future__ import annotations

import json
import os
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from GESTAMED.server.utils.configurations import server_settings
from GESTAMED.server.utils.constants import TRIMESTERS
from GESTAMED.server.utils.exceptions import LexiconError, NotFoundError
from GESTAMED.server.utils.logger import logger
from GESTAMED.server.utils.services.text.normalization import (
    coerce_text,
    normalize_text,
)
from GESTAMED.server.utils.services.text.synonyms import parse_synonym_list


###############################################################################
@dataclass(frozen=True, slots=True)
class DrugRecord:
    key: str
    status_by_trimester: Mapping[str, str]
    notes: str
    synonyms: tuple[str, ...]

    # -------------------------------------------------------------------------
    @property
    def names(self) -> tuple[str, ...]:
        return (self.key, *self.synonyms)

    # -------------------------------------------------------------------------
    def status_for(self, trimester: str) -> str:
        return self.status_by_trimester[trimester]


###############################################################################
class DrugLexicon:
    """Read-only table of drugs, trimester statuses, notes and synonyms.

    Records keep the order in which they were supplied; that order drives
    mention detection and therefore the order of findings in each report
    bucket. Every record is validated on construction and the instance
    exposes no mutation API.
    """

    def __init__(self, records: Iterable[DrugRecord]) -> None:
        table: dict[str, DrugRecord] = {}
        for record in records:
            validate_record(record)
            if record.key in table:
                raise LexiconError(f"Duplicate drug key in lexicon: '{record.key}'")
            table[record.key] = record
        self._records = MappingProxyType(table)
        self._name_index = self._build_name_index(table)

    # -------------------------------------------------------------------------
    @staticmethod
    def _build_name_index(table: Mapping[str, DrugRecord]) -> dict[str, str]:
        index: dict[str, str] = {}
        for key, record in table.items():
            for name in record.names:
                normalized = normalize_text(name)
                if not normalized:
                    continue
                owner = index.setdefault(normalized, key)
                if owner != key:
                    logger.warning(
                        "Name '%s' is shared by '%s' and '%s'; lookups resolve to '%s'",
                        name,
                        owner,
                        key,
                        owner,
                    )
        return index

    # -------------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._records)

    # -------------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return key in self._records

    # -------------------------------------------------------------------------
    def __iter__(self) -> Iterator[DrugRecord]:
        return iter(self._records.values())

    # -------------------------------------------------------------------------
    def drug_keys(self) -> tuple[str, ...]:
        return tuple(self._records)

    # -------------------------------------------------------------------------
    def all_drug_keys(self) -> frozenset[str]:
        return frozenset(self._records)

    # -------------------------------------------------------------------------
    def record(self, key: str) -> DrugRecord:
        try:
            return self._records[key]
        except KeyError:
            raise NotFoundError(key) from None

    # -------------------------------------------------------------------------
    def synonyms_of(self, key: str) -> tuple[str, ...]:
        record = self._records.get(key)
        return record.synonyms if record is not None else ()

    # -------------------------------------------------------------------------
    def resolve(self, name: str) -> str | None:
        normalized = normalize_text(name or "")
        if not normalized:
            return None
        return self._name_index.get(normalized)

    # -------------------------------------------------------------------------
    def synonym_table(self) -> dict[str, list[str]]:
        return {key: list(record.synonyms) for key, record in self._records.items()}

    # -------------------------------------------------------------------------
    def synonym_count(self) -> int:
        return sum(len(record.synonyms) for record in self._records.values())

    # -------------------------------------------------------------------------
    @classmethod
    def from_payload(cls, payload: Any) -> DrugLexicon:
        return cls(parse_lexicon_payload(payload))

    # -------------------------------------------------------------------------
    @classmethod
    def from_file(cls, path: str) -> DrugLexicon:
        if not os.path.exists(path):
            raise LexiconError(f"Drug lexicon file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise LexiconError(f"Unable to read drug lexicon from {path}") from exc
        lexicon = cls.from_payload(payload)
        logger.info(
            "Loaded drug lexicon with %d drugs and %d synonyms from %s",
            len(lexicon),
            lexicon.synonym_count(),
            path,
        )
        return lexicon


# [VALIDATION]
###############################################################################
def validate_record(record: DrugRecord) -> None:
    if not record.key or record.key != record.key.strip().lower():
        raise LexiconError(
            f"Drug key must be a non-empty lowercase identifier: '{record.key}'"
        )
    missing = [
        trimester
        for trimester in TRIMESTERS
        if not coerce_text(record.status_by_trimester.get(trimester))
    ]
    if missing:
        raise LexiconError(
            f"Drug '{record.key}' is missing status for trimester(s): {', '.join(missing)}"
        )
    for synonym in record.synonyms:
        if not isinstance(synonym, str) or not synonym.strip():
            raise LexiconError(f"Drug '{record.key}' has an empty or invalid synonym")


# [PAYLOAD PARSING]
###############################################################################
def build_record(
    key: Any, entry: Mapping[str, Any], extra_synonyms: Any = None
) -> DrugRecord:
    key_text = coerce_text(key)
    if key_text is None:
        raise LexiconError("Drug entry without a key")
    status_payload = entry.get("status")
    if not isinstance(status_payload, Mapping):
        # flat layout: {"first": ..., "second": ..., "third": ..., "notes": ...}
        status_payload = entry
    status: dict[str, str] = {}
    for trimester in TRIMESTERS:
        label = coerce_text(status_payload.get(trimester))
        if label is not None:
            status[trimester] = label
    try:
        synonyms = parse_synonym_list(entry.get("synonyms"))
        if extra_synonyms is not None:
            synonyms = parse_synonym_list([*synonyms, *parse_synonym_list(extra_synonyms)])
    except TypeError as exc:
        raise LexiconError(f"Drug '{key_text}' has invalid synonyms: {exc}") from exc
    return DrugRecord(
        key=key_text.lower(),
        status_by_trimester=MappingProxyType(status),
        notes=coerce_text(entry.get("notes")) or "",
        synonyms=tuple(synonyms),
    )


# -----------------------------------------------------------------------------
def parse_lexicon_payload(payload: Any) -> list[DrugRecord]:
    """Build drug records from either supported lexicon layout.

    - list layout: ``{"drugs": [{"key", "status", "notes", "synonyms"}, ...]}``
    - table layout: ``{"drugs": {key: {"first", "second", "third", "notes"}},
      "synonyms": {key: [...]}}``

    """
    if not isinstance(payload, Mapping):
        raise LexiconError("Drug lexicon payload must be a JSON object")
    drugs = payload.get("drugs")
    synonym_table = payload.get("synonyms")
    if not isinstance(synonym_table, Mapping):
        synonym_table = {}
    records: list[DrugRecord] = []
    if isinstance(drugs, list):
        for entry in drugs:
            if not isinstance(entry, Mapping):
                raise LexiconError("Drug lexicon entries must be JSON objects")
            key = entry.get("key")
            records.append(build_record(key, entry, synonym_table.get(key)))
    elif isinstance(drugs, Mapping):
        for key, entry in drugs.items():
            if not isinstance(entry, Mapping):
                raise LexiconError(f"Drug lexicon entry for '{key}' must be a JSON object")
            records.append(build_record(key, entry, synonym_table.get(key)))
    else:
        raise LexiconError("Drug lexicon payload has no 'drugs' section")
    if not records:
        raise LexiconError("Drug lexicon is empty")
    return records


# -----------------------------------------------------------------------------
def load_drug_lexicon(path: str | None = None) -> DrugLexicon:
    return DrugLexicon.from_file(path or server_settings.lexicon.path)


__all__ = [
    "DrugLexicon",
    "DrugRecord",
    "build_record",
    "load_drug_lexicon",
    "parse_lexicon_payload",
    "validate_record",
]
