from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from GESTAMED.server.utils.configurations import server_settings
from GESTAMED.server.utils.constants import (
    CLASSIFIED_REPORT_TITLE,
    EMPTY_REPORT_DETAILS,
    EMPTY_REPORT_TITLE,
    INCOMPATIBLE_MARKER,
    TRIMESTERS,
    WARNING_MARKER,
)
from GESTAMED.server.utils.exceptions import InvalidTrimesterError
from GESTAMED.server.utils.logger import logger
from GESTAMED.server.utils.services.clinical.lexicon import DrugLexicon
from GESTAMED.server.utils.services.clinical.mentions import Mention


###############################################################################
class CompatibilityLevel(str, Enum):
    INCOMPATIBLE = "incompatible"
    WARNING = "warning"
    COMPATIBLE = "compatible"


# -----------------------------------------------------------------------------
def classify_status(status: str) -> CompatibilityLevel:
    if INCOMPATIBLE_MARKER in status:
        return CompatibilityLevel.INCOMPATIBLE
    if WARNING_MARKER in status:
        return CompatibilityLevel.WARNING
    return CompatibilityLevel.COMPATIBLE


###############################################################################
@dataclass(slots=True)
class DrugFinding:
    drug_key: str
    matched_name: str
    dosage_phrases: list[str]
    status: str
    notes: str


###############################################################################
@dataclass(slots=True)
class EmptyReport:
    title: str = EMPTY_REPORT_TITLE
    details: str = EMPTY_REPORT_DETAILS

    # -------------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return True


###############################################################################
@dataclass(slots=True)
class ClassifiedReport:
    title: str = CLASSIFIED_REPORT_TITLE
    incompatible: list[DrugFinding] = field(default_factory=list)
    warnings: list[DrugFinding] = field(default_factory=list)
    compatible: list[DrugFinding] = field(default_factory=list)

    # -------------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return False

    # -------------------------------------------------------------------------
    def add(self, level: CompatibilityLevel, finding: DrugFinding) -> None:
        if level is CompatibilityLevel.INCOMPATIBLE:
            self.incompatible.append(finding)
        elif level is CompatibilityLevel.WARNING:
            self.warnings.append(finding)
        else:
            self.compatible.append(finding)


Report = EmptyReport | ClassifiedReport


###############################################################################
class CompatibilityClassifier:
    def __init__(
        self,
        lexicon: DrugLexicon,
        strict_trimester: bool | None = None,
        default_trimester: str | None = None,
    ) -> None:
        settings = server_settings.classification
        self.lexicon = lexicon
        self.strict_trimester = (
            settings.strict_trimester if strict_trimester is None else strict_trimester
        )
        self.default_trimester = default_trimester or settings.default_trimester
        if self.default_trimester not in TRIMESTERS:
            raise InvalidTrimesterError(self.default_trimester, TRIMESTERS)

    # -------------------------------------------------------------------------
    def resolve_trimester(self, value: Any) -> str:
        candidate = value.strip().lower() if isinstance(value, str) else None
        if candidate in TRIMESTERS:
            return candidate
        if self.strict_trimester:
            logger.warning("Rejected unrecognized trimester value: %r", value)
            raise InvalidTrimesterError(value, TRIMESTERS)
        logger.warning(
            "Unrecognized trimester value %r, falling back to '%s'",
            value,
            self.default_trimester,
        )
        return self.default_trimester

    # -------------------------------------------------------------------------
    def build_finding(
        self,
        drug_key: str,
        matched_name: str,
        dosage_phrases: list[str],
        trimester: str,
    ) -> tuple[CompatibilityLevel, DrugFinding]:
        record = self.lexicon.record(drug_key)
        status = record.status_for(trimester)
        finding = DrugFinding(
            drug_key=drug_key,
            matched_name=matched_name,
            dosage_phrases=list(dosage_phrases),
            status=status,
            notes=record.notes,
        )
        return classify_status(status), finding

    # -------------------------------------------------------------------------
    def classify(self, mentions: Mapping[str, Mention], trimester: Any) -> Report:
        resolved = self.resolve_trimester(trimester)
        if not mentions:
            return EmptyReport()

        report = ClassifiedReport()
        for drug_key, mention in mentions.items():
            level, finding = self.build_finding(
                drug_key, mention.matched_name, mention.dosage_phrases, resolved
            )
            report.add(level, finding)

        logger.info(
            "Classified %d drugs for %s trimester: %d incompatible, %d warnings, %d compatible",
            len(mentions),
            resolved,
            len(report.incompatible),
            len(report.warnings),
            len(report.compatible),
        )
        return report


__all__ = [
    "ClassifiedReport",
    "CompatibilityClassifier",
    "CompatibilityLevel",
    "DrugFinding",
    "EmptyReport",
    "Report",
    "classify_status",
]
