from __future__ import annotations

import time
from collections.abc import Callable
from functools import lru_cache
from typing import Any

from GESTAMED.server.schemas.compatibility import (
    AnalysisRequest,
    AnalysisResponse,
    ClassifiedReportPayload,
    DrugFindingPayload,
    DrugListingResponse,
    EmptyReportPayload,
    ReportBuckets,
)
from GESTAMED.server.utils.configurations import server_settings
from GESTAMED.server.utils.constants import DOCUMENT_ERROR_MESSAGE
from GESTAMED.server.utils.exceptions import DocumentParseError
from GESTAMED.server.utils.logger import configure_logger, logger
from GESTAMED.server.utils.services.clinical.compatibility import (
    ClassifiedReport,
    CompatibilityClassifier,
    DrugFinding,
    Report,
)
from GESTAMED.server.utils.services.clinical.dosage import DosageExtractor
from GESTAMED.server.utils.services.clinical.lexicon import (
    DrugLexicon,
    load_drug_lexicon,
)
from GESTAMED.server.utils.services.clinical.mentions import (
    MentionFinder,
    MergePolicy,
)
from GESTAMED.server.utils.services.text.normalization import normalize_text
from GESTAMED.server.utils.variables import env_variables

TextExtractor = Callable[[bytes], str]


# [SERIALIZATION]
###############################################################################
def serialize_finding(finding: DrugFinding) -> DrugFindingPayload:
    return DrugFindingPayload(
        name=finding.drug_key,
        original_name=finding.matched_name,
        dosage_info=list(finding.dosage_phrases),
        status=finding.status,
        notes=finding.notes,
    )


# -----------------------------------------------------------------------------
def serialize_report(report: Report) -> ClassifiedReportPayload | EmptyReportPayload:
    if not isinstance(report, ClassifiedReport):
        return EmptyReportPayload(title=report.title, details=report.details)
    return ClassifiedReportPayload(
        title=report.title,
        details=ReportBuckets(
            incompatible=[serialize_finding(item) for item in report.incompatible],
            warnings=[serialize_finding(item) for item in report.warnings],
            compatible=[serialize_finding(item) for item in report.compatible],
        ),
    )


# -----------------------------------------------------------------------------
def extract_document_text(content: bytes, extract_text: TextExtractor) -> str:
    try:
        text = extract_text(content)
    except DocumentParseError:
        raise
    except Exception as exc:
        raise DocumentParseError(f"Failed to extract document text: {exc}") from exc
    if not isinstance(text, str):
        raise DocumentParseError("Document text extractor did not return a string")
    return text


###############################################################################
class CompatibilityService:
    """Pipeline entry point used by request-handling collaborators.

    Text is normalized, scanned for lexicon drugs and classified for the
    requested trimester. Instances hold only the immutable lexicon plus
    stateless helpers, so one service can serve concurrent requests.
    """

    def __init__(
        self,
        lexicon: DrugLexicon | None = None,
        merge_policy: MergePolicy | str | None = None,
        strict_trimester: bool | None = None,
        dosage_extractor: DosageExtractor | None = None,
    ) -> None:
        self.lexicon = lexicon if lexicon is not None else load_drug_lexicon()
        self.mention_finder = MentionFinder(
            self.lexicon,
            dosage_extractor=dosage_extractor,
            merge_policy=merge_policy,
        )
        self.classifier = CompatibilityClassifier(
            self.lexicon, strict_trimester=strict_trimester
        )

    # -------------------------------------------------------------------------
    def analyze_text(self, text: str, trimester: Any) -> Report:
        resolved = self.classifier.resolve_trimester(trimester)
        mentions = self.mention_finder.find_mentions(text)
        return self.classifier.classify(mentions, resolved)

    # -------------------------------------------------------------------------
    def analyze(
        self, payload: AnalysisRequest
    ) -> ClassifiedReportPayload | EmptyReportPayload:
        return serialize_report(self.analyze_text(payload.text, payload.trimester))

    # -------------------------------------------------------------------------
    def serialize(self, report: Report) -> dict[str, Any]:
        return serialize_report(report).model_dump(by_alias=True)

    # -------------------------------------------------------------------------
    def analyze_document(
        self,
        content: bytes,
        trimester: Any,
        extract_text: TextExtractor,
        file_name: str | None = None,
    ) -> AnalysisResponse:
        resolved = self.classifier.resolve_trimester(trimester)
        start_time = time.perf_counter()
        try:
            text = extract_document_text(content, extract_text)
        except DocumentParseError:
            logger.exception("Unable to extract text from document %s", file_name)
            return AnalysisResponse(
                success=False, file_name=file_name, error=DOCUMENT_ERROR_MESSAGE
            )
        logger.info(
            "Extracted %d characters from document %s in %.4f seconds",
            len(text),
            file_name,
            time.perf_counter() - start_time,
        )
        try:
            report = self.analyze_text(text, resolved)
        except Exception:
            logger.exception("Unable to analyze text of document %s", file_name)
            return AnalysisResponse(
                success=False, file_name=file_name, error=DOCUMENT_ERROR_MESSAGE
            )
        return AnalysisResponse(
            success=True, report=serialize_report(report), file_name=file_name
        )

    # -------------------------------------------------------------------------
    def check_drug(self, name: str, trimester: Any) -> DrugFinding | None:
        resolved = self.classifier.resolve_trimester(trimester)
        drug_key = self.lexicon.resolve(name)
        if drug_key is None:
            logger.info("Drug '%s' is not part of the lexicon", name)
            return None
        _, finding = self.classifier.build_finding(
            drug_key, normalize_text(name), [], resolved
        )
        return finding

    # -------------------------------------------------------------------------
    def list_drugs(self) -> DrugListingResponse:
        return DrugListingResponse(
            drugs=list(self.lexicon.drug_keys()),
            synonyms=self.lexicon.synonym_table(),
        )


# [RUNTIME]
###############################################################################
def configure_runtime() -> None:
    level = env_variables.get("GESTAMED_LOG_LEVEL", server_settings.logging.level)
    configure_logger(level or "INFO", server_settings.logging.log_to_file)


# -----------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_compatibility_service() -> CompatibilityService:
    configure_runtime()
    return CompatibilityService()


__all__ = [
    "CompatibilityService",
    "TextExtractor",
    "configure_runtime",
    "extract_document_text",
    "get_compatibility_service",
    "serialize_finding",
    "serialize_report",
]
