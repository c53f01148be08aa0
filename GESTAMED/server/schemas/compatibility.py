from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


###############################################################################
class AnalysisRequest(BaseModel):
    """
    Input schema for a plain-text compatibility analysis.
    - Text is kept verbatim; only surrounding whitespace is trimmed.
    - Trimester is trimmed and lower-cased. Missing or unknown values are
      rejected or defaulted downstream, depending on the trimester policy.

    """

    text: str = Field(
        ...,
        description="Plain text extracted from the clinical document.",
    )
    trimester: str | None = Field(
        None,
        description="Pregnancy trimester identifier: first, second or third.",
        examples=["first", "second", "third"],
    )

    @field_validator("text", mode="before")
    @classmethod
    def coerce_text(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("trimester", mode="before")
    @classmethod
    def normalize_trimester(cls, value: object) -> str | None:
        if value is None:
            return None
        return str(value).strip().lower()


###############################################################################
class DrugFindingPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Canonical lexicon key of the drug.")
    original_name: str = Field(
        ...,
        alias="originalName",
        description="Lexicon name (canonical or synonym) found in the document.",
    )
    dosage_info: list[str] = Field(
        default_factory=list,
        alias="dosageInfo",
        description="Dosage phrases found next to the drug name.",
    )
    status: str = Field(..., description="Status label for the requested trimester.")
    notes: str = Field("", description="Clinical guidance for the drug.")


###############################################################################
class ReportBuckets(BaseModel):
    incompatible: list[DrugFindingPayload] = Field(default_factory=list)
    warnings: list[DrugFindingPayload] = Field(default_factory=list)
    compatible: list[DrugFindingPayload] = Field(default_factory=list)


###############################################################################
class EmptyReportPayload(BaseModel):
    title: str
    details: str


###############################################################################
class ClassifiedReportPayload(BaseModel):
    title: str
    details: ReportBuckets


###############################################################################
class AnalysisResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    report: ClassifiedReportPayload | EmptyReportPayload | None = None
    file_name: str | None = Field(None, alias="fileName")
    error: str | None = None


###############################################################################
class DrugListingResponse(BaseModel):
    drugs: list[str] = Field(..., description="Canonical drug keys in lexicon order.")
    synonyms: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Synonym names for each drug key.",
    )

    @field_validator("drugs")
    @classmethod
    def reject_duplicates(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("Drug listing must not contain duplicate keys.")
        return value


__all__ = [
    "AnalysisRequest",
    "AnalysisResponse",
    "ClassifiedReportPayload",
    "DrugFindingPayload",
    "DrugListingResponse",
    "EmptyReportPayload",
    "ReportBuckets",
]
