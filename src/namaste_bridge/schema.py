"""Data models for namaste-bridge."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MappingStatus = Literal["mapped", "partial", "unmapped"]


class NormalizedRow(BaseModel):
    """One data line of an uploaded file, ready for mapping."""

    source_code: str = Field(min_length=1)
    source_term: str = Field(min_length=1)
    extra_fields: dict[str, str] = Field(default_factory=dict)


class TargetMapping(BaseModel):
    """Targets in the two ICD-11 systems for a single source code."""

    secondary_code: str | None = None
    secondary_term: str | None = None
    tertiary_code: str | None = None
    tertiary_term: str | None = None

    @property
    def has_secondary(self) -> bool:
        return bool(self.secondary_code)

    @property
    def has_tertiary(self) -> bool:
        return bool(self.tertiary_code)

    @property
    def target_count(self) -> int:
        return int(self.has_secondary) + int(self.has_tertiary)


class MappingResult(BaseModel):
    """Classified mapping of a NAMASTE code with its confidence score."""

    model_config = ConfigDict(frozen=True)

    source_code: str
    source_term: str
    secondary_code: str | None = None
    secondary_term: str | None = None
    tertiary_code: str | None = None
    tertiary_term: str | None = None
    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)
    mapping_status: MappingStatus = "unmapped"

    def to_storage_row(self, *, file_id: str, user_id: str) -> dict[str, object]:
        """Flatten into the column layout used by the processed codes table."""
        return {
            "file_id": file_id,
            "user_id": user_id,
            "namaste_code": self.source_code,
            "namaste_term": self.source_term,
            "icd11_tm2_code": self.secondary_code or None,
            "icd11_tm2_term": self.secondary_term or None,
            "icd11_bio_code": self.tertiary_code or None,
            "icd11_bio_term": self.tertiary_term or None,
            "confidence_score": self.confidence_score,
            "mapping_status": self.mapping_status,
        }


class Submitter(BaseModel):
    """Identity of the user submitting a file."""

    user_id: str = Field(min_length=1)
    email: str = Field(min_length=1)
    name: str | None = None
