from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import Field

from .scoring import CamelModel, ErrorReport, ScoreResult, ScoringRequest


class BreakdownPayload(CamelModel):
    skills_match: int = Field(ge=0, le=100)
    description_match: int = Field(ge=0, le=100)
    experience_match: int = Field(ge=0, le=100)
    role_match: int = Field(ge=0, le=100)
    resume_quality: int = Field(ge=0, le=100)


class ExtractionInfo(CamelModel):
    has_resume: bool
    resume_url: str | None = None
    text_extracted: bool
    text_length: int
    source: str
    warning: str | None = None


class ScoringInfo(CamelModel):
    total_required_skills: int
    total_user_skills: int
    job_level: str
    job_title: str
    has_job_description: bool
    processing_timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProcessingInfo(CamelModel):
    extraction: ExtractionInfo
    scoring: ScoringInfo


class ScoreCallbackPayload(CamelModel):
    application_id: str
    score: int = Field(ge=0, le=100)
    breakdown: BreakdownPayload
    matched_skills: list[str] = Field(default_factory=list)
    recommendation: str
    extraction_used: bool
    details: dict[str, Any] = Field(default_factory=dict)
    processing_info: ProcessingInfo | None = None


class ErrorDetails(CamelModel):
    error_type: str
    error_message: str
    timestamp: datetime


class ErrorCallbackPayload(CamelModel):
    application_id: str
    error: Literal[True] = True
    error_details: ErrorDetails


def _percent(weight: float) -> str:
    return f"{round(weight * 100)}%"


def build_score_payload(
    request: ScoringRequest,
    result: ScoreResult,
    *,
    weights: dict[str, float],
    processing_info: ProcessingInfo | None = None,
) -> ScoreCallbackPayload:
    breakdown = result.breakdown
    details: dict[str, Any] = {}
    for name, key, factor in (
        ("skillsMatch", "skills", breakdown.skills),
        ("descriptionMatch", "description", breakdown.description),
        ("experienceMatch", "experience", breakdown.experience),
        ("roleMatch", "role", breakdown.role),
        ("resumeQuality", "quality", breakdown.quality),
    ):
        entry = factor.model_dump(by_alias=True, mode="json")
        entry["score"] = round(factor.score)
        entry["weight"] = _percent(weights[key])
        details[name] = entry
    details["recommendation"] = result.recommendation

    return ScoreCallbackPayload(
        application_id=request.application_id,
        score=result.final_score,
        breakdown=BreakdownPayload(
            skills_match=round(breakdown.skills.score),
            description_match=round(breakdown.description.score),
            experience_match=round(breakdown.experience.score),
            role_match=round(breakdown.role.score),
            resume_quality=round(breakdown.quality.score),
        ),
        matched_skills=list(result.matched_skills),
        recommendation=result.recommendation,
        extraction_used=result.extraction_used,
        details=details,
        processing_info=processing_info,
    )


def build_error_payload(report: ErrorReport) -> ErrorCallbackPayload:
    return ErrorCallbackPayload(
        application_id=report.application_id,
        error_details=ErrorDetails(
            error_type=report.error_type,
            error_message=report.error_message,
            timestamp=report.timestamp,
        ),
    )
