from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class InvalidScoringRequest(ValueError):
    """The request cannot be scored and there is nowhere to report it."""


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _coerce_text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        return []
    output: list[str] = []
    for item in items:
        text = _coerce_text(item)
        if text and text not in output:
            output.append(text)
    return output


def read_correlation(payload: Any, *, default_callback_target: str | None) -> tuple[str, str]:
    """Return (applicationId, callback target) or raise InvalidScoringRequest."""
    if not isinstance(payload, Mapping):
        raise InvalidScoringRequest("Scoring request body must be a JSON object.")

    application_id = _coerce_text(payload.get("applicationId"))
    if not application_id:
        raise InvalidScoringRequest("applicationId is required.")

    callback_target = _coerce_text(payload.get("backendUrl")) or (default_callback_target or "").strip()
    if not callback_target:
        raise InvalidScoringRequest("No callback target: backendUrl is missing and no default is configured.")
    return application_id, callback_target.rstrip("/")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class JobRequirement(CamelModel):
    title: str = ""
    description: str = ""
    location: str = ""
    category: str = ""
    level: str = ""
    salary: str = ""
    required_skills: list[str] = Field(default_factory=list)

    @field_validator("title", "description", "location", "category", "level", "salary", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("required_skills", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> list[str]:
        return _coerce_text_list(value)


class CandidateProfile(CamelModel):
    skills: list[str] = Field(default_factory=list)
    bio: str = ""
    role: str = ""
    resume_url: str = ""

    @field_validator("bio", "role", "resume_url", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> list[str]:
        return _coerce_text_list(value)


class ScoringRequest(CamelModel):
    application_id: str = Field(min_length=1)
    callback_target: str = Field(min_length=1)
    job: JobRequirement
    candidate: CandidateProfile

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, default_callback_target: str | None) -> "ScoringRequest":
        """Build a request from the flat wire payload sent by the hiring platform.

        Only the application id and a usable callback target are mandatory;
        every other field falls back to an empty default.
        """
        application_id, callback_target = read_correlation(payload, default_callback_target=default_callback_target)

        job = JobRequirement(
            title=payload.get("jobTitle"),
            description=payload.get("jobDescription"),
            location=payload.get("jobLocation"),
            category=payload.get("jobCategory"),
            level=payload.get("jobLevel"),
            salary=payload.get("jobSalary"),
            required_skills=payload.get("requiredSkills"),
        )
        candidate = CandidateProfile(
            skills=payload.get("userSkills"),
            bio=payload.get("userBio"),
            role=payload.get("userRole"),
            resume_url=payload.get("resumeUrl"),
        )
        return cls(
            application_id=application_id,
            callback_target=callback_target,
            job=job,
            candidate=candidate,
        )


class FactorScore(CamelModel):
    score: float = Field(ge=0.0, le=100.0)


class SkillEvidenceItem(CamelModel):
    skill: str
    match_type: Literal["both", "profile", "text", "none"]
    score: float = Field(ge=0.0, le=1.0)
    profile_match: str | None = None
    text_match: str | None = None


class SkillsFactor(FactorScore):
    matched: int = 0
    total: int = 0
    matched_skills: list[str] = Field(default_factory=list)
    evidence: list[SkillEvidenceItem] = Field(default_factory=list)
    fallback_used: bool = False


class DescriptionFactor(FactorScore):
    keyword_matches: int = 0
    total_keywords: int = 0
    matched_keywords: list[str] = Field(default_factory=list)
    fallback_used: bool = False


class RoleFactor(FactorScore):
    similarity: Literal["high", "medium", "low", "none", "unknown"]
    job_terms: list[str] = Field(default_factory=list)
    role_terms: list[str] = Field(default_factory=list)
    matched_terms: list[str] = Field(default_factory=list)
    fallback_used: bool = False


class ExperienceFactor(FactorScore):
    required_level: str
    candidate_level: str
    distance: int = Field(ge=0)
    years: int = Field(default=0, ge=0)
    signals: list[str] = Field(default_factory=list)


class QualityFactor(FactorScore):
    text_length: int = Field(default=0, ge=0)
    extraction_used: bool = False
    structural_sections: list[str] = Field(default_factory=list)
    technical_term_hits: int = 0
    profile_skill_count: int = 0
    bonuses: dict[str, int] = Field(default_factory=dict)


class ScoreBreakdown(CamelModel):
    skills: SkillsFactor
    description: DescriptionFactor
    role: RoleFactor
    experience: ExperienceFactor
    quality: QualityFactor


class ScoreResult(CamelModel):
    final_score: int = Field(ge=0, le=100)
    breakdown: ScoreBreakdown
    matched_skills: list[str] = Field(default_factory=list)
    recommendation: str
    extraction_used: bool = False


class ErrorReport(CamelModel):
    application_id: str
    error_type: str
    error_message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_exception(cls, application_id: str, exc: BaseException) -> "ErrorReport":
        return cls(
            application_id=application_id,
            error_type=type(exc).__name__ or "UnknownError",
            error_message=str(exc) or type(exc).__name__,
        )
