from .callback import (
    BreakdownPayload,
    ErrorCallbackPayload,
    ErrorDetails,
    ExtractionInfo,
    ProcessingInfo,
    ScoreCallbackPayload,
    ScoringInfo,
    build_error_payload,
    build_score_payload,
)
from .scoring import (
    CandidateProfile,
    DescriptionFactor,
    ErrorReport,
    ExperienceFactor,
    FactorScore,
    InvalidScoringRequest,
    JobRequirement,
    QualityFactor,
    RoleFactor,
    ScoreBreakdown,
    ScoreResult,
    ScoringRequest,
    SkillEvidenceItem,
    SkillsFactor,
    read_correlation,
)

__all__ = [
    "JobRequirement",
    "CandidateProfile",
    "ScoringRequest",
    "InvalidScoringRequest",
    "FactorScore",
    "SkillEvidenceItem",
    "SkillsFactor",
    "DescriptionFactor",
    "RoleFactor",
    "ExperienceFactor",
    "QualityFactor",
    "ScoreBreakdown",
    "ScoreResult",
    "ErrorReport",
    "BreakdownPayload",
    "ExtractionInfo",
    "ScoringInfo",
    "ProcessingInfo",
    "ScoreCallbackPayload",
    "ErrorDetails",
    "ErrorCallbackPayload",
    "build_score_payload",
    "build_error_payload",
    "read_correlation",
]
