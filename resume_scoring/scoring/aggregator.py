from __future__ import annotations

import logging

from resume_scoring.core.config.scoring import get_factor_weights
from resume_scoring.features import assess_quality, describe_match, match_experience, match_role, match_skills
from resume_scoring.schemas import CandidateProfile, JobRequirement, ScoreBreakdown, ScoreResult
from resume_scoring.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .breakdown import ScoreBreakdownBuilder
from .recommendation import build_recommendation

logger = logging.getLogger(__name__)


def weighted_score(breakdown: ScoreBreakdown, weights: dict[str, float]) -> int:
    total = (
        breakdown.skills.score * weights["skills"]
        + breakdown.description.score * weights["description"]
        + breakdown.role.score * weights["role"]
        + breakdown.experience.score * weights["experience"]
        + breakdown.quality.score * weights["quality"]
    )
    return max(0, min(100, round(total)))


def aggregate(
    job: JobRequirement,
    candidate: CandidateProfile,
    extracted_text: str | None,
    extraction_used: bool,
    *,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> ScoreResult:
    """Score one candidate against one job. Pure: no I/O, no shared state.

    ``extracted_text`` is the candidate text the analyzers read: the resume
    text when extraction succeeded, otherwise the profile bio.
    """
    taxonomy = taxonomy_provider or get_default_taxonomy_provider()
    weights = get_factor_weights()
    candidate_text = extracted_text or ""
    experience_text = " ".join(part for part in (candidate_text, candidate.role) if part)

    skills = match_skills(job.required_skills, candidate.skills, candidate_text, taxonomy_provider=taxonomy)
    breakdown = (
        ScoreBreakdownBuilder()
        .with_skills(skills)
        .with_description(describe_match(job.description, candidate_text, taxonomy_provider=taxonomy))
        .with_role(match_role(job.title, candidate.role, taxonomy_provider=taxonomy))
        .with_experience(match_experience(job.level, experience_text, taxonomy_provider=taxonomy))
        .with_quality(
            assess_quality(
                candidate_text,
                extraction_used=extraction_used,
                profile_skills=candidate.skills,
                candidate_role=candidate.role,
                taxonomy_provider=taxonomy,
            )
        )
        .build()
    )

    final_score = weighted_score(breakdown, weights)
    logger.debug(
        "aggregate_scored final=%s skills=%s description=%s role=%s experience=%s quality=%s",
        final_score,
        breakdown.skills.score,
        breakdown.description.score,
        breakdown.role.score,
        breakdown.experience.score,
        breakdown.quality.score,
    )
    return ScoreResult(
        final_score=final_score,
        breakdown=breakdown,
        matched_skills=list(skills.matched),
        recommendation=build_recommendation(final_score, breakdown),
        extraction_used=extraction_used,
    )
