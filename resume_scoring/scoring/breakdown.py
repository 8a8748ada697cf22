from __future__ import annotations

from resume_scoring.features import (
    DescriptionMatchResult,
    ExperienceMatchResult,
    QualityAssessment,
    RoleMatchResult,
    SkillMatchResult,
)
from resume_scoring.schemas import (
    DescriptionFactor,
    ExperienceFactor,
    QualityFactor,
    RoleFactor,
    ScoreBreakdown,
    SkillEvidenceItem,
    SkillsFactor,
)


def _percent(fraction: float) -> float:
    return round(min(max(fraction, 0.0), 1.0) * 100, 2)


class ScoreBreakdownBuilder:
    """Collects the five factor results and freezes them into a ScoreBreakdown."""

    def __init__(self) -> None:
        self._skills: SkillsFactor | None = None
        self._description: DescriptionFactor | None = None
        self._role: RoleFactor | None = None
        self._experience: ExperienceFactor | None = None
        self._quality: QualityFactor | None = None

    def with_skills(self, result: SkillMatchResult) -> "ScoreBreakdownBuilder":
        self._skills = SkillsFactor(
            score=_percent(result.score),
            matched=len(result.matched),
            total=result.total,
            matched_skills=list(result.matched),
            evidence=[
                SkillEvidenceItem(
                    skill=item.skill,
                    match_type=item.match_type,
                    score=item.score,
                    profile_match=item.profile_match,
                    text_match=item.text_match,
                )
                for item in result.evidence
            ],
            fallback_used=result.fallback_used,
        )
        return self

    def with_description(self, result: DescriptionMatchResult) -> "ScoreBreakdownBuilder":
        self._description = DescriptionFactor(
            score=_percent(result.score),
            keyword_matches=result.matched_keyword_count,
            total_keywords=result.total_keywords,
            matched_keywords=list(result.matched_keywords),
            fallback_used=result.fallback_used,
        )
        return self

    def with_role(self, result: RoleMatchResult) -> "ScoreBreakdownBuilder":
        self._role = RoleFactor(
            score=_percent(result.score),
            similarity=result.similarity,
            job_terms=list(result.job_terms),
            role_terms=list(result.role_terms),
            matched_terms=list(result.matched_terms),
            fallback_used=result.fallback_used,
        )
        return self

    def with_experience(self, result: ExperienceMatchResult) -> "ScoreBreakdownBuilder":
        self._experience = ExperienceFactor(
            score=_percent(result.score),
            required_level=result.required_level,
            candidate_level=result.candidate_level,
            distance=result.distance,
            years=result.years,
            signals=list(result.signals),
        )
        return self

    def with_quality(self, result: QualityAssessment) -> "ScoreBreakdownBuilder":
        self._quality = QualityFactor(
            score=_percent(result.score),
            text_length=result.text_length,
            extraction_used=result.extraction_used,
            structural_sections=list(result.structural_sections),
            technical_term_hits=result.technical_term_hits,
            profile_skill_count=result.profile_skill_count,
            bonuses=dict(result.bonuses),
        )
        return self

    def build(self) -> ScoreBreakdown:
        missing = [
            name
            for name, value in (
                ("skills", self._skills),
                ("description", self._description),
                ("role", self._role),
                ("experience", self._experience),
                ("quality", self._quality),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"Score breakdown is missing factors: {', '.join(missing)}")
        return ScoreBreakdown(
            skills=self._skills,
            description=self._description,
            role=self._role,
            experience=self._experience,
            quality=self._quality,
        )
