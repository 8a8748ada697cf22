from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from resume_scoring.core.config.scoring import get_scoring_value
from resume_scoring.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .similarity import contains_term


@dataclass(slots=True, frozen=True)
class QualityAssessment:
    score: float
    text_length: int
    extraction_used: bool
    structural_sections: list[str] = field(default_factory=list)
    technical_term_hits: int = 0
    profile_skill_count: int = 0
    bonuses: dict[str, int] = field(default_factory=dict)


def _tier_bonus(value: int, tiers_path: str, threshold_key: str) -> int:
    tiers = get_scoring_value(tiers_path, []) or []
    for tier in sorted(tiers, key=lambda item: int(item[threshold_key]), reverse=True):
        if value >= int(tier[threshold_key]):
            return int(tier["bonus"])
    return 0


def assess_quality(
    resume_text: str | None,
    *,
    extraction_used: bool,
    profile_skills: Sequence[str] | None = None,
    candidate_role: str | None = None,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> QualityAssessment:
    """Additive completeness heuristic; bonuses are points out of 100, score is the 0-1 fraction."""
    taxonomy = taxonomy_provider or get_default_taxonomy_provider()
    text = (resume_text or "").strip()
    skills = [skill for skill in (profile_skills or []) if skill and skill.strip()]
    has_role = bool(candidate_role and candidate_role.strip())

    bonuses: dict[str, int] = {}
    if text:
        bonuses["length"] = _tier_bonus(len(text), "quality.length_tiers", "min_chars")
    elif skills or has_role:
        bonuses["length"] = int(get_scoring_value("quality.profile_only_floor", 8))
    else:
        bonuses["length"] = 0

    bonuses["extraction"] = int(get_scoring_value("quality.extraction_bonus", 15)) if extraction_used else 0

    combined = " ".join(part for part in (text, candidate_role or "", " ".join(skills)) if part).lower()
    sections = [keyword for keyword in taxonomy.structural_keywords if contains_term(text.lower(), keyword)]
    bonuses["structure"] = _tier_bonus(len(sections), "quality.structure_tiers", "min_sections")

    technical_hits = sum(1 for term in taxonomy.technical_terms if contains_term(combined, term))
    bonuses["technical_terms"] = min(
        technical_hits * int(get_scoring_value("quality.technical_term_bonus_per_hit", 3)),
        int(get_scoring_value("quality.technical_term_bonus_cap", 20)),
    )

    bonuses["profile_skills"] = min(
        len(skills) * int(get_scoring_value("quality.profile_skill_bonus_per_skill", 2)),
        int(get_scoring_value("quality.profile_skill_bonus_cap", 10)),
    )

    total = min(max(sum(bonuses.values()), 0), 100)
    return QualityAssessment(
        score=total / 100.0,
        text_length=len(text),
        extraction_used=extraction_used,
        structural_sections=sections,
        technical_term_hits=technical_hits,
        profile_skill_count=len(skills),
        bonuses=bonuses,
    )
