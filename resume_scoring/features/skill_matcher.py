from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Sequence

from resume_scoring.core.config.scoring import get_scoring_value
from resume_scoring.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .similarity import contains_term, either_contains, fuzzy_similarity

MatchType = Literal["both", "profile", "text", "none"]


@dataclass(slots=True, frozen=True)
class SkillEvidence:
    skill: str
    match_type: MatchType
    score: float
    profile_match: str | None = None
    text_match: str | None = None


@dataclass(slots=True, frozen=True)
class SkillMatchResult:
    score: float
    matched: list[str] = field(default_factory=list)
    evidence: list[SkillEvidence] = field(default_factory=list)
    total: int = 0
    fallback_used: bool = False


def _match_scores() -> dict[str, float]:
    return {
        "both": float(get_scoring_value("skills.match_scores.both", 1.0)),
        "profile": float(get_scoring_value("skills.match_scores.profile", 0.85)),
        "text": float(get_scoring_value("skills.match_scores.text", 0.7)),
        "none": float(get_scoring_value("skills.match_scores.none", 0.0)),
    }


def _find_profile_match(variations: frozenset[str], profile_skills: list[str], threshold: float) -> str | None:
    for profile_skill in profile_skills:
        for variation in variations:
            if either_contains(profile_skill, variation):
                return profile_skill
            if fuzzy_similarity(profile_skill, variation) > threshold:
                return profile_skill
    return None


def _find_text_match(variations: frozenset[str], candidate_text: str) -> str | None:
    if not candidate_text:
        return None
    for variation in sorted(variations, key=len, reverse=True):
        if contains_term(candidate_text, variation):
            return variation
    return None


def match_skills(
    required: Sequence[str] | None,
    profile_skills: Sequence[str] | None,
    candidate_text: str | None,
    *,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> SkillMatchResult:
    """Score how well the candidate evidences each required skill.

    Each required skill is expanded through the synonym table, then checked
    against the profile skills (containment or fuzzy similarity) and against
    the candidate text (literal substring). The aggregate score is the mean
    of the per-skill scores; jobs without required skills get a neutral
    fallback that depends on whether the candidate listed any skills.
    """
    taxonomy = taxonomy_provider or get_default_taxonomy_provider()
    required_clean = [skill.strip() for skill in (required or []) if skill and skill.strip()]
    profile_clean = [skill.strip().lower() for skill in (profile_skills or []) if skill and skill.strip()]

    if not required_clean:
        key = "with_profile_skills" if profile_clean else "without_profile_skills"
        default = 0.6 if profile_clean else 0.4
        fallback = float(get_scoring_value(f"skills.empty_required_fallback.{key}", default))
        return SkillMatchResult(score=fallback, total=0, fallback_used=True)

    threshold = float(get_scoring_value("skills.fuzzy_threshold", 0.8))
    scores = _match_scores()
    text = (candidate_text or "").lower()

    matched: list[str] = []
    evidence: list[SkillEvidence] = []
    for skill in required_clean:
        variations = taxonomy.skill_variations(skill)
        profile_match = _find_profile_match(variations, profile_clean, threshold)
        text_match = _find_text_match(variations, text)

        if profile_match and text_match:
            match_type: MatchType = "both"
        elif profile_match:
            match_type = "profile"
        elif text_match:
            match_type = "text"
        else:
            match_type = "none"

        if match_type != "none":
            matched.append(skill)
        evidence.append(
            SkillEvidence(
                skill=skill,
                match_type=match_type,
                score=scores[match_type],
                profile_match=profile_match,
                text_match=text_match,
            )
        )

    mean = sum(item.score for item in evidence) / len(evidence)
    return SkillMatchResult(
        score=min(max(mean, 0.0), 1.0),
        matched=matched,
        evidence=evidence,
        total=len(required_clean),
    )
