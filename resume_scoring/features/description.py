from __future__ import annotations

from dataclasses import dataclass, field

from resume_scoring.core.config.scoring import get_scoring_value
from resume_scoring.taxonomy import TaxonomyProvider

from .keywords import extract_keywords
from .similarity import contains_term, either_contains, fuzzy_similarity


@dataclass(slots=True, frozen=True)
class DescriptionMatchResult:
    score: float
    matched_keyword_count: int = 0
    total_keywords: int = 0
    matched_keywords: list[str] = field(default_factory=list)
    fallback_used: bool = False


def _fallback(name: str, default: float) -> DescriptionMatchResult:
    value = float(get_scoring_value(f"description.fallbacks.{name}", default))
    return DescriptionMatchResult(score=value, fallback_used=True)


def _keyword_matches(keyword: str, candidate_text: str, candidate_keywords: list[str], threshold: float) -> bool:
    if contains_term(candidate_text, keyword):
        return True
    for candidate in candidate_keywords:
        if either_contains(keyword, candidate):
            return True
        if fuzzy_similarity(keyword, candidate) > threshold:
            return True
    return False


def describe_match(
    job_description: str | None,
    candidate_text: str | None,
    *,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> DescriptionMatchResult:
    has_job = bool(job_description and job_description.strip())
    has_candidate = bool(candidate_text and candidate_text.strip())

    if not has_job and not has_candidate:
        return _fallback("both_missing", 0.25)
    if not has_job:
        return _fallback("job_missing", 0.40)
    if not has_candidate:
        return _fallback("candidate_missing", 0.15)

    job_keywords = extract_keywords(job_description, taxonomy_provider=taxonomy_provider)
    candidate_keywords = extract_keywords(candidate_text, taxonomy_provider=taxonomy_provider)
    if not job_keywords:
        # Description made only of stopwords or punctuation carries no requirement signal.
        return _fallback("job_missing", 0.40)

    threshold = float(get_scoring_value("description.fuzzy_threshold", 0.8))
    lowered = (candidate_text or "").lower()
    matched = [
        keyword
        for keyword in job_keywords
        if _keyword_matches(keyword, lowered, candidate_keywords, threshold)
    ]
    return DescriptionMatchResult(
        score=len(matched) / len(job_keywords),
        matched_keyword_count=len(matched),
        total_keywords=len(job_keywords),
        matched_keywords=matched,
    )
