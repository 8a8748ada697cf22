from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from resume_scoring.core.config.scoring import get_scoring_value
from resume_scoring.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .similarity import either_contains, fuzzy_similarity

Similarity = Literal["high", "medium", "low", "none", "unknown"]

_EDGE_PUNCT = ".,;:!?()[]{}\"'/|"


@dataclass(slots=True, frozen=True)
class RoleMatchResult:
    score: float
    similarity: Similarity
    job_terms: list[str] = field(default_factory=list)
    role_terms: list[str] = field(default_factory=list)
    matched_terms: list[str] = field(default_factory=list)
    fallback_used: bool = False


def extract_role_terms(text: str | None, *, taxonomy_provider: TaxonomyProvider | None = None) -> list[str]:
    taxonomy = taxonomy_provider or get_default_taxonomy_provider()
    max_terms = int(get_scoring_value("role.max_terms", 10))
    terms: list[str] = []
    for raw in (text or "").lower().split():
        token = raw.strip(_EDGE_PUNCT)
        if len(token) <= 2 or token in taxonomy.stopwords or token in terms:
            continue
        if token in taxonomy.role_words or token.isalpha():
            terms.append(token)
        if len(terms) >= max_terms:
            break
    return terms


def _similarity_label(score: float) -> Similarity:
    if score > 0.7:
        return "high"
    if score > 0.4:
        return "medium"
    if score > 0:
        return "low"
    return "none"


def _fallback(name: str, default: float) -> RoleMatchResult:
    value = float(get_scoring_value(f"role.fallbacks.{name}", default))
    return RoleMatchResult(score=value, similarity="unknown", fallback_used=True)


def match_role(
    job_title: str | None,
    candidate_role: str | None,
    *,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> RoleMatchResult:
    job_terms = extract_role_terms(job_title, taxonomy_provider=taxonomy_provider)
    role_terms = extract_role_terms(candidate_role, taxonomy_provider=taxonomy_provider)

    if not job_terms and not role_terms:
        return _fallback("neither", 0.20)
    if not role_terms:
        return _fallback("title_only", 0.10)
    if not job_terms:
        return _fallback("role_only", 0.50)

    threshold = float(get_scoring_value("role.fuzzy_threshold", 0.7))
    matched = [
        term
        for term in job_terms
        if any(either_contains(term, role) or fuzzy_similarity(term, role) > threshold for role in role_terms)
    ]
    score = len(matched) / len(job_terms)
    return RoleMatchResult(
        score=score,
        similarity=_similarity_label(score),
        job_terms=job_terms,
        role_terms=role_terms,
        matched_terms=matched,
    )
