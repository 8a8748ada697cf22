from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache

from resume_scoring.core.config.scoring import get_scoring_value
from resume_scoring.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .experience_patterns import YearsOfExperienceMatcher


@dataclass(slots=True, frozen=True)
class ExperienceMatchResult:
    score: float
    required_level: str
    candidate_level: str
    distance: int
    years: int = 0
    signals: list[str] = field(default_factory=list)


@lru_cache(maxsize=1)
def _years_matcher() -> YearsOfExperienceMatcher:
    return YearsOfExperienceMatcher(max_years=int(get_scoring_value("experience.max_plausible_years", 50)))


def _whole_word(term: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])")


def _level_name(rank: int, taxonomy: TaxonomyProvider) -> str:
    for name, value in taxonomy.experience_levels.items():
        if value == rank:
            return name
    return "unknown"


def _rank_of(name: str, taxonomy: TaxonomyProvider, default: int) -> int:
    return taxonomy.experience_levels.get(name, default)


def parse_required_level(level: str | None, *, taxonomy_provider: TaxonomyProvider | None = None) -> int:
    """Map the job's level field onto the ordinal scale, defaulting to mid."""
    taxonomy = taxonomy_provider or get_default_taxonomy_provider()
    default_name = str(get_scoring_value("experience.default_required_level", "mid"))
    default_rank = _rank_of(default_name, taxonomy, 3)

    normalized = " ".join((level or "").strip().lower().split())
    if not normalized:
        return default_rank
    if normalized in taxonomy.experience_levels:
        return taxonomy.experience_levels[normalized]
    alias = taxonomy.level_aliases.get(normalized)
    if alias:
        return taxonomy.experience_levels[alias]
    return default_rank


def _level_for_years(years: int, taxonomy: TaxonomyProvider) -> int:
    bands = get_scoring_value("experience.year_bands", []) or []
    for band in sorted(bands, key=lambda item: int(item["min_years"]), reverse=True):
        if years >= int(band["min_years"]):
            return _rank_of(str(band["level"]), taxonomy, 0)
    return 0


def detect_candidate_level(
    text: str | None,
    *,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> tuple[int, int, list[str]]:
    """Return (level rank, max years mentioned, signals) for the candidate text."""
    taxonomy = taxonomy_provider or get_default_taxonomy_provider()
    default_name = str(get_scoring_value("experience.default_candidate_level", "junior"))
    lowered = (text or "").lower()
    signals: list[str] = []

    level_words = 0
    for name, rank in taxonomy.experience_levels.items():
        if _whole_word(name).search(lowered):
            level_words = max(level_words, rank)
            signals.append(f"level:{name}")

    years = _years_matcher().max_years(lowered)
    years_level = _level_for_years(years, taxonomy) if years else 0
    if years:
        signals.append(f"years:{years}")

    leadership_level = 0
    floor_name = str(get_scoring_value("experience.leadership_floor", "lead"))
    for title in taxonomy.leadership_titles:
        if _whole_word(title).search(lowered):
            leadership_level = _rank_of(floor_name, taxonomy, 5)
            signals.append(f"leadership:{title}")
            break

    detected = max(level_words, years_level, leadership_level)
    if detected <= 0:
        detected = _rank_of(default_name, taxonomy, 2)
    return detected, years, signals


def _distance_score(distance: int) -> float:
    table = get_scoring_value("experience.distance_scores", {}) or {}
    normalized = {int(key): float(value) for key, value in table.items()}
    if distance in normalized:
        return normalized[distance]
    return float(get_scoring_value("experience.max_distance_score", 25))


def match_experience(
    job_level: str | None,
    candidate_text: str | None,
    *,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> ExperienceMatchResult:
    taxonomy = taxonomy_provider or get_default_taxonomy_provider()
    required = parse_required_level(job_level, taxonomy_provider=taxonomy)
    candidate, years, signals = detect_candidate_level(candidate_text, taxonomy_provider=taxonomy)
    distance = abs(required - candidate)
    score = min(max(_distance_score(distance), 0.0), 100.0)
    return ExperienceMatchResult(
        score=score / 100.0,
        required_level=_level_name(required, taxonomy),
        candidate_level=_level_name(candidate, taxonomy),
        distance=distance,
        years=years,
        signals=signals,
    )
