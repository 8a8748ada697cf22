from __future__ import annotations

from resume_scoring.core.config.scoring import get_scoring_value
from resume_scoring.schemas import ScoreBreakdown

_DEFAULT_BANDS = (
    (85, "EXCELLENT MATCH - Highly recommended for interview"),
    (70, "STRONG CANDIDATE - Recommended for interview"),
    (55, "MODERATE FIT - Consider for phone screening"),
    (40, "WEAK FIT - Review manually"),
    (0, "POOR MATCH - Not recommended"),
)


def _bands() -> list[tuple[int, str]]:
    raw = get_scoring_value("recommendation.bands")
    if not raw:
        return list(_DEFAULT_BANDS)
    return sorted(((int(band["min_score"]), str(band["label"])) for band in raw), reverse=True)


def diagnostic_flags(breakdown: ScoreBreakdown) -> list[str]:
    flags: list[str] = []
    for rule in get_scoring_value("recommendation.flags", []) or []:
        factor = getattr(breakdown, str(rule["factor"]), None)
        if factor is not None and factor.score < float(rule["below"]):
            flags.append(str(rule["label"]))
    return flags


def build_recommendation(score: int, breakdown: ScoreBreakdown) -> str:
    bands = _bands()
    label = bands[-1][1]
    for min_score, band_label in bands:
        if score >= min_score:
            label = band_label
            break
    flags = diagnostic_flags(breakdown)
    if flags:
        return f"{label} | {', '.join(flags)}"
    return label
