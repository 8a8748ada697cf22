from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

_UNIT = r"(?:years?|yrs?)"

DEFAULT_YEAR_PATTERNS: tuple[str, ...] = (
    # "5 years of experience", "5+ yrs experience", "3 years of professional experience"
    rf"\b(\d{{1,2}})\s*\+?\s*{_UNIT}\b\s*(?:of\s+)?(?:[a-z\-]+\s+){{0,2}}?(?:experience|exp)\b",
    # "7+ years"
    rf"\b(\d{{1,2}})\s*\+\s*{_UNIT}\b",
    # "experience: 4 years", "experience of 6+ years"
    rf"\b(?:experience|exp)\b\s*(?:of|:|-)?\s*(?:over\s+|about\s+|around\s+)?(\d{{1,2}})\s*\+?\s*{_UNIT}\b",
)


@dataclass(frozen=True)
class YearsMention:
    years: int
    phrase: str


class YearsOfExperienceMatcher:
    """Finds "N years of experience" style statements in free text."""

    def __init__(self, patterns: Iterable[str] = DEFAULT_YEAR_PATTERNS, *, max_years: int = 50) -> None:
        self._patterns = tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)
        if not self._patterns:
            raise ValueError("at least one pattern is required")
        self._max_years = max_years

    def find(self, text: str | None) -> list[YearsMention]:
        if not text:
            return []
        mentions: list[YearsMention] = []
        for pattern in self._patterns:
            for match in pattern.finditer(text):
                years = int(match.group(1))
                if 0 < years <= self._max_years:
                    mentions.append(YearsMention(years=years, phrase=match.group(0).strip()))
        return mentions

    def max_years(self, text: str | None) -> int:
        return max((mention.years for mention in self.find(text)), default=0)
