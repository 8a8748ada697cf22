from __future__ import annotations

from typing import Mapping, Protocol


class TaxonomyProvider(Protocol):
    stopwords: frozenset[str]
    role_words: frozenset[str]
    leadership_titles: tuple[str, ...]
    structural_keywords: tuple[str, ...]
    technical_terms: tuple[str, ...]
    experience_levels: Mapping[str, int]
    level_aliases: Mapping[str, str]

    def skill_variations(self, raw: str) -> frozenset[str]:
        """Return the skill itself plus every synonym group it belongs to."""
