from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .provider import TaxonomyProvider


def _normalize(raw: str) -> str:
    return " ".join((raw or "").strip().lower().split())


class LocalTaxonomy(TaxonomyProvider):
    """Vocabulary tables backed by the JSON files shipped next to this module."""

    def __init__(
        self,
        synonyms_path: str | Path | None = None,
        vocabulary_path: str | Path | None = None,
    ) -> None:
        synonyms_file = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        vocabulary_file = Path(vocabulary_path) if vocabulary_path else Path(__file__).with_name("vocabulary.json")

        self._synonym_groups = self._load_synonym_groups(synonyms_file)
        vocabulary = self._load_json(vocabulary_file)

        self.stopwords: frozenset[str] = frozenset(_normalize(word) for word in vocabulary["stopwords"])
        self.role_words: frozenset[str] = frozenset(_normalize(word) for word in vocabulary["role_words"])
        self.leadership_titles: tuple[str, ...] = tuple(_normalize(word) for word in vocabulary["leadership_titles"])
        self.structural_keywords: tuple[str, ...] = tuple(
            _normalize(word) for word in vocabulary["structural_keywords"]
        )
        self.technical_terms: tuple[str, ...] = tuple(_normalize(word) for word in vocabulary["technical_terms"])
        self.experience_levels: Mapping[str, int] = MappingProxyType(
            {_normalize(name): int(rank) for name, rank in vocabulary["experience_levels"].items()}
        )
        aliases = {_normalize(alias): _normalize(level) for alias, level in vocabulary.get("level_aliases", {}).items()}
        unknown = sorted(level for level in aliases.values() if level not in self.experience_levels)
        if unknown:
            raise ValueError(f"level_aliases point at unknown levels: {unknown}")
        self.level_aliases: Mapping[str, str] = MappingProxyType(aliases)

    @staticmethod
    def _load_json(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise ValueError(f"Expected a JSON object in '{path}'.")
        return raw

    @classmethod
    def _load_synonym_groups(cls, path: Path) -> tuple[frozenset[str], ...]:
        raw = cls._load_json(path)
        groups: list[frozenset[str]] = []
        for canonical, aliases in raw.items():
            members = {_normalize(canonical)}
            members.update(_normalize(alias) for alias in aliases)
            members.discard("")
            groups.append(frozenset(members))
        return tuple(groups)

    def skill_variations(self, raw: str) -> frozenset[str]:
        normalized = _normalize(raw)
        if not normalized:
            return frozenset()
        variations = {normalized}
        for group in self._synonym_groups:
            if normalized in group:
                variations |= group
        return frozenset(variations)
