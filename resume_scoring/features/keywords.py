from __future__ import annotations

import re

from resume_scoring.core.config.scoring import get_scoring_value
from resume_scoring.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

_TOKEN_RE = re.compile(r"[a-z0-9][a-z0-9+#.\-]*")
# Clause boundaries break phrase runs; a period only counts when followed by whitespace.
_CLAUSE_SPLIT_RE = re.compile(r"[,;:!?()\[\]{}\"'|/\n\r\t•]+|\.(?=\s|$)")
_TRAILING_PUNCT = ".-"


def _clean_token(token: str) -> str:
    return token.rstrip(_TRAILING_PUNCT).lstrip("-.")


def _clauses(text: str) -> list[str]:
    return [clause for clause in _CLAUSE_SPLIT_RE.split(text.lower()) if clause.strip()]


def extract_keywords(
    text: str | None,
    *,
    max_keywords: int | None = None,
    taxonomy_provider: TaxonomyProvider | None = None,
) -> list[str]:
    """Return case-folded keywords and short phrases in order of first occurrence.

    Single words are kept when they are not stopwords and meet the minimum
    length. Consecutive qualifying words inside one clause also produce
    phrases of up to ``keywords.max_phrase_words`` words, emitted right after
    the word that completes them. The result is deduplicated and capped.
    """
    if not text or not text.strip():
        return []

    taxonomy = taxonomy_provider or get_default_taxonomy_provider()
    limit = int(max_keywords if max_keywords is not None else get_scoring_value("keywords.max_keywords", 100))
    max_phrase = int(get_scoring_value("keywords.max_phrase_words", 3))
    min_length = int(get_scoring_value("keywords.min_token_length", 2))

    seen: set[str] = set()
    output: list[str] = []

    def _emit(token: str) -> bool:
        if token in seen:
            return False
        seen.add(token)
        output.append(token)
        return len(output) >= limit

    for clause in _clauses(text):
        run: list[str] = []
        for raw in _TOKEN_RE.findall(clause):
            token = _clean_token(raw)
            if len(token) < min_length or token in taxonomy.stopwords or not any(ch.isalpha() for ch in token):
                run = []
                continue
            run.append(token)
            if _emit(token):
                return output
            for size in range(2, max_phrase + 1):
                if len(run) < size:
                    break
                if _emit(" ".join(run[-size:])):
                    return output
    return output
