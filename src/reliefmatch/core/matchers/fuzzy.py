"""Similarity-based matcher built on rapidfuzz."""

from __future__ import annotations

from dataclasses import dataclass

from rapidfuzz import fuzz

from .substring import SubstringMatcher


@dataclass
class FuzzyMatcherConfig:
    """Configuration for similarity matching."""

    min_similarity: float = 85.0


class FuzzyMatcher(SubstringMatcher):
    """Substring containment first, then a token-set similarity fallback.

    Catches word-order variants ("soins intensifs infirmier" against
    "infirmier soins intensifs") that plain containment misses.
    """

    strategy = "fuzzy"

    def __init__(self, *, config: FuzzyMatcherConfig | None = None) -> None:
        self._config = config or FuzzyMatcherConfig()

    def _terms_match(self, required: str, possessed: str) -> bool:
        if super()._terms_match(required, possessed):
            return True
        return fuzz.token_set_ratio(required, possessed) >= self._config.min_similarity
