"""Requirement matchers used for skills and diplomas."""

from .fuzzy import FuzzyMatcher, FuzzyMatcherConfig
from .substring import SubstringMatcher, credential_names, normalize_terms

__all__ = [
    "SubstringMatcher",
    "FuzzyMatcher",
    "FuzzyMatcherConfig",
    "credential_names",
    "normalize_terms",
]
