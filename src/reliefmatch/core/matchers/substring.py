"""Bidirectional substring matching for skills and credential names."""

from __future__ import annotations

from typing import Any, Iterable, Sequence


def normalize_terms(terms: Iterable[str] | None) -> list[str]:
    """Lowercase terms; every entry counts, blanks and repeats included."""
    return ["" if term is None else str(term).lower() for term in terms or []]


def credential_names(credentials: Iterable[Any] | None) -> list[str]:
    """Extract names from credential records (models, mappings or bare strings)."""
    names: list[str] = []
    for credential in credentials or []:
        if isinstance(credential, str):
            name = credential
        elif isinstance(credential, dict):
            name = credential.get("name") or ""
        else:
            name = getattr(credential, "name", None) or ""
        names.append(name)
    return names


class SubstringMatcher:
    """A required term matches when it contains, or is contained in, a possessed term.

    Tolerates phrasing differences such as "Infirmier" against
    "Infirmier diplômé d'État".
    """

    strategy = "substring"

    def match_ratio(
        self,
        required: Iterable[str] | None,
        possessed: Iterable[str] | None,
    ) -> float:
        required_terms = normalize_terms(required)
        if not required_terms:
            return 1.0
        possessed_terms = normalize_terms(possessed)
        matched = self.matched_terms(required_terms, possessed_terms)
        return len(matched) / len(required_terms)

    def matched_terms(
        self,
        required: Sequence[str],
        possessed: Sequence[str],
    ) -> list[str]:
        return [
            term
            for term in required
            if any(self._terms_match(term, other) for other in possessed)
        ]

    @staticmethod
    def _terms_match(required: str, possessed: str) -> bool:
        return required in possessed or possessed in required
