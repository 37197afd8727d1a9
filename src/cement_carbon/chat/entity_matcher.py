"""Fuzzy company resolution for chat questions.

Questions name companies loosely ("ultratech", "shree cem", "ACC"), so the
query is tokenised and each token compared against a few aliases per
company with a normalised Levenshtein similarity.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Sequence
from typing import Any

from loguru import logger

DEFAULT_MATCH_THRESHOLD = 0.55
CONTAINMENT_SCORE = 0.88

_PUNCTUATION = re.compile(r"[.,'\"()&]")
_NOISE_WORDS = re.compile(r"\blimited\b|\bltd\b|\bcement(s)?\b|\bco\b")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Lower-case, strip accents, punctuation and corporate filler words."""
    text = unicodedata.normalize("NFKD", (text or "").lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = _PUNCTUATION.sub("", text)
    text = _NOISE_WORDS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def levenshtein(a: str, b: str) -> int:
    """Edit distance with unit insert, delete and substitute costs."""
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    return 1 - levenshtein(a, b) / max(len(a), len(b))


def _field(company: Any, name: str) -> Any:
    if isinstance(company, dict):
        return company.get(name)
    return getattr(company, name, None)


def company_aliases(company: Any) -> set[str]:
    name = normalize_text(_field(company, "name") or "")
    ticker = normalize_text(_field(company, "ticker") or "")
    words = name.split(" ")
    candidates = [name, ticker, words[0] if words else "", words[1] if len(words) > 1 else ""]
    return {alias for alias in candidates if alias}


def score_company(query_tokens: Sequence[str], company: Any) -> float:
    best = 0.0
    aliases = company_aliases(company)
    for token in query_tokens:
        for alias in aliases:
            score = max(
                similarity(token, alias),
                CONTAINMENT_SCORE if token in alias else 0.0,
                CONTAINMENT_SCORE if alias in token else 0.0,
            )
            best = max(best, score)
    return best


def select_relevant_companies(
    query: str,
    companies: Sequence[Any],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> list[Any]:
    """Companies the query most likely refers to, best match first.

    Accepts :class:`~cement_carbon.analytics.models.Company` records or raw
    dicts. Falls back to every company when nothing clears ``threshold``.
    """
    normalized = normalize_text(query)
    if not normalized:
        return list(companies)
    tokens = [token for token in normalized.split(" ") if token]

    scored = sorted(
        ((score_company(tokens, company), company) for company in companies),
        key=lambda pair: pair[0],
        reverse=True,
    )
    selected = [company for score, company in scored if score >= threshold]
    logger.debug("Query {!r} matched {} of {} companies", query, len(selected), len(companies))
    return selected or list(companies)


__all__ = [
    "company_aliases",
    "levenshtein",
    "normalize_text",
    "score_company",
    "select_relevant_companies",
    "similarity",
]
