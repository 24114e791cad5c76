"""Name normalization and fuzzy matching.

Similarity is the Sørensen–Dice coefficient over character bigrams, the
same measure used by the ``string-similarity`` family of libraries:

    dice(a, b) = 2 * |bigrams(a) ∩ bigrams(b)| / (|bigrams(a)| + |bigrams(b)|)

Bigrams are counted as multisets, so the score is symmetric. Whitespace is
ignored and comparison is case-insensitive.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_WHITESPACE_RE = re.compile(r"\s+")


class NoCandidatesError(ValueError):
    """Raised when a best-match lookup is given nothing to match against."""


@dataclass(frozen=True)
class MatchResult:
    candidate: str
    score: float
    index: int


def normalize(text: str) -> str:
    """Lowercase and drop everything outside ``[a-z0-9]``.

    Example: "Fire-Breathing Dragon!!" → "firebreathingdragon"
    """
    return _NON_ALNUM_RE.sub("", text.lower())


def _bigrams(text: str) -> Counter[str]:
    return Counter(text[i:i + 2] for i in range(len(text) - 1))


def similarity(first: str, second: str) -> float:
    """Dice coefficient of two strings in [0, 1]."""
    a = _WHITESPACE_RE.sub("", first).casefold()
    b = _WHITESPACE_RE.sub("", second).casefold()

    if a == b:
        return 1.0 if a else 0.0
    if len(a) < 2 or len(b) < 2:
        return 0.0

    overlap = sum((_bigrams(a) & _bigrams(b)).values())
    return 2.0 * overlap / (len(a) + len(b) - 2)


def find_best_match(query: str, candidates: Sequence[str]) -> MatchResult:
    """Return the candidate most similar to ``query``.

    Ties go to the earliest candidate in ``candidates``.

    Raises:
        NoCandidatesError: ``candidates`` is empty.
    """
    if not candidates:
        raise NoCandidatesError(f"No candidates to match {query!r} against")

    best_index = 0
    best_score = -1.0
    for index, candidate in enumerate(candidates):
        score = similarity(query, candidate)
        if score > best_score:
            best_index, best_score = index, score

    return MatchResult(candidate=candidates[best_index], score=best_score, index=best_index)
