from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

# Characters after which a match counts as a word-boundary match
SEPARATORS = frozenset(" -_./")

MATCH_SCORE = 1
CONSECUTIVE_BONUS = 3
BOUNDARY_BONUS = 2
GAP_PENALTY = 1
MAX_GAP_PENALTY = 3


@dataclass(frozen=True)
class Candidate:
    """One selectable item: a display label plus an opaque identifier."""

    label: str
    identifier: str

    @classmethod
    def from_name(cls, name: str) -> "Candidate":
        return cls(label=name, identifier=name)


@dataclass(frozen=True)
class RankedItem:
    candidate: Candidate
    score: int
    positions: Tuple[int, ...]
    index: int  # position in the original enumeration


def as_candidates(items: Iterable[Union[str, Candidate]]) -> Tuple[Candidate, ...]:
    """Normalize application names (or ready-made candidates) to a tuple."""
    return tuple(
        item if isinstance(item, Candidate) else Candidate.from_name(item)
        for item in items
    )


def fuzzy_match(query: str, text: str) -> Tuple[bool, int, Tuple[int, ...]]:
    """Return (matched, score, positions) for *query* against *text*.

    Every character of *query* must appear in *text* in order
    (case-insensitive).  Whitespace in *query* is an ordinary character and
    has to be matched like any other.  The score rewards:
    * every matched character  (+1)
    * consecutive character runs  (+3 each)
    * matches at the start of *text* or after a separator  (+2 each)

    and penalizes the characters skipped between two matches (-1 each,
    at most -3 per gap).  Scores never go below zero.

    *positions* holds the offsets of the matched characters in *text*.
    """
    if not query:
        return True, 0, ()
    if len(query) > len(text):
        return False, 0, ()

    query_chars = [ch.lower() for ch in query]

    qi = 0  # index into query
    score = 0
    prev_match_idx = -1
    positions: List[int] = []

    for ti, ch in enumerate(text):
        if qi == len(query_chars):
            break
        if ch.lower() != query_chars[qi]:
            continue

        score += MATCH_SCORE
        if positions:
            gap = ti - prev_match_idx - 1
            if gap == 0:
                score += CONSECUTIVE_BONUS
            else:
                score -= min(MAX_GAP_PENALTY, gap * GAP_PENALTY)
        if ti == 0 or text[ti - 1] in SEPARATORS:
            score += BOUNDARY_BONUS

        positions.append(ti)
        prev_match_idx = ti
        qi += 1

    if qi < len(query_chars):
        return False, 0, ()

    return True, max(0, score), tuple(positions)


def fuzzy_filter(
    query: str,
    candidates: Sequence[Candidate],
) -> List[RankedItem]:
    """Return the *candidates* that fuzzy-match *query*, sorted best-first.

    Ties break by shorter label, then by original order.  An empty query
    keeps every candidate in its original order.
    """
    if not query:
        return [RankedItem(c, 0, (), i) for i, c in enumerate(candidates)]

    ranked: List[RankedItem] = []
    for i, c in enumerate(candidates):
        matched, score, positions = fuzzy_match(query, c.label)
        if matched:
            ranked.append(RankedItem(c, score, positions, i))

    ranked.sort(key=lambda r: (-r.score, len(r.candidate.label), r.index))
    logger.debug(
        "Query %r matched %d/%d candidates", query, len(ranked), len(candidates)
    )
    return ranked

