"""Pick the closest blanket, and its paired liner, for a target fill weight."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from models.inventory import Blanket, Liner


@dataclass(frozen=True)
class BlanketCandidate:
    blanket: Blanket
    liner: Optional[Liner]
    effective_grams: int


@dataclass(frozen=True)
class BlanketMatch:
    """Outcome of inventory matching; both references are None for an empty inventory."""

    blanket: Optional[Blanket]
    liner: Optional[Liner]
    combined_grams: int
    waterproof_satisfied: bool


EMPTY_MATCH = BlanketMatch(blanket=None, liner=None, combined_grams=0, waterproof_satisfied=False)


def build_liner_index(liners: Iterable[Liner], include_liners: bool = True) -> Dict[str, Liner]:
    """Map blanket id to its paired liner.

    Built fresh on every call. When two liners claim the same blanket the
    first one listed wins.
    """

    index: Dict[str, Liner] = {}
    if not include_liners:
        return index
    for liner in liners:
        if liner.paired_with_blanket_id is None:
            continue
        index.setdefault(liner.paired_with_blanket_id, liner)
    return index


def rank_candidates(
    blankets: Sequence[Blanket], liner_index: Dict[str, Liner], grams_needed: int
) -> List[BlanketCandidate]:
    """Order blankets by distance from ``grams_needed``; ties keep inventory order."""

    candidates = []
    for blanket in blankets:
        liner = liner_index.get(blanket.id)
        effective = blanket.grams + (liner.grams if liner else 0)
        candidates.append(BlanketCandidate(blanket=blanket, liner=liner, effective_grams=effective))
    return sorted(candidates, key=lambda candidate: abs(candidate.effective_grams - grams_needed))


def match_blanket(
    blankets: Sequence[Blanket],
    liners: Iterable[Liner],
    grams_needed: int,
    needs_waterproof: bool,
    include_liners: bool = True,
) -> BlanketMatch:
    """Select the closest blanket honouring the waterproof requirement.

    Falls back to the closest blanket overall when nothing waterproof exists.
    """

    ranked = rank_candidates(blankets, build_liner_index(liners, include_liners), grams_needed)
    if not ranked:
        return EMPTY_MATCH

    for candidate in ranked:
        if needs_waterproof and not candidate.blanket.waterproof:
            continue
        return BlanketMatch(
            blanket=candidate.blanket,
            liner=candidate.liner,
            combined_grams=candidate.effective_grams,
            waterproof_satisfied=True,
        )

    closest = ranked[0]
    return BlanketMatch(
        blanket=closest.blanket,
        liner=closest.liner,
        combined_grams=closest.effective_grams,
        waterproof_satisfied=False,
    )


__all__ = [
    "BlanketCandidate",
    "BlanketMatch",
    "EMPTY_MATCH",
    "build_liner_index",
    "rank_candidates",
    "match_blanket",
]
