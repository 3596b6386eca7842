"""Pareto dominance between solutions and frontier extraction.

Quality is maximised while cost and latency are minimised. The frontier is
computed with an all-pairs scan, which is adequate for the tens of
candidates a single request carries.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..models import Solution

__all__ = ["dominated_by", "dominates", "find_pareto_frontier"]

logger = logging.getLogger(__name__)


def _axis_outcomes(a: Solution, b: Solution) -> tuple[int, int]:
    """Return how many axes ``a`` wins and loses against ``b``."""

    better = 0
    worse = 0
    pairs = (
        (a.objectives.quality, b.objectives.quality),
        # Cost and latency are negated so that "greater" always means better.
        (-a.objectives.cost, -b.objectives.cost),
        (-a.objectives.latency, -b.objectives.latency),
    )
    for mine, theirs in pairs:
        if mine > theirs:
            better += 1
        elif mine < theirs:
            worse += 1
    return better, worse


def dominates(a: Solution, b: Solution) -> bool:
    """Return ``True`` if ``a`` dominates ``b``.

    ``a`` dominates ``b`` when it is no worse on every objective and strictly
    better on at least one. The relation is irreflexive and asymmetric.
    """

    better, worse = _axis_outcomes(a, b)
    return better > 0 and worse == 0


def dominated_by(candidate: Solution, solutions: Sequence[Solution]) -> list[str]:
    """Return the ids of the members of ``solutions`` dominating ``candidate``."""

    return [other.variant_id for other in solutions if dominates(other, candidate)]


def find_pareto_frontier(solutions: Sequence[Solution]) -> list[Solution]:
    """Filter ``solutions`` keeping only non-dominated entries.

    The result is a new list ordered by descending quality; the sort is
    stable so ties keep their input order.
    """

    if len(solutions) <= 1:
        return list(solutions)

    front = [
        candidate
        for candidate in solutions
        if not any(dominates(other, candidate) for other in solutions)
    ]
    front.sort(key=lambda entry: entry.objectives.quality, reverse=True)

    if logger.isEnabledFor(logging.DEBUG):
        for candidate in solutions:
            dominators = dominated_by(candidate, solutions)
            if dominators:
                logger.debug(
                    "Excluded dominated variant %s",
                    candidate.variant_id,
                    extra={"variant_id": candidate.variant_id, "dominated_by": dominators},
                )
    logger.info(
        "Found Pareto frontier with %d solutions out of %d",
        len(front),
        len(solutions),
        extra={"frontier_size": len(front), "total_solutions": len(solutions)},
    )
    return front
