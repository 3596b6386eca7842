"""Weighted-utility selection driven by caller preferences."""

from __future__ import annotations

import logging
from typing import Sequence

from ..models import Preferences, Solution

__all__ = ["calculate_utility", "select_by_preference"]

logger = logging.getLogger(__name__)


def calculate_utility(solution: Solution, weights: Preferences) -> float:
    """Return the utility of ``solution`` under normalised ``weights``.

    Cost and latency are inverted because lower values are better.
    """

    objectives = solution.objectives
    return (
        objectives.quality * weights.quality
        + (1.0 - objectives.cost) * weights.cost
        + (1.0 - objectives.latency) * weights.latency
    )


def select_by_preference(solutions: Sequence[Solution], preferences: Preferences) -> Solution:
    """Return the solution maximising utility; the first one wins ties."""

    if not solutions:
        raise ValueError("Cannot select from an empty set of solutions.")

    weights = preferences.normalized()
    best_solution = solutions[0]
    best_utility = calculate_utility(best_solution, weights)
    for solution in solutions[1:]:
        utility = calculate_utility(solution, weights)
        if utility > best_utility:
            best_utility = utility
            best_solution = solution

    logger.info(
        "Selected variant %s with utility %.3f",
        best_solution.variant_id,
        best_utility,
        extra={"variant_id": best_solution.variant_id, "utility": best_utility},
    )
    return best_solution
