"""Feasibility filtering against caller supplied bounds."""

from __future__ import annotations

import logging
from typing import Sequence

from ..configuration import OptimizerSettings
from ..models import Constraints, Solution

__all__ = ["apply_constraints", "normalize_constraints", "satisfies"]

logger = logging.getLogger(__name__)


def normalize_constraints(constraints: Constraints, settings: OptimizerSettings) -> Constraints:
    """Convert ``constraints`` from caller units into objective space.

    ``min_quality`` is already expressed on the evaluator scale. ``max_cost``
    and ``max_latency`` are divided by the caps used to normalise solutions.
    """

    return Constraints(
        min_quality=constraints.min_quality,
        max_cost=(
            constraints.max_cost / settings.cost_cap_usd
            if constraints.max_cost is not None
            else None
        ),
        max_latency=(
            constraints.max_latency / settings.latency_cap_ms
            if constraints.max_latency is not None
            else None
        ),
    )


def satisfies(solution: Solution, constraints: Constraints) -> bool:
    """Return ``True`` when ``solution`` meets every bound present in ``constraints``."""

    objectives = solution.objectives
    if constraints.min_quality is not None and objectives.quality < constraints.min_quality:
        return False
    if constraints.max_cost is not None and objectives.cost > constraints.max_cost:
        return False
    if constraints.max_latency is not None and objectives.latency > constraints.max_latency:
        return False
    return True


def apply_constraints(solutions: Sequence[Solution], constraints: Constraints) -> list[Solution]:
    """Return the members of ``solutions`` satisfying ``constraints``.

    ``constraints`` must already be expressed in objective space.
    """

    feasible = [solution for solution in solutions if satisfies(solution, constraints)]
    logger.info(
        "Constraints kept %d of %d solutions",
        len(feasible),
        len(solutions),
        extra={"feasible": len(feasible), "total_solutions": len(solutions)},
    )
    return feasible
