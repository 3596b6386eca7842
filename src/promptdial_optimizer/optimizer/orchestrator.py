"""Compose normalisation, filtering, frontier and selection into ``optimize``."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional, Sequence

from ..configuration import OptimizerSettings
from ..errors import MissingPreferences, NoFeasibleSolutions
from ..models import (
    OptimizationRequest,
    OptimizationResult,
    Preferences,
    SelectionMode,
    Solution,
    TradeOff,
)
from .constraints import apply_constraints, normalize_constraints
from .dominance import find_pareto_frontier
from .knee import find_knee_point
from .normalizer import build_solutions
from .preference import select_by_preference
from .tradeoffs import analyze_trade_offs

__all__ = ["ParetoOptimizer", "optimize"]

logger = logging.getLogger(__name__)


class ParetoOptimizer:
    """Stateless multi-objective optimiser for scored prompt variants.

    Every call to :meth:`optimize` works on its own input only, so a single
    instance can be shared across threads.
    """

    __slots__ = ("settings",)

    def __init__(self, settings: Optional[OptimizerSettings] = None) -> None:
        self.settings = settings or OptimizerSettings()

    def feasible_solutions(self, request: OptimizationRequest) -> list[Solution]:
        """Normalise the request candidates and drop constraint violations."""

        solutions = build_solutions(request.variants, self.settings)
        if request.constraints is None:
            return solutions
        bounds = normalize_constraints(request.constraints, self.settings)
        feasible = apply_constraints(solutions, bounds)
        if not feasible:
            raise NoFeasibleSolutions(
                "No variants satisfy the given constraints",
                context={"variants": len(solutions), **request.constraints.as_dict()},
            )
        return feasible

    def select_recommended(
        self,
        frontier: Sequence[Solution],
        preferences: Optional[Preferences],
        mode: SelectionMode,
    ) -> Solution:
        """Pick the recommendation from ``frontier`` according to ``mode``."""

        if not frontier:
            raise NoFeasibleSolutions("No variants available to recommend")
        if len(frontier) == 1:
            return frontier[0]

        if mode is SelectionMode.UTILITY:
            if preferences is None:
                raise MissingPreferences(
                    "Preferences required for utility mode",
                    context={"selection_mode": mode.value},
                )
            return select_by_preference(frontier, preferences)
        if mode is SelectionMode.PARETO:
            return find_knee_point(frontier)
        if mode is SelectionMode.BALANCED:
            if preferences is not None:
                return select_by_preference(frontier, preferences)
            return find_knee_point(frontier)
        raise ValueError(f"Unhandled selection mode: {mode!r}")

    def find_alternatives(
        self, frontier: Sequence[Solution], recommended: Solution
    ) -> list[Solution]:
        """Return up to ``max_alternatives`` other frontier members in frontier order."""

        others = [entry for entry in frontier if entry.variant_id != recommended.variant_id]
        return others[: self.settings.max_alternatives]

    def analyze_alternatives(
        self, recommended: Solution, alternatives: Sequence[Solution]
    ) -> list[TradeOff]:
        return [
            analyze_trade_offs(
                recommended,
                alternative,
                threshold=self.settings.materiality_threshold,
            )
            for alternative in alternatives
        ]

    def optimize(self, request: OptimizationRequest | Mapping[str, Any]) -> OptimizationResult:
        """Return the frontier, recommendation, alternatives and trade-offs."""

        if not isinstance(request, OptimizationRequest):
            request = OptimizationRequest.from_mapping(request)

        started = time.perf_counter()
        feasible = self.feasible_solutions(request)
        frontier = find_pareto_frontier(feasible)
        recommended = self.select_recommended(
            frontier, request.preferences, request.selection_mode
        )
        alternatives = self.find_alternatives(frontier, recommended)
        trade_offs = self.analyze_alternatives(recommended, alternatives)
        duration_ms = (time.perf_counter() - started) * 1000.0

        logger.info(
            "Optimization complete",
            extra={
                "variants": len(request.variants),
                "frontier_size": len(frontier),
                "recommended": recommended.variant_id,
                "selection_mode": request.selection_mode.value,
                "duration_ms": round(duration_ms, 3),
            },
        )
        return OptimizationResult(
            pareto_frontier=tuple(frontier),
            recommended=recommended,
            alternatives=tuple(alternatives),
            trade_offs=tuple(trade_offs),
        )


def optimize(
    request: OptimizationRequest | Mapping[str, Any],
    settings: Optional[OptimizerSettings] = None,
) -> OptimizationResult:
    """Run :meth:`ParetoOptimizer.optimize` with ``settings``."""

    return ParetoOptimizer(settings).optimize(request)
