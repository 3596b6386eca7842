"""Map scored variants into the shared objective space."""

from __future__ import annotations

from typing import Iterable

from ..configuration import OptimizerSettings
from ..models import EvaluationDescriptor, ObjectiveVector, Solution, VariantDescriptor

__all__ = ["NEUTRAL_LATENCY", "build_solutions", "compute_objectives"]

#: Latency assigned to variants whose latency was never measured.
NEUTRAL_LATENCY = 0.5


def compute_objectives(
    variant: VariantDescriptor,
    evaluation: EvaluationDescriptor,
    *,
    cost_cap_usd: float,
    latency_cap_ms: float,
) -> ObjectiveVector:
    """Return the objective vector of ``variant``.

    ``final_score`` is used verbatim; it is bounded by the evaluator and is
    not clamped here. Cost and latency are divided by their caps and clamped
    at ``1``. NaN or negative inputs are passed through unchanged.
    """

    cost = min(variant.cost_usd / cost_cap_usd, 1.0)
    if variant.latency_ms is None:
        latency = NEUTRAL_LATENCY
    else:
        latency = min(variant.latency_ms / latency_cap_ms, 1.0)
    return ObjectiveVector(quality=evaluation.final_score, cost=cost, latency=latency)


def build_solutions(
    pairs: Iterable[tuple[VariantDescriptor, EvaluationDescriptor]],
    settings: OptimizerSettings,
) -> list[Solution]:
    """Wrap every ``(variant, evaluation)`` pair into a :class:`Solution`."""

    return [
        Solution(
            variant_id=variant.id,
            objectives=compute_objectives(
                variant,
                evaluation,
                cost_cap_usd=settings.cost_cap_usd,
                latency_cap_ms=settings.latency_cap_ms,
            ),
            variant=variant,
            evaluation=evaluation,
        )
        for variant, evaluation in pairs
    ]
