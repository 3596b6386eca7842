"""Factories producing solutions, descriptors and request entries."""

from __future__ import annotations

from typing import Any, Optional

from promptdial_optimizer.models import (
    EvaluationDescriptor,
    ObjectiveVector,
    Solution,
    VariantDescriptor,
)


def make_solution(variant_id: str, quality: float, cost: float, latency: float) -> Solution:
    return Solution(
        variant_id=variant_id,
        objectives=ObjectiveVector(quality=quality, cost=cost, latency=latency),
    )


def make_pair(
    variant_id: str,
    cost_usd: float,
    latency_ms: Optional[float],
    score: float,
) -> tuple[VariantDescriptor, EvaluationDescriptor]:
    return (
        VariantDescriptor(id=variant_id, cost_usd=cost_usd, latency_ms=latency_ms),
        EvaluationDescriptor(variant_id=variant_id, final_score=score),
    )


def make_entry(
    variant_id: str,
    cost_usd: float,
    latency_ms: Optional[float],
    score: float,
) -> dict[str, Any]:
    """Return a request document entry for one variant."""

    variant: dict[str, Any] = {"id": variant_id, "cost_usd": cost_usd}
    if latency_ms is not None:
        variant["latency_ms"] = latency_ms
    return {
        "variant": variant,
        "evaluation": {"variant_id": variant_id, "final_score": score},
    }


DOMINATED_EXCLUSION_CASE: tuple[tuple[str, float, float, float], ...] = (
    ("v1", 0.9, 0.8, 0.2),
    ("v2", 0.8, 0.5, 0.3),
    ("v3", 0.7, 0.3, 0.4),
    ("v4", 0.6, 0.6, 0.5),
    ("v5", 0.95, 0.9, 0.1),
)

KNEE_POINT_VARIANTS: tuple[dict[str, Any], ...] = (
    make_entry("extreme-quality", 0.1, 5000, 0.99),
    make_entry("extreme-speed", 0.001, 100, 0.7),
    make_entry("balanced", 0.01, 1000, 0.85),
)
