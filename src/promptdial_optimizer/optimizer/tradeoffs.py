"""Narrative comparison between two solutions."""

from __future__ import annotations

from ..configuration import DEFAULT_MATERIALITY_THRESHOLD
from ..models import Solution, TradeOff

__all__ = ["MATERIALITY_THRESHOLD", "analyze_trade_offs", "classify"]

#: Deltas at or below this magnitude are treated as noise.
MATERIALITY_THRESHOLD = DEFAULT_MATERIALITY_THRESHOLD


def _percent(delta: float) -> str:
    return f"{abs(delta) * 100:.1f}%"


def classify(improvements: tuple[str, ...], degradations: tuple[str, ...]) -> str:
    """Return the recommendation sentence for the given phrase lists."""

    gains = ", ".join(improvements)
    losses = ", ".join(degradations)
    if improvements and not degradations:
        return f"Strongly recommended: {gains}"
    if len(improvements) > len(degradations):
        return f"Recommended: {gains} but {losses}"
    if improvements and len(improvements) == len(degradations):
        return f"Trade-off: {gains} vs {losses}"
    return f"Not recommended: {losses}"


def analyze_trade_offs(
    from_: Solution,
    to: Solution,
    *,
    threshold: float = MATERIALITY_THRESHOLD,
) -> TradeOff:
    """Describe what changes when moving from ``from_`` to ``to``.

    Deltas are signed as ``to - from_``. Quality improves when its delta is
    positive, cost and latency when theirs is negative.
    """

    quality_delta = to.objectives.quality - from_.objectives.quality
    cost_delta = to.objectives.cost - from_.objectives.cost
    latency_delta = to.objectives.latency - from_.objectives.latency

    improvements: list[str] = []
    degradations: list[str] = []

    if quality_delta > threshold:
        improvements.append(f"{_percent(quality_delta)} better quality")
    elif quality_delta < -threshold:
        degradations.append(f"{_percent(quality_delta)} worse quality")

    if cost_delta < -threshold:
        improvements.append(f"{_percent(cost_delta)} cheaper")
    elif cost_delta > threshold:
        degradations.append(f"{_percent(cost_delta)} more expensive")

    if latency_delta < -threshold:
        improvements.append(f"{_percent(latency_delta)} faster")
    elif latency_delta > threshold:
        degradations.append(f"{_percent(latency_delta)} slower")

    gains = tuple(improvements)
    losses = tuple(degradations)
    return TradeOff(
        from_variant_id=from_.variant_id,
        to_variant_id=to.variant_id,
        quality_delta=quality_delta,
        cost_delta=cost_delta,
        latency_delta=latency_delta,
        recommendation_text=classify(gains, losses),
        improvements=gains,
        degradations=losses,
    )
