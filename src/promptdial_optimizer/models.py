"""Immutable data model shared by the optimisation engine.

Objective vectors are stored in natural units: ``quality`` grows with
better candidates while ``cost`` and ``latency`` shrink. The inversion needed
for utility scoring happens at the use-site, never in storage.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence

from .errors import InvalidPreferenceWeights, InvalidRequest

__all__ = [
    "Constraints",
    "EvaluationDescriptor",
    "ObjectiveVector",
    "OptimizationRequest",
    "OptimizationResult",
    "Preferences",
    "SelectionMode",
    "Solution",
    "TradeOff",
    "VariantDescriptor",
]


def _coerce_float(value: Any, *, name: str) -> float:
    """Return ``value`` as ``float`` raising :class:`InvalidRequest` otherwise."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRequest(
            f"Field '{name}' must be a number, got {type(value).__name__}.",
            context={"field": name, "value": value},
        )
    return float(value)


def _optional_float(payload: Mapping[str, Any], key: str, *, name: str) -> Optional[float]:
    value = payload.get(key)
    if value is None:
        return None
    return _coerce_float(value, name=name)


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InvalidRequest(
            f"Field '{name}' must be a mapping.",
            context={"field": name},
        )
    return value


def _require_identifier(payload: Mapping[str, Any], key: str, *, name: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequest(
            f"Field '{name}' must be a non-empty string.",
            context={"field": name},
        )
    return value


class SelectionMode(Enum):
    """Policy used to pick the recommendation from the frontier."""

    PARETO = "pareto"
    UTILITY = "utility"
    BALANCED = "balanced"

    @classmethod
    def parse(cls, value: "SelectionMode | str | None") -> "SelectionMode":
        """Return the mode named by ``value``; ``None`` selects ``BALANCED``."""

        if value is None:
            return cls.BALANCED
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(member.value for member in cls)
        raise InvalidRequest(
            f"Unknown selection mode {value!r}; expected one of: {choices}.",
            context={"field": "selection_mode", "value": value},
        )


@dataclass(frozen=True, slots=True)
class ObjectiveVector:
    """Normalised quality, cost and latency of a single candidate."""

    quality: float
    cost: float
    latency: float

    def as_dict(self) -> dict[str, float]:
        return {"quality": self.quality, "cost": self.cost, "latency": self.latency}


@dataclass(frozen=True, slots=True)
class VariantDescriptor:
    """Prompt variant as produced by the generation services."""

    id: str
    cost_usd: float
    latency_ms: Optional[float] = None
    technique: Optional[str] = None
    prompt: Optional[str] = None
    model: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "VariantDescriptor":
        payload = _require_mapping(payload, name="variant")
        metadata = payload.get("metadata") or {}
        if not isinstance(metadata, Mapping):
            raise InvalidRequest(
                "Field 'variant.metadata' must be a mapping.",
                context={"field": "variant.metadata"},
            )
        return cls(
            id=_require_identifier(payload, "id", name="variant.id"),
            cost_usd=_coerce_float(payload.get("cost_usd"), name="variant.cost_usd"),
            latency_ms=_optional_float(payload, "latency_ms", name="variant.latency_ms"),
            technique=payload.get("technique"),
            prompt=payload.get("prompt"),
            model=payload.get("model"),
            metadata=dict(metadata),
        )

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, "cost_usd": self.cost_usd}
        if self.latency_ms is not None:
            payload["latency_ms"] = self.latency_ms
        for key in ("technique", "prompt", "model"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        if self.metadata:
            payload["metadata"] = dict(self.metadata)
        return payload


@dataclass(frozen=True, slots=True)
class EvaluationDescriptor:
    """Evaluator verdict for a variant; ``final_score`` lies in ``[0, 1]``."""

    variant_id: str
    final_score: float
    scores: Mapping[str, float] = field(default_factory=dict)
    confidence_interval: Optional[tuple[float, float]] = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "EvaluationDescriptor":
        payload = _require_mapping(payload, name="evaluation")
        raw_scores = payload.get("scores") or {}
        if not isinstance(raw_scores, Mapping):
            raise InvalidRequest(
                "Field 'evaluation.scores' must be a mapping.",
                context={"field": "evaluation.scores"},
            )
        scores = {
            str(key): _coerce_float(value, name=f"evaluation.scores.{key}")
            for key, value in raw_scores.items()
        }
        interval: Optional[tuple[float, float]] = None
        raw_interval = payload.get("confidence_interval")
        if raw_interval is not None:
            if not isinstance(raw_interval, Sequence) or len(raw_interval) != 2:
                raise InvalidRequest(
                    "Field 'evaluation.confidence_interval' must hold two numbers.",
                    context={"field": "evaluation.confidence_interval"},
                )
            lower, upper = raw_interval
            interval = (
                _coerce_float(lower, name="evaluation.confidence_interval"),
                _coerce_float(upper, name="evaluation.confidence_interval"),
            )
        return cls(
            variant_id=_require_identifier(payload, "variant_id", name="evaluation.variant_id"),
            final_score=_coerce_float(payload.get("final_score"), name="evaluation.final_score"),
            scores=scores,
            confidence_interval=interval,
        )

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "variant_id": self.variant_id,
            "final_score": self.final_score,
        }
        if self.scores:
            payload["scores"] = dict(self.scores)
        if self.confidence_interval is not None:
            payload["confidence_interval"] = list(self.confidence_interval)
        return payload


@dataclass(frozen=True, slots=True)
class Solution:
    """Candidate placed in objective space; identity is ``variant_id``."""

    variant_id: str
    objectives: ObjectiveVector
    variant: Optional[VariantDescriptor] = None
    evaluation: Optional[EvaluationDescriptor] = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "variant_id": self.variant_id,
            "objectives": self.objectives.as_dict(),
        }
        if self.variant is not None:
            payload["variant"] = self.variant.as_dict()
        if self.evaluation is not None:
            payload["evaluation"] = self.evaluation.as_dict()
        return payload


@dataclass(frozen=True, slots=True)
class Preferences:
    """Relative importance of each objective."""

    quality: float
    cost: float
    latency: float

    def __post_init__(self) -> None:
        for key in ("quality", "cost", "latency"):
            weight = getattr(self, key)
            if weight < 0:
                raise InvalidRequest(
                    f"Preference weight '{key}' must be non-negative.",
                    context={"field": f"preferences.{key}", "value": weight},
                )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Preferences":
        payload = _require_mapping(payload, name="preferences")
        return cls(
            **{
                key: _coerce_float(payload.get(key, 0.0), name=f"preferences.{key}")
                for key in ("quality", "cost", "latency")
            }
        )

    def normalized(self) -> "Preferences":
        """Return weights divided by their sum."""

        total = self.quality + self.cost + self.latency
        if not math.isfinite(total) or total <= 0:
            raise InvalidPreferenceWeights(
                "Preference weights must sum to a positive value.",
                context={
                    "quality": self.quality,
                    "cost": self.cost,
                    "latency": self.latency,
                },
            )
        return Preferences(
            quality=self.quality / total,
            cost=self.cost / total,
            latency=self.latency / total,
        )

    def as_dict(self) -> dict[str, float]:
        return {"quality": self.quality, "cost": self.cost, "latency": self.latency}


@dataclass(frozen=True, slots=True)
class Constraints:
    """Optional feasibility bounds.

    Bounds are expressed either in caller units (``max_cost`` in USD,
    ``max_latency`` in milliseconds) or, once converted by
    :func:`~promptdial_optimizer.optimizer.constraints.normalize_constraints`,
    in the normalised objective space.
    """

    min_quality: Optional[float] = None
    max_cost: Optional[float] = None
    max_latency: Optional[float] = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Constraints":
        payload = _require_mapping(payload, name="constraints")
        return cls(
            min_quality=_optional_float(payload, "min_quality", name="constraints.min_quality"),
            max_cost=_optional_float(payload, "max_cost", name="constraints.max_cost"),
            max_latency=_optional_float(payload, "max_latency", name="constraints.max_latency"),
        )

    @property
    def is_empty(self) -> bool:
        return self.min_quality is None and self.max_cost is None and self.max_latency is None

    def as_dict(self) -> dict[str, float]:
        payload: dict[str, float] = {}
        for key in ("min_quality", "max_cost", "max_latency"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


@dataclass(frozen=True, slots=True)
class TradeOff:
    """Comparison of moving from one solution to another."""

    from_variant_id: str
    to_variant_id: str
    quality_delta: float
    cost_delta: float
    latency_delta: float
    recommendation_text: str
    improvements: tuple[str, ...] = ()
    degradations: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "from_variant_id": self.from_variant_id,
            "to_variant_id": self.to_variant_id,
            "quality_delta": self.quality_delta,
            "cost_delta": self.cost_delta,
            "latency_delta": self.latency_delta,
            "recommendation_text": self.recommendation_text,
            "improvements": list(self.improvements),
            "degradations": list(self.degradations),
        }


VariantPair = tuple[VariantDescriptor, EvaluationDescriptor]


def _parse_pairs(entries: Any) -> tuple[VariantPair, ...]:
    if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
        raise InvalidRequest(
            "Field 'variants' must be a list of variant/evaluation pairs.",
            context={"field": "variants"},
        )
    pairs: list[VariantPair] = []
    for index, entry in enumerate(entries):
        entry = _require_mapping(entry, name=f"variants[{index}]")
        pairs.append(
            (
                VariantDescriptor.from_mapping(entry.get("variant")),
                EvaluationDescriptor.from_mapping(entry.get("evaluation")),
            )
        )
    return _validate_pairs(pairs)


def _validate_pairs(pairs: Iterable[VariantPair]) -> tuple[VariantPair, ...]:
    """Check evaluation pairing and id uniqueness of ``pairs``."""

    validated: list[VariantPair] = []
    seen: set[str] = set()
    for index, (variant, evaluation) in enumerate(pairs):
        if evaluation.variant_id != variant.id:
            raise InvalidRequest(
                f"Evaluation for '{evaluation.variant_id}' is paired with variant '{variant.id}'.",
                context={"index": index, "variant_id": variant.id},
            )
        if variant.id in seen:
            raise InvalidRequest(
                f"Variant id '{variant.id}' appears more than once.",
                context={"index": index, "variant_id": variant.id},
            )
        seen.add(variant.id)
        validated.append((variant, evaluation))
    return tuple(validated)


@dataclass(frozen=True, slots=True)
class OptimizationRequest:
    """Input of :func:`~promptdial_optimizer.optimizer.orchestrator.optimize`."""

    variants: tuple[VariantPair, ...]
    preferences: Optional[Preferences] = None
    constraints: Optional[Constraints] = None
    selection_mode: SelectionMode = SelectionMode.BALANCED

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "OptimizationRequest":
        """Build a request from a decoded JSON or YAML document."""

        payload = _require_mapping(payload, name="request")
        raw_preferences = payload.get("preferences")
        raw_constraints = payload.get("constraints")
        return cls(
            variants=_parse_pairs(payload.get("variants", ())),
            preferences=(
                Preferences.from_mapping(raw_preferences)
                if raw_preferences is not None
                else None
            ),
            constraints=(
                Constraints.from_mapping(raw_constraints)
                if raw_constraints is not None
                else None
            ),
            selection_mode=SelectionMode.parse(payload.get("selection_mode")),
        )

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[VariantPair],
        *,
        preferences: Optional[Preferences] = None,
        constraints: Optional[Constraints] = None,
        selection_mode: SelectionMode | str | None = None,
    ) -> "OptimizationRequest":
        return cls(
            variants=_validate_pairs(pairs),
            preferences=preferences,
            constraints=constraints,
            selection_mode=SelectionMode.parse(selection_mode),
        )


@dataclass(frozen=True, slots=True)
class OptimizationResult:
    """Frontier, recommendation, alternatives and their trade-offs."""

    pareto_frontier: tuple[Solution, ...]
    recommended: Solution
    alternatives: tuple[Solution, ...]
    trade_offs: tuple[TradeOff, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "pareto_frontier": [solution.as_dict() for solution in self.pareto_frontier],
            "recommended": self.recommended.as_dict(),
            "alternatives": [solution.as_dict() for solution in self.alternatives],
            "trade_offs": [trade_off.as_dict() for trade_off in self.trade_offs],
        }
