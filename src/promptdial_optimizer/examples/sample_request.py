"""Helpers that expose the bundled five-variant sample request."""

from __future__ import annotations

import copy
from typing import Any, Mapping

_SAMPLE_VARIANTS: tuple[Mapping[str, Any], ...] = (
    {
        "variant": {
            "id": "gpt4-detailed",
            "technique": "FewShot_CoT",
            "prompt": "High quality detailed prompt with examples...",
            "cost_usd": 0.06,
            "latency_ms": 3000,
        },
        "evaluation": {
            "variant_id": "gpt4-detailed",
            "scores": {"g_eval": 0.95, "chat_eval": 0.92},
            "final_score": 0.94,
            "confidence_interval": [0.91, 0.97],
        },
    },
    {
        "variant": {
            "id": "gpt35-fast",
            "technique": "ReAct",
            "prompt": "Quick and efficient prompt...",
            "cost_usd": 0.002,
            "latency_ms": 800,
        },
        "evaluation": {
            "variant_id": "gpt35-fast",
            "scores": {"g_eval": 0.78, "chat_eval": 0.75},
            "final_score": 0.77,
            "confidence_interval": [0.74, 0.8],
        },
    },
    {
        "variant": {
            "id": "claude-balanced",
            "technique": "SelfConsistency",
            "prompt": "Balanced approach with voting...",
            "cost_usd": 0.015,
            "latency_ms": 1500,
        },
        "evaluation": {
            "variant_id": "claude-balanced",
            "scores": {"g_eval": 0.88, "self_consistency": 0.91},
            "final_score": 0.89,
            "confidence_interval": [0.86, 0.92],
        },
    },
    {
        "variant": {
            "id": "mixtral-creative",
            "technique": "TreeOfThought",
            "prompt": "Creative exploration prompt...",
            "cost_usd": 0.008,
            "latency_ms": 2000,
        },
        "evaluation": {
            "variant_id": "mixtral-creative",
            "scores": {"g_eval": 0.82, "chat_eval": 0.85},
            "final_score": 0.83,
            "confidence_interval": [0.8, 0.86],
        },
    },
    {
        "variant": {
            "id": "gemini-efficient",
            "technique": "IRCoT",
            "prompt": "Efficient reasoning prompt...",
            "cost_usd": 0.004,
            "latency_ms": 1200,
        },
        "evaluation": {
            "variant_id": "gemini-efficient",
            "scores": {"g_eval": 0.85, "chat_eval": 0.83},
            "final_score": 0.84,
            "confidence_interval": [0.81, 0.87],
        },
    },
)


def sample_variants() -> list[dict[str, Any]]:
    """Return a fresh copy of the sample variant/evaluation pairs."""

    return [copy.deepcopy(dict(entry)) for entry in _SAMPLE_VARIANTS]


def sample_request(**overrides: Any) -> dict[str, Any]:
    """Return a request document over :func:`sample_variants`.

    ``overrides`` are merged at the top level, e.g. ``selection_mode`` or
    ``constraints``.
    """

    request: dict[str, Any] = {"variants": sample_variants()}
    request.update(overrides)
    return request
