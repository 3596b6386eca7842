"""Exporter registry for optimisation results."""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from io import StringIO
from typing import Any, Dict, Mapping, Protocol, Sequence


class Exporter(Protocol):
    """Exporter callable protocol."""

    def __call__(self, results: Dict[str, Any]) -> str:  # pragma: no cover - interface only
        ...


def _normalise(value: Any) -> Any:
    if hasattr(value, "as_dict") and callable(value.as_dict):
        return _normalise(value.as_dict())
    if is_dataclass(value) and not isinstance(value, type):
        return _normalise(asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_normalise(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _normalise(item) for key, item in value.items()}
    return value


def _solutions(results: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    entries = results.get("pareto_frontier", [])
    if not isinstance(entries, Sequence):
        raise TypeError("Exporters expect 'pareto_frontier' to be a sequence")
    return [_normalise(entry) for entry in entries]


def json_exporter(results: Dict[str, Any]) -> str:
    payload = _normalise(results)
    return json.dumps(payload, indent=2, sort_keys=True)


def csv_exporter(results: Dict[str, Any]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["variant_id", "quality", "cost", "latency", "recommended"])
    recommended = _normalise(results.get("recommended")) or {}
    recommended_id = recommended.get("variant_id") if isinstance(recommended, Mapping) else None
    for entry in _solutions(results):
        objectives = entry.get("objectives", {})
        flag = "yes" if entry.get("variant_id") == recommended_id else "no"
        writer.writerow(
            [
                entry.get("variant_id"),
                f"{objectives.get('quality', 0.0):.4f}",
                f"{objectives.get('cost', 0.0):.4f}",
                f"{objectives.get('latency', 0.0):.4f}",
                flag,
            ]
        )
    return buffer.getvalue()


def _escape_cell(value: Any) -> str:
    return str(value).replace("|", "\\|")


def markdown_exporter(results: Dict[str, Any]) -> str:
    """Render the frontier as a Markdown table followed by the trade-offs."""

    recommended = _normalise(results.get("recommended"))
    recommended_id = recommended.get("variant_id") if isinstance(recommended, Mapping) else None

    lines = [
        "| Variant | Quality | Cost | Latency |",
        "| --- | --- | --- | --- |",
    ]
    for entry in _solutions(results):
        objectives = entry.get("objectives", {})
        variant_id = entry.get("variant_id", "-")
        label = _escape_cell(variant_id)
        if variant_id == recommended_id:
            label = f"**{label}**"
        lines.append(
            f"| {label} | {objectives.get('quality', 0.0):.3f} | "
            f"{objectives.get('cost', 0.0):.3f} | {objectives.get('latency', 0.0):.3f} |"
        )

    if recommended_id is not None:
        lines.append("")
        lines.append(f"**Recommended**: {recommended_id}")

    trade_offs = _normalise(results.get("trade_offs", [])) or []
    if trade_offs:
        lines.append("")
        lines.append("**Trade-offs**")
        for entry in trade_offs:
            lines.append(
                f"- {entry.get('from_variant_id')} → {entry.get('to_variant_id')}: "
                f"{entry.get('recommendation_text')}"
            )
    return "\n".join(lines)


exporters_registry: Dict[str, Exporter] = {
    "json": json_exporter,
    "csv": csv_exporter,
    "markdown": markdown_exporter,
}

__all__ = [
    "Exporter",
    "csv_exporter",
    "exporters_registry",
    "json_exporter",
    "markdown_exporter",
]
