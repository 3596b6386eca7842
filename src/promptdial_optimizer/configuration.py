"""Helpers to load project-level configuration files."""

from __future__ import annotations

import math
from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11 fallback
    import tomli as tomllib  # type: ignore

from .errors import InvalidRequest


_PROJECT_FILENAME = "pyproject.toml"
_TOOL_SECTION = "promptdial_optimizer"

DEFAULT_COST_CAP_USD = 0.20
DEFAULT_LATENCY_CAP_MS = 6000.0
DEFAULT_MATERIALITY_THRESHOLD = 0.05
DEFAULT_MAX_ALTERNATIVES = 3


@dataclass(frozen=True, slots=True)
class OptimizerSettings:
    """Constants owned by the hosting service.

    ``cost_cap_usd`` and ``latency_cap_ms`` normalise both candidate
    objectives and incoming constraints; using different caps for the two
    would make constraint filtering unsound.
    """

    cost_cap_usd: float = DEFAULT_COST_CAP_USD
    latency_cap_ms: float = DEFAULT_LATENCY_CAP_MS
    materiality_threshold: float = DEFAULT_MATERIALITY_THRESHOLD
    max_alternatives: int = DEFAULT_MAX_ALTERNATIVES

    def __post_init__(self) -> None:
        for name in ("cost_cap_usd", "latency_cap_ms"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidRequest(
                    f"Setting '{name}' must be a positive number.",
                    context={"field": name, "value": value},
                )
        if not math.isfinite(self.materiality_threshold) or self.materiality_threshold < 0:
            raise InvalidRequest(
                "Setting 'materiality_threshold' must be non-negative.",
                context={"field": "materiality_threshold", "value": self.materiality_threshold},
            )
        if self.max_alternatives < 0:
            raise InvalidRequest(
                "Setting 'max_alternatives' must be non-negative.",
                context={"field": "max_alternatives", "value": self.max_alternatives},
            )

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None) -> "OptimizerSettings":
        """Build settings from the ``optimizer`` table of ``config``."""

        if not config:
            return cls()
        section = config.get("optimizer", {})
        if not isinstance(section, ABCMapping):
            raise InvalidRequest(
                "Configuration section 'optimizer' must be a table.",
                context={"field": "optimizer"},
            )
        values: dict[str, Any] = {}
        for name in ("cost_cap_usd", "latency_cap_ms", "materiality_threshold"):
            if name in section:
                values[name] = _as_number(section[name], name=name)
        if "max_alternatives" in section:
            raw = section["max_alternatives"]
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise InvalidRequest(
                    "Setting 'max_alternatives' must be an integer.",
                    context={"field": "max_alternatives", "value": raw},
                )
            values["max_alternatives"] = raw
        return cls(**values)

    def as_dict(self) -> dict[str, Any]:
        return {
            "cost_cap_usd": self.cost_cap_usd,
            "latency_cap_ms": self.latency_cap_ms,
            "materiality_threshold": self.materiality_threshold,
            "max_alternatives": self.max_alternatives,
        }


def _as_number(value: Any, *, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRequest(
            f"Setting '{name}' must be a number.",
            context={"field": name, "value": value},
        )
    return float(value)


def _as_dict(payload: ABCMapping[str, Any]) -> dict[str, Any]:
    """Recursively coerce TOML mappings into regular dictionaries."""

    result: dict[str, Any] = {}
    for key, value in payload.items():
        key_str = str(key)
        if isinstance(value, ABCMapping):
            result[key_str] = _as_dict(value)
        elif isinstance(value, list):
            result[key_str] = [
                _as_dict(item) if isinstance(item, ABCMapping) else item for item in value
            ]
        else:
            result[key_str] = value
    return result


def _resolve_pyproject_path(candidate: Path) -> Path | None:
    """Return the concrete ``pyproject.toml`` path for ``candidate`` if possible."""

    candidate = candidate.expanduser()
    if candidate.name == _PROJECT_FILENAME:
        return candidate
    if candidate.suffix:
        return None
    return candidate / _PROJECT_FILENAME


def _load_toml_mapping(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    if isinstance(data, ABCMapping):
        return _as_dict(data)
    return None


def load_project_config(path: Path) -> tuple[dict[str, Any], Path] | None:
    """Load the ``[tool.promptdial_optimizer]`` section from ``pyproject.toml``."""

    pyproject_path = _resolve_pyproject_path(path)
    if pyproject_path is None:
        return None

    pyproject_path = pyproject_path.expanduser().resolve(strict=False)
    pyproject_payload = _load_toml_mapping(pyproject_path)
    if not pyproject_payload:
        return None

    tool_section = pyproject_payload.get("tool")
    if not isinstance(tool_section, ABCMapping):
        return None

    section = tool_section.get(_TOOL_SECTION)
    if not isinstance(section, ABCMapping):
        return None

    return _as_dict(section), pyproject_path


__all__ = [
    "DEFAULT_COST_CAP_USD",
    "DEFAULT_LATENCY_CAP_MS",
    "DEFAULT_MATERIALITY_THRESHOLD",
    "DEFAULT_MAX_ALTERNATIVES",
    "OptimizerSettings",
    "load_project_config",
]
