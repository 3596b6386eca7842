"""Configuration and request document helpers for the optimiser CLI."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from ..configuration import load_project_config
from .errors import CliError

CONFIG_ENV_VAR = "PROMPTDIAL_OPTIMIZER_CONFIG"
PROJECT_CONFIG_FILENAME = "pyproject.toml"

_YAML_SUFFIXES = {".yaml", ".yml"}


def _iter_unique_paths(candidates: List[Path]) -> List[Path]:
    seen: Dict[Path, None] = {}
    ordered: List[Path] = []
    for candidate in candidates:
        resolved = candidate.expanduser().resolve(strict=False)
        if resolved in seen:
            continue
        seen[resolved] = None
        ordered.append(resolved)
    return ordered


def _pyproject_candidates(base: Path) -> List[Path]:
    base = base.expanduser()
    if base.name == PROJECT_CONFIG_FILENAME:
        return [base]
    if base.suffix:
        return []
    return [base / PROJECT_CONFIG_FILENAME]


def _with_source(payload: Mapping[str, Any], source: Path) -> Dict[str, Any]:
    data = {str(key): value for key, value in payload.items()}
    data["_config_path"] = str(source.expanduser().resolve())
    return data


def load_cli_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load CLI defaults from ``pyproject.toml`` files.

    An explicit ``path`` wins over ``PROMPTDIAL_OPTIMIZER_CONFIG``, which wins
    over the current working directory.
    """

    env_config = os.environ.get(CONFIG_ENV_VAR)
    env_path = Path(env_config) if env_config else None

    explicit_bases: List[Path] = []
    if path is not None:
        explicit_bases.append(path)
    if env_path is not None:
        explicit_bases.append(env_path)

    for base in explicit_bases + [Path.cwd()]:
        for candidate in _iter_unique_paths(_pyproject_candidates(base)):
            loaded = load_project_config(candidate)
            if not loaded:
                continue
            payload, resolved = loaded
            return _with_source(payload, resolved)

    return {"_config_path": None}


def load_request(source: Path) -> Dict[str, Any]:
    """Decode the JSON or YAML request document stored at ``source``."""

    if not source.exists():
        raise CliError(
            f"Request file not found: {source}",
            category="not_found",
            context={"path": str(source)},
        )
    text = source.read_text(encoding="utf-8")
    try:
        if source.suffix.lower() in _YAML_SUFFIXES:
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CliError(
            f"Unable to parse request file {source}: {exc}",
            category="io",
            context={"path": str(source)},
        ) from exc
    if not isinstance(payload, Mapping):
        raise CliError(
            f"Request file {source} must contain a mapping at the top level.",
            category="usage",
            context={"path": str(source)},
        )
    return dict(payload)


__all__ = ["CONFIG_ENV_VAR", "load_cli_config", "load_request"]
