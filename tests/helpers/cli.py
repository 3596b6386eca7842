"""CLI-related test helpers."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest
import yaml

from promptdial_optimizer.cli import run_cli as _run_cli


def write_request(directory: Path, document: Mapping[str, Any], *, name: str = "request.json") -> Path:
    """Serialise ``document`` as JSON or YAML depending on ``name``."""

    target = directory / name
    if target.suffix in {".yaml", ".yml"}:
        target.write_text(yaml.safe_dump(dict(document), sort_keys=False), encoding="utf8")
    else:
        target.write_text(json.dumps(document), encoding="utf8")
    return target


def run_cli_in_tmp(
    args: Sequence[str] | Iterable[str],
    *,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> str:
    """Execute ``run_cli`` from within ``tmp_path`` logging into a file there.

    The configuration override environment variable is cleared so that only
    files under ``tmp_path`` (or an explicit ``--config``) are consulted.
    """

    monkeypatch.delenv("PROMPTDIAL_OPTIMIZER_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    log_path = tmp_path / "optimizer.log"
    return _run_cli(["--log-output", str(log_path), *args])
