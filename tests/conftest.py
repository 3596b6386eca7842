from __future__ import annotations

import logging
import sys
from pathlib import Path
from textwrap import dedent
from typing import Iterator

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers installed by CLI runs so records reach ``caplog``."""

    yield
    logger = logging.getLogger("promptdial_optimizer")
    for handler in list(logger.handlers):
        if getattr(handler, "_promptdial_managed", False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run inside an empty directory with no configuration override."""

    monkeypatch.delenv("PROMPTDIAL_OPTIMIZER_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
