"""Configure structured logging for the optimiser command line."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

__all__ = ["JsonFormatter", "setup_logging"]

_ROOT_LOGGER_NAME = "promptdial_optimizer"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes present on every ``LogRecord``; anything else came from ``extra``.
_RESERVED_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRIBUTES or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=True)


def _resolve_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    name = str(value or "info").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level '{value}'.")
    return level


def _build_handler(output: Any) -> logging.Handler:
    target = str(output or "stderr").strip()
    if target.lower() == "stdout":
        return logging.StreamHandler(sys.stdout)
    if target.lower() == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf-8")


def setup_logging(config: Mapping[str, Any]) -> logging.Logger:
    """Install a handler on the package logger according to ``config['logging']``.

    Repeated calls replace the handler installed by a previous call so the
    command line can be invoked several times within one process.
    """

    logging_cfg = config.get("logging", {}) if isinstance(config, Mapping) else {}
    if not isinstance(logging_cfg, Mapping):
        logging_cfg = {}

    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_promptdial_managed", False):
            logger.removeHandler(handler)
            handler.close()

    fmt = str(logging_cfg.get("format", "json")).strip().lower()
    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter()
    elif fmt == "text":
        formatter = logging.Formatter(_TEXT_FORMAT)
    else:
        raise ValueError(f"Unknown logging format '{fmt}'.")
    level = _resolve_level(logging_cfg.get("level"))

    handler = _build_handler(logging_cfg.get("output"))
    handler.setFormatter(formatter)
    handler._promptdial_managed = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
