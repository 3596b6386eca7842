"""Command line application entry point for the PromptDial optimiser."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from ..logging.config import setup_logging
from .errors import CliError, log_cli_error
from .io import load_cli_config
from .parser import build_parser


def _exit_with(exc: CliError) -> NoReturn:
    """Log ``exc`` once, echo its message and exit with its status code."""

    if not exc.logged:
        log_cli_error(exc.payload, exc_info=exc)
        exc.logged = True
    message = exc.payload.message if exc.payload else str(exc)
    if message:
        sys.stdout.write(message)
        if not message.endswith("\n"):
            sys.stdout.write("\n")
    raise SystemExit(exc.status_code) from exc


def run_cli(args: Optional[Sequence[str]] = None) -> str:
    """Execute the optimiser command line interface."""

    config_parser = argparse.ArgumentParser(add_help=False)
    config_parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to the pyproject.toml holding [tool.promptdial_optimizer].",
    )
    config_parser.add_argument("--log-level", dest="log_level", default=None)
    config_parser.add_argument("--log-output", dest="log_output", default=None)
    config_parser.add_argument(
        "--log-format", dest="log_format", choices=("json", "text"), default=None
    )
    preliminary, remaining = config_parser.parse_known_args(args)

    config = load_cli_config(preliminary.config_path)
    logging_config = dict(config.get("logging", {}))
    if preliminary.log_level is not None:
        logging_config["level"] = preliminary.log_level
    if preliminary.log_output is not None:
        logging_config["output"] = preliminary.log_output
    if preliminary.log_format is not None:
        logging_config["format"] = preliminary.log_format
    logging_config.setdefault("level", "info")
    logging_config.setdefault("output", "stderr")
    logging_config.setdefault("format", "json")
    config["logging"] = logging_config
    try:
        setup_logging(config)
    except ValueError as exc:
        _exit_with(
            CliError(
                str(exc),
                category="usage",
                context={"logging": dict(logging_config)},
            )
        )

    parser = build_parser(config)
    namespace = parser.parse_args(list(remaining), namespace=preliminary)
    namespace.config = config

    handler = getattr(namespace, "handler", None)
    if handler is None:
        _exit_with(
            CliError(
                f"Unknown command '{getattr(namespace, 'command', None)}'.",
                category="usage",
                context={"command": getattr(namespace, "command", None)},
            )
        )

    try:
        result = handler(namespace, config=config)
    except CliError as exc:
        _exit_with(exc)
    if result:
        sys.stdout.write(result)
        if not result.endswith("\n"):
            sys.stdout.write("\n")
    return result


def main() -> None:  # pragma: no cover - thin wrapper
    run_cli()


if __name__ == "__main__":  # pragma: no cover - CLI invocation guard
    main()
