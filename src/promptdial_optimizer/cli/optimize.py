"""Command helpers for the ``optimize`` and ``demo`` sub-commands."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping

from ..configuration import OptimizerSettings
from ..errors import OptimizerError
from ..examples import sample_request
from ..models import SelectionMode
from ..optimizer import ParetoOptimizer
from .common import (
    CliError,
    add_export_argument,
    render_payload,
    resolve_exports,
    validated_export,
)
from .io import load_request

_MODE_CHOICES = tuple(mode.value for mode in SelectionMode)


def _add_mode_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--mode",
        dest="selection_mode",
        choices=_MODE_CHOICES,
        default=None,
        help="Selection mode overriding the request document (default: balanced).",
    )


def register_subparser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    *,
    config: Mapping[str, Any],
) -> None:
    """Register the ``optimize`` and ``demo`` sub-commands."""

    optimize_cfg = dict(config.get("optimize", {}))
    default_export = validated_export(optimize_cfg.get("export"), fallback="markdown")

    parser = subparsers.add_parser(
        "optimize",
        help="Recommend a variant from a JSON or YAML request document.",
    )
    parser.add_argument(
        "request",
        type=Path,
        help="Path to the request document (.json, .yaml or .yml).",
    )
    _add_mode_argument(parser)
    add_export_argument(
        parser,
        default=default_export,
        help_text="Exporter used to render the optimisation result (default: markdown).",
    )
    parser.set_defaults(handler=handle)

    demo_parser = subparsers.add_parser(
        "demo",
        help="Optimise the bundled five-variant sample request.",
    )
    _add_mode_argument(demo_parser)
    add_export_argument(
        demo_parser,
        default=default_export,
        help_text="Exporter used to render the optimisation result (default: markdown).",
    )
    demo_parser.set_defaults(handler=handle_demo)


def _run(
    document: dict[str, Any],
    namespace: argparse.Namespace,
    config: Mapping[str, Any],
) -> str:
    mode = getattr(namespace, "selection_mode", None)
    if mode is not None:
        document["selection_mode"] = mode
    try:
        settings = OptimizerSettings.from_config(config)
        result = ParetoOptimizer(settings).optimize(document)
    except OptimizerError as exc:
        raise CliError.from_optimizer_error(exc) from exc
    return render_payload(result.as_dict(), resolve_exports(namespace))


def handle(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    """Execute the ``optimize`` command returning the rendered payload."""

    return _run(load_request(Path(namespace.request)), namespace, config)


def handle_demo(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    """Execute the ``demo`` command returning the rendered payload."""

    return _run(sample_request(), namespace, config)


__all__ = ["register_subparser", "handle", "handle_demo"]
