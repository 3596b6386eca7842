"""Command helpers for the ``frontier`` sub-command."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping

from ..configuration import OptimizerSettings
from ..errors import OptimizerError
from ..models import OptimizationRequest
from ..optimizer import ParetoOptimizer, find_pareto_frontier
from .common import (
    CliError,
    add_export_argument,
    render_payload,
    resolve_exports,
    validated_export,
)
from .io import load_request


def register_subparser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    *,
    config: Mapping[str, Any],
) -> None:
    """Register the ``frontier`` sub-command."""

    frontier_cfg = dict(config.get("frontier", {}))

    parser = subparsers.add_parser(
        "frontier",
        help="List the non-dominated variants of a request document.",
    )
    parser.add_argument(
        "request",
        type=Path,
        help="Path to the request document (.json, .yaml or .yml).",
    )
    add_export_argument(
        parser,
        default=validated_export(frontier_cfg.get("export"), fallback="csv"),
        help_text="Exporter used to render the Pareto frontier (default: csv).",
    )
    parser.set_defaults(handler=handle)


def handle(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    """Execute the ``frontier`` command returning the rendered payload."""

    document = load_request(Path(namespace.request))
    try:
        settings = OptimizerSettings.from_config(config)
        request = OptimizationRequest.from_mapping(document)
        feasible = ParetoOptimizer(settings).feasible_solutions(request)
    except OptimizerError as exc:
        raise CliError.from_optimizer_error(exc) from exc
    frontier = find_pareto_frontier(feasible)
    payload = {
        "pareto_frontier": [solution.as_dict() for solution in frontier],
        "total_variants": len(request.variants),
    }
    return render_payload(payload, resolve_exports(namespace))


__all__ = ["register_subparser", "handle"]
