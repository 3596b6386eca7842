"""Shared helpers for optimiser command modules."""

from __future__ import annotations

import argparse
from typing import Any, List, Mapping, Sequence

from ..exporters import exporters_registry
from .errors import CliError

__all__ = [
    "CliError",
    "add_export_argument",
    "render_payload",
    "resolve_exports",
    "validated_export",
]


def validated_export(value: Any, *, fallback: str) -> str:
    """Return ``value`` when it matches a registered exporter, else ``fallback``."""

    if isinstance(value, str) and value in exporters_registry:
        return value
    return fallback


def add_export_argument(
    parser: argparse.ArgumentParser, *, default: str, help_text: str
) -> None:
    """Register the ``--export`` flag on ``parser`` with standard semantics."""

    parser.add_argument(
        "--export",
        dest="exports",
        choices=sorted(exporters_registry.keys()),
        action="append",
        help=f"{help_text} Repeat the flag to combine exporters.",
    )
    parser.set_defaults(exports=None, export_default=default)


def _unique_export_list(values: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def resolve_exports(namespace: argparse.Namespace) -> List[str]:
    """Return the exporters requested by ``namespace`` or raise :class:`CliError`."""

    exports = getattr(namespace, "exports", None)
    if exports:
        return _unique_export_list(exports)
    default = getattr(namespace, "export_default", None)
    if isinstance(default, str):
        return [default]
    raise CliError("No exporter configured for this command.", category="usage")


def render_payload(payload: Mapping[str, Any], exporters: Sequence[str] | str) -> str:
    """Render ``payload`` with every exporter in ``exporters``."""

    if isinstance(exporters, str):
        selected = [exporters]
    else:
        selected = _unique_export_list(exporters)

    rendered_outputs: List[str] = []
    for exporter_name in selected:
        exporter = exporters_registry[exporter_name]
        rendered_outputs.append(exporter(dict(payload)))
    return "\n\n".join(rendered_outputs)
