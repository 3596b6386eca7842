"""Shared builders for optimiser tests."""

from .builders import (
    DOMINATED_EXCLUSION_CASE,
    KNEE_POINT_VARIANTS,
    make_entry,
    make_pair,
    make_solution,
)
from .cli import run_cli_in_tmp, write_request

__all__ = [
    "DOMINATED_EXCLUSION_CASE",
    "KNEE_POINT_VARIANTS",
    "make_entry",
    "make_pair",
    "make_solution",
    "run_cli_in_tmp",
    "write_request",
]
