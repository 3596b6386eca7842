"""Command line interface for the PromptDial optimiser."""

from .app import main, run_cli

__all__ = ["main", "run_cli"]
