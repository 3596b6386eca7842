"""Logging utilities for the PromptDial optimiser."""

from promptdial_optimizer.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
