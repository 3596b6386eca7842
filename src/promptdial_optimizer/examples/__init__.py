"""Bundled sample data for demos and smoke tests."""

from .sample_request import sample_request, sample_variants

__all__ = ["sample_request", "sample_variants"]
