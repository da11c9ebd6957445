"""Shared utilities for time windows and set similarity."""

from .dates import utc_now, within_days
from .similarity import jaccard

__all__ = [
    "jaccard",
    "utc_now",
    "within_days",
]
