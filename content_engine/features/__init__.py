"""Content feature extraction (tags, title tokens)."""

from .tags import FINANCE_TECH_VOCABULARY, extract_tags, tokenize_title

__all__ = [
    "FINANCE_TECH_VOCABULARY",
    "extract_tags",
    "tokenize_title",
]
