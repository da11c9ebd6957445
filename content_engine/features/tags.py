"""
Tag extraction against a fixed finance/tech vocabulary.

Tags feed the Jaccard(tags) term of the similarity index. Matching is a
case-insensitive substring test over the title and free-text body, so short
terms such as "ai" also match inside longer words.
"""

import re
from typing import FrozenSet, Optional

# Static domain vocabulary. Order is irrelevant; entries are lower-case.
FINANCE_TECH_VOCABULARY: FrozenSet[str] = frozenset({
    "accounting",
    "ai",
    "analytics",
    "audit",
    "automation",
    "budget",
    "business intelligence",
    "cash flow",
    "cfo",
    "close",
    "cloud",
    "compliance",
    "controlling",
    "cost",
    "dashboard",
    "data",
    "digital",
    "erp",
    "esg",
    "excel",
    "finance",
    "forecast",
    "fp&a",
    "ifrs",
    "investment",
    "kpi",
    "leadership",
    "liquidity",
    "machine learning",
    "planning",
    "power bi",
    "process",
    "reporting",
    "risk",
    "robotic process automation",
    "sap",
    "strategy",
    "tax",
    "transformation",
    "treasury",
})

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


def extract_tags(title: Optional[str], body: Optional[str] = None) -> FrozenSet[str]:
    """Vocabulary terms found in title + body. Empty or missing text yields no tags."""
    text = " ".join(part for part in (title, body) if part).lower()
    if not text:
        return frozenset()
    return frozenset(term for term in FINANCE_TECH_VOCABULARY if term in text)


def tokenize_title(title: Optional[str]) -> FrozenSet[str]:
    """Lower-cased word tokens of a title."""
    if not title:
        return frozenset()
    return frozenset(_TOKEN_RE.findall(title.lower()))
