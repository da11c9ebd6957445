"""Shared fixtures: a fixed clock, the three-item scenario catalog and an engine over it."""

import pytest

from content_engine import InMemoryCatalogReader, InMemoryEventReader, RecommendationEngine

from helpers import NOW, fixed_clock, make_event, make_item, scenario_catalog


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def catalog():
    items = scenario_catalog() + [make_item("D", "insight", ["tax"], difficulty="beginner", created_days_ago=1)]
    return InMemoryCatalogReader(items)


@pytest.fixture
def events():
    return InMemoryEventReader([
        # u1 read A, so episodes and finance become preferences
        make_event("view", "A", "u1", days=1),
        # trending for the last day: C engagement 8, D engagement 4
        *[make_event("view", "C", "u2", days=0.1) for _ in range(5)],
        make_event("share", "C", "u3", days=0.2),
        make_event("bookmark", "D", "u2", days=0.3),
        make_event("bookmark", "D", "u3", days=0.4),
    ])


@pytest.fixture
def engine(catalog, events):
    return RecommendationEngine(catalog, events, clock=fixed_clock)
