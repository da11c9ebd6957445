"""Index snapshot swapping and per-user profile caching."""

import pytest

from content_engine import IndexCache, ProfileCache
from content_engine.models import UserProfile
from content_engine.stores import InMemoryCatalogReader

from helpers import NOW, ToggleCatalogReader, fixed_clock, make_item, scenario_catalog


class TestIndexCache:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.catalog = InMemoryCatalogReader(scenario_catalog())
        self.cache = IndexCache(self.catalog, clock=fixed_clock)

    def test_lazy_first_build(self):
        assert self.cache.current is None
        index = self.cache.get()
        assert len(index) == 3
        assert index.built_at == NOW
        assert self.cache.get() is index

    def test_rebuild_swaps_in_new_snapshot(self):
        old = self.cache.get()
        self.catalog.put(make_item("E", "episode", ["finance"]))
        new = self.cache.rebuild()
        assert new is not old
        assert self.cache.current is new
        assert "E" in new
        # readers holding the old snapshot are unaffected
        assert "E" not in old
        assert [n.content_id for n in old.neighbors("A")] == ["B"]

    def test_failed_rebuild_keeps_previous_snapshot(self):
        toggle = ToggleCatalogReader(self.catalog)
        cache = IndexCache(toggle)
        old = cache.get()
        toggle.failing = True
        with pytest.raises(ConnectionError):
            cache.rebuild()
        assert cache.current is old
        assert cache.get() is old

    def test_failed_first_build_leaves_no_snapshot(self):
        toggle = ToggleCatalogReader(self.catalog)
        toggle.failing = True
        cache = IndexCache(toggle)
        with pytest.raises(ConnectionError):
            cache.get()
        assert cache.current is None
        toggle.failing = False
        assert len(cache.get()) == 3


class TestProfileCache:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.calls = []

        def builder(user_id):
            self.calls.append(user_id)
            return UserProfile(user_id=user_id, viewed_content_ids=[f"seen-{len(self.calls)}"])

        self.cache = ProfileCache(builder)

    def test_get_or_build_caches(self):
        first = self.cache.get_or_build("u1")
        assert self.cache.get_or_build("u1") is first
        assert self.calls == ["u1"]
        assert "u1" in self.cache
        assert len(self.cache) == 1

    def test_invalidate(self):
        self.cache.get_or_build("u1")
        assert self.cache.invalidate("u1") is True
        assert self.cache.invalidate("u1") is False
        assert self.cache.peek("u1") is None
        assert self.cache.get_or_build("u1").viewed_content_ids == ["seen-2"]

    def test_rebuild_replaces_entry(self):
        self.cache.get_or_build("u1")
        rebuilt = self.cache.rebuild("u1")
        assert rebuilt.viewed_content_ids == ["seen-2"]
        assert self.cache.peek("u1") is rebuilt

    def test_entries_are_independent(self):
        self.cache.get_or_build("u1")
        self.cache.get_or_build("u2")
        self.cache.invalidate("u1")
        assert "u2" in self.cache
        self.cache.clear()
        assert len(self.cache) == 0

    def test_failed_build_not_cached(self):
        def failing(user_id):
            raise ConnectionError("events unreachable")

        cache = ProfileCache(failing)
        with pytest.raises(ConnectionError):
            cache.get_or_build("u1")
        assert "u1" not in cache
