"""Content-based, personalized and trending ranking."""

import pytest

from content_engine.models import RecommendationConfig, UserProfile
from content_engine.stages import build_similarity_index
from content_engine.stages.strategies import (
    count_engagement,
    rank_content_based,
    rank_latest,
    rank_personalized,
    rank_trending,
)
from content_engine.stages.strategies.content_based import REASON_SIMILAR
from content_engine.stages.strategies.personalized import (
    REASON_INTERESTS,
    REASON_LATEST,
    REASON_RECENT,
    REASON_RELATED_ACTIVITY,
    REASON_SIMILAR_VIEWED,
)

from helpers import NOW, make_event, make_item, scenario_catalog


class TestContentBased:

    @pytest.fixture(autouse=True)
    def setup(self):
        items = [make_item(f"i{n:02d}", "episode", ["finance"]) for n in range(12)]
        self.index = build_similarity_index(items)

    @pytest.mark.parametrize("limit", [0, 1, 5, 10, 50])
    def test_never_exceeds_limit(self, limit):
        assert len(rank_content_based(self.index, "i00", limit)) <= limit

    def test_reason_and_signals(self):
        recs = rank_content_based(self.index, "i00", 3)
        assert [r.content_id for r in recs] == ["i01", "i02", "i03"]
        assert all(r.reasons == [REASON_SIMILAR] for r in recs)
        assert all(r.strategy == "content_based" for r in recs)
        assert recs[0].signals == pytest.approx({"similarity": 0.7})
        assert recs[0].content is None

    def test_unknown_id_is_empty(self):
        assert rank_content_based(self.index, "missing", 5) == []


class TestPersonalized:

    @pytest.fixture(autouse=True)
    def setup(self):
        catalog = scenario_catalog()
        # B published 3 days ago for the recency bonus
        catalog[1] = make_item("B", "episode", ["finance"], created_days_ago=3)
        self.index = build_similarity_index(catalog)
        self.profile = UserProfile(user_id="u1", preferred_types=["episode"], viewed_content_ids=["A"])

    def test_scenario(self):
        recs = rank_personalized(self.index, self.profile, 10, now=NOW)
        assert [r.content_id for r in recs] == ["B"]
        b = recs[0]
        assert b.score >= 0.4
        # type 0.3 + 0.4 * sim(A, B) 0.7 + recency 0.1
        assert b.score == pytest.approx(0.3 + 0.28 + 0.1)
        assert b.reasons == ["Matches your episode preference", REASON_SIMILAR_VIEWED, REASON_RECENT]
        assert b.signals["viewed_similarity"] == pytest.approx(0.28)

    def test_excluded_and_viewed_never_returned(self):
        recs = rank_personalized(self.index, self.profile, 10, exclude_ids=["B"], now=NOW)
        ids = [r.content_id for r in recs]
        assert "B" not in ids
        assert "A" not in ids

    def test_limit(self):
        assert rank_personalized(self.index, self.profile, 0, now=NOW) == []

    def test_empty_profile_gets_nothing(self):
        # recency alone (0.1) does not clear the threshold
        recs = rank_personalized(self.index, UserProfile.empty("u1"), 10, now=NOW)
        assert recs == []

    def test_lower_threshold_lets_recency_through(self):
        config = RecommendationConfig(min_personalized_score=0.05)
        recs = rank_personalized(self.index, UserProfile.empty("u1"), 10, config=config, now=NOW)
        assert [r.content_id for r in recs] == ["A", "B"]
        assert all(r.reasons == [REASON_RECENT] for r in recs)


class TestLatest:

    def test_newest_first_then_id(self):
        index = build_similarity_index([
            make_item("b", "episode", created_days_ago=1),
            make_item("a", "episode", created_days_ago=1),
            make_item("old", "report", created_days_ago=9),
            make_item("undated", "insight"),
        ])
        recs = rank_latest(index, None, now=NOW)
        assert [r.content_id for r in recs] == ["a", "b", "old", "undated"]
        assert recs[0].score == pytest.approx(0.5)
        assert recs[2].signals == {"age_days": pytest.approx(9.0)}
        assert recs[3].score == 0.0
        assert all(r.reasons == [REASON_LATEST] for r in recs)

    def test_exclusions_and_limit(self):
        index = build_similarity_index(scenario_catalog())
        assert [r.content_id for r in rank_latest(index, 1, exclude_ids=["A"], now=NOW)] == ["B"]
        assert rank_latest(index, 0, now=NOW) == []


class TestPersonalizedSignals:

    def test_category_and_difficulty_reasons(self):
        index = build_similarity_index([make_item("D", "insight", ["tax"], difficulty="beginner")])
        profile = UserProfile(user_id="u1", preferred_categories=["tax"], preferred_difficulty=["beginner"])
        recs = rank_personalized(index, profile, 10, now=NOW)
        assert recs[0].reasons == [REASON_INTERESTS, "beginner level content"]
        assert recs[0].score == pytest.approx(0.45)

    def test_ties_prefer_newer_then_id(self):
        index = build_similarity_index([
            make_item("old", "insight", created_days_ago=20),
            make_item("new", "insight", created_days_ago=10),
            make_item("b-undated", "insight"),
            make_item("a-undated", "insight"),
        ])
        profile = UserProfile(user_id="u1", preferred_types=["insight"])
        recs = rank_personalized(index, profile, 10, now=NOW)
        assert [r.content_id for r in recs] == ["new", "old", "a-undated", "b-undated"]

    def test_weak_similarity_still_explained(self):
        index = build_similarity_index([
            make_item("V", "episode", ["x", "y"], ["t1"]),
            make_item("W", "report", ["x"], ["t1", "t2", "t3", "t4"]),
        ])
        # sim = 0.4 * 1/2 + 0.3 * 1/4 = 0.275: below the reason threshold
        profile = UserProfile(user_id="u1", viewed_content_ids=["V"])
        recs = rank_personalized(index, profile, 10, now=NOW)
        assert [r.content_id for r in recs] == ["W"]
        assert recs[0].score == pytest.approx(0.4 * 0.275)
        assert recs[0].reasons == [REASON_RELATED_ACTIVITY]

    def test_only_recent_views_count(self):
        items = [make_item(f"v{n}", "report", [f"c{n}"]) for n in range(3)]
        items.append(make_item("target", "insight", ["c2"]))
        index = build_similarity_index(items)
        # v2 is the only item similar to target and it is the oldest view
        profile = UserProfile(user_id="u1", viewed_content_ids=["v0", "v1", "v2"])
        config = RecommendationConfig(recent_views_limit=2, min_personalized_score=0.0)
        assert rank_personalized(index, profile, 10, config=config, now=NOW) == []
        config = RecommendationConfig(recent_views_limit=3, min_personalized_score=0.0)
        assert [r.content_id for r in rank_personalized(index, profile, 10, config=config, now=NOW)] == ["target"]


class TestTrending:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.events = (
            [make_event("view", "C", days=0.1) for _ in range(5)]
            + [make_event("share", "C", days=0.1)]
            + [make_event("bookmark", "D", days=0.1) for _ in range(2)]
        )

    def test_scenario(self):
        recs = rank_trending(self.events, 10)
        assert [r.content_id for r in recs] == ["C", "D"]
        assert recs[0].signals["engagement"] == 8.0
        assert recs[1].signals["engagement"] == 4.0
        assert recs[0].score == 1.0
        assert recs[1].score == pytest.approx(0.5)
        assert recs[0].reasons == ["5 views, 1 shares, 0 bookmarks"]
        assert recs[1].reasons == ["0 views, 0 shares, 2 bookmarks"]

    def test_count_engagement(self):
        counts = count_engagement(self.events + [make_event("play", "C"), make_event("view", "C", event_type="page_view")])
        assert counts == {
            "C": {"view": 5, "share": 1, "bookmark": 0},
            "D": {"view": 0, "share": 0, "bookmark": 2},
        }

    def test_ties_by_content_id(self):
        recs = rank_trending([make_event("view", "z"), make_event("view", "a")], 10)
        assert [r.content_id for r in recs] == ["a", "z"]

    def test_limit_and_empty(self):
        assert len(rank_trending(self.events, 1)) == 1
        assert rank_trending(self.events, 0) == []
        assert rank_trending([], 10) == []
        assert rank_trending([make_event("play", "C")], 10) == []

    def test_custom_weights(self):
        config = RecommendationConfig.from_dict({"trending": {"bookmark": 10.0}})
        recs = rank_trending(self.events, 10, config)
        assert [r.content_id for r in recs] == ["D", "C"]
