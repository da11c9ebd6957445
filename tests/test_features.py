"""Tag extraction and title tokenization."""

from content_engine.features import FINANCE_TECH_VOCABULARY, extract_tags, tokenize_title


class TestExtractTags:

    def test_matches_title_and_body_case_insensitively(self):
        tags = extract_tags("ERP Migration Guide", "How the CFO plans the Treasury rollout")
        assert {"erp", "cfo", "treasury"} <= tags

    def test_multi_word_terms(self):
        tags = extract_tags("Machine Learning for Cash Flow forecasts")
        assert "machine learning" in tags
        assert "cash flow" in tags
        assert "forecast" in tags

    def test_substring_matching(self):
        # "forecasting" contains the vocabulary term "forecast"
        assert "forecast" in extract_tags("Forecasting basics")

    def test_empty_or_missing_text(self):
        assert extract_tags(None) == frozenset()
        assert extract_tags("", "") == frozenset()
        assert extract_tags("Weekly roundup of nothing") == frozenset()

    def test_only_vocabulary_terms(self):
        tags = extract_tags("Tax and compliance", "plus budget talk")
        assert tags <= FINANCE_TECH_VOCABULARY


class TestTokenizeTitle:

    def test_lowercases_and_splits_on_word_characters(self):
        assert tokenize_title("The CFO's Guide: ERP, 2025!") == frozenset({"the", "cfo", "s", "guide", "erp", "2025"})

    def test_empty(self):
        assert tokenize_title("") == frozenset()
        assert tokenize_title(None) == frozenset()
