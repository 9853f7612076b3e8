"""Tests for confidence classification."""

import pytest

from verbatim.confidence import (
    DEFAULT_FLAG_THRESHOLD,
    ConfidenceCategory,
    threshold_from_env,
    clamp_confidence,
    classify_confidence,
    confidence_category,
    estimate_confidence,
)

_SCORES = [i / 100 for i in range(101)]
_THRESHOLDS = [0.0, 0.3, 0.5, 0.7, 0.85, 0.9, 1.0]


class TestCategory:
    def test_cutoffs(self):
        assert confidence_category(0.85) == ConfidenceCategory.HIGH
        assert confidence_category(0.84) == ConfidenceCategory.MEDIUM
        assert confidence_category(0.70) == ConfidenceCategory.MEDIUM
        assert confidence_category(0.69) == ConfidenceCategory.LOW
        assert confidence_category(0.0) == ConfidenceCategory.LOW
        assert confidence_category(1.0) == ConfidenceCategory.HIGH

    def test_ordered(self):
        assert ConfidenceCategory.LOW < ConfidenceCategory.MEDIUM < ConfidenceCategory.HIGH
        assert ConfidenceCategory.HIGH > ConfidenceCategory.LOW
        assert ConfidenceCategory.LOW <= ConfidenceCategory.HIGH
        assert ConfidenceCategory.MEDIUM <= ConfidenceCategory.MEDIUM
        assert ConfidenceCategory.HIGH >= ConfidenceCategory.MEDIUM
        assert ConfidenceCategory.LOW >= ConfidenceCategory.LOW
        assert not ConfidenceCategory.HIGH <= ConfidenceCategory.LOW
        assert max(ConfidenceCategory) == ConfidenceCategory.HIGH
        assert sorted([ConfidenceCategory.HIGH, ConfidenceCategory.LOW]) == [
            ConfidenceCategory.LOW, ConfidenceCategory.HIGH,
        ]


class TestClassify:
    def test_default_threshold(self):
        assert DEFAULT_FLAG_THRESHOLD == 0.7
        assert classify_confidence(0.69).requires_review
        assert not classify_confidence(0.7).requires_review

    @pytest.mark.parametrize("threshold", _THRESHOLDS)
    def test_review_iff_below_threshold(self, threshold):
        for s in _SCORES:
            assert classify_confidence(s, threshold).requires_review == (s < threshold)

    @pytest.mark.parametrize("threshold", _THRESHOLDS)
    def test_category_independent_of_threshold(self, threshold):
        for s in _SCORES:
            assert classify_confidence(s, threshold).category == confidence_category(s)


class TestClamp:
    def test_in_range_unchanged(self):
        assert clamp_confidence(0.42) == 0.42

    def test_clamped(self):
        assert clamp_confidence(-0.2) == 0.0
        assert clamp_confidence(1.3) == 1.0


class TestEstimate:
    def test_common_word(self):
        assert estimate_confidence("The") == 0.95

    def test_long_word(self):
        assert estimate_confidence("chocolates") == 0.65

    def test_medium_word(self):
        assert estimate_confidence("rabbit") == 0.80

    def test_short_word(self):
        assert estimate_confidence("cat") == 0.85


class TestThresholdFromEnv:
    def test_unset(self, monkeypatch):
        monkeypatch.delenv("VERBATIM_FLAG_THRESHOLD", raising=False)
        assert threshold_from_env() == 0.7

    def test_override(self, monkeypatch):
        monkeypatch.setenv("VERBATIM_FLAG_THRESHOLD", "0.55")
        assert threshold_from_env() == 0.55

    def test_malformed_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("VERBATIM_FLAG_THRESHOLD", "high")
        with caplog.at_level("WARNING", logger="verbatim.confidence"):
            assert threshold_from_env() == 0.7
        assert "VERBATIM_FLAG_THRESHOLD" in caplog.text
