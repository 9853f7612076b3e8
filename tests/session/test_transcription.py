"""Tests for building transcribed words from recognizer events."""

import pytest

from verbatim.errors import InvalidRangeError
from verbatim.phonology.pronunciation import PronunciationDictionary
from verbatim.session.transcription import SimulatedProducer, build_word, build_words
from verbatim.types import ErrorPattern, WordEvent, WordStatus


@pytest.fixture
def dictionary():
    return PronunciationDictionary()


class TestBuildWord:
    def test_confident_word_is_clean(self, dictionary):
        word = build_word(WordEvent("rabbit", 0.92, 0.0, 0.4), dictionary)
        assert word.status == WordStatus.CLEAN
        assert word.expected_phonetic == "/ɹ æ b ɪ t/"
        assert word.auto_phonetic is None
        assert word.suggested_errors == []

    def test_measured_phonetic_analyzed(self, dictionary):
        event = WordEvent("rabbit", 0.3, 0.0, 0.4, phonetic="/w æ b ɪ t/")
        word = build_word(event, dictionary, producer=SimulatedProducer(seed=1))
        assert word.status == WordStatus.FLAGGED
        assert word.auto_phonetic == "/w æ b ɪ t/"
        assert [(e.target, e.produced, e.pattern) for e in word.suggested_errors] == [
            ("ɹ", "w", ErrorPattern.GLIDING),
        ]

    def test_flagged_without_producer(self, dictionary):
        word = build_word(WordEvent("cat", 0.5, 1.0, 1.3), dictionary)
        assert word.status == WordStatus.FLAGGED
        assert word.auto_phonetic is None
        assert word.suggested_errors == []
        assert word.requires_manual_input

    def test_flagged_unknown_word_is_valid_state(self, dictionary):
        word = build_word(
            WordEvent("xylophone", 0.2, 0.0, 0.8), dictionary, producer=SimulatedProducer(),
        )
        assert word.status == WordStatus.FLAGGED
        assert word.expected_phonetic is None
        assert word.auto_phonetic is None
        assert word.suggested_errors == []

    def test_threshold_respected(self, dictionary):
        event = WordEvent("cat", 0.8, 0.0, 0.3)
        assert build_word(event, dictionary, threshold=0.7).status == WordStatus.CLEAN
        assert build_word(event, dictionary, threshold=0.9).status == WordStatus.FLAGGED

    def test_missing_confidence_estimated(self, dictionary):
        word = build_word(WordEvent("the", None, 0.0, 0.1), dictionary)
        assert word.confidence == 0.95
        assert word.status == WordStatus.CLEAN

    def test_confidence_clamped(self, dictionary):
        word = build_word(WordEvent("cat", 1.4, 0.0, 0.3), dictionary)
        assert word.confidence == 1.0

    def test_text_stripped(self, dictionary):
        word = build_word(WordEvent(" cat ", 0.9, 0.0, 0.3), dictionary)
        assert word.text == "cat"

    def test_invalid_range(self, dictionary):
        with pytest.raises(InvalidRangeError):
            build_word(WordEvent("cat", 0.9, 1.0, 0.5), dictionary)


class TestBuildWords:
    def test_maps_every_event(self, dictionary):
        events = [
            WordEvent("the", 0.95, 0.0, 0.2),
            WordEvent("rabbit", 0.3, 0.2, 0.7, phonetic="/w æ b ɪ t/"),
            WordEvent("  ", 0.5, 0.7, 0.8),
        ]
        words = build_words(events, dictionary)
        assert [w.text for w in words] == ["the", "rabbit"]
        assert [w.status for w in words] == [WordStatus.CLEAN, WordStatus.FLAGGED]

    def test_unique_ids(self, dictionary):
        events = [WordEvent("cat", 0.9, 0.0, 0.3), WordEvent("cat", 0.9, 0.3, 0.6)]
        words = build_words(events, dictionary)
        assert words[0].id != words[1].id


class TestSimulatedProducer:
    def test_moderate_confidence_unchanged(self):
        producer = SimulatedProducer(seed=0)
        assert producer("rabbit", "/ɹ æ b ɪ t/", 0.6) == "/ɹ æ b ɪ t/"

    def test_no_expected(self):
        assert SimulatedProducer(seed=0)("wug", None, 0.1) is None

    def test_low_confidence_substitution(self):
        producer = SimulatedProducer(seed=3)
        for _ in range(20):
            result = producer("rabbit", "/ɹ æ b ɪ t/", 0.1)
            assert result in {"/ɹ æ b ɪ t/", "/w æ b ɪ t/"}

    def test_seeded_is_deterministic(self):
        a = SimulatedProducer(seed=42)
        b = SimulatedProducer(seed=42)
        outputs_a = [a("kiss", "/k ɪ s/", 0.1) for _ in range(10)]
        outputs_b = [b("kiss", "/k ɪ s/", 0.1) for _ in range(10)]
        assert outputs_a == outputs_b

    def test_substitutions_produce_suggestions(self, dictionary):
        producer = SimulatedProducer(seed=5)
        seen = set()
        for i in range(40):
            event = WordEvent("red", 0.1, float(i), float(i) + 0.3)
            word = build_word(event, dictionary, producer=producer)
            seen.update(e.pattern for e in word.suggested_errors)
        assert seen <= {ErrorPattern.GLIDING}
