"""Tests for core data types."""

from datetime import datetime, timezone

import pytest

from verbatim.errors import InvalidRangeError
from verbatim.types import (
    PATTERN_DESCRIPTIONS,
    PATTERN_NAMES,
    ConfirmedError,
    ErrorPattern,
    Session,
    SuggestedError,
    TranscribedWord,
    WordStatus,
)


def _session():
    rabbit = TranscribedWord(
        text="rabbit", confidence=0.45, start_time=0.5, end_time=0.9,
        status=WordStatus.CONFIRMED,
        expected_phonetic="/ɹ æ b ɪ t/", auto_phonetic="/w æ b ɪ t/",
        suggested_errors=[SuggestedError("ɹ", "w", ErrorPattern.GLIDING)],
    )
    cat = TranscribedWord(
        text="cat", confidence=0.5, start_time=1.0, end_time=1.3,
        status=WordStatus.FLAGGED,
    )
    the = TranscribedWord(text="the", confidence=0.97, start_time=0.0, end_time=0.2)
    error = ConfirmedError(
        word_id=rabbit.id, word="rabbit", timestamp=0.5, target="ɹ", produced="w",
        pattern=ErrorPattern.GLIDING, phonetic="/w æ b ɪ t/", expected="/ɹ æ b ɪ t/",
    )
    return Session(
        student_name="Sam",
        date=datetime(2026, 3, 2, 14, 30, tzinfo=timezone.utc),
        duration=1.3,
        transcription=[the, rabbit, cat],
        confirmed_errors=[error],
        clinical_notes="Gliding on prevocalic /r/",
        audio_path="/recordings/sam.wav",
    )


class TestTranscribedWord:
    def test_defaults(self):
        w = TranscribedWord(text="cat", confidence=0.9, start_time=0.0, end_time=0.3)
        assert w.status == WordStatus.CLEAN
        assert w.suggested_errors == []
        assert w.id

    def test_duration(self):
        w = TranscribedWord(text="cat", confidence=0.9, start_time=1.0, end_time=1.25)
        assert w.duration == pytest.approx(0.25)

    def test_zero_duration_allowed(self):
        w = TranscribedWord(text="a", confidence=0.9, start_time=1.0, end_time=1.0)
        assert w.duration == 0

    def test_invalid_range(self):
        with pytest.raises(InvalidRangeError):
            TranscribedWord(text="cat", confidence=0.9, start_time=2.0, end_time=1.0)

    def test_invalid_range_is_value_error(self):
        with pytest.raises(ValueError):
            TranscribedWord(text="cat", confidence=0.9, start_time=2.0, end_time=1.0)

    def test_display_phonetic_hidden_while_flagged(self):
        w = TranscribedWord(
            text="cat", confidence=0.5, start_time=0, end_time=1,
            status=WordStatus.FLAGGED, auto_phonetic="/t æ t/",
        )
        assert w.display_phonetic is None
        assert w.requires_manual_input

    def test_display_phonetic_prefers_manual(self):
        w = TranscribedWord(
            text="cat", confidence=0.5, start_time=0, end_time=1,
            status=WordStatus.CONFIRMED, auto_phonetic="/t æ t/", manual_phonetic="/t æ/",
        )
        assert w.display_phonetic == "/t æ/"
        assert not w.requires_manual_input


class TestErrorPattern:
    def test_every_pattern_has_static_data(self):
        for pattern in ErrorPattern:
            assert PATTERN_NAMES[pattern]
            assert PATTERN_DESCRIPTIONS[pattern]

    def test_display_name(self):
        assert ErrorPattern.FINAL_CONSONANT_DELETION.display_name == "Final Consonant Deletion"

    def test_description(self):
        assert "glide" in ErrorPattern.GLIDING.description

    def test_seventeen_patterns(self):
        assert len(ErrorPattern) == 17


class TestSession:
    def test_empty_session(self):
        s = Session()
        assert s.total_words == 0
        assert s.flagged_words_count == 0
        assert s.confirmed_errors_count == 0
        assert s.error_pattern_counts == {}

    def test_counts(self):
        s = _session()
        assert s.total_words == 3
        assert s.flagged_words_count == 1
        assert s.confirmed_errors_count == 1
        assert s.error_pattern_counts == {ErrorPattern.GLIDING: 1}
        assert s.status_counts == {
            WordStatus.CLEAN: 1,
            WordStatus.FLAGGED: 1,
            WordStatus.CONFIRMED: 1,
            WordStatus.DISMISSED: 0,
        }

    def test_sorted_pattern_counts(self):
        s = _session()
        extra = [
            ConfirmedError(
                word_id=f"w{i}", word="x", timestamp=0.0, target="k", produced="t",
                pattern=ErrorPattern.FRONTING, phonetic="", expected="",
            )
            for i in range(2)
        ]
        s.confirmed_errors.extend(extra)
        assert s.sorted_pattern_counts() == [
            (ErrorPattern.FRONTING, 2),
            (ErrorPattern.GLIDING, 1),
        ]

    def test_dict_round_trip(self):
        s = _session()
        restored = Session.from_dict(s.to_dict())
        assert restored == s
        assert restored.error_pattern_counts == s.error_pattern_counts
        assert [w.status for w in restored.transcription] == [
            w.status for w in s.transcription
        ]

    def test_to_dict_is_json_safe(self):
        import json
        data = json.loads(json.dumps(_session().to_dict(), ensure_ascii=False))
        assert data["transcription"][1]["status"] == "confirmed"
        assert data["confirmed_errors"][0]["pattern"] == "gliding"
