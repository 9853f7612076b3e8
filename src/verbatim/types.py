"""Core data types for verbatim."""

import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from verbatim.errors import InvalidRangeError

# Produced marker for a deleted phoneme
DELETION_MARKER = "∅"
# Target/produced marker for clinician-authored errors
CUSTOM_MARKER = "?"


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WordStatus(Enum):
    """Review state of a transcribed word."""
    CLEAN = "clean"
    FLAGGED = "flagged"
    CONFIRMED = "confirmed"
    DISMISSED = "dismissed"


class ErrorPattern(Enum):
    """Clinically named phonological processes."""
    GLIDING = "gliding"
    FRONTAL_LISP = "frontal_lisp"
    LATERAL_LISP = "lateral_lisp"
    STOPPING = "stopping"
    FRONTING = "fronting"
    BACKING = "backing"
    CLUSTER_REDUCTION = "cluster_reduction"
    FINAL_CONSONANT_DELETION = "final_consonant_deletion"
    INITIAL_CONSONANT_DELETION = "initial_consonant_deletion"
    VOWEL_SUBSTITUTION = "vowel_substitution"
    DEAFFRICATION = "deaffrication"
    AFFRICATION = "affrication"
    VOICING = "voicing"
    DEVOICING = "devoicing"
    NASALIZATION = "nasalization"
    DENASALIZATION = "denasalization"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return PATTERN_NAMES[self]

    @property
    def description(self) -> str:
        return PATTERN_DESCRIPTIONS[self]


PATTERN_NAMES: dict[ErrorPattern, str] = {
    ErrorPattern.GLIDING: "Gliding",
    ErrorPattern.FRONTAL_LISP: "Frontal Lisp",
    ErrorPattern.LATERAL_LISP: "Lateral Lisp",
    ErrorPattern.STOPPING: "Stopping",
    ErrorPattern.FRONTING: "Fronting",
    ErrorPattern.BACKING: "Backing",
    ErrorPattern.CLUSTER_REDUCTION: "Cluster Reduction",
    ErrorPattern.FINAL_CONSONANT_DELETION: "Final Consonant Deletion",
    ErrorPattern.INITIAL_CONSONANT_DELETION: "Initial Consonant Deletion",
    ErrorPattern.VOWEL_SUBSTITUTION: "Vowel Substitution",
    ErrorPattern.DEAFFRICATION: "Deaffrication",
    ErrorPattern.AFFRICATION: "Affrication",
    ErrorPattern.VOICING: "Voicing",
    ErrorPattern.DEVOICING: "Devoicing",
    ErrorPattern.NASALIZATION: "Nasalization",
    ErrorPattern.DENASALIZATION: "Denasalization",
    ErrorPattern.CUSTOM: "Custom",
}

PATTERN_DESCRIPTIONS: dict[ErrorPattern, str] = {
    ErrorPattern.GLIDING:
        "Substitution of a glide for a liquid (/w/ or /j/ for /r/ or /l/)",
    ErrorPattern.FRONTAL_LISP:
        "Tongue protrudes between teeth during /s/ and /z/ production",
    ErrorPattern.LATERAL_LISP:
        "Air escapes over the sides of the tongue during /s/ and /z/",
    ErrorPattern.STOPPING:
        "Substitution of a stop consonant for a fricative or affricate",
    ErrorPattern.FRONTING:
        "Substitution of alveolar consonants for velar consonants",
    ErrorPattern.BACKING:
        "Substitution of velar consonants for alveolar consonants",
    ErrorPattern.CLUSTER_REDUCTION:
        "Deletion of one or more consonants in a cluster",
    ErrorPattern.FINAL_CONSONANT_DELETION:
        "Omission of the final consonant in words",
    ErrorPattern.INITIAL_CONSONANT_DELETION:
        "Omission of the initial consonant in words",
    ErrorPattern.VOWEL_SUBSTITUTION:
        "Replacement of one vowel sound with another",
    ErrorPattern.DEAFFRICATION:
        "Substitution of a fricative for an affricate",
    ErrorPattern.AFFRICATION:
        "Substitution of an affricate for a fricative",
    ErrorPattern.VOICING:
        "Substitution of a voiced consonant for a voiceless consonant",
    ErrorPattern.DEVOICING:
        "Substitution of a voiceless consonant for a voiced consonant",
    ErrorPattern.NASALIZATION:
        "Addition of nasal quality to non-nasal sounds",
    ErrorPattern.DENASALIZATION:
        "Substitution of a non-nasal for a nasal consonant",
    ErrorPattern.CUSTOM:
        "Custom error pattern identified by clinician",
}


@dataclass
class WordEvent:
    """One word as reported by the speech recognizer."""
    text: str
    confidence: float | None    # None when the recognizer gives no score
    start: float                # seconds
    end: float                  # seconds
    phonetic: str | None = None  # measured produced phonetic, if any


@dataclass
class SuggestedError:
    """An unconfirmed error hypothesis for one aligned phoneme pair."""
    target: str
    produced: str
    pattern: ErrorPattern
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "target": self.target,
            "produced": self.produced,
            "pattern": self.pattern.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SuggestedError":
        return cls(
            id=data["id"],
            target=data["target"],
            produced=data["produced"],
            pattern=ErrorPattern(data["pattern"]),
        )


@dataclass
class TranscribedWord:
    """A recognized word with its review state and phonetic transcriptions."""
    text: str
    confidence: float           # 0.0-1.0
    start_time: float           # seconds
    end_time: float             # seconds
    status: WordStatus = WordStatus.CLEAN
    expected_phonetic: str | None = None
    auto_phonetic: str | None = None
    manual_phonetic: str | None = None
    suggested_errors: list[SuggestedError] = field(default_factory=list)
    id: str = field(default_factory=_new_id)

    def __post_init__(self):
        if self.end_time < self.start_time:
            raise InvalidRangeError(
                f"Word {self.text!r} ends before it starts "
                f"({self.start_time:.3f}s > {self.end_time:.3f}s)"
            )

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    @property
    def display_phonetic(self) -> str | None:
        """Phonetic to show, or None while the word awaits manual input."""
        if self.status == WordStatus.FLAGGED:
            return None
        return self.manual_phonetic or self.auto_phonetic

    @property
    def requires_manual_input(self) -> bool:
        return self.status == WordStatus.FLAGGED

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "confidence": self.confidence,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "status": self.status.value,
            "expected_phonetic": self.expected_phonetic,
            "auto_phonetic": self.auto_phonetic,
            "manual_phonetic": self.manual_phonetic,
            "suggested_errors": [e.to_dict() for e in self.suggested_errors],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TranscribedWord":
        return cls(
            id=data["id"],
            text=data["text"],
            confidence=data["confidence"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            status=WordStatus(data.get("status", WordStatus.CLEAN.value)),
            expected_phonetic=data.get("expected_phonetic"),
            auto_phonetic=data.get("auto_phonetic"),
            manual_phonetic=data.get("manual_phonetic"),
            suggested_errors=[
                SuggestedError.from_dict(e)
                for e in data.get("suggested_errors", [])
            ],
        )


@dataclass
class ConfirmedError:
    """An error the clinician accepted for one word."""
    word_id: str
    word: str
    timestamp: float            # word start time (seconds)
    target: str
    produced: str
    pattern: ErrorPattern
    phonetic: str               # manual if supplied, else the word's auto phonetic
    expected: str
    is_custom: bool = False
    confirmed_at: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "word_id": self.word_id,
            "word": self.word,
            "timestamp": self.timestamp,
            "target": self.target,
            "produced": self.produced,
            "pattern": self.pattern.value,
            "phonetic": self.phonetic,
            "expected": self.expected,
            "is_custom": self.is_custom,
            "confirmed_at": self.confirmed_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConfirmedError":
        return cls(
            id=data["id"],
            word_id=data["word_id"],
            word=data["word"],
            timestamp=data["timestamp"],
            target=data["target"],
            produced=data["produced"],
            pattern=ErrorPattern(data["pattern"]),
            phonetic=data["phonetic"],
            expected=data["expected"],
            is_custom=data.get("is_custom", False),
            confirmed_at=datetime.fromisoformat(data["confirmed_at"]),
        )


@dataclass
class Session:
    """One recording/review session for a student."""
    student_name: str = ""
    date: datetime = field(default_factory=_utcnow)
    duration: float = 0.0       # seconds
    transcription: list[TranscribedWord] = field(default_factory=list)
    confirmed_errors: list[ConfirmedError] = field(default_factory=list)
    clinical_notes: str = ""
    audio_path: str | None = None
    id: str = field(default_factory=_new_id)

    @property
    def status_counts(self) -> dict[WordStatus, int]:
        counts = Counter(w.status for w in self.transcription)
        return {status: counts.get(status, 0) for status in WordStatus}

    @property
    def error_pattern_counts(self) -> dict[ErrorPattern, int]:
        return dict(Counter(e.pattern for e in self.confirmed_errors))

    def sorted_pattern_counts(self) -> list[tuple[ErrorPattern, int]]:
        """Pattern counts ordered by count descending, then by name."""
        return sorted(
            self.error_pattern_counts.items(),
            key=lambda item: (-item[1], item[0].display_name),
        )

    @property
    def flagged_words_count(self) -> int:
        return sum(1 for w in self.transcription if w.status == WordStatus.FLAGGED)

    @property
    def confirmed_errors_count(self) -> int:
        return len(self.confirmed_errors)

    @property
    def total_words(self) -> int:
        return len(self.transcription)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "student_name": self.student_name,
            "date": self.date.isoformat(),
            "duration": self.duration,
            "transcription": [w.to_dict() for w in self.transcription],
            "confirmed_errors": [e.to_dict() for e in self.confirmed_errors],
            "clinical_notes": self.clinical_notes,
            "audio_path": self.audio_path,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        return cls(
            id=data["id"],
            student_name=data.get("student_name", ""),
            date=datetime.fromisoformat(data["date"]),
            duration=data.get("duration", 0.0),
            transcription=[
                TranscribedWord.from_dict(w) for w in data.get("transcription", [])
            ],
            confirmed_errors=[
                ConfirmedError.from_dict(e)
                for e in data.get("confirmed_errors", [])
            ],
            clinical_notes=data.get("clinical_notes", ""),
            audio_path=data.get("audio_path"),
        )
