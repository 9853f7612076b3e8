"""Recognition-confidence categories and the flag-for-review decision."""

import functools
import logging
import os
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

_FALLBACK_THRESHOLD = 0.7


def threshold_from_env() -> float:
    """Read VERBATIM_FLAG_THRESHOLD, falling back to 0.7 if unset or malformed."""
    raw = os.environ.get("VERBATIM_FLAG_THRESHOLD")
    if raw is None:
        return _FALLBACK_THRESHOLD
    try:
        return float(raw)
    except ValueError:
        logger.warning(
            f"Ignoring VERBATIM_FLAG_THRESHOLD={raw!r}: not a number, "
            f"using {_FALLBACK_THRESHOLD}"
        )
        return _FALLBACK_THRESHOLD


DEFAULT_FLAG_THRESHOLD = threshold_from_env()

# Display cutoffs, independent of the flag threshold
HIGH_CUTOFF = 0.85
MEDIUM_CUTOFF = 0.70

# Words the recognizer almost never gets wrong
_COMMON_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at",
    "to", "for", "of", "with", "by",
})


@functools.total_ordering
class ConfidenceCategory(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __lt__(self, other):
        if not isinstance(other, ConfidenceCategory):
            return NotImplemented
        return self.rank < other.rank


_RANKS = {
    ConfidenceCategory.LOW: 0,
    ConfidenceCategory.MEDIUM: 1,
    ConfidenceCategory.HIGH: 2,
}


@dataclass(frozen=True)
class ConfidenceResult:
    """Outcome of classifying one confidence score."""
    category: ConfidenceCategory
    requires_review: bool


def confidence_category(score: float) -> ConfidenceCategory:
    if score >= HIGH_CUTOFF:
        return ConfidenceCategory.HIGH
    if score >= MEDIUM_CUTOFF:
        return ConfidenceCategory.MEDIUM
    return ConfidenceCategory.LOW


def classify_confidence(
    score: float, threshold: float = DEFAULT_FLAG_THRESHOLD,
) -> ConfidenceResult:
    """Categorize a score and decide whether the word needs clinician review.

    The category uses fixed cutoffs; only the review decision depends on
    the threshold. Scores are assumed to lie in [0, 1] already (see
    clamp_confidence).
    """
    return ConfidenceResult(
        category=confidence_category(score),
        requires_review=score < threshold,
    )


def clamp_confidence(score: float) -> float:
    """Clamp a recognizer score into [0, 1]."""
    if score < 0.0 or score > 1.0:
        clamped = min(max(score, 0.0), 1.0)
        logger.warning(f"Confidence {score} outside [0, 1], clamped to {clamped}")
        return clamped
    return score


def estimate_confidence(text: str) -> float:
    """Guess a confidence for a word when the recognizer supplied none.

    Common function words are recognized reliably; longer words carry
    more uncertainty.
    """
    word = text.strip().lower()
    if word in _COMMON_WORDS:
        return 0.95
    if len(word) > 8:
        return 0.65
    if len(word) > 5:
        return 0.80
    return 0.85
