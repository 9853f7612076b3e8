"""Word review lifecycle: clean, flagged, confirmed, dismissed."""

from enum import Enum

from verbatim.confidence import classify_confidence
from verbatim.errors import InvalidTransitionError
from verbatim.types import WordStatus


class ReviewAction(Enum):
    FLAG = "flag"          # automatic, at word creation only
    CONFIRM = "confirm"
    DISMISS = "dismiss"
    REVERT = "revert"      # confirmed error removed


_TRANSITIONS: dict[tuple[WordStatus, ReviewAction], WordStatus] = {
    (WordStatus.CLEAN, ReviewAction.FLAG): WordStatus.FLAGGED,
    (WordStatus.FLAGGED, ReviewAction.CONFIRM): WordStatus.CONFIRMED,
    (WordStatus.FLAGGED, ReviewAction.DISMISS): WordStatus.DISMISSED,
    (WordStatus.CONFIRMED, ReviewAction.REVERT): WordStatus.FLAGGED,
}

_REVIEWABLE = frozenset({WordStatus.FLAGGED, WordStatus.CONFIRMED})


def next_status(status: WordStatus, action: ReviewAction) -> WordStatus:
    """Return the status reached by applying action, or raise."""
    try:
        return _TRANSITIONS[(status, action)]
    except KeyError:
        raise InvalidTransitionError(
            f"Cannot {action.value} a word that is {status.value}"
        ) from None


def initial_status(confidence: float, threshold: float) -> WordStatus:
    """Decide once, at creation, whether a new word starts flagged."""
    status = WordStatus.CLEAN
    if classify_confidence(confidence, threshold).requires_review:
        status = next_status(status, ReviewAction.FLAG)
    return status


def is_reviewable(status: WordStatus) -> bool:
    """Only flagged and confirmed words can be opened for detail review."""
    return status in _REVIEWABLE
