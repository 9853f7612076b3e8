"""Confirmed-error ledger for the active review session."""

import copy
import logging
import threading

from verbatim.errors import LedgerInconsistencyError, NotFoundError
from verbatim.session.lifecycle import ReviewAction, is_reviewable, next_status
from verbatim.types import (
    CUSTOM_MARKER,
    ConfirmedError,
    ErrorPattern,
    Session,
    TranscribedWord,
    WordStatus,
)

logger = logging.getLogger(__name__)


class SessionLedger:
    """Single owner of the active session.

    Every mutation (transcription updates and clinician actions alike)
    runs under one lock and leaves confirmed words and ledger entries in
    1:1 correspondence. Mutating methods return a snapshot copy of the
    session.
    """

    def __init__(self, session: Session | None = None):
        self._session = copy.deepcopy(session) if session is not None else Session()
        self._lock = threading.RLock()

    # --- Queries ---

    @property
    def session(self) -> Session:
        """A snapshot of the current session."""
        return self.snapshot()

    def snapshot(self) -> Session:
        with self._lock:
            return copy.deepcopy(self._session)

    def get_word(self, word_id: str) -> TranscribedWord:
        with self._lock:
            return copy.deepcopy(self._find_word(word_id))

    def select(self, word_id: str) -> TranscribedWord | None:
        """Open a word for detail review; None for clean or dismissed words."""
        with self._lock:
            word = self._find_word(word_id)
            if not is_reviewable(word.status):
                return None
            return copy.deepcopy(word)

    def aggregate_by_pattern(self) -> dict[ErrorPattern, int]:
        with self._lock:
            return self._session.error_pattern_counts

    @property
    def flagged_words_count(self) -> int:
        with self._lock:
            return self._session.flagged_words_count

    @property
    def confirmed_errors_count(self) -> int:
        with self._lock:
            return self._session.confirmed_errors_count

    @property
    def total_words(self) -> int:
        with self._lock:
            return self._session.total_words

    # --- Clinician actions ---

    def confirm(
        self,
        word_id: str,
        suggestion_id: str,
        manual_phonetic: str | None = None,
    ) -> Session:
        """Accept one of the word's suggested errors."""
        with self._lock:
            word = self._find_word(word_id)
            status = next_status(word.status, ReviewAction.CONFIRM)
            suggestion = next(
                (s for s in word.suggested_errors if s.id == suggestion_id), None,
            )
            if suggestion is None:
                raise NotFoundError(
                    f"Suggestion {suggestion_id} does not belong to word {word.text!r}"
                )

            entry = ConfirmedError(
                word_id=word.id,
                word=word.text,
                timestamp=word.start_time,
                target=suggestion.target,
                produced=suggestion.produced,
                pattern=suggestion.pattern,
                phonetic=manual_phonetic or word.auto_phonetic or "",
                expected=word.expected_phonetic or "",
            )
            self._session.confirmed_errors.append(entry)
            word.status = status
            if manual_phonetic:
                word.manual_phonetic = manual_phonetic
            logger.info(
                f"Confirmed {entry.pattern.display_name} on {word.text!r} "
                f"(/{entry.target}/ -> /{entry.produced}/)"
            )
            return copy.deepcopy(self._session)

    def confirm_custom(
        self,
        word_id: str,
        manual_phonetic: str,
        pattern: ErrorPattern = ErrorPattern.CUSTOM,
    ) -> Session:
        """Record a clinician-authored error with no automatic hypothesis."""
        with self._lock:
            word = self._find_word(word_id)
            status = next_status(word.status, ReviewAction.CONFIRM)

            entry = ConfirmedError(
                word_id=word.id,
                word=word.text,
                timestamp=word.start_time,
                target=CUSTOM_MARKER,
                produced=CUSTOM_MARKER,
                pattern=pattern,
                phonetic=manual_phonetic,
                expected=word.expected_phonetic or "",
                is_custom=True,
            )
            self._session.confirmed_errors.append(entry)
            word.status = status
            word.manual_phonetic = manual_phonetic
            logger.info(f"Confirmed custom {pattern.display_name} on {word.text!r}")
            return copy.deepcopy(self._session)

    def remove(self, error_id: str) -> Session:
        """Delete a confirmed error and send its word back to flagged."""
        with self._lock:
            index = next(
                (i for i, e in enumerate(self._session.confirmed_errors) if e.id == error_id),
                None,
            )
            if index is None:
                raise NotFoundError(f"No confirmed error with id {error_id}")
            entry = self._session.confirmed_errors[index]
            word = self._find_word(entry.word_id)
            status = next_status(word.status, ReviewAction.REVERT)

            del self._session.confirmed_errors[index]
            word.status = status
            logger.info(f"Removed {entry.pattern.display_name} from {word.text!r}")
            return copy.deepcopy(self._session)

    def dismiss(self, word_id: str) -> Session:
        """Declare a flagged word error-free."""
        with self._lock:
            word = self._find_word(word_id)
            word.status = next_status(word.status, ReviewAction.DISMISS)
            logger.info(f"Dismissed flag on {word.text!r}")
            return copy.deepcopy(self._session)

    # --- Session-level updates ---

    def replace_transcription(self, words: list[TranscribedWord]) -> Session:
        """Overwrite the word list with a new recognition snapshot.

        Ledger entries whose word is gone or no longer confirmed are
        dropped; confirmed words without a ledger entry go back to flagged.
        """
        with self._lock:
            words = copy.deepcopy(words)
            confirmed_in_update = {
                w.id for w in words if w.status == WordStatus.CONFIRMED
            }

            kept = []
            for entry in self._session.confirmed_errors:
                if entry.word_id in confirmed_in_update:
                    kept.append(entry)
                else:
                    logger.warning(
                        f"Dropping confirmed error on {entry.word!r}: "
                        "word not confirmed in new transcription"
                    )
            confirmed_ids = {e.word_id for e in kept}
            for word in words:
                if word.status == WordStatus.CONFIRMED and word.id not in confirmed_ids:
                    word.status = next_status(word.status, ReviewAction.REVERT)

            self._session.transcription = words
            self._session.confirmed_errors = kept
            logger.debug(f"Transcription replaced: {len(words)} words")
            return copy.deepcopy(self._session)

    def start_new_session(self, student_name: str = "") -> Session:
        with self._lock:
            self._session = Session(student_name=student_name)
            return copy.deepcopy(self._session)

    def update_notes(self, notes: str) -> Session:
        with self._lock:
            self._session.clinical_notes = notes
            return copy.deepcopy(self._session)

    def set_duration(self, duration: float) -> Session:
        with self._lock:
            self._session.duration = duration
            return copy.deepcopy(self._session)

    def set_audio_path(self, audio_path: str | None) -> Session:
        with self._lock:
            self._session.audio_path = audio_path
            return copy.deepcopy(self._session)

    def check_consistency(self) -> None:
        """Raise if confirmed words and ledger entries are not 1:1."""
        with self._lock:
            confirmed_words = {
                w.id for w in self._session.transcription
                if w.status == WordStatus.CONFIRMED
            }
            entry_ids = [e.word_id for e in self._session.confirmed_errors]
            if len(entry_ids) != len(set(entry_ids)):
                raise LedgerInconsistencyError("A word has more than one ledger entry")
            if set(entry_ids) != confirmed_words:
                orphans = set(entry_ids) - confirmed_words
                missing = confirmed_words - set(entry_ids)
                raise LedgerInconsistencyError(
                    f"{len(orphans)} orphaned ledger entries, "
                    f"{len(missing)} confirmed words without an entry"
                )

    # --- Internals ---

    def _find_word(self, word_id: str) -> TranscribedWord:
        for word in self._session.transcription:
            if word.id == word_id:
                return word
        raise NotFoundError(f"No word with id {word_id} in session")
