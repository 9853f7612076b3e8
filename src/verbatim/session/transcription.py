"""Turn recognizer word events into reviewable transcribed words."""

import logging
import random

from verbatim.confidence import (
    DEFAULT_FLAG_THRESHOLD,
    clamp_confidence,
    estimate_confidence,
)
from verbatim.phonology.align import Aligner
from verbatim.phonology.notation import format_phonemes, parse_phonemes
from verbatim.phonology.patterns import analyze_errors
from verbatim.phonology.pronunciation import PronunciationDictionary
from verbatim.session.lifecycle import initial_status
from verbatim.types import TranscribedWord, WordEvent, WordStatus

logger = logging.getLogger(__name__)

# Substitutions a simulated child speaker makes, one per word
_SIMULATED_SUBSTITUTIONS = [
    ("ɹ", "w"),  # gliding
    ("l", "w"),  # gliding
    ("s", "θ"),  # frontal lisp
    ("z", "ð"),  # frontal lisp
    ("k", "t"),  # fronting
    ("ɡ", "d"),  # fronting
]


class SimulatedProducer:
    """Stand-in for a phoneme recognizer.

    Returns the expected phonetic, with one common substitution applied
    when recognition confidence is very low.
    """

    def __init__(self, seed: int | None = None, error_confidence: float = 0.4):
        self.rng = random.Random(seed)
        self.error_confidence = error_confidence

    def __call__(
        self, text: str, expected: str | None, confidence: float,
    ) -> str | None:
        if expected is None:
            return None
        if confidence >= self.error_confidence:
            return expected
        target, replacement = self.rng.choice(_SIMULATED_SUBSTITUTIONS)
        symbols = [replacement if s == target else s for s in parse_phonemes(expected)]
        return format_phonemes(symbols)


def build_word(
    event: WordEvent,
    dictionary: PronunciationDictionary,
    threshold: float = DEFAULT_FLAG_THRESHOLD,
    producer: SimulatedProducer | None = None,
    aligner: str | Aligner = "positional",
) -> TranscribedWord:
    """Create a transcribed word and, if flagged, its suggested errors.

    The flag decision is made here, once. A measured phonetic on the event
    takes precedence over the producer.

    Raises:
        InvalidRangeError: If the event ends before it starts.
    """
    text = event.text.strip()
    if event.confidence is None:
        confidence = estimate_confidence(text)
    else:
        confidence = clamp_confidence(event.confidence)

    word = TranscribedWord(
        text=text,
        confidence=confidence,
        start_time=event.start,
        end_time=event.end,
        status=initial_status(confidence, threshold),
    )
    word.expected_phonetic = dictionary.lookup(text)

    if word.status == WordStatus.FLAGGED:
        if event.phonetic:
            word.auto_phonetic = event.phonetic
        elif producer is not None:
            word.auto_phonetic = producer(text, word.expected_phonetic, confidence)

        if word.expected_phonetic and word.auto_phonetic:
            word.suggested_errors = analyze_errors(
                word.expected_phonetic, word.auto_phonetic, aligner=aligner,
            )
        logger.debug(
            f"Flagged {text!r} ({confidence:.2f}): "
            f"{len(word.suggested_errors)} suggestion(s)"
        )

    return word


def build_words(
    events: list[WordEvent],
    dictionary: PronunciationDictionary,
    threshold: float = DEFAULT_FLAG_THRESHOLD,
    producer: SimulatedProducer | None = None,
    aligner: str | Aligner = "positional",
) -> list[TranscribedWord]:
    """Build the full word list for one recognition update."""
    words = [
        build_word(e, dictionary, threshold, producer, aligner)
        for e in events
        if e.text.strip()
    ]
    flagged = sum(1 for w in words if w.status == WordStatus.FLAGGED)
    logger.info(f"Built {len(words)} words, {flagged} flagged for review")
    return words
