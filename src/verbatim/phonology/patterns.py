"""Classify phoneme mismatches into phonological error patterns."""

import logging

from verbatim.phonology.align import Aligner, get_aligner
from verbatim.phonology.features import (
    AFFRICATES,
    ALVEOLARS,
    FRICATIVES,
    GLIDES,
    LIQUIDS,
    NASALS,
    STOPS,
    VELARS,
    VOICED,
    VOICELESS,
    same_manner,
)
from verbatim.phonology.notation import parse_phonemes
from verbatim.types import DELETION_MARKER, ErrorPattern, SuggestedError

logger = logging.getLogger(__name__)

# Frontal lisp is only recognized for these exact substitutions
_LISP_PAIRS = {("s", "θ"), ("z", "ð")}

DEVELOPMENTAL_NORMS: dict[ErrorPattern, str | None] = {
    ErrorPattern.GLIDING: "Typically eliminated by age 5-6",
    ErrorPattern.FRONTAL_LISP: "Should be addressed if persisting past age 4-5",
    ErrorPattern.LATERAL_LISP: "Not developmentally typical; intervention recommended",
    ErrorPattern.STOPPING: "Typically eliminated by age 3-5 depending on sound",
    ErrorPattern.FRONTING: "Typically eliminated by age 3.5-4",
    ErrorPattern.BACKING: "Not developmentally typical; intervention recommended",
    ErrorPattern.CLUSTER_REDUCTION: "Typically eliminated by age 4-5",
    ErrorPattern.FINAL_CONSONANT_DELETION: "Typically eliminated by age 3-3.5",
    ErrorPattern.INITIAL_CONSONANT_DELETION: "Not developmentally typical; intervention recommended",
    ErrorPattern.VOWEL_SUBSTITUTION: "Varies by specific vowel",
    ErrorPattern.DEAFFRICATION: "Typically eliminated by age 4",
    ErrorPattern.AFFRICATION: "Not developmentally typical at any age",
    ErrorPattern.VOICING: "Typically resolved by age 4",
    ErrorPattern.DEVOICING: "Typically resolved by age 4",
    ErrorPattern.NASALIZATION: "May indicate structural issues; evaluation recommended",
    ErrorPattern.DENASALIZATION: "May indicate structural issues; evaluation recommended",
    ErrorPattern.CUSTOM: None,
}

_GENERIC_INTERVENTION = "Consult clinical resources for pattern-specific intervention"

INTERVENTIONS: dict[ErrorPattern, list[str]] = {
    ErrorPattern.GLIDING: [
        "Minimal pairs therapy (/w/ vs /r/, /w/ vs /l/)",
        "Phonetic placement techniques",
        "Auditory discrimination training",
    ],
    ErrorPattern.FRONTAL_LISP: [
        "Tongue placement training",
        "Visual feedback with mirror",
        "Tactile cues for alveolar ridge contact",
    ],
    ErrorPattern.STOPPING: [
        "Minimal pairs therapy",
        "Emphasize continuant nature of fricatives",
        "Airflow awareness activities",
    ],
    ErrorPattern.FRONTING: [
        "Minimal pairs therapy (/t/ vs /k/, /d/ vs /g/)",
        "Back of tongue awareness",
        "Tactile cues for velar contact",
    ],
}


def developmental_norm(pattern: ErrorPattern) -> str | None:
    """Age by which the pattern is typically eliminated, if known."""
    return DEVELOPMENTAL_NORMS[pattern]


def intervention_suggestions(pattern: ErrorPattern) -> list[str]:
    return list(INTERVENTIONS.get(pattern, [_GENERIC_INTERVENTION]))


def identify_pattern(expected: str, produced: str) -> ErrorPattern | None:
    """Classify a single substitution; None when no rule applies.

    Rules are checked in priority order and the first match wins.
    """
    if expected in LIQUIDS and produced in GLIDES:
        return ErrorPattern.GLIDING
    if (expected, produced) in _LISP_PAIRS:
        return ErrorPattern.FRONTAL_LISP
    if expected in FRICATIVES and produced in STOPS:
        return ErrorPattern.STOPPING
    if expected in VELARS and produced in ALVEOLARS:
        return ErrorPattern.FRONTING
    if expected in ALVEOLARS and produced in VELARS:
        return ErrorPattern.BACKING
    if expected in AFFRICATES and produced in FRICATIVES:
        return ErrorPattern.DEAFFRICATION
    if expected in FRICATIVES and produced in AFFRICATES:
        return ErrorPattern.AFFRICATION
    if expected in VOICELESS and produced in VOICED and same_manner(expected, produced):
        return ErrorPattern.VOICING
    if expected in VOICED and produced in VOICELESS and same_manner(expected, produced):
        return ErrorPattern.DEVOICING
    if expected not in NASALS and produced in NASALS:
        return ErrorPattern.NASALIZATION
    if expected in NASALS and produced not in NASALS:
        return ErrorPattern.DENASALIZATION
    return None


def _deletion_pattern(index: int, length: int) -> ErrorPattern | None:
    """Classify a deleted phoneme by its position in the expected sequence.

    Medial deletions are not classified.
    """
    if index == length - 1:
        return ErrorPattern.FINAL_CONSONANT_DELETION
    if index == 0:
        return ErrorPattern.INITIAL_CONSONANT_DELETION
    return None


def analyze_errors(
    expected: str | None,
    produced: str | None,
    aligner: str | Aligner = "positional",
) -> list[SuggestedError]:
    """Suggest error patterns for a produced phonetic against the expected one.

    Unclassifiable substitutions, medial deletions and insertions are
    omitted; the clinician classifies those manually.

    Args:
        expected: Expected phonetic string, e.g. "/ɹ æ b ɪ t/".
        produced: Produced phonetic string, e.g. "/w æ b ɪ t/".
        aligner: Alignment strategy name or instance.

    Returns:
        Suggested errors in alignment order.
    """
    expected_phonemes = parse_phonemes(expected)
    produced_phonemes = parse_phonemes(produced)
    if not expected_phonemes:
        return []

    if isinstance(aligner, str):
        aligner = get_aligner(aligner)

    errors: list[SuggestedError] = []
    exp_index = -1
    for exp, prod in aligner.align(expected_phonemes, produced_phonemes):
        if exp is None:
            continue  # insertion
        exp_index += 1
        if exp == prod:
            continue

        if prod is None:
            pattern = _deletion_pattern(exp_index, len(expected_phonemes))
            produced_label = DELETION_MARKER
        else:
            pattern = identify_pattern(exp, prod)
            produced_label = prod

        if pattern is None:
            logger.debug(f"Unclassified mismatch /{exp}/ -> /{produced_label}/")
            continue
        errors.append(SuggestedError(
            target=exp,
            produced=produced_label,
            pattern=pattern,
        ))

    return errors
