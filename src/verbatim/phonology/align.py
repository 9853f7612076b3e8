"""Phoneme sequence alignment strategies."""

import logging
from abc import ABC, abstractmethod

from verbatim.phonology.features import is_vowel, manner_of

logger = logging.getLogger(__name__)

AlignedPair = tuple[str | None, str | None]

# Costs for the edit aligner. Matching a consonant to a vowel costs more
# than two gaps, so the aligner prefers a deletion plus an insertion.
_GAP_COST = 2
_CROSS_TYPE_COST = 5


class Aligner(ABC):
    """Abstract base for expected/produced phoneme alignment."""

    name: str = "base"

    @abstractmethod
    def align(self, expected: list[str], produced: list[str]) -> list[AlignedPair]:
        """Pair up expected and produced phonemes.

        Returns:
            (expected, produced) pairs in sequence order. None on one side
            marks a deletion (produced is None) or an insertion (expected
            is None).
        """


class PositionalAligner(Aligner):
    """Pairs phonemes by index; the shorter sequence is padded with None."""

    name = "positional"

    def align(self, expected: list[str], produced: list[str]) -> list[AlignedPair]:
        len_e = len(expected)
        len_p = len(produced)
        pairs: list[AlignedPair] = []
        for i in range(max(len_e, len_p)):
            exp = expected[i] if i < len_e else None
            prod = produced[i] if i < len_p else None
            pairs.append((exp, prod))
        return pairs


def substitution_cost(a: str, b: str) -> int:
    """Cost of aligning two phonemes against each other.

    0 for identical symbols, 1 for two vowels or two consonants sharing a
    manner of articulation, 2 for other consonant pairs, and a large cost
    for a consonant against a vowel.
    """
    if a == b:
        return 0
    vowel_a = is_vowel(a)
    vowel_b = is_vowel(b)
    if vowel_a != vowel_b:
        return _CROSS_TYPE_COST
    if vowel_a:
        return 1
    manner_a = manner_of(a)
    if manner_a is not None and manner_a == manner_of(b):
        return 1
    return 2


class EditAligner(Aligner):
    """Needleman-Wunsch global alignment with feature-aware costs.

    Unlike positional alignment, a medial deletion does not shift every
    later phoneme out of place.
    """

    name = "edit"

    def align(self, expected: list[str], produced: list[str]) -> list[AlignedPair]:
        n = len(expected)
        m = len(produced)

        # cost[i][j] = min cost aligning expected[:i] with produced[:j]
        cost = [[0] * (m + 1) for _ in range(n + 1)]
        for i in range(1, n + 1):
            cost[i][0] = i * _GAP_COST
        for j in range(1, m + 1):
            cost[0][j] = j * _GAP_COST

        for i in range(1, n + 1):
            for j in range(1, m + 1):
                cost[i][j] = min(
                    cost[i - 1][j - 1] + substitution_cost(expected[i - 1], produced[j - 1]),
                    cost[i - 1][j] + _GAP_COST,
                    cost[i][j - 1] + _GAP_COST,
                )

        # --- Backtrace (prefer match/substitution, then deletion) ---
        pairs: list[AlignedPair] = []
        i, j = n, m
        while i > 0 or j > 0:
            if (
                i > 0 and j > 0
                and cost[i][j] == cost[i - 1][j - 1]
                + substitution_cost(expected[i - 1], produced[j - 1])
            ):
                pairs.append((expected[i - 1], produced[j - 1]))
                i -= 1
                j -= 1
            elif i > 0 and cost[i][j] == cost[i - 1][j] + _GAP_COST:
                pairs.append((expected[i - 1], None))
                i -= 1
            else:
                pairs.append((None, produced[j - 1]))
                j -= 1
        pairs.reverse()
        return pairs


_ALIGNERS: dict[str, type[Aligner]] = {
    "positional": PositionalAligner,
    "edit": EditAligner,
}


def get_aligner(name: str) -> Aligner:
    """Get an alignment strategy by name.

    Modes:
        "positional": index-by-index pairing (default).
        "edit": Needleman-Wunsch edit-distance alignment.
    """
    if name not in _ALIGNERS:
        raise ValueError(
            f"Unknown aligner: {name!r}. Available: {list(_ALIGNERS.keys())}"
        )
    return _ALIGNERS[name]()
