"""Static articulatory feature tables for IPA phoneme symbols."""

# Manner of articulation
STOPS = frozenset({"p", "b", "t", "d", "k", "ɡ"})
FRICATIVES = frozenset({"f", "v", "θ", "ð", "s", "z", "ʃ", "ʒ", "h"})
AFFRICATES = frozenset({"tʃ", "dʒ"})
NASALS = frozenset({"m", "n", "ŋ"})
LIQUIDS = frozenset({"ɹ", "l"})
GLIDES = frozenset({"w", "j"})

# Place of articulation
VELARS = frozenset({"k", "ɡ", "ŋ"})
ALVEOLARS = frozenset({"t", "d", "n", "s", "z", "l"})

# Voicing
VOICED = frozenset({
    "b", "d", "ɡ", "v", "ð", "z", "ʒ", "dʒ",
    "m", "n", "ŋ", "l", "ɹ", "w", "j",
})
VOICELESS = frozenset({"p", "t", "k", "f", "θ", "s", "ʃ", "tʃ", "h"})

VOWELS = frozenset({
    "i", "ɪ", "e", "ɛ", "æ", "ə", "ʌ",
    "ɑ", "ɔ", "o", "ʊ", "u", "aɪ", "aʊ",
    "ɔɪ", "eɪ", "oʊ", "ɝ", "ɚ", "ɐ", "ɒ", "əl", "ən",
})

# Manner classes that count for "same manner of articulation"
_MANNER_CLASSES: dict[str, frozenset[str]] = {
    "stop": STOPS,
    "fricative": FRICATIVES,
    "nasal": NASALS,
    "affricate": AFFRICATES,
}

_ALL_MANNERS: dict[str, frozenset[str]] = {
    **_MANNER_CLASSES,
    "liquid": LIQUIDS,
    "glide": GLIDES,
}

# CMUdict / g2p_en ARPABET (stress-stripped) to IPA
ARPABET_TO_IPA: dict[str, str] = {
    # Vowels
    "AA": "ɑ", "AE": "æ", "AH": "ʌ", "AO": "ɔ", "AW": "aʊ",
    "AX": "ə", "AXR": "ɚ", "AY": "aɪ", "EH": "ɛ", "ER": "ɝ",
    "EY": "eɪ", "IH": "ɪ", "IX": "ɨ", "IY": "i", "OW": "oʊ",
    "OY": "ɔɪ", "UH": "ʊ", "UW": "u", "UX": "ʉ",
    # Consonants
    "B": "b", "CH": "tʃ", "D": "d", "DH": "ð", "DX": "ɾ",
    "EL": "l̩", "EM": "m̩", "EN": "n̩", "F": "f", "G": "ɡ",
    "HH": "h", "JH": "dʒ", "K": "k", "L": "l", "M": "m",
    "N": "n", "NG": "ŋ", "NX": "ɾ̃", "P": "p", "Q": "ʔ",
    "R": "ɹ", "S": "s", "SH": "ʃ", "T": "t", "TH": "θ",
    "V": "v", "W": "w", "WH": "ʍ", "Y": "j", "Z": "z",
    "ZH": "ʒ",
}


def strip_stress(phoneme: str) -> str:
    """Remove trailing stress marker (0, 1, 2) from an ARPABET phoneme."""
    if phoneme and phoneme[-1] in "012":
        return phoneme[:-1]
    return phoneme


def arpabet_to_ipa(phonemes: list[str]) -> list[str]:
    """Convert ARPABET phonemes to IPA symbols, skipping unknown labels."""
    result = []
    for p in phonemes:
        ipa = ARPABET_TO_IPA.get(strip_stress(p.strip()))
        if ipa is not None:
            result.append(ipa)
    return result


def manner_of(phoneme: str) -> str | None:
    """Return the manner of articulation of a consonant, or None."""
    for manner, members in _ALL_MANNERS.items():
        if phoneme in members:
            return manner
    return None


def same_manner(a: str, b: str) -> bool:
    """True if both phonemes are stops, fricatives, nasals or affricates."""
    return any(a in members and b in members for members in _MANNER_CLASSES.values())


def is_vowel(phoneme: str) -> bool:
    return phoneme in VOWELS
