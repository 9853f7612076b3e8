"""Slash-delimited IPA notation: parsing and formatting."""

_DELIMITER = "/"


def parse_phonemes(text: str | None) -> list[str]:
    """Split a phonetic string like "/ɹ æ b ɪ t/" into phoneme symbols.

    Strips surrounding whitespace and leading/trailing slash delimiters,
    then splits on whitespace. Symbols are opaque: case and diacritics are
    left alone, so a diacritic written without a space stays fused to its
    neighbour. Empty or delimiter-only input yields an empty list.
    """
    if not text:
        return []
    return text.strip().strip(_DELIMITER).split()


def format_phonemes(symbols: list[str]) -> str:
    """Render phoneme symbols as a slash-delimited phonetic string."""
    return f"{_DELIMITER}{' '.join(symbols)}{_DELIMITER}"
