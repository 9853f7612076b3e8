"""Tests for slash-delimited IPA parsing."""

from verbatim.phonology.notation import format_phonemes, parse_phonemes


class TestParsePhonemes:
    def test_rabbit(self):
        assert parse_phonemes("/ɹ æ b ɪ t/") == ["ɹ", "æ", "b", "ɪ", "t"]

    def test_empty_string(self):
        assert parse_phonemes("") == []

    def test_none(self):
        assert parse_phonemes(None) == []

    def test_delimiters_only(self):
        assert parse_phonemes("//") == []
        assert parse_phonemes(" / / ") == []

    def test_surrounding_whitespace(self):
        assert parse_phonemes("  /k æ t/  ") == ["k", "æ", "t"]

    def test_without_delimiters(self):
        assert parse_phonemes("k æ t") == ["k", "æ", "t"]

    def test_multichar_symbols_kept_whole(self):
        assert parse_phonemes("/tʃ aɪ l d/") == ["tʃ", "aɪ", "l", "d"]

    def test_fused_diacritic_not_split(self):
        assert parse_phonemes("/k æː t/") == ["k", "æː", "t"]

    def test_extra_internal_whitespace(self):
        assert parse_phonemes("/k   æ\tt/") == ["k", "æ", "t"]

    def test_order_preserved(self):
        assert parse_phonemes("/t æ k/") == ["t", "æ", "k"]


class TestFormatPhonemes:
    def test_format(self):
        assert format_phonemes(["k", "æ", "t"]) == "/k æ t/"

    def test_parse_inverts_format(self):
        symbols = ["dʒ", "ʌ", "m", "p"]
        assert parse_phonemes(format_phonemes(symbols)) == symbols
