"""Expected pronunciations (IPA) for English words."""

import logging
import string

from verbatim.phonology.features import arpabet_to_ipa
from verbatim.phonology.notation import format_phonemes

logger = logging.getLogger(__name__)

_g2p = None


def _get_g2p():
    """Lazily construct the g2p_en model (loads NLTK data on first use)."""
    global _g2p
    if _g2p is None:
        from g2p_en import G2p
        _g2p = G2p()
    return _g2p


# Common clinical test words plus frequent function words
BUILTIN_PRONUNCIATIONS: dict[str, str] = {
    "rabbit": "/ɹ æ b ɪ t/",
    "red": "/ɹ ɛ d/",
    "run": "/ɹ ʌ n/",
    "rain": "/ɹ eɪ n/",
    "road": "/ɹ oʊ d/",
    "rope": "/ɹ oʊ p/",
    "room": "/ɹ u m/",
    "rock": "/ɹ ɑ k/",
    "look": "/l ʊ k/",
    "like": "/l aɪ k/",
    "love": "/l ʌ v/",
    "lamp": "/l æ m p/",
    "little": "/l ɪ t əl/",
    "letter": "/l ɛ t ɚ/",
    "see": "/s i/",
    "say": "/s eɪ/",
    "sun": "/s ʌ n/",
    "soap": "/s oʊ p/",
    "sock": "/s ɑ k/",
    "saw": "/s ɔ/",
    "said": "/s ɛ d/",
    "some": "/s ʌ m/",
    "same": "/s eɪ m/",
    "sit": "/s ɪ t/",
    "set": "/s ɛ t/",
    "side": "/s aɪ d/",
    "song": "/s ɔ ŋ/",
    "soon": "/s u n/",
    "zoo": "/z u/",
    "zero": "/z ɪ ɹ oʊ/",
    "zebra": "/z i b ɹ ə/",
    "ship": "/ʃ ɪ p/",
    "shoe": "/ʃ u/",
    "shop": "/ʃ ɑ p/",
    "show": "/ʃ oʊ/",
    "think": "/θ ɪ ŋ k/",
    "thumb": "/θ ʌ m/",
    "three": "/θ ɹ i/",
    "this": "/ð ɪ s/",
    "that": "/ð æ t/",
    "the": "/ð ə/",
    "them": "/ð ɛ m/",
    "then": "/ð ɛ n/",
    "there": "/ð ɛ ɹ/",
    "cat": "/k æ t/",
    "car": "/k ɑ ɹ/",
    "cup": "/k ʌ p/",
    "key": "/k i/",
    "kick": "/k ɪ k/",
    "come": "/k ʌ m/",
    "cake": "/k eɪ k/",
    "cool": "/k u l/",
    "go": "/ɡ oʊ/",
    "get": "/ɡ ɛ t/",
    "give": "/ɡ ɪ v/",
    "good": "/ɡ ʊ d/",
    "game": "/ɡ eɪ m/",
    "girl": "/ɡ ɝ l/",
    "goat": "/ɡ oʊ t/",
    "fence": "/f ɛ n s/",
    "fish": "/f ɪ ʃ/",
    "five": "/f aɪ v/",
    "food": "/f u d/",
    "fun": "/f ʌ n/",
    "four": "/f ɔ ɹ/",
    "fast": "/f æ s t/",
    "very": "/v ɛ ɹ i/",
    "van": "/v æ n/",
    "vine": "/v aɪ n/",
    "bird": "/b ɝ d/",
    "big": "/b ɪ ɡ/",
    "ball": "/b ɔ l/",
    "bed": "/b ɛ d/",
    "book": "/b ʊ k/",
    "box": "/b ɑ k s/",
    "boy": "/b ɔɪ/",
    "blue": "/b l u/",
    "pig": "/p ɪ ɡ/",
    "pen": "/p ɛ n/",
    "put": "/p ʊ t/",
    "play": "/p l eɪ/",
    "please": "/p l i z/",
    "dog": "/d ɔ ɡ/",
    "day": "/d eɪ/",
    "down": "/d aʊ n/",
    "door": "/d ɔ ɹ/",
    "toy": "/t ɔɪ/",
    "top": "/t ɑ p/",
    "two": "/t u/",
    "time": "/t aɪ m/",
    "tree": "/t ɹ i/",
    "man": "/m æ n/",
    "mom": "/m ɑ m/",
    "my": "/m aɪ/",
    "more": "/m ɔ ɹ/",
    "make": "/m eɪ k/",
    "no": "/n oʊ/",
    "new": "/n u/",
    "name": "/n eɪ m/",
    "nice": "/n aɪ s/",
    "night": "/n aɪ t/",
    "sing": "/s ɪ ŋ/",
    "ring": "/ɹ ɪ ŋ/",
    "thing": "/θ ɪ ŋ/",
    "king": "/k ɪ ŋ/",
    "yes": "/j ɛ s/",
    "you": "/j u/",
    "yellow": "/j ɛ l oʊ/",
    "young": "/j ʌ ŋ/",
    "with": "/w ɪ θ/",
    "want": "/w ɑ n t/",
    "water": "/w ɔ t ɚ/",
    "what": "/w ʌ t/",
    "when": "/w ɛ n/",
    "where": "/w ɛ ɹ/",
    "why": "/w aɪ/",
    "white": "/w aɪ t/",
    "house": "/h aʊ s/",
    "her": "/h ɝ/",
    "him": "/h ɪ m/",
    "help": "/h ɛ l p/",
    "home": "/h oʊ m/",
    "happy": "/h æ p i/",
    "chair": "/tʃ ɛ ɹ/",
    "cheese": "/tʃ i z/",
    "child": "/tʃ aɪ l d/",
    "children": "/tʃ ɪ l d ɹ ən/",
    "chocolate": "/tʃ ɑ k l ɪ t/",
    "jump": "/dʒ ʌ m p/",
    "juice": "/dʒ u s/",
    "just": "/dʒ ʌ s t/",
    "a": "/ə/",
    "an": "/æ n/",
    "and": "/æ n d/",
    "or": "/ɔ ɹ/",
    "but": "/b ʌ t/",
    "is": "/ɪ z/",
    "are": "/ɑ ɹ/",
    "was": "/w ʌ z/",
    "were": "/w ɝ/",
    "be": "/b i/",
    "been": "/b ɪ n/",
    "being": "/b i ɪ ŋ/",
    "have": "/h æ v/",
    "has": "/h æ z/",
    "had": "/h æ d/",
    "do": "/d u/",
    "does": "/d ʌ z/",
    "did": "/d ɪ d/",
    "will": "/w ɪ l/",
    "would": "/w ʊ d/",
    "could": "/k ʊ d/",
    "should": "/ʃ ʊ d/",
    "can": "/k æ n/",
    "may": "/m eɪ/",
    "might": "/m aɪ t/",
    "must": "/m ʌ s t/",
    "shall": "/ʃ æ l/",
    "i": "/aɪ/",
    "me": "/m i/",
    "he": "/h i/",
    "she": "/ʃ i/",
    "it": "/ɪ t/",
    "we": "/w i/",
    "they": "/ð eɪ/",
    "hopped": "/h ɑ p t/",
    "over": "/oʊ v ɚ/",
    "under": "/ʌ n d ɚ/",
    "in": "/ɪ n/",
    "on": "/ɑ n/",
    "at": "/æ t/",
    "to": "/t u/",
    "from": "/f ɹ ʌ m/",
    "of": "/ʌ v/",
    "for": "/f ɔ ɹ/",
}


def normalize_word(word: str) -> str:
    """Lowercase and strip surrounding punctuation and whitespace."""
    return word.strip().strip(string.punctuation).strip().lower()


class PronunciationDictionary:
    """Word to expected phonetic lookup.

    Built once and passed to whatever needs it. Words missing from the
    table can optionally be converted with g2p_en (ARPABET, mapped to IPA).
    """

    def __init__(
        self,
        entries: dict[str, str] | None = None,
        use_g2p: bool = False,
    ):
        source = BUILTIN_PRONUNCIATIONS if entries is None else entries
        self._entries = {normalize_word(w): ipa for w, ipa in source.items()}
        self.use_g2p = use_g2p

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, word: str) -> str | None:
        """Return the expected phonetic string for a word, or None."""
        key = normalize_word(word)
        if not key:
            return None
        if key in self._entries:
            return self._entries[key]
        if self.use_g2p:
            return self._lookup_g2p(key)
        return None

    def contains(self, word: str) -> bool:
        return self.lookup(word) is not None

    def add_pronunciation(self, word: str, ipa: str) -> None:
        self._entries[normalize_word(word)] = ipa

    def _lookup_g2p(self, key: str) -> str | None:
        raw = _get_g2p()(key)
        symbols = arpabet_to_ipa([p for p in raw if p.strip()])
        if not symbols:
            return None
        ipa = format_phonemes(symbols)
        logger.debug(f"g2p pronunciation for {key!r}: {ipa}")
        # Remember it so repeated words skip the model
        self._entries[key] = ipa
        return ipa
