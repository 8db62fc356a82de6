# Copyright (c) 2026 Signer — MIT License

"""BIP39 mnemonic sentences.

Wordlists come from the reference `mnemonic` distribution; languages are
numbered with their BIP85 codes.

    entropy (16/20/24/28/32 bytes) || first len/4 bits of SHA-256
        -> 11-bit groups -> words (12/15/18/21/24)

Usage:
    from gridseed.mnemonic import Language, entropy_to_mnemonic, Mnemonic
    sentence = entropy_to_mnemonic(entropy, Language.ENGLISH)
    m = Mnemonic.parse(sentence)      # detects language, checks checksum
    master = m.to_master("passphrase")
"""

import functools
import hashlib
import logging
import unicodedata
from enum import Enum

from mnemonic import Mnemonic as _WordlistSource

from .errors import EncodingError, ValidationError
from .network import Network
from .secure import wiping
from .seed import master_from_seed

logger = logging.getLogger(__name__)

# entropy bytes -> word count
ENTROPY_LENGTHS = {16: 12, 20: 15, 24: 18, 28: 21, 32: 24}
WORD_COUNTS = {v: k for k, v in ENTROPY_LENGTHS.items()}

_PBKDF2_ROUNDS = 2048
_SALT_PREFIX = "mnemonic"


class Language(Enum):
    ENGLISH = (0, "english")
    JAPANESE = (1, "japanese")
    KOREAN = (2, "korean")
    SPANISH = (3, "spanish")
    CHINESE_SIMPLIFIED = (4, "chinese_simplified")
    CHINESE_TRADITIONAL = (5, "chinese_traditional")
    FRENCH = (6, "french")
    ITALIAN = (7, "italian")
    CZECH = (8, "czech")
    PORTUGUESE = (9, "portuguese")

    @property
    def code(self):
        return self.value[0]

    @property
    def wordlist_name(self):
        return self.value[1]


def to_language(language):
    """Accept a Language, its BIP85 code, or its name ("english", "French")."""
    if isinstance(language, Language):
        return language
    if isinstance(language, int) and not isinstance(language, bool):
        for lang in Language:
            if lang.code == language:
                return lang
    elif isinstance(language, str):
        key = language.strip().upper().replace(" ", "_").replace("-", "_")
        if key in Language.__members__:
            return Language[key]
    raise ValidationError(f"unsupported language {language!r}",
                          field="language", value=language)


def _nfkd(text):
    return unicodedata.normalize("NFKD", text)


@functools.lru_cache(maxsize=None)
def wordlist(language=Language.ENGLISH):
    """The 2048-word list for `language` as a tuple."""
    language = to_language(language)
    words = tuple(_WordlistSource(language.wordlist_name).wordlist)
    if len(words) != 2048:
        raise ValidationError(f"{language.wordlist_name} wordlist has {len(words)} words",
                              field="language", value=language)
    return words


@functools.lru_cache(maxsize=None)
def _word_index(language):
    return {_nfkd(w): i for i, w in enumerate(wordlist(language))}


def _split(sentence):
    if not isinstance(sentence, str):
        raise ValidationError("mnemonic must be a string", field="mnemonic")
    return _nfkd(sentence).split()


def _checksum_bits(entropy):
    cs = len(entropy) * 8 // 32
    return int.from_bytes(hashlib.sha256(entropy).digest(), "big") >> (256 - cs), cs


def entropy_to_mnemonic(entropy, language=Language.ENGLISH):
    """Encode entropy bytes as a BIP39 sentence (words joined by spaces)."""
    language = to_language(language)
    if len(entropy) not in ENTROPY_LENGTHS:
        raise EncodingError(
            f"mnemonic entropy must be one of {sorted(ENTROPY_LENGTHS)} bytes, got {len(entropy)}",
            field="entropy", value=len(entropy))
    words = wordlist(language)
    checksum, cs = _checksum_bits(bytes(entropy))
    total = (int.from_bytes(entropy, "big") << cs) | checksum
    count = ENTROPY_LENGTHS[len(entropy)]
    out = [words[(total >> (11 * (count - 1 - i))) & 0x7FF] for i in range(count)]
    return " ".join(out)


_CHINESE = {Language.CHINESE_SIMPLIFIED, Language.CHINESE_TRADITIONAL}


def detect_language(sentence):
    """Guess the wordlist language of a sentence.

    Languages whose wordlist holds every word are narrowed to those where
    the checksum also holds. A sentence valid in both Chinese lists reads
    as simplified Chinese; any other tie raises ValidationError.
    """
    words = _split(sentence)
    if not words:
        raise ValidationError("mnemonic is empty", field="mnemonic")
    candidates = [lang for lang in Language
                  if all(w in _word_index(lang) for w in words)]
    if not candidates:
        raise ValidationError("words do not belong to any supported wordlist",
                              field="mnemonic")
    valid = []
    for lang in candidates:
        try:
            mnemonic_to_entropy(sentence, lang)
        except EncodingError:
            continue
        valid.append(lang)
    if not valid:
        return candidates[0]
    if len(valid) == 1:
        return valid[0]
    if set(valid) <= _CHINESE:
        return Language.CHINESE_SIMPLIFIED
    raise ValidationError(
        f"mnemonic is valid in several languages: {', '.join(l.wordlist_name for l in valid)}",
        field="language", value=tuple(valid))


def mnemonic_to_entropy(sentence, language=None):
    """Decode a BIP39 sentence back to entropy, verifying the checksum."""
    words = _split(sentence)
    if len(words) not in WORD_COUNTS:
        raise EncodingError(f"mnemonic must have 12, 15, 18, 21 or 24 words, got {len(words)}",
                            field="mnemonic", value=len(words))
    language = detect_language(sentence) if language is None else to_language(language)
    index = _word_index(language)

    total = 0
    for pos, word in enumerate(words):
        try:
            total = (total << 11) | index[word]
        except KeyError:
            raise EncodingError(f"word {pos + 1} is not in the {language.wordlist_name} wordlist",
                                field="mnemonic", value=pos) from None

    length = WORD_COUNTS[len(words)]
    cs = length * 8 // 32
    entropy = (total >> cs).to_bytes(length, "big")
    expected, _ = _checksum_bits(entropy)
    if total & ((1 << cs) - 1) != expected:
        raise EncodingError("mnemonic checksum mismatch", field="mnemonic")
    return entropy


def to_seed(sentence, passphrase=""):
    """BIP39 seed: PBKDF2-HMAC-SHA512(NFKD sentence, "mnemonic" + NFKD passphrase, 2048)."""
    if isinstance(passphrase, bytes):
        passphrase = passphrase.decode("utf-8")
    words = _split(sentence)
    with wiping(" ".join(words).encode("utf-8")) as bufs:
        return hashlib.pbkdf2_hmac(
            "sha512",
            bytes(bufs[0]),
            (_SALT_PREFIX + _nfkd(passphrase or "")).encode("utf-8"),
            _PBKDF2_ROUNDS,
            dklen=64,
        )


class Mnemonic:
    """A validated mnemonic sentence with its language and entropy."""

    __slots__ = ("words", "language", "entropy")

    def __init__(self, words, language, entropy):
        self.words = tuple(words)
        self.language = language
        self.entropy = entropy

    def __repr__(self):
        return f"Mnemonic(words={len(self.words)}, language={self.language.name})"

    def __str__(self):
        return " ".join(self.words)

    def __len__(self):
        return len(self.words)

    def __eq__(self, other):
        if not isinstance(other, Mnemonic):
            return NotImplemented
        return self.words == other.words and self.language == other.language

    def __hash__(self):
        return hash((self.words, self.language))

    @property
    def sentence(self):
        return str(self)

    @classmethod
    def from_entropy(cls, entropy, language=Language.ENGLISH):
        language = to_language(language)
        sentence = entropy_to_mnemonic(entropy, language)
        return cls(sentence.split(" "), language, bytes(entropy))

    @classmethod
    def parse(cls, sentence, language=None):
        """Validate a sentence; the language is detected when not given."""
        language = detect_language(sentence) if language is None else to_language(language)
        entropy = mnemonic_to_entropy(sentence, language)
        words = entropy_to_mnemonic(entropy, language).split(" ")
        logger.debug(f"[mnemonic] parsed words={len(words)} language={language.name}")
        return cls(words, language, entropy)

    def to_seed(self, passphrase=""):
        return to_seed(self.sentence, passphrase)

    def to_master(self, passphrase="", network=Network.MAINNET):
        return master_from_seed(self.to_seed(passphrase), network)
