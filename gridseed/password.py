# Copyright (c) 2026 Signer — MIT License

"""Password charsets and the unbiased sampler that renders entropy into them.

Charset tables are part of the compatibility contract: reordering or
editing a table changes every password previously derived from it. Each
table is pinned by a SHA-256 digest in the tests; bump CHARSET_VERSION
when a table has to change.

Sampling reads the entropy stream as one long big-endian bit string and
cuts it into k-bit digits, k = bit_length(size - 1). Digits below the
charset size select a character; larger digits are discarded. New 64-byte
blocks are pulled whenever fewer than k bits remain. For 64-character
sets this is plain 6-bit chunking, the BIP85 base64 password rule.
"""

import hashlib
from collections import namedtuple

from .errors import ValidationError

CHARSET_VERSION = 1

MAX_LENGTH = 0x7FFFFFFF


class Charset(namedtuple("Charset", ["name", "characters"])):
    __slots__ = ()

    @property
    def size(self):
        return len(self.characters)

    @property
    def digest(self):
        """SHA-256 of the UTF-8 table, for pinning."""
        return hashlib.sha256("".join(self.characters).encode("utf-8")).hexdigest()

    def __contains__(self, ch):
        return ch in self.characters

    def __repr__(self):
        return f"Charset({self.name!r}, size={self.size})"


def _table(name, characters, distinct=True):
    characters = tuple(characters)
    if len(characters) < 2 or (distinct and len(set(characters)) != len(characters)):
        raise ValidationError(f"charset {name} must hold 2+ distinct characters",
                              field="charset", value=name)
    return Charset(name, characters)


_EMOJI_CODEPOINTS = (
    0x1F60A, 0x1F60D, 0x1F61B, 0x1F62D, 0x1F60E, 0x1F47D, 0x1F480, 0x1F47B,  # faces
    0x270B, 0x1F44C, 0x1F449, 0x1F44D, 0x2764, 0x1F48B, 0x1F64F, 0x1F4AA,    # hands, heart
    0x1F435, 0x1F436, 0x1F434, 0x1F437, 0x1F414, 0x1F438, 0x1F40D, 0x1F42C,  # animals
    0x1F33B, 0x1F337, 0x1F331, 0x1F334, 0x1F335, 0x1F340, 0x1F344, 0x1F352,  # plants
    0x1F354, 0x1F35F, 0x1F355, 0x1F366, 0x1F37A, 0x1F349, 0x1F34C, 0x1F34E,  # food
    0x1F3E0, 0x23F0, 0x1F48A, 0x2615, 0x1F697, 0x1F6B2, 0x2708, 0x1F680,     # objects, travel
    0x2600, 0x1F319, 0x2B50, 0x26A1, 0x2614, 0x1F308, 0x1F525, 0x1F4A7,      # sky, weather
    0x1F384, 0x1F381, 0x1F388, 0x1F389, 0x1F514, 0x1F3C6, 0x1F512, 0x1F511,  # things
)

BASE64 = _table(
    "base64",
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/")

# base58 alphabet plus six symbols
DISTINCT = _table(
    "distinct",
    "@#$%&*123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz")

EMOJI = _table("emoji", (chr(cp) for cp in _EMOJI_CODEPOINTS))

# Digits with bit 0x40 set pick EMOJI[digit >> 1], so only the second
# half of the emoji table appears, each entry twice.
MIXTURE = _table(
    "mixture",
    DISTINCT.characters + tuple(EMOJI.characters[i >> 1] for i in range(64, 128)),
    distinct=False)

# CJK Unified Ideographs block
UNICODE = _table("unicode", (chr(cp) for cp in range(0x4E00, 0xA000)))

CHARSETS = {c.name: c for c in (BASE64, DISTINCT, EMOJI, MIXTURE, UNICODE)}

# SHA-256 of each table at CHARSET_VERSION 1
CHARSET_DIGESTS = {
    "base64": "7543b37fa53fde2c84f07fd39f368555966aa1c0eb2f2fd26b294d79966e290e",
    "distinct": "16ea6d367282763df9795a85440198564baca3574fb9f46399a770521f848957",
    "emoji": "e212c23a306bed16b6ee1490ebd6a26dd95bbc2da6c589f9ba6dc3bbc8129ca6",
    "mixture": "b718b5f3e699dc0364e7847f4e217bbe0ddb208fccfde414e892a4f7233d5c22",
    "unicode": "b8860669ad00a9a72d3fdfe75edc1da75fc210a7fd7ee96e2c2adf0807221764",
}


def to_charset(charset):
    """Accept a Charset or a charset name ("emoji", "base64", ...)."""
    if isinstance(charset, Charset):
        return charset
    try:
        return CHARSETS[str(charset).lower()]
    except KeyError:
        raise ValidationError(
            f"unknown charset {charset!r}; expected one of {sorted(CHARSETS)}",
            field="charset", value=charset) from None


def check_length(length):
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValidationError("password length must be an integer",
                              field="length", value=length)
    if not 1 <= length <= MAX_LENGTH:
        raise ValidationError(f"password length must be 1..{MAX_LENGTH}, got {length}",
                              field="length", value=length)


def sample(blocks, charset, length):
    """Render `length` characters of `charset` from an iterable of byte blocks."""
    charset = to_charset(charset)
    check_length(length)
    chars = charset.characters
    size = charset.size
    k = (size - 1).bit_length()
    blocks = iter(blocks)

    acc = 0
    bits = 0
    out = []
    while len(out) < length:
        if bits < k:
            block = next(blocks)
            acc = (acc << (8 * len(block))) | int.from_bytes(block, "big")
            bits += 8 * len(block)
            continue
        bits -= k
        digit = acc >> bits
        acc &= (1 << bits) - 1
        if digit < size:
            out.append(chars[digit])
    return "".join(out)
