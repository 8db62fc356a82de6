# Copyright (c) 2026 Signer — MIT License

"""BIP85 deterministic entropy from a master key.

Every application derives a hardened child along
m/83696968'/{application}'/{params...}'/{index}' and turns its private key
into 64 bytes:

    entropy = HMAC-SHA512(key=b"bip-entropy-from-k", msg=child_private_key)

Applications that need more than 64 bytes read a counter stream:
block 0 is the standard entropy, block j >= 1 is
HMAC-SHA512(key, child_private_key || ser32(j)).

Usage:
    from gridseed import bip85
    bip85.mnemonic(master, "english", 12, index=0)
    bip85.wif(master, index=0)
    bip85.xprv(master, index=0)
    bip85.password(master, "emoji", 20, index=0)
"""

import hashlib
import hmac
import itertools
import logging
import time

from .encoding import encode_wif
from .errors import ValidationError
from .hdkey import HARDENED, ExtendedKey, derive_path, format_path, ser32, valid_scalar
from .mnemonic import Language, entropy_to_mnemonic, to_language
from .network import Network, to_network
from .password import check_length, sample, to_charset
from .secure import wipe, wiping

logger = logging.getLogger(__name__)

_DOMAIN = b"bip-entropy-from-k"

PURPOSE = 83696968

# application numbers
MNEMONIC = 39
WIF = 2
XPRV = 32
HEX = 128169
PASSWORD = 707764

MNEMONIC_WORDS = (12, 15, 18, 21, 24)
HEX_MIN_BYTES = 16
HEX_MAX_BYTES = 64


def _hardened(value, field):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field=field, value=value)
    if not 0 <= value < HARDENED:
        raise ValidationError(f"{field} must be 0..{HARDENED - 1}, got {value}",
                              field=field, value=value)
    return value + HARDENED


def build_path(application, *params):
    """Hardened path m/83696968'/application'/params...'; the last param is the index."""
    return tuple(
        [PURPOSE + HARDENED, _hardened(application, "application")]
        + [_hardened(p, "index" if i == len(params) - 1 else "parameter")
           for i, p in enumerate(params)]
    )


def _child_key(master, path):
    t0 = time.perf_counter()
    child = derive_path(master, path)
    logger.debug(f"[bip85] path={format_path(path)} "
                 f"({(time.perf_counter() - t0) * 1000:.2f}ms)")
    return child


def _block(key, j):
    msg = bytes(key) if j == 0 else bytes(key) + ser32(j)
    return hmac.new(_DOMAIN, msg, hashlib.sha512).digest()


def derive_entropy(master, path):
    """The standard 64 bytes of BIP85 entropy at `path`."""
    child = _child_key(master, path)
    with wiping(child.private_key) as bufs:
        return _block(bufs[0], 0)


def entropy_stream(master, path):
    """Yield 64-byte blocks: the standard entropy first, then counter blocks."""
    child = _child_key(master, path)
    with wiping(child.private_key) as bufs:
        for j in itertools.count():
            yield _block(bufs[0], j)


def derive_bytes(master, path, length):
    """First `length` bytes of the entropy stream at `path`."""
    if length < 1:
        raise ValidationError("length must be positive", field="length", value=length)
    stream = entropy_stream(master, path)
    out = bytearray()
    try:
        while len(out) < length:
            out += next(stream)
        return bytes(out[:length])
    finally:
        stream.close()
        wipe(out)


def drng(master, path, length):
    """BIP85-DRNG: SHAKE256 seeded with the 64 entropy bytes at `path`."""
    with wiping(derive_entropy(master, path)) as bufs:
        return hashlib.shake_256(bytes(bufs[0])).digest(length)


def mnemonic(master, language=Language.ENGLISH, words=12, index=0):
    """BIP39 sentence of `words` words at m/83696968'/39'/{lang}'/{words}'/{index}'."""
    language = to_language(language)
    if words not in MNEMONIC_WORDS:
        raise ValidationError(f"word count must be one of {MNEMONIC_WORDS}, got {words}",
                              field="words", value=words)
    path = build_path(MNEMONIC, language.code, words, index)
    with wiping(derive_entropy(master, path)) as bufs:
        return entropy_to_mnemonic(bytes(bufs[0][:words * 4 // 3]), language)


def mnemonic_list(master, language=Language.ENGLISH, index=0):
    """24, 21, 18, 15 and 12 word sentences cut from one 24-word entropy.

    Returns:
        dict mapping word count to sentence, longest first.
    """
    language = to_language(language)
    path = build_path(MNEMONIC, language.code, 24, index)
    with wiping(derive_entropy(master, path)) as bufs:
        return {
            words: entropy_to_mnemonic(bytes(bufs[0][:words * 4 // 3]), language)
            for words in sorted(MNEMONIC_WORDS, reverse=True)
        }


def wif(master, index=0, network=Network.MAINNET):
    """Compressed WIF private key at m/83696968'/2'/{index}'."""
    path = build_path(WIF, index)
    with wiping(derive_entropy(master, path)) as bufs:
        return encode_wif(bytes(bufs[0][:32]), compressed=True, network=network)


def xprv(master, index=0, network=Network.MAINNET):
    """Depth-0 extended key at m/83696968'/32'/{index}'.

    Chain code is entropy[0:32], private key is entropy[32:64].
    """
    network = to_network(network)
    path = build_path(XPRV, index)
    with wiping(derive_entropy(master, path)) as bufs:
        entropy = bufs[0]
        if not valid_scalar(entropy[32:]):
            raise ValidationError("derived key is outside the curve order; use another index",
                                  field="index", value=index)
        key = ExtendedKey(0, b"\x00" * 4, 0, bytes(entropy[:32]), bytes(entropy[32:]),
                          network)
    return key.serialize()


def hex_entropy(master, num_bytes=64, index=0):
    """Hex string of `num_bytes` (16..64) at m/83696968'/128169'/{num_bytes}'/{index}'."""
    if isinstance(num_bytes, bool) or not isinstance(num_bytes, int) \
            or not HEX_MIN_BYTES <= num_bytes <= HEX_MAX_BYTES:
        raise ValidationError(f"num_bytes must be {HEX_MIN_BYTES}..{HEX_MAX_BYTES}",
                              field="num_bytes", value=num_bytes)
    path = build_path(HEX, num_bytes, index)
    return derive_bytes(master, path, num_bytes).hex()


def password(master, charset="base64", length=21, index=0):
    """Password of exactly `length` characters at m/83696968'/707764'/{length}'/{index}'.

    Args:
        master: Master ExtendedKey.
        charset: Charset or name: base64, distinct, emoji, mixture, unicode.
        length: Number of characters, 1..2**31 - 1.
        index: Child index.
    """
    charset = to_charset(charset)
    check_length(length)
    path = build_path(PASSWORD, length, index)
    stream = entropy_stream(master, path)
    try:
        return sample(stream, charset, length)
    finally:
        stream.close()
