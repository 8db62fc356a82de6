# Copyright (c) 2026 Signer — MIT License

"""Passphrase encryption of mnemonic sentences.

The entropy behind a valid sentence is XORed with an Argon2id key stream
and re-encoded with a fresh checksum, so the result is itself a valid
sentence of the same length and language. Applying the same passphrase
again restores the original.

Argon2id parameters follow the OWASP high-value profile
(64 MiB, 3 iterations, 4 lanes). The salt binds the word count so a
12-word and a 24-word sentence never share a key stream prefix.
"""

import logging
import time
import unicodedata

from argon2.low_level import hash_secret_raw, Type as _Argon2Type

from .errors import ValidationError
from .mnemonic import Mnemonic, entropy_to_mnemonic
from .secure import wipe

logger = logging.getLogger(__name__)

_DOMAIN = b"gridseed-mnemonic-encrypt-v1"

# Argon2id parameters (OWASP recommended for high-value targets)
_ARGON2_TIME = 3         # iterations
_ARGON2_MEMORY = 65536   # 64 MiB
_ARGON2_PARALLEL = 4     # lanes


def _keystream(passphrase, length, word_count):
    if isinstance(passphrase, bytes):
        passphrase = passphrase.decode("utf-8")
    if not passphrase:
        raise ValidationError("passphrase must not be empty", field="passphrase")
    return bytearray(hash_secret_raw(
        secret=unicodedata.normalize("NFC", passphrase).encode("utf-8"),
        salt=_DOMAIN + b"-" + str(word_count).encode("ascii"),
        time_cost=_ARGON2_TIME,
        memory_cost=_ARGON2_MEMORY,
        parallelism=_ARGON2_PARALLEL,
        hash_len=length,
        type=_Argon2Type.ID,
    ))


def encrypt_mnemonic(sentence, passphrase, language=None):
    """Encrypt a mnemonic into another valid mnemonic of the same size.

    Args:
        sentence: A valid BIP39 sentence.
        passphrase: Non-empty passphrase (NFC normalized).
        language: Wordlist language; detected when omitted.

    Returns:
        The encrypted sentence, in the same language.
    """
    t0 = time.perf_counter()
    mnemonic = Mnemonic.parse(sentence, language)
    stream = _keystream(passphrase, len(mnemonic.entropy), len(mnemonic))
    mixed = bytearray(a ^ b for a, b in zip(mnemonic.entropy, stream))
    try:
        result = entropy_to_mnemonic(bytes(mixed), mnemonic.language)
    finally:
        wipe(stream, mixed)
    logger.debug(f"[encrypt] words={len(mnemonic)} "
                 f"({(time.perf_counter() - t0) * 1000:.2f}ms)")
    return result


def decrypt_mnemonic(sentence, passphrase, language=None):
    """Inverse of encrypt_mnemonic (the XOR is its own inverse)."""
    return encrypt_mnemonic(sentence, passphrase, language)
