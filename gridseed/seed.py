# Copyright (c) 2026 Signer — MIT License

"""Master seed derivation for gridseed.

Turns a diagram plus an optional passphrase into a BIP32 master key:

    1. Encode   - the diagram becomes fixed-length entropy bytes (encoder.py)
    2. Bind     - message = ser32(len(entropy)) || entropy || passphrase
    3. Extract  - I = HMAC-SHA512(key=b"Bitcoin seed", message)
    4. Validate - if IL is zero or >= n, I = HMAC-SHA512(b"Bitcoin seed", I)
                  until it is valid (SLIP-0010 retry rule)
    5. Split    - IL is the master scalar, IR the chain code

The length prefix keeps (entropy, passphrase) splits unambiguous. Same
diagram, different passphrase: unrelated master keys. An empty
passphrase is valid and deterministic.

Usage:
    from gridseed.seed import derive_master
    master = derive_master(diagram, "passphrase")
    master.serialize()             # "xprv9s21ZrQH143K..."
"""

import hashlib
import hmac
import logging
import math
import time

from .encoder import check_encodable, default_alphabet, encode, entropy_bits
from .errors import ValidationError
from .hdkey import master_from_bytes, ser32, valid_scalar
from .network import Network
from .secure import wiping

logger = logging.getLogger(__name__)

# BIP32 master key domain separator
_DOMAIN = b"Bitcoin seed"

_MAX_SEED_LENGTH = 0xFFFFFFFF


def _passphrase_bytes(passphrase):
    if passphrase is None:
        return b""
    if isinstance(passphrase, str):
        return passphrase.encode("utf-8")
    return bytes(passphrase)


def _extract(message):
    """HMAC-SHA512 under the BIP32 domain, retried until IL is a valid scalar."""
    i = hmac.new(_DOMAIN, message, hashlib.sha512).digest()
    while not valid_scalar(i[:32]):
        i = hmac.new(_DOMAIN, i, hashlib.sha512).digest()
    return i


def derive_seed(entropy, passphrase=b""):
    """Derive the 64-byte master seed from entropy bytes and a passphrase.

    Args:
        entropy: Diagram entropy bytes (see encoder.encode).
        passphrase: bytes, or str (UTF-8 encoded as-is, not normalized).

    Returns:
        64 bytes: left half a valid secp256k1 scalar, right half chain code.
    """
    if len(entropy) > _MAX_SEED_LENGTH:
        raise ValidationError("entropy too long", field="entropy", value=len(entropy))
    with wiping(ser32(len(entropy)), entropy, _passphrase_bytes(passphrase)) as bufs:
        message = bytearray().join(bufs)
        bufs.append(message)
        return _extract(bytes(message))


def master_from_seed(seed, network=Network.MAINNET):
    """Standard BIP32 master key generation from an arbitrary seed.

    Used for BIP39 seeds and legacy warp seeds (16..64 bytes).
    """
    if not 16 <= len(seed) <= 64:
        raise ValidationError(f"seed must be 16..64 bytes, got {len(seed)}",
                              field="seed", value=len(seed))
    return master_from_bytes(_extract(bytes(seed)), network)


def derive_master(diagram, passphrase=b"", alphabet=None, network=Network.MAINNET):
    """Diagram + passphrase -> master ExtendedKey.

    Args:
        diagram: SimpleDiagram or ComplexDiagram.
        passphrase: Optional second factor (bytes or str).
        alphabet: Value alphabet; defaults to code points for simple
            diagrams and bounded strings for complex diagrams.
        network: Network.MAINNET or Network.TESTNET.
    """
    t0 = time.perf_counter()
    entropy = encode(diagram, alphabet)
    with wiping(entropy) as bufs:
        seed = derive_seed(bufs[0], passphrase)
    master = master_from_bytes(seed, network)
    logger.debug(f"[seed] master n={len(diagram)} entropy={len(entropy)}B "
                 f"({(time.perf_counter() - t0) * 1000:.2f}ms)")
    return master


_DIGITS = frozenset(range(0x30, 0x3A))
_LOWER = frozenset(range(0x61, 0x7B))
_UPPER = frozenset(range(0x41, 0x5B))

# Disjoint byte classes a brute-force search over passphrase bytes covers
_BYTE_CLASSES = (
    _DIGITS,                                                       # 10
    _LOWER,                                                        # 26
    _UPPER,                                                        # 26
    frozenset(range(0x20, 0x7F)) - _DIGITS - _LOWER - _UPPER,      # 33 space, symbols
    frozenset(range(0x20)) | {0x7F},                               # 33 control
    frozenset(range(0x80, 0x100)),                                 # 128 UTF-8 multibyte
)


def _passphrase_bits(data):
    """log2 of the pool of byte classes present, once per byte."""
    present = set(data)
    pool = sum(len(cls) for cls in _BYTE_CLASSES if present & cls)
    if pool == 0:
        return 0.0
    return math.log2(pool) * len(data)


def get_entropy_bits(diagram, passphrase=b"", alphabet=None):
    """Estimate the entropy in bits of a diagram plus passphrase.

    Diagram entropy is exact: log2(A(49, n) * C**n), the number of
    diagrams with n occupied cells over an alphabet of size C. Pass an
    ExplicitAlphabet to measure a diagram drawn from a small set.

    The passphrase is measured the way derive_seed consumes it: as raw
    UTF-8 bytes, without normalization. Each byte class that occurs
    (digits, lowercase, uppercase, ASCII symbols, control bytes, bytes
    >= 0x80) adds its size to the pool, and every byte counts
    log2(pool) bits. That is an upper bound; a chosen phrase is weaker.

    Returns:
        Estimated total entropy as a float (e.g. 128.2, 212.2).
    """
    check_encodable(diagram)
    if alphabet is None:
        alphabet = default_alphabet(diagram)
    diagram_bits = entropy_bits(len(diagram), alphabet.size)
    with wiping(_passphrase_bytes(passphrase)) as bufs:
        return diagram_bits + _passphrase_bits(bufs[0])
