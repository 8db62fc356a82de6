# Copyright (c) 2026 Signer — MIT License

"""Diagram-to-entropy encoder.

A diagram with n occupied cells is mapped bijectively onto the integers
[0, A(49, n) * C**n), where A(49, n) = 49! / (49 - n)! counts the ordered
ways to pick n cells and C is the alphabet size.

Cells are processed in the order they were first used. For each cell the
encoder pushes two digits:
    1. Position digit - rank of the cell among cells not yet used (radix 49 - i)
    2. Value digit    - alphabet index of the cell value (radix C)

This is a partial-permutation Lehmer code interleaved with base-C digits.
The result is serialized big-endian to a length that depends only on n and
C, so equal-sized diagrams always produce equal-length entropy.

Usage:
    from gridseed.encoder import encode, decode
    data = encode(diagram)                    # bytes
    pairs = decode(data, len(diagram))        # ((Position, value), ...)
"""

import logging
import math
import time

from .alphabet import CodepointAlphabet, StringAlphabet
from .diagram import CELL_COUNT, AnimateDiagram, ComplexDiagram, Position, to_position
from .errors import EncodingError, ValidationError
from .radix import MixedRadix

logger = logging.getLogger(__name__)


def entropy_space(n, size):
    """Number of distinct diagram states with n cells over an alphabet of `size`."""
    _check_count(n)
    return math.perm(CELL_COUNT, n) * size ** n


def entropy_length(n, size):
    """Byte length able to hold every entropy number for (n, size)."""
    top = entropy_space(n, size) - 1
    return max(1, (top.bit_length() + 7) // 8)


def entropy_bits(n, size):
    """log2 of the state space, e.g. 128.2 for five emoji on the grid."""
    return math.log2(entropy_space(n, size))


def check_encodable(source):
    if isinstance(source, AnimateDiagram):
        raise ValidationError("animated diagrams only have a legacy art secret",
                              field="diagram", value=len(source))


def default_alphabet(source):
    check_encodable(source)
    if isinstance(source, ComplexDiagram):
        return StringAlphabet()
    return CodepointAlphabet()


def _check_count(n):
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValidationError("cell count must be an integer", field="n", value=n)
    if not 1 <= n <= CELL_COUNT:
        raise ValidationError(f"cell count must be 1..{CELL_COUNT}, got {n}",
                              field="n", value=n)


def _sequence(source):
    check_encodable(source)
    if hasattr(source, "occupied"):
        return source.occupied()
    return tuple((to_position(pos), value) for pos, value in source)


def encode_number(source, alphabet=None):
    """Encode a diagram (or a sequence of (position, value) pairs) to an int."""
    if alphabet is None:
        alphabet = default_alphabet(source)
    pairs = _sequence(source)
    _check_count(len(pairs))

    pool = list(range(CELL_COUNT))
    acc = MixedRadix()
    for i, (pos, value) in enumerate(pairs):
        p = pos.linear
        try:
            digit = pool.index(p)
        except ValueError:
            raise ValidationError(
                f"position ({pos.row}, {pos.col}) appears twice",
                field="position", value=tuple(pos)) from None
        del pool[digit]
        acc.push(digit, CELL_COUNT - i)
        acc.push(alphabet.index(value), alphabet.size)
    return acc.value


def encode(source, alphabet=None):
    """Encode a diagram to big-endian entropy bytes of fixed length."""
    t0 = time.perf_counter()
    if alphabet is None:
        alphabet = default_alphabet(source)
    number = encode_number(source, alphabet)
    n = len(_sequence(source))
    length = entropy_length(n, alphabet.size)
    data = MixedRadix(number).to_bytes(length)
    logger.debug(f"[encode] n={n} bytes={length} ({(time.perf_counter() - t0) * 1000:.2f}ms)")
    return data


def decode_number(number, n, alphabet):
    """Inverse of encode_number: rebuild the ordered (Position, value) pairs."""
    space = entropy_space(n, alphabet.size)
    if not 0 <= number < space:
        raise EncodingError(f"entropy number is outside the space for n={n}",
                            field="number", value=number)

    acc = MixedRadix(number)
    digits = []
    for i in reversed(range(n)):
        value_digit = acc.pop(alphabet.size)
        position_digit = acc.pop(CELL_COUNT - i)
        digits.append((position_digit, value_digit))
    digits.reverse()

    pool = list(range(CELL_COUNT))
    pairs = []
    for position_digit, value_digit in digits:
        p = pool.pop(position_digit)
        pairs.append((Position.from_linear(p), alphabet.value(value_digit)))
    return tuple(pairs)


def decode(data, n, alphabet=None):
    """Decode entropy bytes produced by encode() for an n-cell diagram."""
    if alphabet is None:
        alphabet = CodepointAlphabet()
    expected = entropy_length(n, alphabet.size)
    if len(data) != expected:
        raise EncodingError(f"expected {expected} bytes for n={n}, got {len(data)}",
                            field="data", value=len(data))
    return decode_number(MixedRadix.from_bytes(data).value, n, alphabet)
