# Copyright (c) 2026 Signer — MIT License

"""Legacy art secret and warp key stretching.

The first release of gridseed did not use the entropy encoder. It
serialized a diagram into an "art secret" and stretched it with a
scrypt/PBKDF2 warp before BIP32 master generation. Keys created that way
are still reproduced here.

Art secret layout (cells read column by column, right to left, each column
bottom to top):

    simple:  utf8(values) || masks[7] || checksum
    complex: utf8(values) || byte_length(value) per cell || masks[7] || checksum
    animate: utf8(values of frame k..1) || masks[7] of frame k..1 || checksum

masks[row] has bit (0x40 >> col) set for every used cell of that row;
complex secrets also set 0x80 in masks[0]. checksum is the first byte of
SHA-256 over everything before it. Animation frames are stored last
frame first; each sets 0x80 in masks[1] and the first stored one also
sets 0x80 in masks[0] to end the frame list.

Warp:
    s1   = scrypt(secret || 0x01, salt || 0x01, N=2**18, r=8, p=1, 32 bytes)
    s2   = PBKDF2-HMAC-SHA256(secret || 0x02, salt || 0x02, 65536, 32 bytes)
    seed = s1 XOR s2
"""

import hashlib
import logging
import time

from .diagram import GRID_SIZE, AnimateDiagram, ComplexDiagram, Position, SimpleDiagram
from .errors import EncodingError
from .network import Network
from .secure import wipe, wiping
from .seed import master_from_seed

logger = logging.getLogger(__name__)

_MASKS = tuple(0x40 >> col for col in range(GRID_SIZE))
_COMPLEX_FLAG = 0x80      # masks[0]
_ANIMATE_FLAG = 0x80      # masks[1] of every frame
_END_FRAME_FLAG = 0x80    # masks[0] of the first stored frame

# Warp parameters
_SCRYPT_N = 2 ** 18
_SCRYPT_R = 8
_SCRYPT_P = 1
_SCRYPT_MAXMEM = 2 ** 29  # 512 MiB, scrypt needs 128 * r * N = 256 MiB
_PBKDF2_ITERATIONS = 65536
_WARP_LENGTH = 32


def _reading_order():
    for col in reversed(range(GRID_SIZE)):
        for row in reversed(range(GRID_SIZE)):
            yield Position(row, col)


def _scan(lookup):
    """(Position, UTF-8 value) of every used cell in reading order, plus row masks."""
    cells = []
    masks = [0] * GRID_SIZE
    for pos in _reading_order():
        value = lookup(pos)
        if value is None:
            continue
        encoded = value.encode("utf-8")
        if len(encoded) >= 255:
            raise EncodingError("cell value must be under 255 UTF-8 bytes",
                                field="value", value=len(encoded))
        cells.append(encoded)
        masks[pos.row] |= _MASKS[pos.col]
    return cells, masks


def _animate_secret(diagram):
    chunks = []
    frames = []
    for grid in reversed(diagram.frames()):
        cells, masks = _scan(lambda pos: grid[pos.row][pos.col])
        masks[1] |= _ANIMATE_FLAG
        chunks.extend(cells)
        frames.append(masks)
    frames[0][0] |= _END_FRAME_FLAG
    return b"".join(chunks) + b"".join(bytes(m) for m in frames)


def to_secret(diagram):
    """Serialize a diagram to legacy art-secret bytes."""
    if isinstance(diagram, AnimateDiagram):
        secret = _animate_secret(diagram)
    else:
        cells, masks = _scan(lambda pos: diagram.get(pos.row, pos.col))
        if isinstance(diagram, ComplexDiagram):
            masks[0] |= _COMPLEX_FLAG
            secret = b"".join(cells) + bytes(len(c) for c in cells) + bytes(masks)
        else:
            secret = b"".join(cells) + bytes(masks)
    return secret + hashlib.sha256(secret).digest()[:1]


def _positions(masks):
    return [pos for pos in _reading_order() if masks[pos.row] & _MASKS[pos.col]]


def _decode_text(data):
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise EncodingError("art secret holds invalid UTF-8", field="secret") from None


def _animate_from_body(body):
    # frames are stored last to first, ending with the end-frame marker
    frames = []
    end = len(body)
    while True:
        if end < GRID_SIZE:
            raise EncodingError("animation has no end frame", field="secret")
        masks = list(body[end - GRID_SIZE:end])
        end -= GRID_SIZE
        if not masks[1] & _ANIMATE_FLAG:
            raise EncodingError("animation frame lacks its version bit", field="secret")
        last = bool(masks[0] & _END_FRAME_FLAG)
        masks[0] &= ~_END_FRAME_FLAG
        masks[1] &= ~_ANIMATE_FLAG
        if any(m & 0x80 for m in masks):
            raise EncodingError("art secret has an unknown flag bit", field="secret")
        frames.append(_positions(masks))
        if last:
            break

    chars = list(_decode_text(body[:end]))
    stored = list(reversed(frames))
    if len(chars) != sum(len(p) for p in stored) or not chars:
        raise EncodingError(f"animation has {len(chars)} characters for its frames",
                            field="secret", value=len(chars))
    it = iter(chars)
    cells = [[(pos, next(it)) for pos in positions] for positions in stored]
    return AnimateDiagram(reversed(cells))


def from_secret(data):
    """Rebuild a diagram from art-secret bytes.

    Cells come back in reading order; the original placement order is not
    part of the legacy format.
    """
    data = bytes(data)
    if len(data) < GRID_SIZE + 2:
        raise EncodingError("art secret is too short", field="secret", value=len(data))
    body, checksum = data[:-1], data[-1]
    if hashlib.sha256(body).digest()[0] != checksum:
        raise EncodingError("art secret checksum mismatch", field="secret")

    masks = list(body[-GRID_SIZE:])
    if masks[1] & _ANIMATE_FLAG:
        return _animate_from_body(body)
    complex_ = bool(masks[0] & _COMPLEX_FLAG)
    masks[0] &= ~_COMPLEX_FLAG
    if any(m & 0x80 for m in masks):
        raise EncodingError("art secret has an unknown flag bit", field="secret")
    positions = _positions(masks)
    n = len(positions)
    if n == 0:
        raise EncodingError("art secret has no cells", field="secret")
    payload = body[:-GRID_SIZE]

    if complex_:
        if len(payload) < n:
            raise EncodingError("art secret is truncated", field="secret")
        lengths = payload[-n:]
        text = payload[:-n]
        if sum(lengths) != len(text):
            raise EncodingError("art secret length table does not match",
                                field="secret")
        values, offset = [], 0
        for length in lengths:
            values.append(_decode_text(text[offset:offset + length]))
            offset += length
        return ComplexDiagram(zip(positions, values))
    values = list(_decode_text(payload))
    if len(values) != n:
        raise EncodingError(f"art secret has {len(values)} characters for {n} cells",
                            field="secret", value=len(values))
    return SimpleDiagram(zip(positions, values))


def _salt_bytes(salt):
    if isinstance(salt, str):
        return salt.encode("utf-8")
    return bytes(salt or b"")


def warp_entropy(secret, salt=b""):
    """scrypt XOR PBKDF2 stretch of an art secret; returns 32 bytes."""
    t0 = time.perf_counter()
    salt = _salt_bytes(salt)
    with wiping(secret) as bufs:
        s1 = bytearray(hashlib.scrypt(
            bytes(bufs[0]) + b"\x01",
            salt=salt + b"\x01",
            n=_SCRYPT_N, r=_SCRYPT_R, p=_SCRYPT_P,
            maxmem=_SCRYPT_MAXMEM, dklen=_WARP_LENGTH,
        ))
        s2 = bytearray(hashlib.pbkdf2_hmac(
            "sha256",
            bytes(bufs[0]) + b"\x02",
            salt + b"\x02",
            _PBKDF2_ITERATIONS,
            dklen=_WARP_LENGTH,
        ))
        try:
            seed = bytes(a ^ b for a, b in zip(s1, s2))
        finally:
            wipe(s1, s2)
    logger.debug(f"[legacy] warp ({(time.perf_counter() - t0) * 1000:.2f}ms)")
    return seed


def legacy_master(diagram, passphrase="", network=Network.MAINNET):
    """Master key of the legacy flow: art secret -> warp -> BIP32 master."""
    with wiping(to_secret(diagram)) as bufs:
        seed = warp_entropy(bufs[0], passphrase)
    return master_from_seed(seed, network)
