# Copyright (c) 2026 Signer — MIT License

"""Hardened-only hierarchical deterministic keys (BIP32 private derivation).

Only private, hardened child derivation is supported: every index must be
at least 2**31. Invalid child scalars (IL >= n or a zero key) are retried
with the SLIP-0010 rule instead of skipping to the next index.

Usage:
    from gridseed.hdkey import derive_path
    child = derive_path(master, "m/83696968'/39'/0'/12'/0'")
    child.serialize()      # "xprv..."
    child.fingerprint      # 4 bytes
"""

import hashlib
import hmac
import logging
import re
import struct
import time
from collections import namedtuple

from ecdsa import SECP256k1

from .encoding import b58check_decode, b58check_encode, hash160, public_key
from .errors import SerializationError, ValidationError
from .network import Network, to_network

logger = logging.getLogger(__name__)

CURVE_ORDER = SECP256k1.order
HARDENED = 0x80000000

_SERIALIZED_LENGTH = 78
_PATH_COMPONENT = re.compile(r"^(\d+)(['hH]?)$")


def ser32(i):
    return struct.pack(">I", i)


def valid_scalar(key):
    k = int.from_bytes(key, "big")
    return 0 < k < CURVE_ORDER


class ExtendedKey(namedtuple(
        "ExtendedKey",
        ["depth", "parent_fingerprint", "child_number", "chain_code",
         "private_key", "network"],
        defaults=(Network.MAINNET,))):
    """An immutable private extended key."""

    __slots__ = ()

    def __repr__(self):
        return (f"ExtendedKey(depth={self.depth}, "
                f"child={format_index(self.child_number)}, "
                f"network={self.network.name})")

    @property
    def public_key(self):
        """33-byte compressed secp256k1 public key."""
        return public_key(self.private_key)

    @property
    def identifier(self):
        return hash160(self.public_key)

    @property
    def fingerprint(self):
        return self.identifier[:4]

    def child(self, index):
        return derive_child(self, index)

    def derive(self, path):
        return derive_path(self, path)

    def serialize(self):
        """78-byte BIP32 layout, base58check encoded ("xprv..." / "tprv...")."""
        network = to_network(self.network)
        data = (
            struct.pack(">I", network.xprv_version)
            + bytes([self.depth])
            + bytes(self.parent_fingerprint)
            + ser32(self.child_number)
            + bytes(self.chain_code)
            + b"\x00"
            + bytes(self.private_key)
        )
        return b58check_encode(data)

    @classmethod
    def deserialize(cls, text):
        data = b58check_decode(text)
        if len(data) != _SERIALIZED_LENGTH:
            raise SerializationError(
                f"extended key must be {_SERIALIZED_LENGTH} bytes, got {len(data)}",
                field="text", value=len(data))
        version = struct.unpack(">I", data[:4])[0]
        try:
            network = Network.from_xprv_version(version)
        except ValidationError as e:
            raise SerializationError(e.message, field="version", value=version) from None
        if data[45] != 0:
            raise SerializationError("only private extended keys are supported",
                                     field="text", value=data[45])
        key = data[46:]
        if not valid_scalar(key):
            raise SerializationError("private key is outside the curve order",
                                     field="private_key")
        depth = data[4]
        fingerprint = data[5:9]
        child_number = struct.unpack(">I", data[9:13])[0]
        if depth == 0 and (fingerprint != b"\x00" * 4 or child_number != 0):
            raise SerializationError("master key with non-zero parent data",
                                     field="depth", value=depth)
        return cls(depth, fingerprint, child_number, data[13:45], key, network)


def _child_valid(il, key):
    return il < CURVE_ORDER and key != 0


def master_from_bytes(data, network=Network.MAINNET):
    """Split 64 bytes (left scalar, right chain code) into a master key."""
    if len(data) != 64:
        raise ValidationError(f"master material must be 64 bytes, got {len(data)}",
                              field="seed", value=len(data))
    if not valid_scalar(data[:32]):
        raise ValidationError("master scalar is zero or above the curve order",
                              field="seed")
    return ExtendedKey(0, b"\x00" * 4, 0, bytes(data[32:]), bytes(data[:32]),
                       to_network(network))


def derive_child(parent, index):
    """Derive the hardened child `index` (must be >= 2**31) of `parent`."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValidationError("child index must be an integer",
                              field="index", value=index)
    if not HARDENED <= index <= 0xFFFFFFFF:
        raise ValidationError(
            f"only hardened derivation is supported, got index {index}",
            field="index", value=index)
    if parent.depth >= 255:
        raise ValidationError("maximum derivation depth reached",
                              field="depth", value=parent.depth)

    k_par = int.from_bytes(parent.private_key, "big")
    data = b"\x00" + bytes(parent.private_key) + ser32(index)
    while True:
        i = hmac.new(bytes(parent.chain_code), data, hashlib.sha512).digest()
        il, ir = i[:32], i[32:]
        parse_il = int.from_bytes(il, "big")
        key = (parse_il + k_par) % CURVE_ORDER
        if _child_valid(parse_il, key):
            break
        data = b"\x01" + ir + ser32(index)

    return ExtendedKey(
        depth=parent.depth + 1,
        parent_fingerprint=parent.fingerprint,
        child_number=index,
        chain_code=ir,
        private_key=key.to_bytes(32, "big"),
        network=parent.network,
    )


def parse_path(path):
    """Parse "m/83696968'/39'/0'" into a tuple of hardened indices.

    Both ' and h/H mark a hardened component. Non-hardened components are
    rejected since only hardened derivation exists here.
    """
    if not isinstance(path, str):
        raise ValidationError("path must be a string", field="path", value=path)
    parts = path.strip().split("/")
    if parts[0] != "m":
        raise ValidationError(f"path must start with 'm', got {path!r}",
                              field="path", value=path)
    indices = []
    for part in parts[1:]:
        match = _PATH_COMPONENT.match(part)
        if not match:
            raise ValidationError(f"bad path component {part!r}",
                                  field="path", value=path)
        number = int(match.group(1))
        if not match.group(2):
            raise ValidationError(
                f"path component {part!r} is not hardened",
                field="path", value=path)
        if number >= HARDENED:
            raise ValidationError(f"path component {part!r} is too large",
                                  field="path", value=path)
        indices.append(number + HARDENED)
    return tuple(indices)


def format_index(index):
    if index >= HARDENED:
        return f"{index - HARDENED}'"
    return str(index)


def format_path(indices):
    return "/".join(["m"] + [format_index(i) for i in indices])


def derive_path(master, path):
    """Walk a path (string or sequence of indices) down from `master`."""
    t0 = time.perf_counter()
    indices = parse_path(path) if isinstance(path, str) else tuple(path)
    key = master
    for index in indices:
        key = derive_child(key, index)
    logger.debug(f"[hdkey] path={format_path(indices)} "
                 f"({(time.perf_counter() - t0) * 1000:.2f}ms)")
    return key
