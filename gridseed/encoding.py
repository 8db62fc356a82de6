# Copyright (c) 2026 Signer — MIT License

"""Hashes, public keys and base58check codecs: WIF keys and P2PKH addresses."""

import hashlib

import base58
from ecdsa import SECP256k1, SigningKey

from .errors import EncodingError, SerializationError, ValidationError
from .network import Network, to_network


def sha256(data):
    return hashlib.sha256(data).digest()


def sha256d(data):
    return sha256(sha256(data))


def hash160(data):
    """RIPEMD-160 of SHA-256, as used for key fingerprints and addresses."""
    return hashlib.new("ripemd160", sha256(data)).digest()


def public_key(private_key, compressed=True):
    """secp256k1 public key: 33 bytes compressed, 65 bytes uncompressed."""
    sk = SigningKey.from_string(bytes(private_key), curve=SECP256k1)
    return sk.get_verifying_key().to_string("compressed" if compressed else "uncompressed")


def p2pkh_address(pubkey, network=Network.MAINNET):
    network = to_network(network)
    return b58check_encode(bytes([network.address_version]) + hash160(pubkey))


def b58check_encode(payload):
    return base58.b58encode_check(bytes(payload)).decode("ascii")


def b58check_decode(text):
    """Decode a base58check string; raises SerializationError on bad input."""
    if not isinstance(text, str) or not text:
        raise SerializationError("expected a non-empty base58 string",
                                 field="text", value=text)
    try:
        return base58.b58decode_check(text)
    except ValueError as e:
        raise SerializationError(f"invalid base58check string: {e}",
                                 field="text") from None


def encode_wif(private_key, compressed=True, network=Network.MAINNET):
    """Serialize a 32-byte private key as Wallet Import Format.

    Args:
        private_key: 32 raw key bytes.
        compressed: Append the 0x01 compression marker.
        network: Network.MAINNET (prefix 0x80) or Network.TESTNET (0xef).

    Returns:
        Base58check string, e.g. "Kzyv4uF39d4Jrw2W..." for mainnet compressed.
    """
    network = to_network(network)
    if len(private_key) != 32:
        raise EncodingError(f"private key must be 32 bytes, got {len(private_key)}",
                            field="private_key", value=len(private_key))
    payload = bytes([network.wif_prefix]) + bytes(private_key)
    if compressed:
        payload += b"\x01"
    return b58check_encode(payload)


def decode_wif(text):
    """Parse a WIF string into (private_key, compressed, network)."""
    payload = b58check_decode(text)
    if len(payload) == 34 and payload[-1] == 0x01:
        compressed = True
        key = payload[1:33]
    elif len(payload) == 33:
        compressed = False
        key = payload[1:]
    else:
        raise SerializationError(f"WIF payload has unexpected length {len(payload)}",
                                 field="text", value=len(payload))
    try:
        network = Network.from_wif_prefix(payload[0])
    except ValidationError as e:
        raise SerializationError(e.message, field="network", value=payload[0]) from None
    return key, compressed, network
