# Copyright (c) 2026 Signer — MIT License

"""BIP38 passphrase-protected private keys (non-EC-multiply mode).

    addresshash = SHA256d(P2PKH address)[:4]
    derived     = scrypt(NFC passphrase, addresshash, N=16384, r=8, p=8, 64)
    block_i     = AES-256-ECB(key=derived[32:], key_half_i XOR derived[:32][half_i])
    result      = base58check(0x01 0x42 || flag || addresshash || block_1 || block_2)

flag is 0xe0 for compressed keys and 0xc0 for uncompressed ones. Keys
made with the EC-multiply mode (prefix 0x01 0x43) are rejected.
"""

import hashlib
import logging
import time
import unicodedata

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .encoding import (b58check_decode, b58check_encode, decode_wif, encode_wif,
                       p2pkh_address, public_key, sha256d)
from .errors import DecryptionError, EncodingError, ValidationError
from .hdkey import valid_scalar
from .network import Network, to_network
from .secure import wipe, wiping

logger = logging.getLogger(__name__)

_PREFIX = b"\x01\x42"
_PREFIX_EC_MULTIPLY = b"\x01\x43"
_FLAG_COMPRESSED = 0xE0
_FLAG_UNCOMPRESSED = 0xC0
_ENCRYPTED_LENGTH = 58
_PAYLOAD_LENGTH = 39

_SCRYPT_N = 16384
_SCRYPT_R = 8
_SCRYPT_P = 8
_SCRYPT_MAXMEM = 2 ** 26


def _address_hash(private_key, compressed, network):
    address = p2pkh_address(public_key(private_key, compressed), network)
    return sha256d(address.encode("ascii"))[:4]


def _derive(passphrase, address_hash):
    if isinstance(passphrase, bytes):
        passphrase = passphrase.decode("utf-8")
    secret = unicodedata.normalize("NFC", passphrase).encode("utf-8")
    return bytearray(hashlib.scrypt(
        secret, salt=address_hash,
        n=_SCRYPT_N, r=_SCRYPT_R, p=_SCRYPT_P,
        maxmem=_SCRYPT_MAXMEM, dklen=64,
    ))


def _xor(a, b):
    return bytes(x ^ y for x, y in zip(a, b))


def encrypt_wif(wif, passphrase):
    """Encrypt a WIF private key; returns a 58-character "6P..." string."""
    t0 = time.perf_counter()
    key, compressed, network = decode_wif(wif)
    address_hash = _address_hash(key, compressed, network)
    derived = _derive(passphrase, address_hash)
    with wiping(key) as bufs:
        try:
            half1, half2 = bytes(derived[:32]), bytes(derived[32:])
            encryptor = Cipher(algorithms.AES(half2), modes.ECB()).encryptor()
            encrypted = encryptor.update(_xor(bufs[0], half1)) + encryptor.finalize()
        finally:
            wipe(derived)
    flag = _FLAG_COMPRESSED if compressed else _FLAG_UNCOMPRESSED
    logger.debug(f"[bip38] encrypt ({(time.perf_counter() - t0) * 1000:.2f}ms)")
    return b58check_encode(_PREFIX + bytes([flag]) + address_hash + encrypted)


def decrypt_wif(encrypted, passphrase, network=Network.MAINNET):
    """Decrypt a "6P..." string back to its WIF private key.

    Raises:
        ValidationError: Not a 58-character 6P string.
        EncodingError: Corrupt payload or an EC-multiplied key.
        DecryptionError: Wrong passphrase.
    """
    network = to_network(network)
    if not isinstance(encrypted, str) or len(encrypted) != _ENCRYPTED_LENGTH \
            or not encrypted.startswith("6P"):
        raise ValidationError("BIP38 keys are 58 characters starting with '6P'",
                              field="encrypted", value=encrypted)
    payload = b58check_decode(encrypted)
    if len(payload) != _PAYLOAD_LENGTH:
        raise EncodingError(f"BIP38 payload must be {_PAYLOAD_LENGTH} bytes",
                            field="encrypted", value=len(payload))
    if payload[:2] == _PREFIX_EC_MULTIPLY:
        raise EncodingError("EC-multiplied BIP38 keys are not supported",
                            field="encrypted")
    if payload[:2] != _PREFIX:
        raise EncodingError("unknown BIP38 prefix", field="encrypted",
                            value=payload[:2].hex())
    flag = payload[2]
    if flag not in (_FLAG_COMPRESSED, _FLAG_UNCOMPRESSED):
        raise EncodingError(f"unknown BIP38 flag byte 0x{flag:02x}",
                            field="encrypted", value=flag)
    compressed = flag == _FLAG_COMPRESSED
    address_hash = payload[3:7]

    derived = _derive(passphrase, address_hash)
    try:
        half1, half2 = bytes(derived[:32]), bytes(derived[32:])
        decryptor = Cipher(algorithms.AES(half2), modes.ECB()).decryptor()
        key = _xor(decryptor.update(payload[7:]) + decryptor.finalize(), half1)
    finally:
        wipe(derived)

    if not valid_scalar(key) or _address_hash(key, compressed, network) != address_hash:
        raise DecryptionError("wrong passphrase", field="passphrase")
    return encode_wif(key, compressed=compressed, network=network)
