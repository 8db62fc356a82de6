# Copyright (c) 2026 Signer — MIT License

"""Tests for hardened HD derivation and extended key serialization."""

import hashlib
import hmac

import pytest

import gridseed.hdkey as hdkey_module
from gridseed.errors import SerializationError, ValidationError
from gridseed.hdkey import (CURVE_ORDER, HARDENED, ExtendedKey, derive_child, derive_path,
                            format_path, master_from_bytes, parse_path, ser32)
from gridseed.network import Network
from gridseed.seed import master_from_seed

# BIP32 test vector 1
TV1_SEED = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
TV1_M = (
    "xprv9s21ZrQH143K3QTDL4LXw2F7HEK3wJUD2nW2nRk4stbPy6cq3jPPqjiChkVvvNKmPGJxWUtg6LnF5kejMR"
    "NNU3TGtRBeJgk33yuGBxrMPHi"
)
TV1_M_0H = (
    "xprv9uHRZZhk6KAJC1avXpDAp4MDc3sQKNxDiPvvkX8Br5ngLNv1TxvUxt4cV1rGL5hj6KCesnDYUhd7oWgT11"
    "eZG7XnxHrnYeSvkzY7d2bhkJ7"
)


class TestDerivation:
    """Test private hardened child derivation."""

    def test_master_vector(self):
        master = master_from_seed(TV1_SEED)
        assert master.serialize() == TV1_M
        assert master.depth == 0

    def test_hardened_child_vector(self):
        master = master_from_seed(TV1_SEED)
        child = derive_child(master, HARDENED)
        assert child.serialize() == TV1_M_0H
        assert child.depth == 1
        assert child.parent_fingerprint == master.fingerprint
        assert master.fingerprint.hex() == "3442193e"

    def test_path_string(self):
        master = master_from_seed(TV1_SEED)
        assert derive_path(master, "m/0'").serialize() == TV1_M_0H
        assert derive_path(master, "m/0h") == derive_path(master, [HARDENED])
        assert master.derive("m") == master

    def test_non_hardened_rejected(self):
        """Only hardened indices are supported."""
        master = master_from_seed(TV1_SEED)
        with pytest.raises(ValidationError) as exc:
            derive_child(master, 0)
        assert exc.value.field == "index"
        with pytest.raises(ValidationError):
            derive_child(master, 2 ** 32)

    def test_deterministic(self, bip85_master):
        a = derive_path(bip85_master, "m/83696968'/0'/0'")
        b = derive_path(bip85_master, "m/83696968'/0'/0'")
        assert a == b
        assert a.private_key.hex() == (
            "cca20ccb0e9a90feb0912870c3323b24874b0ca3d8018c4b96d0b97c0e82ded0")

    def test_invalid_child_retries(self, monkeypatch):
        """An invalid IL or zero key re-hashes 0x01 || IR || ser32(i)."""
        master = master_from_seed(TV1_SEED)
        calls = []

        def fake_valid(il, key):
            calls.append(il)
            return len(calls) > 1

        monkeypatch.setattr(hdkey_module, "_child_valid", fake_valid)
        index = HARDENED + 7
        chain = bytes(master.chain_code)
        first = hmac.new(chain, b"\x00" + master.private_key + ser32(index),
                         hashlib.sha512).digest()
        second = hmac.new(chain, b"\x01" + first[32:] + ser32(index),
                          hashlib.sha512).digest()
        expected = (int.from_bytes(second[:32], "big")
                    + int.from_bytes(master.private_key, "big")) % CURVE_ORDER

        child = derive_child(master, index)
        assert len(calls) == 2
        assert child.private_key == expected.to_bytes(32, "big")
        assert child.chain_code == second[32:]
        assert child.child_number == index

    def test_public_key(self):
        master = master_from_seed(TV1_SEED)
        assert len(master.public_key) == 33
        assert master.public_key[0] in (2, 3)

    def test_repr_hides_key(self):
        master = master_from_seed(TV1_SEED)
        assert master.private_key.hex() not in repr(master)


class TestPaths:
    """Test path parsing and formatting."""

    def test_parse(self):
        assert parse_path("m/83696968'/39'/0'/12'/0'") == (
            83696968 + HARDENED, 39 + HARDENED, HARDENED, 12 + HARDENED, HARDENED)
        assert parse_path("m/1H/2h") == (1 + HARDENED, 2 + HARDENED)
        assert parse_path("m") == ()

    @pytest.mark.parametrize("path", ["", "n/0'", "m/0", "m/x'", "m//0'", "m/2147483648'", 5])
    def test_parse_rejects(self, path):
        with pytest.raises(ValidationError):
            parse_path(path)

    def test_format(self):
        path = "m/83696968'/707764'/20'/0'"
        assert format_path(parse_path(path)) == path


class TestSerialization:
    """Test xprv / tprv round trips."""

    def test_round_trip(self):
        key = ExtendedKey.deserialize(TV1_M_0H)
        assert key.depth == 1
        assert key.child_number == HARDENED
        assert key.parent_fingerprint.hex() == "3442193e"
        assert key.network is Network.MAINNET
        assert key.serialize() == TV1_M_0H

    def test_testnet(self):
        master = master_from_seed(TV1_SEED, Network.TESTNET)
        text = master.serialize()
        assert text.startswith("tprv")
        assert ExtendedKey.deserialize(text) == master

    def test_bad_checksum(self):
        bad = TV1_M[:-1] + ("j" if TV1_M[-1] != "j" else "k")
        with pytest.raises(SerializationError):
            ExtendedKey.deserialize(bad)

    def test_not_base58(self):
        with pytest.raises(SerializationError):
            ExtendedKey.deserialize("xprv0OIl")

    def test_master_bytes(self):
        with pytest.raises(ValidationError):
            master_from_bytes(b"\x00" * 64)
        with pytest.raises(ValidationError):
            master_from_bytes(b"\x01" * 63)
