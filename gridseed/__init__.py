# Copyright (c) 2026 Signer — MIT License

"""gridseed: visual 7x7 diagrams to standards-compliant key material.

Usage:
    from gridseed import SimpleDiagram, derive_master, bip85
    diagram = SimpleDiagram.from_values(["🍔", "🍟"], [(1, 1), (1, 5)])
    master = derive_master(diagram, "passphrase")
    bip85.mnemonic(master, "english", 12)
    bip85.wif(master)
    bip85.xprv(master)
    bip85.password(master, "emoji", 20)
"""

import logging

from . import bip85
from .bip38 import decrypt_wif, encrypt_wif
from .diagram import AnimateDiagram, ComplexDiagram, Position, SimpleDiagram
from .encoder import decode, encode, entropy_bits, entropy_length, entropy_space
from .encoding import decode_wif, encode_wif
from .encrypt import decrypt_mnemonic, encrypt_mnemonic
from .errors import (DecryptionError, EncodingError, GridSeedError,
                     SerializationError, ValidationError)
from .hdkey import ExtendedKey, derive_child, derive_path, parse_path
from .legacy import legacy_master
from .mnemonic import Language, Mnemonic, entropy_to_mnemonic, mnemonic_to_entropy
from .network import Network
from .password import CHARSET_VERSION, CHARSETS
from .seed import derive_master, derive_seed, get_entropy_bits, master_from_seed

__version__ = "1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "bip85",
    "CHARSET_VERSION", "CHARSETS",
    "AnimateDiagram", "ComplexDiagram", "Position", "SimpleDiagram",
    "DecryptionError", "EncodingError", "GridSeedError",
    "SerializationError", "ValidationError",
    "ExtendedKey", "Language", "Mnemonic", "Network",
    "decode", "decode_wif", "decrypt_mnemonic", "decrypt_wif",
    "derive_child", "derive_master", "derive_path", "derive_seed",
    "encode", "encode_wif", "encrypt_mnemonic", "encrypt_wif",
    "entropy_bits", "entropy_length", "entropy_space", "entropy_to_mnemonic",
    "get_entropy_bits", "legacy_master", "master_from_seed",
    "mnemonic_to_entropy", "parse_path",
]
