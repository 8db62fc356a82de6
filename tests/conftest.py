# Copyright (c) 2026 Signer — MIT License

import pytest

from gridseed.diagram import ComplexDiagram, SimpleDiagram
from gridseed.hdkey import ExtendedKey
from gridseed.legacy import legacy_master
from gridseed.seed import derive_master

# Reference master key published with BIP85
BIP85_MASTER = (
    "xprv9s21ZrQH143K2LBWUUQRFXhucrQqBpKdRRxNVq2zBqsx8HVqFk2uYo8kmbaLLHRdqtQpUm98uKfu3vca1"
    "LqdGhUtyoFnCNkfmXRyPXLjbKb"
)

FIXED_VALUES = ["🍔", "🍟", "🌭", "🍦", "🍩"]
FIXED_POSITIONS = [(1, 1), (1, 5), (5, 5), (5, 1), (3, 3)]
FIXED_PASSPHRASE = "🚲🍀🌈"


@pytest.fixture(scope="session")
def bip85_master():
    return ExtendedKey.deserialize(BIP85_MASTER)


@pytest.fixture
def fixed_diagram():
    return SimpleDiagram.from_values(FIXED_VALUES, FIXED_POSITIONS)


@pytest.fixture(scope="session")
def fixed_master():
    diagram = SimpleDiagram.from_values(FIXED_VALUES, FIXED_POSITIONS)
    return derive_master(diagram, FIXED_PASSPHRASE.encode("utf-8"))


@pytest.fixture(scope="session")
def fixed_legacy_master():
    diagram = SimpleDiagram.from_values(FIXED_VALUES, FIXED_POSITIONS)
    return legacy_master(diagram, FIXED_PASSPHRASE)


@pytest.fixture
def mixed_diagram():
    return SimpleDiagram.from_values(
        ["A", "&", "*", "王", "😊"],
        [(0, 6), (1, 1), (1, 3), (4, 2), (6, 6)],
    )


@pytest.fixture
def complex_diagram():
    return ComplexDiagram.from_values(
        ["ABC", "混A1", "123", "测试", "A&*王😊"],
        [(0, 6), (1, 1), (1, 3), (4, 2), (6, 0)],
    )
