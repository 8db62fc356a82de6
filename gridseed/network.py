# Copyright (c) 2026 Signer — MIT License

"""Network version bytes for WIF and extended-key serialization."""

from enum import Enum

from .errors import ValidationError


class Network(Enum):
    # (WIF prefix, xprv version, P2PKH address version)
    MAINNET = (0x80, 0x0488ADE4, 0x00)
    TESTNET = (0xEF, 0x04358394, 0x6F)

    @property
    def wif_prefix(self):
        return self.value[0]

    @property
    def xprv_version(self):
        return self.value[1]

    @property
    def address_version(self):
        return self.value[2]

    @classmethod
    def from_wif_prefix(cls, prefix):
        for net in cls:
            if net.wif_prefix == prefix:
                return net
        raise ValidationError(f"unknown WIF prefix 0x{prefix:02x}",
                              field="network", value=prefix)

    @classmethod
    def from_xprv_version(cls, version):
        for net in cls:
            if net.xprv_version == version:
                return net
        raise ValidationError(f"unknown extended key version 0x{version:08x}",
                              field="network", value=version)


def to_network(network):
    """Accept a Network or its name ("mainnet", "testnet")."""
    if isinstance(network, Network):
        return network
    try:
        return Network[str(network).upper()]
    except KeyError:
        raise ValidationError(f"unknown network {network!r}",
                              field="network", value=network) from None
