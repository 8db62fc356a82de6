# Copyright (c) 2026 Signer — MIT License

"""Fixed scenario: five food emoji, a three-emoji passphrase, index 0.

These literals anchor the whole pipeline and must never drift.
"""

from gridseed import bip85
from gridseed.encoding import decode_wif
from gridseed.hdkey import ExtendedKey
from gridseed.mnemonic import Language, mnemonic_to_entropy


class TestEncoderFlow:
    """Diagram -> encoder -> HMAC master -> BIP85."""

    def test_mnemonic_15(self, fixed_master):
        sentence = bip85.mnemonic(fixed_master, Language.ENGLISH, 15, 0)
        assert len(sentence.split(" ")) == 15
        assert mnemonic_to_entropy(sentence).hex() == "c1d0cf2ed1d3c37b94d8b23a623306863d789f5f"
        assert bip85.mnemonic(fixed_master, Language.ENGLISH, 15, 0) == sentence

    def test_mnemonic_24(self, fixed_master):
        sentence = bip85.mnemonic(fixed_master, Language.ENGLISH, 24, 0)
        assert mnemonic_to_entropy(sentence).hex() == (
            "d0accdbd7046fb7d30205f36cb38d2f150653c2608156fb03101ca9c147074fc")

    def test_wif(self, fixed_master):
        wif = bip85.wif(fixed_master, 0)
        assert wif == "L1RzJ8o5k65bavG4vjUG7HmQtvkTJERt8iscRwAbSgnytJ7jbbgJ"
        assert decode_wif(wif)[1] is True

    def test_xprv(self, fixed_master):
        xprv = bip85.xprv(fixed_master, 0)
        assert xprv == (
            "xprv9s21ZrQH143K31Ubq18wThKXLMjNSYX6EonmVcD5zYqGE4AjtpPXrpGYGz1GShHQJY1ymBpKFmcvP5kA3"
            "7Zw9C8K5ANZjARBqY5VeRVzK8q")
        assert ExtendedKey.deserialize(xprv).serialize() == xprv

    def test_emoji_password(self, fixed_master):
        assert bip85.password(fixed_master, "emoji", 20, 0) == \
            "✈🚲🍒🐶🔑❤⏰🎈🏠🔔🚗😭🌵💋🐍🌴🚲⭐🎄🌵"


class TestLegacyFlow:
    """Diagram -> art secret -> warp -> BIP32 master -> BIP85."""

    def test_mnemonic_15(self, fixed_legacy_master):
        sentence = bip85.mnemonic(fixed_legacy_master, Language.ENGLISH, 15, 0)
        assert sentence == ("lady announce wife please settle connect april hour caution "
                            "split festival genuine logic digital dignity")
        assert mnemonic_to_entropy(sentence).hex() == "7c812bebd33c465e42bb7224ba4554b0a8387bcf"

    def test_wif(self, fixed_legacy_master):
        assert bip85.wif(fixed_legacy_master, 0) == \
            "L25LxS22MwRpEnnFs81XitJyrkimpZGLjgKHRAikLxJoxWMkVuHd"

    def test_xprv(self, fixed_legacy_master):
        assert bip85.xprv(fixed_legacy_master, 0) == (
            "xprv9s21ZrQH143K47Cxw6R8QnGdAru5BaK7kT5awzC9VvmpXnpCQPdEmPyJeR9w3FeJ3hmEBRCRLGhMNpnkc"
            "M9q2w3J3T55bSSqMLRDpJLZU4B")

    def test_emoji_password(self, fixed_legacy_master):
        assert bip85.password(fixed_legacy_master, "emoji", 20, 0) == \
            "🙏✋🍕🌻🎄🙏👍🔔🔔🍺💊🍄🍺⚡✋👌😍🚗🍎🚗"
