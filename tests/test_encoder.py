# Copyright (c) 2026 Signer — MIT License

"""Tests for the diagram entropy encoder, alphabets and mixed radix."""

import itertools
import math
import random

import pytest

from gridseed.alphabet import (UNICODE_SIZE, CodepointAlphabet, ExplicitAlphabet,
                               StringAlphabet)
from gridseed.diagram import ComplexDiagram, Position, SimpleDiagram
from gridseed.encoder import (decode, decode_number, encode, encode_number,
                              entropy_bits, entropy_length, entropy_space)
from gridseed.errors import EncodingError, ValidationError
from gridseed.radix import MixedRadix

FIXED_ENTROPY = "0030ef9e9c39a663a2c27cacac5945f369"


def _random_diagram(rng, n, alphabet):
    cells = rng.sample(range(49), n)
    values = [alphabet.value(rng.randrange(alphabet.size)) for _ in range(n)]
    return SimpleDiagram.from_values(values, [divmod(c, 7) for c in cells])


class TestEntropySpace:
    """Test the size arithmetic."""

    def test_space(self):
        """A(49, n) * C**n."""
        assert entropy_space(1, 1) == 49
        assert entropy_space(2, 3) == 49 * 48 * 9
        assert entropy_space(49, 1) == math.factorial(49)

    def test_length_depends_on_n_and_c_only(self):
        """Byte length is the minimal size for the largest number."""
        assert entropy_length(5, UNICODE_SIZE) == 17
        assert entropy_length(1, UNICODE_SIZE) == 4
        assert entropy_length(49, 1) == 27
        assert entropy_length(49, UNICODE_SIZE) == 150
        assert entropy_length(1, 1) == 1

    def test_bits(self):
        """Five code points on the grid carry a little over 128 bits."""
        assert 128 < entropy_bits(5, UNICODE_SIZE) < 129

    @pytest.mark.parametrize("n", [0, 50, -1])
    def test_bad_count(self, n):
        """n must be 1..49."""
        with pytest.raises(ValidationError):
            entropy_space(n, 10)


class TestEncode:
    """Test encoding of diagrams."""

    def test_fixed_diagram(self, fixed_diagram):
        """The five-emoji diagram encodes to pinned bytes."""
        data = encode(fixed_diagram)
        assert data.hex() == FIXED_ENTROPY
        assert len(data) == entropy_length(5, UNICODE_SIZE)

    def test_digits_by_hand(self, fixed_diagram):
        """Position ranks 8, 11, 38, 34, 22 interleaved with code points."""
        expected = 0
        ranks = [8, 11, 38, 34, 22]
        for i, (rank, value) in enumerate(zip(ranks, fixed_diagram.values())):
            expected = expected * (49 - i) + rank
            expected = expected * UNICODE_SIZE + ord(value)
        assert encode_number(fixed_diagram) == expected

    def test_deterministic(self, fixed_diagram):
        """Same diagram, same bytes."""
        assert encode(fixed_diagram) == encode(fixed_diagram)

    def test_order_is_significant(self):
        """The caller's order is the encoding order."""
        a = SimpleDiagram.from_values(["X", "Y"], [(0, 0), (6, 6)])
        b = SimpleDiagram.from_values(["Y", "X"], [(6, 6), (0, 0)])
        assert set(a.occupied()) == set(b.occupied())
        assert encode(a) != encode(b)

    def test_pairs_accepted(self):
        """A raw (position, value) sequence encodes like a diagram."""
        pairs = [((2, 3), "a"), ((4, 4), "b")]
        d = SimpleDiagram.from_values(["a", "b"], [(2, 3), (4, 4)])
        assert encode(pairs) == encode(d)

    def test_duplicate_pair_positions(self):
        """A raw sequence may not repeat a cell."""
        with pytest.raises(ValidationError):
            encode_number([((1, 1), "a"), ((1, 1), "b")])

    def test_empty(self):
        with pytest.raises(ValidationError):
            encode([])

    def test_alphabet_missing_value(self):
        """Values outside the alphabet are an encoding error."""
        d = SimpleDiagram.from_values(["a", "z"], [(0, 0), (0, 1)])
        with pytest.raises(EncodingError) as exc:
            encode(d, ExplicitAlphabet("abc"))
        assert exc.value.field == "value"
        assert exc.value.value == "z"

    def test_maximum_value(self):
        """Largest digits at every step give space - 1."""
        alphabet = ExplicitAlphabet("ab")
        positions = [divmod(p, 7) for p in range(48, 43, -1)]
        d = SimpleDiagram.from_values(["b"] * 5, positions)
        assert encode_number(d, alphabet) == entropy_space(5, 2) - 1

    def test_minimum_value(self):
        """Smallest digits at every step give 0."""
        d = SimpleDiagram.from_values(["a"] * 3, [(0, 0), (0, 1), (0, 2)])
        assert encode_number(d, ExplicitAlphabet("ab")) == 0


class TestBijection:
    """Test decode(encode(d)) == d and exhaustive no-collision."""

    @pytest.mark.parametrize("n", range(1, 50))
    def test_round_trip_every_n(self, n):
        rng = random.Random(n)
        alphabet = ExplicitAlphabet("0123456789abcdef")
        d = _random_diagram(rng, n, alphabet)
        data = encode(d, alphabet)
        assert decode(data, n, alphabet) == d.occupied()

    @pytest.mark.parametrize("n", [1, 7, 25, 49])
    def test_round_trip_codepoints(self, n):
        rng = random.Random(1000 + n)
        alphabet = CodepointAlphabet()
        d = _random_diagram(rng, n, alphabet)
        assert decode(encode(d), n) == d.occupied()

    def test_complex_round_trip(self, complex_diagram):
        """Complex diagrams use the string alphabet by default."""
        alphabet = StringAlphabet()
        data = encode(complex_diagram)
        assert len(data) == entropy_length(5, alphabet.size)
        decoded = decode(data, 5, alphabet)
        assert ComplexDiagram(decoded) == complex_diagram

    def test_one_cell_exhaustive(self):
        """Every one-cell diagram over two values maps onto [0, 98)."""
        alphabet = ExplicitAlphabet("ab")
        numbers = {
            encode_number([(divmod(p, 7), v)], alphabet)
            for p in range(49) for v in "ab"
        }
        assert numbers == set(range(entropy_space(1, 2)))

    def test_two_cells_exhaustive(self):
        """Every ordered pair of cells maps onto [0, 49 * 48)."""
        alphabet = ExplicitAlphabet("a")
        numbers = set()
        for p, q in itertools.permutations(range(49), 2):
            pairs = [(divmod(p, 7), "a"), (divmod(q, 7), "a")]
            number = encode_number(pairs, alphabet)
            assert decode_number(number, 2, alphabet) == (
                (Position(*divmod(p, 7)), "a"), (Position(*divmod(q, 7)), "a"))
            numbers.add(number)
        assert numbers == set(range(49 * 48))

    def test_decode_wrong_length(self):
        with pytest.raises(EncodingError):
            decode(bytes.fromhex(FIXED_ENTROPY)[1:], 5)

    def test_decode_out_of_space(self):
        """Numbers at or past the space size are rejected."""
        with pytest.raises(EncodingError):
            decode(b"\xff" * 17, 5)
        with pytest.raises(EncodingError):
            decode_number(98, 1, ExplicitAlphabet("ab"))


class TestAlphabets:
    """Test value alphabets."""

    def test_explicit(self):
        alphabet = ExplicitAlphabet(["🍔", "🍟"])
        assert alphabet.size == 2
        assert alphabet.index("🍟") == 1
        assert alphabet.value(0) == "🍔"
        assert "🍕" not in alphabet

    def test_explicit_duplicates(self):
        with pytest.raises(ValidationError):
            ExplicitAlphabet("aa")

    def test_codepoint(self):
        alphabet = CodepointAlphabet()
        assert alphabet.index("A") == 65
        assert alphabet.value(0x1F354) == "🍔"
        with pytest.raises(EncodingError):
            alphabet.index("AB")
        with pytest.raises(EncodingError):
            alphabet.value(UNICODE_SIZE)

    def test_string_numbering(self):
        """Shorter strings come first, then base-0x110000 order."""
        alphabet = StringAlphabet(max_length=2)
        assert alphabet.size == UNICODE_SIZE + UNICODE_SIZE ** 2
        assert alphabet.index("\x00") == 0
        assert alphabet.index(chr(0x10FFFF)) == UNICODE_SIZE - 1
        assert alphabet.index("\x00\x00") == UNICODE_SIZE
        assert alphabet.index("\x00\x01") == UNICODE_SIZE + 1
        assert alphabet.value(alphabet.size - 1) == chr(0x10FFFF) * 2

    @pytest.mark.parametrize("text", ["A", "测试", "A&*王😊", "x" * 50])
    def test_string_round_trip(self, text):
        alphabet = StringAlphabet()
        assert alphabet.value(alphabet.index(text)) == text

    def test_string_too_long(self):
        with pytest.raises(EncodingError):
            StringAlphabet().index("x" * 51)


class TestMixedRadix:
    """Test the digit accumulator."""

    def test_push_pop(self):
        acc = MixedRadix()
        acc.push(3, 7).push(0, 2).push(40, 49)
        assert acc.pop(49) == 40
        assert acc.pop(2) == 0
        assert acc.pop(7) == 3
        assert acc.value == 0

    def test_digit_range(self):
        with pytest.raises(EncodingError):
            MixedRadix().push(7, 7)

    def test_bytes(self):
        acc = MixedRadix(258)
        assert acc.to_bytes(3) == b"\x00\x01\x02"
        assert MixedRadix.from_bytes(b"\x01\x02") == MixedRadix(258)
        with pytest.raises(EncodingError):
            acc.to_bytes(1)
