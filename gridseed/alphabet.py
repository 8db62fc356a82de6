# Copyright (c) 2026 Signer — MIT License

"""Value alphabets: give every cell value a unique index in [0, size)."""

from .errors import EncodingError, ValidationError

UNICODE_SIZE = 0x110000


class Alphabet:
    size = 0

    def index(self, value):
        raise NotImplementedError

    def value(self, index):
        raise NotImplementedError

    def __contains__(self, value):
        try:
            self.index(value)
        except EncodingError:
            return False
        return True

    def _check_index(self, index):
        if not 0 <= index < self.size:
            raise EncodingError(f"index {index} is outside the alphabet",
                                field="index", value=index)


class ExplicitAlphabet(Alphabet):
    """A caller-ordered list of distinct values."""

    def __init__(self, values):
        self._values = tuple(values)
        self._lookup = {}
        for i, v in enumerate(self._values):
            if v in self._lookup:
                raise ValidationError(f"duplicate alphabet value {v!r}",
                                      field="alphabet", value=v)
            self._lookup[v] = i
        if not self._values:
            raise ValidationError("alphabet must not be empty", field="alphabet")
        self.size = len(self._values)

    def index(self, value):
        try:
            return self._lookup[value]
        except KeyError:
            raise EncodingError(f"value {value!r} is not in the alphabet",
                                field="value", value=value) from None

    def value(self, index):
        self._check_index(index)
        return self._values[index]

    def __repr__(self):
        return f"ExplicitAlphabet(size={self.size})"


class CodepointAlphabet(Alphabet):
    """Every single Unicode code point, indexed by its ordinal."""

    size = UNICODE_SIZE

    def index(self, value):
        if not isinstance(value, str) or len(value) != 1:
            raise EncodingError(f"expected one character, got {value!r}",
                                field="value", value=value)
        return ord(value)

    def value(self, index):
        self._check_index(index)
        return chr(index)

    def __repr__(self):
        return "CodepointAlphabet()"


class StringAlphabet(Alphabet):
    """Every string of 1..max_length code points.

    Strings are numbered by length first, then as base-0x110000 numbers,
    so the mapping is a bijection onto [0, size).
    """

    def __init__(self, max_length=50):
        if max_length < 1:
            raise ValidationError("max_length must be at least 1",
                                  field="max_length", value=max_length)
        self.max_length = max_length
        # _offsets[L] = count of strings shorter than L
        self._offsets = [0, 0]
        for length in range(1, max_length + 1):
            self._offsets.append(self._offsets[-1] + UNICODE_SIZE ** length)
        self.size = self._offsets[-1]

    def index(self, value):
        if not isinstance(value, str) or not 1 <= len(value) <= self.max_length:
            raise EncodingError(
                f"expected a string of 1..{self.max_length} characters",
                field="value", value=value)
        number = 0
        for ch in value:
            number = number * UNICODE_SIZE + ord(ch)
        return self._offsets[len(value)] + number

    def value(self, index):
        self._check_index(index)
        length = 1
        while index >= self._offsets[length + 1]:
            length += 1
        number = index - self._offsets[length]
        chars = []
        for _ in range(length):
            number, cp = divmod(number, UNICODE_SIZE)
            chars.append(chr(cp))
        return "".join(reversed(chars))

    def __repr__(self):
        return f"StringAlphabet(max_length={self.max_length})"
