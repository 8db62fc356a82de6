# Copyright (c) 2026 Signer — MIT License

"""Mixed-radix accumulator for the diagram entropy number."""

from .errors import EncodingError


class MixedRadix:
    """An unbounded integer built from digits of varying radix.

    Digits are pushed most significant first with multiply-add and popped
    least significant first with divmod, so a sequence pushed as
    (d0, r0), (d1, r1), ... comes back out in reverse order.
    """

    __slots__ = ("value",)

    def __init__(self, value=0):
        if value < 0:
            raise EncodingError("mixed-radix value must be non-negative",
                                field="value", value=value)
        self.value = value

    def push(self, digit, radix):
        if not 0 <= digit < radix:
            raise EncodingError(f"digit {digit} out of range for radix {radix}",
                                field="digit", value=digit)
        self.value = self.value * radix + digit
        return self

    def pop(self, radix):
        self.value, digit = divmod(self.value, radix)
        return digit

    def to_bytes(self, length):
        try:
            return self.value.to_bytes(length, "big")
        except OverflowError:
            raise EncodingError(f"value does not fit in {length} bytes",
                                field="length", value=length) from None

    @classmethod
    def from_bytes(cls, data):
        return cls(int.from_bytes(data, "big"))

    def __int__(self):
        return self.value

    def __eq__(self, other):
        if isinstance(other, MixedRadix):
            return self.value == other.value
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"MixedRadix(bits={self.value.bit_length()})"
