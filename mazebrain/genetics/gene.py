# mazebrain/genetics/gene.py

import math

import numpy as np

from ..io.encoding import DenseEncoder, bits_to_string, string_to_bits


def _rng(rng):
    return rng if rng is not None else np.random.default_rng()


class Gene:
    """
    Fixed-length bit vector read as a binary fraction:
    value = sum(bit_i * 2^-(i+1)), always in [0, 1).

    The length never changes after construction. Mutation flips a bit in
    place and is only driven by Chromosome.mutate().
    """

    __slots__ = ("bits",)

    def __init__(self, bits):
        self.bits = np.array(bits, dtype=bool).reshape(-1)

    @classmethod
    def random(cls, length: int, rng: np.random.Generator | None = None) -> "Gene":
        return cls(_rng(rng).random(length) >= 0.5)

    @classmethod
    def from_double(cls, value: float, length: int) -> "Gene":
        """
        Fixed-point binary expansion of the fractional part of |value|.
        Truncates, so the decoded gene is within 2^-length below the input.
        """
        if not math.isfinite(value):
            raise ValueError(f"cannot encode non-finite value {value!r}")
        value = abs(value)
        if value >= 1.0:
            value -= math.floor(value)

        bits = np.zeros(length, dtype=bool)
        for i in range(length):
            value *= 2.0
            if value >= 1.0:
                bits[i] = True
                value -= 1.0
        return cls(bits)

    @classmethod
    def from_string(cls, text: str) -> "Gene":
        return cls(string_to_bits(text))

    @classmethod
    def from_dense(cls, text: str, bit_length: int) -> "Gene":
        return cls(DenseEncoder(bit_length).decode(text))

    @property
    def bit_length(self) -> int:
        return int(self.bits.size)

    @property
    def dense_byte_size(self) -> int:
        return DenseEncoder(self.bit_length).byte_size

    def to_double(self) -> float:
        powers = np.ldexp(1.0, -np.arange(1, self.bit_length + 1))
        return float(powers[self.bits].sum())

    def to_float(self) -> float:
        return float(np.float32(self.to_double()))

    def to_dense(self) -> str:
        return DenseEncoder(self.bit_length).encode(self.bits)

    def mutate(self, rng: np.random.Generator | None = None) -> int:
        """Flip one uniformly chosen bit in place; returns its index."""
        if self.bit_length == 0:
            raise ValueError("cannot mutate a zero-length gene")
        i = int(_rng(rng).integers(self.bit_length))
        self.bits[i] = not self.bits[i]
        return i

    def clone(self) -> "Gene":
        return Gene(self.bits.copy())

    def __len__(self):
        return self.bit_length

    def __str__(self):
        return bits_to_string(self.bits)

    def __repr__(self):
        return f"Gene('{self}')"

    def __eq__(self, other):
        if not isinstance(other, Gene):
            return NotImplemented
        return np.array_equal(self.bits, other.bits)

    __hash__ = None
