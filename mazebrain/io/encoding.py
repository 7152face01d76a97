"""
mazebrain/io/encoding.py
---------------------------------
Why this exists
- Chromosomes are stored as text. The plain form spells every bit out as a
  '0'/'1' character; the dense form packs seven bits into one character so a
  whole population fits in a small file.

How it works
- DenseEncoder packs a bit vector of a known length into characters. The
  first character carries the leftover (length mod 7) bits, aligned so the
  packing ends on a character boundary. Every packed value is offset by 33 to
  stay clear of the ASCII control block; values above 127 are folded into
  negative signed bytes and written as their unsigned latin-1 character.
- The bit length is not recoverable from the characters, so decoding always
  takes it from the encoder.
- split_plain / split_dense cut chromosome text into per-gene pieces and
  report the gene index and position of anything malformed.
"""

# mazebrain/io/encoding.py

import math

import numpy as np

from ..errors import ChromosomeFormatError

BITS_PER_CHAR = 7
CONTROL_OFFSET = 33     # skip ASCII 0-32
SIGNED_MAX = 127


def _fold(value: int) -> int:
    """Packed value (33..160) -> signed byte (-33..127, never 0..32)."""
    return -(value - SIGNED_MAX) if value > SIGNED_MAX else value


def _unfold(signed: int) -> int:
    return -signed + SIGNED_MAX if signed < 0 else signed


class DenseEncoder:
    """
    7-bit-per-character codec for one fixed bit length.
    """

    def __init__(self, bit_length: int):
        if bit_length < 0:
            raise ValueError(f"bit_length must be non-negative, got {bit_length}")
        self.bit_length = bit_length
        self.byte_size = math.ceil(bit_length / BITS_PER_CHAR)
        # number of unused low slots in the first character
        self.skip = (BITS_PER_CHAR - bit_length % BITS_PER_CHAR) % BITS_PER_CHAR

    def encode_signed(self, bits) -> list[int]:
        bits = np.asarray(bits, dtype=bool)
        if bits.size != self.bit_length:
            raise ValueError(f"expected {self.bit_length} bits, got {bits.size}")

        packed = []
        slot = self.skip
        value = CONTROL_OFFSET
        for bit in bits:
            if bit:
                value += 1 << slot
            slot += 1
            if slot == BITS_PER_CHAR:
                packed.append(_fold(value))
                value = CONTROL_OFFSET
                slot = 0
        if len(packed) < self.byte_size:
            packed.append(_fold(value))
        return packed

    def encode(self, bits) -> str:
        return "".join(chr(b & 0xFF) for b in self.encode_signed(bits))

    def decode(self, text: str, gene_index: int | None = None, offset: int = 0) -> np.ndarray:
        """
        Reverse encode(). offset is the position of text inside a larger
        string, only used to make error messages point at the right place.
        """
        if len(text) != self.byte_size:
            raise ChromosomeFormatError(
                f"dense gene needs {self.byte_size} characters for {self.bit_length} bits, got {len(text)}",
                gene_index=gene_index,
                position=offset,
            )

        bits = np.zeros(self.bit_length, dtype=bool)
        a = 0
        for b, ch in enumerate(text):
            code = ord(ch)
            if code > 0xFF:
                raise ChromosomeFormatError(
                    f"character {ch!r} is outside the dense alphabet",
                    gene_index=gene_index,
                    position=offset + b,
                )
            signed = code - 0x100 if code > SIGNED_MAX else code
            value = _unfold(signed) - CONTROL_OFFSET
            if not 0 <= value < (1 << BITS_PER_CHAR):
                raise ChromosomeFormatError(
                    f"character {ch!r} cannot appear in dense text",
                    gene_index=gene_index,
                    position=offset + b,
                )
            for slot in range(BITS_PER_CHAR):
                if not (b == 0 and slot < self.skip):
                    bits[a] = bool(value & 1)
                    a += 1
                value >>= 1
        return bits


def bits_to_string(bits) -> str:
    return "".join("1" if b else "0" for b in bits)


def string_to_bits(text: str, gene_index: int | None = None, offset: int = 0) -> np.ndarray:
    for i, ch in enumerate(text):
        if ch not in "01":
            raise ChromosomeFormatError(
                f"expected '0' or '1', found {ch!r}",
                gene_index=gene_index,
                position=offset + i,
            )
    return np.fromiter((ch == "1" for ch in text), dtype=bool, count=len(text))


def split_plain(text: str) -> list[tuple[str, int]]:
    """
    "[0101][11]" -> [("0101", 1), ("11", 7)]: each gene body with the
    position of its first bit.
    """
    pieces = []
    p = 0
    while p < len(text):
        if text[p].isspace():
            p += 1
            continue
        if text[p] != "[":
            raise ChromosomeFormatError(
                f"expected '[', found {text[p]!r}", gene_index=len(pieces), position=p
            )
        end = text.find("]", p + 1)
        if end < 0:
            raise ChromosomeFormatError("unterminated gene", gene_index=len(pieces), position=p)
        pieces.append((text[p + 1:end], p + 1))
        p = end + 1
    return pieces


def _read_header_field(text: str, p: int, name: str) -> tuple[int, int]:
    if p >= len(text) or text[p] != "[":
        raise ChromosomeFormatError(f"dense header is missing the {name} field", position=p)
    end = text.find("]", p + 1)
    if end < 0:
        raise ChromosomeFormatError(f"unterminated {name} field", position=p)
    raw = text[p + 1:end]
    if not raw.isdigit():
        raise ChromosomeFormatError(f"{name} field {raw!r} is not a number", position=p + 1)
    return int(raw), end + 1


def split_dense(text: str) -> tuple[DenseEncoder, list[tuple[str, int]]]:
    """
    "[byteSize][bitLength]<genes...>" -> (encoder, [(gene_text, position), ...])
    """
    byte_size, p = _read_header_field(text, 0, "byte size")
    bit_length, p = _read_header_field(text, p, "bit length")

    encoder = DenseEncoder(bit_length)
    if encoder.byte_size != byte_size:
        raise ChromosomeFormatError(
            f"byte size {byte_size} does not match bit length {bit_length} "
            f"(expected {encoder.byte_size})",
            position=1,
        )

    body = len(text) - p
    if byte_size == 0:
        if body:
            raise ChromosomeFormatError("zero-width genes cannot carry data", position=p)
        return encoder, []
    if body % byte_size:
        raise ChromosomeFormatError(
            f"trailing {body % byte_size} characters do not form a whole gene",
            gene_index=body // byte_size,
            position=len(text) - body % byte_size,
        )

    pieces = [(text[q:q + byte_size], q) for q in range(p, len(text), byte_size)]
    return encoder, pieces
