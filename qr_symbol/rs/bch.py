"""BCH codes protecting the QR format and version information fields."""

from __future__ import annotations

import numpy as np

FORMAT_GENERATOR = 0x537  # BCH(15, 5)
FORMAT_XOR_MASK = 0x5412
VERSION_GENERATOR = 0x1F25  # BCH(18, 6)


def _bch_remainder(value: int, generator: int) -> int:
    degree = generator.bit_length() - 1
    d = value << degree
    while d.bit_length() - generator.bit_length() >= 0:
        d ^= generator << (d.bit_length() - generator.bit_length())
    return d


def bch_format_bits(ec_code: int, mask: int) -> int:
    """Return the 15-bit masked format word for an EC level code and mask id."""

    if not (0 <= ec_code <= 3):
        raise ValueError("ec_code must be in [0, 3]")
    if not (0 <= mask <= 7):
        raise ValueError("mask must be in [0, 7]")
    data = (ec_code << 3) | mask
    return ((data << 10) | _bch_remainder(data, FORMAT_GENERATOR)) ^ FORMAT_XOR_MASK


def bch_version_bits(version: int) -> int:
    """Return the 18-bit version word (only placed for versions >= 7)."""

    if not (1 <= version <= 40):
        raise ValueError("version must be in [1, 40]")
    return (version << 12) | _bch_remainder(version, VERSION_GENERATOR)


def word_to_bits(word: int, length: int) -> np.ndarray:
    """Unpack `word` into `length` bits, least significant first."""

    return np.array([(word >> i) & 1 for i in range(length)], dtype=np.int8)


__all__ = [
    "FORMAT_GENERATOR",
    "FORMAT_XOR_MASK",
    "VERSION_GENERATOR",
    "bch_format_bits",
    "bch_version_bits",
    "word_to_bits",
]
