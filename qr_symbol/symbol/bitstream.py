"""Byte-mode data encoding into a padded bit stream."""

from __future__ import annotations

from typing import List

import numpy as np

from .capacity import (
    MODE_8BIT_BYTE,
    MODE_BITS,
    TERMINATOR_BITS,
    CapacityOverflowError,
    ECLevel,
    count_bits,
    data_codewords,
)

PAD_BYTES = (0xEC, 0x11)


class BitBuffer:
    """Append-only bit sequence."""

    def __init__(self) -> None:
        self._bits: List[int] = []

    def __len__(self) -> int:
        return len(self._bits)

    def put(self, value: int, length: int) -> None:
        """Append the low `length` bits of `value`, most significant first."""

        if length < 0:
            raise ValueError("length must be non-negative")
        for i in reversed(range(length)):
            self._bits.append((value >> i) & 1)

    def put_bit(self, bit: bool) -> None:
        self._bits.append(1 if bit else 0)

    def bits(self) -> np.ndarray:
        return np.array(self._bits, dtype=np.uint8)

    def to_bytes(self) -> np.ndarray:
        """Return the buffer as codewords; only valid on a byte boundary."""

        if len(self._bits) % 8 != 0:
            raise ValueError("BitBuffer is not byte aligned")
        return np.packbits(self.bits()).astype(np.int32)


def encode_data(payload: bytes, version: int, ec_level: ECLevel | str) -> np.ndarray:
    """Return the padded data codewords for `payload` at (version, level)."""

    capacity_bits = data_codewords(version, ec_level) * 8

    buffer = BitBuffer()
    buffer.put(MODE_8BIT_BYTE, MODE_BITS)
    buffer.put(len(payload), count_bits(version, MODE_8BIT_BYTE))
    for byte in payload:
        buffer.put(byte, 8)

    if len(buffer) > capacity_bits:
        raise CapacityOverflowError(
            f"Data needs {len(buffer)} bits but version {version} holds {capacity_bits}"
        )

    if len(buffer) + TERMINATOR_BITS <= capacity_bits:
        buffer.put(0, TERMINATOR_BITS)

    while len(buffer) % 8 != 0:
        buffer.put_bit(False)

    pad_index = 0
    while len(buffer) < capacity_bits:
        buffer.put(PAD_BYTES[pad_index % 2], 8)
        pad_index += 1

    return buffer.to_bytes()


__all__ = ["BitBuffer", "PAD_BYTES", "encode_data"]
