"""RS block structure and capacity tables for QR versions 1-10."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple


class CapacityOverflowError(ValueError):
    """Payload does not fit the largest supported version at this EC level."""


class ECLevel(IntEnum):
    """Error-correction levels; values are the 2-bit format-info codes."""

    L = 1
    M = 0
    Q = 3
    H = 2

    @classmethod
    def coerce(cls, level: "ECLevel | str") -> "ECLevel":
        if isinstance(level, ECLevel):
            return level
        if isinstance(level, str) and level.upper() in cls.__members__:
            return cls[level.upper()]
        raise ValueError(f"Unknown error-correction level: {level!r}")


# Mode indicators (only byte mode is emitted).
MODE_NUMBER = 1 << 0
MODE_ALPHA_NUM = 1 << 1
MODE_8BIT_BYTE = 1 << 2
MODE_KANJI = 1 << 3

MODE_BITS = 4
TERMINATOR_BITS = 4
MIN_VERSION = 1
MAX_VERSION = 10

# Character-count widths per version tier: (v1-9, v10-26, v27-40).
_COUNT_BITS: Dict[int, Tuple[int, int, int]] = {
    MODE_NUMBER: (10, 12, 14),
    MODE_ALPHA_NUM: (9, 11, 13),
    MODE_8BIT_BYTE: (8, 16, 16),
    MODE_KANJI: (8, 10, 12),
}


@dataclass(frozen=True)
class RSBlock:
    total_codewords: int
    data_codewords: int

    @property
    def ec_codewords(self) -> int:
        return self.total_codewords - self.data_codewords


# (count, total, data) groups, one entry per version in L, M, Q, H order.
_RS_BLOCK_TABLE: Dict[int, Tuple[Tuple[int, ...], ...]] = {
    1: ((1, 26, 19), (1, 26, 16), (1, 26, 13), (1, 26, 9)),
    2: ((1, 44, 34), (1, 44, 28), (1, 44, 22), (1, 44, 16)),
    3: ((1, 70, 55), (1, 70, 44), (2, 35, 17), (2, 35, 13)),
    4: ((1, 100, 80), (2, 50, 32), (2, 50, 24), (4, 25, 9)),
    5: ((1, 134, 108), (2, 67, 43), (2, 33, 15, 2, 34, 16), (2, 33, 11, 2, 34, 12)),
    6: ((2, 86, 68), (4, 43, 27), (4, 43, 19), (4, 43, 15)),
    7: ((2, 98, 78), (4, 49, 31), (2, 32, 14, 4, 33, 15), (4, 39, 13, 1, 40, 14)),
    8: ((2, 121, 97), (2, 60, 38, 2, 61, 39), (4, 40, 18, 2, 41, 19), (4, 40, 14, 2, 41, 15)),
    9: ((2, 146, 116), (3, 58, 36, 2, 59, 37), (4, 36, 16, 4, 37, 17), (4, 36, 12, 4, 37, 13)),
    10: ((2, 86, 68, 2, 87, 69), (4, 69, 43, 1, 70, 44), (6, 43, 19, 2, 44, 20), (6, 43, 15, 2, 44, 16)),
}

_LEVEL_ORDER = (ECLevel.L, ECLevel.M, ECLevel.Q, ECLevel.H)

# Alignment-pattern center coordinates, indexed by version.
ALIGNMENT_POSITIONS: Dict[int, Tuple[int, ...]] = {
    1: (),
    2: (6, 18),
    3: (6, 22),
    4: (6, 26),
    5: (6, 30),
    6: (6, 34),
    7: (6, 22, 38),
    8: (6, 24, 42),
    9: (6, 26, 46),
    10: (6, 28, 50),
}


def _check_version(version: int) -> None:
    if not (MIN_VERSION <= version <= MAX_VERSION):
        raise ValueError(f"version must be in [{MIN_VERSION}, {MAX_VERSION}], got {version}")


def symbol_size(version: int) -> int:
    _check_version(version)
    return version * 4 + 17


def rs_blocks(version: int, ec_level: ECLevel | str) -> List[RSBlock]:
    """Expand the table row for (version, level) into one RSBlock per block."""

    _check_version(version)
    level = ECLevel.coerce(ec_level)
    row = _RS_BLOCK_TABLE[version][_LEVEL_ORDER.index(level)]
    blocks: List[RSBlock] = []
    for i in range(0, len(row), 3):
        count, total, data = row[i : i + 3]
        blocks.extend(RSBlock(total_codewords=total, data_codewords=data) for _ in range(count))
    return blocks


def data_codewords(version: int, ec_level: ECLevel | str) -> int:
    return sum(block.data_codewords for block in rs_blocks(version, ec_level))


def total_codewords(version: int, ec_level: ECLevel | str) -> int:
    return sum(block.total_codewords for block in rs_blocks(version, ec_level))


def count_bits(version: int, mode: int = MODE_8BIT_BYTE) -> int:
    """Width of the character-count indicator for `mode` at `version`."""

    if not (1 <= version <= 40):
        raise ValueError(f"version must be in [1, 40], got {version}")
    if mode not in _COUNT_BITS:
        raise ValueError(f"Unknown mode: {mode}")
    tier = 0 if version < 10 else (1 if version < 27 else 2)
    return _COUNT_BITS[mode][tier]


def required_bits(length: int, version: int) -> int:
    return MODE_BITS + count_bits(version) + 8 * length + TERMINATOR_BITS


def byte_capacity(version: int, ec_level: ECLevel | str) -> int:
    """Largest byte-mode payload that fits (version, level)."""

    spare = data_codewords(version, ec_level) * 8 - MODE_BITS - count_bits(version) - TERMINATOR_BITS
    return max(spare // 8, 0)


def select_version(length: int, ec_level: ECLevel | str, max_version: int = MAX_VERSION) -> int:
    """Return the smallest version whose capacity holds `length` payload bytes."""

    if length < 0:
        raise ValueError("length must be non-negative")
    level = ECLevel.coerce(ec_level)
    _check_version(max_version)
    for version in range(MIN_VERSION, max_version + 1):
        if required_bits(length, version) <= data_codewords(version, level) * 8:
            return version
    raise CapacityOverflowError(
        f"Payload of {length} bytes exceeds version {max_version}-{level.name} capacity "
        f"of {byte_capacity(max_version, level)} bytes"
    )


__all__ = [
    "CapacityOverflowError",
    "ECLevel",
    "RSBlock",
    "ALIGNMENT_POSITIONS",
    "MODE_NUMBER",
    "MODE_ALPHA_NUM",
    "MODE_8BIT_BYTE",
    "MODE_KANJI",
    "MAX_VERSION",
    "symbol_size",
    "rs_blocks",
    "data_codewords",
    "total_codewords",
    "count_bits",
    "required_bits",
    "byte_capacity",
    "select_version",
]
