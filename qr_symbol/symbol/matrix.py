"""Module matrix construction: function patterns and codeword placement."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator, Tuple

import numpy as np

from ..rs.bch import bch_format_bits, bch_version_bits, word_to_bits
from .capacity import ALIGNMENT_POSITIONS, ECLevel, symbol_size

FINDER_SIZE = 7
TIMING_INDEX = 6
FORMAT_BITS = 15
VERSION_BITS = 18
VERSION_INFO_MIN = 7


class Module(IntEnum):
    UNSET = -1
    LIGHT = 0
    DARK = 1


def new_matrix(version: int) -> np.ndarray:
    n = symbol_size(version)
    return np.full((n, n), Module.UNSET, dtype=np.int8)


def _finder_pattern() -> np.ndarray:
    # 9x9 including the one-module light separator ring.
    pattern = np.full((FINDER_SIZE + 2, FINDER_SIZE + 2), Module.LIGHT, dtype=np.int8)
    core = pattern[1:-1, 1:-1]
    core[[0, -1], :] = Module.DARK
    core[:, [0, -1]] = Module.DARK
    core[2:5, 2:5] = Module.DARK
    return pattern


def place_finder(grid: np.ndarray, row: int, col: int) -> None:
    """Stamp a finder pattern whose top-left dark corner is at (row, col)."""

    n = grid.shape[0]
    pattern = _finder_pattern()
    r0, c0 = row - 1, col - 1
    rs, cs = max(r0, 0), max(c0, 0)
    re, ce = min(r0 + pattern.shape[0], n), min(c0 + pattern.shape[1], n)
    grid[rs:re, cs:ce] = pattern[rs - r0 : re - r0, cs - c0 : ce - c0]


def place_finders(grid: np.ndarray) -> None:
    n = grid.shape[0]
    place_finder(grid, 0, 0)
    place_finder(grid, 0, n - FINDER_SIZE)
    place_finder(grid, n - FINDER_SIZE, 0)


def place_alignment(grid: np.ndarray, version: int) -> None:
    """Stamp 5x5 alignment patterns, skipping centers that are already set."""

    positions = ALIGNMENT_POSITIONS[version]
    for row in positions:
        for col in positions:
            if grid[row, col] != Module.UNSET:
                continue
            block = grid[row - 2 : row + 3, col - 2 : col + 3]
            block[:, :] = Module.DARK
            block[1:4, 1:4] = Module.LIGHT
            block[2, 2] = Module.DARK


def place_timing(grid: np.ndarray) -> None:
    n = grid.shape[0]
    for i in range(FINDER_SIZE + 1, n - FINDER_SIZE - 1):
        value = Module.DARK if i % 2 == 0 else Module.LIGHT
        if grid[i, TIMING_INDEX] == Module.UNSET:
            grid[i, TIMING_INDEX] = value
        if grid[TIMING_INDEX, i] == Module.UNSET:
            grid[TIMING_INDEX, i] = value


def format_positions(n: int) -> Iterator[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """Yield ((row, col) vertical, (row, col) horizontal) per format bit index."""

    for i in range(FORMAT_BITS):
        if i < 6:
            vertical = (i, 8)
        elif i < 8:
            vertical = (i + 1, 8)
        else:
            vertical = (n - FORMAT_BITS + i, 8)

        if i < 8:
            horizontal = (8, n - i - 1)
        elif i < 9:
            horizontal = (8, FORMAT_BITS - i)
        else:
            horizontal = (8, FORMAT_BITS - i - 1)
        yield vertical, horizontal


def place_format(grid: np.ndarray, ec_level: ECLevel | str, mask: int) -> None:
    """Write (or rewrite) the two copies of the format word."""

    level = ECLevel.coerce(ec_level)
    bits = word_to_bits(bch_format_bits(int(level), mask), FORMAT_BITS)
    for bit, (vertical, horizontal) in zip(bits, format_positions(grid.shape[0])):
        value = Module.DARK if bit else Module.LIGHT
        grid[vertical] = value
        grid[horizontal] = value


def place_version(grid: np.ndarray, version: int) -> None:
    if version < VERSION_INFO_MIN:
        return
    n = grid.shape[0]
    bits = word_to_bits(bch_version_bits(version), VERSION_BITS)
    for i, bit in enumerate(bits):
        value = Module.DARK if bit else Module.LIGHT
        grid[i // 3, i % 3 + n - 11] = value
        grid[i % 3 + n - 11, i // 3] = value


def place_dark_module(grid: np.ndarray) -> None:
    grid[grid.shape[0] - 8, 8] = Module.DARK


def build_skeleton(version: int, ec_level: ECLevel | str, mask: int = 0) -> np.ndarray:
    """Return a matrix with every function pattern set and data cells UNSET."""

    grid = new_matrix(version)
    place_finders(grid)
    place_alignment(grid, version)
    place_timing(grid)
    place_format(grid, ec_level, mask)
    place_version(grid, version)
    place_dark_module(grid)
    return grid


def place_data(grid: np.ndarray, codewords: np.ndarray) -> np.ndarray:
    """Fill UNSET cells with codeword bits in zigzag order.

    Returns the boolean data-region mask. Cells past the end of the stream
    are light.
    """

    n = grid.shape[0]
    bits = np.unpackbits(np.asarray(codewords, dtype=np.uint8))
    region = grid == Module.UNSET

    bit_index = 0
    row = n - 1
    step = -1
    col = n - 1
    while col > 0:
        if col == TIMING_INDEX:
            col -= 1
        while True:
            for c in (col, col - 1):
                if grid[row, c] != Module.UNSET:
                    continue
                dark = bit_index < bits.size and bits[bit_index] == 1
                grid[row, c] = Module.DARK if dark else Module.LIGHT
                bit_index += 1
            row += step
            if row < 0 or row >= n:
                row -= step
                step = -step
                break
        col -= 2
    return region


def finalize(grid: np.ndarray) -> np.ndarray:
    """Collapse a fully decided tri-state matrix to booleans (True = dark)."""

    if (grid == Module.UNSET).any():
        raise ValueError("matrix still has unset modules")
    return grid == Module.DARK


__all__ = [
    "Module",
    "new_matrix",
    "place_finder",
    "place_finders",
    "place_alignment",
    "place_timing",
    "format_positions",
    "place_format",
    "place_version",
    "place_dark_module",
    "build_skeleton",
    "place_data",
    "finalize",
]
