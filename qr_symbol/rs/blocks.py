"""Reed-Solomon block encoding and codeword interleaving."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .poly import generator_poly, make_poly, poly_mod


def rs_ec_codewords(data: np.ndarray, ec_count: int) -> np.ndarray:
    """Return the `ec_count` error-correction codewords for one data block."""

    if data.ndim != 1:
        raise ValueError("data must be 1D")
    generator = generator_poly(ec_count)
    remainder = poly_mod(make_poly(data, shift=ec_count), generator)
    ec = np.zeros(ec_count, dtype=np.int32)
    # Remainder loses its leading zeros; right-align it.
    if not (remainder.size == 1 and remainder[0] == 0):
        ec[ec_count - remainder.size :] = remainder
    return ec


def split_blocks(data: np.ndarray, block_sizes: Sequence[Tuple[int, int]]) -> List[np.ndarray]:
    """Cut `data` into consecutive blocks of the given data-codeword counts."""

    expected = sum(size for size, _ in block_sizes)
    if data.size != expected:
        raise ValueError(f"data has {data.size} codewords, blocks expect {expected}")
    blocks = []
    offset = 0
    for size, _ in block_sizes:
        blocks.append(data[offset : offset + size])
        offset += size
    return blocks


def interleave(blocks: Sequence[np.ndarray]) -> np.ndarray:
    """Read blocks column-wise, skipping blocks that are already exhausted."""

    longest = max((block.size for block in blocks), default=0)
    out = [int(block[i]) for i in range(longest) for block in blocks if i < block.size]
    return np.array(out, dtype=np.int32)


def encode_blocks(data: np.ndarray, block_sizes: Sequence[Tuple[int, int]]) -> np.ndarray:
    """Split, protect and interleave data codewords.

    `block_sizes` holds one `(data_codewords, ec_codewords)` pair per block.
    The result is all interleaved data codewords followed by all interleaved
    EC codewords.
    """

    data_blocks = split_blocks(data, block_sizes)
    ec_blocks = [rs_ec_codewords(block, ec) for block, (_, ec) in zip(data_blocks, block_sizes)]
    return np.concatenate([interleave(data_blocks), interleave(ec_blocks)])


__all__ = ["rs_ec_codewords", "split_blocks", "interleave", "encode_blocks"]
