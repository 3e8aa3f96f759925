"""Public QR encoding entry points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from .. import config
from ..rs.blocks import encode_blocks
from .bitstream import encode_data
from .capacity import ECLevel, rs_blocks, select_version
from .masking import select_mask
from .matrix import build_skeleton, place_data

Payload = Union[bytes, bytearray, memoryview, str]


@dataclass(frozen=True)
class QRSymbol:
    matrix: np.ndarray  # (size, size) bool, True = dark
    size: int
    version: int
    ec_level: ECLevel
    mask: int
    penalties: Tuple[int, ...] = ()

    def dark_ratio(self) -> float:
        return float(self.matrix.mean())


def _as_bytes(payload: Payload) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)
    raise TypeError(f"payload must be bytes or str, got {type(payload).__name__}")


def encode_codewords(
    payload: Payload,
    ec_level: ECLevel | str | None = None,
    cfg: config.EncoderConfig | None = None,
) -> Tuple[int, np.ndarray]:
    """Return (version, interleaved data+EC codewords) for `payload`."""

    cfg = cfg or config.DEFAULTS
    data = _as_bytes(payload)
    level = ECLevel.coerce(ec_level if ec_level is not None else cfg.ec_level)

    version = select_version(len(data), level, max_version=cfg.max_version)
    data_codewords = encode_data(data, version, level)
    block_sizes = [(b.data_codewords, b.ec_codewords) for b in rs_blocks(version, level)]
    return version, encode_blocks(data_codewords, block_sizes)


def encode(
    payload: Payload,
    ec_level: ECLevel | str | None = None,
    cfg: config.EncoderConfig | None = None,
) -> QRSymbol:
    """Encode `payload` in byte mode and return the finished symbol.

    Raises CapacityOverflowError when the payload exceeds the largest
    supported version at the requested level.
    """

    cfg = cfg or config.DEFAULTS
    level = ECLevel.coerce(ec_level if ec_level is not None else cfg.ec_level)
    version, codewords = encode_codewords(payload, level, cfg)

    grid = build_skeleton(version, level)
    region = place_data(grid, codewords)
    mask, matrix, scores = select_mask(grid, region, level, workers=cfg.mask_workers)

    return QRSymbol(
        matrix=matrix,
        size=matrix.shape[0],
        version=version,
        ec_level=level,
        mask=mask,
        penalties=tuple(scores),
    )


__all__ = ["QRSymbol", "encode", "encode_codewords"]
