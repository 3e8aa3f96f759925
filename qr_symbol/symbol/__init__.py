"""QR symbol construction: capacity tables, bit stream, matrix, masks, encode."""

from .capacity import (
    CapacityOverflowError,
    ECLevel,
    RSBlock,
    byte_capacity,
    rs_blocks,
    select_version,
    symbol_size,
)
from .bitstream import BitBuffer, encode_data
from .matrix import Module, build_skeleton, place_data, finalize
from .masking import mask_penalties, penalty_score, select_mask
from .encode import QRSymbol, encode, encode_codewords

__all__ = [
    "CapacityOverflowError",
    "ECLevel",
    "RSBlock",
    "byte_capacity",
    "rs_blocks",
    "select_version",
    "symbol_size",
    "BitBuffer",
    "encode_data",
    "Module",
    "build_skeleton",
    "place_data",
    "finalize",
    "mask_penalties",
    "penalty_score",
    "select_mask",
    "QRSymbol",
    "encode",
    "encode_codewords",
]
