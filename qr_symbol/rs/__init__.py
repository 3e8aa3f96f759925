"""GF(256) arithmetic, Reed-Solomon blocks and BCH metadata codes."""

from .galois import gexp, glog, gmul
from .poly import make_poly, poly_multiply, poly_mod, generator_poly
from .blocks import rs_ec_codewords, split_blocks, interleave, encode_blocks
from .bch import bch_format_bits, bch_version_bits

__all__ = [
    "gexp",
    "glog",
    "gmul",
    "make_poly",
    "poly_multiply",
    "poly_mod",
    "generator_poly",
    "rs_ec_codewords",
    "split_blocks",
    "interleave",
    "encode_blocks",
    "bch_format_bits",
    "bch_version_bits",
]
