"""GF(256) exponent/logarithm tables for Reed-Solomon arithmetic."""

from __future__ import annotations

import functools
from typing import Tuple

import numpy as np

PRIMITIVE_POLY = 0x11D  # x^8 + x^4 + x^3 + x^2 + 1
FIELD_ORDER = 255


@functools.lru_cache(maxsize=None)
def _tables() -> Tuple[np.ndarray, np.ndarray]:
    exp_table = np.zeros(FIELD_ORDER + 1, dtype=np.int32)
    log_table = np.zeros(FIELD_ORDER + 1, dtype=np.int32)

    x = 1
    for i in range(FIELD_ORDER):
        exp_table[i] = x
        log_table[x] = i
        x <<= 1
        if x & 0x100:
            x ^= PRIMITIVE_POLY
    # alpha^255 == alpha^0
    exp_table[FIELD_ORDER] = exp_table[0]

    exp_table.setflags(write=False)
    log_table.setflags(write=False)
    return exp_table, log_table


def exp_table() -> np.ndarray:
    """Return the read-only table of alpha^i for i in [0, 255]."""

    return _tables()[0]


def log_table() -> np.ndarray:
    """Return the read-only discrete log table (entry 0 is meaningless)."""

    return _tables()[1]


def gexp(n: int) -> int:
    """Return alpha^n in GF(256); any integer exponent is reduced modulo 255."""

    return int(_tables()[0][int(n) % FIELD_ORDER])


def glog(n: int) -> int:
    """Return the discrete log of `n`; undefined for zero."""

    n = int(n)
    if n < 1 or n > FIELD_ORDER:
        raise ValueError(f"glog({n}) is undefined in GF(256)")
    return int(_tables()[1][n])


def gmul(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return gexp(glog(a) + glog(b))


__all__ = ["PRIMITIVE_POLY", "exp_table", "log_table", "gexp", "glog", "gmul"]
