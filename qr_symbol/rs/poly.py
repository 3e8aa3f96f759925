"""Polynomial arithmetic over GF(256), most significant coefficient first."""

from __future__ import annotations

import functools
from typing import Iterable

import numpy as np

from .galois import gexp, glog


def make_poly(coeffs: Iterable[int], shift: int = 0) -> np.ndarray:
    """Strip leading zeros from `coeffs` and append `shift` zero terms."""

    arr = np.asarray(list(coeffs), dtype=np.int32)
    if arr.ndim != 1:
        raise ValueError("coefficients must be 1D")
    if shift < 0:
        raise ValueError("shift must be non-negative")
    nonzero = np.flatnonzero(arr)
    if nonzero.size == 0:
        arr = np.zeros(1, dtype=np.int32)
    else:
        arr = arr[nonzero[0] :]
    if shift:
        arr = np.concatenate([arr, np.zeros(shift, dtype=np.int32)])
    return arr


def poly_multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Convolve `a` and `b` over GF(256)."""

    result = np.zeros(a.size + b.size - 1, dtype=np.int32)
    for i, ai in enumerate(a):
        if ai == 0:
            continue
        log_ai = glog(ai)
        for j, bj in enumerate(b):
            if bj == 0:
                continue
            result[i + j] ^= gexp(log_ai + glog(bj))
    return make_poly(result)


def poly_mod(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Return the remainder of `a` divided by `b` over GF(256)."""

    b = make_poly(b)
    if b[0] == 0:
        raise ValueError("divisor must be a non-zero polynomial")
    log_b = np.array([glog(c) if c else -1 for c in b], dtype=np.int32)

    rem = make_poly(a)
    while rem.size >= b.size:
        if rem[0] == 0:
            # make_poly only leaves a leading zero on the zero polynomial
            break
        ratio = glog(rem[0]) - log_b[0]
        rem = rem.copy()
        for i in range(b.size):
            if log_b[i] >= 0:
                rem[i] ^= gexp(log_b[i] + ratio)
        rem = make_poly(rem)
    return rem


@functools.lru_cache(maxsize=None)
def _generator_poly(ec_count: int) -> tuple:
    poly = make_poly([1])
    for i in range(ec_count):
        poly = poly_multiply(poly, make_poly([1, gexp(i)]))
    return tuple(int(c) for c in poly)


def generator_poly(ec_count: int) -> np.ndarray:
    """Return the RS generator polynomial prod(x - alpha^i), i < `ec_count`."""

    if ec_count <= 0:
        raise ValueError("ec_count must be positive")
    return np.array(_generator_poly(ec_count), dtype=np.int32)


__all__ = ["make_poly", "poly_multiply", "poly_mod", "generator_poly"]
