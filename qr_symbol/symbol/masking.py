"""Data masks, penalty scoring and mask selection."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .capacity import ECLevel
from .matrix import finalize, place_format

NUM_MASKS = 8

RUN_THRESHOLD = 5
RUN_BASE_PENALTY = 3
BLOCK_PENALTY = 3
FINDER_LIKE_PENALTY = 40
BALANCE_PENALTY = 10

_FINDER_LIKE = np.array([1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0], dtype=bool)
_FINDER_LIKE_PATTERNS = (_FINDER_LIKE, _FINDER_LIKE[::-1])

_MASK_FUNCTIONS: Dict[int, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    0: lambda r, c: (r + c) % 2 == 0,
    1: lambda r, c: r % 2 == 0,
    2: lambda r, c: c % 3 == 0,
    3: lambda r, c: (r + c) % 3 == 0,
    4: lambda r, c: (r // 2 + c // 3) % 2 == 0,
    5: lambda r, c: (r * c) % 2 + (r * c) % 3 == 0,
    6: lambda r, c: ((r * c) % 2 + (r * c) % 3) % 2 == 0,
    7: lambda r, c: ((r * c) % 3 + (r + c) % 2) % 2 == 0,
}


def mask_pattern(mask: int, n: int) -> np.ndarray:
    """Return the n x n boolean grid where mask `mask` inverts a module."""

    if mask not in _MASK_FUNCTIONS:
        raise ValueError(f"mask must be in [0, {NUM_MASKS - 1}], got {mask}")
    rows, cols = np.indices((n, n))
    return _MASK_FUNCTIONS[mask](rows, cols)


def apply_mask(grid: np.ndarray, region: np.ndarray, mask: int) -> np.ndarray:
    """Return a copy of `grid` with `mask` XOR'd into the data region only."""

    out = grid.copy()
    flip = mask_pattern(mask, grid.shape[0]) & region
    out[flip] = 1 - out[flip]
    return out


# ------------------------------
# Penalty rules
# ------------------------------

def _line_runs(line: np.ndarray) -> np.ndarray:
    changes = np.flatnonzero(line[1:] != line[:-1])
    bounds = np.concatenate([[-1], changes, [line.size - 1]])
    return np.diff(bounds)


def penalty_runs(matrix: np.ndarray) -> int:
    """Rule 1: each run of >= 5 same-color modules in a row or column."""

    score = 0
    for lines in (matrix, matrix.T):
        for line in lines:
            runs = _line_runs(line)
            long_runs = runs[runs >= RUN_THRESHOLD]
            score += int((RUN_BASE_PENALTY + long_runs - RUN_THRESHOLD).sum())
    return score


def penalty_blocks(matrix: np.ndarray) -> int:
    """Rule 2: each uniform 2x2 block."""

    top_left = matrix[:-1, :-1]
    uniform = (
        (top_left == matrix[1:, :-1])
        & (top_left == matrix[:-1, 1:])
        & (top_left == matrix[1:, 1:])
    )
    return BLOCK_PENALTY * int(uniform.sum())


def penalty_finder_like(matrix: np.ndarray) -> int:
    """Rule 3: 1:1:3:1:1 patterns flanked by four light modules."""

    width = _FINDER_LIKE.size
    if matrix.shape[0] < width:
        return 0
    count = 0
    for lines in (matrix, matrix.T):
        windows = sliding_window_view(lines, width, axis=1)
        for pattern in _FINDER_LIKE_PATTERNS:
            count += int((windows == pattern).all(axis=-1).sum())
    return FINDER_LIKE_PENALTY * count


def penalty_balance(matrix: np.ndarray) -> int:
    """Rule 4: 10 points per full 5% the dark ratio deviates from 50%."""

    total = matrix.size
    dark = int(matrix.sum())
    steps = abs(dark * 100 - 50 * total) // (5 * total)
    return BALANCE_PENALTY * steps


def penalty_score(matrix: np.ndarray) -> int:
    matrix = np.asarray(matrix, dtype=bool)
    return (
        penalty_runs(matrix)
        + penalty_blocks(matrix)
        + penalty_finder_like(matrix)
        + penalty_balance(matrix)
    )


# ------------------------------
# Selection
# ------------------------------

def render_masked(
    grid: np.ndarray, region: np.ndarray, ec_level: ECLevel | str, mask: int
) -> np.ndarray:
    """Apply `mask` to a placed matrix, stamp its format word and finalize."""

    trial = apply_mask(grid, region, mask)
    place_format(trial, ec_level, mask)
    return finalize(trial)


def mask_penalties(
    grid: np.ndarray, region: np.ndarray, ec_level: ECLevel | str, workers: int = 1
) -> List[Tuple[int, np.ndarray]]:
    """Render and score all eight masks; entry i belongs to mask i."""

    def _trial(mask: int) -> Tuple[int, np.ndarray]:
        matrix = render_masked(grid, region, ec_level, mask)
        return penalty_score(matrix), matrix

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(_trial, range(NUM_MASKS)))
    return [_trial(mask) for mask in range(NUM_MASKS)]


def select_mask(
    grid: np.ndarray, region: np.ndarray, ec_level: ECLevel | str, workers: int = 1
) -> Tuple[int, np.ndarray, List[int]]:
    """Pick the lowest-penalty mask (lowest id on ties).

    Returns the mask id, its finalized boolean matrix and all eight scores.
    """

    trials = mask_penalties(grid, region, ec_level, workers=workers)
    scores = [score for score, _ in trials]
    best = min(range(NUM_MASKS), key=lambda m: (scores[m], m))
    return best, trials[best][1], scores


__all__ = [
    "NUM_MASKS",
    "mask_pattern",
    "apply_mask",
    "penalty_runs",
    "penalty_blocks",
    "penalty_finder_like",
    "penalty_balance",
    "penalty_score",
    "render_masked",
    "mask_penalties",
    "select_mask",
]
