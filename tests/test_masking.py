import numpy as np
import pytest

from qr_symbol.symbol.masking import (
    apply_mask,
    mask_pattern,
    penalty_balance,
    penalty_blocks,
    penalty_finder_like,
    penalty_runs,
    penalty_score,
)


def _checkerboard(n: int) -> np.ndarray:
    rows, cols = np.indices((n, n))
    return (rows + cols) % 2 == 0


def test_mask_formulas():
    np.testing.assert_array_equal(mask_pattern(0, 21), _checkerboard(21))
    m1 = mask_pattern(1, 4)
    assert m1[0].all() and not m1[1].any()
    m2 = mask_pattern(2, 6)
    assert m2[:, 0].all() and m2[:, 3].all() and not m2[:, 1].any()
    m4 = mask_pattern(4, 6)
    assert m4[0, 0] and m4[1, 2] and not m4[2, 0] and not m4[0, 3]
    m5 = mask_pattern(5, 7)
    assert m5[0].all() and m5[:, 0].all() and m5[6, 6] and not m5[1, 1]
    with pytest.raises(ValueError):
        mask_pattern(8, 21)


def test_mask_formulas_3_6_7():
    m3 = mask_pattern(3, 6)
    assert m3[0, 0] and m3[1, 2] and m3[0, 3]
    assert not m3[0, 1] and not m3[2, 2] and not m3[1, 0]

    m6 = mask_pattern(6, 6)
    assert m6[0, 0] and m6[1, 1] and m6[1, 2] and m6[2, 3]
    assert not m6[1, 3] and not m6[1, 4] and not m6[1, 5] and not m6[2, 2]

    m7 = mask_pattern(7, 6)
    assert m7[0, 0] and m7[1, 3] and m7[2, 4] and m7[1, 4]
    assert not m7[0, 1] and not m7[1, 1] and not m7[1, 2] and not m7[2, 2]


def test_all_masks_match_formulas_on_full_grid():
    rows, cols = np.indices((21, 21))
    expected = {
        0: (rows + cols) % 2 == 0,
        1: rows % 2 == 0,
        2: cols % 3 == 0,
        3: (rows + cols) % 3 == 0,
        4: (rows // 2 + cols // 3) % 2 == 0,
        5: (rows * cols) % 6 == 0,
        6: ((rows * cols) % 2 + (rows * cols) % 3) % 2 == 0,
        7: ((rows + cols) % 2 + (rows * cols) % 3) % 2 == 0,
    }
    for mask, grid in expected.items():
        np.testing.assert_array_equal(mask_pattern(mask, 21), grid)


def test_apply_mask_touches_region_only():
    grid = np.zeros((21, 21), dtype=np.int8)
    region = np.zeros((21, 21), dtype=bool)
    region[10:, 10:] = True
    out = apply_mask(grid, region, 1)
    assert not out[:10].any()
    assert not out[:, :10].any()
    assert out[10, 10] == 1 and out[11, 10] == 0
    assert not grid.any()


def test_all_dark_penalties():
    matrix = np.ones((21, 21), dtype=bool)
    assert penalty_runs(matrix) == 42 * (3 + 16)
    assert penalty_blocks(matrix) == 20 * 20 * 3
    assert penalty_finder_like(matrix) == 0
    assert penalty_balance(matrix) == 100
    assert penalty_score(matrix) == 798 + 1200 + 100


def test_checkerboard_scores_zero():
    assert penalty_score(_checkerboard(21)) == 0


def test_run_penalty_counts_each_run():
    matrix = _checkerboard(21)
    matrix[0, :] = [1] * 6 + [0] * 7 + [1, 0] * 4
    # Row 0: runs of 6 and 7; no column run reaches 5.
    assert penalty_runs(matrix) == (3 + 1) + (3 + 2)


def test_finder_like_detected_both_directions():
    matrix = _checkerboard(21)
    matrix[3, :11] = [1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0]
    matrix[5, 10:] = [0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1]
    assert penalty_finder_like(matrix) == 80


def test_balance_steps():
    matrix = np.zeros((10, 10), dtype=bool)
    matrix.flat[:44] = True
    assert penalty_balance(matrix) == 10
    matrix.flat[:46] = True
    assert penalty_balance(matrix) == 0
    matrix.flat[:] = False
    matrix.flat[:60] = True
    assert penalty_balance(matrix) == 20
