import numpy as np
import pytest

from qr_symbol import config
from qr_symbol.rs.bch import bch_format_bits
from qr_symbol.symbol.capacity import CapacityOverflowError, ECLevel, byte_capacity
from qr_symbol.symbol.encode import encode, encode_codewords
from qr_symbol.symbol.masking import penalty_score
from qr_symbol.symbol.matrix import format_positions
from qr_symbol.utils.seeding import seed_all


# Reference symbol for encode("HELLO WORLD", "M"): version 1, mask 4.
HELLO_WORLD_M = [
    "111111101100101111111",
    "100000100001001000001",
    "101110100101001011101",
    "101110101001001011101",
    "101110101110101011101",
    "100000101001001000001",
    "111111101010101111111",
    "000000001001100000000",
    "100010111111011111001",
    "000100001011100001111",
    "001111110011011010010",
    "111110001100010000000",
    "111110101010101100110",
    "000000001010111101011",
    "111111101110101011010",
    "100000100101110110011",
    "101110101101011000110",
    "101110100100100011011",
    "101110100111000111000",
    "100000100001010000000",
    "111111101111111110101",
]


def _read_format_word(matrix: np.ndarray) -> int:
    word = 0
    for i, (vertical, _) in enumerate(format_positions(matrix.shape[0])):
        word |= int(matrix[vertical]) << i
    return word


def _is_finder(block: np.ndarray) -> bool:
    ring_outer = block[[0, -1], :].all() and block[:, [0, -1]].all()
    ring_inner = not block[1, 1:-1].any() and not block[-2, 1:-1].any()
    ring_inner = ring_inner and not block[1:-1, 1].any() and not block[1:-1, -2].any()
    return bool(ring_outer and ring_inner and block[2:5, 2:5].all())


@pytest.mark.parametrize("level", ["L", "M", "Q", "H"])
@pytest.mark.parametrize("version", range(1, 11))
def test_side_matches_version(version, level):
    payload = b"a" * byte_capacity(version, level)
    symbol = encode(payload, level)
    assert symbol.version == version
    assert symbol.size == 4 * version + 17
    assert symbol.matrix.shape == (symbol.size, symbol.size)
    assert symbol.matrix.dtype == bool


def test_three_finders_and_timing():
    symbol = encode(b"https://example.com/some/path", "Q")
    m = symbol.matrix
    n = symbol.size
    assert _is_finder(m[:7, :7])
    assert _is_finder(m[:7, n - 7 :])
    assert _is_finder(m[n - 7 :, :7])
    assert not _is_finder(m[n - 7 :, n - 7 :])

    expected = np.array([i % 2 == 0 for i in range(8, n - 8)])
    np.testing.assert_array_equal(m[6, 8 : n - 8], expected)
    np.testing.assert_array_equal(m[8 : n - 8, 6], expected)


def test_hello_world_m():
    symbol = encode("HELLO WORLD", "M")
    assert symbol.version == 1
    assert symbol.size == 21
    assert symbol.ec_level is ECLevel.M
    assert 0.45 <= symbol.dark_ratio() <= 0.55
    assert _read_format_word(symbol.matrix) == bch_format_bits(int(ECLevel.M), symbol.mask)

    version, codewords = encode_codewords(b"HELLO WORLD", "M")
    assert version == 1
    np.testing.assert_array_equal(
        codewords[:16],
        [0x40, 0xB4, 0x84, 0x54, 0xC4, 0xC4, 0xF2, 0x05, 0x74, 0xF5, 0x24, 0xC4, 0x40, 0xEC, 0x11, 0xEC],
    )
    assert codewords.size == 26


def test_hello_world_m_matches_reference_matrix():
    symbol = encode(b"HELLO WORLD", "M")
    expected = np.array([[ch == "1" for ch in row] for row in HELLO_WORLD_M])
    assert symbol.mask == 4
    assert int(symbol.matrix.sum()) == 232
    np.testing.assert_array_equal(symbol.matrix, expected)


def test_deterministic():
    a = encode(b"WIFI:T:WPA;S:home;P:secret;;", "H")
    b = encode(b"WIFI:T:WPA;S:home;P:secret;;", "H")
    np.testing.assert_array_equal(a.matrix, b.matrix)
    assert a.mask == b.mask


def test_str_and_bytes_agree():
    a = encode("café", "L")
    b = encode("café".encode("utf-8"), "L")
    np.testing.assert_array_equal(a.matrix, b.matrix)


def test_selected_mask_has_minimum_penalty():
    seed_all(5)
    for _ in range(12):
        length = int(np.random.randint(1, 120))
        payload = np.random.randint(0, 256, size=length, dtype=np.uint8).tobytes()
        level = ["L", "M", "Q", "H"][int(np.random.randint(0, 4))]
        symbol = encode(payload, level)
        assert len(symbol.penalties) == 8
        assert symbol.penalties[symbol.mask] == min(symbol.penalties)
        assert symbol.mask == symbol.penalties.index(min(symbol.penalties))
        assert penalty_score(symbol.matrix) == symbol.penalties[symbol.mask]


def test_thread_pool_matches_serial():
    cfg = config.get_config()
    cfg.mask_workers = 4
    payload = b"thread pool mask trials" * 3
    np.testing.assert_array_equal(encode(payload, "M", cfg).matrix, encode(payload, "M").matrix)


def test_max_payload_boundary():
    assert byte_capacity(10, "L") == 271
    symbol = encode(b"x" * 271, "L")
    assert symbol.version == 10
    with pytest.raises(CapacityOverflowError):
        encode(b"x" * 272, "L")


def test_overflow_respects_configured_max_version():
    cfg = config.get_config()
    cfg.max_version = 2
    with pytest.raises(CapacityOverflowError):
        encode(b"x" * 40, "L", cfg)


def test_empty_payload_encodes_version_1():
    symbol = encode(b"", "M")
    assert symbol.version == 1
    assert symbol.size == 21
    _, codewords = encode_codewords(b"", "M")
    np.testing.assert_array_equal(codewords[:4], [0x40, 0x00, 0xEC, 0x11])


def test_default_level_comes_from_config():
    symbol = encode(b"default")
    assert symbol.ec_level is ECLevel.coerce(config.DEFAULTS.ec_level)


def test_bad_inputs():
    with pytest.raises(ValueError):
        encode(b"abc", "Z")
    with pytest.raises(TypeError):
        encode(12345, "M")
