import math
import struct

import pytest
from hypothesis import given, strategies as st

from escdrive.mcmath import (
    float_to_int_bits,
    isqrt32,
    log2_exact,
    modulus,
    phase_computation,
)

INT16 = st.integers(min_value=-32768, max_value=32767)


@pytest.mark.parametrize("k", range(16))
def test_log2_exact_powers_of_two(k):
    assert log2_exact(2**k) == k


def test_log2_exact_full_range_value():
    assert log2_exact(65535) == 16


@pytest.mark.parametrize("x", [0, 3, 6, 100, 65536, -2])
def test_log2_exact_non_powers(x):
    assert log2_exact(x) == -1


def test_isqrt32_negative_is_zero():
    assert isqrt32(-1) == 0
    assert isqrt32(-(2**31)) == 0


def test_isqrt32_rejects_out_of_range():
    with pytest.raises(ValueError):
        isqrt32(2**31)


@given(st.integers(min_value=0, max_value=2**31 - 1))
def test_isqrt32_bounds(n):
    r = isqrt32(n)
    assert r * r <= n < (r + 1) * (r + 1)


def test_modulus_worked_example():
    assert modulus(3, 4) == 5
    assert modulus(-3, -4) == 5


def test_modulus_saturates():
    assert modulus(32767, 32767) == 32767


@given(INT16, INT16)
def test_modulus_bounds(a, b):
    r = modulus(a, b)
    assert 0 <= r <= 32767
    total = a * a + b * b
    if r < 32767:
        assert r * r <= total < (r + 1) * (r + 1)


def _circular_error(angle, expected):
    diff = (angle - expected) % 65536
    return min(diff, 65536 - diff)


@pytest.mark.parametrize(
    "alpha, beta, expected",
    [
        (100000, 0, 0),
        (0, 100000, 16384),
        (-100000, -100000, -24576),
        (100000, -100000, -8192),
    ],
)
def test_phase_computation_cardinal(alpha, beta, expected):
    assert _circular_error(phase_computation(alpha, beta), expected) <= 150


@given(
    st.floats(min_value=-math.pi, max_value=math.pi),
    st.integers(min_value=5000, max_value=1_000_000),
)
def test_phase_computation_tracks_atan2(theta, radius):
    alpha = round(radius * math.cos(theta))
    beta = round(radius * math.sin(theta))
    expected = math.atan2(beta, alpha) * 32768 / math.pi
    result = phase_computation(alpha, beta)
    assert -32768 <= result <= 32767
    assert _circular_error(result, expected) <= 150


def test_float_to_int_bits_known_patterns():
    assert float_to_int_bits(1.0) == 0x3F800000
    assert float_to_int_bits(0.0) == 0


@given(st.floats(width=32, allow_nan=False))
def test_float_to_int_bits_round_trip(x):
    bits = float_to_int_bits(x)
    assert 0 <= bits < 2**32
    assert struct.unpack("<f", struct.pack("<I", bits))[0] == x


def test_float_to_int_bits_overflow_is_infinity():
    bits = float_to_int_bits(1e300)
    assert math.isinf(struct.unpack("<f", struct.pack("<I", bits))[0])
    neg = float_to_int_bits(-1e300)
    assert struct.unpack("<f", struct.pack("<I", neg))[0] == -math.inf