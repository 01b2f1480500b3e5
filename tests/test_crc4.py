import pytest
from hypothesis import given
from hypothesis import strategies as st

from escdrive.crc4 import check_header_crc, compute_header_crc

payloads = st.integers(min_value=0, max_value=0x0FFFFFFF)


def test_zero_header_has_zero_crc():
    assert compute_header_crc(0) == 0
    assert check_header_crc(0)


def test_worked_example():
    assert compute_header_crc(0x00000001) == 0x10000001


@given(payloads)
def test_computed_header_checks(payload):
    assert check_header_crc(compute_header_crc(payload))


@given(payloads)
def test_low_bits_are_preserved(payload):
    assert compute_header_crc(payload) & 0x0FFFFFFF == payload


@given(payloads, st.integers(min_value=0, max_value=31))
def test_single_bit_error_is_detected(payload, bit):
    header = compute_header_crc(payload)
    assert not check_header_crc(header ^ (1 << bit))


def test_existing_top_bits_are_kept():
    assert compute_header_crc(0xF0000000) == 0xF0000000


@pytest.mark.parametrize("header", [-1, 1 << 32])
def test_out_of_range_header_rejected(header):
    with pytest.raises(ValueError):
        compute_header_crc(header)
    with pytest.raises(ValueError):
        check_header_crc(header)