import pytest
from hypothesis import given, strategies as st

from escdrive.registers import (
    MOTOR_MASK,
    REG_MASK,
    DataType,
    Register,
    data_type_of,
    element_of,
    extract_motor_id,
    make_id,
)


def test_register_ids_are_unique():
    assert len(Register.__members__) == len(list(Register))
    rebuilt = {make_id(element_of(reg), data_type_of(reg), 0) for reg in Register}
    assert rebuilt == {int(reg) for reg in Register}
    assert len(rebuilt) == len(Register.__members__)


def test_registers_carry_no_motor_bits():
    assert all(reg & MOTOR_MASK == 0 for reg in Register)
    assert all(reg & REG_MASK == reg for reg in Register)
    assert all(extract_motor_id(reg) == MOTOR_MASK for reg in Register)


def test_status_register_fields():
    assert data_type_of(Register.STATUS) is DataType.DATA_8BIT
    assert element_of(Register.STATUS) == 1


def test_speed_kp_register_fields():
    assert data_type_of(Register.SPEED_KP) is DataType.DATA_16BIT
    assert element_of(Register.SPEED_KP) == 2


def test_faults_flags_is_element_zero_32bit():
    assert data_type_of(Register.FAULTS_FLAGS) is DataType.DATA_32BIT
    assert element_of(Register.FAULTS_FLAGS) == 0


def test_string_and_raw_types():
    assert data_type_of(Register.FW_NAME) is DataType.STRING
    assert data_type_of(Register.BEMF_ADC_CONF) is DataType.RAW
    assert element_of(Register.BEMF_ADC_CONF) == 31


def test_make_id_matches_register_table():
    assert make_id(1, DataType.DATA_8BIT, 0) == Register.STATUS
    assert make_id(116, DataType.DATA_32BIT, 0) == Register.RESISTOR_OFFSET
    assert make_id(3, DataType.STRING, 0) == Register.MOTOR_NAME


def test_motor_one_maps_to_index_zero():
    assert extract_motor_id(Register.SPEED_REF | 1) == 0
    assert extract_motor_id(Register.SPEED_REF | 2) == 1


def test_motor_field_zero_wraps():
    assert extract_motor_id(Register.SPEED_REF) == MOTOR_MASK


@given(
    element=st.integers(min_value=0, max_value=0x3FF),
    kind=st.sampled_from(list(DataType)),
    motor=st.integers(min_value=0, max_value=7),
)
def test_make_id_round_trip(element, kind, motor):
    reg_id = make_id(element, kind, motor)
    assert 0 <= reg_id <= 0xFFFF
    assert element_of(reg_id) == element
    assert data_type_of(reg_id) is kind
    assert reg_id & MOTOR_MASK == motor


@given(motor=st.integers(min_value=1, max_value=7))
def test_extract_motor_id_is_one_based(motor):
    assert extract_motor_id(make_id(5, DataType.DATA_16BIT, motor)) == motor - 1


@pytest.mark.parametrize(
    "element, kind, motor",
    [(-1, 1, 0), (0x400, 1, 0), (0, 8, 0), (0, -1, 0), (0, 1, 8), (0, 1, -1)],
)
def test_make_id_rejects_out_of_range_fields(element, kind, motor):
    with pytest.raises(ValueError):
        make_id(element, kind, motor)


@pytest.mark.parametrize("func", [data_type_of, element_of, extract_motor_id])
@pytest.mark.parametrize("bad", [-1, 0x10000])
def test_field_accessors_reject_out_of_range_ids(func, bad):
    with pytest.raises(ValueError):
        func(bad)