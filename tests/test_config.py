import pytest
from hypothesis import given
from hypothesis import strategies as st

from escdrive.config import (
    CONTROL_BOARD,
    FIRMWARE_NAME,
    ApplicationConfigRegister,
    ClockConfig,
    MotorConfigRegister,
    MotorParameters,
    PowerStageParameters,
)


def test_motor_defaults_match_register_description():
    motor = MotorParameters()
    register = MotorConfigRegister()
    assert register.pole_pairs == motor.pole_pairs == 7
    assert register.rs == motor.rs_ohm
    assert register.ld == motor.ls_henry
    assert register.rated_flux == motor.voltage_constant
    assert register.max_current == motor.nominal_current_a


def test_application_register_matches_motor_limits():
    app = ApplicationConfigRegister()
    assert app.max_mechanical_speed == MotorParameters().max_speed_rpm
    assert app.nominal_voltage == PowerStageParameters().nominal_bus_voltage_v


def test_motor_name_and_board_strings():
    assert MotorConfigRegister().name == "Bull Running BR2804-1700"
    assert CONTROL_BOARD == "STEVAL-SPIN3202"
    assert FIRMWARE_NAME.startswith("ST MC SDK\t")


def test_clock_timer_frequencies_agree():
    clocks = ClockConfig()
    assert clocks.sysclk_freq_hz == 48000000
    assert clocks.ref_tim_clk_hz == clocks.ref_tim_clk_mhz * 1_000_000
    assert clocks.hall_tim_clk_hz == clocks.sysclk_freq_hz


def test_temperature_at_reference_point():
    stage = PowerStageParameters()
    assert stage.temperature_to_voltage(stage.t0_c) == pytest.approx(stage.v0_v)
    assert stage.voltage_to_temperature(stage.v0_v) == pytest.approx(stage.t0_c)


@given(st.floats(min_value=-40, max_value=150, allow_nan=False))
def test_temperature_round_trip(celsius):
    stage = PowerStageParameters()
    volts = stage.temperature_to_voltage(celsius)
    assert stage.voltage_to_temperature(volts) == pytest.approx(celsius, abs=1e-9)


@given(
    st.floats(min_value=-40, max_value=150, allow_nan=False),
    st.floats(min_value=0.1, max_value=50, allow_nan=False),
)
def test_temperature_voltage_increases_with_temperature(celsius, delta):
    stage = PowerStageParameters()
    assert stage.temperature_to_voltage(celsius + delta) > stage.temperature_to_voltage(
        celsius
    )


def test_zero_slope_cannot_be_inverted():
    stage = PowerStageParameters(dv_dt=0)
    with pytest.raises(ValueError):
        stage.voltage_to_temperature(1.0)


def test_phase_current_full_scale():
    stage = PowerStageParameters(rshunt_ohm=0.5, amplification_gain=2)
    assert stage.phase_current_to_digital(1.0, 2.0) == 32767


def test_phase_current_zero():
    assert PowerStageParameters().phase_current_to_digital(0.0, 3.3) == 0


@given(st.floats(min_value=0, max_value=30, allow_nan=False))
def test_phase_current_sign_symmetry(amps):
    stage = PowerStageParameters()
    assert stage.phase_current_to_digital(-amps, 3.3) == -stage.phase_current_to_digital(
        amps, 3.3
    )


@given(
    st.floats(min_value=0, max_value=30, allow_nan=False),
    st.floats(min_value=0.01, max_value=10, allow_nan=False),
)
def test_phase_current_monotonic(amps, delta):
    stage = PowerStageParameters()
    assert stage.phase_current_to_digital(amps + delta, 3.3) >= stage.phase_current_to_digital(
        amps, 3.3
    )


@pytest.mark.parametrize("supply", [0.0, -3.3])
def test_phase_current_rejects_bad_supply(supply):
    with pytest.raises(ValueError):
        PowerStageParameters().phase_current_to_digital(1.0, supply)