"""Motor, power stage and controller parameters of the drive.

The defaults describe the board and motor the firmware is configured for.
Each class is a frozen dataclass, so a different setup is described by
creating an instance with other values.
"""

from __future__ import annotations

from dataclasses import dataclass

FIRMWARE_NAME = "ST MC SDK\tVer.6.3.2"
CONTROL_BOARD = "STEVAL-SPIN3202"
POWER_BOARD = "STEVAL-SPIN3202"

INT16_FULL_SCALE = 32767
"""Digital value of a 0-to-peak phase current at half the supply voltage."""


@dataclass(frozen=True)
class MotorParameters:
    """Electrical and sensor parameters of the driven motor."""

    pole_pairs: int = 7
    rs_ohm: float = 0.11
    ls_henry: float = 0.000018
    max_speed_rpm: int = 8000
    voltage_constant: float = 1.0
    """Volts RMS phase-to-phase per thousand rpm."""
    nominal_current_a: float = 15
    hall_sensors_placement_deg: int = 120
    hall_phase_shift_deg: int = 300


@dataclass(frozen=True)
class PowerStageParameters:
    """Sensing parameters of the power stage."""

    bemf_on_sensing_divider: float = 5.545455
    vbus_partitioning_factor: float = 0.052164840897235255
    nominal_bus_voltage_v: float = 12
    rshunt_ohm: float = 0.01
    amplification_gain: float = 6.6
    current_ref_divider: float = 3.2
    ocp_internal_ref_mv: int = 250
    v0_v: float = 0.290
    t0_c: float = 25
    dv_dt: float = 0.025
    """Temperature sensor slope in volts per degree Celsius."""
    t_max_c: float = 70

    def temperature_to_voltage(self, celsius: float) -> float:
        """Sensor output voltage at ``celsius``: V = V0 + dV/dT * (T - T0)."""
        return self.v0_v + self.dv_dt * (celsius - self.t0_c)

    def voltage_to_temperature(self, volts: float) -> float:
        """Temperature in Celsius that gives a sensor output of ``volts``."""
        if self.dv_dt == 0:
            raise ValueError("temperature sensor slope is zero")
        return self.t0_c + (volts - self.v0_v) / self.dv_dt

    def phase_current_to_digital(self, amps: float, supply_voltage: float) -> int:
        """Digital value of a 0-to-peak phase current in amperes.

        value = amps * 32767 * Rshunt * gain / (supply_voltage / 2),
        truncated toward zero.
        """
        if supply_voltage <= 0:
            raise ValueError(f"supply voltage must be positive, got {supply_voltage}")
        return int(
            amps
            * INT16_FULL_SCALE
            * self.rshunt_ohm
            * self.amplification_gain
            / (supply_voltage / 2)
        )


@dataclass(frozen=True)
class ClockConfig:
    """CPU, timer and ADC clock settings of the controller."""

    sysclk_freq_hz: int = 48_000_000
    tim_clock_divider: int = 1
    adv_tim_clk_mhz: int = 48
    adc_clk_mhz: int = 14
    hall_tim_clk_hz: int = 48_000_000
    ref_tim_clk_hz: int = 48_000_000
    ref_tim_clk_mhz: int = 48
    adc_trig_conv_latency_cycles: int = 4
    adc_sar_cycles: float = 12.5
    vbus_sw_filter_bw_factor: int = 10


@dataclass(frozen=True)
class MotorConfigRegister:
    """Motor description reported through the configuration registers."""

    pole_pairs: int = 7
    rated_flux: float = 1.0
    rs: float = 0.11
    ls: float = 0.000018 * 1.000
    ld: float = 0.000018
    max_current: float = 15
    name: str = "Bull Running BR2804-1700"


@dataclass(frozen=True)
class ApplicationConfigRegister:
    """Application limits reported through the configuration registers."""

    max_mechanical_speed: int = 8000
    nominal_current: float = 15
    nominal_voltage: float = 12