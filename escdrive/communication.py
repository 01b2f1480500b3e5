"""Throttle input from a flight controller, as PWM pulses or DShot frames.

Edges of the input signal are timestamped with a free-running 16-bit timer.
For PWM the timer ticks once per microsecond and a pulse of 1500 to 2000 us
maps linearly onto zero to full speed. For DShot the timer ticks four times
per microsecond; sixteen pulses form a frame whose throttle 48 to 2047 maps
onto zero to full speed.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Optional

from escdrive.dshot import DSHOT_BIT_COUNT, DShotType, deserialize_pulse_widths

PWM_BUFFER_SIZE = 2
DSHOT_BUFFER_SIZE = 2 * DSHOT_BIT_COUNT
DSHOT_US_FACTOR = 4
"""Timer ticks per microsecond when receiving DShot."""

PWM_MIN_PULSE_US = 1500
PWM_MAX_PULSE_US = 2000
DSHOT_MIN_THROTTLE = 48
DSHOT_THROTTLE_SPAN = 2000
RAMP_DURATION_MS = 1

_UINT16 = 0xFFFF
_UINT32 = 0xFFFFFFFF


class CommunicationType(IntEnum):
    """How the throttle is encoded on the input line."""

    PWM = 0
    DSHOT = 1


def _wrap16(value: int) -> int:
    return ((value + 0x8000) & _UINT16) - 0x8000


def _tdiv(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def timer_prescaler(comm_type: CommunicationType, core_clock: int) -> int:
    """Prescaler of the capture timer for the given input type."""
    if comm_type is CommunicationType.PWM:
        divisor = 1_000_000
    elif comm_type is CommunicationType.DSHOT:
        divisor = DSHOT_US_FACTOR * 1_000_000
    else:
        raise ValueError(f"unknown communication type {comm_type!r}")
    return (core_clock // divisor - 1) & _UINT32


def pwm_target_speed(pulse_width: int, max_speed_unit: int) -> Optional[int]:
    """Speed reference for a PWM pulse width in microseconds.

    Pulses outside 1500 to 2000 us give None.
    """
    if not PWM_MIN_PULSE_US <= pulse_width <= PWM_MAX_PULSE_US:
        return None
    span = PWM_MAX_PULSE_US - PWM_MIN_PULSE_US
    return _wrap16(_tdiv((pulse_width - PWM_MIN_PULSE_US) * max_speed_unit, span))


def dshot_target_speed(throttle: int, max_speed_unit: int) -> Optional[int]:
    """Speed reference for a DShot throttle value; None for command values."""
    if throttle < DSHOT_MIN_THROTTLE:
        return None
    return _wrap16(
        _tdiv((throttle - DSHOT_MIN_THROTTLE) * max_speed_unit, DSHOT_THROTTLE_SPAN)
    )


class ThrottleReceiver:
    """Collects input edges and turns complete pulses into speed references.

    ``on_edge`` is fed from the edge interrupt, ``update`` from the main loop.
    When a new speed reference is found, ``on_speed`` is called with the
    speed and the ramp duration in milliseconds.
    """

    def __init__(
        self,
        comm_type: CommunicationType,
        max_speed_unit: int,
        on_speed: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self.comm_type = CommunicationType(comm_type)
        self.max_speed_unit = max_speed_unit
        self.on_speed = on_speed

        self._pwm_counters = [0] * PWM_BUFFER_SIZE
        self._pwm_head = 0
        self._pwm_high = False
        self._pwm_pulse_width = 0
        self._pwm_ready = False
        self._last_pulse_width = 0

        self._dshot_counters = [0] * DSHOT_BUFFER_SIZE
        self._dshot_head = 0
        self._dshot_high = False
        self._dshot_ready = False

    def on_edge(self, counter: int, level: bool) -> None:
        """Record an edge seen at timer value ``counter``; ``level`` is the new line state."""
        counter &= _UINT16
        if self.comm_type is CommunicationType.PWM:
            self._pwm_edge(counter, level)
        else:
            self._dshot_edge(counter, level)

    def _pwm_edge(self, counter: int, level: bool) -> None:
        if not self._pwm_high and level:
            self._pwm_high = True
            self._pwm_counters[self._pwm_head] = counter
            self._pwm_head += 1
        elif self._pwm_high and not level:
            self._pwm_high = False
            self._pwm_counters[self._pwm_head] = counter
            self._pwm_head += 1
        if self._pwm_head >= PWM_BUFFER_SIZE:
            self._pwm_head = 0
            self._pwm_pulse_width = (
                self._pwm_counters[1] - self._pwm_counters[0]
            ) & _UINT16
            self._pwm_ready = True

    def _dshot_edge(self, counter: int, level: bool) -> None:
        if self._dshot_ready:
            return
        if not self._dshot_high and level:
            self._dshot_high = True
            self._dshot_counters[self._dshot_head] = counter
            self._dshot_head += 1
        elif self._dshot_high and not level:
            self._dshot_high = False
            self._dshot_counters[self._dshot_head] = counter
            self._dshot_head += 1
        if self._dshot_head >= DSHOT_BUFFER_SIZE:
            self._dshot_head = 0
            self._dshot_ready = True

    def update(self) -> Optional[int]:
        """Process a completed pulse or frame; return the new speed reference, if any."""
        if self.comm_type is CommunicationType.PWM:
            if not self._pwm_ready:
                return None
            self._pwm_ready = False
            speed = self._pwm_speed()
        else:
            if not self._dshot_ready:
                return None
            self._dshot_ready = False
            speed = self._dshot_speed()
        if speed is not None and self.on_speed is not None:
            self.on_speed(speed, RAMP_DURATION_MS)
        return speed

    def _pwm_speed(self) -> Optional[int]:
        current = self._pwm_pulse_width
        if self._last_pulse_width == current:
            return None
        self._last_pulse_width = current
        return pwm_target_speed(current, self.max_speed_unit)

    def _dshot_speed(self) -> Optional[int]:
        edges = self._dshot_counters
        widths = [
            _tdiv(falling - rising, DSHOT_US_FACTOR) & _UINT16
            for rising, falling in zip(edges[0::2], edges[1::2])
        ]
        packet = deserialize_pulse_widths(widths, DShotType.DSHOT150)
        if not packet.crc_valid():
            return None
        return dshot_target_speed(packet.throttle, self.max_speed_unit)