"""DShot digital throttle protocol.

A DShot frame is a 16-bit word sent most significant bit first::

    | throttle (11 bits) | telemetry (1 bit) | crc (4 bits) |

Throttle values 0 to 47 are reserved for special commands. The checksum is
the XOR of the three nibbles of the 12-bit throttle/telemetry field.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum

DSHOT_BIT_COUNT = 16
DSHOT_AUTO_RELOAD = 30
"""Timer auto-reload value used when the line is driven as a PWM output."""

DESERIALIZE_THRESHOLD = 60
"""Sample value at or above which a bit is read as a logic one."""

_THROTTLE_MASK = 0x7FF
_NIBBLE = 0xF
_UINT16 = 0xFFFF
_UINT32 = 0xFFFFFFFF

_HIGH_DUTY = 0.75
_LOW_DUTY = 0.3


class DShotType(Enum):
    """DShot variant; the value is the bit rate in bits per second."""

    DSHOT150 = 150_000
    DSHOT300 = 300_000
    DSHOT600 = 600_000
    DSHOT1200 = 1_200_000

    @property
    def bitrate(self) -> int:
        return self.value


# Pulse width, in microseconds, at or above which a bit is a logic one.
_PULSE_THRESHOLD_US = {
    DShotType.DSHOT150: 4,
    DShotType.DSHOT300: 2,
    DShotType.DSHOT600: 1,
    DShotType.DSHOT1200: 0,
}


def packet_crc(value: int) -> int:
    """XOR checksum of the low three nibbles of ``value``."""
    crc = 0
    for shift in (0, 4, 8):
        crc ^= (value >> shift) & _NIBBLE
    return crc


@dataclass(frozen=True)
class DShotPacket:
    """Fields of a decoded DShot frame."""

    throttle: int = 0
    telemetry: int = 0
    crc: int = 0

    def crc_valid(self) -> bool:
        """True when the checksum matches the throttle and telemetry fields."""
        data = ((self.throttle << 1) | self.telemetry) & _UINT16
        return packet_crc(data) == self.crc


def _unpack(word: int) -> DShotPacket:
    return DShotPacket(
        throttle=(word >> 5) & _THROTTLE_MASK,
        telemetry=(word >> 4) & 0x01,
        crc=word & _NIBBLE,
    )


def _bits_msb_first(word: int):
    for position in range(DSHOT_BIT_COUNT):
        yield bool(word & (1 << (DSHOT_BIT_COUNT - 1 - position)))


def _word_from_bits(bits) -> int:
    word = 0
    for position, bit in enumerate(bits):
        if bit:
            word |= 1 << (DSHOT_BIT_COUNT - 1 - position)
    return word


def build_packet(throttle: int, telemetry: int) -> int:
    """Encode a throttle value and telemetry request into a 16-bit frame."""
    data = ((throttle & _THROTTLE_MASK) << 1) | (telemetry & 0x01)
    return ((data << 4) | packet_crc(data)) & _UINT16


def timer_prescaler(dshot_type: DShotType, core_clock: int) -> int:
    """Timer prescaler giving one timer tick per DShot bit period."""
    return (core_clock // dshot_type.bitrate - 1) & _UINT32


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def duty_buffer(packet: int, auto_reload: int) -> tuple[int, ...]:
    """Compare values, one per bit, that shape ``packet`` as PWM pulses.

    A one is a pulse of about 75 % of the period, a zero about 30 %.
    """
    period = _f32(float(auto_reload))
    high = int(_f32(_f32(_HIGH_DUTY) * period)) & _UINT16
    low = int(_f32(_f32(_LOW_DUTY) * period)) & _UINT16
    return tuple(high if bit else low for bit in _bits_msb_first(packet))


def _check_length(data) -> None:
    if len(data) != DSHOT_BIT_COUNT:
        raise ValueError(
            f"a DShot frame has {DSHOT_BIT_COUNT} bits, got {len(data)} samples"
        )


def deserialize(data) -> DShotPacket:
    """Decode a frame from 16 duty samples, most significant bit first."""
    _check_length(data)
    return _unpack(_word_from_bits(sample >= DESERIALIZE_THRESHOLD for sample in data))


def deserialize_pulse_widths(data, dshot_type: DShotType) -> DShotPacket:
    """Decode a frame from 16 high-pulse widths measured in microseconds."""
    _check_length(data)
    threshold = _PULSE_THRESHOLD_US[dshot_type]
    return _unpack(_word_from_bits(width >= threshold for width in data))