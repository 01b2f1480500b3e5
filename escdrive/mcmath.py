"""Fixed-point helpers used by the motor control loop.

Angles are expressed in "s16 degrees": a full turn spans the 16-bit range,
so 16384 is a quarter turn and -32768 is half a turn.
"""

from __future__ import annotations

import math
import struct

SQRT_2 = 1.4142
SQRT_3 = 1.732

INT16_MAX = 32767
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

# atan(2**-i) expressed in s16 degrees, one entry per CORDIC iteration.
_ATAN_STEPS = (8192, 4836, 2555, 1297, 651, 326, 163, 81)

_QUARTER_TURN = 16384


def _wrap16(value: int) -> int:
    """Reduce an integer to the signed 16-bit range, wrapping on overflow."""
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _wrap32(value: int) -> int:
    """Reduce an integer to the signed 32-bit range, wrapping on overflow."""
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _tdiv(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def log2_exact(x: int) -> int:
    """Return log2 of an exact power of two up to 2**15.

    65535 is treated as 2**16; any other value yields -1.
    """
    if x == 65535:
        return 16
    if 1 <= x <= 1 << 15 and x & (x - 1) == 0:
        return x.bit_length() - 1
    return -1


def isqrt32(value: int) -> int:
    """Integer square root of a signed 32-bit value, 0 for negative input."""
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f"value {value} does not fit in a signed 32-bit integer")
    if value < 0:
        return 0
    return math.isqrt(value)


def modulus(alpha: int, beta: int) -> int:
    """Magnitude of the (alpha, beta) vector, saturated to INT16_MAX."""
    total = _wrap32(alpha * alpha + beta * beta)
    return min(isqrt32(total), INT16_MAX)


def phase_computation(bemf_alpha: int, bemf_beta: int) -> int:
    """Electrical angle of a back-EMF vector, by an 8-step CORDIC.

    Returns the angle in s16 degrees.
    """
    if bemf_alpha < 0:
        if bemf_beta < 0:
            # Quadrant III: rotate by +90 degrees into quadrant IV.
            angle = _QUARTER_TURN
            x = -_tdiv(bemf_beta, 2)
            y = _tdiv(bemf_alpha, 2)
        else:
            # Quadrant II: rotate by -90 degrees into quadrant I.
            angle = -_QUARTER_TURN
            x = _tdiv(bemf_beta, 2)
            y = -_tdiv(bemf_alpha, 2)
    else:
        angle = 0
        x = _tdiv(bemf_alpha, 2)
        y = _tdiv(bemf_beta, 2)

    for shift, step in enumerate(_ATAN_STEPS):
        divisor = 1 << shift
        x_old = x
        if y < 0:
            angle = _wrap16(angle + step)
            x = _wrap32(x - _tdiv(y, divisor))
            y = _wrap32(_tdiv(x_old, divisor) + y)
        else:
            angle = _wrap16(angle - step)
            x = _wrap32(x + _tdiv(y, divisor))
            y = _wrap32(_tdiv(-x_old, divisor) + y)

    return _wrap16(-angle)


def float_to_int_bits(x: float) -> int:
    """Bit pattern of ``x`` as an IEEE 754 single-precision float."""
    try:
        packed = struct.pack("<f", x)
    except OverflowError:
        packed = struct.pack("<f", math.copysign(math.inf, x))
    return struct.unpack("<I", packed)[0]