"""4-bit header checksum of the serial packet protocol.

The generator polynomial is x^4 + x + 1. Header nibbles are processed from
the least significant to the most significant one; the checksum occupies
bits 28 to 31 of the 32-bit header.
"""

from __future__ import annotations

_UINT32 = 0xFFFFFFFF
_PAYLOAD_MASK = 0x0FFFFFFF

_LOOKUP4 = (
    0x00, 0x07, 0x0E, 0x09, 0x0B, 0x0C, 0x05, 0x02,
    0x01, 0x06, 0x0F, 0x08, 0x0A, 0x0D, 0x04, 0x03,
)

# One byte at a time: low nibble first, then high nibble.
_LOOKUP8 = tuple(_LOOKUP4[_LOOKUP4[b & 0xF] ^ (b >> 4)] for b in range(256))


def _check(header: int) -> None:
    if not 0 <= header <= _UINT32:
        raise ValueError(f"header {header} does not fit in 32 bits")


def compute_header_crc(header: int) -> int:
    """Return ``header`` with the checksum of its low 28 bits OR-ed into bits 28-31."""
    _check(header)
    payload = header & _PAYLOAD_MASK
    crc = 0
    for shift in (0, 8, 16):
        crc = _LOOKUP8[crc ^ ((payload >> shift) & 0xFF)]
    crc = _LOOKUP4[crc ^ ((payload >> 24) & 0x0F)]
    return header | (crc << 28)


def check_header_crc(header: int) -> bool:
    """True when the checksum over all 32 bits of ``header`` is zero."""
    _check(header)
    crc = 0
    for shift in (0, 8, 16, 24):
        crc = _LOOKUP8[crc ^ ((header >> shift) & 0xFF)]
    return crc == 0