"""Header fields of the serial packet protocol used for motor control.

Every packet starts with a 32-bit header. Its lowest bits carry the packet
type, bits 28 to 31 hold the 4-bit checksum computed by :mod:`escdrive.crc4`,
and the bits in between depend on the packet type. The helpers here build
and read those middle fields.

Beacon headers carry capabilities::

    bits 4-6 version | bit 7 data CRC | bits 8-13 RX max size
    bits 14-20 TX sync max size | bits 21-27 TX async max size

Ping headers carry connection flags and a packet number in bits 12 to 27.
Data headers carry the payload length from bit 4 upwards.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

_UINT32 = 0xFFFFFFFF

_VERSION_MAX = 0x7
_DATA_CRC_MAX = 0x1
_RX_MAX = 0x3F
_TXS_MAX = 0x7F
_TXA_MAX = 0x7F

_PACKET_NUMBER_MASK = 0x0FFFF000
_PACKET_NUMBER_SHIFT = 12

_DATA_LENGTH_MAX = 0x1FFF
_DATA_LENGTH_FIELD = 0x1FFF0
_DATA_KIND_MAX = 0xF

DATA_CRC_SIZE = 2
"""Bytes of payload checksum appended to a data packet when enabled."""

HEADER_SIZE = 4
"""Bytes in a packet header."""


def _check_range(name: str, value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} {value} is outside 0..{maximum}")


@dataclass(frozen=True)
class Capabilities:
    """Link capabilities exchanged in beacon packets."""

    version: int = 0
    data_crc: int = 0
    rx_max_size: int = 0
    txs_max_size: int = 0
    txa_max_size: int = 0

    def __post_init__(self) -> None:
        _check_range("version", self.version, _VERSION_MAX)
        _check_range("data_crc", self.data_crc, _DATA_CRC_MAX)
        _check_range("rx_max_size", self.rx_max_size, _RX_MAX)
        _check_range("txs_max_size", self.txs_max_size, _TXS_MAX)
        _check_range("txa_max_size", self.txa_max_size, _TXA_MAX)

    def encode(self) -> int:
        """Beacon header fields, without packet type or checksum."""
        return (
            (self.version << 4)
            | (self.data_crc << 7)
            | (self.rx_max_size << 8)
            | (self.txs_max_size << 14)
            | (self.txa_max_size << 21)
        )

    @classmethod
    def decode(cls, header: int) -> "Capabilities":
        """Read the capabilities carried by a beacon header."""
        _check_range("header", header, _UINT32)
        return cls(
            version=(header & 0x70) >> 4,
            data_crc=(header >> 7) & 0x1,
            rx_max_size=(header >> 8) & 0x3F,
            txs_max_size=(header & 0x01FC000) >> 14,
            txa_max_size=(header & 0xFE00000) >> 21,
        )

    def negotiate(self, controller: "Capabilities") -> "Capabilities":
        """Capabilities lowered to what both this side and ``controller`` support.

        The version is kept as this side's own.
        """
        return replace(
            self,
            data_crc=min(self.data_crc, controller.data_crc),
            rx_max_size=min(self.rx_max_size, controller.rx_max_size),
            txs_max_size=min(self.txs_max_size, controller.txs_max_size),
            txa_max_size=min(self.txa_max_size, controller.txa_max_size),
        )

    def matches(self, controller: "Capabilities") -> bool:
        """True when a link can be configured with ``controller``'s beacon."""
        agreed = self.negotiate(controller)
        return not (
            controller.data_crc != agreed.data_crc
            or controller.rx_max_size > agreed.rx_max_size
            or agreed.txs_max_size != controller.txs_max_size
            or agreed.txa_max_size != controller.txa_max_size
            or controller.version != agreed.version
        )


@dataclass(frozen=True)
class NegotiatedSizes:
    """Payload limits, in bytes, that follow from agreed capabilities."""

    tx_sync_max_payload: int
    tx_async_max_payload: int
    max_rx_payload: int


def payload_sizes(capabilities: Capabilities) -> NegotiatedSizes:
    """Payload limits in bytes for a configured link."""
    return NegotiatedSizes(
        tx_sync_max_payload=(capabilities.txs_max_size + 1) * 32,
        tx_async_max_payload=capabilities.txa_max_size * 64,
        max_rx_payload=(capabilities.rx_max_size + 1) * 32,
    )


def ping_fields(c_bit: int, packet_count: int, ip_id: int, packet_number: int) -> int:
    """Ping header fields, without packet type or checksum.

    ``c_bit`` tells whether the performer kept its state since the link was
    configured; only the lowest bit of ``packet_count`` and the low nibble of
    ``ip_id`` are sent.
    """
    _check_range("c_bit", c_bit, 1)
    _check_range("packet_count", packet_count, _UINT32)
    _check_range("ip_id", ip_id, 0xFF)
    _check_range("packet_number", packet_number, 0xFFFF)
    n_bit = packet_count & 0x1
    ip = ip_id & 0xF
    return (
        (c_bit << 4)
        | (c_bit << 5)
        | (n_bit << 6)
        | (n_bit << 7)
        | (ip << 8)
        | (packet_number << _PACKET_NUMBER_SHIFT)
    )


def ping_packet_number(header: int) -> int:
    """Packet number carried by a ping header."""
    _check_range("header", header, _UINT32)
    return (header & _PACKET_NUMBER_MASK) >> _PACKET_NUMBER_SHIFT


def nack_fields(error_info: int) -> int:
    """NACK header fields: the error code repeated in bits 8-15 and 16-23."""
    _check_range("error_info", error_info, 0xFF)
    return (error_info << 8) | (error_info << 16)


def data_header(length: int, sync_async: int) -> int:
    """Data packet header, without checksum, for a payload of ``length`` bytes.

    ``sync_async`` is the packet type nibble placed in bits 0 to 3.
    """
    _check_range("length", length, _DATA_LENGTH_MAX)
    _check_range("sync_async", sync_async, _DATA_KIND_MAX)
    return (length << 4) | sync_async


def data_length(header: int) -> int:
    """Payload length read from a received data header.

    Only the lower 16 bits of the header are looked at, so lengths are read
    from bits 4 to 15.
    """
    _check_range("header", header, _UINT32)
    return ((header & 0xFFFF) & _DATA_LENGTH_FIELD) >> 4