"""DShot frames, packet header fields and checksums, register ids, fixed-point maths and throttle decoding for a six-step BLDC ESC."""

__version__ = "0.1.0"
__all__ = ["aspep", "communication", "config", "crc4", "dshot", "mcmath", "registers"]