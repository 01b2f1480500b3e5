# escdrive

Pure-Python helpers for the protocols and arithmetic of a sensorless six-step
brushless ESC. The package encodes and decodes DShot frames, builds and reads
serial packet header fields and their 4-bit checksum, names the protocol
registers, reproduces the fixed-point maths of the control loop, and turns
throttle input edges into speed references. It does not talk to hardware. Use
it to test, simulate or inspect an ESC from a host computer.

## Installation

```
pip install escdrive
pip install "escdrive[test]"   # adds pytest and hypothesis
```

## Modules

- `escdrive.mcmath` holds the fixed-point maths.
  - `log2_exact(x)` works on exact powers of two up to 2**15. It treats 65535 as 2**16 and returns -1 for anything else.
  - `isqrt32(value)` is an integer square root. It returns 0 for negative input and raises `ValueError` outside the signed 32-bit range.
  - `modulus(alpha, beta)` gives the vector magnitude, saturated to 32767.
  - `phase_computation(bemf_alpha, bemf_beta)` gives the electrical angle of a back-EMF vector by an 8-step CORDIC, in s16 degrees. In this unit 16384 is a quarter turn.
  - `float_to_int_bits(x)` gives the IEEE 754 single-precision bit pattern of `x`.
- `escdrive.dshot` handles the DShot throttle protocol.
  - `build_packet(throttle, telemetry)` builds a 16-bit frame.
  - `packet_crc(value)` computes the nibble XOR checksum.
  - `deserialize(data)` decodes 16 duty samples; a sample of 60 or more is a one.
  - `deserialize_pulse_widths(data, dshot_type)` decodes 16 pulse widths in microseconds.
  - Both decoders return a `DShotPacket`, whose `crc_valid()` checks the checksum. Both raise `ValueError` unless given exactly 16 values.
  - `duty_buffer(packet, auto_reload)` gives the PWM compare values for a frame: about 75 % of the period for a one and 30 % for a zero.
  - `timer_prescaler(dshot_type, core_clock)` gives the timer prescaler for a variant.
  - `DShotType` covers DShot150, 300, 600 and 1200.
- `escdrive.crc4` computes the 4-bit header checksum, with polynomial x^4 + x + 1.
  - `compute_header_crc(header)` ORs the checksum of the low 28 bits into bits 28–31.
  - `check_header_crc(header)` tells whether a complete header is valid.
- `escdrive.aspep` builds and reads the fields of serial packet headers.
  - `Capabilities` describes a beacon. It has `encode()` and `decode(header)`, `negotiate(controller)` to lower it to what both sides support, and `matches(controller)`.
  - `payload_sizes(capabilities)` returns the `NegotiatedSizes` payload limits in bytes.
  - `ping_fields`, `ping_packet_number`, `nack_fields`, `data_header` and `data_length` build or read the other header types.
- `escdrive.registers` handles protocol register identifiers. A register id is a 10-bit element, a 3-bit type and a 3-bit motor.
  - `Register` lists the known registers and `DataType` the data kinds.
  - `make_id`, `extract_motor_id`, `data_type_of` and `element_of` assemble and split ids.
- `escdrive.config` holds the configured parameters as frozen dataclasses: `MotorParameters`, `PowerStageParameters`, `ClockConfig`, `MotorConfigRegister` and `ApplicationConfigRegister`. `PowerStageParameters` converts between temperature-sensor voltage and temperature. It also converts a phase current in amperes to its digital value.
- `escdrive.communication` handles throttle input.
  - `ThrottleReceiver(comm_type, max_speed_unit, on_speed=None)` collects edges through `on_edge(counter, level)`.
  - `update()` returns a new speed reference when a complete pulse or frame is waiting, or `None`. It also calls `on_speed(speed, 1)` when one is given.
  - PWM pulses of 1500–2000 µs map linearly onto zero to full speed. It also accepts DShot150 frames, where throttle 48–2047 maps onto zero to full speed.
  - The mappings are also available as `pwm_target_speed` and `dshot_target_speed`, and `timer_prescaler` gives the capture timer prescaler.

## Example

```python
from escdrive.dshot import build_packet, DShotPacket
from escdrive.crc4 import compute_header_crc, check_header_crc
from escdrive.communication import pwm_target_speed

frame = build_packet(1046, 0)
assert frame == 0x82C6
assert DShotPacket(throttle=1046, telemetry=0, crc=0x6).crc_valid()

assert check_header_crc(compute_header_crc(0x0000009))
assert pwm_target_speed(1750, 1000) == 500
```

## What it does not do

The package has no command-line program. It does not open serial ports or
timers. `escdrive.aspep` only builds and reads header fields. It does not run
the connection state machine, buffer packets or answer a controller. There is
no motor state machine, speed loop or commutation either. `ThrottleReceiver`
produces speed references, and acting on them is up to the caller.

## Running the tests

```
pytest
```