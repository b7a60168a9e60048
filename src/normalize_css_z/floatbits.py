"""IEEE-754 single-precision bit reinterpretation.

Python floats are doubles, so every float32 value handled here is carried as
the (exactly representable) double of the same value. Bits go through
``struct`` little-endian ``<f`` / ``<I`` packing, the same way float32
vectors are serialized elsewhere.

For a positive float32, decrementing the raw bit pattern by one yields the
next smaller representable value, including across the normal/subnormal
boundary. ``nth_below`` is built on that property.
"""
from __future__ import annotations

import math
import struct

_F32 = struct.Struct("<f")
_U32 = struct.Struct("<I")

_U32_LIMIT = 1 << 32
_MAX_NORMAL_OCTAVE = 126


def f32_to_bits(value: float) -> int:
    """Return the float32 bit pattern of *value* as an unsigned int."""
    return _U32.unpack(_F32.pack(value))[0]


def bits_to_f32(bits: int) -> float:
    """Reinterpret an unsigned 32-bit pattern as a float32 value."""
    if not 0 <= bits < _U32_LIMIT:
        raise ValueError(f"bits must be in [0, 2^32), got {bits}")
    return _F32.unpack(_U32.pack(bits))[0]


def octave_anchor(octave: int) -> float:
    """Return ``2^-octave``, the normal float32 anchoring one octave."""
    if not 0 <= octave <= _MAX_NORMAL_OCTAVE:
        raise ValueError(
            f"octave must be in [0, {_MAX_NORMAL_OCTAVE}], got {octave}"
        )
    return math.ldexp(1.0, -octave)


def nth_below(anchor: float, n: int) -> float:
    """Return the float32 value *n* representable steps below *anchor*.

    ``nth_below(a, 0) == a``. Raises ValueError when *n* is negative or
    would step past +0.0.
    """
    bits = f32_to_bits(anchor)
    if n < 0:
        raise ValueError(f"step count must be non-negative, got {n}")
    if n > bits:
        raise ValueError(f"cannot step {n} below {anchor!r} (bits 0x{bits:08x})")
    return bits_to_f32(bits - n)
