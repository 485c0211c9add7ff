"""Derived distributions over a stream of raw draws.

Every function here is a pure derivation over a ``RawSource``: it pulls one
or more raw draws, reduces each by ``SCALE_MODULUS`` and projects the result.
The chain is

    raw -> scaled = raw % (2^32 - 1) -> unit float -> min + (max - min) * unit
        -> (optionally) rounded integer, or several floats tupled into a vector

Single-precision functions compute in numpy ``float32`` end to end and return
the float32 value widened to a Python float. Double-precision functions use
Python floats directly.

Ranges are not validated: ``min > max`` yields the same affine interpolation
with the endpoints swapped in meaning. Integer results are rounded half to
even and saturated to the width of the integer type, never clamped to
``[min, max]``.
"""

from __future__ import annotations

import math

import numpy as np

from squares.core.errors import DomainError
from squares.core.types import (
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    MASK64,
    SCALE_MODULUS,
    RawSource,
)

# u32::MAX does not fit a float32 mantissa and rounds up to 2^32
F32_MODULUS = np.float32(SCALE_MODULUS)
F64_MODULUS = float(SCALE_MODULUS)
F32_BELOW_ONE = np.nextafter(np.float32(1.0), np.float32(0.0))


# ---------------------------------------------------------------------------
# Scaled draw and unit floats
# ---------------------------------------------------------------------------

def scaled_draw(source: RawSource) -> int:
    """One raw draw reduced into ``[0, 2^32 - 1)``."""
    return source.next_raw() % SCALE_MODULUS


def _unit32(source: RawSource) -> np.float32:
    value = np.float32(scaled_draw(source)) / F32_MODULUS
    # The float32 quotient can round up to exactly 1.0 near the top of the range
    if value >= np.float32(1.0):
        return F32_BELOW_ONE
    return value


def unit_f32(source: RawSource) -> float:
    """Uniform float32 in [0, 1)."""
    return float(_unit32(source))


def unit_f64(source: RawSource) -> float:
    """Uniform float64 in [0, 1)."""
    return scaled_draw(source) / F64_MODULUS


# ---------------------------------------------------------------------------
# Ranged floats
# ---------------------------------------------------------------------------

def _range32(source: RawSource, min_value: float, max_value: float) -> np.float32:
    lo = np.float32(min_value)
    hi = np.float32(max_value)
    return lo + (hi - lo) * _unit32(source)


def range_float32(source: RawSource, min_value: float, max_value: float) -> float:
    return float(_range32(source, min_value, max_value))


def range_float64(source: RawSource, min_value: float, max_value: float) -> float:
    min_value = float(min_value)
    max_value = float(max_value)
    return min_value + (max_value - min_value) * unit_f64(source)


# ---------------------------------------------------------------------------
# Ranged integers
# ---------------------------------------------------------------------------

def _narrow(value: float, lo: int, hi: int) -> int:
    """Round half to even, then saturate like a float-to-int cast."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return hi if value > 0 else lo
    return min(max(round(value), lo), hi)


def range_int32(source: RawSource, min_value: int, max_value: int) -> int:
    """Integer in [min, max] drawn through the float32 range.

    The float32 widening of large bounds is inexact, so results near the
    int32 limits saturate rather than wrap.
    """
    value = _range32(source, float(min_value), float(max_value))
    return _narrow(float(value), INT32_MIN, INT32_MAX)


def range_int64(source: RawSource, min_value: int, max_value: int) -> int:
    """Integer in [min, max] drawn through the float64 range."""
    value = range_float64(source, float(min_value), float(max_value))
    return _narrow(value, INT64_MIN, INT64_MAX)


# ---------------------------------------------------------------------------
# Vectors (components in [-1, 1], component 0 drawn first)
# ---------------------------------------------------------------------------

def vector2_f32(source: RawSource) -> tuple[float, float]:
    x = range_float32(source, -1.0, 1.0)
    y = range_float32(source, -1.0, 1.0)
    return (x, y)


def vector3_f32(source: RawSource) -> tuple[float, float, float]:
    x = range_float32(source, -1.0, 1.0)
    y = range_float32(source, -1.0, 1.0)
    z = range_float32(source, -1.0, 1.0)
    return (x, y, z)


def vector4_f32(source: RawSource) -> tuple[float, float, float, float]:
    x = range_float32(source, -1.0, 1.0)
    y = range_float32(source, -1.0, 1.0)
    z = range_float32(source, -1.0, 1.0)
    w = range_float32(source, -1.0, 1.0)
    return (x, y, z, w)


def vector2_f64(source: RawSource) -> tuple[float, float]:
    x = range_float64(source, -1.0, 1.0)
    y = range_float64(source, -1.0, 1.0)
    return (x, y)


def vector3_f64(source: RawSource) -> tuple[float, float, float]:
    x = range_float64(source, -1.0, 1.0)
    y = range_float64(source, -1.0, 1.0)
    z = range_float64(source, -1.0, 1.0)
    return (x, y, z)


def vector4_f64(source: RawSource) -> tuple[float, float, float, float]:
    x = range_float64(source, -1.0, 1.0)
    y = range_float64(source, -1.0, 1.0)
    z = range_float64(source, -1.0, 1.0)
    w = range_float64(source, -1.0, 1.0)
    return (x, y, z, w)


# ---------------------------------------------------------------------------
# Indices
# ---------------------------------------------------------------------------

def check_index_size(size: int) -> None:
    """Raise DomainError unless ``size`` is a positive 64-bit integer."""
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise DomainError(f"index size must be an integer, got {type(size).__name__}")
    if not 0 < size <= MASK64:
        raise DomainError(f"index size must be in [1, 2^64 - 1], got {size}")


def index(source: RawSource, size: int) -> int:
    """Position in ``[0, size)``, e.g. for picking an element of a sequence.

    The size is checked before any draw is consumed.
    """
    check_index_size(size)
    return scaled_draw(source) % int(size)
