"""Array forms of the derived distributions.

Each function draws a contiguous block of counters in one vectorized pass
and returns a numpy array holding exactly the values the scalar functions in
``squares.rng.distributions`` would return, in the same order. A vector
batch of shape ``(n, dims)`` consumes draws row by row, component 0 first.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np

from squares.core.errors import DomainError
from squares.core.types import SCALE_MODULUS, Precision
from squares.rng.distributions import (
    F32_BELOW_ONE,
    F32_MODULUS,
    F64_MODULUS,
    check_index_size,
)

VECTOR_DIMS = (2, 3, 4)


class BlockSource(Protocol):
    """Anything that hands out a block of consecutive raw draws."""

    def take_raw_block(self, n: int) -> np.ndarray:
        ...


def _check_count(n: int) -> int:
    if n < 0:
        raise DomainError(f"draw count must be non-negative, got {n}")
    return int(n)


def _as_precision(precision: Precision | str) -> Precision:
    try:
        return Precision(precision)
    except ValueError as exc:
        raise DomainError(f"unknown precision {precision!r}; expected 'f32' or 'f64'") from exc


# ---------------------------------------------------------------------------
# Raw and scaled blocks
# ---------------------------------------------------------------------------

def raw_array(source: BlockSource, n: int) -> np.ndarray:
    """``n`` raw draws as a uint64 array."""
    return source.take_raw_block(_check_count(n))


def scaled_array(source: BlockSource, n: int) -> np.ndarray:
    return raw_array(source, n) % np.uint64(SCALE_MODULUS)


# ---------------------------------------------------------------------------
# Floats
# ---------------------------------------------------------------------------

def unit_array(
    source: BlockSource, n: int, precision: Precision | str = Precision.F64
) -> np.ndarray:
    """``n`` uniform floats in [0, 1) as a float32 or float64 array."""
    precision = _as_precision(precision)
    scaled = scaled_array(source, n)
    if precision is Precision.F32:
        values = scaled.astype(np.float32) / F32_MODULUS
        return np.minimum(values, F32_BELOW_ONE)
    return scaled.astype(np.float64) / F64_MODULUS


def range_float_array(
    source: BlockSource,
    n: int,
    min_value: float,
    max_value: float,
    precision: Precision | str = Precision.F64,
) -> np.ndarray:
    precision = _as_precision(precision)
    if precision is Precision.F32:
        lo = np.float32(min_value)
        hi = np.float32(max_value)
    else:
        lo = float(min_value)
        hi = float(max_value)
    return lo + (hi - lo) * unit_array(source, n, precision)


def vector_array(
    source: BlockSource,
    n: int,
    dims: int,
    precision: Precision | str = Precision.F64,
) -> np.ndarray:
    """``n`` vectors with ``dims`` components in [-1, 1], shape ``(n, dims)``."""
    if dims not in VECTOR_DIMS:
        raise DomainError(f"vector dims must be one of {VECTOR_DIMS}, got {dims}")
    n = _check_count(n)
    flat = range_float_array(source, n * dims, -1.0, 1.0, precision)
    return flat.reshape(n, dims)


# ---------------------------------------------------------------------------
# Indices
# ---------------------------------------------------------------------------

def index_array(source: BlockSource, n: int, size: int) -> np.ndarray:
    """``n`` positions in ``[0, size)`` as a uint64 array."""
    check_index_size(size)
    return scaled_array(source, n) % np.uint64(size)
