"""The Squares counter-based mixing function.

Four square-and-rotate rounds turn a (counter, key) pair into one raw draw.
Every multiply and add wraps modulo 2^64; the statistical properties of the
function (and its full period for a fixed key) depend on that ring
arithmetic, so both the scalar and the array forms mask or wrap at every
step.

Reference: Widynski, "Squares: A Fast Counter-Based RNG",
https://arxiv.org/abs/2004.06278
"""

from __future__ import annotations

import numpy as np

from squares.core.types import MASK32, MASK64

_SHIFT = np.uint64(32)
_LOW_MASK = np.uint64(MASK32)


# ---------------------------------------------------------------------------
# Scalar form (pure Python ints)
# ---------------------------------------------------------------------------

def rotate64_by32(value: int) -> int:
    """Swap the high and low 32-bit halves of a 64-bit word."""
    value &= MASK64
    return ((value >> 32) | (value << 32)) & MASK64


def wrapping_add(a: int, b: int) -> int:
    return (a + b) & MASK64


def wrapping_mul(a: int, b: int) -> int:
    return (a * b) & MASK64


def squares64(counter: int, key: int) -> int:
    """Return the raw draw for ``counter`` under ``key``.

    Only the high 32 bits of the final square survive, so the result is
    always below 2^32 even though it is carried as a 64-bit value.
    """
    x = wrapping_mul(counter, key)
    y = x
    z = wrapping_add(y, key)

    x = rotate64_by32(wrapping_add(wrapping_mul(x, x), y))
    x = rotate64_by32(wrapping_add(wrapping_mul(x, x), z))
    x = rotate64_by32(wrapping_add(wrapping_mul(x, x), y))

    return wrapping_add(wrapping_mul(x, x), z) >> 32


# ---------------------------------------------------------------------------
# Array form (numpy uint64, wraps silently on overflow)
# ---------------------------------------------------------------------------

def _rotate_block(x: np.ndarray) -> np.ndarray:
    return (x >> _SHIFT) | (x << _SHIFT)


def squares64_block(counters: np.ndarray, key: int) -> np.ndarray:
    """Vectorized :func:`squares64` over an array of counters.

    Produces the same values as calling :func:`squares64` on each element.
    """
    x = np.asarray(counters, dtype=np.uint64) * np.uint64(key & MASK64)
    y = x
    z = y + np.uint64(key & MASK64)

    x = _rotate_block(x * x + y)
    x = _rotate_block(x * x + z)
    x = _rotate_block(x * x + y)

    return ((x * x + z) >> _SHIFT) & _LOW_MASK


def counter_block(start: int, n: int) -> np.ndarray:
    """Counters ``start, start+1, ..., start+n-1`` wrapping modulo 2^64."""
    return np.arange(n, dtype=np.uint64) + np.uint64(start & MASK64)
