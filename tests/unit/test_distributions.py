"""Unit tests for the derived distributions.

Covers:
  - unit floats: half-open bound, precision, top-of-range float32 rounding
  - ranged floats: containment, reversed bounds
  - ranged integers: half-to-even rounding, saturation, containment
  - vectors: draw count and component order
  - index: bounds and the zero-size error
"""

from __future__ import annotations

import numpy as np
import pytest

from squares import DomainError, SquaresRNG, TEST_KEY
from squares.core.types import INT32_MAX, INT64_MAX, INT64_MIN, SCALE_MODULUS
from squares.rng import distributions


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _ScriptedSource:
    """Hands out a fixed list of raw draws."""

    def __init__(self, raws: list[int]) -> None:
        self._raws = list(raws)
        self.taken = 0

    def next_raw(self) -> int:
        self.taken += 1
        return self._raws.pop(0)


FIRST_RAW = 0x87053A45  # raw draw at counter 0 with TEST_KEY


def _rng(counter: int = 0) -> SquaresRNG:
    return SquaresRNG(counter, TEST_KEY)


# ---------------------------------------------------------------------------
# Unit floats
# ---------------------------------------------------------------------------

class TestUnitFloats:
    def test_f64_golden(self):
        assert _rng().unit_f64() == FIRST_RAW / SCALE_MODULUS

    def test_f32_golden(self):
        expected = np.float32(FIRST_RAW) / np.float32(SCALE_MODULUS)
        assert _rng().unit_f32() == float(expected)

    def test_f32_values_are_float32_representable(self):
        rng = _rng(99)
        for _ in range(200):
            value = rng.unit_f32()
            assert float(np.float32(value)) == value

    def test_half_open_interval(self):
        rng = _rng()
        for _ in range(5000):
            assert 0.0 <= rng.unit_f32() < 1.0
            assert 0.0 <= rng.unit_f64() < 1.0

    def test_modulus_reduces_to_zero(self):
        source = _ScriptedSource([SCALE_MODULUS, SCALE_MODULUS])
        assert distributions.unit_f64(source) == 0.0
        assert distributions.unit_f32(source) == 0.0

    def test_f32_top_of_range_stays_below_one(self):
        # 2^32 - 2 rounds to 2^32 in float32, as does the divisor
        source = _ScriptedSource([SCALE_MODULUS - 1])
        value = distributions.unit_f32(source)
        assert value < 1.0
        assert value == float(np.nextafter(np.float32(1.0), np.float32(0.0)))

    def test_f64_top_of_range_below_one(self):
        source = _ScriptedSource([SCALE_MODULUS - 1])
        assert distributions.unit_f64(source) < 1.0

    def test_one_draw_per_value(self):
        rng = _rng(10)
        rng.unit_f32()
        rng.unit_f64()
        assert rng.counter == 12


# ---------------------------------------------------------------------------
# Ranged floats
# ---------------------------------------------------------------------------

class TestRangeFloat:
    @pytest.mark.parametrize("lo,hi", [(0.0, 1.0), (-1.0, 1.0), (-5.0, 17.5), (100.0, 1000.0)])
    def test_containment(self, lo: float, hi: float):
        rng = _rng()
        for _ in range(3000):
            assert lo <= rng.range_float32(lo, hi) <= hi
            assert lo <= rng.range_float64(lo, hi) <= hi

    def test_f64_is_affine_remap_of_unit(self):
        a = _rng(5)
        b = _rng(5)
        assert a.range_float64(2.0, 6.0) == 2.0 + 4.0 * b.unit_f64()

    def test_degenerate_range(self):
        rng = _rng()
        assert rng.range_float64(3.25, 3.25) == 3.25
        assert rng.range_float32(3.25, 3.25) == 3.25

    def test_reversed_bounds_interpolate(self):
        a = _rng(77)
        b = _rng(77)
        forward = b.unit_f64()
        value = a.range_float64(10.0, 0.0)
        assert value == 10.0 + (0.0 - 10.0) * forward
        assert 0.0 <= value <= 10.0


# ---------------------------------------------------------------------------
# Ranged integers
# ---------------------------------------------------------------------------

class TestRangeInt:
    def test_golden_int64(self):
        # 100 * 2265266757 / 4294967295 = 52.74...
        assert _rng().range_int64(0, 100) == 53

    @pytest.mark.parametrize("lo,hi", [(0, 1), (-10, 10), (1, 6), (-1000, 0)])
    def test_containment(self, lo: int, hi: int):
        rng = _rng(3)
        for _ in range(3000):
            v32 = rng.range_int32(lo, hi)
            v64 = rng.range_int64(lo, hi)
            assert isinstance(v32, int) and isinstance(v64, int)
            assert lo <= v32 <= hi
            assert lo <= v64 <= hi

    def test_endpoints_reachable(self):
        rng = _rng()
        seen = {rng.range_int64(0, 2) for _ in range(2000)}
        assert seen == {0, 1, 2}

    def test_rounds_half_to_even(self):
        assert distributions._narrow(2.5, INT64_MIN, INT64_MAX) == 2
        assert distributions._narrow(3.5, INT64_MIN, INT64_MAX) == 4
        assert distributions._narrow(-0.5, INT64_MIN, INT64_MAX) == 0
        assert distributions._narrow(52.49, INT64_MIN, INT64_MAX) == 52

    def test_narrowing_saturates(self):
        assert distributions._narrow(2.0 ** 40, -(2 ** 31), INT32_MAX) == INT32_MAX
        assert distributions._narrow(float("inf"), -(2 ** 31), INT32_MAX) == INT32_MAX
        assert distributions._narrow(float("-inf"), -(2 ** 31), INT32_MAX) == -(2 ** 31)
        assert distributions._narrow(float("nan"), -(2 ** 31), INT32_MAX) == 0

    def test_int32_limit_saturates(self):
        # INT32_MAX widens to 2^31 in float32
        rng = _rng()
        assert rng.range_int32(INT32_MAX, INT32_MAX) == INT32_MAX

    def test_int64_limit_saturates(self):
        rng = _rng()
        assert rng.range_int64(INT64_MAX, INT64_MAX) == INT64_MAX


# ---------------------------------------------------------------------------
# Vectors
# ---------------------------------------------------------------------------

class TestVectors:
    @pytest.mark.parametrize("name,dims", [
        ("vector2_f32", 2), ("vector3_f32", 3), ("vector4_f32", 4),
        ("vector2_f64", 2), ("vector3_f64", 3), ("vector4_f64", 4),
    ])
    def test_component_count_and_draws(self, name: str, dims: int):
        rng = _rng(20)
        vec = getattr(rng, name)()
        assert isinstance(vec, tuple)
        assert len(vec) == dims
        assert rng.counter == 20 + dims
        assert all(-1.0 <= c <= 1.0 for c in vec)

    def test_f64_components_in_draw_order(self):
        a = _rng(8)
        b = _rng(8)
        assert a.vector4_f64() == tuple(b.range_float64(-1.0, 1.0) for _ in range(4))

    def test_f32_components_in_draw_order(self):
        a = _rng(8)
        b = _rng(8)
        assert a.vector3_f32() == tuple(b.range_float32(-1.0, 1.0) for _ in range(3))

    def test_components_differ(self):
        x, y = _rng().vector2_f64()
        assert x != y


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------

class TestIndex:
    def test_golden(self):
        assert _rng().index(10) == FIRST_RAW % 10

    @pytest.mark.parametrize("size", [1, 2, 7, 1000, 2 ** 40])
    def test_bounds(self, size: int):
        rng = _rng()
        for _ in range(2000):
            assert 0 <= rng.index(size) < size

    def test_size_one_is_always_zero(self):
        rng = _rng()
        assert {rng.index(1) for _ in range(100)} == {0}

    def test_zero_size_rejected_without_consuming(self):
        rng = _rng(4)
        with pytest.raises(DomainError):
            rng.index(0)
        assert rng.counter == 4

    @pytest.mark.parametrize("size", [-1, 2 ** 64, 2.5, True])
    def test_invalid_sizes(self, size):
        with pytest.raises(DomainError):
            _rng().index(size)

    def test_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            _rng().index(0)
