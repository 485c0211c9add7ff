"""SquaresRNG: the mutable (counter, key) holder and its draw API.

The generator is a thin stateful shell around pure functions: the raw draw
comes from ``squares.core.mixing`` and every derived value from
``squares.rng.distributions`` or ``squares.rng.batch``. The only mutation
anywhere is ``counter += 1`` (mod 2^64) per raw draw.

A generator is single-owner. Share one across threads only behind a lock,
or give each worker its own stream (see ``squares.core.seeding``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from squares.core.errors import ConfigurationError, DomainError
from squares.core.keys import KeyTable
from squares.core.mixing import counter_block, squares64, squares64_block
from squares.core.types import MASK64, GeneratorState, Precision
from squares.rng import batch, distributions

if TYPE_CHECKING:
    from squares.config.schema import GeneratorConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SquaresRNG:
    """Counter-based Squares generator.

    Parameters
    ----------
    counter : int
        Starting counter. Any value is accepted and read modulo 2^64.
    key : int
        64-bit key selecting the permutation. Not validated: a key far from
        32 set bits (all zeros, all ones) is accepted but gives poor output.
        Use ``squares.core.keys.validate_key`` to check one explicitly.
    """

    counter: int
    key: int

    def __post_init__(self) -> None:
        self.counter &= MASK64
        self.key &= MASK64

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_key_index(cls, counter: int, key_index: int, table: KeyTable) -> SquaresRNG:
        """Resolve the key through ``table`` (index wraps modulo its length)."""
        key = table.lookup_key(key_index)
        logger.debug("Resolved key index %d to key 0x%016x.", key_index, key)
        return cls(counter=counter, key=key)

    @classmethod
    def from_state(cls, state: GeneratorState) -> SquaresRNG:
        return cls(counter=state.counter, key=state.key)

    @classmethod
    def from_config(
        cls, config: GeneratorConfig, table: KeyTable | None = None
    ) -> SquaresRNG:
        """Build a generator from a validated GeneratorConfig.

        Raises ConfigurationError if the config names a key index but no
        key table is supplied.
        """
        if config.key is not None:
            logger.debug("Building generator from config with an explicit key.")
            return cls(counter=config.counter, key=config.key)
        if table is None:
            raise ConfigurationError(
                f"config selects key_index={config.key_index} but no key table was given"
            )
        return cls.from_key_index(config.counter, config.key_index, table)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def snapshot(self) -> GeneratorState:
        """Capture (counter, key) so the sequence can be resumed exactly."""
        return GeneratorState(counter=self.counter, key=self.key)

    # ------------------------------------------------------------------
    # Raw draws
    # ------------------------------------------------------------------

    def next_raw(self) -> int:
        """Return the raw draw for the current counter, then advance it."""
        out = squares64(self.counter, self.key)
        self.counter = (self.counter + 1) & MASK64
        return out

    def take_raw_block(self, n: int) -> np.ndarray:
        """Return ``n`` consecutive raw draws as uint64, advancing by ``n``."""
        if n < 0:
            raise DomainError(f"draw count must be non-negative, got {n}")
        block = squares64_block(counter_block(self.counter, n), self.key)
        self.counter = (self.counter + n) & MASK64
        return block

    # ------------------------------------------------------------------
    # Scalar distributions
    # ------------------------------------------------------------------

    def index(self, size: int) -> int:
        return distributions.index(self, size)

    def unit_f32(self) -> float:
        return distributions.unit_f32(self)

    def unit_f64(self) -> float:
        return distributions.unit_f64(self)

    def range_float32(self, min_value: float, max_value: float) -> float:
        return distributions.range_float32(self, min_value, max_value)

    def range_float64(self, min_value: float, max_value: float) -> float:
        return distributions.range_float64(self, min_value, max_value)

    def range_int32(self, min_value: int, max_value: int) -> int:
        return distributions.range_int32(self, min_value, max_value)

    def range_int64(self, min_value: int, max_value: int) -> int:
        return distributions.range_int64(self, min_value, max_value)

    def vector2_f32(self) -> tuple[float, float]:
        return distributions.vector2_f32(self)

    def vector3_f32(self) -> tuple[float, float, float]:
        return distributions.vector3_f32(self)

    def vector4_f32(self) -> tuple[float, float, float, float]:
        return distributions.vector4_f32(self)

    def vector2_f64(self) -> tuple[float, float]:
        return distributions.vector2_f64(self)

    def vector3_f64(self) -> tuple[float, float, float]:
        return distributions.vector3_f64(self)

    def vector4_f64(self) -> tuple[float, float, float, float]:
        return distributions.vector4_f64(self)

    # ------------------------------------------------------------------
    # Batch distributions
    # ------------------------------------------------------------------

    def raw_array(self, n: int) -> np.ndarray:
        return batch.raw_array(self, n)

    def unit_array(self, n: int, precision: Precision | str = Precision.F64) -> np.ndarray:
        return batch.unit_array(self, n, precision)

    def range_float_array(
        self,
        n: int,
        min_value: float,
        max_value: float,
        precision: Precision | str = Precision.F64,
    ) -> np.ndarray:
        return batch.range_float_array(self, n, min_value, max_value, precision)

    def vector_array(
        self, n: int, dims: int, precision: Precision | str = Precision.F64
    ) -> np.ndarray:
        return batch.vector_array(self, n, dims, precision)

    def index_array(self, n: int, size: int) -> np.ndarray:
        return batch.index_array(self, n, size)
