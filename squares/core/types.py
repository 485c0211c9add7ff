"""Framework-level types and word-size constants.

These are the shared vocabulary of the generator: the 64-bit masks the
mixing rounds wrap with, the modulus every derived distribution reduces by,
and the immutable snapshot of a generator's state.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Protocol


# ---------------------------------------------------------------------------
# Word sizes
# ---------------------------------------------------------------------------

MASK64: int = (1 << 64) - 1
MASK32: int = (1 << 32) - 1

# Every derived value starts from raw % SCALE_MODULUS (u32::MAX widened to u64)
SCALE_MODULUS: int = MASK32

INT32_MIN: int = -(1 << 31)
INT32_MAX: int = (1 << 31) - 1
INT64_MIN: int = -(1 << 63)
INT64_MAX: int = (1 << 63) - 1


# ---------------------------------------------------------------------------
# Reference key and sample size for statistical checks
# ---------------------------------------------------------------------------

TEST_KEY: int = 0x2467CB532B5CE8D1
TEST_COUNT: int = 10_000_000


# ---------------------------------------------------------------------------
# Floating-point precision of derived values
# ---------------------------------------------------------------------------

class Precision(Enum):
    """Width of the floats a derivation computes in."""

    F32 = "f32"
    F64 = "f64"


# ---------------------------------------------------------------------------
# Raw draw source
# ---------------------------------------------------------------------------

class RawSource(Protocol):
    """Anything that hands out raw 64-bit draws and advances on each one."""

    def next_raw(self) -> int:
        ...


# ---------------------------------------------------------------------------
# State snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class GeneratorState:
    """Immutable (counter, key) pair captured from a generator.

    Restoring a generator from a snapshot reproduces the exact continuation
    of the sequence it was taken from.
    """

    counter: int
    key: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "counter", self.counter & MASK64)
        object.__setattr__(self, "key", self.key & MASK64)

    def as_dict(self) -> dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GeneratorState:
        return cls(counter=int(data["counter"]), key=int(data["key"]))
