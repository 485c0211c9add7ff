"""Configuration schema for a generator instance: single source of truth.

A GeneratorConfig fully determines a reproducible stream: a starting
counter plus either an explicit key or an index into a caller-supplied
key table.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from squares.core.keys import DEFAULT_MAX_BITS, DEFAULT_MIN_BITS, validate_key
from squares.core.types import MASK64


class GeneratorConfig(BaseModel):
    """Starting point of one generator stream."""

    counter: int = Field(
        default=0,
        ge=0, le=MASK64,
        description="Starting counter. Wraps modulo 2^64 as draws are taken.",
    )
    key: int | None = Field(
        default=None,
        ge=0, le=MASK64,
        description="Explicit 64-bit key. Mutually exclusive with key_index.",
    )
    key_index: int | None = Field(
        default=None,
        ge=0,
        description="Index into a key table, reduced modulo the table length.",
    )
    require_balanced_key: bool = Field(
        default=False,
        description=(
            f"Reject an explicit key with fewer than {DEFAULT_MIN_BITS} or more "
            f"than {DEFAULT_MAX_BITS} set bits."
        ),
    )

    @model_validator(mode="after")
    def exactly_one_key_source(self) -> GeneratorConfig:
        if (self.key is None) == (self.key_index is None):
            raise ValueError("Exactly one of key or key_index must be set.")
        return self

    @model_validator(mode="after")
    def key_is_balanced(self) -> GeneratorConfig:
        if self.require_balanced_key and self.key is not None:
            validate_key(self.key)
        return self
