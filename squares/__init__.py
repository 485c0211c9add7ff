"""Public package surface for the Squares counter-based RNG."""

import logging

from squares.config.defaults import default_config
from squares.config.schema import GeneratorConfig
from squares.core.errors import (
    ConfigurationError,
    DomainError,
    KeyQualityError,
    SquaresError,
)
from squares.core.keys import KeyTable, is_balanced_key, key_popcount, validate_key
from squares.core.mixing import squares64
from squares.core.seeding import make_rng, partition_counters, spawn_streams
from squares.core.types import TEST_COUNT, TEST_KEY, GeneratorState, Precision
from squares.rng.generator import SquaresRNG

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "DomainError",
    "GeneratorConfig",
    "GeneratorState",
    "KeyQualityError",
    "KeyTable",
    "Precision",
    "SquaresError",
    "SquaresRNG",
    "TEST_COUNT",
    "TEST_KEY",
    "default_config",
    "is_balanced_key",
    "key_popcount",
    "make_rng",
    "partition_counters",
    "spawn_streams",
    "squares64",
    "validate_key",
]
