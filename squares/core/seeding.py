"""Deterministic stream construction.

A stream is fully reproducible from its (counter, key) pair. Parallel
workers share one key and take disjoint blocks of the 2^64 counter space,
so their streams never overlap and need no locking.
"""

from __future__ import annotations

import logging

from squares.core.errors import DomainError
from squares.core.types import MASK64
from squares.rng.generator import SquaresRNG

logger = logging.getLogger(__name__)


def make_rng(counter: int, key: int) -> SquaresRNG:
    """Create a generator from an explicit counter and key."""
    return SquaresRNG(counter=counter, key=key)


def partition_counters(n_streams: int, base_counter: int = 0) -> list[int]:
    """Starting counters for ``n_streams`` equal, disjoint blocks.

    Stream ``i`` starts at ``base_counter + i * (2^64 // n_streams)`` and may
    take that many draws before running into stream ``i + 1``.
    """
    if n_streams < 1:
        raise DomainError(f"n_streams must be at least 1, got {n_streams}")
    stride = (MASK64 + 1) // n_streams
    logger.debug("Partitioning counter space into %d streams of %d draws.", n_streams, stride)
    return [(base_counter + i * stride) & MASK64 for i in range(n_streams)]


def spawn_streams(key: int, n_streams: int, base_counter: int = 0) -> list[SquaresRNG]:
    """One generator per counter block, all sharing ``key``."""
    return [make_rng(start, key) for start in partition_counters(n_streams, base_counter)]
