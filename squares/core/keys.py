"""Key quality helpers and the injected key source.

A good Squares key has roughly 32 set bits and 32 clear bits in no
particular arrangement. Nothing here is applied by default construction:
callers opt into :func:`validate_key`, or resolve keys through a
:class:`KeyTable` of keys they have vetted elsewhere.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from squares.core.errors import ConfigurationError, KeyQualityError
from squares.core.types import MASK64

logger = logging.getLogger(__name__)

DEFAULT_MIN_BITS = 28
DEFAULT_MAX_BITS = 36


# ---------------------------------------------------------------------------
# Bit balance
# ---------------------------------------------------------------------------

def key_popcount(key: int) -> int:
    """Number of set bits in the 64-bit reading of ``key``."""
    return (key & MASK64).bit_count()


def is_balanced_key(
    key: int,
    min_bits: int = DEFAULT_MIN_BITS,
    max_bits: int = DEFAULT_MAX_BITS,
) -> bool:
    return min_bits <= key_popcount(key) <= max_bits


def validate_key(
    key: int,
    min_bits: int = DEFAULT_MIN_BITS,
    max_bits: int = DEFAULT_MAX_BITS,
) -> int:
    """Return ``key`` unchanged, or raise KeyQualityError if it is unbalanced."""
    bits = key_popcount(key)
    if not min_bits <= bits <= max_bits:
        raise KeyQualityError(
            f"key 0x{key & MASK64:016x} has {bits} set bits; "
            f"expected between {min_bits} and {max_bits}"
        )
    return key


# ---------------------------------------------------------------------------
# Key source
# ---------------------------------------------------------------------------

class KeyTable:
    """Read-only table of 64-bit keys addressed by a wrapping index.

    Any non-negative index is valid: lookups reduce it modulo the table
    length. The table never changes after construction.
    """

    def __init__(self, keys: Iterable[int]) -> None:
        entries: list[int] = []
        for pos, key in enumerate(keys):
            if isinstance(key, bool) or not isinstance(key, int):
                raise ConfigurationError(
                    f"key table entry {pos} must be an int, got {type(key).__name__}"
                )
            if not 0 <= key <= MASK64:
                raise ConfigurationError(
                    f"key table entry {pos} is outside the 64-bit range: {key}"
                )
            entries.append(key)
        self._keys: tuple[int, ...] = tuple(entries)

        if not self._keys:
            logger.warning("Key table is empty; every lookup will fail.")
        unbalanced = sum(1 for k in self._keys if not is_balanced_key(k))
        if unbalanced:
            logger.warning(
                "Key table holds %d of %d keys with unbalanced bit counts.",
                unbalanced, len(self._keys),
            )

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def keys(self) -> tuple[int, ...]:
        return self._keys

    def lookup_key(self, index: int) -> int:
        """Return the key at ``index % len(table)``.

        Raises ConfigurationError if the table is empty.
        """
        if not self._keys:
            raise ConfigurationError("cannot look up a key in an empty key table")
        return self._keys[index % len(self._keys)]
