"""Exception hierarchy for the generator.

The mixing function itself is total over all 64-bit inputs, so the only
failures are caller mistakes at the edges: an empty modulus, a key source
with nothing in it, or a key rejected by an explicit quality check.
"""

from __future__ import annotations


class SquaresError(Exception):
    """Base class for all errors raised by this package."""


class DomainError(SquaresError, ValueError):
    """An argument lies outside the domain of the requested operation."""


class ConfigurationError(SquaresError, ValueError):
    """The key source or generator configuration cannot be used."""


class KeyQualityError(SquaresError, ValueError):
    """A key failed the balanced-bit-count check."""
