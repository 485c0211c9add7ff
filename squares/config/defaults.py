"""Default generator configuration.

Uses the reference test key so default streams match the published
statistical checks.
"""

from squares.config.schema import GeneratorConfig
from squares.core.types import TEST_KEY


def default_config(counter: int = 0) -> GeneratorConfig:
    """Return a complete, valid config starting at ``counter``."""
    return GeneratorConfig(counter=counter, key=TEST_KEY)
