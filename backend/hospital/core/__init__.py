# Core package initialization
# Cross-cutting pieces: configuration, exceptions, validation, logging,
# error translation and request helpers

from . import config, exceptions

__all__ = [
    "config",
    "exceptions",
]
