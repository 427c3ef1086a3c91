"""
Exception taxonomy for the block style engine.

Validation failures are returned as ValidationResult objects and lookups
that miss return None; exceptions are reserved for configuration faults
and programming errors.
"""

from __future__ import annotations


class StyleEngineError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(StyleEngineError):
    """A seed definition is malformed or cyclic."""

    def __init__(self, message: str, cycle: list[str] | None = None):
        super().__init__(message)
        self.cycle = cycle


class ConflictError(ConfigurationError):
    """An entry with the same key is already registered."""


class RegistryFrozenError(ConfigurationError):
    """A registration was attempted after the registry was frozen."""


class InvalidInputError(StyleEngineError, ValueError):
    """A pure helper received input of the wrong type."""
