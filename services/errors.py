"""Errors raised by the classification layer."""

from __future__ import annotations


class EmptyInputError(LookupError):
    """Raised when a reading sequence with no elements is classified."""


class ConfigurationError(ValueError):
    """Raised for unknown parameters or an invalid threshold table."""
