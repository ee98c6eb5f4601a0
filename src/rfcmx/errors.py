"""
Error taxonomy shared by the generator and the validators.

Generation errors are raised to the caller. Validation never raises; the
format error below is only used internally and surfaces as ``valid=False``.
"""

from __future__ import annotations


class IdentifierError(ValueError):
    """Base class for every error raised by rfcmx."""


class InvalidNameError(IdentifierError):
    """Given names are empty, or both surnames are empty."""


class InvalidDateError(IdentifierError):
    """Birth date cannot be parsed under any layout, or is out of range."""


class InvalidIdentifierFormatError(IdentifierError):
    """Candidate does not match the structural pattern of its kind."""
