"""
Exception types raised by the payments core.
"""
from __future__ import annotations


class PaymentsError(Exception):
    """Base class for every error raised by workshop_payments."""


class ValidationError(PaymentsError, ValueError):
    """A required field (who / why) is missing on add or edit."""


class RowReferenceError(PaymentsError, LookupError):
    """An operation addressed a sheet, position or edit that does not exist."""


class DatasetError(PaymentsError, ValueError):
    """A dataset file could not be decoded into sheets."""
