"""
Error taxonomy for curve calibration.

All errors are raised synchronously, either when a helper is constructed
or the first time a value is requested from it. Nothing is retried.
"""

from datetime import date
from typing import Optional


class CalibrationError(Exception):
    """Base class for all ratehelpers errors."""


class CurveNotSetError(CalibrationError, RuntimeError):
    """A curve was requested from an empty (or released) curve handle."""


class InvalidPillarError(CalibrationError, ValueError):
    """Custom pillar date missing or outside [earliest, latest relevant]."""


class InconsistentInstrumentError(CalibrationError, ValueError):
    """Constructor parameters conflict with each other or are incomplete."""


class DateOrderError(CalibrationError, ValueError):
    """Dates are not in the required increasing order."""


class BootstrapError(CalibrationError):
    """
    Failure while solving the curve node of one helper.

    Attributes:
        pillar_date: Pillar of the helper being solved
        quote: Observed quote of that helper (None if unreadable)
        helper: The offending helper
    """

    def __init__(
        self,
        message: str,
        pillar_date: Optional[date] = None,
        quote: Optional[float] = None,
        helper=None
    ):
        super().__init__(message)
        self.pillar_date = pillar_date
        self.quote = quote
        self.helper = helper


__all__ = [
    "CalibrationError",
    "CurveNotSetError",
    "InvalidPillarError",
    "InconsistentInstrumentError",
    "DateOrderError",
    "BootstrapError",
]
