"""
RateHelpers: Interest Rate Curve Bootstrapping from Market Quotes

A modular library for:
- Wrapping market quotes (futures, deposits, FRAs, swaps, BMA swaps,
  FX swaps) as calibration helpers with resolved pillar dates
- Computing the quote each helper implies off a relinkable curve
- Bootstrapping discount curves node by node until every quote reprices
- Reporting repricing errors and quote/node sensitivities

Scope: single-threaded calibration of one curve at a time against
exogenous discounting, collateral and ibor forwarding curves.
"""

__version__ = "0.1.0"

# Core modules
from .conventions import DayCount, BusinessDayConvention, Compounding, Frequency, year_fraction
from .dates import Calendar, Period, TimeUnit, add_period, generate_schedule
from .errors import (
    CalibrationError,
    CurveNotSetError,
    InvalidPillarError,
    InconsistentInstrumentError,
    DateOrderError,
    BootstrapError,
)
from .quotes import Quote, SimpleQuote, LiteralQuote
from .indexes import IborIndex, BMAIndex, SwapIndex

# Curves
from .curves import (
    ForwardRateCurve,
    CurveHandle,
    create_flat_curve,
    BootstrapConfig,
    BootstrapResult,
    IterativeBootstrapper,
    bootstrap_curve,
)

# Helpers
from .helpers import (
    Pillar,
    HelperKind,
    HelperVisitor,
    describe,
    CalibrationHelper,
    RelativeDateHelper,
    FuturesType,
    FuturesHelper,
    DepositHelper,
    FraHelper,
    SwapHelper,
    BMASwapHelper,
    FxSwapHelper,
)

# Risk
from .risk import quote_jacobian

__all__ = [
    "__version__",
    # Conventions and dates
    "DayCount",
    "BusinessDayConvention",
    "Compounding",
    "Frequency",
    "year_fraction",
    "Calendar",
    "Period",
    "TimeUnit",
    "add_period",
    "generate_schedule",
    # Errors
    "CalibrationError",
    "CurveNotSetError",
    "InvalidPillarError",
    "InconsistentInstrumentError",
    "DateOrderError",
    "BootstrapError",
    # Market data
    "Quote",
    "SimpleQuote",
    "LiteralQuote",
    "IborIndex",
    "BMAIndex",
    "SwapIndex",
    # Curves
    "ForwardRateCurve",
    "CurveHandle",
    "create_flat_curve",
    "BootstrapConfig",
    "BootstrapResult",
    "IterativeBootstrapper",
    "bootstrap_curve",
    # Helpers
    "Pillar",
    "HelperKind",
    "HelperVisitor",
    "describe",
    "CalibrationHelper",
    "RelativeDateHelper",
    "FuturesType",
    "FuturesHelper",
    "DepositHelper",
    "FraHelper",
    "SwapHelper",
    "BMASwapHelper",
    "FxSwapHelper",
    # Risk
    "quote_jacobian",
]
