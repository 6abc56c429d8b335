"""
Calibration helpers for iterative curve bootstrapping.

Each helper wraps one market quote and reports the quote implied by the
curve linked to it. Families:
- FuturesHelper: interest rate futures prices (IMM, ASX or custom dates)
- DepositHelper, FraHelper: deposit and forward rate agreement rates
- SwapHelper: vanilla fixed/ibor swap rates, optionally dual-curve
- BMASwapHelper: BMA/ibor swap ratios
- FxSwapHelper: FX swap forward points against a collateral curve
"""

from .visitor import (
    HelperKind,
    HelperVisitor,
    HelperDescription,
    HelperDescriber,
    describe,
    unique_labels,
)
from .base import (
    Pillar,
    resolve_pillar,
    CalibrationHelper,
    RelativeDateHelper,
)
from .futures import FuturesType, FuturesHelper
from .deposit import DepositHelper, FraHelper
from .swap import SwapHelper, BMASwapHelper
from .fx import FxSwapHelper

__all__ = [
    "HelperKind",
    "HelperVisitor",
    "HelperDescription",
    "HelperDescriber",
    "describe",
    "unique_labels",
    "Pillar",
    "resolve_pillar",
    "CalibrationHelper",
    "RelativeDateHelper",
    "FuturesType",
    "FuturesHelper",
    "DepositHelper",
    "FraHelper",
    "SwapHelper",
    "BMASwapHelper",
    "FxSwapHelper",
]
