"""
Curves package - discount curve construction.

Provides:
- ForwardRateCurve: Dated discount-factor nodes with interpolation
- CurveHandle: Relinkable non-owning reference used by rate helpers
- IterativeBootstrapper: Calibrate a curve to rate helpers
"""

from .interpolation import (
    Interpolator,
    LinearInterpolator,
    LogLinearInterpolator,
    create_interpolator,
)
from .curve import ForwardRateCurve, create_flat_curve
from .handle import CurveHandle
from .bootstrap import (
    BootstrapConfig,
    BootstrapResult,
    IterativeBootstrapper,
    bootstrap_curve,
)

__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "create_interpolator",
    "ForwardRateCurve",
    "create_flat_curve",
    "CurveHandle",
    "BootstrapConfig",
    "BootstrapResult",
    "IterativeBootstrapper",
    "bootstrap_curve",
]
