"""
Instruments package - calibration swaps built by the rate helpers.
"""

from .swap import (
    FixedCoupon,
    IborCoupon,
    BMACoupon,
    VanillaSwap,
    BMASwap,
    make_vanilla_swap,
    make_bma_swap,
)

__all__ = [
    "FixedCoupon",
    "IborCoupon",
    "BMACoupon",
    "VanillaSwap",
    "BMASwap",
    "make_vanilla_swap",
    "make_bma_swap",
]
