"""
Risk package - sensitivities of calibration quotes to curve nodes.
"""

from .jacobian import quote_jacobian

__all__ = ["quote_jacobian"]
