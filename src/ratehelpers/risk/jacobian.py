"""
Quote Jacobian of a calibrated curve.

Bump-and-reprice of rate helpers against single curve nodes:
each node's zero rate is shifted by bump_bp and every helper's implied
quote is recomputed. The result, scaled per basis point, shows which
quotes drive which nodes (close to lower-triangular for a bootstrapped
curve).
"""

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from ..curves.curve import ForwardRateCurve
from ..helpers.visitor import unique_labels

logger = logging.getLogger(__name__)


def quote_jacobian(
    helpers: Sequence,
    curve: ForwardRateCurve,
    bump_bp: float = 1.0
) -> pd.DataFrame:
    """
    Sensitivity of implied quotes to curve node zero rates.

    Args:
        helpers: Rate helpers to reprice
        curve: Curve the helpers are calibrated to
        bump_bp: Node zero-rate bump in basis points

    Returns:
        DataFrame of implied quote change per 1bp, rows labelled by helper,
        columns by node date (the anchor node is excluded)
    """
    if bump_bp == 0:
        raise ValueError("bump_bp must be non-zero")

    helpers = list(helpers)
    node_dates = curve.node_dates[1:]
    jacobian = np.zeros((len(helpers), len(node_dates)))

    try:
        for h in helpers:
            h.set_term_structure(curve)
        base = np.array([h.implied_quote() for h in helpers])

        for j in range(len(node_dates)):
            bumped = curve.bump_node(j + 1, bump_bp)
            for h in helpers:
                h.set_term_structure(bumped)
            implied = np.array([h.implied_quote() for h in helpers])
            jacobian[:, j] = (implied - base) / bump_bp
    finally:
        for h in helpers:
            h.set_term_structure(curve)

    logger.debug("Quote jacobian: %d helpers x %d nodes", len(helpers), len(node_dates))
    return pd.DataFrame(jacobian, index=unique_labels(helpers), columns=node_dates)


__all__ = ["quote_jacobian"]
