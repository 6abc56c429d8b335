"""
Iterative curve bootstrapping engine.

Calibrates a ForwardRateCurve to a set of rate helpers:
1. Link the curve under construction into every helper
2. Sort helpers by pillar date (one curve node per pillar)
3. Solve each node's zero rate so the helper reprices its quote
4. Re-solve all nodes until no node moves by more than the accuracy
5. Verify repricing of every helper

Nodes are solved in zero-rate space with scipy's Brent solver, so each
helper only has to report its implied quote for the current curve.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.optimize import brentq

from ..conventions import DayCount
from ..errors import BootstrapError, DateOrderError
from ..helpers.visitor import describe, unique_labels
from .curve import ForwardRateCurve

logger = logging.getLogger(__name__)


@dataclass
class BootstrapConfig:
    """
    Bootstrap settings.

    Attributes:
        accuracy: Solver tolerance on node zero rates, also the convergence
            threshold between passes
        max_iterations: Maximum number of passes over all nodes
        zero_rate_bracket: Search interval for node zero rates
        interpolation_method: Curve interpolation ("log_linear" or "linear")
        day_count: Day count of the curve time axis
        tolerance: Maximum allowed repricing error
        currency: Currency code of the curve
    """
    accuracy: float = 1e-14
    max_iterations: int = 50
    zero_rate_bracket: Tuple[float, float] = (-0.1, 1.0)
    interpolation_method: str = "log_linear"
    day_count: DayCount = DayCount.ACT_365
    tolerance: float = 1e-10
    currency: str = "USD"


@dataclass
class BootstrapResult:
    """Result of curve bootstrap."""
    curve: ForwardRateCurve
    repricing_errors: Dict[str, float]
    success: bool
    message: str
    iterations: int = 0
    helpers: List = field(default_factory=list)
    error: Optional[BootstrapError] = None

    @property
    def max_error(self) -> float:
        if not self.repricing_errors:
            return 0.0
        return max(abs(e) for e in self.repricing_errors.values())

    def to_frame(self) -> pd.DataFrame:
        """One row per helper: description, quote and repricing error."""
        rows = []
        for label, helper in zip(unique_labels(self.helpers), self.helpers):
            row = describe(helper).to_dict()
            row["label"] = label
            row["repricing_error"] = self.repricing_errors.get(label, np.nan)
            rows.append(row)
        columns = ["label", "kind", "earliest_date", "pillar_date",
                   "maturity_date", "quote", "repricing_error"]
        return pd.DataFrame(rows, columns=columns).set_index("label")


class IterativeBootstrapper:
    """
    Bootstrap a discount curve from rate helpers.

    The bootstrapper owns the curve it builds; helpers only hold weak
    handles to it, so keep the returned result (or its curve) alive while
    the helpers are used.

    Attributes:
        evaluation_date: Curve anchor date
        config: Solver and curve settings
    """

    def __init__(self, evaluation_date: date, config: Optional[BootstrapConfig] = None):
        self.evaluation_date = evaluation_date
        self.config = config or BootstrapConfig()

    def bootstrap(self, helpers: Sequence) -> BootstrapResult:
        """
        Bootstrap a curve reproducing every helper's quote.

        Args:
            helpers: Calibration helpers, in any order

        Returns:
            BootstrapResult with curve and diagnostics

        Raises:
            DateOrderError: pillars duplicated or not after the evaluation date
        """
        config = self.config
        curve = ForwardRateCurve(
            anchor_date=self.evaluation_date,
            day_count=config.day_count,
            interpolation_method=config.interpolation_method,
            currency=config.currency
        )

        if not helpers:
            return BootstrapResult(
                curve=curve,
                repricing_errors={},
                success=False,
                message="No helpers provided"
            )

        for helper in helpers:
            helper.set_term_structure(curve)

        ordered = sorted(helpers, key=lambda h: h.pillar_date)
        self._check_pillars(ordered)
        logger.info(
            "Bootstrapping %d helpers from %s to %s",
            len(ordered), self.evaluation_date, ordered[-1].pillar_date
        )

        zero_rates = np.zeros(len(ordered))
        iterations = 0
        try:
            guess = 0.0
            for i, helper in enumerate(ordered):
                t = curve.time(helper.pillar_date)
                node = curve.add_node(helper.pillar_date, float(np.exp(-guess * t)))
                zero_rates[i] = self._solve_node(curve, helper, node)
                guess = zero_rates[i]
            iterations = 1

            while iterations < config.max_iterations:
                previous = zero_rates.copy()
                for i, helper in enumerate(ordered):
                    zero_rates[i] = self._solve_node(curve, helper, i + 1)
                iterations += 1
                change = float(np.max(np.abs(zero_rates - previous)))
                logger.debug("Pass %d: max node change %.3e", iterations, change)
                if change <= config.accuracy:
                    break
            else:
                logger.warning(
                    "Bootstrap did not converge to %.1e within %d passes",
                    config.accuracy, config.max_iterations
                )
        except BootstrapError as exc:
            logger.error("Bootstrap failed at pillar %s: %s", exc.pillar_date, exc)
            return BootstrapResult(
                curve=curve,
                repricing_errors={},
                success=False,
                message=str(exc),
                iterations=iterations,
                helpers=ordered,
                error=exc
            )

        curve.build()
        repricing_errors = self._verify_repricing(ordered)
        result = BootstrapResult(
            curve=curve,
            repricing_errors=repricing_errors,
            success=True,
            message="Bootstrap successful",
            iterations=iterations,
            helpers=ordered
        )
        if result.max_error > config.tolerance:
            result.success = False
            result.message = (
                f"Repricing error {result.max_error:.2e} exceeds tolerance {config.tolerance:.2e}"
            )
            logger.error(result.message)
        else:
            logger.info(
                "Bootstrap finished in %d passes, max repricing error %.2e",
                iterations, result.max_error
            )
        return result

    def _check_pillars(self, ordered: Sequence) -> None:
        previous = None
        for helper in ordered:
            pillar = helper.pillar_date
            if pillar <= self.evaluation_date:
                raise DateOrderError(
                    f"{helper!r} has pillar {pillar} not after evaluation date {self.evaluation_date}"
                )
            if previous is not None and pillar == previous.pillar_date:
                raise DateOrderError(
                    f"more than one helper with pillar {pillar}: {previous!r} and {helper!r}"
                )
            previous = helper

    def _solve_node(self, curve: ForwardRateCurve, helper, node: int) -> float:
        """Solve the zero rate of one node so that helper reprices its quote."""
        t = curve.time(helper.pillar_date)

        def objective(z: float) -> float:
            curve.set_node_value(node, float(np.exp(-z * t)))
            return helper.quote_error()

        lower, upper = self.config.zero_rate_bracket
        try:
            z, info = brentq(
                objective, lower, upper,
                xtol=self.config.accuracy, maxiter=200, full_output=True
            )
        except (ValueError, RuntimeError, ArithmeticError) as exc:
            quote = helper.quote.value() if helper.quote.is_valid() else None
            raise BootstrapError(
                f"cannot solve node at {helper.pillar_date} for {type(helper).__name__} "
                f"(quote {quote}): {exc}",
                pillar_date=helper.pillar_date,
                quote=quote,
                helper=helper
            ) from exc

        curve.set_node_value(node, float(np.exp(-z * t)))
        logger.debug(
            "Solved node %s: zero rate %.10f in %d iterations",
            helper.pillar_date, z, info.iterations
        )
        return z

    def _verify_repricing(self, helpers: Sequence) -> Dict[str, float]:
        """
        Verify that helpers reprice to their quotes.

        Returns dict of {label: error} where error = implied - quoted.
        """
        return {
            label: helper.implied_quote() - helper.quote_value()
            for label, helper in zip(unique_labels(helpers), helpers)
        }


def bootstrap_curve(
    evaluation_date: date,
    helpers: Sequence,
    config: Optional[BootstrapConfig] = None
) -> ForwardRateCurve:
    """
    Convenience function returning the bootstrapped curve.

    Raises:
        BootstrapError: if any node cannot be solved or repricing fails
    """
    result = IterativeBootstrapper(evaluation_date, config).bootstrap(helpers)
    if not result.success:
        if result.error is not None:
            raise result.error
        raise BootstrapError(f"Bootstrap failed: {result.message}")
    return result.curve


__all__ = [
    "BootstrapConfig",
    "BootstrapResult",
    "IterativeBootstrapper",
    "bootstrap_curve",
]
