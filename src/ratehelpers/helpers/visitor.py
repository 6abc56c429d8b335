"""
Double dispatch over the calibration helper family.

HelperVisitor has one method per concrete helper family. Each default
falls back to visit_calibration_helper, which rejects the helper, so a
visitor only implements the families it understands. Helper.accept
always calls the method of its own family, never the base one.
"""

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional


class HelperKind(Enum):
    """Tag of the six instrument families."""
    FUTURES = "FUT"
    DEPOSIT = "DEPOSIT"
    FRA = "FRA"
    SWAP = "SWAP"
    BMA_SWAP = "BMA"
    FX_SWAP = "FXSWAP"


class HelperVisitor:
    """Base visitor; override the visit methods of the supported families."""

    def visit_calibration_helper(self, helper) -> Any:
        raise TypeError(f"{type(self).__name__} cannot visit {type(helper).__name__}")

    def visit_futures_helper(self, helper) -> Any:
        return self.visit_calibration_helper(helper)

    def visit_deposit_helper(self, helper) -> Any:
        return self.visit_calibration_helper(helper)

    def visit_fra_helper(self, helper) -> Any:
        return self.visit_calibration_helper(helper)

    def visit_swap_helper(self, helper) -> Any:
        return self.visit_calibration_helper(helper)

    def visit_bma_swap_helper(self, helper) -> Any:
        return self.visit_calibration_helper(helper)

    def visit_fx_swap_helper(self, helper) -> Any:
        return self.visit_calibration_helper(helper)


@dataclass
class HelperDescription:
    """Reporting row for one helper."""
    kind: HelperKind
    label: str
    earliest_date: date
    pillar_date: date
    maturity_date: date
    quote: Optional[float]

    def to_dict(self) -> Dict:
        row = asdict(self)
        row["kind"] = self.kind.value
        return row


class HelperDescriber(HelperVisitor):
    """Visitor producing a HelperDescription for every helper family."""

    def _describe(self, helper, tenor: str) -> HelperDescription:
        quote = helper.quote.value() if helper.quote.is_valid() else None
        return HelperDescription(
            kind=helper.kind,
            label=f"{helper.kind.value} {tenor}",
            earliest_date=helper.earliest_date,
            pillar_date=helper.pillar_date,
            maturity_date=helper.maturity_date,
            quote=quote,
        )

    def visit_futures_helper(self, helper) -> HelperDescription:
        return self._describe(helper, helper.earliest_date.strftime("%b%y").upper())

    def visit_deposit_helper(self, helper) -> HelperDescription:
        return self._describe(helper, str(helper.index.tenor))

    def visit_fra_helper(self, helper) -> HelperDescription:
        start = helper.period_to_start
        try:
            label = f"{start.months}x{start.months + helper.index.tenor.months}"
        except ValueError:
            label = f"{start}+{helper.index.tenor}"
        return self._describe(helper, label)

    def visit_swap_helper(self, helper) -> HelperDescription:
        label = str(helper.tenor)
        if helper.forward_start.length != 0:
            label = f"{helper.forward_start}x{helper.tenor}"
        return self._describe(helper, label)

    def visit_bma_swap_helper(self, helper) -> HelperDescription:
        return self._describe(helper, str(helper.tenor))

    def visit_fx_swap_helper(self, helper) -> HelperDescription:
        return self._describe(helper, str(helper.tenor))


def describe(helper) -> HelperDescription:
    return helper.accept(HelperDescriber())


def unique_labels(helpers) -> List[str]:
    """Report labels of helpers, made unique with the pillar date where needed."""
    labels = [describe(h).label for h in helpers]
    counts: Dict[str, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    return [
        f"{label} @{h.pillar_date.isoformat()}" if counts[label] > 1 else label
        for label, h in zip(labels, helpers)
    ]


__all__ = [
    "HelperKind",
    "HelperVisitor",
    "HelperDescription",
    "HelperDescriber",
    "describe",
    "unique_labels",
]
