"""
Relinkable curve handle.

A CurveHandle references a curve that can be swapped out. Helpers hold the
curve under construction through a weak handle, since the bootstrap driver
(or the caller) owns that curve and rebinds it with link_to before each
solve pass. Exogenous curves (discounting, forwarding, collateral) are held
through owning handles and stay alive as long as the helper does.
"""

import weakref
from typing import Optional

from ..errors import CurveNotSetError


class CurveHandle:
    """
    Rebindable reference to a ForwardRateCurve.

    Attributes:
        description: What the handle points to, used in error messages
        owning: Whether the handle keeps its curve alive
    """

    def __init__(self, curve=None, description: str = "term structure", owning: bool = False):
        self.description = description
        self.owning = owning
        self._ref: Optional[weakref.ref] = None
        self._curve = None
        if curve is not None:
            self.link_to(curve)

    def link_to(self, curve) -> None:
        """Rebind to curve (None empties the handle)."""
        if self.owning:
            self._curve = curve
        else:
            self._ref = None if curve is None else weakref.ref(curve)

    def _target(self):
        if self.owning:
            return self._curve
        return self._ref() if self._ref is not None else None

    @property
    def empty(self) -> bool:
        return self._target() is None

    def current_link(self):
        """The linked curve; raises CurveNotSetError if empty or released."""
        curve = self._target()
        if curve is None:
            raise CurveNotSetError(f"{self.description} not set")
        return curve

    def is_linked_to(self, curve) -> bool:
        return curve is not None and self._target() is curve

    def __repr__(self) -> str:
        state = "empty" if self.empty else repr(self._target())
        return f"CurveHandle({self.description}: {state})"


__all__ = ["CurveHandle"]
