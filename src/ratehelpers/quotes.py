"""
Market quotes.

A Quote is an observable scalar read by calibration helpers. A literal
number becomes an immutable quote; a SimpleQuote can be updated between
bootstrap runs and every helper holding it sees the new value.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union


class Quote(ABC):
    """Abstract observable scalar."""

    @abstractmethod
    def value(self) -> float:
        """Current value; raises ValueError if the quote holds no value."""

    @abstractmethod
    def is_valid(self) -> bool:
        pass


class SimpleQuote(Quote):
    """Settable quote."""

    def __init__(self, value: Optional[float] = None):
        self._value = None if value is None else float(value)

    def value(self) -> float:
        if self._value is None:
            raise ValueError("invalid SimpleQuote: no value set")
        return self._value

    def set_value(self, value: Optional[float]) -> float:
        """Set a new value and return the change from the previous one."""
        new = None if value is None else float(value)
        diff = 0.0
        if new is not None and self._value is not None:
            diff = new - self._value
        self._value = new
        return diff

    def reset(self) -> None:
        self._value = None

    def is_valid(self) -> bool:
        return self._value is not None

    def __repr__(self) -> str:
        return f"SimpleQuote({self._value!r})"


class LiteralQuote(Quote):
    """Immutable quote wrapping a number."""

    __slots__ = ("_value",)

    def __init__(self, value: float):
        self._value = float(value)

    def value(self) -> float:
        return self._value

    def is_valid(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"LiteralQuote({self._value!r})"


QuoteLike = Union[Quote, float, int]


def as_quote(value: Optional[QuoteLike]) -> Optional[Quote]:
    """Wrap a number into an immutable quote; quotes and None pass through."""
    if value is None or isinstance(value, Quote):
        return value
    return LiteralQuote(value)


__all__ = [
    "Quote",
    "SimpleQuote",
    "LiteralQuote",
    "QuoteLike",
    "as_quote",
]
