# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Union

Number = Union[int, float]


def _to_cents(dollars: Number) -> int:
    return int(round(float(dollars) * 100))  # Banker's rounding


class Money:
    """
    A monetary value with cent precision.

    Internally stores the value in cents (as an integer) so that balances
    accumulated over many simulation periods never drift the way repeated
    float additions do. Multiplication and division by scalars round back to
    whole cents.
    """

    __slots__ = ("cents",)

    def __init__(self, dollars: Union[Number, str] = 0):
        """Initialize a Money object with a value in dollars."""
        self.cents = _to_cents(float(dollars))

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create a Money object from a cent value."""
        obj = cls.__new__(cls)
        obj.cents = int(cents)
        return obj

    @classmethod
    def zero(cls) -> "Money":
        return cls.from_cents(0)

    def to_dollars(self) -> float:
        """Convert the internal cents representation to dollars."""
        return self.cents / 100

    def __repr__(self) -> str:
        return f"Money({self.to_dollars():.2f})"

    def __float__(self) -> float:
        return self.to_dollars()

    def __hash__(self) -> int:
        return hash(self.cents)

    def __neg__(self) -> "Money":
        return Money.from_cents(-self.cents)

    def __add__(self, other: Union["Money", Number]) -> "Money":
        if isinstance(other, Money):
            return Money.from_cents(self.cents + other.cents)
        if isinstance(other, (int, float)):
            return Money.from_cents(self.cents + _to_cents(other))
        return NotImplemented

    def __radd__(self, other: Number) -> "Money":
        # Allows sum() over Money values (start value 0)
        return self.__add__(other)

    def __sub__(self, other: Union["Money", Number]) -> "Money":
        if isinstance(other, Money):
            return Money.from_cents(self.cents - other.cents)
        if isinstance(other, (int, float)):
            return Money.from_cents(self.cents - _to_cents(other))
        return NotImplemented

    def __rsub__(self, other: Number) -> "Money":
        if isinstance(other, (int, float)):
            return Money.from_cents(_to_cents(other) - self.cents)
        return NotImplemented

    def __mul__(self, other: Number) -> "Money":
        """Multiply by a scalar, rounding to whole cents."""
        if isinstance(other, (int, float)):
            return Money.from_cents(int(round(self.cents * other)))
        return NotImplemented

    def __rmul__(self, other: Number) -> "Money":
        return self.__mul__(other)

    def __truediv__(self, other: Number) -> "Money":
        """Divide by a scalar, rounding to whole cents."""
        if isinstance(other, (int, float)):
            if other == 0:
                raise ZeroDivisionError("division by zero")
            return Money.from_cents(int(round(self.cents / other)))
        return NotImplemented

    def _other_cents(self, other: Union["Money", Number]) -> int:
        if isinstance(other, Money):
            return other.cents
        return _to_cents(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Money, int, float)):
            return self.cents == self._other_cents(other)
        return NotImplemented

    def __lt__(self, other: Union["Money", Number]) -> bool:
        return self.cents < self._other_cents(other)

    def __le__(self, other: Union["Money", Number]) -> bool:
        return self.cents <= self._other_cents(other)

    def __gt__(self, other: Union["Money", Number]) -> bool:
        return self.cents > self._other_cents(other)

    def __ge__(self, other: Union["Money", Number]) -> bool:
        return self.cents >= self._other_cents(other)
