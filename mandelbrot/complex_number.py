"""Minimal complex value type used by the escape-time evaluator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ComplexNumber:
    """Immutable complex number with float64 components."""

    re: float
    im: float

    def add(self, other: ComplexNumber) -> ComplexNumber:
        return ComplexNumber(self.re + other.re, self.im + other.im)

    def times(self, other: ComplexNumber) -> ComplexNumber:
        return ComplexNumber(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def squared_magnitude(self) -> float:
        return self.re * self.re + self.im * self.im

    __add__ = add
    __mul__ = times


def add(a: ComplexNumber, b: ComplexNumber) -> ComplexNumber:
    return a.add(b)


def times(a: ComplexNumber, b: ComplexNumber) -> ComplexNumber:
    return a.times(b)
