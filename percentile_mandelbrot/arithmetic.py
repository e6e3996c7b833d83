"""Complex value type and the scalar helpers shared by the engine and palette."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    """Immutable point of the complex plane."""

    real: float
    imaginary: float

    def __add__(self, other: Complex) -> Complex:
        return add(self, other)

    def __mul__(self, other: Complex) -> Complex:
        return multiply(self, other)

    def __abs__(self) -> float:
        return magnitude(self)


ZERO = Complex(0.0, 0.0)


def add(a: Complex, b: Complex) -> Complex:
    return Complex(a.real + b.real, a.imaginary + b.imaginary)


def multiply(a: Complex, b: Complex) -> Complex:
    return Complex(
        a.real * b.real - a.imaginary * b.imaginary,
        a.real * b.imaginary + a.imaginary * b.real,
    )


def magnitude(a: Complex) -> float:
    return math.sqrt(a.real * a.real + a.imaginary * a.imaginary)


def lerp(a: float, b: float, p: float) -> float:
    """Linear interpolation between ``a`` and ``b`` at fraction ``p``."""

    return (1 - p) * a + p * b
