"""Sequential escape-time evaluation of the Mandelbrot set."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Callable, Optional

from .arithmetic import ZERO, Complex, lerp, magnitude
from .errors import InvalidDimension

IN_SET = -1
HORIZON = 2.0


@dataclass(frozen=True)
class Viewport:
    """Region of the complex plane mapped onto the raster."""

    left: float = -2.5
    right: float = 1.5
    bottom: float = -1.5
    top: float = 1.5


DEFAULT_VIEWPORT = Viewport()


def validate_dimensions(**values: int) -> None:
    """Reject any named value that is not a positive integer."""

    for name, value in values.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidDimension(f"{name} must be an integer, got {value!r}.")
        if value <= 0:
            raise InvalidDimension(f"{name} must be positive, got {value}.")


def pixel_to_complex(viewport: Viewport, width: int, height: int, cx: int, cy: int) -> Complex:
    # cx / width rather than cx / (width - 1): the right and top edges are never sampled.
    x = lerp(viewport.left, viewport.right, cx / width)
    y = lerp(viewport.bottom, viewport.top, cy / height)
    return Complex(x, y)


def escape_time(c: Complex, iterations: int) -> int:
    """Return the step at which the orbit of ``c`` leaves the disc, or ``IN_SET``."""

    z = ZERO
    i = 0
    while magnitude(z) <= HORIZON and i < iterations:
        z = z * z + c
        i += 1

    if i == iterations:
        return IN_SET
    return i


def build(
    iterations: int,
    width: int,
    height: int,
    *,
    viewport: Viewport = DEFAULT_VIEWPORT,
    progress: Optional[Callable[[int, int], None]] = None,
) -> tuple[int, ...]:
    """Compute the row-major iteration raster for a ``width`` x ``height`` image.

    ``progress``, when given, is called with ``(row, height)`` before each row.
    """

    validate_dimensions(iterations=iterations, width=width, height=height)

    data: list[int] = []
    for cy in range(height):
        if progress is not None:
            progress(cy, height)
        for cx in range(width):
            c = pixel_to_complex(viewport, width, height, cx, cy)
            data.append(escape_time(c, iterations))
    return tuple(data)
