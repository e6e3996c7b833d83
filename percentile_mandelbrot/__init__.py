"""Public API for percentile-colored Mandelbrot rendering."""

from .arithmetic import Complex, add, lerp, magnitude, multiply
from .engine import DEFAULT_VIEWPORT, IN_SET, Viewport, build, escape_time, pixel_to_complex
from .errors import InvalidColor, InvalidDimension
from .palette import (
    Palette,
    bucket_index,
    build_palette,
    dec,
    distinct,
    gradient,
    hex_byte,
    is_hex_color,
    percentages,
    percentiles,
    validate_color,
)
from .surface import ImageSurface, paint

__all__ = [
    "Complex",
    "DEFAULT_VIEWPORT",
    "IN_SET",
    "ImageSurface",
    "InvalidColor",
    "InvalidDimension",
    "Palette",
    "Viewport",
    "add",
    "bucket_index",
    "build",
    "build_palette",
    "dec",
    "distinct",
    "escape_time",
    "gradient",
    "hex_byte",
    "is_hex_color",
    "lerp",
    "magnitude",
    "multiply",
    "paint",
    "percentages",
    "percentiles",
    "pixel_to_complex",
    "validate_color",
]
