"""Input validation errors raised before any computation starts."""

from __future__ import annotations


class InvalidDimension(ValueError):
    """A width, height, iteration cap or count is not a positive integer."""


class InvalidColor(ValueError):
    """A color string is not exactly six hexadecimal digits."""
