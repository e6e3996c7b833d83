"""Percentile-driven color mapping for iteration rasters.

The raster is cut into buckets at evenly spaced percentiles of its own value
distribution, so every color of the gradient covers roughly the same share of
escaping pixels regardless of how the iteration counts are spread.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Hashable, Iterable, Sequence, TypeVar

import numpy as np

from .arithmetic import lerp
from .engine import IN_SET, validate_dimensions
from .errors import InvalidColor

T = TypeVar("T", bound=Hashable)

_HEX_COLOR = re.compile(r"[0-9a-fA-F]{6}")


def is_hex_color(color: str) -> bool:
    return isinstance(color, str) and _HEX_COLOR.fullmatch(color) is not None


def validate_color(color: str) -> str:
    if not is_hex_color(color):
        raise InvalidColor(f"Color must be exactly six hexadecimal digits, got {color!r}.")
    return color


def dec(hex_pair: str) -> int:
    return int(hex_pair, 16)


def hex_byte(value: int) -> str:
    return f"{value:02x}"


def split_channels(color: str) -> tuple[int, int, int]:
    """Parse ``RRGGBB`` into its three channel values."""

    validate_color(color)
    return dec(color[0:2]), dec(color[2:4]), dec(color[4:6])


def percentages(count: int) -> list[float]:
    """Evenly spaced percentages ``100/count, 200/count, ..., 100``."""

    validate_dimensions(count=count)
    return [(100 / count) * i for i in range(1, count + 1)]


def percentiles(raster: Sequence[int], percentages: Iterable[float]) -> list[int]:
    """Pick the sorted raster value found at each percentage position."""

    ordered = np.sort(np.asarray(raster, dtype=np.int64))
    if ordered.size == 0:
        raise ValueError("Cannot compute percentiles of an empty raster.")
    last = ordered.size - 1
    return [int(ordered[math.floor((p / 100) * last)]) for p in percentages]


def distinct(sequence: Iterable[T]) -> list[T]:
    """Drop repeated items, keeping the first occurrence of each."""

    seen: set[T] = set()
    data: list[T] = []
    for item in sequence:
        if item not in seen:
            seen.add(item)
            data.append(item)
    return data


def gradient(color1: str, color2: str, steps: int) -> list[str]:
    """Build ``steps`` colors from ``color1`` to ``color2`` inclusive.

    Intermediate channels are floored after interpolation. Fewer than two
    steps still yields both endpoints.
    """

    start = split_channels(color1)
    end = split_channels(color2)
    validate_dimensions(steps=steps)

    inner = steps - 2
    colors = [color1]
    for i in range(1, inner + 1):
        percentage = i / (inner + 2)
        channels = (math.floor(lerp(a, b, percentage)) for a, b in zip(start, end))
        colors.append("".join(hex_byte(channel) for channel in channels))
    colors.append(color2)
    return colors


def bucket_index(value: int, thresholds: Sequence[int], color_count: int) -> int:
    """Index of the bucket holding ``value``, clamped to ``[0, color_count)``."""

    following = next((i for i, threshold in enumerate(thresholds) if threshold > value), len(thresholds))
    return min(max(following - 1, 0), color_count - 1)


@dataclass(frozen=True)
class Palette:
    """Bucket edges and their colors for one raster."""

    thresholds: tuple[int, ...]
    colors: tuple[str, ...]
    inside_color: str

    def color_for(self, value: int) -> str:
        if value == IN_SET:
            return self.inside_color
        return self.colors[bucket_index(value, self.thresholds, len(self.colors))]

    def indices(self, raster: Sequence[int]) -> np.ndarray:
        """Vectorised :func:`bucket_index`; ``-1`` marks in-set pixels."""

        values = np.asarray(raster, dtype=np.int64)
        # thresholds are non-decreasing, so side="right" finds the first edge > value
        following = np.searchsorted(np.asarray(self.thresholds, dtype=np.int64), values, side="right")
        buckets = np.clip(following - 1, 0, len(self.colors) - 1)
        return np.where(values == IN_SET, IN_SET, buckets)

    def assign(self, raster: Sequence[int]) -> list[str]:
        lookup = self.colors
        return [self.inside_color if bucket == IN_SET else lookup[bucket] for bucket in self.indices(raster).tolist()]


def build_palette(raster: Sequence[int], color1: str, color2: str, inside_color: str, steps: int) -> Palette:
    """Run the full percentile pipeline over ``raster``."""

    validate_color(inside_color)
    edges = distinct(percentiles(raster, percentages(steps)))
    colors = gradient(color1, color2, len(edges))
    return Palette(thresholds=tuple(edges), colors=tuple(colors), inside_color=inside_color)
