"""In-memory pixel surface and export through Pillow."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import PIL.Image

from .engine import validate_dimensions
from .palette import Palette, split_channels


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


class ImageSurface:
    """RGB bitmap accepting ``(x, y, color)`` fills."""

    def __init__(self, width: int, height: int, background: str = "000000") -> None:
        validate_dimensions(width=width, height=height)
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self._pixels[...] = split_channels(background)
        self._cache: dict[str, tuple[int, int, int]] = {}

    def fill(self, x: int, y: int, color: str) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Pixel ({x}, {y}) lies outside the {self.width}x{self.height} surface.")
        rgb = self._cache.get(color)
        if rgb is None:
            rgb = self._cache[color] = split_channels(color)
        self._pixels[y, x] = rgb

    def to_array(self) -> np.ndarray:
        return self._pixels.copy()

    def to_image(self) -> PIL.Image.Image:
        return PIL.Image.fromarray(self._pixels)

    def save(self, path: Path, image_format: str = "png") -> Path:
        """Write the surface to ``path`` using the provided format."""

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(str(path), format=_pil_format_name(image_format))
        return path


def paint(raster: Sequence[int], width: int, palette: Palette, surface: ImageSurface) -> ImageSurface:
    """Fill ``surface`` with the palette color of every raster value, row-major."""

    if len(raster) != width * surface.height or width != surface.width:
        raise ValueError(
            f"Raster of {len(raster)} values does not fit a {surface.width}x{surface.height} surface."
        )
    for index, color in enumerate(palette.assign(raster)):
        cy, cx = divmod(index, width)
        surface.fill(cx, cy, color)
    return surface
