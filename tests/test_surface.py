import numpy as np
import PIL.Image
import pytest

from percentile_mandelbrot.engine import IN_SET, build
from percentile_mandelbrot.errors import InvalidDimension
from percentile_mandelbrot.palette import Palette, build_palette, split_channels
from percentile_mandelbrot.surface import ImageSurface, paint


def test_surface_starts_with_background():
    surface = ImageSurface(3, 2, background="ede7f6")
    pixels = surface.to_array()

    assert pixels.shape == (2, 3, 3)
    assert (pixels == np.array([0xED, 0xE7, 0xF6], dtype=np.uint8)).all()


def test_fill_sets_a_single_pixel():
    surface = ImageSurface(3, 2, background="ffffff")
    surface.fill(1, 0, "ff0000")
    pixels = surface.to_array()

    assert pixels[0, 1].tolist() == [255, 0, 0]
    assert pixels[1, 2].tolist() == [255, 255, 255]


def test_surface_rejects_bad_dimensions():
    with pytest.raises(InvalidDimension):
        ImageSurface(0, 4)


def test_save_writes_image(tmp_path):
    surface = ImageSurface(5, 4, background="512da8")
    path = surface.save(tmp_path / "nested" / "out.png", "png")

    assert path.is_file()
    with PIL.Image.open(path) as image:
        assert image.size == (5, 4)
        assert image.mode == "RGB"
        assert image.getpixel((0, 0)) == (0x51, 0x2D, 0xA8)


def test_paint_fills_row_major():
    palette = Palette(thresholds=(0, 1), colors=("000000", "ffffff"), inside_color="ff0000")
    raster = (0, 1, IN_SET, 1, 0, IN_SET)
    surface = paint(raster, 3, palette, ImageSurface(3, 2))
    pixels = surface.to_array()

    assert pixels[0, 0].tolist() == [0, 0, 0]
    assert pixels[0, 1].tolist() == [255, 255, 255]
    assert pixels[0, 2].tolist() == [255, 0, 0]
    assert pixels[1, 0].tolist() == [255, 255, 255]
    assert pixels[1, 2].tolist() == [255, 0, 0]


def test_paint_matches_palette_for_rendered_raster():
    width, height = 16, 10
    raster = build(40, width, height)
    palette = build_palette(raster, "512da8", "d1c4e9", "ede7f6", 32)
    pixels = paint(raster, width, palette, ImageSurface(width, height)).to_array()

    for index, value in enumerate(raster):
        cy, cx = divmod(index, width)
        assert tuple(pixels[cy, cx]) == split_channels(palette.color_for(value))


def test_paint_rejects_mismatched_raster():
    palette = Palette(thresholds=(0,), colors=("000000", "ffffff"), inside_color="ff0000")
    with pytest.raises(ValueError):
        paint((0, 0, 0), 2, palette, ImageSurface(2, 2))


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_fill_rejects_pixels_outside_surface(x, y):
    surface = ImageSurface(3, 2, background="ffffff")
    with pytest.raises(ValueError):
        surface.fill(x, y, "000000")
    assert (surface.to_array() == 255).all()
