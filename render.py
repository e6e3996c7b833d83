import os
import time
import sys
import warnings
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import numpy as np
from matplotlib import colors as mpl_colors

from percentile_mandelbrot import (
    IN_SET,
    ImageSurface,
    InvalidColor,
    InvalidDimension,
    build,
    build_palette,
    paint,
    is_hex_color,
)

BACKENDS = ("python", "tensorflow")


@dataclass(frozen=True)
class RenderConfig:
    iterations: int
    width: int
    height: int
    color1: str
    color2: str
    inside_color: str
    steps: int
    backend: str
    output: Path
    image_format: str


def build_parser():
    parser = ArgumentParser(description="Render the Mandelbrot set with a percentile color gradient.")

    parser.add_argument('--iterations', type=int,
                        dest='iterations', help='maximum number of iterations per pixel',
                        metavar='ITERATIONS', default=5000)

    parser.add_argument('--width', type=int,
                        dest='width', help='image width in pixels',
                        metavar='WIDTH', default=1024)

    parser.add_argument('--height', type=int,
                        dest='height', help='image height in pixels (default: two thirds of the width)',
                        metavar='HEIGHT', default=None)

    parser.add_argument('--color1', type=str,
                        dest='color1', help='gradient start color, used for the lowest percentile bucket',
                        metavar='COLOR', default='512da8')

    parser.add_argument('--color2', type=str,
                        dest='color2', help='gradient end color, used for the highest percentile bucket',
                        metavar='COLOR', default='d1c4e9')

    parser.add_argument('--inside-color', type=str,
                        dest='inside_color', help='color for points that never escape',
                        metavar='COLOR', default='ede7f6')

    parser.add_argument('--steps', type=int,
                        dest='steps', help='number of percentile steps used to build the gradient',
                        metavar='STEPS', default=4000)

    parser.add_argument('--backend', choices=BACKENDS, default='python',
                        help='escape-time evaluator: pure "python" or vectorised "tensorflow" on the CPU')

    parser.add_argument('--output', dest='output', type=str, default=None,
                        help='destination image file (default: mandelbrot.<format>)')

    parser.add_argument('--format', type=str,
                        dest='format', help='image file format. Can be any extension supported by Pillow. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def normalize_color(value: str) -> str:
    """Return ``value`` as six lowercase hex digits without the leading ``#``."""

    candidate = value.strip()
    if is_hex_color(candidate):
        return candidate.lower()
    try:
        return mpl_colors.to_hex(candidate).lstrip('#')
    except ValueError as exc:
        raise InvalidColor(f"Unrecognised color {value!r}.") from exc


def resolve_config(opt, parser: ArgumentParser) -> RenderConfig:
    height = opt.height if opt.height is not None else (opt.width * 2) // 3

    for name, value in (("--iterations", opt.iterations), ("--width", opt.width),
                        ("--height", height), ("--steps", opt.steps)):
        if value <= 0:
            parser.error(f"{name} must be a positive integer, got {value}.")

    resolved_colors = {}
    for name in ("color1", "color2", "inside_color"):
        try:
            resolved_colors[name] = normalize_color(getattr(opt, name))
        except InvalidColor as exc:
            parser.error(f"--{name.replace('_', '-')}: {exc}")

    if opt.steps > opt.width * height:
        warnings.warn(
            f"--steps {opt.steps} exceeds the {opt.width * height} pixels of the image; "
            "repeated percentiles will be merged into fewer colors.",
            UserWarning,
            stacklevel=2,
        )

    image_format = (opt.format or "png").lower().lstrip(".") or "png"

    if opt.output:
        output_path = Path(opt.output).expanduser()
        if output_path.exists() and output_path.is_dir():
            parser.error("--output must point to a file, not a directory.")
        suffix = output_path.suffix
        expected_suffix = f".{image_format}"
        if suffix:
            if suffix.lower() != expected_suffix.lower():
                parser.error(f"--output extension {suffix} does not match --format {image_format}.")
        else:
            output_path = output_path.with_suffix(expected_suffix)
    else:
        output_path = Path(f"mandelbrot.{image_format}")

    return RenderConfig(
        iterations=opt.iterations,
        width=opt.width,
        height=height,
        steps=opt.steps,
        backend=opt.backend,
        output=output_path.expanduser().resolve(),
        image_format=image_format,
        **resolved_colors,
    )


def compute_raster(config: RenderConfig):
    if config.backend == "tensorflow":
        import tensorflow as tf

        if _suppress_messages:
            tf.get_logger().setLevel("ERROR")
        log("TensorFlow version: %s" % tf.__version__)

        from percentile_mandelbrot.renderer import build_vectorized

        return build_vectorized(config.iterations, config.width, config.height)

    def report(row, height):
        print("row {0} out of {1}".format(row, height), end='\r')

    raster = build(config.iterations, config.width, config.height, progress=report)
    print()
    return raster


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    config = resolve_config(opt, parser)
    log("iterations: %d" % config.iterations)
    log("dims: %dx%d" % (config.width, config.height))
    log("backend: %s" % config.backend)

    print("Computing %dx%d pixels with %d iterations..." % (config.width, config.height, config.iterations))
    start_time = time.perf_counter()
    try:
        raster = compute_raster(config)
        palette = build_palette(raster, config.color1, config.color2, config.inside_color, config.steps)
    except (InvalidDimension, InvalidColor) as exc:
        parser.error(str(exc))
    log("Calculation finished in %.2f seconds." % (time.perf_counter() - start_time))

    log("distinct percentiles: %d" % len(palette.thresholds))
    inside = int(np.count_nonzero(np.asarray(raster) == IN_SET))
    log("points in set: %d of %d" % (inside, len(raster)))

    surface = ImageSurface(config.width, config.height, background=config.inside_color)
    paint(raster, config.width, palette, surface)
    path = surface.save(config.output, config.image_format)
    print("Image saved to %s" % path)


if __name__ == '__main__':
    main()
