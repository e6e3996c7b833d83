"""Vectorised escape-time evaluation with TensorFlow.

Every pixel is iterated with the same float64 operations as
:func:`percentile_mandelbrot.engine.escape_time`, so the raster produced here
matches the sequential engine value for value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import tensorflow as tf

from .engine import DEFAULT_VIEWPORT, HORIZON, IN_SET, Viewport, validate_dimensions


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of the Mandelbrot set."""

    width: int
    height: int
    iterations: int
    viewport: Viewport = field(default=DEFAULT_VIEWPORT)


@dataclass(frozen=True)
class RenderResult:
    """Container for the numerical results of a render."""

    iterations: np.ndarray
    params: RenderParameters

    @property
    def raster(self) -> tuple[int, ...]:
        return tuple(int(value) for value in self.iterations.ravel())


@tf.function
def _mandelbrot_step(
    zr: tf.Tensor, zi: tf.Tensor, cr: tf.Tensor, ci: tf.Tensor, ns: tf.Tensor, active: tf.Tensor
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Perform a single iteration for points that have not escaped."""

    zr_new = (zr * zr - zi * zi) + cr
    zi_new = (zr * zi + zi * zr) + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    ns = ns + tf.cast(active, tf.int32)
    az = tf.sqrt(zr * zr + zi * zi)
    horizon = tf.constant(HORIZON, dtype=az.dtype)
    active = tf.logical_and(active, az <= horizon)
    return zr, zi, ns, active


@tf.function
def _mandelbrot_run(cr: tf.Tensor, ci: tf.Tensor, max_iterations: tf.Tensor) -> tuple[tf.Tensor, ...]:
    """Iterate the Mandelbrot recurrence using a TensorFlow while loop."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    zr = tf.zeros_like(cr)
    zi = tf.zeros_like(ci)
    ns = tf.zeros(tf.shape(cr), dtype=tf.int32)
    active = tf.ones(tf.shape(cr), dtype=tf.bool)

    def cond(i, zr, zi, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, zr, zi, ns, active):
        zr, zi, ns, active = _mandelbrot_step(zr, zi, cr, ci, ns, active)
        return i + 1, zr, zi, ns, active

    return tf.while_loop(cond, body, (i, zr, zi, ns, active))


def _sample_axes(params: RenderParameters) -> tuple[np.ndarray, np.ndarray]:
    viewport = params.viewport
    px = np.arange(params.width, dtype=np.float64) / np.float64(params.width)
    py = np.arange(params.height, dtype=np.float64) / np.float64(params.height)
    x = (1 - px) * np.float64(viewport.left) + px * np.float64(viewport.right)
    y = (1 - py) * np.float64(viewport.bottom) + py * np.float64(viewport.top)
    return x, y


def render_frame(params: RenderParameters, *, device: Optional[str] = None) -> RenderResult:
    """Render the iteration counts for ``params`` as a ``(height, width)`` array."""

    validate_dimensions(iterations=params.iterations, width=params.width, height=params.height)

    x, y = _sample_axes(params)
    max_iterations = tf.constant(params.iterations, dtype=tf.int32)

    with tf.device(device if device is not None else "/CPU:0"):
        x_tf = tf.convert_to_tensor(x, dtype=tf.float64)
        y_tf = tf.convert_to_tensor(y, dtype=tf.float64)
        cr, ci = tf.meshgrid(x_tf, y_tf)

        _, _, _, ns, _ = _mandelbrot_run(cr, ci, max_iterations)

        escaped = tf.less(ns, max_iterations)
        counts = tf.where(escaped, ns, tf.fill(tf.shape(ns), tf.constant(IN_SET, dtype=ns.dtype)))

    return RenderResult(iterations=counts.numpy().astype(np.int64), params=params)


def build_vectorized(iterations: int, width: int, height: int, *, device: Optional[str] = None) -> tuple[int, ...]:
    """Drop-in replacement for :func:`percentile_mandelbrot.engine.build`."""

    params = RenderParameters(width=width, height=height, iterations=iterations)
    return render_frame(params, device=device).raster
