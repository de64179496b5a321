"""Escape-time evaluation and iteration-grid assembly."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import tensorflow as tf

from .complex_number import ComplexNumber
from .viewport import Viewport

# Compared against the squared magnitude re**2 + im**2, i.e. an escape radius of sqrt(42).
ESCAPE_THRESHOLD = 42.0
MAX_ITERATIONS = 256
INSIDE = 255

BACKENDS = ("loop", "tensor")

_ORIGIN = ComplexNumber(0.0, 0.0)


@dataclass(frozen=True)
class IterationGrid:
    """Escape counts for a rendered frame.

    ``counts`` is stored in image order ``(height, width)``; ``grid[x, y]``
    and ``grid[x][y]`` both address column ``x`` and row ``y``.
    """

    counts: np.ndarray

    @property
    def width(self) -> int:
        return int(self.counts.shape[1])

    @property
    def height(self) -> int:
        return int(self.counts.shape[0])

    def __getitem__(self, key):
        if isinstance(key, tuple):
            x, y = key
            return int(self.counts[y, x])
        # A single index selects column ``key``, indexed by row.
        return self.counts[:, key]


def evaluate(c: ComplexNumber) -> int:
    """Return the 0-based iteration at which ``z -> z*z + c`` escapes, or 255."""

    z = _ORIGIN
    for i in range(MAX_ITERATIONS):
        z = z.times(z).add(c)
        if z.re * z.re + z.im * z.im > ESCAPE_THRESHOLD:
            return i
    return INSIDE


def render(viewport: Viewport, width: int | None = None, *, backend: str = "loop") -> IterationGrid:
    """Render the escape counts of every pixel in ``viewport``."""

    if backend == "tensor":
        return render_tensor(viewport, width)
    if backend != "loop":
        raise ValueError(f"Unknown backend '{backend}'. Valid choices: {', '.join(BACKENDS)}.")

    if width is None:
        width = viewport.width
    height = viewport.height_from_aspect(width)

    counts = np.empty((max(height, 0), max(width, 0)), dtype=np.uint8)
    for x in range(width):
        for y in range(height):
            counts[y, x] = evaluate(viewport.pixel_to_plane(x, y, width, height))
    return IterationGrid(counts)


@tf.function
def _escape_step(
    re: tf.Tensor,
    im: tf.Tensor,
    c_re: tf.Tensor,
    c_im: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
    i: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every point that has not escaped yet by one iteration."""

    re_new = (re * re - im * im) + c_re
    im_new = (re * im + im * re) + c_im
    re = tf.where(active, re_new, re)
    im = tf.where(active, im_new, im)
    magnitude = re * re + im * im
    escaped = tf.logical_and(active, magnitude > tf.constant(ESCAPE_THRESHOLD, dtype=tf.float64))
    counts = tf.where(escaped, tf.fill(tf.shape(counts), i), counts)
    active = tf.logical_and(active, tf.logical_not(escaped))
    return re, im, counts, active


@tf.function
def _escape_run(c_re: tf.Tensor, c_im: tf.Tensor) -> tf.Tensor:
    """Iterate the whole grid with a TensorFlow while loop and return the counts."""

    i = tf.constant(0, dtype=tf.int32)
    re = tf.zeros_like(c_re)
    im = tf.zeros_like(c_im)
    counts = tf.fill(tf.shape(c_re), tf.constant(INSIDE, dtype=tf.int32))
    active = tf.ones_like(counts, tf.bool)

    def cond(i, re, im, counts, active):
        return tf.logical_and(tf.less(i, MAX_ITERATIONS), tf.reduce_any(active))

    def body(i, re, im, counts, active):
        re, im, counts, active = _escape_step(re, im, c_re, c_im, counts, active, i)
        return i + 1, re, im, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, re, im, counts, active))
    return counts


def render_tensor(viewport: Viewport, width: int | None = None, *, device: str = "/CPU:0") -> IterationGrid:
    """Render the same counts as :func:`render` in one vectorised TensorFlow pass."""

    if width is None:
        width = viewport.width
    height = viewport.height_from_aspect(width)
    if height <= 0 or width <= 0:
        return IterationGrid(np.empty((max(height, 0), max(width, 0)), dtype=np.uint8))

    re_axis, im_axis = viewport.plane_axes(width, height)

    with tf.device(device):
        re_tf = tf.convert_to_tensor(re_axis, dtype=tf.float64)
        im_tf = tf.convert_to_tensor(im_axis, dtype=tf.float64)
        c_re, c_im = tf.meshgrid(re_tf, im_tf)
        counts = _escape_run(c_re, c_im)

    return IterationGrid(counts.numpy().astype(np.uint8))
