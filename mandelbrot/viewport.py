"""Mutable window onto the complex plane."""

from __future__ import annotations

import logging
import math

import numpy as np

from .complex_number import ComplexNumber

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1920
DEFAULT_LIMITS = (-2.0, 1.0, -1.0, 1.0)

_AXIS_ALIASES = {"re": "re", "x": "re", "im": "im", "y": "im"}


class Viewport:
    """Rectangular plane region plus the output pixel width.

    The bounds always satisfy ``re_max > re_min`` and ``im_max > im_min``.
    Updates that would break this are rejected per axis and reported through
    the module logger; the previous bounds stay in place.
    """

    def __init__(self, width: int = DEFAULT_WIDTH) -> None:
        self.re_min, self.re_max, self.im_min, self.im_max = DEFAULT_LIMITS

        if width > 0:
            self._width = int(width)
        else:
            logger.warning("Invalid picture width: %s", width)
            logger.warning("Assuming a picture width of %d pixels.", DEFAULT_WIDTH)
            self._width = DEFAULT_WIDTH

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self.height_from_aspect()

    def set_limits(self, re_min: float, re_max: float, im_min: float, im_max: float) -> None:
        if re_max > re_min:
            self.re_min = float(re_min)
            self.re_max = float(re_max)
        else:
            logger.warning("Invalid real limits: re_min = %s and re_max = %s", re_min, re_max)

        if im_max > im_min:
            self.im_min = float(im_min)
            self.im_max = float(im_max)
        else:
            logger.warning("Invalid imaginary limits: im_min = %s and im_max = %s", im_min, im_max)

    def get_limits(self) -> tuple[float, float, float, float]:
        return self.re_min, self.re_max, self.im_min, self.im_max

    def get_center(self) -> tuple[float, float]:
        return (self.re_min + self.re_max) / 2, (self.im_min + self.im_max) / 2

    def set_center(self, x: float, y: float) -> None:
        """Move the view so ``(x, y)`` is its centre, keeping the current spans."""

        re_span = self.re_max - self.re_min
        im_span = self.im_max - self.im_min
        self.set_limits(x - re_span / 2, x + re_span / 2, y - im_span / 2, y + im_span / 2)

    def move(self, axis: str, delta: float) -> None:
        """Shift one axis by ``delta``. ``axis`` is ``"re"``/``"x"`` or ``"im"``/``"y"``."""

        target = _AXIS_ALIASES.get(str(axis).lower())
        if target == "re":
            self.set_limits(self.re_min + delta, self.re_max + delta, self.im_min, self.im_max)
        elif target == "im":
            self.set_limits(self.re_min, self.re_max, self.im_min + delta, self.im_max + delta)
        else:
            logger.warning("Invalid axis %r, expected one of: re, im.", axis)

    def scale(self, factor: float) -> None:
        """Zoom about the current centre. ``factor > 1`` zooms in, ``factor < 1`` zooms out."""

        if not factor > 0:
            logger.warning("Invalid scale factor: %s (must be positive)", factor)
            return

        center_re, center_im = self.get_center()
        half_re = self.re_max - center_re
        half_im = self.im_max - center_im
        self.set_limits(
            center_re - half_re / factor,
            center_re + half_re / factor,
            center_im - half_im / factor,
            center_im + half_im / factor,
        )

    def pixel_to_plane(self, x: float, y: float, width: float, height: float) -> ComplexNumber:
        # Row 0 is the top edge, so the imaginary axis runs downwards.
        re = (self.re_max - self.re_min) / width * x + self.re_min
        im = (self.im_min - self.im_max) / height * y + self.im_max
        return ComplexNumber(re, im)

    def plane_axes(self, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
        """Return the real value of every column and the imaginary value of every row."""

        columns = np.arange(width, dtype=np.float64)
        rows = np.arange(height, dtype=np.float64)
        re_axis = (self.re_max - self.re_min) / width * columns + self.re_min
        im_axis = (self.im_min - self.im_max) / height * rows + self.im_max
        return re_axis, im_axis

    def height_from_aspect(self, width: int | None = None) -> int:
        if width is None:
            width = self._width
        aspect = (self.re_max - self.re_min) / (self.im_max - self.im_min)
        return math.floor(width / aspect)

    def __repr__(self) -> str:
        return (
            f"Viewport(width={self._width}, re=[{self.re_min:.6g}, {self.re_max:.6g}], "
            f"im=[{self.im_min:.6g}, {self.im_max:.6g}])"
        )
