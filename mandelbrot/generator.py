"""Utilities for rendering zoom sequences of a viewport."""

from __future__ import annotations

from typing import Iterable, Iterator

import numpy as np

from .coloring import PixelBuffer, colorize
from .renderer import render
from .viewport import Viewport

EASINGS = ("linear", "ease")


def _ease_in_out(t: float) -> float:
    return 3 * t ** 2 - 2 * t ** 3


def compute_zoom_factors(
    frames: int,
    zoom_factor: float,
    *,
    final_zoom: float | None = None,
    easing: str = "ease",
) -> np.ndarray:
    """Compute per-frame magnifications for ``Viewport.scale``.

    Frame 0 always keeps the starting view (factor 1). Without ``final_zoom``
    every later frame is magnified by ``zoom_factor``; with a positive
    ``final_zoom`` the factors multiply to ``final_zoom`` following ``easing``.
    """

    if frames <= 0:
        return np.array([], dtype=np.float64)

    if final_zoom is None or final_zoom <= 0:
        factors = np.full(frames, np.float64(zoom_factor), dtype=np.float64)
        factors[0] = 1.0
        return factors

    easing_mode = easing.lower()
    if easing_mode not in EASINGS:
        raise ValueError(f"Unknown easing '{easing}'. Valid choices: {', '.join(EASINGS)}.")
    ease = (lambda u: u) if easing_mode == "linear" else _ease_in_out

    if frames == 1:
        alphas = np.array([1.0], dtype=np.float64)
    else:
        alphas = np.array([ease(i / (frames - 1)) for i in range(frames)], dtype=np.float64)
    alphas = np.clip(alphas, 0.0, 1.0)
    increments = np.diff(np.concatenate(([0.0], alphas)))
    return np.exp(increments * np.log(final_zoom))


def zoom_frames(
    viewport: Viewport,
    factors: Iterable[float],
    *,
    width: int | None = None,
    colored: bool = True,
    backend: str = "loop",
) -> Iterator[PixelBuffer]:
    """Scale ``viewport`` by each factor in turn and yield the rendered frame.

    The viewport is mutated in place and keeps the last frame's bounds.
    """

    for factor in factors:
        viewport.scale(float(factor))
        yield colorize(render(viewport, width, backend=backend), colored)
