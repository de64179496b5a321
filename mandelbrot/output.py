"""Display and file collaborators for rendered pixel buffers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import imageio
import PIL.Image

from .coloring import PixelBuffer

logger = logging.getLogger(__name__)


def to_image(buffer: PixelBuffer) -> PIL.Image.Image:
    return PIL.Image.fromarray(buffer.pixels)


def display(buffer: PixelBuffer, title: str = "Mandelbrot set") -> None:
    """Open the buffer in the platform image viewer."""

    to_image(buffer).show(title=title)


def encode_png(buffer: PixelBuffer, path: str | Path) -> bool:
    """Write ``buffer`` as a PNG file. Failures are logged and reported as ``False``."""

    output_path = Path(path).expanduser()
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        to_image(buffer).save(str(output_path), format="PNG")
    except OSError as exc:
        logger.error("Could not save the image to %s: %s", output_path, exc)
        return False
    logger.info("Saved %dx%d image to %s", buffer.width, buffer.height, output_path)
    return True


def write_gif(buffers: Iterable[PixelBuffer], path: str | Path, *, duration: float = 0.1) -> bool:
    """Write every buffer as one frame of a looping GIF."""

    output_path = Path(path).expanduser()
    frames = 0
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with imageio.get_writer(str(output_path), mode='I', duration=duration, loop=0) as writer:
            for buffer in buffers:
                writer.append_data(buffer.pixels)
                frames += 1
    except OSError as exc:
        logger.error("Could not save the animation to %s: %s", output_path, exc)
        return False
    logger.info("Saved %d frames to %s", frames, output_path)
    return True
