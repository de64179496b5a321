import logging
import os
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

import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")

from mandelbrot import (
    Viewport,
    colorize,
    compute_zoom_factors,
    display,
    encode_png,
    render,
    write_gif,
    zoom_frames,
)
from mandelbrot.generator import EASINGS
from mandelbrot.renderer import BACKENDS

logger = logging.getLogger("mandelbrot.plot")

# The classic view: the seahorse valley spiral near -0.747 - 0.088i.
DEFAULT_WIDTH = 1280
DEFAULT_CENTER = (-0.747162, -0.087584)
DEFAULT_SCALE = 10000.0


@dataclass(frozen=True)
class OutputConfig:
    image_path: Path | None
    gif_path: Path | None
    show: bool


def build_parser():
    parser = ArgumentParser(description="Render the Mandelbrot set with the escape-time algorithm.")

    parser.add_argument('--width', type=int,
                        dest='width', help='picture width in pixels; the height follows from the aspect ratio',
                        metavar='WIDTH', default=DEFAULT_WIDTH)

    parser.add_argument('--limits', type=float, nargs=4,
                        dest='limits', help='explicit plane bounds applied before any other view change',
                        metavar=('RE_MIN', 'RE_MAX', 'IM_MIN', 'IM_MAX'))

    parser.add_argument('--center', type=float, nargs=2,
                        dest='center', help='point of the complex plane to centre the view on',
                        metavar=('X', 'Y'))

    parser.add_argument('--move', nargs=2, action='append', default=[],
                        dest='moves', help='shift the view along an axis (re/x or im/y). May be repeated.',
                        metavar=('AXIS', 'DELTA'))

    parser.add_argument('--scale', type=float,
                        dest='scale', help='zoom factor about the centre; > 1 zooms in, < 1 zooms out',
                        metavar='SCALE')

    parser.add_argument('--grayscale', action='store_true',
                        help='render in grayscale instead of pseudocolor')

    parser.add_argument('--backend', choices=BACKENDS, default='loop',
                        help='"loop" evaluates pixel by pixel; "tensor" evaluates the whole grid with TensorFlow.')

    parser.add_argument('--output', dest='output', type=str,
                        help='PNG file to write the rendered image to')

    parser.add_argument('--show', action='store_true',
                        help='open the rendered image in the system viewer')

    parser.add_argument('--frames', type=int,
                        dest='frames', help='number of animation frames to render after the still image',
                        metavar='FRAMES', default=0)

    parser.add_argument('--zoom-factor', type=float,
                        dest='zoom_factor', help='magnification applied per animation frame',
                        metavar='ZOOM_FACTOR', default=1.25)

    parser.add_argument('--final-zoom', type=float, default=None,
                        help='total magnification reached by the last frame. If set, overrides --zoom-factor.')

    parser.add_argument('--easing', choices=EASINGS, default='ease',
                        help='temporal curve used with --final-zoom')

    parser.add_argument('--gif', dest='gif', type=str,
                        help='GIF file for the animation (default: movie.gif when --frames is set)')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable verbose logging, including TensorFlow diagnostics')

    return parser


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    image_path: Path | None = None
    if opt.output:
        if str(opt.output).endswith(tuple(filter(None, {os.sep, os.altsep}))):
            parser.error("--output must be a file path.")
        output_path = Path(opt.output).expanduser()
        if output_path.suffix:
            if output_path.suffix.lower() != ".png":
                parser.error("--output must end with .png.")
        else:
            output_path = output_path.with_suffix(".png")
        image_path = output_path.resolve()

    gif_path: Path | None = None
    if opt.frames > 0:
        gif_arg = Path(opt.gif or "movie.gif").expanduser()
        if gif_arg.suffix:
            if gif_arg.suffix.lower() != ".gif":
                parser.error("GIF outputs must end with .gif.")
        else:
            gif_arg = gif_arg.with_suffix(".gif")
        gif_path = gif_arg.resolve()
    elif opt.gif:
        parser.error("--gif requires --frames.")

    if opt.frames < 0:
        parser.error("--frames must not be negative.")

    return OutputConfig(image_path=image_path, gif_path=gif_path, show=bool(opt.show))


def configure_viewport(opt) -> Viewport:
    """Apply the view options in the order limits, center, moves, scale.

    Without any view option the classic seahorse valley view is rendered.
    """

    viewport = Viewport(opt.width)
    if not (opt.limits or opt.center or opt.moves or opt.scale is not None):
        viewport.set_center(*DEFAULT_CENTER)
        viewport.scale(DEFAULT_SCALE)
        return viewport

    if opt.limits:
        viewport.set_limits(*opt.limits)
    if opt.center:
        viewport.set_center(*opt.center)
    for axis, delta in opt.moves:
        try:
            viewport.move(axis, float(delta))
        except ValueError:
            logger.warning("Invalid move delta %r for axis %s, ignoring.", delta, axis)
    if opt.scale is not None:
        viewport.scale(opt.scale)
    return viewport


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if opt.verbose else logging.WARNING, format='%(message)s')
    output_config = resolve_output_config(opt, parser)

    viewport = configure_viewport(opt)
    logger.info("Rendering %s with the %s backend", viewport, opt.backend)

    colored = not opt.grayscale
    buffer = colorize(render(viewport, backend=opt.backend), colored)

    if output_config.image_path is not None:
        encode_png(buffer, output_config.image_path)
    if output_config.show:
        display(buffer)

    if output_config.gif_path is not None:
        factors = compute_zoom_factors(
            opt.frames,
            opt.zoom_factor,
            final_zoom=opt.final_zoom,
            easing=opt.easing,
        )
        frames = zoom_frames(viewport, factors, colored=colored, backend=opt.backend)
        write_gif(frames, output_config.gif_path)

    return 0


if __name__ == '__main__':
    sys.exit(main())
