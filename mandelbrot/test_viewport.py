"""
test_viewport.py
"""
import logging

import numpy as np
import pytest

from mandelbrot.viewport import DEFAULT_WIDTH, Viewport


def test_default_limits():
    viewport = Viewport(100)
    assert viewport.width == 100
    assert viewport.get_limits() == (-2.0, 1.0, -1.0, 1.0)


@pytest.mark.parametrize('width', [0, -5])
def test_invalid_width_falls_back(width, caplog):
    """
    A non-positive width is replaced by 1920 and reported.
    """
    with caplog.at_level(logging.WARNING, logger='mandelbrot.viewport'):
        viewport = Viewport(width)
    assert viewport.width == DEFAULT_WIDTH
    assert 'Invalid picture width' in caplog.text


@pytest.mark.parametrize(
    'width, expected',
    [(100, 66), (300, 200), (1280, 853), (1, 0)]
)
def test_height_from_aspect(width, expected):
    """
    height = floor(width / (re_span / im_span)) for the default 3:2 view.
    """
    viewport = Viewport(width)
    assert viewport.height_from_aspect() == expected
    assert viewport.height_from_aspect(width) == expected


def test_height_is_recomputed_after_limits_change():
    viewport = Viewport(100)
    viewport.set_limits(-1.0, 1.0, -1.0, 1.0)
    assert viewport.height == 100


def test_pixel_to_plane_origin_pixel():
    viewport = Viewport(100)
    c = viewport.pixel_to_plane(0, 0, 100, 66)
    assert (c.re, c.im) == (-2.0, 1.0)


def test_pixel_to_plane_far_edge():
    """
    The last pixel sits one step short of re_max and one step above im_min.
    """
    viewport = Viewport(100)
    width, height = 100, 66
    c = viewport.pixel_to_plane(width - 1, height - 1, width, height)
    assert c.re == pytest.approx(1.0 - 3.0 / width)
    assert c.im == pytest.approx(-1.0 + 2.0 / height)


def test_plane_axes_match_pixel_to_plane():
    viewport = Viewport(40)
    viewport.set_center(-0.5, 0.25)
    viewport.scale(3.0)
    width, height = 40, viewport.height
    re_axis, im_axis = viewport.plane_axes(width, height)
    assert re_axis.shape == (width,)
    assert im_axis.shape == (height,)
    for x in range(width):
        assert re_axis[x] == viewport.pixel_to_plane(x, 0, width, height).re
    for y in range(height):
        assert im_axis[y] == viewport.pixel_to_plane(0, y, width, height).im
    assert re_axis.dtype == np.float64


def test_set_limits_rejects_invalid_real_axis_only(caplog):
    """
    An invalid real axis keeps its old bounds; the imaginary axis still updates.
    """
    viewport = Viewport(100)
    with caplog.at_level(logging.WARNING, logger='mandelbrot.viewport'):
        viewport.set_limits(1.0, -1.0, -0.5, 0.5)
    assert viewport.get_limits() == (-2.0, 1.0, -0.5, 0.5)
    assert 'Invalid real limits' in caplog.text
    assert 'Invalid imaginary limits' not in caplog.text


def test_set_limits_rejects_empty_imaginary_axis(caplog):
    viewport = Viewport(100)
    with caplog.at_level(logging.WARNING, logger='mandelbrot.viewport'):
        viewport.set_limits(-1.0, 0.0, 0.3, 0.3)
    assert viewport.get_limits() == (-1.0, 0.0, -1.0, 1.0)
    assert 'Invalid imaginary limits' in caplog.text


def test_get_center():
    assert Viewport(10).get_center() == (-0.5, 0.0)


@pytest.mark.parametrize('center', [(-0.747162, -0.087584), (0.3, 0.0), (-1.25, 0.75)])
def test_set_center_round_trip(center):
    viewport = Viewport(100)
    viewport.set_center(*center)
    assert viewport.get_center() == pytest.approx(center)
    re_min, re_max, im_min, im_max = viewport.get_limits()
    assert re_max - re_min == pytest.approx(3.0)
    assert im_max - im_min == pytest.approx(2.0)


def test_move():
    viewport = Viewport(100)
    viewport.move('re', 0.5)
    viewport.move('y', -0.25)
    assert viewport.get_limits() == pytest.approx((-1.5, 1.5, -1.25, 0.75))


def test_move_unknown_axis_is_noop(caplog):
    viewport = Viewport(100)
    with caplog.at_level(logging.WARNING, logger='mandelbrot.viewport'):
        viewport.move('z', 1.0)
    assert viewport.get_limits() == (-2.0, 1.0, -1.0, 1.0)
    assert 'Invalid axis' in caplog.text


def test_scale_halves_spans_about_center():
    viewport = Viewport(100)
    viewport.set_center(-0.75, 0.1)
    center = viewport.get_center()
    viewport.scale(2.0)
    re_min, re_max, im_min, im_max = viewport.get_limits()
    assert re_max - re_min == pytest.approx(1.5)
    assert im_max - im_min == pytest.approx(1.0)
    assert viewport.get_center() == pytest.approx(center)


def test_scale_below_one_zooms_out():
    viewport = Viewport(100)
    viewport.scale(0.5)
    assert viewport.get_limits() == pytest.approx((-3.5, 2.5, -2.0, 2.0))


@pytest.mark.parametrize('factor', [0.0, -2.0])
def test_scale_rejects_non_positive_factor(factor, caplog):
    viewport = Viewport(100)
    with caplog.at_level(logging.WARNING, logger='mandelbrot.viewport'):
        viewport.scale(factor)
    assert viewport.get_limits() == (-2.0, 1.0, -1.0, 1.0)
    assert 'Invalid scale factor' in caplog.text
