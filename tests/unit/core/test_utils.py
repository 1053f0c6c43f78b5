from sprite_slicer.core.config import SlicerConfig
from sprite_slicer.core.utils import (ensure_rgba, create_background, normalize_rect, rects_intersect,
                                      spans_overlap, distance)


def test_ensure_rgba_converts_from_rgb(rgb_image_small):
    out = ensure_rgba(rgb_image_small)
    assert out.mode == 'RGBA'


def test_create_background_with_alpha():
    bg = create_background((7, 5), (1, 2, 3, 4))
    assert bg.size == (7, 5)
    assert bg.mode == 'RGBA'
    assert bg.getpixel((0, 0)) == (1, 2, 3, 4)


def test_normalize_rect_from_any_corners():
    assert normalize_rect((10, 40), (2, 5)) == (2, 5, 10, 40)
    assert normalize_rect((2, 40), (10, 5)) == (2, 5, 10, 40)


def test_spans_overlap_half_open_cells():
    assert spans_overlap(5, 15, 10, 20)
    assert not spans_overlap(0, 10, 10, 20)  # box ends on the cell's left edge
    assert spans_overlap(20, 30, 10, 20) is False
    assert spans_overlap(10, 10, 10, 20)  # a point on the left edge belongs to the cell
    assert not spans_overlap(20, 20, 10, 20)


def test_rects_intersect():
    cell = (10, 10, 20, 20)
    assert rects_intersect((5, 5, 15, 15), cell)
    assert rects_intersect((0, 0, 30, 30), cell)
    assert not rects_intersect((0, 0, 10, 30), cell)
    assert not rects_intersect((20, 0, 30, 30), cell)
    assert rects_intersect((0, 15, 30, 15), cell)  # flat drag across the cell


def test_distance():
    assert distance((0, 0), (3, 4)) == 5


def test_config_clamps_and_ignores_unknown_keys():
    config = SlicerConfig.from_dict({'rows': 0, 'cols': 40, 'fps': -2, 'theme': 'dark'})
    assert (config.rows, config.cols, config.fps) == (1, 20, 1)
    assert SlicerConfig().fps == 8
