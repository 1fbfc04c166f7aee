import pytest

from okp.okp.decoders.best_area_fit import decode_chromosome
from okp.okp.models.geometry import Rect
from okp.okp.viz.render_layout import render_layout


def test_render_layout_writes_png(tmp_path, example_problem):
    placed, _ = decode_chromosome([1] * len(example_problem.items), example_problem)
    out = render_layout(placed, example_problem, tmp_path / "img" / "layout.png")
    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_render_layout_empty(tmp_path, example_problem):
    out = render_layout([], example_problem, tmp_path / "empty.png")
    assert out.stat().st_size > 0


def test_debug_view_flips_y_axis():
    pytest.importorskip("vedo")
    from okp.okp.viz.debug_viz import _flip_y

    assert _flip_y(Rect(2, 0, 3, 4), 10) == ((2, 6), (5, 10))
