# ============================================================
# tests/test_render.py — Marker canvas, panel & saving
# ============================================================

import cv2
import numpy as np
import pytest

from core.dictionaries import CATALOG
from core.generator import make_state, save_marker
from ui.overlays import compose_view, marker_margin, panel_height, render_marker, render_status_panel


@pytest.mark.parametrize("size,margin", [(50, 30), (150, 30), (300, 60), (1000, 200)])
def test_margin(size, margin):
    assert marker_margin(size) == margin


def test_render_marker_shape_and_padding():
    img = render_marker(make_state(marker_size=300))
    assert img.shape == (420, 420)
    assert img.dtype == np.uint8
    # white margin all around, black border cells inside
    assert (img[:60, :] == 255).all()
    assert (img[-60:, :] == 255).all()
    assert (img[:, :60] == 255).all()
    assert (img[:, -60:] == 255).all()
    assert (img[60:360, 60:360] == 0).any()


@pytest.mark.parametrize("border", [0, 1, 7])
def test_render_marker_any_border(border):
    img = render_marker(make_state(marker_size=200, border_bits=border))
    # margin = max(30, 200 // 5) = 40
    assert img.shape == (280, 280)


def test_border_zero_has_no_solid_frame():
    img = render_marker(make_state(marker_size=300, border_bits=0))
    inner = img[60:360, 60:360]
    # with a border, the outer ring of the marker is entirely black
    framed = render_marker(make_state(marker_size=300, border_bits=1))[60:360, 60:360]
    assert (framed[0, :] == 0).all()
    assert not (inner == framed).all()


def test_render_is_deterministic():
    s = make_state(dict_index=3, marker_id=17, marker_size=450, border_bits=2)
    assert render_marker(s).tobytes() == render_marker(s).tobytes()
    assert compose_view(s).tobytes() == compose_view(s).tobytes()


def test_different_ids_render_differently():
    a = render_marker(make_state(marker_id=1))
    b = render_marker(make_state(marker_id=2))
    assert not np.array_equal(a, b)


def test_panel_height():
    assert panel_height(True) == 10 + 10 * 20 + 10
    assert panel_height(False) == 10 + 6 * 20 + 10
    panel = render_status_panel(make_state(show_help=False), 400)
    assert panel.shape == (140, 400, 3)


def test_compose_view_stacks_marker_and_panel():
    s = make_state(marker_size=300, show_help=True)
    view = compose_view(s)
    assert view.shape == (420 + 220, 420, 3)
    with_notice = compose_view(s, "Saved: x.png")
    assert not np.array_equal(view, with_notice)


def test_save_to_configured_path(tmp_path):
    out = tmp_path / "sub" / "m.png"
    s = make_state(marker_id=3, output_path=str(out))
    result = save_marker(s)
    assert result.ok
    assert result.path == str(out)
    assert result.notice == f"Saved: {out}"
    saved = cv2.imread(str(out), cv2.IMREAD_GRAYSCALE)
    assert np.array_equal(saved, render_marker(s))


def test_save_auto_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    s = make_state(marker_id=7)
    result = save_marker(s)
    assert result.ok
    assert (tmp_path / "marker_DICT_6X6_50_id7_300px_bb1.png").exists()


def test_save_failure_is_reported(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("not a directory")
    result = save_marker(make_state(output_path=str(blocker / "m.png")))
    assert not result.ok
    assert result.error
    assert result.notice.startswith("Save failed:")


def test_save_unknown_extension_is_reported(tmp_path):
    result = save_marker(make_state(output_path=str(tmp_path / "m.notanimage")))
    assert not result.ok


def test_catalog_capacities():
    assert len(CATALOG) == 17
    assert CATALOG.capacity(CATALOG.index_of("DICT_6X6_50")) == 50
    assert CATALOG.capacity(CATALOG.index_of("DICT_4X4_1000")) == 1000
    assert CATALOG.capacity(CATALOG.index_of("DICT_ARUCO_ORIGINAL")) == 1024
    assert CATALOG.name(-5) == "DICT_4X4_50"
