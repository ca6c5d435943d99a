"""Viewer tests, run against the offscreen Qt platform."""

import json
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt5.QtWidgets")

from app import HullViewerApp  # noqa: E402

TRIANGLE = {"type": "FeatureCollection", "features": [
    {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [0, 0]}},
    {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [4, 0]}},
    {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [0, 4]}},
]}


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def window(qapp):
    w = HullViewerApp()
    yield w
    w.close()


class TestHullViewer:
    def test_starts_empty(self, window):
        assert window.points == []
        assert window.hull_feature is None
        assert window.status_label.text() == "No data"

    def test_load_geojson(self, window):
        window.load_geojson(TRIANGLE)
        assert len(window.points) == 3
        assert window.hull == [(0, 0), (4, 0), (0, 4)]
        assert "Hull vertices: 3" in window.info_text.toPlainText()

    def test_bare_geometry_source(self, window):
        window.load_geojson({"type": "MultiPoint", "coordinates": [[0, 0], [1, 0], [0, 1]]})
        assert window.document()["features"][0]["geometry"]["type"] == "MultiPoint"
        assert len(window.hull) == 3

    def test_add_point_grows_hull(self, window):
        window.load_geojson(TRIANGLE)
        window.add_point((4.0, 4.0))
        assert window.last_click_state == "outside"
        assert len(window.hull) == 4
        window.add_point((1.0, 1.0))
        assert window.last_click_state == "inside"
        assert len(window.hull) == 4

    def test_degenerate_status(self, window):
        window.add_point((0.0, 0.0))
        window.add_point((1.0, 1.0))
        assert window.hull_feature is None
        assert window.hull == []
        assert window.status_label.text() == "No hull"

    def test_clear_all(self, window):
        window.load_geojson(TRIANGLE)
        window.clear_all()
        assert window.points == []
        assert window.hull == []

    def test_load_file(self, window, tmp_path):
        path = tmp_path / "points.geojson"
        path.write_text(json.dumps(TRIANGLE), encoding="utf-8")
        assert window.load_file(str(path))
        assert len(window.hull) == 3

    def test_bad_file_keeps_data(self, window, tmp_path):
        window.load_geojson(TRIANGLE)
        path = tmp_path / "bad.geojson"
        path.write_text(json.dumps({"type": "Point", "coordinates": ["a"]}), encoding="utf-8")
        assert not window.load_file(str(path))
        assert window.status_label.text().startswith("Load failed")
        assert len(window.hull) == 3

    def test_missing_file(self, window, tmp_path):
        assert not window.load_file(str(tmp_path / "nope.geojson"))

    def test_grid_follows_extent(self, window):
        window.scene.fitGrid(0.5)
        assert window.scene.grid_size == pytest.approx(0.01)
        window.scene.fitGrid(800)
        assert window.scene.grid_size == pytest.approx(10.0)
