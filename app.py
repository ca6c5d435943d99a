import argparse
import json
import logging
import math
import sys
from typing import Any, Dict, List, Optional

from PyQt5.QtWidgets import (QApplication, QMainWindow, QGraphicsView, QGraphicsScene,
                            QGraphicsItem, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
                            QPushButton, QCheckBox, QSplitter, QGroupBox, QTextEdit,
                            QFileDialog)
from PyQt5.QtGui import (QPen, QBrush, QColor, QPainter, QFont, QLinearGradient,
                         QPolygonF, QPalette)
from PyQt5.QtCore import Qt, QPointF, QRectF, QLineF

from convex import convex
from coords import GeoJSON, coord_all
from geometry import Point, point_in_hull, signed_area

logger = logging.getLogger(__name__)


class HullGraphicsScene(QGraphicsScene):
    """Scene with a background grid that adapts to the data extent"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setBackgroundBrush(QColor(25, 25, 35))

        # Grid properties
        self.grid_visible = True
        self.grid_size = 40.0
        self.grid_color = QColor(45, 45, 55)
        self.grid_major_color = QColor(60, 60, 70)

        # Visual settings
        self.marker_size = 8
        self.hull_brush = QBrush(QColor(50, 100, 240, 50))
        self.hull_pen = QPen(QColor(65, 130, 255), 2)
        self.hull_pen.setCosmetic(True)
        self.point_brush = QBrush(QColor(148, 163, 184))
        self.vertex_pen = QPen(QColor(65, 130, 255), 2)
        self.vertex_pen.setCosmetic(True)

    def setDarkMode(self, dark_mode: bool):
        """Update scene colors based on theme"""
        if dark_mode:
            self.setBackgroundBrush(QColor(25, 25, 35))
            self.grid_color = QColor(45, 45, 55)
            self.grid_major_color = QColor(60, 60, 70)
            self.hull_brush = QBrush(QColor(50, 100, 240, 50))
            self.point_brush = QBrush(QColor(148, 163, 184))
        else:
            self.setBackgroundBrush(QColor(240, 240, 245))
            self.grid_color = QColor(220, 220, 220)
            self.grid_major_color = QColor(200, 200, 200)
            self.hull_brush = QBrush(QColor(100, 150, 255, 50))
            self.point_brush = QBrush(QColor(70, 80, 100))

    def fitGrid(self, extent: float):
        """Pick a power-of-ten grid spacing giving roughly ten cells across extent"""
        if extent <= 0:
            self.grid_size = 40.0
            return
        self.grid_size = 10.0 ** math.floor(math.log10(extent / 10.0))

    def drawBackground(self, painter: QPainter, rect: QRectF):
        super().drawBackground(painter, rect)

        if not self.grid_visible:
            return

        gradient = QLinearGradient(rect.topLeft(), rect.bottomLeft())
        background_color = self.backgroundBrush().color()
        slightly_darker = QColor(
            max(0, background_color.red() - 5),
            max(0, background_color.green() - 5),
            max(0, background_color.blue() - 5)
        )
        gradient.setColorAt(0, background_color)
        gradient.setColorAt(1, slightly_darker)
        painter.fillRect(rect, gradient)

        step = self.grid_size
        first_col = math.floor(rect.left() / step)
        first_row = math.floor(rect.top() / step)
        cols = int(rect.width() / step) + 2
        rows = int(rect.height() / step) + 2

        # Width 0 pens are cosmetic, one pixel at any zoom
        minor = QPen(self.grid_color, 0)
        major = QPen(self.grid_major_color, 0)
        for i in range(first_col, first_col + cols):
            painter.setPen(major if i % 5 == 0 else minor)
            x = i * step
            painter.drawLine(QLineF(x, rect.top(), x, rect.bottom()))
        for j in range(first_row, first_row + rows):
            painter.setPen(major if j % 5 == 0 else minor)
            y = j * step
            painter.drawLine(QLineF(rect.left(), y, rect.right(), y))


class HullViewerApp(QMainWindow):
    def __init__(self, dark_mode: bool = True):
        super().__init__()
        self.setWindowTitle("Hull Viewer")
        self.resize(1200, 700)

        # Data
        self.source: Optional[GeoJSON] = None
        self.added: List[Dict[str, Any]] = []
        self.points: List[Point] = []
        self.hull: List[Point] = []
        self.hull_feature: Optional[Dict[str, Any]] = None
        self.last_click: Optional[Point] = None
        self.last_click_state: Optional[str] = None

        self.dark_mode = dark_mode

        self._init_ui()
        self._connect_signals()
        self._apply_theme()

    def _init_ui(self):
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        main_layout = QHBoxLayout(self.central_widget)

        self.splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(self.splitter)

        # Left side: Graphics view, flipped so north is up
        self.scene = HullGraphicsScene()
        self.view = QGraphicsView(self.scene)
        self.view.setRenderHint(QPainter.Antialiasing)
        self.view.setDragMode(QGraphicsView.NoDrag)
        self.view.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)
        self.view.scale(1, -1)
        self.splitter.addWidget(self.view)

        # Right side: Controls panel
        self.panel = QWidget()
        self.panel.setMinimumWidth(300)
        self.panel.setMaximumWidth(450)
        panel_layout = QVBoxLayout(self.panel)

        title_label = QLabel("Hull Viewer")
        title_label.setFont(QFont("Arial", 16, QFont.Bold))
        title_label.setAlignment(Qt.AlignCenter)
        panel_layout.addWidget(title_label)

        buttons_layout = QHBoxLayout()
        self.open_btn = QPushButton("Open GeoJSON...")
        self.clear_all_btn = QPushButton("Clear All")
        buttons_layout.addWidget(self.open_btn)
        buttons_layout.addWidget(self.clear_all_btn)
        panel_layout.addLayout(buttons_layout)

        options_group = QGroupBox("Display")
        options_layout = QVBoxLayout(options_group)
        self.show_grid = QCheckBox("Show grid")
        self.show_grid.setChecked(True)
        options_layout.addWidget(self.show_grid)
        self.dark_mode_checkbox = QCheckBox("Dark mode")
        self.dark_mode_checkbox.setChecked(self.dark_mode)
        options_layout.addWidget(self.dark_mode_checkbox)
        hint_label = QLabel("Click in the view to add a point")
        hint_label.setStyleSheet("color: gray;")
        options_layout.addWidget(hint_label)
        panel_layout.addWidget(options_group)

        info_group = QGroupBox("Information")
        info_layout = QVBoxLayout(info_group)
        self.info_text = QTextEdit()
        self.info_text.setReadOnly(True)
        self.info_text.setMinimumHeight(200)
        info_layout.addWidget(self.info_text)
        panel_layout.addWidget(info_group)

        self.status_label = QLabel("No data")
        panel_layout.addWidget(self.status_label)

        self.splitter.addWidget(self.panel)
        self.splitter.setSizes([800, 400])

        self.scene.setSceneRect(0, 0, 800, 600)
        self._redraw()
        self._refresh_info()

    def _connect_signals(self):
        self.open_btn.clicked.connect(self._open_file)
        self.clear_all_btn.clicked.connect(self.clear_all)
        self.show_grid.stateChanged.connect(self._toggle_grid)
        self.dark_mode_checkbox.stateChanged.connect(self._toggle_theme)
        self.view.mousePressEvent = self._handle_view_click

    def _toggle_grid(self, state):
        self.scene.grid_visible = (state == Qt.Checked)
        self.view.viewport().update()

    def _toggle_theme(self, state):
        self.dark_mode = (state == Qt.Checked)
        self._apply_theme()

    def _apply_theme(self):
        """Apply the current theme to all UI elements"""
        app = QApplication.instance()
        palette = app.palette()

        if self.dark_mode:
            palette.setColor(QPalette.Window, QColor(53, 53, 53))
            palette.setColor(QPalette.WindowText, Qt.white)
            palette.setColor(QPalette.Base, QColor(25, 25, 25))
            palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
            palette.setColor(QPalette.Text, Qt.white)
            palette.setColor(QPalette.Button, QColor(53, 53, 53))
            palette.setColor(QPalette.ButtonText, Qt.white)
            palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
            palette.setColor(QPalette.HighlightedText, Qt.black)
        else:
            palette.setColor(QPalette.Window, QColor(240, 240, 245))
            palette.setColor(QPalette.WindowText, QColor(0, 0, 0))
            palette.setColor(QPalette.Base, QColor(255, 255, 255))
            palette.setColor(QPalette.AlternateBase, QColor(233, 233, 233))
            palette.setColor(QPalette.Text, QColor(0, 0, 0))
            palette.setColor(QPalette.Button, QColor(240, 240, 240))
            palette.setColor(QPalette.ButtonText, QColor(0, 0, 0))
            palette.setColor(QPalette.Highlight, QColor(61, 174, 233))
            palette.setColor(QPalette.HighlightedText, QColor(255, 255, 255))

        app.setPalette(palette)
        self.scene.setDarkMode(self.dark_mode)
        self.view.viewport().update()
        self._redraw()

    def _open_file(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Open GeoJSON", "", "GeoJSON (*.geojson *.json);;All files (*)"
        )
        if path:
            self.load_file(path)

    def load_file(self, path: str) -> bool:
        """Load a GeoJSON file, keeping the current data if it cannot be read"""
        try:
            with open(path, encoding="utf-8") as f:
                obj = json.load(f)
            self.load_geojson(obj)
        except (OSError, ValueError) as e:
            # ValueError covers both JSONDecodeError and InvalidGeometry
            logger.error("could not load %s: %s", path, e)
            self.status_label.setText(f"Load failed: {e}")
            return False
        logger.info("loaded %s: %d points", path, len(self.points))
        return True

    def load_geojson(self, obj: GeoJSON):
        coord_all(obj)
        self.source = obj
        self.added = []
        self.last_click = None
        self.last_click_state = None
        self._recompute()
        self._fit_view()

    def add_point(self, pt: Point):
        self.last_click = pt
        self.last_click_state = point_in_hull(pt, self.hull) if self.hull else None
        self.added.append({
            "type": "Feature",
            "properties": {},
            "geometry": {"type": "Point", "coordinates": [pt[0], pt[1]]},
        })
        self._recompute()

    def clear_all(self):
        self.source = None
        self.added = []
        self.last_click = None
        self.last_click_state = None
        self._recompute()

    def document(self) -> Dict[str, Any]:
        """Loaded data plus clicked points as one FeatureCollection"""
        features: List[Any] = []
        if self.source is not None:
            kind = self.source.get("type")
            if kind == "FeatureCollection":
                features.extend(self.source["features"])
            elif kind == "Feature":
                features.append(self.source)
            else:
                features.append({"type": "Feature", "properties": {}, "geometry": self.source})
        features.extend(self.added)
        return {"type": "FeatureCollection", "features": features}

    def _recompute(self):
        doc = self.document()
        self.points = coord_all(doc)
        self.hull_feature = convex(doc)
        if self.hull_feature is None:
            self.hull = []
            self.status_label.setText("No hull" if self.points else "No data")
        else:
            ring = self.hull_feature["geometry"]["coordinates"][0]
            self.hull = [(x, y) for x, y in ring[:-1]]
            self.status_label.setText(f"Hull with {len(self.hull)} vertices")
        self._redraw()
        self._refresh_info()

    def _data_rect(self) -> QRectF:
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        rect = QRectF(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
        pad = max(rect.width(), rect.height()) * 0.1 or 1.0
        return rect.adjusted(-pad, -pad, pad, pad)

    def _fit_view(self):
        if not self.points:
            return
        rect = self._data_rect()
        self.scene.setSceneRect(rect)
        self.scene.fitGrid(max(rect.width(), rect.height()))
        self.view.fitInView(rect, Qt.KeepAspectRatio)

    def _handle_view_click(self, event):
        scene_pos = self.view.mapToScene(event.pos())
        self.add_point((scene_pos.x(), scene_pos.y()))
        super(QGraphicsView, self.view).mousePressEvent(event)

    def _add_marker(self, x: float, y: float, pen: QPen, brush: QBrush, z: int):
        size = self.scene.marker_size
        item = self.scene.addEllipse(-size / 2, -size / 2, size, size, pen, brush)
        item.setFlag(QGraphicsItem.ItemIgnoresTransformations)
        item.setPos(x, y)
        item.setZValue(z)

    def _redraw(self):
        self.scene.clear()

        if self.hull:
            hull_polygon = QPolygonF([QPointF(x, y) for x, y in self.hull])
            hull_item = self.scene.addPolygon(hull_polygon, self.scene.hull_pen, self.scene.hull_brush)
            hull_item.setZValue(10)

        for x, y in self.points:
            self._add_marker(x, y, QPen(Qt.NoPen), self.scene.point_brush, 20)

        for x, y in self.hull:
            self._add_marker(x, y, self.scene.vertex_pen, QBrush(Qt.NoBrush), 30)

    def _refresh_info(self):
        area = abs(signed_area(self.hull)) if self.hull else 0.0
        lines = [
            f"<b>Points:</b> {len(self.points)}",
            f"<b>Hull vertices:</b> {len(self.hull)}",
            f"<b>Hull area:</b> {area:.6g}",
            f"<b>Degenerate:</b> {'yes' if self.hull_feature is None else 'no'}",
            f"<b>Last click:</b> {self._fmt(self.last_click)}",
        ]
        if self.last_click_state is not None:
            lines.append(f"<b>Last click vs previous hull:</b> {self.last_click_state}")
        self.info_text.setHtml("<br>".join(lines))

    @staticmethod
    def _fmt(pt: Optional[Point]) -> str:
        if pt is None:
            return "—"
        return f"({pt[0]:.6f}, {pt[1]:.6f})"


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Draw the convex hull of a GeoJSON file")
    parser.add_argument("geojson", nargs="?", help="GeoJSON file to open")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--light", action="store_true", help="start in light mode")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")
    window = HullViewerApp(dark_mode=not args.light)
    if args.geojson:
        window.load_file(args.geojson)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
