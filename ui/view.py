import logging
import time
from dataclasses import replace
from datetime import datetime
from typing import Optional

from PySide6.QtCore import Qt, QTimer, QRect
from PySide6.QtGui import QColor, QImage, QPainter, QWheelEvent
from PySide6.QtWidgets import QWidget

from api.config import ViewerConfig
from rendering.core import Renderer
from ui.view_components import ViewState, CaseStudy
from utils.enums import Key
from utils.image_helpers import ndarray_to_qimage

logger = logging.getLogger(__name__)

HELP_LINES = (
    "arrow keys  - move",
    "q / e       - zoom in / out",
    "+ / -       - iterations +/-",
    "space       - auto zoom animation",
    "r           - reset view",
    "s           - save screenshot",
    "h           - toggle help",
    "ESC         - exit",
)

# keys that act while held down
_HELD_KEYS = {
    Qt.Key.Key_Left: Key.LEFT,
    Qt.Key.Key_Right: Key.RIGHT,
    Qt.Key.Key_Up: Key.UP,
    Qt.Key.Key_Down: Key.DOWN,
    Qt.Key.Key_Q: Key.ZOOM_IN,
    Qt.Key.Key_E: Key.ZOOM_OUT,
}

# keys that act once per press
_PRESS_KEYS = {
    Qt.Key.Key_Space: Key.ANIMATE,
    Qt.Key.Key_R: Key.RESET,
    Qt.Key.Key_H: Key.HELP,
    Qt.Key.Key_S: Key.SCREENSHOT,
    Qt.Key.Key_Plus: Key.MORE_ITER,
    Qt.Key.Key_Equal: Key.MORE_ITER,
    Qt.Key.Key_Minus: Key.LESS_ITER,
    Qt.Key.Key_Escape: Key.QUIT,
}


# =============================================================================
# Main Window
# =============================================================================
class FractalViewer(QWidget):
    # ---------- Construction ----------
    def __init__(self, config: ViewerConfig, fps: int = 60):
        super().__init__()
        self.config = config
        self.setWindowTitle("Tambanokano")
        self.setFixedSize(config.width, config.height)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self.state = ViewState(center_x=config.center_x, center_y=config.center_y,
                               zoom=config.zoom, iterations=config.iterations)
        self.case_study: Optional[CaseStudy] = CaseStudy() if config.case_study else None
        self.renderer = Renderer(config.render_settings())
        self.view_image: Optional[QImage] = None

        self.held = set()
        self.last_mouse_pos = None
        self._last_tick = time.perf_counter()
        self._dt = 0.0

        self.timer = QTimer(self)
        self.timer.timeout.connect(self._tick)
        self.timer.start(int(1000 / fps))

        logger.info("Starting at center (%.4f, %.4f), zoom %.2f, %d iterations",
                    config.center_x, config.center_y, config.zoom, config.iterations)
        if self.case_study is not None:
            logger.info("Running case study")

    # ---------- Frame loop ----------
    def _tick(self):
        now = time.perf_counter()
        self._dt, self._last_tick = now - self._last_tick, now

        if self.case_study is not None:
            self.case_study.step(self.state, self._dt)
        else:
            self.state.update(self._dt, self.held)

        if self.state.needs_regenerate:
            self.generate_fractal()
        if self.state.screenshot_requested:
            self.state.screenshot_requested = False
            self.save_screenshot()
        if self.state.quit_requested:
            self.timer.stop()
            self.close()
            return
        self.update()

    def generate_fractal(self):
        st = self.state
        if self.renderer.settings.max_iter != st.iterations:
            self.renderer.settings = replace(self.renderer.settings, max_iter=st.iterations)
        rgba = self.renderer.render_rgba(st.viewport(self.width(), self.height()))
        self.view_image = ndarray_to_qimage(rgba)
        st.needs_regenerate = False
        logger.info("Generated fractal: center(%.4f, %.4f) zoom=%.2f iterations=%d",
                    st.center_x, st.center_y, st.zoom, st.iterations)

    # ---------- Painting ----------
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(13, 13, 38))
        if self.view_image is not None:
            painter.drawImage(0, 0, self.view_image)
        if self.state.show_help:
            painter.fillRect(QRect(10, 10, 320, 160), QColor(0, 0, 0, 153))
            painter.setPen(QColor(255, 255, 255))
            for i, line in enumerate(HELP_LINES):
                painter.drawText(20, 52 + 15 * i, line)
        painter.end()

    # ---------- Input ----------
    def keyPressEvent(self, event):
        if event.isAutoRepeat():
            return
        key = event.key()
        if key in _HELD_KEYS:
            self.held.add(_HELD_KEYS[key])
        elif key in _PRESS_KEYS:
            self.state.key_pressed(_PRESS_KEYS[key])
        else:
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.isAutoRepeat():
            return
        self.held.discard(_HELD_KEYS.get(event.key()))

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.last_mouse_pos = event.position()

    def mouseMoveEvent(self, event):
        if self.last_mouse_pos is not None:
            pos = event.position()
            self.state.drag(pos.x() - self.last_mouse_pos.x(),
                            pos.y() - self.last_mouse_pos.y())
            self.last_mouse_pos = pos

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.last_mouse_pos = None

    def wheelEvent(self, event: QWheelEvent):
        self.state.wheel(event.angleDelta().y(), self._dt)

    # ---------- Utilities ----------
    def save_screenshot(self, path: Optional[str] = None) -> bool:
        prefix = "fractal-case" if self.case_study is not None else "fractal"
        path = path or f"{prefix}-{datetime.now().strftime('%Y%m%d-%H%M%S')}.png"
        ok = self.grab().save(path)
        if ok:
            logger.info("Screenshot saved to %s", path)
        else:
            logger.error("Could not save screenshot to %s", path)
        return ok
