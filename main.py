"""
magicscreen - Main Application
Qt window around the sketch engine: screen, two dials and the shake button.
"""

import sys
from typing import Optional

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QFrame, QLabel, QPushButton, QSizePolicy,
)
from PyQt6.QtCore import Qt, QEvent, QPointF, QRectF, pyqtSignal, QObject
from PyQt6.QtGui import QColor, QPainter, QBrush, QPen, QKeySequence, QRadialGradient

from clear_animator import ClearPhase
from config import Config
from config_persistence import load_config
from layout import compute_layout
from logging_utils import log_event, set_log_level
from scheduling import QtScheduler
from sketch_engine import EngineEvent, SketchEngine
from sketch_state import Dial


BODY_STYLE = """
    QWidget#backdrop {
        background-color: #1a1a1a;
    }
    QFrame#body {
        background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
            stop:0 #e03030, stop:0.4 #c41e20, stop:1 #9e1618);
        border-radius: 18px;
    }
    QFrame#bezel {
        background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
            stop:0 #9a9a9a, stop:0.5 #7a7a7a, stop:1 #686868);
        border-radius: 8px;
    }
    QLabel#title {
        color: #ffd700;
        font-family: Georgia, serif;
        font-weight: bold;
        letter-spacing: 4px;
    }
    QPushButton#shake {
        background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
            stop:0 #ffd700, stop:0.5 #daa520, stop:1 #c8960e);
        color: #8b0000;
        border: 2px solid rgba(139, 0, 0, 40);
        border-radius: 14px;
        padding: 6px 18px;
        font-family: Georgia, serif;
        font-weight: bold;
    }
    QPushButton#shake:pressed {
        background: #c8960e;
    }
"""

# Body offsets (px) stepped through while the screen fades
SHAKE_OFFSETS = (
    (-12, -8), (10, 12), (-14, 6), (12, -10), (-8, 8),
    (14, -6), (-10, 10), (8, -8), (-6, 6), (0, 0),
)
SHAKE_FRAME_MS = 80


class SignalBridge(QObject):
    """Delivers engine events to the widgets as a Qt signal"""
    engine_event = pyqtSignal(object)


class ScreenWidget(QWidget):
    """Shows the engine's raster at the current fade opacity"""

    def __init__(self, engine: SketchEngine, parent=None):
        super().__init__(parent)
        self.engine = engine
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)
        self._backdrop = QColor(0x68, 0x68, 0x68)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._backdrop)
        surface = self.engine.surface
        if surface is not None:
            painter.setOpacity(self.engine.opacity)
            painter.drawImage(0, 0, surface.image)
        painter.end()


class ToyBody(QFrame):
    """Red chassis with a screw in each corner"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("body")
        self.screw_size = 10.0

    def set_screw_size(self, size: float):
        if size != self.screw_size:
            self.screw_size = size
            self.update()

    def screw_centers(self):
        inset_x = self.width() * 0.025 + self.screw_size / 2
        inset_y = self.height() * 0.025 + self.screw_size / 2
        right = self.width() - inset_x
        bottom = self.height() - inset_y
        return [QPointF(inset_x, inset_y), QPointF(right, inset_y),
                QPointF(inset_x, bottom), QPointF(right, bottom)]

    def paintEvent(self, event):
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        radius = self.screw_size / 2
        for center in self.screw_centers():
            gradient = QRadialGradient(QPointF(center.x() - radius * 0.24, center.y() - radius * 0.24), radius * 1.2)
            gradient.setColorAt(0.0, QColor("#e0e0e0"))
            gradient.setColorAt(0.5, QColor("#999999"))
            gradient.setColorAt(1.0, QColor("#777777"))
            painter.setPen(QPen(QColor(0, 0, 0, 70), 1))
            painter.setBrush(QBrush(gradient))
            painter.drawEllipse(center, radius, radius)

            # Slot
            painter.save()
            painter.translate(center)
            painter.rotate(35)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(QColor("#666666")))
            slot_w, slot_h = self.screw_size * 0.55, max(1.0, self.screw_size * 0.1)
            painter.drawRoundedRect(QRectF(-slot_w / 2, -slot_h / 2, slot_w, slot_h), 1, 1)
            painter.restore()
        painter.end()


class DialWidget(QWidget):
    """
    Knob drawn at its accumulated angle. Dragging around the centre turns it;
    Qt keeps delivering move events to the pressed widget even when the
    pointer leaves it, so a drag continues until the button is released.
    """

    def __init__(self, dial: Dial, engine: SketchEngine, parent=None):
        super().__init__(parent)
        self.dial = dial
        self.engine = engine
        self.angle = 0.0
        self.setFixedSize(64, 64)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.setCursor(Qt.CursorShape.OpenHandCursor)

    def set_angle(self, angle: float):
        if angle != self.angle:
            self.angle = angle
            self.update()

    def _center(self) -> QPointF:
        return QRectF(self.rect()).center()

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mousePressEvent(event)
        pos, c = event.position(), self._center()
        self.engine.begin_drag(self.dial, pos.x(), pos.y(), c.x(), c.y())
        self.setCursor(Qt.CursorShape.ClosedHandCursor)

    def mouseMoveEvent(self, event):
        pos, c = event.position(), self._center()
        self.engine.drag_to(self.dial, pos.x(), pos.y(), c.x(), c.y())

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mouseReleaseEvent(event)
        self.engine.end_drag(self.dial)
        self.setCursor(Qt.CursorShape.OpenHandCursor)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        size = min(self.width(), self.height())
        radius = size / 2 - 2
        painter.translate(self._center())
        painter.rotate(self.angle)

        # Knob body
        gradient = QRadialGradient(QPointF(-radius * 0.3, -radius * 0.3), radius * 1.4)
        gradient.setColorAt(0.0, QColor("#ffffff"))
        gradient.setColorAt(0.25, QColor("#e0e0e0"))
        gradient.setColorAt(0.7, QColor("#aaaaaa"))
        gradient.setColorAt(1.0, QColor("#888888"))
        painter.setPen(QPen(QColor(0, 0, 0, 90), 1))
        painter.setBrush(QBrush(gradient))
        painter.drawEllipse(QPointF(0, 0), radius, radius)

        # Grip ridges
        grips = max(8, round(size / 7))
        painter.setPen(QPen(QColor(0, 0, 0, 50), max(1.5, size * 0.025)))
        for _ in range(grips):
            painter.drawLine(QPointF(0, -radius * 0.92), QPointF(0, -radius * 0.74))
            painter.rotate(360 / grips)

        # Indicator notch
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor("#555555")))
        notch_w = max(2.5, size * 0.04)
        painter.drawRoundedRect(QRectF(-notch_w / 2, -radius * 0.84, notch_w, radius * 0.32), 2, 2)

        # Centre cap
        painter.setBrush(QBrush(QColor("#aaaaaa")))
        painter.drawEllipse(QPointF(0, 0), size * 0.09, size * 0.09)
        painter.end()


class MagicScreenWindow(QMainWindow):
    """Main application window"""

    def __init__(self, config: Optional[Config] = None):
        super().__init__()

        self.config = config or load_config()
        set_log_level(self.config.log_level)

        self.setWindowTitle("Magic Screen")
        self.setMinimumSize(320, 240)
        self.resize(800, 600)
        self.setStyleSheet(BODY_STYLE)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self.signals = SignalBridge()
        self.scheduler = QtScheduler()
        self.engine = SketchEngine(self.config, self.scheduler, listener=self.signals.engine_event.emit)
        self._shake_handle = None
        self._shake_frame = 0
        self.shake_offset = (0, 0)

        self._setup_ui()
        self.signals.engine_event.connect(self._on_engine_event)

        self.engine.initialize(self.config.screen.initial_width, self.config.screen.initial_height)
        self.engine.start()

    def _setup_ui(self):
        central = QWidget()
        central.setObjectName("backdrop")
        outer = QVBoxLayout(central)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._outer = outer

        self.body = ToyBody()
        self.body.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        outer.addWidget(self.body, alignment=Qt.AlignmentFlag.AlignCenter)

        layout = QVBoxLayout(self.body)

        self.title = QLabel("MAGIC SCREEN")
        self.title.setObjectName("title")
        self.title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.title)

        self.bezel = QFrame()
        self.bezel.setObjectName("bezel")
        bezel_layout = QVBoxLayout(self.bezel)
        self.screen_widget = ScreenWidget(self.engine)
        bezel_layout.addWidget(self.screen_widget, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.bezel, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addStretch(1)

        controls = QHBoxLayout()
        self.left_dial = DialWidget(Dial.LEFT, self.engine)
        self.right_dial = DialWidget(Dial.RIGHT, self.engine)
        self.shake_button = QPushButton("SHAKE TO CLEAR")
        self.shake_button.setObjectName("shake")
        self.shake_button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.shake_button.clicked.connect(self.engine.shake)
        controls.addWidget(self.left_dial)
        controls.addStretch(1)
        controls.addWidget(self.shake_button)
        controls.addStretch(1)
        controls.addWidget(self.right_dial)
        layout.addLayout(controls)

        self.setCentralWidget(central)

    def _apply_layout(self):
        if self.centralWidget() is None:
            return
        toy = compute_layout(self.centralWidget().width(), self.centralWidget().height(), self.config.layout)
        self.body.setFixedSize(int(toy.toy_width), int(toy.toy_height))
        margin = int(toy.toy_width * 0.05)
        self.body.layout().setContentsMargins(margin, int(toy.toy_height * 0.03), margin, int(toy.toy_height * 0.04))
        pad = int(toy.toy_width * 0.02)
        self.bezel.layout().setContentsMargins(pad, pad, pad, pad)
        self.bezel.setFixedSize(toy.canvas_width + 2 * pad, toy.canvas_height + 2 * pad)

        font = self.title.font()
        font.setPixelSize(max(10, int(toy.toy_width * 0.035)))
        self.title.setFont(font)

        self.body.set_screw_size(toy.screw_size)

        dial = int(toy.dial_size)
        self.left_dial.setFixedSize(dial, dial)
        self.right_dial.setFixedSize(dial, dial)

        # Changing size wipes the drawing
        if self.engine.resize(toy.canvas_width, toy.canvas_height):
            log_event("DEBUG", "UI", "Layout applied", canvas_w=toy.canvas_width, canvas_h=toy.canvas_height)

    def _on_engine_event(self, event: EngineEvent):
        if event.kind in ("raster", "opacity"):
            self.screen_widget.update()
        elif event.kind == "angles":
            left, right = event.value
            self.left_dial.set_angle(left)
            self.right_dial.set_angle(right)
        elif event.kind == "size":
            width, height = event.value
            self.screen_widget.setFixedSize(width, height)
            self.screen_widget.update()
        elif event.kind == "phase" and event.value == ClearPhase.FADING:
            self._start_shake()

    def _start_shake(self):
        if self._shake_handle is not None:
            self._shake_handle.cancel()
        self._shake_frame = 0
        self._shake_handle = self.scheduler.call_every(SHAKE_FRAME_MS, self._shake_step)
        self._shake_step()

    def _shake_step(self):
        if self._shake_frame >= len(SHAKE_OFFSETS):
            self._stop_shake()
            return
        self._set_shake_offset(*SHAKE_OFFSETS[self._shake_frame])
        self._shake_frame += 1

    def _stop_shake(self):
        if self._shake_handle is not None:
            self._shake_handle.cancel()
            self._shake_handle = None
        self._set_shake_offset(0, 0)

    def _set_shake_offset(self, dx: int, dy: int):
        # The body is centred, so uneven margins shift it by half their difference
        self.shake_offset = (dx, dy)
        self._outer.setContentsMargins(max(0, 2 * dx), max(0, 2 * dy), max(0, -2 * dx), max(0, -2 * dy))

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._apply_layout()

    def keyPressEvent(self, event):
        if event.isAutoRepeat():
            return
        self.engine.key_down(QKeySequence(event.key()).toString())

    def keyReleaseEvent(self, event):
        if event.isAutoRepeat():
            return
        self.engine.key_up(QKeySequence(event.key()).toString())

    def changeEvent(self, event):
        # Key-up events never arrive once focus is gone
        if event.type() == QEvent.Type.ActivationChange and not self.isActiveWindow():
            self.engine.release_keys()
        super().changeEvent(event)

    def closeEvent(self, event):
        """Stop the frame loop and fade timers before the widgets go away"""
        self._stop_shake()
        self.engine.shutdown()
        self.scheduler.cancel_all()
        event.accept()


def main():
    """Main entry point - backup if not launched via run.py"""
    app = QApplication(sys.argv)
    app.setStyle('Fusion')
    window = MagicScreenWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
