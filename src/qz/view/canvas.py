"""
Tile Canvas
===========
Draws the word and meaning columns and turns mouse/keyboard input into
QuizSession commands.

Classes:
    QtTextMeasurer: TextMeasurer backed by QFontMetrics.
    TileCanvas: The painted widget holding the tiles.
    CanvasView: Scroll area around the canvas; owns scrolling.
"""
from typing import Dict, Optional, Sequence, Tuple

from PySide6.QtCore import Qt, QTimer, QRect, QPoint, Signal
from PySide6.QtGui import QColor, QFont, QFontMetrics, QPainter, QPaintEvent, QMouseEvent, QWheelEvent, QKeyEvent
from PySide6.QtWidgets import QWidget, QScrollArea, QFrame

from qz.config import AUTOSCROLL_INTERVAL_MS, KEY_SCROLL_STEP
from qz.controller.session import QuizSession, autoscroll_step
from qz.model.tiles import Tile

CORRECT_COLOR = QColor(0, 128, 0, 85)
TEXT_COLOR = QColor(Qt.black)
FINISHED_TEXT = "SUCCESS"


class QtTextMeasurer:
    """Measures tile text with the sans-serif font at the requested point size."""

    def __init__(self) -> None:
        self._fonts: Dict[float, QFont] = {}

    def font_for(self, point_size: float) -> QFont:
        font = self._fonts.get(point_size)
        if font is None:
            font = QFont()
            font.setStyleHint(QFont.StyleHint.SansSerif)
            font.setPointSizeF(point_size)
            self._fonts[point_size] = font
        return font

    def measure(self, text: str, point_size: float) -> Tuple[int, int]:
        metrics = QFontMetrics(self.font_for(point_size))
        return metrics.horizontalAdvance(text), metrics.height()


class TileCanvas(QWidget):
    # Emitted after any user action that may change the score
    changed = Signal()

    def __init__(self, session: QuizSession, measurer: QtTextMeasurer, view: "CanvasView") -> None:
        super().__init__(view)
        self.session = session
        self.measurer = measurer
        self.view = view

        self._last_global: Optional[QPoint] = None
        self._scroll_step: int = 0

        self.setAutoFillBackground(True)
        palette = self.palette()
        palette.setColor(self.backgroundRole(), QColor(Qt.white))
        self.setPalette(palette)
        self.setFocusPolicy(Qt.StrongFocus)

        self._scroll_timer = QTimer(self)
        self._scroll_timer.setInterval(AUTOSCROLL_INTERVAL_MS)
        self._scroll_timer.timeout.connect(self._on_drag_scroll)

    # --- PAINTING ---

    def refresh(self) -> None:
        """Resize to the laid-out content and repaint."""
        bank = self.session.bank
        if bank.finished:
            self.setMinimumSize(0, 0)
        else:
            tiles = [*bank.words, *bank.meanings]
            width = max((t.rect.right for t in tiles), default=0) + 10
            self.setMinimumSize(width, bank.layout.content_height)
        self.update()

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            bank = self.session.bank
            if bank.finished:
                big = QFont(self.measurer.font_for(36))
                painter.setFont(big)
                painter.setPen(TEXT_COLOR)
                painter.drawText(self.view.viewport().rect(), Qt.AlignCenter, FINISHED_TEXT)
                return

            painter.setFont(self.measurer.font_for(bank.layout.point_size))
            expose = self.session.expose_correctness
            self._paint_tiles(painter, bank.words, expose)
            if not self.session.hide_meanings:
                self._paint_tiles(painter, bank.meanings, expose)
        finally:
            painter.end()

    @staticmethod
    def _paint_tiles(painter: QPainter, tiles: Sequence[Tile], expose: bool) -> None:
        for tile in tiles:
            painter.setPen(CORRECT_COLOR if tile.correct and expose else TEXT_COLOR)
            r = tile.rect
            painter.drawText(QRect(r.x, r.y, r.width, r.height), Qt.AlignLeft | Qt.AlignTop, tile.text)

    # --- MOUSE ---

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.LeftButton:
            pos = event.position().toPoint()
            if self.session.begin_drag(pos.x(), pos.y()) is not None:
                self._last_global = event.globalPosition().toPoint()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self.session.moving is None or self._last_global is None:
            return super().mouseMoveEvent(event)

        pos_in_view = self.mapTo(self.view.viewport(), event.position().toPoint())
        if not self.view.viewport().rect().contains(pos_in_view):
            return

        current = event.globalPosition().toPoint()
        delta = current - self._last_global
        self._last_global = current
        self.session.drag_by(delta.x(), delta.y())
        self.update()

        self._scroll_step = autoscroll_step(pos_in_view.y(), self.view.viewport().height())
        if self._scroll_step:
            self._scroll_timer.start()
        else:
            self._scroll_timer.stop()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.LeftButton and self.session.moving is not None:
            self._release()
            self.session.end_drag()
            self.changed.emit()
        super().mouseReleaseEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        self.check_or_advance()
        super().mouseDoubleClickEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        step = 1 if event.angleDelta().y() > 0 else -1
        modifiers = event.modifiers()
        if modifiers & Qt.ControlModifier:
            self.session.adjust_font_size(step)
        elif modifiers & Qt.ShiftModifier:
            self.session.change_group_size(step)
        else:
            return super().wheelEvent(event)
        self.changed.emit()
        event.accept()

    def _release(self) -> None:
        self._scroll_timer.stop()
        self._last_global = None

    def _on_drag_scroll(self) -> None:
        if self.session.moving is None:
            self._scroll_timer.stop()
            return
        moved = self.view.scroll_by(self._scroll_step)
        self.session.drag_by(0, moved)
        self.update()
        if moved == 0 or self.view.at_scroll_extreme():
            self._scroll_timer.stop()

    # --- KEYBOARD ---

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = event.key()
        if key == Qt.Key_Space:
            self.check_or_advance()
        elif key in (Qt.Key_J, Qt.Key_Down):
            self.view.scroll_by(KEY_SCROLL_STEP)
        elif key in (Qt.Key_K, Qt.Key_Up):
            self.view.scroll_by(-KEY_SCROLL_STEP)
        else:
            return super().keyPressEvent(event)
        event.accept()

    def check_or_advance(self) -> None:
        self._release()
        self.session.check_or_advance()
        self.changed.emit()


class CanvasView(QScrollArea):
    """Vertical scroller for the tile canvas."""

    def __init__(self, session: QuizSession, measurer: QtTextMeasurer, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setFrameShape(QFrame.NoFrame)
        self.setWidgetResizable(True)
        self.canvas = TileCanvas(session, measurer, self)
        self.setWidget(self.canvas)

    def scroll_by(self, delta: int) -> int:
        """Scroll vertically and return the distance actually moved."""
        bar = self.verticalScrollBar()
        before = bar.value()
        bar.setValue(before + delta)
        return bar.value() - before

    def at_scroll_extreme(self) -> bool:
        bar = self.verticalScrollBar()
        return bar.value() in (bar.minimum(), bar.maximum())
