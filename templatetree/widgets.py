"""
Custom widgets for TemplateTree.
- ToggleSwitch: checkable button painted as a sliding switch
"""

from PyQt6.QtCore import QEasingCurve, QRectF, QSize, Qt, QVariantAnimation
from PyQt6.QtGui import QColor, QPainter
from PyQt6.QtWidgets import QAbstractButton

from .constants import Colors, Dimensions, Timing


class ToggleSwitch(QAbstractButton):
    """On/off switch. Emits the inherited toggled(bool) signal."""

    def __init__(self, parent=None, checked=False):
        super().__init__(parent)
        self.setCheckable(True)
        self.setChecked(checked)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setFixedSize(self.sizeHint())

        self._offset = 1.0 if checked else 0.0
        self._slide = QVariantAnimation(self)
        self._slide.setDuration(Timing.TOGGLE_ANIMATION_MS)
        self._slide.setEasingCurve(QEasingCurve.Type.InOutQuad)
        self._slide.valueChanged.connect(self._set_offset)
        self.toggled.connect(self._start_slide)

    def sizeHint(self) -> QSize:
        return QSize(Dimensions.TOGGLE_WIDTH, Dimensions.TOGGLE_HEIGHT)

    def _set_offset(self, value):
        self._offset = float(value)
        self.update()

    def _start_slide(self, checked: bool):
        self._slide.stop()
        self._slide.setStartValue(self._offset)
        self._slide.setEndValue(1.0 if checked else 0.0)
        self._slide.start()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)

        track = QRectF(self.rect()).adjusted(2, 4, -2, -4)
        painter.setBrush(QColor(Colors.TOGGLE_ON if self.isChecked() else Colors.TOGGLE_OFF))
        painter.drawRoundedRect(track, track.height() / 2, track.height() / 2)

        radius = Dimensions.TOGGLE_THUMB_RADIUS
        margin = Dimensions.TOGGLE_THUMB_MARGIN
        offset = self._offset
        if self._slide.state() != QVariantAnimation.State.Running:
            # setChecked with signals blocked skips the slide
            offset = 1.0 if self.isChecked() else 0.0
        travel = self.width() - 2 * (margin + radius)
        center_x = margin + radius + travel * offset
        thumb = QRectF(center_x - radius, self.height() / 2 - radius, 2 * radius, 2 * radius)
        painter.setBrush(QColor(Colors.TOGGLE_THUMB))
        painter.drawEllipse(thumb)
