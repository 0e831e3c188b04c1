"""
Shared helpers for TemplateTree dialogs.
"""

from PyQt6.QtWidgets import QDialog, QPushButton, QVBoxLayout

from ..constants import Dimensions

RETURN_KEY_SYMBOL = "↩"


def with_return_hint(label: str) -> str:
    return f"{label} {RETURN_KEY_SYMBOL}"


def style_default_dialog_button(button: QPushButton):
    """Make button the one Return activates, and say so on its label."""
    button.setProperty("class", "defaultDialogButton")
    if RETURN_KEY_SYMBOL not in button.text():
        button.setText(with_return_hint(button.text()))
    button.setDefault(True)
    button.setAutoDefault(True)


class FormDialog(QDialog):
    """Titled dialog whose widgets go into content_layout."""

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumWidth(Dimensions.DIALOG_MIN_WIDTH)

        self.content_layout = QVBoxLayout(self)
        self.content_layout.setContentsMargins(
            Dimensions.DIALOG_MARGIN, Dimensions.DIALOG_MARGIN,
            Dimensions.DIALOG_MARGIN, Dimensions.DIALOG_MARGIN,
        )
        self.content_layout.setSpacing(Dimensions.PANEL_SPACING)
