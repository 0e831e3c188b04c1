"""
Save/discard/cancel prompt shown before an edited module is replaced or closed.
"""

from enum import Enum

from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton

from .dialog_utils import FormDialog, style_default_dialog_button


class UnsavedChangesDialog(FormDialog):

    class Choice(str, Enum):
        SAVE = "save"
        DISCARD = "discard"
        CANCEL = "cancel"

    def __init__(self, module_name: str, parent=None):
        super().__init__("Unsaved Changes", parent)
        self.choice = self.Choice.CANCEL

        message = QLabel(
            f'The template tree of "{module_name}" was edited.\n'
            "Save it before continuing?"
        )
        message.setWordWrap(True)
        self.content_layout.addWidget(message)

        row = QHBoxLayout()
        row.addStretch(1)
        self.buttons = {}
        for choice, label in (
            (self.Choice.DISCARD, "Don't Save"),
            (self.Choice.CANCEL, "Cancel"),
            (self.Choice.SAVE, "Save"),
        ):
            button = QPushButton(label)
            button.clicked.connect(lambda _=False, c=choice: self._choose(c))
            row.addWidget(button)
            self.buttons[choice] = button
        self.buttons[self.Choice.DISCARD].setProperty("class", "dangerButton")
        style_default_dialog_button(self.buttons[self.Choice.SAVE])
        self.content_layout.addLayout(row)

    def _choose(self, choice: "UnsavedChangesDialog.Choice"):
        self.choice = choice
        if choice == self.Choice.CANCEL:
            self.reject()
        else:
            self.accept()
