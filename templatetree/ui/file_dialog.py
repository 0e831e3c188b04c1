"""
Create and rename dialog for preview tree nodes.
"""

import logging
from typing import Callable

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
)

from ..constants import Colors, Defaults, FileSystem
from ..model import FileTreeNode
from ..styles import get_code_font
from .dialog_utils import FormDialog, style_default_dialog_button

logger = logging.getLogger(__name__)


class FileDialog(FormDialog):
    """Ask for a node name, previewing it with placeholders resolved.

    Results are delivered through the callback given to show_for_create or
    show_for_refactor once the dialog is accepted.
    """

    def __init__(
        self,
        parent_node: FileTreeNode | None,
        is_dir: bool,
        node: FileTreeNode | None = None,
        parent=None,
    ):
        kind = "Directory" if is_dir else "File"
        title = f"Rename {kind}" if node is not None else f"New {kind}"
        super().__init__(title, parent)
        self._parent_node = parent_node
        self._is_dir = is_dir
        self._node = node
        self._result = None

        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText(
            Defaults.DIRECTORY_NAME_PLACEHOLDER if is_dir else Defaults.FILE_NAME_PLACEHOLDER
        )
        if node is not None:
            self.name_input.setText(node.name)
            self.name_input.selectAll()

        self.resolved_label = QLabel("")
        self.resolved_label.setWordWrap(True)
        self.resolved_label.setProperty("class", "muted")

        self.content_edit = None
        if not is_dir and node is None:
            self.content_edit = QPlainTextEdit()
            self.content_edit.setFont(get_code_font())
            self.content_edit.setPlaceholderText("Optional file template, may use ${KEY}.")

        self.ok_button = QPushButton("Rename" if node is not None else "Create")
        self.cancel_button = QPushButton("Cancel")
        style_default_dialog_button(self.ok_button)
        self.cancel_button.setProperty("class", "cancelButton")

        self.ok_button.clicked.connect(self._on_ok)
        self.cancel_button.clicked.connect(self.reject)
        self.name_input.textChanged.connect(self._update_preview)

        button_row = QHBoxLayout()
        button_row.addStretch(1)
        button_row.addWidget(self.cancel_button)
        button_row.addWidget(self.ok_button)

        self.content_layout.addWidget(QLabel("Name"))
        self.content_layout.addWidget(self.name_input)
        self.content_layout.addWidget(self.resolved_label)
        if self.content_edit is not None:
            self.content_layout.addWidget(QLabel("Template"))
            self.content_layout.addWidget(self.content_edit)
        self.content_layout.addLayout(button_row)

        self._update_preview()

    @classmethod
    def show_for_create(
        cls,
        parent_node: FileTreeNode,
        is_dir: bool,
        callback: Callable[[FileTreeNode], None],
        parent=None,
    ) -> "FileDialog":
        dialog = cls(parent_node, is_dir, parent=parent)
        dialog.accepted.connect(lambda: callback(dialog.result_node()))
        dialog.open()
        return dialog

    @classmethod
    def show_for_refactor(
        cls,
        node: FileTreeNode,
        callback: Callable[[FileTreeNode], None],
        parent=None,
    ) -> "FileDialog":
        dialog = cls(node.parent, node.is_dir, node=node, parent=parent)
        dialog.accepted.connect(lambda: callback(dialog.result_node()))
        dialog.open()
        return dialog

    def result_node(self) -> FileTreeNode | None:
        return self._result

    def _preview_node(self, name: str) -> FileTreeNode:
        """Detached node that resolves like the final node would."""
        placeholders = dict(self._node.placeholders) if self._node is not None else {}
        preview = FileTreeNode(name=name, is_dir=self._is_dir, placeholders=placeholders)
        preview.parent = self._parent_node
        return preview

    def validate_name(self, name: str) -> str | None:
        """Return an error message for name, or None if it can be used."""
        if not name.strip():
            return "Name cannot be empty."
        if any(char in name for char in FileSystem.INVALID_NAME_CHARS):
            return "Name cannot contain path separators."
        if name.strip() in FileSystem.RESERVED_NAMES:
            return f'"{name.strip()}" is not a valid name.'
        if self._parent_node is not None:
            real_name = self._preview_node(name.strip()).get_real_name()
            for sibling in self._parent_node.children:
                if sibling is self._node:
                    continue
                if sibling.get_real_name() == real_name:
                    return f'"{real_name}" already exists here.'
        return None

    def _update_preview(self):
        name = self.name_input.text()
        error = self.validate_name(name)
        if error:
            self.resolved_label.setText(error)
            self.resolved_label.setStyleSheet(f"color: {Colors.PREVIEW_ERROR};")
        else:
            real_name = self._preview_node(name.strip()).get_real_name()
            self.resolved_label.setText(f"Resolved name: {real_name}")
            self.resolved_label.setStyleSheet(f"color: {Colors.PREVIEW_OK};")
        self.ok_button.setEnabled(error is None)

    def _on_ok(self):
        name = self.name_input.text().strip()
        if self.validate_name(name) is not None:
            return
        if self._node is not None:
            self._node.rename(name)
            self._result = self._node
        else:
            node = FileTreeNode(name=name, is_dir=self._is_dir)
            if self.content_edit is not None:
                content = self.content_edit.toPlainText()
                if content.strip():
                    node.file_templates[name] = content
            self._result = node
        logger.debug("File dialog accepted: %s", self._result)
        self.accept()
