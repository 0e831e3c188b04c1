"""
Main application window and orchestration logic.
"""

import logging
import sys
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QDialog, QFileDialog, QMainWindow, QMessageBox

from .. import library
from ..constants import App
from ..model import Module
from ..template_engine import (
    DEFAULT_MODULE_YAML, ModuleParseError, dump_module_yaml, generate_module,
    parse_module_yaml
)
from .preview_panel import PreviewPanel
from .unsaved_changes_dialog import UnsavedChangesDialog

logger = logging.getLogger(__name__)

YAML_FILTER = "YAML Files (*.yaml *.yml);;All Files (*)"


class TemplateTreeWindow(QMainWindow):
    """Main application window."""

    def __init__(self, module_path: Path | None = None):
        super().__init__()

        library.initialize()

        self._module = None
        self._module_path = None
        self._dirty = False

        self._setup_window()
        self._setup_ui()
        self._setup_menu()

        if module_path is None or not self.load_module_file(Path(module_path)):
            self._restore_last_module()

    def _setup_window(self):
        self.setWindowTitle(App.NAME)
        self.setMinimumSize(480, 560)
        self.resize(640, 760)

    def _setup_ui(self):
        self.preview_panel = PreviewPanel(preview=True)
        self.preview_panel.set_replace_placeholder(not library.get_show_placeholders())
        self.preview_panel.set_on_tree_update_listener(self._on_tree_updated)
        self.preview_panel.show_placeholder.toggled.connect(self._on_placeholder_switch)
        self.setCentralWidget(self.preview_panel)

    def _setup_menu(self):
        """Set up the native menu bar."""
        menubar = self.menuBar()

        if sys.platform == "darwin":
            menubar.setNativeMenuBar(True)

        file_menu = menubar.addMenu("File")

        new_action = QAction("New", self)
        new_action.setShortcut(QKeySequence.StandardKey.New)
        new_action.triggered.connect(self._new_module)
        file_menu.addAction(new_action)

        open_action = QAction("Open...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._open_module)
        file_menu.addAction(open_action)

        file_menu.addSeparator()

        save_action = QAction("Save", self)
        save_action.setShortcut(QKeySequence.StandardKey.Save)
        save_action.setShortcutContext(Qt.ShortcutContext.ApplicationShortcut)
        save_action.triggered.connect(self.save_module)
        file_menu.addAction(save_action)

        save_as_action = QAction("Save As...", self)
        save_as_action.setShortcut(QKeySequence.StandardKey.SaveAs)
        save_as_action.triggered.connect(self._save_module_as)
        file_menu.addAction(save_as_action)

        file_menu.addSeparator()

        generate_action = QAction("Generate...", self)
        generate_action.setShortcut(QKeySequence("Ctrl+G"))
        generate_action.triggered.connect(self._generate_module)
        file_menu.addAction(generate_action)

        view_menu = menubar.addMenu("View")

        self.show_placeholders_action = QAction("Show Placeholders", self)
        self.show_placeholders_action.setCheckable(True)
        self.show_placeholders_action.setShortcut(QKeySequence("Ctrl+Shift+P"))
        self.show_placeholders_action.setChecked(self.preview_panel.is_showing_placeholders())
        self.show_placeholders_action.toggled.connect(self._set_show_placeholders)
        view_menu.addAction(self.show_placeholders_action)

    # --- Module state ---

    @property
    def module(self) -> Module | None:
        return self._module

    def is_dirty(self) -> bool:
        return self._dirty

    def set_module(self, module: Module, path: Path | None = None):
        self._module = module
        self._module_path = path
        self.preview_panel.set_module_config(module)
        self._set_dirty(False)

    def _set_dirty(self, dirty: bool):
        self._dirty = dirty
        name = self._module.name if self._module is not None else ""
        marker = " *" if dirty else ""
        self.setWindowTitle(f"{App.NAME} - {name}{marker}" if name else App.NAME)

    def _on_tree_updated(self):
        self._set_dirty(True)

    def _set_show_placeholders(self, show: bool):
        self.preview_panel.set_replace_placeholder(not show)
        library.set_show_placeholders(show)

    def _on_placeholder_switch(self, show: bool):
        library.set_show_placeholders(show)
        self.show_placeholders_action.blockSignals(True)
        self.show_placeholders_action.setChecked(show)
        self.show_placeholders_action.blockSignals(False)

    def _restore_last_module(self):
        name = library.get_preference(library.LAST_MODULE_PREF_KEY)
        module = library.load_module(name) if name else None
        if module is None:
            modules = library.list_modules()
            module = library.load_module(modules[0]) if modules else None
        if module is None:
            module = parse_module_yaml(DEFAULT_MODULE_YAML)
            self.set_module(module)
            return
        self.set_module(module, library.get_module_path(module.name))

    # --- Actions ---

    def load_module_file(self, path: Path) -> bool:
        """Load a module YAML file, reporting errors to the user."""
        try:
            module = parse_module_yaml(path.read_text(encoding="utf-8"))
        except (OSError, ModuleParseError) as e:
            logger.warning("Failed to open %s: %s", path, e)
            QMessageBox.warning(self, "Error", f"Failed to open module: {e}")
            return False
        self.set_module(module, path)
        return True

    def _new_module(self):
        if not self._confirm_discard():
            return
        self.set_module(parse_module_yaml(DEFAULT_MODULE_YAML))

    def _open_module(self):
        if not self._confirm_discard():
            return
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Open Module YAML",
            str(library.get_modules_dir()),
            YAML_FILTER,
        )
        if path:
            self.load_module_file(Path(path))

    def save_module(self) -> bool:
        """Save to the opened file. Unsaved new modules ask for a file first."""
        if self._module is None:
            return False
        if self._module_path is None:
            return self._save_module_as()
        try:
            self._module_path.write_text(
                dump_module_yaml(self._module), encoding="utf-8"
            )
        except OSError as e:
            QMessageBox.warning(self, "Error", f"Failed to save module: {e}")
            return False
        logger.info("Saved module to %s", self._module_path)
        self._set_dirty(False)
        return True

    def _save_module_as(self) -> bool:
        if self._module is None:
            return False
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Module YAML",
            str(library.get_modules_dir() / f"{self._module.name}.yaml"),
            YAML_FILTER,
        )
        if not path:
            return False
        self._module_path = Path(path)
        return self.save_module()

    def _generate_module(self):
        if self._module is None:
            return
        directory = QFileDialog.getExistingDirectory(
            self, "Generate Module Into", str(Path.home())
        )
        if not directory:
            return
        success, message = generate_module(
            self._module,
            Path(directory),
            conflict_callback=self._resolve_conflict,
        )
        if success:
            QMessageBox.information(self, "Generate", message)
        else:
            QMessageBox.warning(self, "Generate", message)

    def _resolve_conflict(self, path: Path, output_path: Path, is_dir: bool) -> str:
        kind = "Folder" if is_dir else "File"
        answer = QMessageBox.question(
            self,
            f"{kind} Exists",
            f'"{path.relative_to(output_path)}" already exists. Overwrite it?',
            QMessageBox.StandardButton.Yes
            | QMessageBox.StandardButton.No
            | QMessageBox.StandardButton.Cancel,
        )
        if answer == QMessageBox.StandardButton.Cancel:
            return "cancel"
        if answer == QMessageBox.StandardButton.No:
            return "skip"
        return "merge" if is_dir else "overwrite"

    def _confirm_discard(self) -> bool:
        """Ask about unsaved edits. Returns False if the user cancelled."""
        if not self._dirty:
            return True
        dialog = UnsavedChangesDialog(self._module.name, self)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return False
        if dialog.choice == UnsavedChangesDialog.Choice.SAVE:
            return self.save_module()
        return True

    def closeEvent(self, event):
        if self._confirm_discard():
            event.accept()
        else:
            event.ignore()
