"""
Preview panel: the module template tree with create, rename and delete.
"""

import logging
from typing import Callable, Dict, Optional

from PyQt6.QtCore import Qt, QEvent
from PyQt6.QtWidgets import (
    QAbstractItemView, QFrame, QHBoxLayout, QLabel, QMenu, QTreeWidget,
    QTreeWidgetItem, QVBoxLayout
)

from ..constants import Defaults, Dimensions, MenuLabels
from ..icons import FileTypeRegistry, default_registry
from ..model import FileTreeNode, Module
from ..widgets import ToggleSwitch
from .cell_renderer import FileNodeDelegate, render_label
from .file_dialog import FileDialog
from .tree_adapter import build_display_tree, node_for_item, set_expansion

logger = logging.getLogger(__name__)


class PreviewPanel(QFrame):
    """File tree of a module template.

    Right click opens the edit menu of a node and the Delete key removes the
    selected nodes. Every structural change calls the listener registered
    with set_on_tree_update_listener.
    """

    def __init__(
        self,
        preview: bool = True,
        registry: Optional[FileTypeRegistry] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.setObjectName("previewPanel")
        self.setProperty("class", "panel")

        self._module = None
        self._replace_placeholder = True
        self._on_tree_update_listener = None
        self._registry = registry if registry is not None else default_registry()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(
            Dimensions.PANEL_MARGIN, Dimensions.PANEL_MARGIN,
            Dimensions.PANEL_MARGIN, Dimensions.PANEL_MARGIN,
        )
        layout.setSpacing(Dimensions.PANEL_SPACING)

        header_layout = QHBoxLayout()

        self.header_label = QLabel("PREVIEW")
        self.header_label.setProperty("class", "panelHeader")
        header_layout.addWidget(self.header_label)

        self.status_label = QLabel("")
        self.status_label.setProperty("class", "muted")
        header_layout.addWidget(self.status_label)

        header_layout.addStretch()

        self.show_placeholder = None
        if preview:
            placeholder_label = QLabel(Defaults.SHOW_PLACEHOLDERS_LABEL)
            header_layout.addWidget(placeholder_label)
            self.show_placeholder = ToggleSwitch(checked=not self._replace_placeholder)
            self.show_placeholder.setToolTip("Show ${KEY} tokens instead of resolved names")
            self.show_placeholder.toggled.connect(self._on_show_placeholder_toggled)
            header_layout.addWidget(self.show_placeholder)

        layout.addLayout(header_layout)

        self.tree = QTreeWidget()
        self.tree.setHeaderHidden(True)
        self.tree.setIndentation(Dimensions.TREE_INDENT)
        self.tree.setRootIsDecorated(True)
        self.tree.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.tree.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.tree.setItemDelegate(
            FileNodeDelegate(self._registry, self.is_showing_placeholders, self.tree)
        )
        self.tree.installEventFilter(self)
        self.tree.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.tree.customContextMenuRequested.connect(self._show_context_menu)
        layout.addWidget(self.tree, 1)

    # --- Public API ---

    @property
    def module(self) -> Module | None:
        return self._module

    def is_showing_placeholders(self) -> bool:
        return not self._replace_placeholder

    def set_replace_placeholder(self, replace: bool):
        """Switch between resolved names and raw ${KEY} names."""
        if replace == self._replace_placeholder:
            return
        self._replace_placeholder = replace
        if self.show_placeholder is not None:
            self.show_placeholder.blockSignals(True)
            self.show_placeholder.setChecked(not replace)
            self.show_placeholder.blockSignals(False)
        self.update_tree()

    def update_tree(self):
        """Redraw the current rows without rebuilding them."""
        self.tree.viewport().update()

    def set_module_config(self, module: Module):
        """Show module, rebuilding every row and expanding the whole tree."""
        logger.info("Showing module %s", module.name)
        self._module = module
        self.header_label.setText(f"PREVIEW - {module.name.upper()}")
        self._rebuild()

    def set_on_tree_update_listener(self, listener: Optional[Callable[[], None]]):
        """Set the callback of tree edit, delete and add events."""
        self._on_tree_update_listener = listener

    def item_label(self, item: QTreeWidgetItem):
        """(text, icon) the delegate paints for item."""
        node = node_for_item(item)
        if node is None:
            return "", None
        return render_label(node, self.is_showing_placeholders(), self._registry)

    def root_item(self) -> QTreeWidgetItem | None:
        return self.tree.topLevelItem(0)

    # --- Structural edits ---

    def edit_actions(self, item: QTreeWidgetItem) -> Dict[str, Callable[[], None]]:
        """Context menu entries for item, in menu order."""
        node = node_for_item(item)
        if node is None:
            return {}
        actions = {}
        if node.is_dir:
            actions[MenuLabels.NEW_DIRECTORY] = lambda: self._show_create_dialog(node, True)
            actions[MenuLabels.NEW_FILE] = lambda: self._show_create_dialog(node, False)
        if not node.is_root():
            actions[MenuLabels.RENAME] = lambda: self._show_rename_dialog(node)
            actions[MenuLabels.DELETE] = lambda: self.remove_node(item)
        return actions

    def add_tree_node(self, parent: FileTreeNode, node: FileTreeNode) -> bool:
        """Attach node under parent and move its tables into the module."""
        if self._module is None or node is None:
            return False
        if not self._module.template.attach(parent, node):
            logger.debug("Could not add %s under %s", node, parent)
            return False
        self._rebuild()
        self._notify_tree_updated()
        return True

    def rename_node(
        self,
        node: FileTreeNode,
        renamed: FileTreeNode | None,
        old_name: str | None = None,
    ) -> bool:
        """Put renamed in the place of node and rebuild the rows."""
        if self._module is None or renamed is None:
            return False
        if renamed is not node:
            if node.parent is None or not node.parent.replace_child(node, renamed):
                logger.debug("Could not replace %s", node)
                return False
        template = self._module.template
        if old_name is not None and not renamed.is_dir:
            template.rename_file_template(old_name, renamed.name)
        template.add_placeholders(renamed.placeholders_in_name())
        self._rebuild()
        self._notify_tree_updated()
        return True

    def remove_node(self, item: QTreeWidgetItem) -> bool:
        """Remove the node of item. Nothing changes if the model refuses."""
        node = node_for_item(item)
        if node is None or not node.remove_from_parent():
            logger.debug("Removal refused for %s", node)
            return False
        self._detach_item(item)
        self._update_status()
        self.update_tree()
        self._notify_tree_updated()
        return True

    def delete_selected(self) -> int:
        """Remove every selected node that can be removed."""
        removed = 0
        for item in self.tree.selectedItems():
            node = node_for_item(item)
            if node is None or not node.remove_from_parent():
                logger.debug("Removal refused for %s", node)
                continue
            self._detach_item(item)
            removed += 1
        if removed:
            self._update_status()
            self.update_tree()
            self._notify_tree_updated()
        return removed

    # --- Internals ---

    def _rebuild(self):
        self.tree.clear()
        if self._module is None:
            self._update_status()
            return
        root_item = build_display_tree(self._module.template.root)
        self.tree.addTopLevelItem(root_item)
        set_expansion(self.tree, root_item, True)
        self._update_status()

    def _update_status(self):
        if self._module is None:
            self.status_label.setText("")
            return
        file_count = self._module.template.count_files()
        self.status_label.setText(f"{file_count} file{'s' if file_count != 1 else ''}")

    def _detach_item(self, item: QTreeWidgetItem):
        parent_item = item.parent()
        if parent_item is not None:
            parent_item.removeChild(item)
        else:
            self.tree.takeTopLevelItem(self.tree.indexOfTopLevelItem(item))

    def _notify_tree_updated(self):
        if self._on_tree_update_listener is not None:
            self._on_tree_update_listener()

    def _show_create_dialog(self, parent_node: FileTreeNode, is_dir: bool) -> FileDialog:
        return FileDialog.show_for_create(
            parent_node,
            is_dir,
            lambda node: self.add_tree_node(parent_node, node),
            parent=self,
        )

    def _show_rename_dialog(self, node: FileTreeNode) -> FileDialog:
        old_name = node.name
        return FileDialog.show_for_refactor(
            node,
            lambda renamed: self.rename_node(node, renamed, old_name),
            parent=self,
        )

    def _on_show_placeholder_toggled(self, checked: bool):
        self._replace_placeholder = not checked
        if self._module is not None:
            self.set_module_config(self._module)

    def _show_context_menu(self, pos):
        """Show the edit menu for the node under the cursor."""
        item = self.tree.itemAt(pos)
        if item is None or node_for_item(item) is None:
            return
        self.tree.setCurrentItem(item)

        actions = self.edit_actions(item)
        if not actions:
            return

        menu = QMenu(self)
        for label in actions:
            menu.addAction(label)

        action = menu.exec(self.tree.viewport().mapToGlobal(pos))
        if action is not None:
            logger.debug("%s on %s", action.text(), node_for_item(item))
            actions[action.text()]()

    def eventFilter(self, obj, event):
        """Delete key removes the selected nodes."""
        if obj is self.tree and event.type() == QEvent.Type.KeyPress:
            if event.key() == Qt.Key.Key_Delete:
                self.delete_selected()
                return True
        return super().eventFilter(obj, event)
