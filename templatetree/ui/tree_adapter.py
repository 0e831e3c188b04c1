"""
Mirrors a FileTreeNode graph into QTreeWidgetItems.
"""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QTreeWidget, QTreeWidgetItem

from ..model import FileTreeNode

ROLE_NODE = Qt.ItemDataRole.UserRole  # FileTreeNode shown by the item


def build_display_tree(node: FileTreeNode) -> QTreeWidgetItem:
    """Wrap node and, for directories, its children in display items."""
    item = QTreeWidgetItem()
    item.setData(0, ROLE_NODE, node)
    if node.is_dir:
        for child in node.children:
            item.addChild(build_display_tree(child))
    return item


def node_for_item(item: QTreeWidgetItem | None) -> FileTreeNode | None:
    if item is None:
        return None
    node = item.data(0, ROLE_NODE)
    return node if isinstance(node, FileTreeNode) else None


def node_for_item_index(index) -> FileTreeNode | None:
    if not index.isValid():
        return None
    node = index.data(ROLE_NODE)
    return node if isinstance(node, FileTreeNode) else None


def set_expansion(tree: QTreeWidget, item: QTreeWidgetItem, expand: bool):
    """Expand or collapse item and every item below it.

    Children are handled before their parent, so nested folders end in the
    requested state too.
    """
    for i in range(item.childCount()):
        set_expansion(tree, item.child(i), expand)
    if expand:
        tree.expandItem(item)
    else:
        tree.collapseItem(item)
