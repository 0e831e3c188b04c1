"""
Row rendering for the preview tree: display text and icon of a node.
"""

from PyQt6.QtWidgets import QStyledItemDelegate, QStyleOptionViewItem

from ..model import FileTreeNode
from .tree_adapter import node_for_item_index


def file_extension(name: str) -> str:
    """Text after the final dot. A name without a dot is its own extension."""
    return name.split(".")[-1]


def render_label(node: FileTreeNode, show_raw_names: bool, registry):
    """Return (text, icon) for node.

    Raw names keep their ${KEY} tokens, otherwise the resolved name is shown.
    The icon follows the displayed text, so a raw Main.${FILE_EXT} falls back
    to the plain text icon.
    """
    text = node.name if show_raw_names else node.get_real_name()
    if node.is_dir:
        return text, registry.folder_icon()
    icon = registry.lookup(file_extension(text))
    if icon is None:
        icon = registry.text_icon()
    return text, icon


class FileNodeDelegate(QStyledItemDelegate):
    """Paints tree rows from the FileTreeNode stored on each item."""

    def __init__(self, registry, show_raw_names=lambda: False, parent=None):
        super().__init__(parent)
        self._registry = registry
        self._show_raw_names = show_raw_names

    def initStyleOption(self, option: QStyleOptionViewItem, index):
        super().initStyleOption(option, index)
        node = node_for_item_index(index)
        if node is None:
            return
        text, icon = render_label(node, self._show_raw_names(), self._registry)
        option.text = text
        option.icon = icon
        option.features |= QStyleOptionViewItem.ViewItemFeature.HasDisplay
        option.features |= QStyleOptionViewItem.ViewItemFeature.HasDecoration
