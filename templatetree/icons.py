"""
File type icons for the preview tree.
Maps file extensions to icons, with folder and plain-text fallbacks.
"""

from typing import Callable, Dict, Optional

from PyQt6.QtCore import QFileInfo, QMimeDatabase
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import QApplication, QFileIconProvider, QStyle

# Freedesktop icon theme names per extension
EXTENSION_THEME_ICONS = {
    "py": "text-x-python",
    "kt": "text-x-kotlin",
    "kts": "text-x-kotlin",
    "java": "text-x-java",
    "c": "text-x-csrc",
    "h": "text-x-chdr",
    "cpp": "text-x-c++src",
    "js": "application-javascript",
    "ts": "text-x-typescript",
    "json": "application-json",
    "xml": "text-xml",
    "html": "text-html",
    "css": "text-css",
    "md": "text-markdown",
    "yaml": "application-x-yaml",
    "yml": "application-x-yaml",
    "gradle": "text-x-groovy",
    "sh": "application-x-shellscript",
    "png": "image-x-generic",
    "jpg": "image-x-generic",
    "svg": "image-svg+xml",
}


class FileTypeRegistry:
    """Looks up icons by file extension.

    Registered icons come first. Other extensions go through resolver, if
    one is given, and its answer is remembered.
    """

    def __init__(
        self,
        icons: Optional[Dict[str, QIcon]] = None,
        folder_icon: Optional[QIcon] = None,
        text_icon: Optional[QIcon] = None,
        resolver: Optional[Callable[[str], Optional[QIcon]]] = None,
    ):
        self._icons = {}
        for extension, icon in (icons or {}).items():
            self.register(extension, icon)
        self._folder_icon = folder_icon
        self._text_icon = text_icon
        self._resolver = resolver
        self._unresolved = set()

    def register(self, extension: str, icon: QIcon):
        self._icons[extension.lower().lstrip(".")] = icon

    def lookup(self, extension: str) -> Optional[QIcon]:
        """Return the icon for extension, or None if it is unknown."""
        key = (extension or "").lower()
        icon = self._icons.get(key)
        if icon is None and self._resolver is not None and key not in self._unresolved:
            icon = self._resolver(key)
            if icon is None or icon.isNull():
                self._unresolved.add(key)
            else:
                self._icons[key] = icon
        if icon is None or icon.isNull():
            return None
        return icon

    def folder_icon(self) -> QIcon:
        if self._folder_icon is None:
            self._folder_icon = _standard_icon(QStyle.StandardPixmap.SP_DirIcon)
        return self._folder_icon

    def text_icon(self) -> QIcon:
        if self._text_icon is None:
            self._text_icon = _standard_icon(QStyle.StandardPixmap.SP_FileIcon)
        return self._text_icon


def _standard_icon(pixmap: QStyle.StandardPixmap) -> QIcon:
    style = QApplication.style()
    if style is None:
        return QIcon()
    return style.standardIcon(pixmap)


def system_icon(extension: str) -> Optional[QIcon]:
    """Icon Qt knows for files with extension, or None for unknown types."""
    if not extension:
        return None
    file_name = f"x.{extension}"
    mime = QMimeDatabase().mimeTypeForFile(file_name, QMimeDatabase.MatchMode.MatchExtension)
    if not mime.isValid() or mime.isDefault():
        return None
    for name in (mime.iconName(), mime.genericIconName()):
        if name and QIcon.hasThemeIcon(name):
            return QIcon.fromTheme(name)
    icon = QFileIconProvider().icon(QFileInfo(file_name))
    return None if icon.isNull() else icon


def default_registry() -> FileTypeRegistry:
    """Registry backed by the desktop icon theme and Qt's MIME database.

    Needs a QApplication.
    """
    registry = FileTypeRegistry(resolver=system_icon)
    for extension, theme_name in EXTENSION_THEME_ICONS.items():
        icon = QIcon.fromTheme(theme_name)
        if not icon.isNull():
            registry.register(extension, icon)
    return registry
