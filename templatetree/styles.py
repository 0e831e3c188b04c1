"""
Fonts for TemplateTree.
"""

from functools import lru_cache

from PyQt6.QtGui import QFont, QFontDatabase

# First installed family wins
CODE_FONTS = ("JetBrains Mono", "Fira Code", "Menlo", "Consolas", "DejaVu Sans Mono")
UI_FONTS = ("Inter", "SF Pro Text", "Segoe UI", "Cantarell", "DejaVu Sans")


@lru_cache(maxsize=None)
def first_installed(families: tuple) -> str | None:
    installed = set(QFontDatabase.families())
    return next((family for family in families if family in installed), None)


def _font(families: tuple, size: int, hint: QFont.StyleHint) -> QFont:
    font = QFont()
    family = first_installed(families)
    if family is not None:
        font.setFamily(family)
    font.setStyleHint(hint)
    font.setPointSize(size)
    return font


def get_code_font(size: int = 12) -> QFont:
    """Monospace font for file template text."""
    return _font(CODE_FONTS, size, QFont.StyleHint.Monospace)


def get_ui_font(size: int = 13) -> QFont:
    return _font(UI_FONTS, size, QFont.StyleHint.SansSerif)
