"""
Global pytest configuration and fixtures for the TemplateTree test suite.
"""

import os
import sys

# Qt must not look for a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add project root to sys.path so 'templatetree' can be imported without installing
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from templatetree import library
from templatetree.template_engine import parse_module_yaml

SAMPLE_MODULE_YAML = """
name: Sample
root: ${MODULE_NAME}
placeholders:
  MODULE_NAME: app
  PACKAGE: com.example.app
  FILE_EXT: kt
file_templates:
  Main.${FILE_EXT}: |
    package ${PACKAGE}
files:
  - README.md
  - folder: src
    contents:
      - Main.${FILE_EXT}
      - folder: util
        placeholders:
          FILE_EXT: java
        contents:
          - Helper.${FILE_EXT}
  - "res":
    - folder: values
      contents: []
"""


def pytest_configure(config):
    """Configure pytest with custom settings."""
    config.addinivalue_line("markers", "gui: mark test as requiring GUI")


@pytest.fixture
def sample_module():
    """Module with nested folders and a folder-level placeholder override."""
    return parse_module_yaml(SAMPLE_MODULE_YAML)


@pytest.fixture
def isolated_library(tmp_path, monkeypatch):
    """Point the persistence layer at a temporary home."""
    home = tmp_path / "home"
    monkeypatch.setattr(library, "APP_SUPPORT_DIR", home)
    monkeypatch.setattr(library, "DEFAULT_MODULES_DIR", home / "modules")
    monkeypatch.setattr(library, "PREFERENCES_PATH", home / "preferences.yaml")
    library.invalidate_preferences_cache()
    yield home
    library.invalidate_preferences_cache()


class FakeRegistry:
    """Icon registry returning plain strings, for renderer tests without Qt."""

    def __init__(self, known=("kt", "java", "md")):
        self.known = set(known)
        self.lookups = []

    def lookup(self, extension):
        self.lookups.append(extension)
        return f"icon:{extension}" if extension in self.known else None

    def folder_icon(self):
        return "icon:folder"

    def text_icon(self):
        return "icon:text"


@pytest.fixture
def fake_registry():
    return FakeRegistry()


@pytest.fixture
def icon_registry(qapp):
    """Real FileTypeRegistry with distinguishable solid-colour icons."""
    from PyQt6.QtGui import QColor, QIcon, QPixmap
    from templatetree.icons import FileTypeRegistry

    def solid(color):
        pixmap = QPixmap(16, 16)
        pixmap.fill(QColor(color))
        return QIcon(pixmap)

    return FileTypeRegistry(
        icons={"kt": solid("purple"), "java": solid("orange"), "md": solid("blue")},
        folder_icon=solid("yellow"),
        text_icon=solid("gray"),
    )
