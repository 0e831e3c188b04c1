"""
Tests for the main window: loading, editing and saving a module file.
"""

import pytest
from PyQt6.QtWidgets import QFileDialog

from templatetree import library
from templatetree.model import FileTreeNode
from templatetree.template_engine import dump_module_yaml, parse_module_yaml
from templatetree.ui.window import TemplateTreeWindow


@pytest.fixture
def module_file(tmp_path, sample_module):
    path = tmp_path / "sample.yaml"
    path.write_text(dump_module_yaml(sample_module), encoding="utf-8")
    return path


@pytest.fixture
def window(qtbot, isolated_library, module_file):
    window = TemplateTreeWindow(module_file)
    qtbot.addWidget(window)
    yield window
    # closeEvent must not ask about unsaved edits
    window._set_dirty(False)


@pytest.mark.gui
def test_opens_module_from_path(window):
    assert window.module.name == "Sample"
    assert not window.is_dirty()
    assert window.windowTitle() == "TemplateTree - Sample"
    assert window.preview_panel.status_label.text() == "3 files"


@pytest.mark.gui
def test_edit_marks_dirty_and_save_writes_file(window, module_file):
    src = window.module.template.root.children[1]
    assert window.preview_panel.add_tree_node(src, FileTreeNode("Extra.${FILE_EXT}"))
    assert window.is_dirty()
    assert window.windowTitle().endswith(" *")

    assert window.save_module()

    assert not window.is_dirty()
    saved = parse_module_yaml(module_file.read_text(encoding="utf-8"))
    names = [child.name for child in saved.template.root.children[1].children]
    assert "Extra.${FILE_EXT}" in names


@pytest.mark.gui
def test_without_path_restores_seeded_module(qtbot, isolated_library):
    window = TemplateTreeWindow()
    qtbot.addWidget(window)
    assert window.module.name == "Feature Module"
    assert window.module.template.count_files() == 3


@pytest.mark.gui
def test_placeholder_toggle_is_remembered(window):
    window.preview_panel.show_placeholder.setChecked(True)
    library.invalidate_preferences_cache()
    assert library.get_show_placeholders() is True
    assert window.preview_panel.is_showing_placeholders()
    assert window.show_placeholders_action.isChecked()


@pytest.mark.gui
def test_view_action_switches_display(window):
    root_item = window.preview_panel.root_item()
    window.show_placeholders_action.setChecked(True)
    assert window.preview_panel.is_showing_placeholders()
    assert window.preview_panel.show_placeholder.isChecked()
    assert window.preview_panel.root_item() is root_item
    library.invalidate_preferences_cache()
    assert library.get_show_placeholders() is True


@pytest.mark.gui
def test_new_module_never_overwrites_library_file(qtbot, isolated_library, tmp_path, monkeypatch):
    window = TemplateTreeWindow()
    qtbot.addWidget(window)
    src = window.module.template.root.children[1]
    assert window.preview_panel.add_tree_node(src, FileTreeNode("Edited.kt"))
    assert window.save_module()

    window._new_module()
    monkeypatch.setattr(QFileDialog, "getSaveFileName", lambda *args: ("", ""))
    assert not window.save_module()

    saved = library.load_module("Feature Module")
    names = [child.name for child in saved.template.root.children[1].children]
    assert "Edited.kt" in names

    target = tmp_path / "copy.yaml"
    monkeypatch.setattr(QFileDialog, "getSaveFileName", lambda *args: (str(target), ""))
    assert window.save_module()
    assert "Edited.kt" not in target.read_text(encoding="utf-8")
    assert "Edited.kt" in library.get_module_path("Feature Module").read_text(encoding="utf-8")
