"""
Tests for the create/rename node dialog.
"""

import pytest
from PyQt6.QtCore import Qt

from templatetree.ui.file_dialog import FileDialog


@pytest.fixture
def src(sample_module):
    return sample_module.template.root.children[1]


def _make(qtbot, *args, **kwargs):
    dialog = FileDialog(*args, **kwargs)
    qtbot.addWidget(dialog)
    return dialog


class TestValidation:

    @pytest.mark.parametrize("name, message", [
        ("", "Name cannot be empty."),
        ("   ", "Name cannot be empty."),
        ("a/b", "Name cannot contain path separators."),
        ("a\\b", "Name cannot contain path separators."),
        ("..", '".." is not a valid name.'),
    ])
    def test_rejected_names(self, qtbot, src, name, message):
        dialog = _make(qtbot, src, False)
        assert dialog.validate_name(name) == message
        dialog.name_input.setText(name)
        assert not dialog.ok_button.isEnabled()
        assert dialog.resolved_label.text() == message

    def test_clash_is_checked_on_resolved_names(self, qtbot, src):
        dialog = _make(qtbot, src, False)
        dialog.name_input.setText("Main.kt")
        assert dialog.resolved_label.text() == '"Main.kt" already exists here.'
        assert not dialog.ok_button.isEnabled()

    def test_resolved_name_preview(self, qtbot, src):
        dialog = _make(qtbot, src, False)
        dialog.name_input.setText("${PACKAGE}.${FILE_EXT}")
        assert dialog.resolved_label.text() == "Resolved name: com.example.app.kt"
        assert dialog.ok_button.isEnabled()

    def test_rename_may_keep_own_name(self, qtbot, src):
        main = src.children[0]
        dialog = _make(qtbot, src, False, node=main)
        assert dialog.name_input.text() == "Main.${FILE_EXT}"
        assert dialog.ok_button.text() == "Rename"
        assert dialog.ok_button.isEnabled()
        assert dialog.content_edit is None

    def test_directory_dialog_has_no_template(self, qtbot, src):
        dialog = _make(qtbot, src, True)
        assert dialog.content_edit is None
        assert dialog.ok_button.text() == "Create"


class TestCallbacks:

    def test_create_delivers_node_after_accept(self, qtbot, src):
        results = []
        dialog = FileDialog.show_for_create(src, False, results.append)
        qtbot.addWidget(dialog)
        assert results == []

        dialog.name_input.setText(" Test.txt ")
        dialog.content_edit.setPlainText("hello")
        qtbot.mouseClick(dialog.ok_button, Qt.MouseButton.LeftButton)

        assert len(results) == 1
        node = results[0]
        assert node.name == "Test.txt" and not node.is_dir
        assert node.parent is None
        assert node.file_templates == {"Test.txt": "hello"}

    def test_blank_content_adds_no_template(self, qtbot, src):
        results = []
        dialog = FileDialog.show_for_create(src, False, results.append)
        qtbot.addWidget(dialog)
        dialog.name_input.setText("empty.txt")
        dialog.content_edit.setPlainText("   \n")
        qtbot.mouseClick(dialog.ok_button, Qt.MouseButton.LeftButton)
        assert results[0].file_templates == {}

    def test_refactor_renames_in_place(self, qtbot, src):
        util = src.children[1]
        results = []
        dialog = FileDialog.show_for_refactor(util, results.append)
        qtbot.addWidget(dialog)
        dialog.name_input.setText("helpers")
        qtbot.mouseClick(dialog.ok_button, Qt.MouseButton.LeftButton)

        assert results == [util]
        assert util.name == "helpers"
        assert util.parent is src

    def test_cancel_never_calls_back(self, qtbot, src):
        results = []
        dialog = FileDialog.show_for_create(src, True, results.append)
        qtbot.addWidget(dialog)
        dialog.name_input.setText("new")
        qtbot.mouseClick(dialog.cancel_button, Qt.MouseButton.LeftButton)
        assert results == []
        assert dialog.result_node() is None
