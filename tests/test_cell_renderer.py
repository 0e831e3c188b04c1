"""
Tests for row text and icon selection.
"""

from PyQt6.QtGui import QIcon, QPixmap

from templatetree.icons import FileTypeRegistry, default_registry
from templatetree.model import FileTreeNode, Template
from templatetree.ui.cell_renderer import file_extension, render_label


def _scenario():
    """root -> src -> Main.${FILE_EXT}, with FILE_EXT = kt."""
    main = FileTreeNode("Main.${FILE_EXT}")
    src = FileTreeNode("src", is_dir=True, children=[main])
    Template(FileTreeNode("root", is_dir=True, children=[src]), placeholders={"FILE_EXT": "kt"})
    return src, main


def test_raw_and_resolved_names(fake_registry):
    _, main = _scenario()

    assert render_label(main, True, fake_registry) == ("Main.${FILE_EXT}", "icon:text")
    assert render_label(main, False, fake_registry) == ("Main.kt", "icon:kt")
    assert fake_registry.lookups == ["${FILE_EXT}", "kt"]


def test_directories_always_get_folder_icon(fake_registry):
    src, _ = _scenario()
    assert render_label(src, False, fake_registry) == ("src", "icon:folder")
    assert render_label(src, True, fake_registry) == ("src", "icon:folder")
    assert fake_registry.lookups == []


def test_unknown_or_missing_extension_falls_back(fake_registry):
    assert render_label(FileTreeNode("Makefile"), False, fake_registry) == ("Makefile", "icon:text")
    assert render_label(FileTreeNode("data.bin"), False, fake_registry) == ("data.bin", "icon:text")
    assert fake_registry.lookups == ["Makefile", "bin"]


def test_file_extension():
    assert file_extension("a.tar.gz") == "gz"
    assert file_extension("README") == "README"
    assert file_extension(".gitignore") == "gitignore"


def test_file_type_registry(icon_registry):
    assert icon_registry.lookup("KT") is icon_registry.lookup("kt")
    assert icon_registry.lookup("kt") is not None
    assert icon_registry.lookup("rs") is None
    icon_registry.register(".rs", QIcon())
    assert icon_registry.lookup("rs") is None
    assert not icon_registry.folder_icon().isNull()
    assert not icon_registry.text_icon().isNull()


def test_resolver_answers_are_remembered(qapp):
    calls = []
    icon = QIcon(QPixmap(8, 8))

    def resolver(extension):
        calls.append(extension)
        return icon if extension == "kt" else None

    registry = FileTypeRegistry(resolver=resolver)
    assert registry.lookup("KT") is icon
    assert registry.lookup("kt") is icon
    assert registry.lookup("zzz") is None
    assert registry.lookup("zzz") is None
    assert calls == ["kt", "zzz"]


def test_default_registry_knows_common_types(qapp):
    registry = default_registry()
    for extension in ("py", "html", "png"):
        icon = registry.lookup(extension)
        assert icon is not None and not icon.isNull()
    assert registry.lookup("${FILE_EXT}") is None
    assert registry.lookup("README") is None
    main = FileTreeNode("Main.py")
    assert render_label(main, False, registry)[1] is registry.lookup("py")
