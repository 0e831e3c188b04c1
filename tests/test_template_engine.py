"""
Tests for module YAML parsing, dumping and generation.
"""

import pytest

from templatetree.template_engine import (
    DEFAULT_MODULE_YAML,
    ModuleParseError,
    dump_module_yaml,
    generate_module,
    parse_module_yaml,
)


def _shape(node):
    return (node.name, node.is_dir, [_shape(child) for child in node.children])


class TestParse:

    def test_sample_module(self, sample_module):
        root = sample_module.template.root
        assert sample_module.name == "Sample"
        assert root.get_real_name() == "app"
        assert [child.name for child in root.children] == ["README.md", "src", "res"]
        src = root.children[1]
        assert src.is_dir
        main, util = src.children
        assert main.get_real_name() == "Main.kt"
        assert util.placeholders == {"FILE_EXT": "java"}
        assert util.children[0].get_real_name() == "Helper.java"
        res = root.children[2]
        assert res.is_dir and res.children[0].name == "values"
        assert res.children[0].children == []

    def test_tabs_are_accepted(self):
        module = parse_module_yaml("name: T\nfiles:\n\t- a.txt\n")
        assert [c.name for c in module.template.root.children] == ["a.txt"]

    def test_root_defaults_to_module_name(self):
        module = parse_module_yaml("name: Plain\nfiles: []\n")
        assert module.template.root.name == "Plain"
        assert module.template.root.is_root()

    def test_invalid_yaml_reports_line(self):
        with pytest.raises(ModuleParseError) as info:
            parse_module_yaml("name: x\nfiles:\n  - [unclosed\n")
        assert info.value.line is not None

    @pytest.mark.parametrize("text", [
        "- just a list",
        "name: x\nfiles: nope\n",
        "name: x\nfiles:\n  - a: 1\n    b: 2\n",
        "name: x\nplaceholders: [A]\n",
        "name: x\nfiles:\n  - folder: src\n    contents: nope\n",
    ])
    def test_invalid_shapes(self, text):
        with pytest.raises(ModuleParseError):
            parse_module_yaml(text)

    def test_default_module_parses(self):
        module = parse_module_yaml(DEFAULT_MODULE_YAML)
        assert module.template.count_files() == 3
        assert "Main.${FILE_EXT}" in module.template.file_templates


class TestDump:

    def test_dump_keeps_shape_and_tables(self, sample_module):
        reloaded = parse_module_yaml(dump_module_yaml(sample_module))
        assert _shape(reloaded.template.root) == _shape(sample_module.template.root)
        assert reloaded.template.placeholders == sample_module.template.placeholders
        assert reloaded.template.file_templates == sample_module.template.file_templates
        util = reloaded.template.root.children[1].children[1]
        assert util.placeholders == {"FILE_EXT": "java"}


class TestGenerate:

    def test_generate_writes_resolved_tree(self, sample_module, tmp_path):
        progress = []
        success, message = generate_module(
            sample_module, tmp_path,
            progress_callback=lambda done, total: progress.append((done, total)),
        )

        assert success, message
        main = tmp_path / "src" / "Main.kt"
        assert main.read_text(encoding="utf-8") == "package com.example.app\n"
        assert (tmp_path / "src" / "util" / "Helper.java").read_text() == ""
        assert (tmp_path / "README.md").is_file()
        assert (tmp_path / "res" / "values").is_dir()
        assert progress[-1] == (3, 3)

    def test_conflicts_skip_and_cancel(self, sample_module, tmp_path):
        readme = tmp_path / "README.md"
        readme.write_text("keep me")

        success, _ = generate_module(
            sample_module, tmp_path,
            conflict_callback=lambda path, root, is_dir: "skip",
        )
        assert success
        assert readme.read_text() == "keep me"

        success, message = generate_module(
            sample_module, tmp_path,
            conflict_callback=lambda path, root, is_dir: "cancel",
        )
        assert not success
        assert message == "Generation cancelled."

    def test_conflict_keep_both(self, sample_module, tmp_path):
        (tmp_path / "README.md").write_text("old")
        success, _ = generate_module(
            sample_module, tmp_path,
            conflict_callback=lambda path, root, is_dir: "merge" if is_dir else "keep",
        )
        assert success
        assert (tmp_path / "README.md").read_text() == "old"
        assert (tmp_path / "README (1).md").is_file()

    def test_progress_is_the_third_parameter(self, sample_module, tmp_path):
        progress = []
        success, _ = generate_module(
            sample_module, tmp_path, lambda done, total: progress.append(done)
        )
        assert success
        assert progress == [1, 2, 3]
