"""
Template engine for TemplateTree.
Handles module YAML parsing and dumping, and module generation to disk.
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml

from .model import FileTreeNode, Module, Template, substitute_placeholders

logger = logging.getLogger(__name__)


class ModuleParseError(Exception):
    """Exception for module YAML errors with line numbers."""
    def __init__(self, message: str, line: int = None):
        self.line = line
        self.message = message
        if line:
            super().__init__(f"{message} (line {line})")
        else:
            super().__init__(message)


def preprocess_yaml(text: str) -> str:
    """Preprocess YAML text: convert tabs to 2 spaces."""
    return text.replace('\t', '  ')


def _string_table(value: Any, label: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ModuleParseError(f'"{label}" must be a mapping.')
    return {
        str(key): "" if item is None else str(item)
        for key, item in value.items()
    }


def _normalize_name(value: Any) -> str:
    """YAML reads an unquoted ${KEY} as a string, but an empty key as None."""
    if value is None:
        return ""
    return str(value)


def _collect_nodes(items: List[Any]) -> List[FileTreeNode]:
    """Process a list of YAML items into file tree nodes."""
    nodes = []
    for item in items:
        nodes.append(_process_item(item))
    return nodes


def _process_item(item: Any) -> FileTreeNode:
    if isinstance(item, (str, int, float)):
        return FileTreeNode(name=str(item))

    if not isinstance(item, dict):
        raise ModuleParseError(f"Invalid item: {item!r}")

    placeholders = _string_table(item.get('placeholders'), "placeholders")

    if 'folder' in item:
        contents = item.get('contents') or []
        if not isinstance(contents, list):
            raise ModuleParseError(
                f'Contents of folder "{item["folder"]}" must be a list.'
            )
        return FileTreeNode(
            name=_normalize_name(item['folder']),
            is_dir=True,
            children=_collect_nodes(contents),
            placeholders=placeholders,
        )

    if 'file' in item:
        return FileTreeNode(
            name=_normalize_name(item['file']),
            placeholders=placeholders,
        )

    if len(item) == 1:
        # Shorthand folder: folder name as the key, list of contents as the value
        key, value = next(iter(item.items()))
        if isinstance(value, list) or value is None:
            return FileTreeNode(
                name=_normalize_name(key),
                is_dir=True,
                children=_collect_nodes(value or []),
            )
        raise ModuleParseError(f'Invalid shorthand folder for "{key}".')

    raise ModuleParseError(f"Invalid item: {item!r}")


def module_from_dict(data: Any) -> Module:
    """Build a Module from parsed YAML data."""
    if not isinstance(data, dict):
        raise ModuleParseError("Module YAML must be a mapping.")

    name = str(data.get('name') or "Untitled Module")
    files = data.get('files') or []
    if not isinstance(files, list):
        raise ModuleParseError('"files" must be a list.')

    root = FileTreeNode(
        name=_normalize_name(data.get('root', name)) or name,
        is_dir=True,
        children=_collect_nodes(files),
    )
    template = Template(
        root,
        placeholders=_string_table(data.get('placeholders'), "placeholders"),
        file_templates=_string_table(data.get('file_templates'), "file_templates"),
    )
    return Module(
        name=name,
        template=template,
        description=str(data.get('description') or ""),
    )


def parse_module_yaml(text: str) -> Module:
    """Parse module YAML text, raising ModuleParseError on failure."""
    try:
        data = yaml.safe_load(preprocess_yaml(text))
    except yaml.YAMLError as e:
        line = None
        if hasattr(e, 'problem_mark') and e.problem_mark:
            line = e.problem_mark.line + 1
        if line:
            raise ModuleParseError("Invalid YAML", line=line) from e
        raise ModuleParseError(f"Invalid YAML: {e}") from e
    return module_from_dict(data)


def _node_to_item(node: FileTreeNode) -> Any:
    if not node.is_dir:
        if node.placeholders:
            return {'file': node.name, 'placeholders': dict(node.placeholders)}
        return node.name
    item = {'folder': node.name}
    if node.placeholders:
        item['placeholders'] = dict(node.placeholders)
    item['contents'] = [_node_to_item(child) for child in node.children]
    return item


def module_to_dict(module: Module) -> Dict[str, Any]:
    template = module.template
    data = {'name': module.name}
    if module.description:
        data['description'] = module.description
    if template.root.name != module.name:
        data['root'] = template.root.name
    data['placeholders'] = dict(template.placeholders)
    data['file_templates'] = dict(template.file_templates)
    data['files'] = [_node_to_item(child) for child in template.root.children]
    return data


def dump_module_yaml(module: Module) -> str:
    return yaml.dump(
        module_to_dict(module),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )


def generate_module(
    module: Module,
    output_path: Path | str,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    conflict_callback: Optional[Callable[[Path, Path, bool], str]] = None,
) -> Tuple[bool, str]:
    """
    Generate the module files to disk.
    Generates children of the root directly into output_path.
    Returns (success, message).
    """
    output_path = Path(output_path)
    template = module.template

    class GenerationCancelled(Exception):
        pass

    def _next_available_path(path: Path) -> Path:
        stem = path.stem
        suffix = path.suffix
        parent = path.parent
        index = 1
        while True:
            candidate = parent / f"{stem} ({index}){suffix}"
            if not candidate.exists():
                return candidate
            index += 1

    try:
        total_files = template.count_files()
        files_created = [0]

        def create_node(node: FileTreeNode, parent_path: Path):
            current_path = parent_path / node.get_real_name()

            if node.is_dir:
                if current_path.exists() and conflict_callback:
                    decision = conflict_callback(current_path, output_path, True)
                    if decision == "cancel":
                        raise GenerationCancelled()
                    if decision == "skip":
                        return
                    if decision == "overwrite":
                        if current_path.is_dir():
                            shutil.rmtree(current_path)
                        else:
                            current_path.unlink()
                    elif decision == "merge" and current_path.is_file():
                        current_path.unlink()

                current_path.mkdir(parents=True, exist_ok=True)
                for child in node.children:
                    create_node(child, current_path)
            else:
                target_path = current_path
                if target_path.exists() and conflict_callback:
                    decision = conflict_callback(target_path, output_path, False)
                    if decision == "cancel":
                        raise GenerationCancelled()
                    if decision == "keep":
                        target_path = _next_available_path(target_path)
                    if decision == "skip":
                        return
                target_path.parent.mkdir(parents=True, exist_ok=True)
                content = template.file_template_for(node) or ""
                content = substitute_placeholders(content, node.resolved_placeholders())
                target_path.write_text(content, encoding='utf-8')
                files_created[0] += 1

                if progress_callback:
                    progress_callback(files_created[0], total_files)

        output_path.mkdir(parents=True, exist_ok=True)
        for child in template.root.children:
            create_node(child, output_path)

        logger.info("Generated %d files into %s", files_created[0], output_path)
        return True, f"Module created in: {output_path}"

    except GenerationCancelled:
        return False, "Generation cancelled."
    except OSError as e:
        logger.exception("Module generation failed")
        return False, f"Error creating module: {str(e)}"


# Default YAML template for new modules
DEFAULT_MODULE_YAML = '''# Example module template.
# Names may contain ${KEY} placeholders, resolved from the table below.
#
# - a plain string is a file
# - folder: name, with nested items in contents
# - "name": [...] is a shorthand folder
# - placeholders on a file or folder override the module table below it
name: Feature Module
root: ${MODULE_NAME}
placeholders:
  MODULE_NAME: feature
  PACKAGE: com.example.feature
  FILE_EXT: kt
file_templates:
  Main.${FILE_EXT}: |
    package ${PACKAGE}

    fun main() {
        println("Hello from ${MODULE_NAME}")
    }
files:
  - build.gradle
  - folder: src
    contents:
      - Main.${FILE_EXT}
  - "res":
    - folder: values
      contents:
        - strings.xml
'''
