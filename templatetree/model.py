"""
Template model for TemplateTree.
File tree nodes, templates and modules, plus the ${KEY} placeholder helpers.
Nothing here depends on Qt.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

PLACEHOLDER_PATTERN = re.compile(r'\$\{([^${}]+)\}')


def find_placeholders(text: str) -> List[str]:
    """Return placeholder keys used in text, in order of first appearance."""
    keys = []
    for match in PLACEHOLDER_PATTERN.finditer(text or ""):
        key = match.group(1)
        if key not in keys:
            keys.append(key)
    return keys


def substitute_placeholders(text: str, values: Mapping[str, str]) -> str:
    """Replace ${KEY} tokens with their values.

    Tokens with no value, or an empty one, are left untouched so the user can
    still see what is missing.
    """
    def replace(match):
        value = values.get(match.group(1))
        if value is None or value == "":
            return match.group(0)
        return str(value)

    return PLACEHOLDER_PATTERN.sub(replace, text or "")


def merge_placeholders(
    current: Mapping[str, str],
    incoming: Union[Mapping[str, str], Iterable[str]],
) -> Dict[str, str]:
    """Return a new placeholder table with incoming entries merged in.

    A mapping overrides existing values. A bare iterable of keys only adds the
    keys that are missing, with an empty value.
    """
    merged = dict(current)
    if isinstance(incoming, Mapping):
        for key, value in incoming.items():
            merged[str(key)] = "" if value is None else str(value)
    else:
        for key in incoming:
            merged.setdefault(str(key), "")
    return merged


def merge_file_templates(
    current: Mapping[str, str],
    incoming: Mapping[str, str],
) -> Dict[str, str]:
    """Return a new file template table with incoming entries merged in."""
    merged = dict(current)
    for name, content in incoming.items():
        merged[str(name)] = "" if content is None else str(content)
    return merged


@dataclass(eq=False)
class FileTreeNode:
    """A file or directory in a module template tree."""
    name: str
    is_dir: bool = False
    children: List['FileTreeNode'] = field(default_factory=list)
    placeholders: Dict[str, str] = field(default_factory=dict)
    file_templates: Dict[str, str] = field(default_factory=dict)
    parent: Optional['FileTreeNode'] = field(default=None, repr=False)

    def __post_init__(self):
        if not self.is_dir:
            self.children = []
        for child in self.children:
            child.parent = self

    def is_root(self) -> bool:
        return self.parent is None

    def placeholders_in_name(self) -> List[str]:
        return find_placeholders(self.name)

    def resolved_placeholders(self) -> Dict[str, str]:
        """Placeholder values visible from this node, nearest declaration wins."""
        values = {}
        for node in self.path():
            for key, value in node.placeholders.items():
                if value not in (None, ""):
                    values[key] = value
        return values

    def get_real_name(self) -> str:
        return substitute_placeholders(self.name, self.resolved_placeholders())

    def path(self) -> List['FileTreeNode']:
        """Nodes from the root down to this one."""
        nodes = []
        node = self
        while node is not None:
            nodes.append(node)
            node = node.parent
        nodes.reverse()
        return nodes

    def iter_nodes(self) -> Iterator['FileTreeNode']:
        """Pre-order walk of this subtree."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def count_files(self) -> int:
        if not self.is_dir:
            return 1
        return sum(child.count_files() for child in self.children)

    def find_child(self, real_name: str) -> Optional['FileTreeNode']:
        for child in self.children:
            if child.get_real_name() == real_name:
                return child
        return None

    def add_child(self, node: 'FileTreeNode', override: bool = False) -> bool:
        """Attach node as the last child.

        With override, a child resolving to the same name is replaced in
        place. Without it, the name clash makes the call fail.
        """
        if not self.is_dir or node is self or any(c is node for c in self.children):
            return False
        previous = node.parent
        # Resolve the name as it would read under this parent
        node.parent = self
        existing = self.find_child(node.get_real_name())
        node.parent = previous
        if existing is not None and not override:
            return False
        if previous is not None:
            node.remove_from_parent()
        if existing is not None:
            return self.replace_child(existing, node)
        node.parent = self
        self.children.append(node)
        return True

    def replace_child(self, old: 'FileTreeNode', new: 'FileTreeNode') -> bool:
        for index, child in enumerate(self.children):
            if child is old:
                self.children[index] = new
                old.parent = None
                new.parent = self
                return True
        return False

    def remove_from_parent(self) -> bool:
        """Detach from the parent. Root nodes cannot be removed."""
        parent = self.parent
        if parent is None:
            return False
        for index, child in enumerate(parent.children):
            if child is self:
                del parent.children[index]
                self.parent = None
                return True
        return False

    def rename(self, new_name: str):
        self.name = new_name

    def __str__(self):
        kind = "dir" if self.is_dir else "file"
        return f"FileTreeNode({self.name!r}, {kind}, {len(self.children)} children)"


class Template:
    """Owns the root node and the placeholder/file template tables of a module.

    The root node's placeholders are the aggregate table, so every attached
    node resolves its name against it.
    """

    def __init__(
        self,
        root: Optional[FileTreeNode] = None,
        placeholders: Optional[Mapping[str, str]] = None,
        file_templates: Optional[Mapping[str, str]] = None,
    ):
        self.root = root if root is not None else FileTreeNode("root", is_dir=True)
        self.root.parent = None
        self.root.placeholders = merge_placeholders(self.root.placeholders, placeholders or {})
        self.file_templates = merge_file_templates({}, file_templates or {})

    @property
    def placeholders(self) -> Dict[str, str]:
        return self.root.placeholders

    def add_placeholders(self, tokens: Union[Mapping[str, str], Iterable[str]]):
        self.root.placeholders = merge_placeholders(self.root.placeholders, tokens)

    def add_file_templates(self, templates: Mapping[str, str]):
        self.file_templates = merge_file_templates(self.file_templates, templates)

    def rename_file_template(self, old_name: str, new_name: str) -> bool:
        """Keep a file template attached to its file across a rename.

        If new_name already has a template, the renamed file's content
        replaces it.
        """
        if old_name == new_name or old_name not in self.file_templates:
            return False
        templates = dict(self.file_templates)
        content = templates.pop(old_name)
        templates[new_name] = content
        self.file_templates = templates
        return True

    def absorb(self, node: FileTreeNode):
        """Move placeholders and file templates found on node into the tables."""
        self.add_placeholders(node.placeholders_in_name())
        self.add_placeholders(node.placeholders)
        self.add_file_templates(node.file_templates)
        node.placeholders.clear()
        node.file_templates.clear()

    def attach(self, parent: FileTreeNode, node: FileTreeNode) -> bool:
        """Add node under parent and migrate its tables into this template."""
        if not parent.add_child(node, override=True):
            return False
        self.absorb(node)
        return True

    def file_template_for(self, node: FileTreeNode) -> Optional[str]:
        return self.file_templates.get(node.name)

    def count_files(self) -> int:
        return self.root.count_files()


@dataclass
class Module:
    """A named module template."""
    name: str
    template: Template = field(default_factory=Template)
    description: str = ""
