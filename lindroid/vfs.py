#!/usr/bin/env python3
"""
vfs - The in-memory filesystem tree behind the lindroid shell.

Core philosophy:
- A node is either a file or a directory, never both
- The root is an unnamed directory owned by the FileSystem
- Lookups never raise; a missing path is just None
- Directories are mutated in place through their children mapping
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Discriminator for the two node shapes."""
    FILE = 'file'
    DIRECTORY = 'directory'


@dataclass
class FileNode:
    """Regular file node."""
    name: str
    content: str = ''

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE

    def is_file(self) -> bool:
        return True

    def is_dir(self) -> bool:
        return False

    def to_dict(self) -> dict:
        """Convert node to dictionary for serialization."""
        return {'name': self.name, 'type': self.kind.value, 'content': self.content}


@dataclass
class DirNode:
    """Directory node holding its children by name."""
    name: str
    children: Dict[str, 'Node'] = field(default_factory=dict)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.DIRECTORY

    def is_file(self) -> bool:
        return False

    def is_dir(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'type': self.kind.value,
            'children': [child.to_dict() for child in self.children.values()],
        }

    def get(self, name: str) -> Optional['Node']:
        """Return the child called name, or None."""
        return self.children.get(name)

    def add(self, node: 'Node') -> bool:
        """Insert node as a child. Returns False if the name is already taken."""
        if node.name in self.children:
            return False
        self.children[node.name] = node
        return True

    def remove(self, name: str) -> Optional['Node']:
        """Detach and return the child called name (with its subtree)."""
        return self.children.pop(name, None)

    def rename(self, old: str, new: str) -> bool:
        """
        Rename a child in a single step.

        Either the child ends up under the new name only, or nothing changes.
        Fails if old is missing or new is already taken.
        """
        if old not in self.children:
            return False
        if old == new:
            return True
        if new in self.children:
            return False

        node = self.children.pop(old)
        node.name = new
        self.children[new] = node
        return True

    def listing(self) -> List[str]:
        """Child names: directories first, then files, each group sorted."""
        dirs = sorted(name for name, node in self.children.items() if node.is_dir())
        files = sorted(name for name, node in self.children.items() if node.is_file())
        return dirs + files


Node = Union[FileNode, DirNode]


def is_valid_name(name: str) -> bool:
    """A node name must be a single, non-empty path segment."""
    return bool(name) and '/' not in name and name not in ('.', '..')


def _attach_loaded(directory: DirNode, child_data: dict) -> None:
    child = node_from_dict(child_data)
    if not directory.add(child):
        raise ValueError(f"Duplicate entry {child.name!r} in {directory.name or '/'!r}")


def node_from_dict(data: dict) -> Node:
    """Rebuild a node (and its subtree) from its dictionary form."""
    node_type = data.get('type')
    name = data.get('name')
    if not isinstance(name, str) or not is_valid_name(name):
        raise ValueError(f"Invalid node name: {name!r}")

    if node_type == NodeKind.FILE.value:
        return FileNode(name, data.get('content', ''))
    elif node_type == NodeKind.DIRECTORY.value:
        directory = DirNode(name)
        for child_data in data.get('children', []):
            _attach_loaded(directory, child_data)
        return directory
    else:
        raise ValueError(f"Unknown node type: {node_type!r}")


class FileSystem:
    """
    Hierarchical in-memory filesystem.

    The tree exposes lookups only. Callers mutate it directly through the
    children mapping of a resolved DirNode, so any holder of such a reference
    can change the structure.
    """

    def __init__(self, root: Optional[DirNode] = None):
        self.root = root if root is not None else DirNode('')

    def resolve(self, segments: Sequence[str]) -> Optional[Node]:
        """
        Walk segments from the root.

        Returns the node when every segment exists and every intermediate
        segment is a directory, otherwise None.
        """
        current: Node = self.root
        for segment in segments:
            if not current.is_dir():
                return None
            child = current.get(segment)
            if child is None:
                return None
            current = child
        return current

    def copy(self) -> 'FileSystem':
        """Return an independent deep copy of this tree."""
        return FileSystem(copy.deepcopy(self.root))

    # Serialization

    def to_json(self) -> str:
        """Serialize the tree to JSON."""
        data = {'root': [child.to_dict() for child in self.root.children.values()]}
        return json.dumps(data, indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'FileSystem':
        """
        Deserialize a tree produced by to_json.

        Raises ValueError for unknown node types, invalid names and duplicate
        sibling names.
        """
        data = json.loads(json_str)
        root = DirNode('')
        for child_data in data.get('root', []):
            _attach_loaded(root, child_data)
        logger.debug("Loaded filesystem with %d top-level entries", len(root.children))
        return cls(root)


DEFAULT_USER = 'lindroid-user'

README_CONTENT = "Welcome to Lindroid!\nThis is a simulated Linux environment."
SCRIPT_CONTENT = "#!/bin/bash\necho 'Hello from Lindroid!'"


def default_filesystem(user: str = DEFAULT_USER) -> FileSystem:
    """Build a fresh tree with the default home layout for user."""
    home = DirNode(user)
    for name in ['Documents', 'Downloads', 'Pictures', 'Videos', 'Projects']:
        home.add(DirNode(name))
    home.add(FileNode('readme.txt', README_CONTENT))
    home.add(FileNode('script.sh', SCRIPT_CONTENT))

    home_root = DirNode('home')
    home_root.add(home)

    fs = FileSystem()
    fs.root.add(home_root)
    return fs
