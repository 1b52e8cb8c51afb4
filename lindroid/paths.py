#!/usr/bin/env python3
"""
Path resolution for the lindroid shell.

Turns a user-supplied path argument plus the current working directory into
an absolute segment list and looks it up in the tree. Failures come back as a
typed Resolution, never as an exception.

Supported forms:
- (none)   home directory for cd, current directory otherwise
- ..       parent of the working directory (no-op at root)
- /        root
- /a/b     absolute path, empty segments ignored
- name     a single child of the working directory

Multi-segment relative paths such as a/b are looked up as one literal name,
so they never resolve.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .vfs import FileSystem, Node


class ResolveStatus(Enum):
    FOUND = 'found'
    NOT_FOUND = 'not_found'
    NOT_A_DIRECTORY = 'not_a_directory'


@dataclass
class Resolution:
    """Outcome of resolving a path argument."""
    status: ResolveStatus
    segments: List[str]
    node: Optional[Node] = None

    @property
    def found(self) -> bool:
        return self.status is ResolveStatus.FOUND

    @property
    def path(self) -> str:
        return format_path(self.segments)


def format_path(segments: Sequence[str]) -> str:
    """Render segments as an absolute path string ('/' at root)."""
    return '/' + '/'.join(segments)


def split_path(path: str) -> List[str]:
    """Split an absolute path into segments, dropping empty ones."""
    return [segment for segment in path.split('/') if segment]


class PathResolver:
    """Resolves shell path arguments against a FileSystem."""

    def __init__(self, fs: FileSystem, home: Sequence[str]):
        self.fs = fs
        self.home = list(home)

    def target_segments(self, cwd: Sequence[str], arg: Optional[str]) -> List[str]:
        """Compute the absolute segments an argument refers to, without lookup."""
        if arg is None:
            return list(self.home)
        if arg == '..':
            return list(cwd[:-1]) if cwd else []
        if arg == '/':
            return []
        if arg.startswith('/'):
            return split_path(arg)
        return list(cwd) + [arg]

    def resolve(self, cwd: Sequence[str], arg: Optional[str],
                require_directory: bool = False) -> Resolution:
        """
        Resolve arg relative to cwd.

        With require_directory, a target that turns out to be a file yields
        NOT_A_DIRECTORY instead of FOUND.
        """
        return self._walk(self.target_segments(cwd, arg), require_directory)

    def _walk(self, segments: List[str], require_directory: bool = False) -> Resolution:
        current: Node = self.fs.root
        for segment in segments:
            if not current.is_dir():
                return Resolution(ResolveStatus.NOT_A_DIRECTORY, segments)
            child = current.get(segment)
            if child is None:
                return Resolution(ResolveStatus.NOT_FOUND, segments)
            current = child

        if require_directory and not current.is_dir():
            return Resolution(ResolveStatus.NOT_A_DIRECTORY, segments, current)
        return Resolution(ResolveStatus.FOUND, segments, current)

    def resolve_home(self) -> Resolution:
        return self.resolve([], None, require_directory=True)

    def resolve_current(self, cwd: Sequence[str]) -> Resolution:
        """Resolve the working directory itself."""
        return self._walk(list(cwd), require_directory=True)

    def resolve_child(self, cwd: Sequence[str], name: str) -> Resolution:
        """
        Look name up literally as a direct child of the working directory.

        Unlike resolve, no path syntax applies: ".." or "/etc" are just names.
        """
        return self._walk(list(cwd) + [name])
