"""
Lindroid - An in-memory command shell over a simulated filesystem

This package provides a small Unix-like shell emulator: a virtual
filesystem tree, path resolution, a command dispatcher with per-instance
state, and a terminal session layer for transcripts and replay.
"""

__version__ = "0.1.0"

from .vfs import (
    FileSystem,
    FileNode,
    DirNode,
    Node,
    NodeKind,
    default_filesystem,
)

from .paths import (
    PathResolver,
    Resolution,
    ResolveStatus,
)

from .command_parser import (
    Command,
    CommandParser,
)

from .config import TerminalConfig

from .emulator import (
    TerminalEmulator,
    ShellState,
    CLEAR_SIGNAL,
    is_clear_signal,
)

from .terminal import (
    TerminalSession,
    CommandHistory,
    HistoryEntry,
)

__all__ = [
    # Filesystem tree
    "FileSystem",
    "FileNode",
    "DirNode",
    "Node",
    "NodeKind",
    "default_filesystem",

    # Path resolution
    "PathResolver",
    "Resolution",
    "ResolveStatus",

    # Command parser
    "Command",
    "CommandParser",

    # Dispatcher
    "TerminalConfig",
    "TerminalEmulator",
    "ShellState",
    "CLEAR_SIGNAL",
    "is_clear_signal",

    # Terminal
    "TerminalSession",
    "CommandHistory",
    "HistoryEntry",

    # Version info
    "__version__",
]
