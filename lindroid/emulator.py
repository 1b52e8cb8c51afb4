#!/usr/bin/env python3
"""
Command dispatcher for the lindroid shell.

TerminalEmulator owns the per-instance ShellState (working directory and
environment) and a reference to its filesystem tree. Each call to
execute_command parses one line, runs the matching handler and returns a
single output string.

Design Principles:
- Every command produces exactly one string; errors are messages, not exceptions
- Failures are detected before any mutation, so state is never left half-changed
- Each emulator gets its own tree unless one is passed in explicitly
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from .command_parser import Command, CommandParser
from .config import TerminalConfig
from .paths import PathResolver, ResolveStatus, format_path
from .vfs import DirNode, FileNode, FileSystem, default_filesystem, is_valid_name

logger = logging.getLogger(__name__)


class _ClearSignal(str):
    """String subclass marking the output of clear."""

    def __repr__(self) -> str:
        return 'CLEAR_SIGNAL'


# Callers compare by identity, so `echo __CLEAR__` is never mistaken for it.
CLEAR_SIGNAL = _ClearSignal('__CLEAR__')


def is_clear_signal(output: str) -> bool:
    """Check whether output asks the caller to clear its transcript."""
    return output is CLEAR_SIGNAL


HELP_TEXT = """Available commands:
  help              - Show this help message
  clear             - Clear terminal screen
  echo [text]       - Echo text to output
  date              - Show current date and time
  whoami            - Display current user
  pwd               - Print working directory
  ls [path]         - List directory contents
  cd [path]         - Change directory
  cat [file]        - Display file contents
  mkdir [name]      - Create directory
  touch [file]      - Create empty file
  rm [file]         - Remove file or directory
  mv [old] [new]    - Rename file or directory
  uname [-a]        - Show system information
  env               - Display environment variables
  export KEY=VALUE  - Set environment variable
  history           - Show command history

Note: This is a simulated Linux environment running in-memory."""

HISTORY_TEXT = "Command history feature - use up/down arrows"


@dataclass
class ShellState:
    """Mutable per-emulator state."""
    cwd: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)


class TerminalEmulator:
    """
    In-memory shell that maps command names to handlers.

    Behaves as a reducer over ShellState: (state, command) -> (state', output).
    """

    def __init__(self, fs: Optional[FileSystem] = None,
                 config: Optional[TerminalConfig] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """Initialize with an optional tree, configuration and clock."""
        self.config = config or TerminalConfig()
        self.fs = fs if fs is not None else default_filesystem(self.config.user)
        self.clock = clock or (lambda: datetime.now().astimezone())
        self.parser = CommandParser()
        self.resolver = PathResolver(self.fs, self.config.home_segments())

        initial = self.resolver.resolve([], self.config.initial_dir, require_directory=True)
        if not initial.found:
            raise ValueError(f"Initial directory {self.config.initial_dir} is not a directory in the tree")

        self.state = ShellState(cwd=initial.segments, env=self.config.default_env())

        self._commands: Dict[str, Callable[[Command], str]] = {
            'help': self._help,
            'clear': self._clear,
            'echo': self._echo,
            'date': self._date,
            'whoami': self._whoami,
            'pwd': self._pwd,
            'ls': self._ls,
            'cd': self._cd,
            'cat': self._cat,
            'mkdir': self._mkdir,
            'touch': self._touch,
            'rm': self._rm,
            'mv': self._mv,
            'uname': self._uname,
            'env': self._env,
            'export': self._export,
            'history': self._history,
        }

    @property
    def commands(self) -> List[str]:
        """Names of all recognized commands."""
        return list(self._commands)

    def get_current_path(self) -> str:
        """Absolute working directory, as shown in the prompt."""
        return format_path(self.state.cwd)

    def execute_command(self, command_line: str) -> str:
        """
        Execute one command line and return its output.

        Returns CLEAR_SIGNAL for clear, and an empty string for blank input.
        """
        command = self.parser.parse(command_line)
        if command is None:
            return ''

        handler = self._commands.get(command.name)
        if handler is None:
            logger.debug("Unknown command: %s", command.name)
            return f"bash: {command.name}: command not found\nType 'help' for available commands."

        logger.debug("Executing '%s' in %s", command, self.get_current_path())
        return handler(command)

    def _current_dir(self) -> Optional[DirNode]:
        resolution = self.resolver.resolve_current(self.state.cwd)
        return resolution.node if resolution.found else None

    # Stateless commands

    def _help(self, command: Command) -> str:
        return HELP_TEXT

    def _clear(self, command: Command) -> str:
        return CLEAR_SIGNAL

    def _echo(self, command: Command) -> str:
        return ' '.join(command.args)

    def _date(self, command: Command) -> str:
        return self.clock().strftime('%a %b %d %H:%M:%S %Z %Y')

    def _whoami(self, command: Command) -> str:
        return self.state.env.get('USER', '')

    def _uname(self, command: Command) -> str:
        if command.has_flag('-a'):
            return self.config.system_info
        return self.config.kernel_name

    def _history(self, command: Command) -> str:
        return HISTORY_TEXT

    # Navigation

    def _pwd(self, command: Command) -> str:
        return self.get_current_path()

    def _ls(self, command: Command) -> str:
        # Any path argument is ignored; ls always lists the working directory.
        directory = self._current_dir()
        if directory is None:
            return "ls: cannot access directory"
        return '  '.join(directory.listing())

    def _cd(self, command: Command) -> str:
        target = command.first_arg()
        if target is None:
            resolution = self.resolver.resolve_home()
            target = self.config.home_dir
        else:
            resolution = self.resolver.resolve(self.state.cwd, target, require_directory=True)

        if resolution.status is ResolveStatus.NOT_FOUND:
            return f"cd: {target}: No such directory"
        if resolution.status is ResolveStatus.NOT_A_DIRECTORY:
            return f"cd: {target}: Not a directory"

        self.state.cwd = resolution.segments
        logger.debug("Working directory is now %s", resolution.path)
        return ''

    # File operations

    def _cat(self, command: Command) -> str:
        name = command.first_arg()
        if name is None:
            return "cat: missing file operand"

        resolution = self.resolver.resolve_child(self.state.cwd, name)
        if not resolution.found or not resolution.node.is_file():
            return f"cat: {name}: No such file"
        return resolution.node.content

    def _mkdir(self, command: Command) -> str:
        name = command.first_arg()
        if name is None:
            return "mkdir: missing operand"
        if not is_valid_name(name):
            return f"mkdir: cannot create '{name}': Invalid name"

        directory = self._current_dir()
        if directory is None:
            return "mkdir: cannot create directory"
        if not directory.add(DirNode(name)):
            return f"mkdir: cannot create directory '{name}': File already exists"

        logger.debug("Created directory %s in %s", name, self.get_current_path())
        return ''

    def _touch(self, command: Command) -> str:
        name = command.first_arg()
        if name is None:
            return "touch: missing file operand"
        if not is_valid_name(name):
            return f"touch: cannot create '{name}': Invalid name"

        directory = self._current_dir()
        if directory is None:
            return "touch: cannot create file"

        # Existing nodes of either kind are left untouched.
        if directory.add(FileNode(name)):
            logger.debug("Created file %s in %s", name, self.get_current_path())
        return ''

    def _rm(self, command: Command) -> str:
        name = command.first_arg()
        if name is None:
            return "rm: missing operand"

        directory = self._current_dir()
        if directory is None or directory.remove(name) is None:
            return f"rm: cannot remove '{name}': No such file"

        logger.debug("Removed %s from %s", name, self.get_current_path())
        return ''

    def _mv(self, command: Command) -> str:
        if not command.args:
            return "mv: missing operand"
        if len(command.args) < 2:
            return f"mv: missing destination file operand after '{command.args[0]}'"

        old, new = command.args[0], command.args[1]
        if not is_valid_name(new):
            return f"mv: cannot create '{new}': Invalid name"

        directory = self._current_dir()
        if directory is None or directory.get(old) is None:
            return f"mv: cannot stat '{old}': No such file"
        if not directory.rename(old, new):
            return f"mv: cannot move '{old}' to '{new}': File already exists"

        logger.debug("Renamed %s to %s in %s", old, new, self.get_current_path())
        return ''

    # Environment

    def _env(self, command: Command) -> str:
        return '\n'.join(f"{key}={value}" for key, value in self.state.env.items())

    def _export(self, command: Command) -> str:
        assignment = command.first_arg()
        if assignment is None:
            return '\n'.join(f'export {key}="{value}"' for key, value in self.state.env.items())

        # Only the text up to a second "=" is kept: A=b=c sets A to b.
        key, sep, rest = assignment.partition('=')
        value = rest.split('=')[0]
        if not sep or not key or not value:
            return "export: invalid syntax"

        self.state.env[key] = value.strip('\'"')
        return ''
