#!/usr/bin/env python3
"""
Command parser for the lindroid shell.

Translates a raw command line into a Command. There is no quoting, piping
or redirection: the line is trimmed, whitespace runs are collapsed, and the
first word becomes the lower-cased command name.

Design Principles:
- Single responsibility: parse commands, don't execute them
- Pure functions with predictable outputs
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Command:
    """
    A single command with its arguments.

    args keep their original spelling, flags included, so commands like echo
    can reproduce them verbatim.
    """
    name: str
    args: List[str] = field(default_factory=list)
    raw: str = ''

    def has_flag(self, flag: str) -> bool:
        """Check whether flag (e.g. '-a') appears among the arguments."""
        return flag in self.args

    def first_arg(self) -> Optional[str]:
        return self.args[0] if self.args else None

    def __str__(self) -> str:
        return ' '.join([self.name] + self.args)


class CommandParser:
    """Parser for the shell's whitespace-separated command syntax."""

    def tokenize(self, command_line: str) -> List[str]:
        """Split a line on runs of whitespace, ignoring leading/trailing blanks."""
        if not command_line:
            return []
        return command_line.split()

    def parse(self, command_line: str) -> Optional[Command]:
        """
        Parse a command line into a Command.

        Returns None for empty or blank input.
        """
        tokens = self.tokenize(command_line)
        if not tokens:
            return None

        return Command(
            name=tokens[0].lower(),
            args=tokens[1:],
            raw=command_line,
        )
