#!/usr/bin/env python3
"""
Terminal session layer for the lindroid shell.

The emulator core only turns command lines into output strings. Everything a
front end needs around it lives here: the transcript of
{command, output, timestamp} records, up/down recall over submitted
commands, prompt rendering, session replay, and an interactive REPL.

Design Principles:
- The emulator never sees the transcript; sessions own it
- State is restored by replaying commands, never by serializing the emulator
- Plain dictionaries at the edge; storing them is the caller's business
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .config import TerminalConfig
from .emulator import TerminalEmulator, is_clear_signal

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ('exit', 'quit')


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class HistoryEntry:
    """One transcript record."""
    command: str
    output: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            'command': self.command,
            'output': self.output,
            'timestamp': self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'HistoryEntry':
        return cls(
            command=data['command'],
            output=data.get('output', ''),
            timestamp=datetime.fromisoformat(data['timestamp']),
        )


class CommandHistory:
    """Up/down recall over submitted commands."""

    def __init__(self, max_size: int = 1000):
        """Initialize with maximum history size."""
        self.max_size = max_size
        self.history: List[str] = []
        self.position = 0

    def add(self, command: str):
        """Add a command to history and reset the recall position."""
        if command and command.strip():
            self.history.append(command)
            if len(self.history) > self.max_size:
                self.history.pop(0)
        self.position = len(self.history)

    def previous(self) -> Optional[str]:
        """Step back (up arrow). Stays on the oldest command once reached."""
        if not self.history:
            return None
        if self.position > 0:
            self.position -= 1
        return self.history[self.position]

    def next(self) -> str:
        """Step forward (down arrow). Returns '' once past the newest command."""
        if self.position < len(self.history) - 1:
            self.position += 1
            return self.history[self.position]
        self.position = len(self.history)
        return ''


class TerminalSession:
    """
    A named shell session: one emulator plus its transcript.

    Restoring a session means replaying its submitted commands through a
    fresh emulator, which reproduces the working directory, environment and
    tree changes.
    """

    def __init__(self, config: Optional[TerminalConfig] = None,
                 emulator: Optional[TerminalEmulator] = None,
                 name: str = 'Session', session_id: Optional[str] = None):
        """Initialize terminal session."""
        self.config = config or TerminalConfig()
        self.emulator = emulator or TerminalEmulator(config=self.config)
        self.name = name
        self.id = session_id or uuid.uuid4().hex
        self.transcript: List[HistoryEntry] = []
        # Every submitted command, for replay. Unlike history, never trimmed.
        self.commands: List[str] = []
        self.history = CommandHistory(self.config.history_size)
        self.created_at = _now()
        self.updated_at = self.created_at

    def execute_command(self, command_line: str) -> str:
        """
        Run one line and record it.

        Blank lines are ignored. clear empties the transcript instead of
        adding to it, but is still remembered for recall and replay.
        """
        if not command_line or not command_line.strip():
            return ''

        self.history.add(command_line)
        self.commands.append(command_line)
        output = self.emulator.execute_command(command_line)
        self.updated_at = _now()

        if is_clear_signal(output):
            self.transcript.clear()
            return output

        self.transcript.append(HistoryEntry(command_line, output, self.updated_at))
        return output

    def run_script(self, script_lines: Iterable[str]) -> List[str]:
        """Run command lines in order, skipping blanks and # comments."""
        outputs = []
        for line in script_lines:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            outputs.append(self.execute_command(line))
        return outputs

    def get_prompt(self) -> str:
        """Generate the command prompt, with the home directory shown as ~."""
        cwd = self.emulator.get_current_path()
        home = self.emulator.state.env.get('HOME', self.config.home_dir)
        if home and (cwd == home or cwd.startswith(home + '/')):
            display_cwd = '~' + cwd[len(home):]
        else:
            display_cwd = cwd

        user = self.emulator.state.env.get('USER', self.config.user)
        if self.config.enable_colors:
            # Green for user@host, blue for path
            return f'\033[32m{user}@{self.config.hostname}\033[0m:\033[34m{display_cwd}\033[0m$ '

        return self.config.prompt_format.format(
            user=user,
            hostname=self.config.hostname,
            cwd=display_cwd,
        )

    # Replay and serialization

    def replay(self, commands: Iterable[str]) -> None:
        """Feed previously submitted commands through this session's emulator."""
        count = 0
        for command in commands:
            self.history.add(command)
            self.commands.append(command)
            self.emulator.execute_command(command)
            count += 1
        logger.debug("Replayed %d commands, now in %s", count, self.emulator.get_current_path())

    @classmethod
    def from_history(cls, entries: Iterable[HistoryEntry],
                     config: Optional[TerminalConfig] = None, **kwargs) -> 'TerminalSession':
        """Build a fresh session whose state matches a recorded transcript."""
        session = cls(config=config, **kwargs)
        entries = list(entries)
        session.replay(entry.command for entry in entries)
        session.transcript = entries
        return session

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'history': [entry.to_dict() for entry in self.transcript],
            'commands': list(self.commands),
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict, config: Optional[TerminalConfig] = None) -> 'TerminalSession':
        """
        Restore a session from to_dict output.

        The full command list is replayed when present, so commands issued
        before a clear still count. Otherwise the transcript is replayed.
        """
        entries = [HistoryEntry.from_dict(item) for item in data.get('history', [])]
        session = cls(config=config, name=data.get('name', 'Session'), session_id=data.get('id'))

        commands = data.get('commands')
        if commands is None:
            commands = [entry.command for entry in entries]
        session.replay(commands)

        session.transcript = entries
        if 'created_at' in data:
            session.created_at = datetime.fromisoformat(data['created_at'])
        if 'updated_at' in data:
            session.updated_at = datetime.fromisoformat(data['updated_at'])
        return session

    # Interactive use

    def run_interactive(self):
        """Run the interactive REPL loop."""
        print("Welcome to Lindroid")
        print("Type 'help' for help, 'exit' to quit")
        print()

        while True:
            try:
                command_line = input(self.get_prompt())

                if command_line.strip().lower() in EXIT_COMMANDS:
                    break

                output = self.execute_command(command_line)
                if is_clear_signal(output):
                    print('\033[2J\033[H', end='')
                elif output:
                    print(output)

            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print()
                break

        print("Goodbye!")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the lindroid shell."""
    import argparse

    parser = argparse.ArgumentParser(description='Lindroid in-memory shell')
    parser.add_argument('-c', '--command', help='Execute command and exit')
    parser.add_argument('-u', '--user', help='Set username', default=None)
    parser.add_argument('--color', action='store_true', help='Colorize the prompt')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

    options = {'enable_colors': args.color}
    if args.user:
        options['user'] = args.user
    config = TerminalConfig(**options)
    session = TerminalSession(config=config)

    if args.command:
        output = session.execute_command(args.command)
        if output and not is_clear_signal(output):
            print(output)
    else:
        session.run_interactive()


if __name__ == '__main__':
    main()
