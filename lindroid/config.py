#!/usr/bin/env python3
"""
Configuration for lindroid shell sessions.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .paths import split_path
from .vfs import DEFAULT_USER


@dataclass
class TerminalConfig:
    """Configuration for an emulator and its terminal session."""
    user: str = DEFAULT_USER
    hostname: str = 'lindroid'
    home_dir: Optional[str] = None  # defaults to /home/<user>
    initial_dir: Optional[str] = None  # defaults to home_dir
    path: str = '/usr/local/bin:/usr/bin:/bin'
    shell: str = '/bin/bash'
    extra_env: Dict[str, str] = field(default_factory=dict)
    kernel_name: str = 'Linux'
    system_info: str = 'Linux lindroid 5.15.0-android aarch64 GNU/Linux'
    prompt_format: str = '{user}@{hostname}:{cwd}$ '
    enable_colors: bool = False
    history_size: int = 1000

    def __post_init__(self):
        if self.home_dir is None:
            self.home_dir = f'/home/{self.user}'
        if self.initial_dir is None:
            self.initial_dir = self.home_dir

        for name in ('home_dir', 'initial_dir'):
            value = getattr(self, name)
            if not value or not value.startswith('/'):
                raise ValueError(f"{name} must be an absolute path, got {value!r}")

    def default_env(self) -> Dict[str, str]:
        """Seed environment for a new emulator, in display order."""
        env = {
            'USER': self.user,
            'HOME': self.home_dir,
            'PATH': self.path,
            'SHELL': self.shell,
        }
        env.update(self.extra_env)
        return env

    def home_segments(self) -> List[str]:
        return split_path(self.home_dir)

    def initial_segments(self) -> List[str]:
        return split_path(self.initial_dir)
