"""Launching the detached waiter process."""

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .errors import SpawnError


def waiter_command(args: List[str]) -> List[str]:
    """Command line that re-runs this program with the given arguments."""
    return [sys.executable, "-m", "cli_reminder", *args]


def waiter_environment(marker_name: str, marker_value: str,
                       base: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Copy of the environment with the waiter role marker added."""
    env = dict(os.environ if base is None else base)
    env[marker_name] = marker_value
    return env


class ProcessSpawner:
    """Starts a child process that keeps running after the launcher exits."""

    def __init__(self, log_file: Optional[Path] = None):
        self.log_file = log_file

    def spawn(self, argv: List[str], env: Dict[str, str]) -> int:
        """
        Start a detached process.

        Args:
            argv: Program and arguments
            env: Complete environment for the child

        Returns:
            The child's process id
        """
        try:
            if self.log_file is not None:
                self.log_file.parent.mkdir(parents=True, exist_ok=True)
                with open(self.log_file, "ab") as log:
                    proc = self._popen(argv, env, log)
            else:
                proc = self._popen(argv, env, subprocess.DEVNULL)
        except OSError as e:
            raise SpawnError(f"Failed to start waiter: {e}") from e
        return proc.pid

    def _popen(self, argv, env, output) -> subprocess.Popen:
        return subprocess.Popen(
            argv,
            env=env,
            stdin=subprocess.DEVNULL,
            stdout=output,
            stderr=output,
            start_new_session=True,
            close_fds=True,
        )
