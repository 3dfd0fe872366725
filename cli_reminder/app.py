"""Main application for the command-line reminder."""

import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigManager
from .notifier import QtTrayNotifier
from .runner import ExitCode, ReminderRunner
from .spawner import ProcessSpawner
from .timeparse import DateparserTimeParser


def build_runner(config_dir: Optional[Path] = None, prog: str = "cli-reminder") -> ReminderRunner:
    """Create a runner wired to the real parser, notifier and spawner."""
    config = ConfigManager(config_dir).load_config()
    return ReminderRunner(
        config=config,
        parser=DateparserTimeParser(config.languages),
        notifier=QtTrayNotifier(timeout=config.notify_timeout),
        spawner=ProcessSpawner(log_file=config.waiter_log),
        prog=prog,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    if argv is None:
        argv = sys.argv
    prog = os.path.basename(argv[0]) if argv else "cli-reminder"
    if prog in ("__main__.py", "run.py"):
        prog = "cli-reminder"

    try:
        runner = build_runner(prog=prog)
    except (ValueError, OSError) as e:
        print(f"Error loading configuration: {e}")
        return ExitCode.USAGE

    return runner.run(argv[1:])


if __name__ == "__main__":
    sys.exit(main())
