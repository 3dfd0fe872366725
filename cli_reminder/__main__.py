"""Entry point for running the reminder as a module."""

import sys

from cli_reminder.app import main

if __name__ == "__main__":
    sys.exit(main())
