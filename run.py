#!/usr/bin/env python3
"""Entry point for running the reminder without installing it."""

import sys

from cli_reminder.app import main

if __name__ == "__main__":
    sys.exit(main())
