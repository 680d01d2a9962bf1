#!/usr/bin/env python3
"""Entry point for running the reminders CLI from a checkout."""

from reminders_cli.cli import main

if __name__ == "__main__":
    main()
