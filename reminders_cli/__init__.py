"""Command-line front end to the macOS Reminders store."""

__version__ = "1.0.0"
