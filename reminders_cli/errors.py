"""Exceptions raised by the reminders CLI."""


class ReminderError(Exception):
    """Base class for every error the CLI reports to the user."""


class InvalidDateFormat(ReminderError, ValueError):
    """A --date value matched none of the date spec forms."""

    def __init__(self, text: str):
        super().__init__(f"invalid date: {text!r}")
        self.text = text


class PermissionDenied(ReminderError):
    pass


class SaveError(ReminderError):
    pass


class StoreTimeout(ReminderError):
    pass


class CalendarNotFound(ReminderError):
    def __init__(self, name: str):
        super().__init__(f"no reminders list named {name!r}")
        self.name = name


class UnknownSubcommand(ReminderError):
    def __init__(self, name: str):
        super().__init__(f"unknown subcommand: {name}")
        self.name = name


class MissingSubcommand(ReminderError):
    def __init__(self):
        super().__init__("subcommand required")


class OptionParseError(ReminderError):
    pass


class ConfigError(ReminderError):
    pass


class FormatError(ReminderError):
    pass
