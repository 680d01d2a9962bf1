"""Command-line shell for the reminders store."""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from .config import ConfigManager, GeneralConfig
from .datespec import parse_date_spec
from .errors import (
    CalendarNotFound,
    MissingSubcommand,
    OptionParseError,
    PermissionDenied,
    ReminderError,
    UnknownSubcommand,
)
from .formatter import OutputFormat, format_reminder, format_text
from .models import AlarmRecord, GeoAlarm, Proximity, ReminderRecord
from .store import RemindersStore


StoreFactory = Callable[[GeneralConfig], RemindersStore]


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises OptionParseError instead of exiting."""

    def error(self, message):
        raise OptionParseError(f"{self.prog}: {message}")


def build_parsers() -> dict:
    """Create the top-level parser and one parser per subcommand."""
    main_parser = CommandParser(
        prog="reminders",
        description="List and add macOS reminders"
    )
    main_parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding config.toml (default: ~/.config/reminders-cli)"
    )
    main_parser.add_argument("command", nargs="?", help="ls, add or cal")
    main_parser.add_argument("args", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)

    ls_parser = CommandParser(prog="reminders ls", description="List incomplete reminders")
    ls_parser.add_argument("--calendar", "-c", help="Calendar name")
    ls_parser.add_argument("--json", "-j", action="store_true", help="One JSON document per line")

    add_parser = CommandParser(prog="reminders add", description="Add a reminder")
    add_parser.add_argument("--calendar", "-c", help="Calendar name")
    add_parser.add_argument("--date", "-d", help="Due date: H, H:M, Nd or NdH:M")
    add_parser.add_argument("--latitude", type=float, help="Latitude for a location alarm")
    add_parser.add_argument("--longitude", type=float, help="Longitude for a location alarm")
    add_parser.add_argument("words", nargs="*", help="Reminder title")

    cal_parser = CommandParser(prog="reminders cal", description="List reminder calendars")

    return {
        "main": main_parser,
        "ls": ls_parser,
        "add": add_parser,
        "cal": cal_parser,
    }


def eventkit_store(config: GeneralConfig) -> RemindersStore:
    """Open the system reminders store."""
    try:
        from .eventkit import EventKitStore
    except ImportError as e:
        raise ReminderError(f"EventKit is not available on this system ({e})") from e
    return EventKitStore(timeout=config.permission_timeout)


class ReminderCLI:
    """
    Dispatches a subcommand against a reminders store.

    Subcommand and flags are validated first; the store is only opened
    (and permission requested) once there is something to do.
    """

    COMMANDS = ("ls", "add", "cal")

    def __init__(
        self,
        store_factory: StoreFactory = eventkit_store,
        clock: Callable[[], datetime] = datetime.now,
        out=None,
        err=None,
    ):
        self.store_factory = store_factory
        self.clock = clock
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.parsers = build_parsers()
        self.config: GeneralConfig = GeneralConfig()
        self.store: Optional[RemindersStore] = None

    def run(self, argv: List[str]) -> int:
        """
        Execute one invocation.

        Args:
            argv: Arguments without the program name

        Returns:
            Process exit status
        """
        try:
            self._dispatch(argv)
        except ReminderError as e:
            print(f"Error: {e}", file=self.err)
            return 1
        return 0

    def _dispatch(self, argv: List[str]) -> None:
        top = self.parsers["main"].parse_args(argv)
        if top.command is None:
            raise MissingSubcommand()
        if top.command not in self.COMMANDS:
            raise UnknownSubcommand(top.command)

        options = self.parsers[top.command].parse_args(top.args)

        self.config = ConfigManager(top.config_dir).load_config()
        self.store = self.store_factory(self.config)
        if not self.store.request_permission():
            raise PermissionDenied("cannot access reminders")

        getattr(self, f"cmd_{top.command}")(options)

    def _emit(self, line: str) -> None:
        print(line, file=self.out)

    def _resolve_list_id(self, name: Optional[str]) -> str:
        name = name or self.config.calendar
        if not name:
            return self.store.default_list_id()
        calendar = self.store.find_list(name)
        if calendar is None:
            raise CalendarNotFound(name)
        return calendar.id

    def cmd_ls(self, options: argparse.Namespace) -> None:
        """List incomplete reminders in one list."""
        list_id = self._resolve_list_id(options.calendar)
        if options.json or self.config.output == "json":
            output = OutputFormat.JSON
        else:
            output = OutputFormat.TEXT

        for reminder in self.store.fetch_incomplete_reminders([list_id]):
            self._emit(format_reminder(reminder, output))

    def cmd_add(self, options: argparse.Namespace) -> None:
        """Create a reminder and print it."""
        if (options.latitude is None) != (options.longitude is None):
            raise OptionParseError("--latitude and --longitude must be given together")

        reminder = self.build_reminder(
            title=" ".join(options.words),
            list_id=self._resolve_list_id(options.calendar),
            date_spec=options.date,
            latitude=options.latitude,
            longitude=options.longitude,
        )
        saved = self.store.save(reminder)
        self._emit(format_text(saved))

    def build_reminder(
        self,
        title: str,
        list_id: str,
        date_spec: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> ReminderRecord:
        """Assemble an unsaved reminder from `add` arguments."""
        reminder = ReminderRecord(title=title, calendar_id=list_id)

        if date_spec is not None:
            due = parse_date_spec(date_spec, self.clock())
            reminder.start_or_due_date = due
            reminder.alarms.append(AlarmRecord.at(due))

        if latitude is not None and longitude is not None:
            location = GeoAlarm(
                title=title,
                radius=self.config.location_radius,
                latitude=latitude,
                longitude=longitude,
            )
            reminder.alarms.append(AlarmRecord.near(location, Proximity.ENTER))

        return reminder

    def cmd_cal(self, options: argparse.Namespace) -> None:
        """Print every reminders list title."""
        for calendar in self.store.list_all_lists():
            self._emit(calendar.title)


def main():
    """Main entry point."""
    sys.exit(ReminderCLI().run(sys.argv[1:]))


if __name__ == "__main__":
    main()
