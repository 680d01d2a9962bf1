"""Rendering of reminders as aligned text lines or JSON documents."""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from .errors import FormatError
from .models import AlarmRecord, ReminderRecord


TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M"
TEXT_DATE_WIDTH = len("yyyy-MM-dd HH:mm")
DOCUMENT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
ALARM_DATE_FORMAT = "%Y-%m-%d"
SHORT_ID_LENGTH = 8


class OutputFormat(Enum):
    TEXT = "text"
    JSON = "json"


def format_text_date(when: Optional[datetime]) -> str:
    """Render a due date for the text column, or blanks of the same width."""
    if when is None:
        return " " * TEXT_DATE_WIDTH
    rendered = when.strftime(TEXT_DATE_FORMAT)
    if len(rendered) != TEXT_DATE_WIDTH:
        raise FormatError(f"cannot render {when!r} in a {TEXT_DATE_WIDTH}-character column")
    return rendered


def format_text(reminder: ReminderRecord) -> str:
    """
    Render a reminder as ``<date> <short id> <title>``.

    The date column is always the same width so that lines line up
    whether or not a reminder has a due date.
    """
    return " ".join([
        format_text_date(reminder.start_or_due_date),
        reminder.id[:SHORT_ID_LENGTH],
        reminder.title,
    ])


def _local(when: datetime) -> datetime:
    # Naive values are local wall-clock time.
    return when.astimezone()


def format_alarm_document(alarm: AlarmRecord) -> Dict[str, Any]:
    doc: Dict[str, Any] = {}
    if alarm.absolute_date is not None:
        doc["absoluteDate"] = _local(alarm.absolute_date).strftime(ALARM_DATE_FORMAT)
    doc["relativeOffset"] = alarm.relative_offset
    if alarm.location is not None:
        location: Dict[str, Any] = {
            "title": alarm.location.title,
            "radius": alarm.location.radius,
        }
        if alarm.location.has_coordinates:
            location["geoLocation"] = {
                "latitude": alarm.location.latitude,
                "longitude": alarm.location.longitude,
            }
        doc["structuredLocation"] = location
    doc["proximity"] = alarm.proximity.label
    return doc


def format_document(reminder: ReminderRecord) -> Dict[str, Any]:
    """Build the structured form of a reminder. Absent fields are omitted."""
    doc: Dict[str, Any] = {"calendarItemIdentifier": reminder.id}
    if reminder.start_or_due_date is not None:
        doc["startDateComponents"] = _local(reminder.start_or_due_date).strftime(DOCUMENT_DATE_FORMAT)
    doc["title"] = reminder.title
    if reminder.alarms:
        doc["alarms"] = [format_alarm_document(alarm) for alarm in reminder.alarms]
    return doc


def format_json(reminder: ReminderRecord) -> str:
    """Serialize the structured form on a single line."""
    return json.dumps(format_document(reminder), ensure_ascii=False)


def format_reminder(reminder: ReminderRecord, output: OutputFormat = OutputFormat.TEXT) -> str:
    if output is OutputFormat.JSON:
        return format_json(reminder)
    return format_text(reminder)
