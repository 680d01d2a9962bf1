"""
Conversion from EventKit objects to records.

Only methods on the objects passed in are called, so nothing here needs
PyObjC to be importable.
"""

from datetime import datetime
from typing import Callable, Optional

from .models import AlarmRecord, GeoAlarm, Proximity, ReminderRecord


def number(value):
    """Return a float as an int when it has no fractional part."""
    value = float(value)
    return int(value) if value.is_integer() else value


def from_nsdate(ns_date) -> datetime:
    return datetime.fromtimestamp(ns_date.timeIntervalSince1970())


def convert_alarm(ek_alarm) -> AlarmRecord:
    """Convert an EKAlarm to an AlarmRecord."""
    location = None
    ek_location = ek_alarm.structuredLocation()
    if ek_location is not None:
        location = GeoAlarm(title=ek_location.title() or "", radius=number(ek_location.radius()))
        geo = ek_location.geoLocation()
        if geo is not None:
            coordinate = geo.coordinate()
            location.latitude = coordinate.latitude
            location.longitude = coordinate.longitude

    absolute = ek_alarm.absoluteDate()
    return AlarmRecord(
        absolute_date=from_nsdate(absolute) if absolute is not None else None,
        relative_offset=number(ek_alarm.relativeOffset()),
        location=location,
        proximity=Proximity(ek_alarm.proximity()),
    )


def convert_ek_reminder(
    ek_reminder,
    components_to_datetime: Callable[[object], Optional[datetime]],
) -> ReminderRecord:
    """
    Convert an EKReminder to a ReminderRecord.

    Args:
        ek_reminder: The EventKit reminder
        components_to_datetime: Resolves NSDateComponents (or None) to a
            local datetime, using the current calendar
    """
    components = ek_reminder.startDateComponents() or ek_reminder.dueDateComponents()
    return ReminderRecord(
        id=ek_reminder.calendarItemIdentifier(),
        title=ek_reminder.title() or "",
        calendar_id=ek_reminder.calendar().calendarIdentifier(),
        start_or_due_date=components_to_datetime(components),
        alarms=[convert_alarm(a) for a in (ek_reminder.alarms() or [])],
    )
