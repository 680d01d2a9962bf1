"""EventKit-backed reminders store (macOS only)."""

import platform
from datetime import datetime
from typing import Iterable, List, Optional

from CoreLocation import CLLocation
from EventKit import (
    EKAlarm,
    EKEntityTypeReminder,
    EKEventStore,
    EKReminder,
    EKStructuredLocation,
)
from Foundation import (
    NSCalendar,
    NSCalendarUnitDay,
    NSCalendarUnitHour,
    NSCalendarUnitMinute,
    NSCalendarUnitMonth,
    NSCalendarUnitSecond,
    NSCalendarUnitYear,
    NSDate,
)

from .ekconvert import convert_ek_reminder, from_nsdate
from .errors import SaveError
from .models import AlarmRecord, CalendarRecord, ReminderRecord
from .store import RemindersStore, wait_for_callback


DATE_UNITS = (
    NSCalendarUnitYear | NSCalendarUnitMonth | NSCalendarUnitDay |
    NSCalendarUnitHour | NSCalendarUnitMinute | NSCalendarUnitSecond
)


def _get_macos_version() -> tuple:
    """Get macOS version as a tuple of integers."""
    version = platform.mac_ver()[0]
    parts = version.split('.')
    return tuple(int(p) for p in parts[:2] if p)


def _to_nsdate(when: datetime):
    return NSDate.dateWithTimeIntervalSince1970_(when.timestamp())


def _to_components(when: datetime):
    return NSCalendar.currentCalendar().components_fromDate_(DATE_UNITS, _to_nsdate(when))


def _from_components(components) -> Optional[datetime]:
    if components is None:
        return None
    ns_date = NSCalendar.currentCalendar().dateFromComponents_(components)
    if ns_date is None:
        return None
    return from_nsdate(ns_date)


def _convert_ek_reminder(ek_reminder) -> ReminderRecord:
    return convert_ek_reminder(ek_reminder, _from_components)


def _build_alarm(alarm: AlarmRecord):
    if alarm.absolute_date is not None:
        ek_alarm = EKAlarm.alarmWithAbsoluteDate_(_to_nsdate(alarm.absolute_date))
    else:
        ek_alarm = EKAlarm.alarmWithRelativeOffset_(alarm.relative_offset)

    if alarm.location is not None:
        ek_location = EKStructuredLocation.locationWithTitle_(alarm.location.title)
        ek_location.setRadius_(alarm.location.radius)
        if alarm.location.has_coordinates:
            ek_location.setGeoLocation_(
                CLLocation.alloc().initWithLatitude_longitude_(
                    alarm.location.latitude, alarm.location.longitude
                )
            )
        ek_alarm.setStructuredLocation_(ek_location)
        ek_alarm.setProximity_(alarm.proximity.value)

    return ek_alarm


class EventKitStore(RemindersStore):
    """
    Reminders store backed by EKEventStore.

    EventKit reports permission and fetch results through completion
    handlers; each call here blocks on the handler via wait_for_callback.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self.event_store = EKEventStore.alloc().init()

    def request_permission(self) -> bool:
        # macOS 14+ uses requestFullAccessToRemindersWithCompletion_
        if _get_macos_version() >= (14, 0):
            start = self.event_store.requestFullAccessToRemindersWithCompletion_
        else:
            def start(complete):
                self.event_store.requestAccessToEntityType_completion_(EKEntityTypeReminder, complete)

        granted, _error = wait_for_callback(start, self.timeout)
        return bool(granted)

    def default_list_id(self) -> str:
        return self.event_store.defaultCalendarForNewReminders().calendarIdentifier()

    def list_all_lists(self) -> List[CalendarRecord]:
        calendars = self.event_store.calendarsForEntityType_(EKEntityTypeReminder) or []
        return [CalendarRecord(id=c.calendarIdentifier(), title=c.title()) for c in calendars]

    def fetch_incomplete_reminders(self, list_ids: Iterable[str]) -> List[ReminderRecord]:
        calendars = []
        for list_id in list_ids:
            calendar = self.event_store.calendarWithIdentifier_(list_id)
            if calendar is not None:
                calendars.append(calendar)
        if not calendars:
            return []

        predicate = self.event_store.predicateForIncompleteRemindersWithDueDateStarting_ending_calendars_(
            None, None, calendars
        )
        (found,) = wait_for_callback(
            lambda complete: self.event_store.fetchRemindersMatchingPredicate_completion_(predicate, complete),
            self.timeout,
        )
        return [_convert_ek_reminder(r) for r in (found or [])]

    def save(self, reminder: ReminderRecord) -> ReminderRecord:
        calendar = self.event_store.calendarWithIdentifier_(reminder.calendar_id)
        if calendar is None:
            raise SaveError(f"reminders list '{reminder.calendar_id}' not found")

        ek_reminder = EKReminder.reminderWithEventStore_(self.event_store)
        ek_reminder.setCalendar_(calendar)
        ek_reminder.setTitle_(reminder.title)

        if reminder.start_or_due_date is not None:
            ek_reminder.setDueDateComponents_(_to_components(reminder.start_or_due_date))

        for alarm in reminder.alarms:
            ek_reminder.addAlarm_(_build_alarm(alarm))

        # PyObjC returns (success, error) for methods with error output params
        success, error = self.event_store.saveReminder_commit_error_(ek_reminder, True, None)
        if not success:
            raise SaveError(f"save failed: {error}")

        return _convert_ek_reminder(ek_reminder)
