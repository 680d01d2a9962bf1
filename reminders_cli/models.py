"""Record types exchanged between the CLI and the reminders store."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Proximity(Enum):
    """When a location alarm fires. Values match EKAlarmProximity."""
    NONE = 0
    ENTER = 1
    LEAVE = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class TriggerKind(Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    LOCATION = "location"


@dataclass
class GeoAlarm:
    """A named place with a radius, used by location-triggered alarms."""
    title: str
    radius: float = 0.0  # meters
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass
class AlarmRecord:
    """
    A single alarm attached to a reminder.

    Exactly one trigger applies: an absolute date, a location (with its
    proximity), or otherwise a relative offset in seconds, which defaults
    to 0.
    """
    absolute_date: Optional[datetime] = None
    relative_offset: float = 0
    location: Optional[GeoAlarm] = None
    proximity: Proximity = Proximity.NONE

    @property
    def trigger(self) -> TriggerKind:
        if self.location is not None:
            return TriggerKind.LOCATION
        if self.absolute_date is not None:
            return TriggerKind.ABSOLUTE
        return TriggerKind.RELATIVE

    @classmethod
    def at(cls, when: datetime) -> "AlarmRecord":
        return cls(absolute_date=when)

    @classmethod
    def near(cls, location: GeoAlarm, proximity: Proximity = Proximity.ENTER) -> "AlarmRecord":
        return cls(location=location, proximity=proximity)


@dataclass
class ReminderRecord:
    """One to-do item. `id` is empty until the store has saved it."""
    title: str
    calendar_id: str
    id: str = ""
    start_or_due_date: Optional[datetime] = None
    alarms: List[AlarmRecord] = field(default_factory=list)


@dataclass(frozen=True)
class CalendarRecord:
    """A reminders list."""
    id: str
    title: str
