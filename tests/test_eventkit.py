"""Tests for the EventKit store that need macOS with PyObjC installed."""

from datetime import datetime

import pytest

pytest.importorskip("EventKit")
pytest.importorskip("CoreLocation")

from reminders_cli.ekconvert import convert_alarm  # noqa: E402
from reminders_cli.eventkit import _build_alarm  # noqa: E402
from reminders_cli.models import AlarmRecord, GeoAlarm, Proximity  # noqa: E402


class TestBuildAlarm:
    """Tests for building EKAlarm objects and reading them back."""

    def test_absolute_alarm(self):
        """Test an absolute alarm keeps its date."""
        when = datetime(2016, 3, 1, 23, 0, 0)
        alarm = convert_alarm(_build_alarm(AlarmRecord.at(when)))

        assert alarm.absolute_date == when
        assert alarm.proximity is Proximity.NONE

    def test_relative_alarm(self):
        """Test a relative alarm keeps its offset."""
        alarm = convert_alarm(_build_alarm(AlarmRecord(relative_offset=-300)))

        assert alarm.relative_offset == -300
        assert alarm.absolute_date is None

    def test_location_alarm(self):
        """Test location, radius, coordinates and proximity survive."""
        location = GeoAlarm(title="office", radius=150.0, latitude=35.68, longitude=139.76)
        alarm = convert_alarm(_build_alarm(AlarmRecord.near(location, Proximity.LEAVE)))

        assert alarm.proximity is Proximity.LEAVE
        assert alarm.location.title == "office"
        assert alarm.location.radius == 150
        assert alarm.location.latitude == pytest.approx(35.68)
        assert alarm.location.longitude == pytest.approx(139.76)
