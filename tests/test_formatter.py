"""Unit tests for the formatter module."""

import json
import re
from datetime import datetime

from reminders_cli.formatter import (
    OutputFormat,
    format_document,
    format_json,
    format_reminder,
    format_text,
)
from reminders_cli.models import AlarmRecord, GeoAlarm, Proximity, ReminderRecord


REMINDER_ID = "0A1B2C3D-4E5F-6789-ABCD-EF0123456789"


def make_reminder(**kwargs) -> ReminderRecord:
    defaults = dict(id=REMINDER_ID, title="buy milk", calendar_id="inbox")
    defaults.update(kwargs)
    return ReminderRecord(**defaults)


class TestFormatText:
    """Tests for the single-line text format."""

    def test_with_date(self):
        """Test a dated reminder renders date, short id and title."""
        reminder = make_reminder(start_or_due_date=datetime(2016, 3, 1, 9, 0))
        assert format_text(reminder) == "2016-03-01 09:00 0A1B2C3D buy milk"

    def test_without_date_is_blank_padded(self):
        """Test an undated reminder gets 16 spaces in the date column."""
        line = format_text(make_reminder())
        assert line == " " * 16 + " 0A1B2C3D buy milk"

    def test_columns_align(self):
        """Test dated and undated lines put the id at the same offset."""
        dated = format_text(make_reminder(start_or_due_date=datetime(2016, 3, 1, 9, 0)))
        undated = format_text(make_reminder())
        assert dated.index("0A1B2C3D") == undated.index("0A1B2C3D") == 17

    def test_empty_title(self):
        """Test an empty title still formats."""
        assert format_text(make_reminder(title="")) == " " * 16 + " 0A1B2C3D "

    def test_title_is_verbatim(self):
        """Test the title is not escaped."""
        line = format_text(make_reminder(title='say "hi"\tnow'))
        assert line.endswith('say "hi"\tnow')

    def test_short_id(self):
        """Test ids shorter than eight characters are used whole."""
        assert format_text(make_reminder(id="abc")) == " " * 16 + " abc buy milk"


class TestFormatDocument:
    """Tests for the structured format."""

    def test_minimal(self):
        """Test a reminder without date or alarms has only id and title."""
        doc = format_document(make_reminder())
        assert doc == {"calendarItemIdentifier": REMINDER_ID, "title": "buy milk"}

    def test_start_date(self):
        """Test the start date carries seconds and a numeric offset."""
        doc = format_document(make_reminder(start_or_due_date=datetime(2016, 3, 1, 9, 0)))
        assert re.fullmatch(r"2016-03-01T09:00:00[+-]\d{4}", doc["startDateComponents"])

    def test_relative_alarm(self):
        """Test a plain alarm has only relativeOffset and proximity."""
        doc = format_document(make_reminder(alarms=[AlarmRecord()]))
        assert doc["alarms"] == [{"relativeOffset": 0, "proximity": "none"}]

    def test_absolute_alarm(self):
        """Test an absolute alarm renders its date."""
        alarm = AlarmRecord.at(datetime(2016, 3, 1, 23, 0))
        doc = format_document(make_reminder(alarms=[alarm]))
        assert doc["alarms"] == [
            {"absoluteDate": "2016-03-01", "relativeOffset": 0, "proximity": "none"}
        ]

    def test_location_alarm(self):
        """Test a location alarm renders its place and proximity."""
        location = GeoAlarm(title="office", radius=150.0, latitude=35.68, longitude=139.76)
        alarm = AlarmRecord.near(location, Proximity.LEAVE)
        doc = format_document(make_reminder(alarms=[alarm]))
        assert doc["alarms"] == [{
            "relativeOffset": 0,
            "structuredLocation": {
                "title": "office",
                "radius": 150.0,
                "geoLocation": {"latitude": 35.68, "longitude": 139.76},
            },
            "proximity": "leave",
        }]

    def test_location_without_coordinates(self):
        """Test geoLocation is omitted when coordinates are unset."""
        alarm = AlarmRecord.near(GeoAlarm(title="home"))
        doc = format_document(make_reminder(alarms=[alarm]))
        location = doc["alarms"][0]["structuredLocation"]
        assert "geoLocation" not in location
        assert doc["alarms"][0]["proximity"] == "enter"

    def test_alarm_order_preserved(self):
        """Test alarms keep their order."""
        alarms = [AlarmRecord(relative_offset=-60), AlarmRecord(relative_offset=-120)]
        doc = format_document(make_reminder(alarms=alarms))
        assert [a["relativeOffset"] for a in doc["alarms"]] == [-60, -120]


class TestFormatJson:
    """Tests for the JSON-lines rendering."""

    def test_single_line(self):
        """Test the document serializes to one line."""
        reminder = make_reminder(title="line one\nline two", alarms=[AlarmRecord()])
        text = format_json(reminder)
        assert "\n" not in text
        assert json.loads(text)["title"] == "line one\nline two"

    def test_non_ascii_title(self):
        """Test non-ASCII titles are kept readable."""
        assert "牛乳" in format_json(make_reminder(title="牛乳を買う"))


class TestFormatReminder:
    """Tests for choosing a format."""

    def test_default_is_text(self):
        """Test text is the default output."""
        reminder = make_reminder()
        assert format_reminder(reminder) == format_text(reminder)

    def test_json(self):
        """Test OutputFormat.JSON selects the document format."""
        reminder = make_reminder()
        assert format_reminder(reminder, OutputFormat.JSON) == format_json(reminder)
