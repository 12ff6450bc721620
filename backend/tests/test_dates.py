"""Unit tests for availability date helpers.

Run with: pytest backend/tests/test_dates.py -v
"""

from datetime import date, datetime, timezone

import pytest

from octo_mock.errors import InvalidAvailabilityIdError, InvalidRangeError
from octo_mock.services.availability.dates import (
    availability_id_date,
    enumerate_days,
    format_availability_key,
    format_slot_id,
    parse_availability_id,
)
from octo_mock.services.catalog.models import AvailabilityType


class TestFormatAvailabilityKey:

    def test_uses_product_timezone_not_utc(self):
        """23:30 UTC on 30 June is already 1 July in London (BST)."""
        moment = datetime(2021, 6, 30, 23, 30, tzinfo=timezone.utc)
        assert format_availability_key(moment, "Europe/London") == "2021-07-01"
        assert format_availability_key(moment, "UTC") == "2021-06-30"

    def test_naive_datetime_is_utc(self):
        moment = datetime(2021, 12, 31, 23, 30)
        assert format_availability_key(moment, "Asia/Tokyo") == "2022-01-01"

    def test_plain_date_passes_through(self):
        assert format_availability_key(date(2021, 12, 20), "America/New_York") == "2021-12-20"


class TestEnumerateDays:

    def test_inclusive_of_both_ends(self):
        days = enumerate_days(date(2021, 12, 20), date(2021, 12, 22))
        assert days == [date(2021, 12, 20), date(2021, 12, 21), date(2021, 12, 22)]

    def test_single_day(self):
        assert enumerate_days(date(2021, 12, 20), date(2021, 12, 20)) == [date(2021, 12, 20)]

    def test_crosses_year_boundary(self):
        days = enumerate_days(date(2021, 12, 30), date(2022, 1, 2))
        assert [d.isoformat() for d in days] == [
            "2021-12-30", "2021-12-31", "2022-01-01", "2022-01-02",
        ]

    def test_start_after_end_raises(self):
        with pytest.raises(InvalidRangeError):
            enumerate_days(date(2021, 12, 30), date(2021, 12, 20))


class TestParseAvailabilityId:

    def test_parses_datetime_profile(self):
        parsed = parse_availability_id("2021-12-30T00:00:00+00:00", AvailabilityType.START_TIME)
        assert parsed == datetime(2021, 12, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [
        "2021-13-40",
        "2021-12-30",
        "2021-12-30T00:00:00Z",
        "2021-12-30T00:00:00+0000",
        "2021-12-30T00:00+00:00",
        "2021-12-30 00:00:00+00:00",
        "2021-02-30T09:00:00+00:00",
        "",
    ])
    def test_rejects_anything_else_for_start_time_products(self, value):
        with pytest.raises(InvalidAvailabilityIdError) as exc_info:
            parse_availability_id(value, AvailabilityType.START_TIME)
        assert exc_info.value.body["availabilityId"] == value

    def test_parses_date_profile(self):
        assert parse_availability_id("2021-12-21", AvailabilityType.OPENING_HOURS) == date(2021, 12, 21)

    def test_rejects_datetime_for_opening_hours_products(self):
        with pytest.raises(InvalidAvailabilityIdError):
            parse_availability_id("2021-12-21T00:00:00+00:00", AvailabilityType.OPENING_HOURS)


def test_slot_id_carries_offset_of_the_day():
    assert format_slot_id(date(2021, 12, 20), "09:00", "Europe/London") == "2021-12-20T09:00:00+00:00"
    assert format_slot_id(date(2021, 7, 1), "09:00", "Europe/London") == "2021-07-01T09:00:00+01:00"
    assert format_slot_id(date(2021, 7, 1), None, "Europe/London") == "2021-07-01"


def test_availability_id_date():
    assert availability_id_date("2021-12-30T00:00:00+00:00") == "2021-12-30"
    assert availability_id_date("2021-12-30") == "2021-12-30"
