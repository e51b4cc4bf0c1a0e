"""Unit tests for history row normalisation."""

import json
from datetime import UTC, date, datetime, timedelta, timezone

from creatorpoints.models import DailyRecord
from creatorpoints.normalize import filter_window, normalize_records, parse_day, to_number


class TestParseDay:
    def test_iso_string(self) -> None:
        assert parse_day("2026-01-05") == date(2026, 1, 5)

    def test_iso_timestamp_cut_to_day(self) -> None:
        assert parse_day("2026-01-05T23:00:00Z") == date(2026, 1, 5)

    def test_date_and_datetime(self) -> None:
        assert parse_day(date(2026, 1, 5)) == date(2026, 1, 5)
        assert parse_day(datetime(2026, 1, 5, 12)) == date(2026, 1, 5)

    def test_aware_datetime_converted_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        assert parse_day(datetime(2026, 1, 6, 1, 0, tzinfo=plus_two)) == date(2026, 1, 5)
        assert parse_day(datetime(2026, 1, 5, 23, 0, tzinfo=UTC)) == date(2026, 1, 5)

    def test_offset_string_converted_to_utc(self) -> None:
        assert parse_day("2026-01-06T01:00:00+02:00") == date(2026, 1, 5)
        assert parse_day("2026-01-05T22:30:00-05:00") == date(2026, 1, 6)

    def test_garbage(self) -> None:
        assert parse_day("yesterday") is None
        assert parse_day(None) is None
        assert parse_day(20260105) is None


class TestToNumber:
    def test_numbers(self) -> None:
        assert to_number(5) == 5.0
        assert to_number(2.5) == 2.5

    def test_numeric_strings(self) -> None:
        assert to_number("1,250") == 1250.0
        assert to_number(" 3.5 ") == 3.5

    def test_junk_is_zero(self) -> None:
        assert to_number(None) == 0.0
        assert to_number("abc") == 0.0
        assert to_number(True) == 0.0
        assert to_number(float("nan")) == 0.0
        assert to_number(float("inf")) == 0.0
        assert to_number(-10) == 0.0
        assert to_number([1]) == 0.0

    def test_int_too_large_for_float(self) -> None:
        assert to_number(int("9" * 400)) == 0.0
        assert to_number("9" * 400) == 0.0


class TestNormalizeRecords:
    def test_sorted_and_deduplicated(self) -> None:
        rows = [
            {"date": "2026-01-06", "daily": 10, "hours": 1},
            {"date": "2026-01-05", "daily": 20, "hours": 2},
            {"date": "2026-01-06", "daily": 30, "hours": 3},
        ]
        records = normalize_records(rows)
        assert [r.date for r in records] == [date(2026, 1, 5), date(2026, 1, 6)]
        assert records[1].diamonds_earned == 30
        assert records[1].hours_live == 3

    def test_missing_fields_default_to_zero(self) -> None:
        (record,) = normalize_records([{"date": "2026-01-05"}])
        assert record.diamonds_earned == 0
        assert record.hours_live == 0

    def test_alternate_keys(self) -> None:
        (record,) = normalize_records(
            [{"date": "2026-01-05", "diamondsEarned": 1500, "hoursLive": 2}]
        )
        assert record.diamonds_earned == 1500
        assert record.hours_live == 2

    def test_bad_rows_dropped(self) -> None:
        rows = [{"date": "bad"}, "not a row", None, {"daily": 5}, {"date": "2026-01-05"}]
        assert len(normalize_records(rows)) == 1

    def test_accepts_records(self) -> None:
        rec = DailyRecord(date=date(2026, 1, 5), diamonds_earned=1, hours_live=1)
        assert normalize_records([rec]) == [rec]

    def test_records_are_coerced(self) -> None:
        rec = DailyRecord(date=date(2026, 1, 5), diamonds_earned=-50, hours_live=-2.5)
        (clean,) = normalize_records([rec])
        assert clean.diamonds_earned == 0
        assert clean.hours_live == 0

    def test_huge_json_number_row(self) -> None:
        rows = json.loads('[{"date": "2026-01-05", "daily": ' + "9" * 400 + ', "hours": 1}]')
        (record,) = normalize_records(rows)
        assert record.diamonds_earned == 0
        assert record.hours_live == 1

    def test_none(self) -> None:
        assert normalize_records(None) == []


class TestFilterWindow:
    def test_bounds(self) -> None:
        records = normalize_records(
            [{"date": f"2026-01-0{d}"} for d in range(1, 6)]
        )
        kept = filter_window(records, date(2026, 1, 2), date(2026, 1, 4))
        assert [r.date.day for r in kept] == [2, 3]
        assert len(filter_window(records)) == 5
