"""Tests for the temporal coercion rules."""

from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

from tuple_mapping.coercion import COERCION_RULES, UNCHANGED, CoercionResult, coerce

UTC_PLUS_2 = timezone(timedelta(hours=2))


class BusinessDate(date):
    pass


class SqlTimestamp(datetime):
    pass


class TestDateTarget:
    def test_pure_date_subclass_converted_directly(self):
        result = coerce(BusinessDate(2024, 6, 15), date)
        assert result.success
        assert result.value == date(2024, 6, 15)
        assert type(result.value) is date
        assert result.rule == "date"

    def test_datetime_truncated(self):
        result = coerce(datetime(2024, 6, 15, 0, 0), date)
        assert result == CoercionResult(success=True, value=date(2024, 6, 15), rule="date")

    def test_aware_datetime_uses_target_zone(self):
        value = datetime(2024, 6, 15, 23, 0, tzinfo=timezone.utc)
        assert coerce(value, date, UTC_PLUS_2).value == date(2024, 6, 16)
        assert coerce(value, date, timezone.utc).value == date(2024, 6, 15)


class TestDatetimeTarget:
    def test_date_becomes_midnight(self):
        result = coerce(date(2024, 1, 1), datetime)
        assert result.value == datetime(2024, 1, 1, 0, 0, 0)
        assert result.rule == "datetime"

    def test_datetime_subclass_keeps_full_precision(self):
        value = SqlTimestamp(2024, 1, 1, 12, 30, 15, 123456)
        result = coerce(value, datetime)
        assert result.value == datetime(2024, 1, 1, 12, 30, 15, 123456)
        assert type(result.value) is datetime

    def test_aware_subclass_becomes_naive_local(self):
        value = SqlTimestamp(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        result = coerce(value, datetime, ZoneInfo("Europe/Warsaw"))
        assert result.value == datetime(2024, 1, 1, 13, 0)
        assert result.value.tzinfo is None


class TestTimeTarget:
    def test_datetime_time_of_day(self):
        result = coerce(datetime(2024, 1, 1, 23, 59, 59), time)
        assert result.value == time(23, 59, 59)
        assert result.rule == "time"

    def test_aware_datetime_shifted(self):
        value = datetime(2024, 1, 1, 23, 59, 59, tzinfo=timezone.utc)
        assert coerce(value, time, UTC_PLUS_2).value == time(1, 59, 59)

    def test_aware_time_tz_dropped(self):
        result = coerce(time(8, 15, tzinfo=timezone.utc), time)
        assert result.value == time(8, 15)
        assert result.value.tzinfo is None

    def test_pure_date_rejected(self):
        assert coerce(date(2024, 1, 1), time) is UNCHANGED


class TestNoRule:
    def test_non_temporal_target(self):
        assert coerce(1, float) is UNCHANGED
        assert coerce("2024-01-01", date) is UNCHANGED
        assert coerce(Decimal("1"), int) is UNCHANGED

    def test_subclass_target_not_matched(self):
        assert coerce(date(2024, 1, 1), BusinessDate) is UNCHANGED

    def test_unchanged_is_explicit(self):
        assert UNCHANGED.success is False
        assert UNCHANGED.value is None

    def test_restricted_rule_set(self):
        rules = (COERCION_RULES[0],)
        assert coerce(datetime(2024, 1, 1, 5), date, rules=rules).success
        assert coerce(datetime(2024, 1, 1, 5), time, rules=rules) is UNCHANGED

    def test_first_matching_rule_wins(self):
        override = replace(COERCION_RULES[0], name="override", convert=lambda v, tz: date.min)
        result = coerce(datetime(2024, 1, 1), date, rules=(override, *COERCION_RULES))
        assert result.rule == "override"
        assert result.value == date.min
