"""
Test suite for interest module

Tests the daily interest schedule, day-count parsing and the rendered
interest table.
"""

import pytest
from decimal import Decimal

from pocket_bank.currency import Money
from pocket_bank.errors import InvalidDayCount
from pocket_bank.interest import (
    InterestRow, SCHEDULE_HEADER, MAX_DAY_COUNT, daily_interest,
    iter_interest_schedule, project_interest, parse_day_count, rate_percent,
    format_row, format_schedule
)


class TestDailyInterest:
    """Test the per-day interest amount"""

    def test_rounded_to_cents(self):
        """Test 10000 x 0.05 / 365 = 1.3698... rounds to 1.37"""
        assert daily_interest(Decimal('10000')) == Decimal('1.37')

    def test_half_rounds_away_from_zero(self):
        # 36.5 x 0.05 / 365 = 0.005 exactly
        assert daily_interest(Decimal('36.5'), Decimal('0.05'), 365) == Decimal('0.01')

    def test_accepts_money(self):
        assert daily_interest(Money(Decimal('10000'))) == Decimal('1.37')

    def test_zero_balance(self):
        assert daily_interest(Decimal('0')) == Decimal('0.00')


class TestProjectInterest:
    """Test the projected schedule"""

    def test_three_day_schedule(self):
        rows = project_interest(Money(Decimal('10000')), 3)

        assert rows == [
            InterestRow(day=1, interest=Decimal('1.37'), balance=Decimal('10001.37')),
            InterestRow(day=2, interest=Decimal('1.37'), balance=Decimal('10002.74')),
            InterestRow(day=3, interest=Decimal('1.37'), balance=Decimal('10004.11')),
        ]

    def test_interest_is_not_compounded(self):
        """Test every day credits the amount computed from the starting balance"""
        rows = project_interest(Decimal('250000'), 30)

        assert {row.interest for row in rows} == {Decimal('34.25')}

    @pytest.mark.parametrize("balance,days", [
        (Decimal('10000'), 365),
        (Decimal('123.45'), 17),
        (Decimal('0'), 5),
    ])
    def test_final_balance(self, balance, days):
        rows = project_interest(balance, days)
        expected = balance + days * daily_interest(balance)

        assert len(rows) == days
        assert rows[-1].balance == expected
        assert [row.day for row in rows] == list(range(1, days + 1))

    def test_zero_days(self):
        assert project_interest(Decimal('10000'), 0) == []

    def test_custom_rate(self):
        rows = project_interest(Decimal('3650'), 1, annual_rate=Decimal('0.10'))
        assert rows[0].interest == Decimal('1.00')

    @pytest.mark.parametrize("days", [-1, MAX_DAY_COUNT + 1, 2.5, "3", True])
    def test_invalid_day_counts(self, days):
        with pytest.raises(InvalidDayCount):
            project_interest(Decimal('100'), days)

    def test_large_horizon_is_lazy(self):
        """Test the schedule is produced one row at a time"""
        schedule = iter_interest_schedule(Decimal('10000'), MAX_DAY_COUNT)

        assert next(schedule).day == 1
        assert next(schedule).balance == Decimal('10002.74')


class TestParseDayCount:
    """Test parsing of the projection horizon"""

    @pytest.mark.parametrize("value,expected", [
        ("0", 0), ("3", 3), (" 30 ", 30), ("+7", 7), ("4294967295", MAX_DAY_COUNT),
    ])
    def test_valid(self, value, expected):
        assert parse_day_count(value) == expected

    @pytest.mark.parametrize("value", ["", "-1", "1.5", "abc", "4294967296", "1_000"])
    def test_invalid(self, value):
        with pytest.raises(InvalidDayCount, match="positive whole number"):
            parse_day_count(value)

    def test_custom_limit(self):
        with pytest.raises(InvalidDayCount):
            parse_day_count("31", max_days=30)


class TestFormatting:
    """Test the rendered interest table"""

    def test_rate_percent(self):
        assert rate_percent() == 5
        assert rate_percent(Decimal('0.0575')) == 5
        assert rate_percent(Decimal('0.12')) == 12

    def test_row_layout(self):
        row = InterestRow(day=1, interest=Decimal('1.37'), balance=Decimal('10001.37'))
        assert format_row(row) == "1   | 1.37     | 10001.37 |"

    def test_short_balance_is_padded(self):
        row = InterestRow(day=12, interest=Decimal('0.01'), balance=Decimal('36.62'))
        assert format_row(row) == "12  | 0.01     | 36.62   |"

    def test_schedule_lines(self):
        lines = list(format_schedule(project_interest(Decimal('10000'), 2)))

        assert lines == [
            SCHEDULE_HEADER,
            "1   | 1.37     | 10001.37 |",
            "2   | 1.37     | 10002.74 |",
        ]

    def test_empty_schedule_has_header(self):
        assert list(format_schedule([])) == ["Day | Interest | Balance |"]
