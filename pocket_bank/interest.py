"""
Interest Projection Module

Projects daily interest on a home-currency balance over a chosen number of
days. The daily amount is computed once from the starting balance, rounded
to cents, and credited every day, so the projected balance grows linearly.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Union
import re

from .currency import Money, round_to_cents
from .errors import InvalidDayCount

ANNUAL_INTEREST_RATE = Decimal('0.05')
DAYS_IN_YEAR = 365
MAX_DAY_COUNT = 2 ** 32 - 1

SCHEDULE_HEADER = "Day | Interest | Balance |"

_DAY_COUNT_PATTERN = re.compile(r"\+?\d+")


@dataclass(frozen=True)
class InterestRow:
    """One projected day"""
    day: int
    interest: Decimal
    balance: Decimal


def daily_interest(balance: Union[Money, Decimal],
                   annual_rate: Decimal = ANNUAL_INTEREST_RATE,
                   days_in_year: int = DAYS_IN_YEAR) -> Decimal:
    """Interest credited per day, rounded half away from zero to cents"""
    if isinstance(balance, Money):
        balance = balance.amount
    return round_to_cents(balance * annual_rate / Decimal(days_in_year))


def iter_interest_schedule(balance: Union[Money, Decimal], days: int,
                           annual_rate: Decimal = ANNUAL_INTEREST_RATE,
                           days_in_year: int = DAYS_IN_YEAR,
                           max_days: int = MAX_DAY_COUNT) -> Iterator[InterestRow]:
    """
    Yield the projected schedule one day at a time

    Args:
        balance: Starting balance in the home currency
        days: Number of days to project
        annual_rate: Annual interest rate (e.g. 0.05 for 5%)
        days_in_year: Day-count basis for the daily rate
        max_days: Largest accepted day count

    Raises:
        InvalidDayCount: If days is not an integer between 0 and max_days
    """
    if isinstance(days, bool) or not isinstance(days, int) or not 0 <= days <= max_days:
        raise InvalidDayCount()

    if isinstance(balance, Money):
        balance = balance.amount

    daily = daily_interest(balance, annual_rate, days_in_year)
    return _schedule(balance, daily, days)


def _schedule(balance: Decimal, daily: Decimal, days: int) -> Iterator[InterestRow]:
    for day in range(1, days + 1):
        balance += daily
        yield InterestRow(day=day, interest=daily, balance=balance)


def project_interest(balance: Union[Money, Decimal], days: int,
                     annual_rate: Decimal = ANNUAL_INTEREST_RATE,
                     days_in_year: int = DAYS_IN_YEAR) -> List[InterestRow]:
    """Full projected schedule as a list"""
    return list(iter_interest_schedule(balance, days, annual_rate, days_in_year))


def parse_day_count(value: str, max_days: int = MAX_DAY_COUNT) -> int:
    """
    Parse the projection horizon typed by the operator

    Raises:
        InvalidDayCount: If the text is not a whole number between 0 and max_days
    """
    text = value.strip() if isinstance(value, str) else ""
    if not _DAY_COUNT_PATTERN.fullmatch(text):
        raise InvalidDayCount()
    days = int(text)
    if days > max_days:
        raise InvalidDayCount()
    return days


def rate_percent(annual_rate: Decimal = ANNUAL_INTEREST_RATE) -> int:
    """Annual rate as a whole percent, truncated (0.05 -> 5)"""
    return int(annual_rate * 100)


def format_row(row: InterestRow) -> str:
    return f"{row.day:<3} | {row.interest:<8.2f} | {row.balance:<7.2f} |"


def format_schedule(rows: Iterable[InterestRow]) -> Iterator[str]:
    """Render the header followed by one line per projected day"""
    yield SCHEDULE_HEADER
    for row in rows:
        yield format_row(row)
