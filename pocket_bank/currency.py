"""
Multi-Currency Support Module

Holds the closed currency catalog, the exchange-rate table pivoting on the
home currency, and the conversion arithmetic shared by deposits, withdrawals
and exchange quotes. Monetary values use Decimal, never float.
"""

from decimal import Decimal, DecimalException, ROUND_HALF_UP, getcontext
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union
from enum import Enum
import re

from .errors import UnknownCurrency, InvalidAmount, InvalidRate

# Set global decimal context wide enough to hold any float-range amount to the cent
getcontext().prec = 400

CENTS = Decimal('0.01')

# Largest magnitude accepted for amounts, rates and balances (the float range)
MAX_MAGNITUDE = Decimal('1.7976931348623157e308')

# Plain decimal or scientific notation, ASCII digits only, no underscores
_NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

CurrencyLike = Union['Currency', str]


class Currency(Enum):
    """Supported currencies in stable menu order. PHP is the home currency."""
    PHP = ("PHP", "Philippine Peso (PHP)")
    USD = ("USD", "United States Dollar (USD)")
    JPY = ("JPY", "Japanese Yen (JPY)")
    GBP = ("GBP", "British Pound Sterling (GBP)")
    EUR = ("EUR", "Euro (EUR)")
    CNY = ("CNY", "Chinese Yuan Renminbi (CNY)")

    def __init__(self, code: str, title: str):
        self.code = code
        self.title = title

    @property
    def is_home(self) -> bool:
        return self is HOME_CURRENCY

    @property
    def index(self) -> int:
        """1-based position in the master menu"""
        return list(Currency).index(self) + 1

    @classmethod
    def from_code(cls, code: CurrencyLike) -> 'Currency':
        """
        Look up a currency by its code, ignoring case and surrounding spaces

        Raises:
            UnknownCurrency: If the code is not in the catalog
        """
        if isinstance(code, Currency):
            return code
        if isinstance(code, str):
            wanted = code.strip().upper()
            for currency in cls:
                if currency.code == wanted:
                    return currency
        raise UnknownCurrency()

    @classmethod
    def from_index(cls, index: int) -> 'Currency':
        """
        Look up a currency by its 1-based master menu index

        Raises:
            UnknownCurrency: If the index is outside the menu
        """
        members = list(cls)
        if 1 <= index <= len(members):
            return members[index - 1]
        raise UnknownCurrency("No currency with this ID exists!")

    def __str__(self) -> str:
        return self.title


HOME_CURRENCY = Currency.PHP


def home() -> Currency:
    """The pivot currency of every conversion and every balance"""
    return HOME_CURRENCY


def is_valid(code: str) -> bool:
    try:
        Currency.from_code(code)
    except UnknownCurrency:
        return False
    return True


def index_of(code: str) -> Optional[int]:
    """1-based menu index of a code, or None when it is not in the catalog"""
    try:
        return Currency.from_code(code).index
    except UnknownCurrency:
        return None


def title(code: str) -> str:
    return Currency.from_code(code).title


def foreign_codes() -> List[str]:
    return [currency.code for currency in Currency if not currency.is_home]


def round_to_cents(value: Decimal) -> Decimal:
    """Round half away from zero to two decimal places"""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    """
    Immutable money representation rounded to cents.
    Account balances are always Money in the home currency.
    """
    amount: Decimal
    currency: Currency = HOME_CURRENCY

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        object.__setattr__(self, 'amount', round_to_cents(self.amount))

    def __add__(self, other: 'Money') -> 'Money':
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency.code} and {other.currency.code}")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract {other.currency.code} from {self.currency.code}")
        return Money(self.amount - other.amount, self.currency)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return False
        return self.amount == other.amount and self.currency == other.currency


class RateTable:
    """
    Foreign-to-home exchange rates.

    A rate R for currency F means one unit of F equals R units of the home
    currency. The home currency is never stored and always reads as 1.
    """

    def __init__(self, initial_rate: Union[Decimal, str] = Decimal('1.0')):
        initial = _to_rate(initial_rate)
        self._rates: Dict[Currency, Decimal] = {
            currency: initial for currency in Currency if not currency.is_home
        }

    def rate_of(self, code: CurrencyLike) -> Decimal:
        """
        Get the foreign-to-home rate for a currency

        Raises:
            UnknownCurrency: If the code is not in the catalog
        """
        currency = Currency.from_code(code)
        if currency.is_home:
            return Decimal('1')
        return self._rates[currency]

    def set_rate(self, code: CurrencyLike, value: Union[Decimal, str, float, int]) -> Decimal:
        """
        Record the rate for a foreign currency

        Raises:
            UnknownCurrency: If the code is not a foreign catalog currency
            InvalidRate: If the value is not finite or not greater than zero
        """
        currency = Currency.from_code(code)
        if currency.is_home:
            raise UnknownCurrency(
                f"{currency.code} is the home currency and has no exchange rate!"
            )
        rate = _to_rate(value)
        self._rates[currency] = rate
        return rate

    def items(self) -> List[Tuple[str, Decimal]]:
        return [(currency.code, rate) for currency, rate in self._rates.items()]

    def __len__(self) -> int:
        return len(self._rates)

    def __contains__(self, code) -> bool:
        try:
            return Currency.from_code(code) in self._rates
        except UnknownCurrency:
            return False


def _to_decimal(value: Union[Decimal, str, float, int]) -> Optional[Decimal]:
    """Decimal for a finite number within the float range, else None"""
    if isinstance(value, Decimal):
        number = value
    else:
        text = str(value).strip()
        if not _NUMBER_PATTERN.fullmatch(text):
            return None
        try:
            number = Decimal(text)
        except DecimalException:
            return None
    if not number.is_finite() or number.copy_abs() > MAX_MAGNITUDE:
        return None
    return number


def _to_rate(value: Union[Decimal, str, float, int]) -> Decimal:
    rate = _to_decimal(value)
    if rate is None or rate <= Decimal('0'):
        raise InvalidRate()
    return rate


def check_magnitude(amount: Decimal) -> Decimal:
    """
    Reject amounts that are not finite or lie beyond the float range

    Raises:
        InvalidAmount: If the amount is NaN, infinite or larger than MAX_MAGNITUDE
    """
    if not amount.is_finite():
        raise InvalidAmount()
    if amount.copy_abs() > MAX_MAGNITUDE:
        raise InvalidAmount("Amount is outside the supported range!")
    return amount


def convert(
    amount: Union[Decimal, str, float, int],
    src: CurrencyLike,
    dst: CurrencyLike,
    rates: RateTable
) -> Decimal:
    """
    Convert an amount between two catalog currencies via the home currency

    Both legs multiply by the stored rate: a foreign amount is multiplied by
    its rate to reach home, and a home amount is multiplied by the
    destination rate to reach a foreign currency.

    Args:
        amount: Amount in the source currency
        src: Source currency or code
        dst: Destination currency or code
        rates: Rate table to read from

    Returns:
        Unrounded converted amount

    Raises:
        UnknownCurrency: If either code is not in the catalog
        InvalidAmount: If the amount or the result is beyond the float range
    """
    source = Currency.from_code(src)
    destination = Currency.from_code(dst)
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    check_magnitude(amount)

    home_amount = amount if source.is_home else amount * rates.rate_of(source)

    if destination.is_home:
        return check_magnitude(home_amount)
    return check_magnitude(home_amount * rates.rate_of(destination))


def parse_amount(value: str) -> Decimal:
    """
    Convert operator input to a finite Decimal

    Accepts plain decimal or scientific notation, as a float parser would.

    Raises:
        InvalidAmount: If the text is not a number or lies beyond the float range
    """
    if not isinstance(value, str):
        raise InvalidAmount()
    amount = _to_decimal(value)
    if amount is None:
        if _NUMBER_PATTERN.fullmatch(value.strip()):
            raise InvalidAmount("Amount is outside the supported range!")
        raise InvalidAmount()
    return amount
