"""
Account Management Module

Manages the in-memory account registry and the balance-changing operations.
Every account holds its balance in the home currency; foreign amounts are
converted when they are deposited or withdrawn.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from .currency import (
    Money, Currency, RateTable, HOME_CURRENCY, MAX_MAGNITUDE, CurrencyLike,
    check_magnitude, convert, parse_amount
)
from .errors import (
    AccountNotFound, DuplicateAccount, InsufficientFunds, InvalidAmount, InvalidName
)
from .logging_config import get_logger, log_action

logger = get_logger(__name__)

AmountLike = Union[Decimal, str, float, int]


@dataclass
class Account:
    """
    Bank account owned by a single named holder

    The currency is fixed to the home currency for the life of the account.
    """
    name: str
    balance: Money = field(default_factory=lambda: Money(Decimal('0')))
    currency: Currency = field(default=HOME_CURRENCY, init=False)

    def __post_init__(self):
        if self.balance.currency != self.currency:
            raise ValueError("Account balance must be held in the home currency")


class AccountRegistry:
    """
    Insertion-ordered collection of accounts keyed by exact owner name
    """

    def __init__(self):
        self._accounts: Dict[str, Account] = {}

    def register(self, name: str) -> Account:
        """
        Open a new zero-balance account

        Args:
            name: Owner name, must be unique and non-blank

        Returns:
            Created Account

        Raises:
            InvalidName: If the name is blank
            DuplicateAccount: If an account with this exact name exists
        """
        if not name or not name.strip():
            raise InvalidName()
        if name in self._accounts:
            raise DuplicateAccount()

        account = Account(name=name)
        self._accounts[name] = account

        log_action(
            logger, "info", "Account registered",
            action="register", resource=name
        )
        return account

    def find(self, name: str) -> Optional[Account]:
        """Get the live account for a name, or None"""
        return self._accounts.get(name)

    def get(self, name: str) -> Account:
        account = self.find(name)
        if account is None:
            raise AccountNotFound()
        return account

    def names(self) -> List[str]:
        return list(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(list(self._accounts.values()))

    def __contains__(self, name: str) -> bool:
        return name in self._accounts


def _home_delta(amount: AmountLike, currency: CurrencyLike, rates: RateTable) -> Decimal:
    """Validate the inputs and convert the amount to the unrounded home amount"""
    source = Currency.from_code(currency)

    if isinstance(amount, str):
        value = parse_amount(amount)
    else:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        check_magnitude(value)

    if value <= Decimal('0'):
        raise InvalidAmount("Amount must be greater than zero!")

    return convert(value, source, HOME_CURRENCY, rates)


def deposit(
    account: Account,
    amount: AmountLike,
    currency: CurrencyLike,
    rates: RateTable
) -> Money:
    """
    Credit an account with an amount in any catalog currency

    Args:
        account: Account to credit
        amount: Positive amount in the given currency
        currency: Currency of the amount
        rates: Rate table used for conversion to home

    Returns:
        Updated balance

    Raises:
        UnknownCurrency: If the currency is not in the catalog
        InvalidAmount: If the amount is not a finite positive number, or the
            balance would grow beyond the float range
    """
    delta = Money(_home_delta(amount, currency, rates))
    updated = account.balance + delta

    if updated.amount > MAX_MAGNITUDE:
        raise InvalidAmount("Balance would exceed the supported range!")

    account.balance = updated

    log_action(
        logger, "info", "Deposit completed",
        action="deposit", resource=account.name,
        extra={"currency": Currency.from_code(currency).code,
               "home_amount": str(delta.amount),
               "balance": str(account.balance.amount)}
    )
    return account.balance


def withdraw(
    account: Account,
    amount: AmountLike,
    currency: CurrencyLike,
    rates: RateTable
) -> Money:
    """
    Debit an account with an amount in any catalog currency

    The overdraft check uses the unrounded home amount, so withdrawing
    100.004 from a balance of 100.00 is refused. The balance is left
    untouched when the withdrawal would overdraw it.

    Raises:
        UnknownCurrency: If the currency is not in the catalog
        InvalidAmount: If the amount is not a finite positive number
        InsufficientFunds: If the balance is lower than the converted amount
    """
    home_amount = _home_delta(amount, currency, rates)

    if account.balance.amount - home_amount < Decimal('0'):
        raise InsufficientFunds()

    delta = Money(home_amount)
    account.balance = account.balance - delta

    log_action(
        logger, "info", "Withdrawal completed",
        action="withdraw", resource=account.name,
        extra={"currency": Currency.from_code(currency).code,
               "home_amount": str(delta.amount),
               "balance": str(account.balance.amount)}
    )
    return account.balance
