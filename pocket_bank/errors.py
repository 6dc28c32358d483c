"""
Banking Error Module

Domain-specific exceptions raised by the catalog, rate table, account
registry and interest projector. Every error carries the message shown to
the operator when a transaction is abandoned.
"""

from typing import Optional


class BankingError(Exception):
    """Base class for all errors handled at the transaction boundary"""

    message = "Transaction failed!"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UnknownTransaction(BankingError):
    """Raised when the main menu choice is not a known transaction id"""

    message = "No transaction with this ID exists!"


class UnknownCurrency(BankingError):
    """Raised when a currency code or index is not in the catalog"""

    message = "No currency with this code exists!"


class DuplicateAccount(BankingError):
    """Raised when registering a name that is already taken"""

    message = "An account with this name already exists!"


class AccountNotFound(BankingError):
    """Raised when no account matches the given name"""

    message = "No account with this name exists!"


class InvalidName(BankingError):
    """Raised when an account name is empty"""

    message = "Account name must not be empty!"


class InvalidAmount(BankingError):
    """
    Raised when an amount does not parse as a finite number, lies beyond
    the float range, or is not positive for a deposit or withdrawal.
    """

    message = "Amount must be a floating point number!"


class InvalidRate(BankingError):
    """Raised when an exchange rate is not a finite number greater than zero"""

    message = "Exchange rate must be a positive floating point number!"


class InvalidDayCount(BankingError):
    """Raised when the projection horizon is not an unsigned 32-bit integer"""

    message = "Number must be a positive whole number (integer)!"


class InsufficientFunds(BankingError):
    """Raised when a withdrawal would leave the balance below zero"""

    message = "Withdraw amount must be less than the current balance!"


class InvalidYesNo(BankingError):
    """Raised when a Y/N prompt receives anything other than Y or N"""

    message = "Only accepting a [Y]es or [N]o answer!"
