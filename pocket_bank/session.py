"""
Session Controller Module

Drives the interactive teller session: shows the transaction menu, runs the
selected transaction against the session's account registry and rate table,
and asks whether to continue. Every banking error is reported to the operator
at the transaction boundary and the session carries on.
"""

from decimal import Decimal
from typing import Callable, Dict, Iterable, Optional
from enum import Enum
import re

from .accounts import AccountRegistry, deposit, withdraw
from .config import PocketBankConfig, get_config
from .currency import (
    Currency, RateTable, HOME_CURRENCY, convert, parse_amount, round_to_cents
)
from .errors import (
    BankingError, InvalidAmount, InvalidYesNo, UnknownCurrency, UnknownTransaction
)
from .interest import format_schedule, iter_interest_schedule, parse_day_count, rate_percent
from .logging_config import get_logger, log_action

logger = get_logger(__name__)

_INDEX_PATTERN = re.compile(r"\+?\d+")


class TransactionType(Enum):
    """Main menu transactions with their stable 1-based ids"""
    REGISTER = (1, "Register Account Name")
    DEPOSIT = (2, "Deposit Amount")
    WITHDRAW = (3, "Withdraw Amount")
    EXCHANGE = (4, "Currency Exchange")
    RECORD_RATE = (5, "Record Exchange Rates")
    SHOW_INTEREST = (6, "Show Interest Amount")

    def __init__(self, id: int, title: str):
        self.id = id
        self.title = title

    @classmethod
    def from_choice(cls, choice: str) -> 'TransactionType':
        """
        Resolve the operator's menu choice

        Raises:
            UnknownTransaction: If the choice is not one of the menu ids
        """
        text = choice.strip()
        if _INDEX_PATTERN.fullmatch(text):
            for transaction in cls:
                if transaction.id == int(text):
                    return transaction
        raise UnknownTransaction()


class SessionState(Enum):
    """States of the teller session"""
    MAIN_MENU = "main_menu"
    IN_TRANSACTION = "in_transaction"
    POST_TRANSACTION_PROMPT = "post_transaction_prompt"
    EXCHANGE_REPEAT = "exchange_repeat"
    TERMINATED = "terminated"


def parse_yes_no(answer: str) -> bool:
    """
    Interpret a Y/N answer, ignoring case

    Raises:
        InvalidYesNo: If the answer is neither Y nor N
    """
    normalized = answer.strip().upper()
    if normalized == "Y":
        return True
    if normalized == "N":
        return False
    raise InvalidYesNo()


def parse_index(value: str) -> int:
    """Parse a 1-based menu index typed by the operator"""
    text = value.strip()
    if not _INDEX_PATTERN.fullmatch(text):
        raise UnknownCurrency("ID must be a positive whole number (integer)!")
    return int(text)


def print_choices(choices: Iterable[str], output: Callable[[str], None], start: int = 1) -> None:
    for i, choice in enumerate(choices, start=start):
        output(f"[{i}] {choice}")


class Session:
    """
    Interactive teller session

    Owns one account registry and one rate table for its whole lifetime.
    Input and output are injected so the session can be scripted.
    """

    def __init__(
        self,
        prompt: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[[str], None]] = None,
        config: Optional[PocketBankConfig] = None
    ):
        config = config or get_config()

        self.registry = AccountRegistry()
        self.rates = RateTable(config.initial_exchange_rate)
        self.annual_rate = Decimal(config.annual_interest_rate)
        self.days_in_year = config.days_in_year
        self.max_day_count = config.max_day_count

        self.state = SessionState.MAIN_MENU
        self.transaction: Optional[TransactionType] = None

        self._input = prompt or input
        self._output = output or print

        self._handlers: Dict[TransactionType, Callable[[], None]] = {
            TransactionType.REGISTER: self.register_account,
            TransactionType.DEPOSIT: self.deposit_balance,
            TransactionType.WITHDRAW: self.withdraw_balance,
            TransactionType.EXCHANGE: self.exchange_currencies,
            TransactionType.RECORD_RATE: self.record_exchange_rate,
            TransactionType.SHOW_INTEREST: self.show_interest,
        }

    # I/O helpers

    def prompt(self, message: str) -> str:
        return self._input(message).strip()

    def say(self, text: str = "") -> None:
        self._output(text)

    # State machine

    def run(self) -> None:
        """Process commands until the operator declines to continue"""
        while self.state is not SessionState.TERMINATED:
            self.step()

    def step(self) -> SessionState:
        """Advance the session by one state transition"""
        if self.state is SessionState.MAIN_MENU:
            self._main_menu()
        elif self.state is SessionState.IN_TRANSACTION:
            self.execute(self.transaction)
            self.say()
            if self.transaction is TransactionType.EXCHANGE:
                self.state = SessionState.EXCHANGE_REPEAT
            else:
                self.state = SessionState.POST_TRANSACTION_PROMPT
        elif self.state is SessionState.EXCHANGE_REPEAT:
            answer = self.ask_yes_no("Convert another currency? (Y/N): ")
            if answer is True:
                self.say()
                self.state = SessionState.IN_TRANSACTION
            elif answer is False:
                self.say()
                self.state = SessionState.POST_TRANSACTION_PROMPT
        elif self.state is SessionState.POST_TRANSACTION_PROMPT:
            answer = self.ask_yes_no("Back to the Main Menu (Y/N): ")
            if answer is True:
                self.say()
                self.state = SessionState.MAIN_MENU
            elif answer is False:
                self.state = SessionState.TERMINATED
                log_action(logger, "info", "Session terminated", action="quit")
        return self.state

    def _main_menu(self) -> None:
        self.transaction = None
        self.say("Select Transaction:")
        print_choices([t.title for t in TransactionType], self.say)
        self.say()

        choice = self.prompt("> ")
        self.say()

        try:
            self.transaction = TransactionType.from_choice(choice)
        except UnknownTransaction as e:
            self._report(e, action="select")
            self.say()
            self.state = SessionState.POST_TRANSACTION_PROMPT
            return

        self.say(self.transaction.title)
        self.state = SessionState.IN_TRANSACTION

    def ask_yes_no(self, message: str) -> Optional[bool]:
        """Ask a Y/N question; None means the answer was rejected"""
        try:
            return parse_yes_no(self.prompt(message))
        except InvalidYesNo as e:
            self.say(e.message)
            self.say()
            return None

    def execute(self, transaction: TransactionType) -> bool:
        """Run one transaction, reporting any banking error instead of raising"""
        action = transaction.name.lower()
        try:
            self._handlers[transaction]()
        except BankingError as e:
            self._report(e, action=action)
            return False

        log_action(logger, "info", "Transaction completed", action=action)
        return True

    def _report(self, error: BankingError, action: str) -> None:
        self.say(error.message)
        log_action(
            logger, "warning", "Transaction failed",
            action=action,
            extra={"error": type(error).__name__, "detail": error.message}
        )

    # Transactions

    def register_account(self) -> None:
        name = self.prompt("Account Name: ")
        self.registry.register(name)
        self.say("Account registered!")

    def deposit_balance(self) -> None:
        self._change_balance("Deposit", deposit)

    def withdraw_balance(self) -> None:
        self._change_balance("Withdraw", withdraw)

    def _change_balance(self, verb: str, operation) -> None:
        account = self.registry.get(self.prompt("Account Name: "))
        self.say(f"Current Balance: {account.balance.amount:.2f}")

        currency = Currency.from_code(self.prompt("Currency: ").upper())
        self.say()

        try:
            amount = parse_amount(self.prompt(f"{verb} Amount: "))
        except InvalidAmount as e:
            # Range errors keep their own message
            if e.message != InvalidAmount.message:
                raise
            raise InvalidAmount(f"{verb} amount must be a floating point number!") from None

        balance = operation(account, amount, currency, self.rates)
        self.say(f"Updated Balance: {balance.amount:.2f}")

    def _select_currency(self, heading: str, message: str) -> Currency:
        self.say(heading)
        print_choices([c.title for c in Currency], self.say)
        self.say()
        return Currency.from_index(parse_index(self.prompt(message)))

    def exchange_currencies(self) -> None:
        source = self._select_currency("Source Currency Options:", "Source Currency: ")
        amount = parse_amount(self.prompt("Source Amount: "))
        self.say()

        destination = self._select_currency("Exchanged Currency Options:", "Exchange Currency: ")

        exchanged = convert(amount, source, destination, self.rates)
        self.say(f"Exchange Amount: {round_to_cents(exchanged):.2f}")

    def record_exchange_rate(self) -> None:
        self.say()
        # Foreign currencies are numbered by their position in the full menu
        foreign = [c for c in Currency if not c.is_home]
        print_choices([c.title for c in foreign], self.say, start=foreign[0].index)
        self.say()

        currency = Currency.from_index(parse_index(self.prompt("Select Foreign Currency: ")))
        if currency.is_home:
            raise UnknownCurrency("No foreign currency with this ID exists!")

        rate = self.rates.set_rate(currency, self.prompt("Exchange Rate: "))
        self.say(f"Recorded Rate: 1 {currency.code} = {rate} {HOME_CURRENCY.code}")

    def show_interest(self) -> None:
        account = self.registry.get(self.prompt("Account Name: "))

        self.say(f"Current Balance: {account.balance.amount:.2f}")
        self.say(f"Currency: {account.currency.code}")
        self.say(f"Interest Rate: {rate_percent(self.annual_rate)}%")
        self.say()

        days = parse_day_count(self.prompt("Total Number of Days: "), self.max_day_count)
        self.say()

        schedule = iter_interest_schedule(
            account.balance, days, self.annual_rate, self.days_in_year, self.max_day_count
        )
        for line in format_schedule(schedule):
            self.say(line)
