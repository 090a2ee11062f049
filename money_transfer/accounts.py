"""
Account Module

Bank accounts are immutable data: deposit and withdraw return a new account
carrying the updated balance and leave the original untouched. BankAccount
also plays both transfer roles (Receiver and Sender) defined in roles.py.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple, TypeVar

from .config import get_config
from .currency import Currency, CurrencyCatalog, DEFAULT_CATALOG, Money
from .errors import InsufficientFundsError, InvalidAmountError, SameAccountTransferError
from .logging_config import get_logger, log_action
from .roles import Receiver

R = TypeVar("R", bound=Receiver)

MAX_ID = 2 ** 32 - 1

logger = get_logger("money_transfer.accounts")


def _check_id(kind: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind} must be an int, got {type(value).__name__}")
    if not 0 <= value <= MAX_ID:
        raise ValueError(f"{kind} out of range: {value}")


@dataclass(frozen=True)
class BankAccountId:
    """Bank account identifier (unsigned 32-bit)"""
    value: int

    def __post_init__(self):
        _check_id("BankAccountId", self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserAccountId:
    """Identifier of the user owning an account (unsigned 32-bit)"""
    value: int

    def __post_init__(self):
        _check_id("UserAccountId", self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BankAccount:
    """
    Bank account data with context-free behavior

    The balance currency is fixed for the account's lifetime: any deposit or
    withdrawal in another currency raises CurrencyMismatchError.
    """
    id: BankAccountId
    user_account_id: UserAccountId
    balance: Money

    def __post_init__(self):
        if not isinstance(self.balance, Money):
            raise TypeError(f"Balance must be Money, got {type(self.balance).__name__}")

    @classmethod
    def open(
        cls,
        id: BankAccountId,
        user_account_id: UserAccountId,
        currency: Optional[Currency] = None,
        catalog: CurrencyCatalog = DEFAULT_CATALOG
    ) -> 'BankAccount':
        """Create an account with a zero balance in currency (configured default if omitted)"""
        if currency is None:
            currency = Currency.from_code(get_config().default_currency)
        return cls(id, user_account_id, Money.zero(currency, catalog))

    @property
    def currency(self) -> Currency:
        return self.balance.currency

    def deposit(self, amount: Money) -> 'BankAccount':
        """
        Return a new account with amount added to the balance

        Raises:
            InvalidAmountError: If amount is negative
            CurrencyMismatchError: If amount is not in the account currency
        """
        _require_non_negative(amount, "deposit")
        balance = self.balance.add(amount)
        log_action(
            logger, "debug", f"Deposit applied: {amount.to_string()}",
            action="deposit", resource=f"account:{self.id}",
            extra={"balance": balance.to_string()}
        )
        return replace(self, balance=balance)

    def withdraw(self, amount: Money) -> 'BankAccount':
        """
        Return a new account with amount taken from the balance

        Withdrawing the full balance is allowed and leaves zero.

        Raises:
            InvalidAmountError: If amount is negative
            CurrencyMismatchError: If amount is not in the account currency
            InsufficientFundsError: If the balance would become negative
        """
        _require_non_negative(amount, "withdraw")
        balance = self.balance.subtract(amount)
        if balance.is_negative():
            raise InsufficientFundsError(self.balance.to_string(), amount.to_string())
        log_action(
            logger, "debug", f"Withdrawal applied: {amount.to_string()}",
            action="withdraw", resource=f"account:{self.id}",
            extra={"balance": balance.to_string()}
        )
        return replace(self, balance=balance)

    # Receiver role

    def on_receive(self, money: Money, sender: Any) -> 'BankAccount':
        return self.deposit(money)

    # Sender role

    def send(self, money: Money, to: R) -> Tuple['BankAccount', R]:
        """
        Withdraw money, then hand it to ``to``

        A failure in ``to.on_receive`` propagates as is. The debit is not
        compensated: the debited state is simply never returned.
        """
        if isinstance(to, BankAccount) and to.id == self.id:
            raise SameAccountTransferError(self.id)
        debited = self.withdraw(money)
        try:
            credited = to.on_receive(money, debited)
        except Exception:
            log_action(
                logger, "warning", "Credit rejected after debit; debit not compensated",
                action="send", resource=f"account:{self.id}",
                extra={"amount": money.to_string(), "receiver": repr(to)}
            )
            raise
        return debited, credited


def _require_non_negative(amount: Money, operation: str) -> None:
    if not isinstance(amount, Money):
        raise TypeError(f"{operation} amount must be Money, got {type(amount).__name__}")
    if amount.is_negative():
        raise InvalidAmountError(f"{operation} amount must not be negative: {amount.to_string()}")
