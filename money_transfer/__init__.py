"""
Money Transfer

Currency-aware money arithmetic using Decimal, and a role-based transfer
protocol that composes two accounts into a single send/receive step.
"""

from .currency import Currency, CurrencyCatalog, DEFAULT_CATALOG, Money
from .errors import (
    ArithmeticFaultError, CatalogMismatchError, CurrencyMismatchError, InsufficientFundsError,
    InvalidAmountError, MoneyError, SameAccountTransferError, UnknownCurrencyError
)
from .roles import Receiver, Sender
from .accounts import BankAccount, BankAccountId, UserAccountId
from .transfer import TransferContext

__version__ = "1.0.0"

__all__ = [
    "Currency", "CurrencyCatalog", "DEFAULT_CATALOG", "Money",
    "MoneyError", "CurrencyMismatchError", "CatalogMismatchError", "ArithmeticFaultError",
    "UnknownCurrencyError", "InvalidAmountError", "InsufficientFundsError",
    "SameAccountTransferError",
    "Receiver", "Sender",
    "BankAccount", "BankAccountId", "UserAccountId",
    "TransferContext",
]
