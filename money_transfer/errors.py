"""
Typed exception hierarchy for money arithmetic and transfers.

Every error carries a machine-readable ``code`` so callers can branch on type
or code instead of parsing messages:

    MoneyError (base)
    |
    +-- CurrencyMismatchError
    +-- CatalogMismatchError
    +-- ArithmeticFaultError
    +-- UnknownCurrencyError
    +-- InvalidAmountError
    +-- InsufficientFundsError
    +-- SameAccountTransferError
"""


class MoneyError(Exception):
    """Base class for all money and transfer errors."""

    code: str = "MONEY_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class CurrencyMismatchError(MoneyError):
    """Operation attempted between Money values of different currencies."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, left: str, right: str, operation: str = "combine"):
        self.left = left
        self.right = right
        self.operation = operation
        super().__init__(f"Cannot {operation} {left} and {right}")


class ArithmeticFaultError(MoneyError):
    """Decimal arithmetic signalled a fault (division by zero, overflow)."""

    code: str = "ARITHMETIC_FAULT"

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Arithmetic fault in {operation}: {detail}")


class UnknownCurrencyError(MoneyError):
    """Currency code is not in the catalog."""

    code: str = "UNKNOWN_CURRENCY"

    def __init__(self, currency_code: str):
        self.currency_code = currency_code
        super().__init__(f"Unknown currency: {currency_code}")


class InvalidAmountError(MoneyError):
    """Amount is not acceptable for the operation (e.g. negative deposit)."""

    code: str = "INVALID_AMOUNT"


class InsufficientFundsError(MoneyError):
    """Withdrawal would leave a negative balance."""

    code: str = "INSUFFICIENT_FUNDS"

    def __init__(self, balance, requested):
        self.balance = balance
        self.requested = requested
        super().__init__(
            f"Insufficient funds: available {balance}, requested {requested}"
        )


class SameAccountTransferError(MoneyError):
    """Sender and receiver are the same account."""

    code: str = "SAME_ACCOUNT_TRANSFER"

    def __init__(self, account_id):
        self.account_id = account_id
        super().__init__(f"Cannot transfer from account {account_id} to itself")


class CatalogMismatchError(MoneyError):
    """Operands of the same currency were scaled by incompatible catalogs."""

    code: str = "CATALOG_MISMATCH"

    def __init__(self, currency_code: str, operation: str = "combine"):
        self.currency_code = currency_code
        self.operation = operation
        super().__init__(
            f"Cannot {operation} {currency_code} amounts from catalogs with different digits or rounding"
        )
