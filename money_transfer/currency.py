"""
Multi-Currency Money Module

Handles ISO 4217 currency codes, the per-currency fractional-digit table and
the immutable Money value type. NEVER uses float for monetary values.
"""

import decimal
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, getcontext
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union
import re

from .config import get_config
from .errors import (
    ArithmeticFaultError, CatalogMismatchError, CurrencyMismatchError, UnknownCurrencyError
)

# Set global decimal context for financial precision
getcontext().prec = get_config().decimal_precision

Numeric = Union[Decimal, int, float, str]

# Plain amount as written by Money.to_string, or with a decimal comma
_AMOUNT_TOKEN = re.compile(r'[+-]?\d[\d,]*(\.\d+)?')


class Currency(Enum):
    """ISO 4217 Currency Codes with numeric code and precision info"""
    USD = ("USD", 840, 2)  # US Dollar, 2 decimal places
    EUR = ("EUR", 978, 2)  # Euro, 2 decimal places
    GBP = ("GBP", 826, 2)  # British Pound, 2 decimal places
    JPY = ("JPY", 392, 0)  # Japanese Yen, 0 decimal places
    CAD = ("CAD", 124, 2)  # Canadian Dollar, 2 decimal places
    CHF = ("CHF", 756, 2)  # Swiss Franc, 2 decimal places
    AUD = ("AUD", 36, 2)   # Australian Dollar, 2 decimal places
    CNY = ("CNY", 156, 2)  # Chinese Yuan, 2 decimal places
    KRW = ("KRW", 410, 0)  # South Korean Won, 0 decimal places
    KWD = ("KWD", 414, 3)  # Kuwaiti Dinar, 3 decimal places
    BHD = ("BHD", 48, 3)   # Bahraini Dinar, 3 decimal places

    def __init__(self, code: str, numeric: int, precision: int):
        self.code = code
        self.numeric = numeric
        self.precision = precision

    @classmethod
    def from_code(cls, code: str) -> 'Currency':
        """Resolve an alphabetic ISO 4217 code, case-insensitively"""
        if not isinstance(code, str):
            raise UnknownCurrencyError(repr(code))
        try:
            return cls[code.strip().upper()]
        except KeyError:
            raise UnknownCurrencyError(code) from None


class CurrencyCatalog:
    """
    Lookup of canonical fractional digits per currency.

    Digits default to the ISO 4217 precision carried by Currency. An override
    table replaces individual entries; mapping a currency to None makes the
    catalog treat it as unknown. Catalogs are read-only once built.
    """

    def __init__(
        self,
        overrides: Optional[Mapping[Currency, Optional[int]]] = None,
        rounding: Optional[str] = None
    ):
        table = dict(overrides or {})
        for currency, digits in table.items():
            if not isinstance(currency, Currency):
                raise TypeError(f"Catalog keys must be Currency, got {currency!r}")
            if digits is not None and (isinstance(digits, bool) or not isinstance(digits, int) or digits < 0):
                raise ValueError(f"Invalid digit count for {currency.code}: {digits!r}")
        self._overrides = MappingProxyType(table)
        rounding = (rounding or get_config().rounding).upper()
        if not rounding.startswith("ROUND_") or not hasattr(decimal, rounding):
            raise ValueError(f"Unknown rounding mode: {rounding}")
        self.rounding = rounding

    def __repr__(self) -> str:
        overrides = {c.code: d for c, d in self._overrides.items()}
        return f"CurrencyCatalog(overrides={overrides}, rounding={self.rounding})"

    def digits(self, currency: Currency) -> int:
        """Canonical number of fractional digits for currency"""
        if currency in self._overrides:
            digits = self._overrides[currency]
            if digits is None:
                raise UnknownCurrencyError(currency.code)
            return digits
        return currency.precision

    def quantum(self, currency: Currency) -> Decimal:
        """Smallest unit of currency, e.g. Decimal('0.01') for USD"""
        return Decimal(1).scaleb(-self.digits(currency))

    def rescale(self, amount: Decimal, currency: Currency) -> Decimal:
        """Round amount to the currency's canonical digits"""
        quantum = self.quantum(currency)
        with _decimal_faults("rescale"):
            rescaled = amount.quantize(quantum, rounding=self.rounding)
        if rescaled.is_zero():
            rescaled = rescaled.copy_abs()
        return rescaled


DEFAULT_CATALOG = CurrencyCatalog()


@contextmanager
def _decimal_faults(operation: str):
    """Re-raise decimal signals as ArithmeticFaultError"""
    try:
        yield
    except (decimal.DivisionByZero, InvalidOperation, decimal.Overflow) as exc:
        raise ArithmeticFaultError(operation, type(exc).__name__) from exc


def _to_decimal(value: Numeric) -> Decimal:
    if isinstance(value, bool):
        raise TypeError("Money amount cannot be a bool")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Cannot convert '{value}' to Decimal") from None
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")
    if not result.is_finite():
        raise ValueError(f"Money amount must be finite, got {result}")
    return result


@dataclass(frozen=True, eq=False)
class Money:
    """
    Immutable money representation with currency and proper precision.

    The amount is rescaled to the currency's canonical digits on
    construction. Equality and hashing use amount and currency only; the
    catalog that did the rescaling is carried along but never compared.

    ``add``/``subtract`` and the ``+``/``-`` operators raise
    CurrencyMismatchError when currencies differ, and CatalogMismatchError
    when the two catalogs disagree on digits or rounding. Ordering between different
    currencies is undefined: ``compare`` returns None and the rich
    comparisons all return False.
    """
    amount: Decimal
    currency: Currency
    catalog: CurrencyCatalog = field(default=DEFAULT_CATALOG, repr=False)

    def __post_init__(self):
        currency = self.currency
        if isinstance(currency, str):
            currency = Currency.from_code(currency)
            object.__setattr__(self, 'currency', currency)
        elif not isinstance(currency, Currency):
            raise TypeError(f"Unsupported currency type: {type(currency).__name__}")

        amount = self.catalog.rescale(_to_decimal(self.amount), currency)
        object.__setattr__(self, 'amount', amount)

    # Constructors

    @classmethod
    def new(cls, amount: Numeric, currency: Union[Currency, str],
            catalog: CurrencyCatalog = DEFAULT_CATALOG) -> 'Money':
        return cls(amount, currency, catalog)

    @classmethod
    def zero(cls, currency: Union[Currency, str],
             catalog: CurrencyCatalog = DEFAULT_CATALOG) -> 'Money':
        return cls(Decimal(0), currency, catalog)

    @classmethod
    def dollars(cls, amount: Numeric) -> 'Money':
        return cls(amount, Currency.USD)

    @classmethod
    def yens(cls, amount: Numeric) -> 'Money':
        return cls(amount, Currency.JPY)

    @classmethod
    def of(cls, pair: Tuple[Numeric, Union[Currency, str]],
           catalog: CurrencyCatalog = DEFAULT_CATALOG) -> 'Money':
        """Build Money from an (amount, currency) literal pair"""
        amount, currency = pair
        return cls(amount, currency, catalog)

    @classmethod
    def parse(cls, text: str, catalog: CurrencyCatalog = DEFAULT_CATALOG) -> 'Money':
        """
        Parse "USD 1,234.56" or "1234.56 USD"

        Raises:
            ValueError: If the text is not an amount and a currency code
            UnknownCurrencyError: If the currency code is not known
        """
        if not isinstance(text, str) or not text.strip():
            raise ValueError("Money string must be non-empty")
        parts = text.split()
        if len(parts) != 2:
            raise ValueError(f"Cannot parse money from '{text}'")
        first, second = parts
        if first.isalpha():
            code, amount = first, second
        elif second.isalpha():
            amount, code = first, second
        else:
            raise ValueError(f"Cannot parse money from '{text}'")
        if not _AMOUNT_TOKEN.fullmatch(amount):
            raise ValueError(f"Cannot parse money amount from '{amount}'")
        return cls(decimal_from_string(amount), Currency.from_code(code), catalog)

    def _with_amount(self, amount: Decimal) -> 'Money':
        return Money(amount, self.currency, self.catalog)

    def _require_same_currency(self, other: 'Money', operation: str) -> None:
        if self.currency is not other.currency:
            raise CurrencyMismatchError(self.currency.code, other.currency.code, operation)
        if self.catalog is not other.catalog and (
            self.catalog.digits(self.currency) != other.catalog.digits(other.currency)
            or self.catalog.rounding != other.catalog.rounding
        ):
            raise CatalogMismatchError(self.currency.code, operation)

    # Arithmetic

    def add(self, other: 'Money') -> 'Money':
        self._require_same_currency(other, "add")
        with _decimal_faults("add"):
            amount = self.amount + other.amount
        return self._with_amount(amount)

    def subtract(self, other: 'Money') -> 'Money':
        self._require_same_currency(other, "subtract")
        return self.add(other.negated())

    def times(self, factor: Numeric) -> 'Money':
        factor = _to_decimal(factor)
        with _decimal_faults("times"):
            amount = self.amount * factor
        return self._with_amount(amount)

    def divided_by(self, divisor: Numeric) -> 'Money':
        """
        Divide by a numeric divisor

        Raises:
            ArithmeticFaultError: On division by zero or decimal overflow
        """
        divisor = _to_decimal(divisor)
        with _decimal_faults("divided_by"):
            amount = self.amount / divisor
        return self._with_amount(amount)

    def negated(self) -> 'Money':
        return self._with_amount(-self.amount)

    def abs(self) -> 'Money':
        return self._with_amount(self.amount.copy_abs())

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount.is_zero()

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > 0

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < 0

    # Operators

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, factor: Numeric) -> 'Money':
        if isinstance(factor, bool) or not isinstance(factor, (Decimal, int, float)):
            return NotImplemented
        return self.times(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: Numeric) -> 'Money':
        if isinstance(divisor, bool) or not isinstance(divisor, (Decimal, int, float)):
            return NotImplemented
        return self.divided_by(divisor)

    def __neg__(self) -> 'Money':
        return self.negated()

    def __abs__(self) -> 'Money':
        return self.abs()

    # Comparison

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.currency is other.currency and self.amount == other.amount

    def __hash__(self) -> int:
        return hash((self.amount, self.currency.numeric))

    def compare(self, other: 'Money') -> Optional[int]:
        """
        Three-way comparison: -1, 0 or 1 for the same currency, None when
        the currencies differ and the values are unordered.
        """
        if self.currency is not other.currency:
            return None
        if self.amount < other.amount:
            return -1
        if self.amount > other.amount:
            return 1
        return 0

    def __lt__(self, other: 'Money') -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare(other) == -1

    def __le__(self, other: 'Money') -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare(other) in (-1, 0)

    def __gt__(self, other: 'Money') -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare(other) == 1

    def __ge__(self, other: 'Money') -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare(other) in (0, 1)

    # Display

    def to_string(self) -> str:
        """Format for display"""
        digits = self.catalog.digits(self.currency)
        return f"{self.currency.code} {self.amount:,.{digits}f}"

    def __str__(self) -> str:
        return self.to_string()


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    # Remove currency symbols and whitespace
    clean_value = re.sub(r'[^\d.,\-+]', '', value.strip())

    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - assume comma is thousands separator
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value:
        head, _, tail = clean_value.rpartition(',')
        if clean_value.count(',') == 1 and len(tail) <= 2:
            # Single comma with one or two trailing digits - decimal separator
            clean_value = f"{head}.{tail}"
        else:
            clean_value = clean_value.replace(',', '')

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal") from None


def validate_decimal_precision(value: Decimal, currency: Currency,
                               catalog: CurrencyCatalog = DEFAULT_CATALOG) -> Decimal:
    """
    Validate and round decimal to currency precision

    Args:
        value: Decimal to validate
        currency: Currency defining precision
        catalog: Digit table to consult

    Returns:
        Properly rounded Decimal
    """
    return catalog.rescale(value, currency)
