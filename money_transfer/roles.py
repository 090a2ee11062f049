"""
Capability roles for the transfer protocol.

Roles describe behavior only. Any entity that implements the methods can
take part in a transfer without depending on BankAccount.
"""

from typing import Any, Protocol, Tuple, TypeVar, runtime_checkable

from .currency import Money

T = TypeVar("T")


@runtime_checkable
class Receiver(Protocol):
    """Something that money can be deposited into."""

    def on_receive(self, money: Money, sender: Any) -> "Receiver":
        """Return the new state after crediting money.

        ``sender`` is the already-debited sender state. It is passed along
        for traceability and must not be used to validate the deposit.
        """
        ...


@runtime_checkable
class Sender(Protocol[T]):
    """Something that can debit itself and hand money to a receiver of type T."""

    def send(self, money: Money, to: T) -> Tuple["Sender[T]", T]:
        """Debit self, then credit ``to``; return the updated (sender, receiver)."""
        ...
