"""
Transfer Context

Pairs a sender and a receiver for one transfer. The context knows nothing
about BankAccount; any objects playing the Sender and Receiver roles work.

The transfer is not transactional. A debit is not rolled back if the
receiver rejects the credit; the error propagates and, since every state is
an immutable value, the caller keeps the operands it passed in.
"""

from typing import Generic, Optional, Tuple, TypeVar
import uuid

from .currency import Money
from .errors import MoneyError
from .logging_config import get_logger, log_action
from .roles import Receiver, Sender

S = TypeVar("S", bound=Sender)
R = TypeVar("R", bound=Receiver)

logger = get_logger("money_transfer.transfer")


class TransferContext(Generic[S, R]):
    """Transient composition of a Sender and a Receiver"""

    def __init__(self, sender: S, receiver: R):
        if not isinstance(sender, Sender):
            raise TypeError(f"{type(sender).__name__} does not implement the Sender role")
        if not isinstance(receiver, Receiver):
            raise TypeError(f"{type(receiver).__name__} does not implement the Receiver role")
        self.sender = sender
        self.receiver = receiver

    def __repr__(self) -> str:
        return f"TransferContext(sender={self.sender!r}, receiver={self.receiver!r})"

    def transfer(self, amount: Money, correlation_id: Optional[str] = None) -> Tuple[S, R]:
        """
        Move amount from sender to receiver

        Args:
            amount: Money to move
            correlation_id: Tracing id for the log records (generated if omitted)

        Returns:
            Updated (sender, receiver) pair

        Raises:
            MoneyError: Whatever the sender or receiver raised
        """
        correlation_id = correlation_id or str(uuid.uuid4())
        try:
            new_sender, new_receiver = self.sender.send(amount, self.receiver)
        except MoneyError as e:
            log_action(
                logger, "warning", f"Transfer failed: {e}",
                action="transfer", correlation_id=correlation_id,
                extra={"amount": str(amount), "error_code": e.code}
            )
            raise

        log_action(
            logger, "info", f"Transfer completed: {amount}",
            action="transfer", correlation_id=correlation_id,
            extra={"amount": str(amount)}
        )
        return new_sender, new_receiver
