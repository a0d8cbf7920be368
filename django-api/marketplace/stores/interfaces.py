"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from marketplace.domain import Amount, Principal, Sale, TicketKey, TicketRecord


class TicketStore(ABC):
    """Interface for ticket persistence operations."""

    @abstractmethod
    def get(self, key: TicketKey) -> TicketRecord | None:
        """Return a ticket by key, or None if not found."""
        ...

    @abstractmethod
    def create(self, record: TicketRecord) -> None:
        """Insert a new ticket.

        Raises:
            DuplicateRecordError: If a ticket already exists at the key.
        """
        ...

    @abstractmethod
    def put(self, record: TicketRecord) -> None:
        """Overwrite an existing ticket."""
        ...

    @abstractmethod
    def locked(self, key: TicketKey) -> AbstractContextManager[TicketRecord]:
        """Open an exclusive, all-or-nothing scope on one ticket.

        Yields the current record. Every mutation made inside the scope,
        ledger transfers included, is discarded if the scope exits with an
        exception.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
        """
        ...

    @abstractmethod
    def list_listed(self) -> list[TicketRecord]:
        """Return all tickets currently listed for sale, most recent first."""
        ...

    @abstractmethod
    def list_owned_by(self, owner: Principal) -> list[TicketRecord]:
        """Return all tickets held by a principal."""
        ...

    @abstractmethod
    def record_sale(
        self, key: TicketKey, seller: Principal, buyer: Principal, price: Amount
    ) -> Sale:
        """Append a sale to the ticket's history and return it."""
        ...

    @abstractmethod
    def sales_for(self, key: TicketKey) -> list[Sale]:
        """Return the ticket's sales ordered by sequence ascending."""
        ...


class Ledger(ABC):
    """Interface for balance-holding principals."""

    @abstractmethod
    def balance_of(self, principal: Principal) -> Amount:
        """Return a principal's balance, zero if it has no account."""
        ...

    @abstractmethod
    def transfer(self, source: Principal, destination: Principal, amount: Amount) -> None:
        """Move value between two principals atomically.

        Raises:
            InsufficientFundsError: If the source balance is below amount.
        """
        ...
