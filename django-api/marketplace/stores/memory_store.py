"""In-process implementation of the TicketStore and Ledger.

Used by the service tests and by callers that embed the marketplace without
a database. One re-entrant lock serializes every scope across all keys.
"""

import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import datetime, timezone
from itertools import count

from marketplace.domain import Amount, Principal, Sale, TicketKey, TicketRecord
from marketplace.domain.errors import (
    DuplicateRecordError,
    InsufficientFundsError,
    TicketNotFoundError,
)
from marketplace.stores.interfaces import Ledger, TicketStore


class InMemoryMarketplace(TicketStore, Ledger):
    """Tickets, sales and balances held in dictionaries."""

    def __init__(self, balances: Mapping[str, int] | None = None) -> None:
        self._lock = threading.RLock()
        self._tickets: dict[TicketKey, TicketRecord] = {}
        self._touched: dict[TicketKey, int] = {}
        self._sales: dict[TicketKey, list[Sale]] = {}
        self._balances: dict[Principal, int] = {
            Principal(name): Amount(value).value
            for name, value in (balances or {}).items()
        }
        self._clock = count()

    def get(self, key: TicketKey) -> TicketRecord | None:
        with self._lock:
            return self._tickets.get(key)

    def create(self, record: TicketRecord) -> None:
        with self._lock:
            if record.key in self._tickets:
                raise DuplicateRecordError(record.key.value)
            self._store(record)

    def put(self, record: TicketRecord) -> None:
        with self._lock:
            if record.key not in self._tickets:
                raise TicketNotFoundError(record.key.value)
            self._store(record)

    @contextmanager
    def locked(self, key: TicketKey) -> Iterator[TicketRecord]:
        with self._lock:
            record = self._tickets.get(key)
            if record is None:
                raise TicketNotFoundError(key.value)
            snapshot = (
                dict(self._tickets),
                dict(self._touched),
                {k: list(v) for k, v in self._sales.items()},
                dict(self._balances),
            )
            try:
                yield record
            except BaseException:
                self._tickets, self._touched, self._sales, self._balances = snapshot
                raise

    def list_listed(self) -> list[TicketRecord]:
        with self._lock:
            listed = [record for record in self._tickets.values() if record.is_listed]
            return sorted(listed, key=lambda record: self._touched[record.key], reverse=True)

    def list_owned_by(self, owner: Principal) -> list[TicketRecord]:
        with self._lock:
            return [record for record in self._tickets.values() if record.owner == owner]

    def record_sale(
        self, key: TicketKey, seller: Principal, buyer: Principal, price: Amount
    ) -> Sale:
        with self._lock:
            history = self._sales.setdefault(key, [])
            sale = Sale(
                ticket_key=key,
                seller=seller,
                buyer=buyer,
                price=price,
                sequence=len(history) + 1,
                created_at=datetime.now(timezone.utc),
            )
            history.append(sale)
            return sale

    def sales_for(self, key: TicketKey) -> list[Sale]:
        with self._lock:
            return list(self._sales.get(key, []))

    def balance_of(self, principal: Principal) -> Amount:
        with self._lock:
            return Amount(self._balances.get(principal, 0))

    def transfer(self, source: Principal, destination: Principal, amount: Amount) -> None:
        with self._lock:
            available = self._balances.get(source, 0)
            if available < amount.value:
                raise InsufficientFundsError(source.value, amount.value)
            if source == destination:
                return
            self._balances[source] = available - amount.value
            self._balances[destination] = self._balances.get(destination, 0) + amount.value

    def _store(self, record: TicketRecord) -> None:
        self._tickets[record.key] = record
        self._touched[record.key] = next(self._clock)
