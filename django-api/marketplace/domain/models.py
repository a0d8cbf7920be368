"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in marketplace/models.py (persistence layer).
"""

from dataclasses import dataclass, replace
from datetime import datetime

from marketplace.domain.value_objects import Amount, MarkupPercent, Principal, TicketKey


@dataclass(frozen=True)
class TicketRecord:
    """Domain representation of a minted ticket."""

    key: TicketKey
    owner: Principal
    price: Amount
    resale_allowed: bool
    max_markup_percent: MarkupPercent
    original_price: Amount
    is_listed: bool
    asset_reference: str

    def markup_ceiling(self) -> int:
        """Highest price the ticket may be listed at."""
        base = self.original_price.value
        return base + base * self.max_markup_percent.value // 100

    def listed_at(self, price: Amount) -> "TicketRecord":
        return replace(self, price=price, is_listed=True)

    def sold_to(self, buyer: Principal) -> "TicketRecord":
        return replace(self, owner=buyer, is_listed=False)


@dataclass(frozen=True)
class Sale:
    """Domain representation of a completed purchase."""

    ticket_key: TicketKey
    seller: Principal
    buyer: Principal
    price: Amount
    sequence: int
    created_at: datetime
