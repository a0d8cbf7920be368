"""Marketplace service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from marketplace.domain import (
    Amount,
    MarkupPercent,
    Principal,
    Sale,
    TicketKey,
    TicketRecord,
)
from marketplace.domain.errors import (
    DomainError,
    ExceedsMaxMarkupError,
    InvalidTicketKeyError,
    InvalidTicketTermsError,
    NotOwnerError,
    ResaleNotAllowedError,
    TicketNotFoundError,
    TicketNotListedError,
)
from marketplace.domain.value_objects import MAX_AMOUNT, MAX_ASSET_REFERENCE_LENGTH
from marketplace.stores.interfaces import Ledger, TicketStore

logger = logging.getLogger(__name__)


class MarketplaceService:
    """Service for ticket issuance, resale listing and purchase."""

    def __init__(self, store: TicketStore, ledger: Ledger) -> None:
        self._store = store
        self._ledger = ledger

    def issue_ticket(
        self,
        issuer: str,
        initial_price: int,
        resale_allowed: bool,
        max_markup_percent: int,
        asset_reference: str,
    ) -> TicketRecord:
        """Mint a ticket owned by its issuer.

        Raises:
            InvalidTicketTermsError: If the price, markup or asset reference is out of range,
                or the markup ceiling would not fit in a storable price.
            DuplicateRecordError: If this issuer already issued a ticket for the asset.
        """
        owner = Principal(issuer)
        try:
            price = Amount(initial_price)
            markup = MarkupPercent(max_markup_percent)
        except ValueError as exc:
            raise InvalidTicketTermsError(str(exc)) from exc
        if not asset_reference or len(asset_reference) > MAX_ASSET_REFERENCE_LENGTH:
            raise InvalidTicketTermsError("Asset reference must be 1 to 255 characters")
        if price.value + price.value * markup.value // 100 > MAX_AMOUNT:
            raise InvalidTicketTermsError("Markup ceiling exceeds the largest storable price")

        record = TicketRecord(
            key=TicketKey.derive(owner, asset_reference),
            owner=owner,
            price=price,
            resale_allowed=resale_allowed,
            max_markup_percent=markup,
            original_price=price,
            is_listed=False,
            asset_reference=asset_reference,
        )
        with _logged("issue", record.key.value):
            self._store.create(record)
        logger.info(
            "Issued ticket %s for %s to %s at %s",
            record.key.value,
            asset_reference,
            owner,
            price,
        )
        return record

    def list_ticket(self, ticket_key: str, caller: str, new_price: int) -> TicketRecord:
        """List a ticket for resale, or change the price of an existing listing.

        Raises:
            InvalidTicketKeyError: If the ticket key is malformed.
            TicketNotFoundError: If the ticket does not exist.
            ResaleNotAllowedError: If the ticket was issued without resale rights.
            NotOwnerError: If the caller does not own the ticket.
            InvalidTicketTermsError: If the price is not an unsigned integer.
            ExceedsMaxMarkupError: If the price is above the markup ceiling.
        """
        key = self._parse_key(ticket_key)
        principal = Principal(caller)
        with _logged("list", key.value), self._store.locked(key) as record:
            if not record.resale_allowed:
                raise ResaleNotAllowedError(key.value)
            if record.owner != principal:
                raise NotOwnerError(key.value)
            ceiling = record.markup_ceiling()
            if isinstance(new_price, int) and new_price > ceiling:
                raise ExceedsMaxMarkupError(key.value, ceiling)
            try:
                price = Amount(new_price)
            except ValueError as exc:
                raise InvalidTicketTermsError(str(exc)) from exc

            listed = record.listed_at(price)
            self._store.put(listed)
        logger.info("Listed ticket %s at %s", key.value, price)
        return listed

    def purchase_ticket(self, ticket_key: str, caller: str) -> TicketRecord:
        """Pay the listed price to the owner and take ownership.

        Raises:
            InvalidTicketKeyError: If the ticket key is malformed.
            TicketNotFoundError: If the ticket does not exist.
            TicketNotListedError: If the ticket is not listed for sale.
            InsufficientFundsError: If the caller cannot cover the price.
        """
        key = self._parse_key(ticket_key)
        buyer = Principal(caller)
        with _logged("purchase", key.value), self._store.locked(key) as record:
            if not record.is_listed:
                raise TicketNotListedError(key.value)

            self._ledger.transfer(buyer, record.owner, record.price)
            sold = record.sold_to(buyer)
            self._store.put(sold)
            sale = self._store.record_sale(key, record.owner, buyer, record.price)
        logger.info(
            "Sold ticket %s from %s to %s at %s (sale #%d)",
            key.value,
            sale.seller,
            sale.buyer,
            sale.price,
            sale.sequence,
        )
        return sold

    def get_ticket(self, ticket_key: str) -> TicketRecord:
        """Return a ticket by key.

        Raises:
            InvalidTicketKeyError: If the ticket key is malformed.
            TicketNotFoundError: If the ticket does not exist.
        """
        key = self._parse_key(ticket_key)
        record = self._store.get(key)
        if record is None:
            raise TicketNotFoundError(key.value)
        return record

    def list_listed_tickets(self) -> list[TicketRecord]:
        """Return every ticket currently listed for sale."""
        return self._store.list_listed()

    def list_owned_tickets(self, owner: str) -> list[TicketRecord]:
        return self._store.list_owned_by(Principal(owner))

    def get_sales(self, ticket_key: str) -> list[Sale]:
        """Return a ticket's purchase history, oldest first.

        Raises:
            InvalidTicketKeyError: If the ticket key is malformed.
            TicketNotFoundError: If the ticket does not exist.
        """
        record = self.get_ticket(ticket_key)
        return self._store.sales_for(record.key)

    def get_balance(self, principal: str) -> Amount:
        return self._ledger.balance_of(Principal(principal))

    @staticmethod
    def _parse_key(ticket_key: str) -> TicketKey:
        try:
            return TicketKey.from_string(ticket_key)
        except ValueError as exc:
            raise InvalidTicketKeyError() from exc


@contextmanager
def _logged(operation: str, ticket_key: str) -> Iterator[None]:
    """Log domain rejections of an operation before they propagate."""
    try:
        yield
    except DomainError as exc:
        logger.info("Rejected %s of ticket %s: %s", operation, ticket_key, exc.code.value)
        raise
