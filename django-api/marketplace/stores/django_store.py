"""Django ORM implementation of the TicketStore and Ledger."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from django.db import IntegrityError, transaction

from marketplace.domain import (
    Amount,
    MarkupPercent,
    Principal,
    Sale,
    TicketKey,
    TicketRecord,
)
from marketplace.domain.errors import (
    DuplicateRecordError,
    InsufficientFundsError,
    TicketNotFoundError,
)
from marketplace.models import Account, Ticket
from marketplace.models import Sale as SaleRow
from marketplace.stores.interfaces import Ledger, TicketStore

logger = logging.getLogger(__name__)


class DjangoTicketStore(TicketStore):
    """Database-backed ticket store using Django ORM."""

    def get(self, key: TicketKey) -> TicketRecord | None:
        row = Ticket.objects.filter(pk=key.value).first()
        return None if row is None else _to_record(row)

    def create(self, record: TicketRecord) -> None:
        try:
            with transaction.atomic():
                Ticket.objects.create(
                    key=record.key.value,
                    owner=record.owner.value,
                    price=record.price.value,
                    resale_allowed=record.resale_allowed,
                    max_markup_percent=record.max_markup_percent.value,
                    original_price=record.original_price.value,
                    is_listed=record.is_listed,
                    asset_reference=record.asset_reference,
                )
        except IntegrityError as exc:
            raise DuplicateRecordError(record.key.value) from exc

    def put(self, record: TicketRecord) -> None:
        # Only the mutable columns; the rest are fixed at issuance.
        row = Ticket(
            key=record.key.value,
            owner=record.owner.value,
            price=record.price.value,
            is_listed=record.is_listed,
        )
        row.save(update_fields=["owner", "price", "is_listed", "updated_at"])

    @contextmanager
    def locked(self, key: TicketKey) -> Iterator[TicketRecord]:
        with transaction.atomic():
            row = Ticket.objects.select_for_update().filter(pk=key.value).first()
            if row is None:
                raise TicketNotFoundError(key.value)
            yield _to_record(row)

    def list_listed(self) -> list[TicketRecord]:
        rows = Ticket.objects.filter(is_listed=True).order_by("-updated_at")
        return [_to_record(row) for row in rows]

    def list_owned_by(self, owner: Principal) -> list[TicketRecord]:
        rows = Ticket.objects.filter(owner=owner.value).order_by("-created_at")
        return [_to_record(row) for row in rows]

    def record_sale(
        self, key: TicketKey, seller: Principal, buyer: Principal, price: Amount
    ) -> Sale:
        sequence = SaleRow.objects.filter(ticket_id=key.value).count() + 1
        row = SaleRow.objects.create(
            ticket_id=key.value,
            seller=seller.value,
            buyer=buyer.value,
            price=price.value,
            sequence=sequence,
        )
        return _to_sale(row)

    def sales_for(self, key: TicketKey) -> list[Sale]:
        rows = SaleRow.objects.filter(ticket_id=key.value).order_by("sequence")
        return [_to_sale(row) for row in rows]


class DjangoLedger(Ledger):
    """Account balances stored in the database."""

    def balance_of(self, principal: Principal) -> Amount:
        account = Account.objects.filter(principal=principal.value).first()
        return Amount(0 if account is None else account.balance)

    def transfer(self, source: Principal, destination: Principal, amount: Amount) -> None:
        with transaction.atomic():
            # Rows are always locked in principal order.
            accounts = {
                account.principal: account
                for account in Account.objects.select_for_update()
                .filter(principal__in={source.value, destination.value})
                .order_by("principal")
            }
            payer = accounts.get(source.value)
            available = 0 if payer is None else payer.balance
            if available < amount.value:
                raise InsufficientFundsError(source.value, amount.value)
            if amount.value == 0 or source == destination:
                return

            payee = accounts.get(destination.value)
            if payee is None:
                payee, _ = Account.objects.select_for_update().get_or_create(
                    principal=destination.value, defaults={"balance": 0}
                )
            payer.balance -= amount.value
            payee.balance += amount.value
            payer.save(update_fields=["balance", "updated_at"])
            payee.save(update_fields=["balance", "updated_at"])
        logger.debug("Transferred %s from %s to %s", amount, source, destination)


def _to_record(row: Ticket) -> TicketRecord:
    return TicketRecord(
        key=TicketKey(row.key),
        owner=Principal(row.owner),
        price=Amount(row.price),
        resale_allowed=row.resale_allowed,
        max_markup_percent=MarkupPercent(row.max_markup_percent),
        original_price=Amount(row.original_price),
        is_listed=row.is_listed,
        asset_reference=row.asset_reference,
    )


def _to_sale(row: SaleRow) -> Sale:
    return Sale(
        ticket_key=TicketKey(row.ticket_id),
        seller=Principal(row.seller),
        buyer=Principal(row.buyer),
        price=Amount(row.price),
        sequence=row.sequence,
        created_at=row.created_at,
    )
