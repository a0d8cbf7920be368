from marketplace.domain.models import Sale, TicketRecord
from marketplace.domain.value_objects import Amount, MarkupPercent, Principal, TicketKey

__all__ = [
    "TicketRecord",
    "Sale",
    "TicketKey",
    "Principal",
    "Amount",
    "MarkupPercent",
]
