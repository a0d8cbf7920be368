from marketplace.handlers.views import (
    BalanceView,
    ListedTicketsView,
    OwnedTicketsView,
    TicketDetailView,
    TicketIssueView,
    TicketListingView,
    TicketPurchaseView,
    TicketSalesView,
)

__all__ = [
    "BalanceView",
    "ListedTicketsView",
    "OwnedTicketsView",
    "TicketDetailView",
    "TicketIssueView",
    "TicketListingView",
    "TicketPurchaseView",
    "TicketSalesView",
]
