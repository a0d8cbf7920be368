from django.urls import path

from marketplace.handlers import (
    BalanceView,
    ListedTicketsView,
    OwnedTicketsView,
    TicketDetailView,
    TicketIssueView,
    TicketListingView,
    TicketPurchaseView,
    TicketSalesView,
)

urlpatterns = [
    path("tickets", TicketIssueView.as_view(), name="ticket-issue"),
    path("tickets/<str:ticket_key>", TicketDetailView.as_view(), name="ticket-detail"),
    path(
        "tickets/<str:ticket_key>/listing",
        TicketListingView.as_view(),
        name="ticket-listing",
    ),
    path(
        "tickets/<str:ticket_key>/purchase",
        TicketPurchaseView.as_view(),
        name="ticket-purchase",
    ),
    path(
        "tickets/<str:ticket_key>/sales",
        TicketSalesView.as_view(),
        name="ticket-sales",
    ),
    path("marketplace", ListedTicketsView.as_view(), name="marketplace"),
    path("me/tickets", OwnedTicketsView.as_view(), name="owned-tickets"),
    path("me/balance", BalanceView.as_view(), name="balance"),
]
