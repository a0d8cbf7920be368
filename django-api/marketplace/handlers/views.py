"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details

The caller principal always comes from the authenticated request user,
never from the request body.
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from marketplace import cache as cache_keys
from marketplace.domain import TicketKey
from marketplace.domain.errors import DomainError, ErrorCode, InvalidTicketKeyError
from marketplace.handlers.serializers import (
    IssueTicketSerializer,
    ListingSerializer,
    SaleSerializer,
    TicketSerializer,
)
from marketplace.services import MarketplaceService
from marketplace.stores.django_store import DjangoLedger, DjangoTicketStore

ERROR_STATUS = {
    ErrorCode.INVALID_TICKET_KEY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TICKET_TERMS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INSUFFICIENT_FUNDS: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.NOT_OWNER: status.HTTP_403_FORBIDDEN,
    ErrorCode.RECORD_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_RECORD: status.HTTP_409_CONFLICT,
    ErrorCode.RESALE_NOT_ALLOWED: status.HTTP_409_CONFLICT,
    ErrorCode.TICKET_NOT_LISTED: status.HTTP_409_CONFLICT,
    ErrorCode.EXCEEDS_MAX_MARKUP: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def get_marketplace_service() -> MarketplaceService:
    return MarketplaceService(DjangoTicketStore(), DjangoLedger())


def error_response(error: DomainError) -> Response:
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=ERROR_STATUS[error.code],
    )


def invalid_request(errors: dict) -> Response:
    return Response(
        {
            "error": {
                "code": "INVALID_REQUEST",
                "message": "Invalid request body",
                "fields": errors,
            }
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class MarketplaceView(APIView):
    """Base handler wiring the service and the authenticated principal."""

    permission_classes = [IsAuthenticated]

    def service(self) -> MarketplaceService:
        return get_marketplace_service()

    @staticmethod
    def principal(request: Request) -> str:
        return request.user.get_username()


class TicketIssueView(MarketplaceView):
    """Handler for POST /api/tickets"""

    def post(self, request: Request) -> Response:
        serializer = IssueTicketSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)
        try:
            record = self.service().issue_ticket(
                issuer=self.principal(request), **serializer.validated_data
            )
        except DomainError as error:
            return error_response(error)
        return Response(TicketSerializer(record).data, status=status.HTTP_201_CREATED)


class TicketDetailView(MarketplaceView):
    """Handler for GET /api/tickets/{key}"""

    def get(self, request: Request, ticket_key: str) -> Response:
        try:
            key = TicketKey.from_string(ticket_key)
        except ValueError:
            return error_response(InvalidTicketKeyError())
        cached = cache.get(cache_keys.ticket_key(key.value))
        if cached is not None:
            return Response(cached)
        try:
            record = self.service().get_ticket(key.value)
        except DomainError as error:
            return error_response(error)
        data = TicketSerializer(record).data
        cache.set(cache_keys.ticket_key(key.value), data, cache_keys.timeout())
        return Response(data)


class TicketListingView(MarketplaceView):
    """Handler for POST /api/tickets/{key}/listing"""

    def post(self, request: Request, ticket_key: str) -> Response:
        serializer = ListingSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_request(serializer.errors)
        try:
            record = self.service().list_ticket(
                ticket_key,
                caller=self.principal(request),
                new_price=serializer.validated_data["new_price"],
            )
        except DomainError as error:
            return error_response(error)
        return Response(TicketSerializer(record).data)


class TicketPurchaseView(MarketplaceView):
    """Handler for POST /api/tickets/{key}/purchase"""

    def post(self, request: Request, ticket_key: str) -> Response:
        try:
            record = self.service().purchase_ticket(
                ticket_key, caller=self.principal(request)
            )
        except DomainError as error:
            return error_response(error)
        return Response(TicketSerializer(record).data)


class TicketSalesView(MarketplaceView):
    """Handler for GET /api/tickets/{key}/sales"""

    def get(self, request: Request, ticket_key: str) -> Response:
        try:
            sales = self.service().get_sales(ticket_key)
        except DomainError as error:
            return error_response(error)
        return Response(SaleSerializer(sales, many=True).data)


class ListedTicketsView(MarketplaceView):
    """Handler for GET /api/marketplace"""

    def get(self, request: Request) -> Response:
        data = cache.get(cache_keys.LISTED_TICKETS_KEY)
        if data is None:
            records = self.service().list_listed_tickets()
            data = TicketSerializer(records, many=True).data
            cache.set(cache_keys.LISTED_TICKETS_KEY, data, cache_keys.timeout())
        return Response(data)


class OwnedTicketsView(MarketplaceView):
    """Handler for GET /api/me/tickets"""

    def get(self, request: Request) -> Response:
        records = self.service().list_owned_tickets(self.principal(request))
        return Response(TicketSerializer(records, many=True).data)


class BalanceView(MarketplaceView):
    """Handler for GET /api/me/balance"""

    def get(self, request: Request) -> Response:
        principal = self.principal(request)
        balance = self.service().get_balance(principal)
        return Response({"principal": principal, "balance": balance.value})
