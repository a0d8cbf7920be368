"""Domain error codes for the marketplace module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    DUPLICATE_RECORD = "DUPLICATE_RECORD"
    RESALE_NOT_ALLOWED = "RESALE_NOT_ALLOWED"
    NOT_OWNER = "NOT_OWNER"
    EXCEEDS_MAX_MARKUP = "EXCEEDS_MAX_MARKUP"
    TICKET_NOT_LISTED = "TICKET_NOT_LISTED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    INVALID_TICKET_KEY = "INVALID_TICKET_KEY"
    INVALID_TICKET_TERMS = "INVALID_TICKET_TERMS"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class DuplicateRecordError(DomainError):
    """Raised when a ticket already exists at the issued key."""

    def __init__(self, ticket_key: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_RECORD,
            message="Ticket already issued for this asset",
        )
        self.ticket_key = ticket_key


class ResaleNotAllowedError(DomainError):
    """Raised when listing a ticket that was issued without resale rights."""

    def __init__(self, ticket_key: str) -> None:
        super().__init__(
            code=ErrorCode.RESALE_NOT_ALLOWED,
            message="Ticket resale is not allowed",
        )
        self.ticket_key = ticket_key


class NotOwnerError(DomainError):
    """Raised when someone other than the owner tries to list a ticket."""

    def __init__(self, ticket_key: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_OWNER,
            message="You are not the ticket owner",
        )
        self.ticket_key = ticket_key


class ExceedsMaxMarkupError(DomainError):
    """Raised when a listing price is above the markup ceiling."""

    def __init__(self, ticket_key: str, ceiling: int) -> None:
        super().__init__(
            code=ErrorCode.EXCEEDS_MAX_MARKUP,
            message=f"Price exceeds allowed markup, maximum is {ceiling}",
        )
        self.ticket_key = ticket_key
        self.ceiling = ceiling


class TicketNotListedError(DomainError):
    """Raised when purchasing a ticket that is not listed for sale."""

    def __init__(self, ticket_key: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_LISTED,
            message="Ticket is not listed for sale",
        )
        self.ticket_key = ticket_key


class InsufficientFundsError(DomainError):
    """Raised when the buyer's balance does not cover the price."""

    def __init__(self, principal: str, required: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_FUNDS,
            message="Insufficient funds",
        )
        self.principal = principal
        self.required = required


class TicketNotFoundError(DomainError):
    """Raised when a ticket is not found."""

    def __init__(self, ticket_key: str) -> None:
        super().__init__(
            code=ErrorCode.RECORD_NOT_FOUND,
            message="Ticket not found",
        )
        self.ticket_key = ticket_key


class InvalidTicketKeyError(DomainError):
    """Raised when a ticket key is malformed."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TICKET_KEY,
            message="Invalid ticket key format",
        )


class InvalidTicketTermsError(DomainError):
    """Raised when a price, markup or asset reference is out of range."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TICKET_TERMS,
            message=detail,
        )
