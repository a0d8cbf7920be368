"""Cache keys shared by the handlers and the invalidation signals."""

from django.conf import settings
from django.core.cache import cache

LISTED_TICKETS_KEY = "tickets:listed"


def ticket_key(key: str) -> str:
    return f"tickets:{key}"


def timeout() -> int:
    return settings.MARKETPLACE_CACHE_TIMEOUT


def invalidate_ticket(key: str) -> None:
    cache.delete_many([LISTED_TICKETS_KEY, ticket_key(key)])
