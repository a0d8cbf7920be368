"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from marketplace.services import MarketplaceService
from marketplace.stores import InMemoryMarketplace

ISSUER = "alice"
BUYER = "bob"
SECOND_BUYER = "carol"
BYSTANDER = "dave"


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def marketplace() -> InMemoryMarketplace:
    return InMemoryMarketplace(
        balances={ISSUER: 0, BUYER: 500, SECOND_BUYER: 500, BYSTANDER: 1_000}
    )


@pytest.fixture
def service(marketplace: InMemoryMarketplace) -> MarketplaceService:
    return MarketplaceService(marketplace, marketplace)


@pytest.fixture
def ticket(service: MarketplaceService):
    """Resalable ticket issued by alice at 100 with a 20% markup cap."""
    return service.issue_ticket(
        issuer=ISSUER,
        initial_price=100,
        resale_allowed=True,
        max_markup_percent=20,
        asset_reference="evt-1",
    )
