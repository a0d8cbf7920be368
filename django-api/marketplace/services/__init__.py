from marketplace.services.marketplace_service import MarketplaceService

__all__ = ["MarketplaceService"]
