from marketplace.stores.interfaces import Ledger, TicketStore
from marketplace.stores.memory_store import InMemoryMarketplace

__all__ = ["Ledger", "TicketStore", "InMemoryMarketplace"]
