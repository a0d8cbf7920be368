"""Domain primitives that enforce validity at creation time."""

import hashlib
import re
from dataclasses import dataclass
from typing import Self

_KEY_PATTERN = re.compile(r"^[0-9a-f]{64}$")

MAX_AMOUNT = 2**63 - 1
MAX_PRINCIPAL_LENGTH = 150
MAX_ASSET_REFERENCE_LENGTH = 255


@dataclass(frozen=True)
class TicketKey:
    """Unique identifier for a TicketRecord."""

    value: str

    def __post_init__(self) -> None:
        if not _KEY_PATTERN.match(self.value):
            raise ValueError("Ticket key must be 64 lowercase hex characters")

    @classmethod
    def derive(cls, issuer: "Principal", asset_reference: str) -> Self:
        """Key a ticket by its issuer and the asset it stands for."""
        seed = b"\x00".join(
            [b"ticket", issuer.value.encode(), asset_reference.encode()]
        )
        return cls(value=hashlib.sha256(seed).hexdigest())

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip().lower())


@dataclass(frozen=True)
class Principal:
    """Authenticated identity that can own tickets and hold a balance."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Principal cannot be empty")
        if len(self.value) > MAX_PRINCIPAL_LENGTH:
            raise ValueError("Principal is too long")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class Amount:
    """Unsigned integer amount of value, in the ledger's smallest unit."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Amount must be an integer")
        if self.value < 0:
            raise ValueError("Amount cannot be negative")
        if self.value > MAX_AMOUNT:
            raise ValueError("Amount is too large")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MarkupPercent:
    """Maximum resale markup over the original price, in whole percent."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Markup percent must be an integer")
        if not 0 <= self.value <= 100:
            raise ValueError("Markup percent must be between 0 and 100")
