"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models


class Ticket(models.Model):
    """Persistence model for minted tickets."""

    key = models.CharField(primary_key=True, max_length=64, editable=False)
    owner = models.CharField(max_length=150)
    price = models.PositiveBigIntegerField()
    resale_allowed = models.BooleanField()
    max_markup_percent = models.PositiveSmallIntegerField()
    original_price = models.PositiveBigIntegerField(editable=False)
    is_listed = models.BooleanField(default=False)
    asset_reference = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner"], name="ticket_owner_idx"),
            models.Index(fields=["is_listed", "-updated_at"], name="ticket_listed_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.asset_reference} ({self.owner})"


class Sale(models.Model):
    """Persistence model for completed ticket purchases."""

    ticket = models.ForeignKey(Ticket, on_delete=models.CASCADE, related_name="sales")
    seller = models.CharField(max_length=150)
    buyer = models.CharField(max_length=150)
    price = models.PositiveBigIntegerField()
    sequence = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sequence"]
        constraints = [
            models.UniqueConstraint(
                fields=["ticket", "sequence"], name="unique_sale_sequence"
            ),
        ]

    def __str__(self) -> str:
        return f"#{self.sequence} {self.seller} -> {self.buyer} for {self.price}"


class Account(models.Model):
    """Persistence model for principal balances."""

    principal = models.CharField(max_length=150, unique=True)
    balance = models.PositiveBigIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["principal"]

    def __str__(self) -> str:
        return f"{self.principal}: {self.balance}"
