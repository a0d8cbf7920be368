"""Django signals for cache invalidation.

Caches are cleared once the writing transaction commits.
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from marketplace.cache import invalidate_ticket
from marketplace.models import Sale, Ticket


def invalidate_on_commit(key: str, using: str | None) -> None:
    transaction.on_commit(lambda: invalidate_ticket(key), using=using)


@receiver([post_save, post_delete], sender=Ticket)
def invalidate_ticket_cache(sender, instance, using=None, **kwargs):
    """Invalidate caches when a ticket is saved or deleted."""
    invalidate_on_commit(instance.pk, using)


@receiver(post_delete, sender=Sale)
def invalidate_sale_ticket_cache(sender, instance, using=None, **kwargs):
    """Invalidate the parent ticket's caches when a sale is removed."""
    invalidate_on_commit(instance.ticket_id, using)
