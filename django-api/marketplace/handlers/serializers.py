"""Serializers for request validation and domain model responses."""

from rest_framework import serializers

from marketplace.domain.value_objects import MAX_AMOUNT, MAX_ASSET_REFERENCE_LENGTH


class IssueTicketSerializer(serializers.Serializer):
    """Request body for POST /api/tickets."""

    initial_price = serializers.IntegerField(min_value=0, max_value=MAX_AMOUNT)
    resale_allowed = serializers.BooleanField()
    max_markup_percent = serializers.IntegerField(min_value=0, max_value=100)
    asset_reference = serializers.CharField(max_length=MAX_ASSET_REFERENCE_LENGTH)


class ListingSerializer(serializers.Serializer):
    """Request body for POST /api/tickets/{key}/listing."""

    new_price = serializers.IntegerField(min_value=0)


class TicketSerializer(serializers.Serializer):
    """Serializer for TicketRecord domain model."""

    key = serializers.CharField(source="key.value")
    owner = serializers.CharField(source="owner.value")
    price = serializers.IntegerField(source="price.value")
    resale_allowed = serializers.BooleanField()
    max_markup_percent = serializers.IntegerField(source="max_markup_percent.value")
    original_price = serializers.IntegerField(source="original_price.value")
    is_listed = serializers.BooleanField()
    asset_reference = serializers.CharField()
    markup_ceiling = serializers.IntegerField()


class SaleSerializer(serializers.Serializer):
    """Serializer for Sale domain model."""

    sequence = serializers.IntegerField()
    seller = serializers.CharField(source="seller.value")
    buyer = serializers.CharField(source="buyer.value")
    price = serializers.IntegerField(source="price.value")
    created_at = serializers.DateTimeField()
