from django.contrib import admin

from marketplace.models import Account, Sale, Ticket


class SaleInline(admin.TabularInline):
    model = Sale
    extra = 0
    readonly_fields = ["sequence", "seller", "buyer", "price", "created_at"]
    can_delete = False


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["asset_reference", "owner", "price", "is_listed", "created_at"]
    list_filter = ["is_listed", "resale_allowed"]
    search_fields = ["key", "owner", "asset_reference"]
    readonly_fields = ["key", "original_price", "created_at", "updated_at"]
    inlines = [SaleInline]

    def has_add_permission(self, request) -> bool:
        return False


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ["ticket", "sequence", "seller", "buyer", "price", "created_at"]
    search_fields = ["seller", "buyer"]

    def has_add_permission(self, request) -> bool:
        return False


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ["principal", "balance", "updated_at"]
    search_fields = ["principal"]
