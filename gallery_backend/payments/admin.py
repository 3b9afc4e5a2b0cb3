from django.contrib import admin

from payments.models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "artwork_title", "buyer", "amount_cents", "currency", "status", "created_at")
    list_filter = ("status", "provider")
    search_fields = ("session_id", "artwork_title", "buyer__email")
    readonly_fields = ("provider_payload", "created_at", "updated_at", "paid_at")
