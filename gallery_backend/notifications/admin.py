from django.contrib import admin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("type", "recipient", "sender", "is_read", "created_at")
    list_filter = ("type", "is_read")
    search_fields = ("content", "recipient__username", "sender__username")
