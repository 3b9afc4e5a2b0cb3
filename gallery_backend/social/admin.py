from django.contrib import admin

from social.models import Follow


@admin.register(Follow)
class FollowAdmin(admin.ModelAdmin):
    list_display = ("follower", "artist", "created_at")
    search_fields = ("follower__username", "artist__username")
