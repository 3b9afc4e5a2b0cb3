# artworks/admin.py

from django.contrib import admin

from artworks.models import Artwork, Comment, Favorite, Like, Tag


@admin.register(Artwork)
class ArtworkAdmin(admin.ModelAdmin):
    list_display = ("title", "artist", "category", "year", "price", "is_for_sale", "likes", "views")
    list_filter = ("category", "is_for_sale", "year")
    search_fields = ("title", "description", "artist__username")
    filter_horizontal = ("tags",)
    readonly_fields = ("likes", "views", "created_at", "updated_at")


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    search_fields = ("name",)


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("artwork", "user", "created_at")
    search_fields = ("text", "user__username")


admin.site.register(Like)
admin.site.register(Favorite)
