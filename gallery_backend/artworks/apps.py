# artworks/apps.py

from django.apps import AppConfig


class ArtworksConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "artworks"
    verbose_name = "Artworks & Engagement"
