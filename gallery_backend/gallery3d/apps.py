# gallery3d/apps.py

from django.apps import AppConfig


class Gallery3DConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "gallery3d"
    verbose_name = "3D Gallery"
