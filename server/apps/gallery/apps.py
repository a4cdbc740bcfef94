"""Django app configuration for gallery app."""

from django.apps import AppConfig


class GalleryConfig(AppConfig):
    """Configuration for gallery app (folders and images)."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.gallery'
    verbose_name = 'Gallery'
