"""Django admin configuration for gallery app."""

from typing_extensions import override

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.html import format_html

from server.apps.gallery.logic.image_operations import delete_image
from server.apps.gallery.models import Folder, Image


def _format_bytes(size_bytes: int) -> str:
    """Render a byte count for list columns, e.g. '2.0 KB'."""
    if size_bytes < 1024:
        return f'{size_bytes} B'
    kilobytes = size_bytes / 1024
    if kilobytes < 1024:
        return f'{kilobytes:.1f} KB'
    return f'{kilobytes / 1024:.1f} MB'


@admin.register(Folder)
class FolderAdmin(admin.ModelAdmin[Folder]):
    """Admin interface for Folder model.

    Folders with contents cannot be deleted here either: the admin
    reports the restricting children and images.
    """

    list_display = [
        'name',
        'user',
        'parent_folder',
        'created_at',
    ]

    list_filter = [
        'user',
        'created_at',
    ]

    search_fields = [
        'name',
        'user__username',
    ]

    readonly_fields = [
        'user',
        'parent_folder',
        'created_at',
    ]

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[Folder]:
        """Fetch owners and parents in the list query."""
        return super().get_queryset(request).select_related(
            'user',
            'parent_folder',
        )

    @override
    def has_add_permission(self, request: HttpRequest) -> bool:
        """Folders are created through the API only, by their owner."""
        return False


@admin.register(Image)
class ImageAdmin(admin.ModelAdmin[Image]):
    """Admin interface for Image model.

    Deletion goes through ``delete_image`` so the blob is removed
    before the record, as in the API.
    """

    list_display = [
        'name',
        'user',
        'folder',
        'preview_link',
        'size_display',
        'content_type',
        'created_at',
    ]

    list_filter = [
        'content_type',
        'created_at',
        'user',
    ]

    search_fields = [
        'name',
        'storage_key',
        'checksum_sha256',
    ]

    readonly_fields = [
        'user',
        'folder',
        'storage_key',
        'url',
        'content_type',
        'size_bytes',
        'checksum_sha256',
        'created_at',
    ]

    fieldsets = (
        ('Image Information', {
            'fields': ('name', 'user', 'folder'),
        }),
        ('Storage', {
            'fields': ('storage_key', 'url'),
        }),
        ('Metadata', {
            'fields': (
                'content_type',
                'size_bytes',
                'checksum_sha256',
                'created_at',
            ),
        }),
    )

    def preview_link(self, obj: Image) -> str:
        """Link to the public image URL.

        Args:
            obj: Image instance.

        Returns:
            HTML anchor to the image.
        """
        return format_html(
            '<a href="{url}" target="_blank">{filename}</a>',
            url=obj.url,
            filename=obj.get_filename(),
        )
    preview_link.short_description = 'File'  # type: ignore[attr-defined]

    def size_display(self, obj: Image) -> str:
        """Display image size in human-readable format.

        Args:
            obj: Image instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[Image]:
        """Fetch owners and folders in the list query.

        Args:
            request: HTTP request.

        Returns:
            Image QuerySet joined with users and folders.
        """
        return super().get_queryset(request).select_related('user', 'folder')

    @override
    def has_add_permission(self, request: HttpRequest) -> bool:
        """Disable adding images via admin.

        Args:
            request: HTTP request.

        Returns:
            False, an image record only exists for an uploaded blob.
        """
        return False

    @override
    def delete_model(self, request: HttpRequest, obj: Image) -> None:
        """Delete blob first, then the record.

        Args:
            request: HTTP request.
            obj: Image to delete.
        """
        delete_image(obj.user, obj.id)

    @override
    def delete_queryset(
        self,
        request: HttpRequest,
        queryset: QuerySet[Image],
    ) -> None:
        """Delete each selected image blob first, then its record.

        Args:
            request: HTTP request.
            queryset: Images to delete.
        """
        for image in queryset.select_related('user'):
            delete_image(image.user, image.id)
