"""Database models for gallery app."""

from typing import ClassVar, Final, final

from typing_extensions import override

from django.conf import settings
from django.db import models

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_STORAGE_KEY_MAX_LENGTH: Final = 1024  # S3 object key limit
_URL_MAX_LENGTH: Final = 2048
_CONTENT_TYPE_MAX_LENGTH: Final = 255
_CHECKSUM_MAX_LENGTH: Final = 64  # SHA256 hex length


@final
class Folder(models.Model):
    """Named container of images, owned by one user.

    ``parent_folder`` is null for root-level folders. Child folders and
    images reference their folder with ``RESTRICT``: a folder that still
    has contents cannot be deleted, unless the whole owner is deleted
    (then everything cascades through ``user``).

    Folder names are not unique among siblings.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='folders',
        db_index=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    parent_folder = models.ForeignKey(
        'self',
        on_delete=models.RESTRICT,
        related_name='children',
        null=True,
        blank=True,
        help_text='Containing folder, empty for root',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Folder'  # type: ignore[mutable-override]
        verbose_name_plural = 'Folders'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['name', 'id']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize folder listing by parent
            models.Index(
                fields=['user', 'parent_folder'],
                name='gallery_folder_parent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}:{self.name}'

    def is_root_level(self) -> bool:
        """Check if folder sits at the root of the tree.

        Returns:
            True if the folder has no parent.
        """
        return self.parent_folder_id is None


@final
class Image(models.Model):
    """Named reference to an image blob in S3-compatible storage.

    ``storage_key`` addresses the blob for deletion, ``url`` is the
    public URL computed at upload time. ``folder`` is null for images
    at the root.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='images',
        db_index=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        help_text='Display name, searchable',
    )

    folder = models.ForeignKey(
        Folder,
        on_delete=models.RESTRICT,
        related_name='images',
        null=True,
        blank=True,
        help_text='Containing folder, empty for root',
    )

    storage_key = models.CharField(
        max_length=_STORAGE_KEY_MAX_LENGTH,
        unique=True,
        help_text='Key in storage: {user_id}/{folder_id|root}/{uuid}-{file}',
    )

    url = models.URLField(
        max_length=_URL_MAX_LENGTH,
        help_text='Public URL of the blob',
    )

    # Blob metadata (cached at upload)
    content_type = models.CharField(
        max_length=_CONTENT_TYPE_MAX_LENGTH,
    )

    size_bytes = models.BigIntegerField(
        help_text='Blob size in bytes',
    )

    checksum_sha256 = models.CharField(
        max_length=_CHECKSUM_MAX_LENGTH,
        help_text='SHA256 hash for integrity verification',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Image'  # type: ignore[mutable-override]
        verbose_name_plural = 'Images'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at', '-id']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize image listing by folder
            models.Index(
                fields=['user', 'folder'],
                name='gallery_image_folder_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user.username}:{self.name}'

    def get_filename(self) -> str:
        """Extract the uploaded filename from the storage key.

        Example: '1/root/<uuid>-beach.jpg' -> 'beach.jpg'

        Returns:
            Filename without path and unique prefix.
        """
        last_part = self.storage_key.rsplit('/', 1)[-1]
        # uuid4 string is 36 chars, followed by '-'
        return last_part[37:] or last_part
