"""Custom storage backend for image blobs in S3-compatible storage."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import Any, BinaryIO, final

from typing_extensions import override

from django.core.files.base import ContentFile, File
from django.utils.encoding import filepath_to_uri
from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True, slots=True)
class StoredBlob:
    """Result of storing a blob: where it lives and how to reach it."""

    locator: str
    url: str


@final
class ImageStorage(S3Storage):
    """S3 storage backend for user images.

    Extends django-storages S3Storage with:
    - ``store`` returning the blob locator and its public URL
    - Stable public URLs, independent of request signing
    - Undo of uploads whose image record was never created
    - Logging around every bucket write
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Put an image blob into the bucket.

        Args:
            name: Requested storage key.
            content: Django file with the image bytes.
            max_length: Optional limit on the key length.

        Returns:
            Key the blob was written under.

        Raises:
            Exception: Any S3 client error, after logging it.
        """
        logger.info('Storing image blob: %s', name)
        try:
            saved_name = super().save(name, content, max_length)
        except Exception:
            logger.exception('Image blob upload failed: %s', name)
            raise
        logger.info('Image blob stored: %s', saved_name)
        return saved_name

    @override
    def delete(self, name: str) -> None:
        """Remove an image blob from the bucket.

        Missing keys are not an error on S3.

        Args:
            name: Storage key of the blob.

        Raises:
            Exception: Any S3 client error, after logging it.
        """
        logger.info('Removing image blob: %s', name)
        try:
            super().delete(name)
        except Exception:
            logger.exception('Image blob removal failed: %s', name)
            raise
        logger.info('Image blob removed: %s', name)

    def store(
        self,
        name: str,
        content: bytes | BinaryIO | File,
        content_type: str,
    ) -> StoredBlob:
        """Upload a blob with an explicit content type.

        Args:
            name: Storage key for the blob.
            content: Raw bytes, a file-like object or a Django file.
            content_type: MIME type stored as the object's ContentType.

        Returns:
            StoredBlob with the saved key and its public URL.

        Raises:
            Exception: If S3 upload fails.
        """
        if isinstance(content, bytes):
            content = ContentFile(content, name=name)
        elif not isinstance(content, File):
            content = File(content, name=name)
        # S3Storage picks ContentType from this attribute
        content.content_type = content_type

        saved_name = self.save(name, content)
        return StoredBlob(locator=saved_name, url=self.public_url(saved_name))

    def public_url(self, name: str) -> str:
        """Build the public URL of a blob.

        The URL only depends on the bucket (or custom domain) and the
        key, so stored URLs stay valid as long as those do.

        Args:
            name: Storage key.

        Returns:
            URL like https://{bucket}.s3.amazonaws.com/{key}.
        """
        domain = self.custom_domain or f'{self.bucket_name}.s3.amazonaws.com'
        return f'https://{domain}/{filepath_to_uri(name)}'

    def iter_objects(
        self,
        prefix: str = '',
    ) -> Iterator[tuple[str, datetime]]:
        """Iterate over all objects under a prefix.

        Args:
            prefix: Key prefix, empty for the whole bucket.

        Yields:
            (key, last_modified) pairs, in S3 listing order.
        """
        for s3_object in self.bucket.objects.filter(Prefix=prefix):
            yield s3_object.key, s3_object.last_modified

    def rollback_upload(self, name: str) -> None:
        """Undo an upload whose image record could not be created.

        Never raises: the caller is already handling the record
        failure. A blob that cannot be removed here stays unreferenced
        until ``cleanup_orphaned_blobs`` reclaims it.

        Args:
            name: Storage key of the uploaded blob.
        """
        logger.warning('Undoing upload of %s', name)
        try:
            self.delete(name)
        except Exception:
            logger.exception('Upload undo failed, orphaned blob: %s', name)
