"""Business logic for image operations."""

import logging
from typing import TYPE_CHECKING, Any, BinaryIO

from django.core.files.base import File as DjangoFile
from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models import QuerySet

from server.apps.gallery.exceptions import (
    DeleteFailedError,
    ImageNotFoundError,
    InvalidFolderError,
    UploadFailedError,
)
from server.apps.gallery.infrastructure.metadata import (
    build_storage_key,
    calculate_checksum,
    detect_content_type,
    get_file_size,
    validate_storage_key,
)
from server.apps.gallery.models import Folder, Image

if TYPE_CHECKING:
    from server.apps.gallery.infrastructure.storage import ImageStorage

# User type for Django's dynamic user model
_User = Any

logger = logging.getLogger(__name__)


def _get_storage() -> 'ImageStorage':
    """Get the configured default storage backend.

    Returns:
        ImageStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def _owned_folder_exists(
    user: _User,
    folder_id: int,
    *,
    lock: bool = False,
) -> bool:
    folders = Folder.objects.filter(id=folder_id, user=user)
    if lock:
        folders = folders.select_for_update()
    return folders.exists()


def get_image(user: _User, image_id: int) -> Image:
    """Get an image owned by the user.

    Args:
        user: Image owner.
        image_id: ID of the image.

    Returns:
        Image instance.

    Raises:
        ImageNotFoundError: If no such image is owned by the user.
    """
    try:
        return Image.objects.get(id=image_id, user=user)
    except Image.DoesNotExist as error:
        raise ImageNotFoundError(image_id) from error


def list_images(user: _User, folder_id: int | None = None) -> QuerySet[Image]:
    """List images directly inside a folder.

    Args:
        user: Image owner.
        folder_id: Folder ID. None lists the root-level images only
            (images with no folder), not every image.

    Returns:
        QuerySet of Image objects.
    """
    logger.debug(
        'Listing images for user %s in folder %s',
        user.username,
        folder_id,
    )
    return Image.objects.filter(user=user, folder_id=folder_id)


def upload_image(  # noqa: WPS211
    user: _User,
    name: str,
    file_obj: BinaryIO | DjangoFile,
    filename: str,
    content_type: str | None = None,
    folder_id: int | None = None,
    storage: 'ImageStorage | None' = None,
) -> Image:
    """Upload image blob to storage and create database record.

    Transaction safety: Upload to storage first, then create DB record.
    If storage upload fails, no record is created. If the DB transaction
    fails, the uploaded blob is deleted from storage (rollback).

    The target folder is checked before the upload and again, under a
    row lock, right before the record is created.

    Args:
        user: Owner of the image.
        name: Display name of the image.
        file_obj: File-like object to upload.
        filename: Original filename, part of the storage key.
        content_type: Declared MIME type, guessed from filename if None.
        folder_id: Target folder ID, None for root.
        storage: Storage backend, defaults to the configured one.

    Returns:
        Created Image instance.

    Raises:
        InvalidFolderError: If the folder is missing or not owned by user.
        UploadFailedError: If the storage upload fails.
    """
    if folder_id is not None and not _owned_folder_exists(user, folder_id):
        logger.warning(
            'Invalid upload folder %d for user %s',
            folder_id,
            user.username,
        )
        raise InvalidFolderError(folder_id)

    storage = storage or _get_storage()
    storage_key = build_storage_key(user.id, folder_id, filename)
    validate_storage_key(user.id, storage_key)

    # Calculate metadata
    logger.info('Calculating metadata for image: %s', storage_key)
    checksum = calculate_checksum(file_obj)
    size_bytes = get_file_size(file_obj)
    mime_type = detect_content_type(filename, content_type)

    # Step 1: Upload to storage first
    try:
        stored = storage.store(storage_key, file_obj, mime_type)
    except Exception as error:
        raise UploadFailedError() from error

    # Step 2: Create database record (in transaction)
    try:
        with transaction.atomic():
            if folder_id is not None and not _owned_folder_exists(
                user,
                folder_id,
                lock=True,
            ):
                raise InvalidFolderError(folder_id)

            image = Image.objects.create(
                user=user,
                name=name,
                folder_id=folder_id,
                storage_key=stored.locator,
                url=stored.url,
                content_type=mime_type,
                size_bytes=size_bytes,
                checksum_sha256=checksum,
            )
    except Exception:
        # Rollback: Delete blob from storage since DB transaction failed
        logger.exception(
            'Record creation failed, rolling back storage upload: %s',
            stored.locator,
        )
        storage.rollback_upload(stored.locator)
        raise

    logger.info(
        'Image record created in database: %s (ID: %d)',
        stored.locator,
        image.id,
    )
    return image


def delete_image(
    user: _User,
    image_id: int,
    storage: 'ImageStorage | None' = None,
) -> None:
    """Delete image blob from storage, then its database record.

    Transaction safety: Delete the blob first. If that fails the
    record is kept, so the only reference to the blob is never lost.
    A blob deleted whose record deletion then fails shows up as a
    broken image, which is retried by deleting again (S3 deletes of
    missing keys succeed).

    Args:
        user: Image owner.
        image_id: ID of image to delete.
        storage: Storage backend, defaults to the configured one.

    Raises:
        ImageNotFoundError: If no such image is owned by the user.
        DeleteFailedError: If the storage delete fails.
    """
    try:
        image = get_image(user, image_id)
    except ImageNotFoundError:
        logger.warning(
            'Image not found: ID=%d, user=%s',
            image_id,
            user.username,
        )
        raise

    storage = storage or _get_storage()
    logger.info(
        'Deleting image: ID=%d, key=%s',
        image_id,
        image.storage_key,
    )

    # Step 1: Delete blob from storage
    try:
        storage.delete(image.storage_key)
    except Exception as error:
        raise DeleteFailedError() from error

    # Step 2: Delete database record
    try:
        with transaction.atomic():
            image.delete()
    except Exception:
        logger.exception(
            'Failed to delete image from database after blob delete: ID=%d',
            image_id,
        )
        raise

    logger.info('Image record deleted from database: ID=%d', image_id)
