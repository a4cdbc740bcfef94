"""Metadata extraction utilities for images."""

import hashlib
import mimetypes
import os
import uuid
from pathlib import Path
from typing import BinaryIO, Final

from django.core.exceptions import SuspiciousFileOperation, ValidationError
from django.utils.text import get_valid_filename

_READ_SIZE: Final = 64 * 1024
_DEFAULT_CONTENT_TYPE: Final = 'application/octet-stream'
_FALLBACK_FILENAME: Final = 'upload'

# Folder segment of storage keys for images at the root
ROOT_KEY_SEGMENT: Final = 'root'


def detect_content_type(filename: str, declared: str | None = None) -> str:
    """Pick the content type to store an image blob with.

    The type declared by the client wins, otherwise it is guessed
    from the filename extension.

    Args:
        filename: Original filename with extension.
        declared: Content type sent by the client, if any.

    Returns:
        MIME type string (e.g., 'image/jpeg').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    if declared:
        return declared
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_CONTENT_TYPE
    return mime_type


def calculate_checksum(file_obj: BinaryIO) -> str:
    """Compute the SHA256 digest stored with an image record.

    The file is read from the start in fixed-size blocks and left
    rewound, ready for the upload.

    Args:
        file_obj: Uploaded image.

    Returns:
        Hex-encoded digest.
    """
    digest = hashlib.sha256()
    file_obj.seek(0)
    while block := file_obj.read(_READ_SIZE):
        digest.update(block)
    file_obj.seek(0)
    return digest.hexdigest()


def get_file_size(file_obj: BinaryIO) -> int:
    """Size of an upload in bytes.

    Django uploads know their size, plain streams are measured by
    seeking to the end.

    Args:
        file_obj: Uploaded image.

    Returns:
        Size in bytes.
    """
    size = getattr(file_obj, 'size', None)
    if size is not None:
        return size
    size = file_obj.seek(0, os.SEEK_END)
    file_obj.seek(0)
    return size


def safe_filename(original: str) -> str:
    """Reduce a client filename to a safe last key segment.

    Drops directories, replaces spaces and strips characters that
    are not alphanumerics, dashes, underscores or dots.

    Args:
        original: Filename as sent by the client.

    Returns:
        Safe filename (e.g., 'my photo.jpg' -> 'my_photo.jpg').
    """
    name = Path(original.replace('\\', '/')).name
    try:
        return get_valid_filename(name)
    except SuspiciousFileOperation:
        return _FALLBACK_FILENAME


def build_storage_key(
    user_id: int,
    folder_id: int | None,
    filename: str,
) -> str:
    """Build a unique storage key for a new image blob.

    Keys are namespaced per user and folder so blobs can be traced
    back to their owner: {user_id}/{folder_id|root}/{uuid4}-{filename}

    Args:
        user_id: Owner's user ID.
        folder_id: Target folder ID, None for root.
        filename: Original filename.

    Returns:
        Storage key.
    """
    folder_segment = ROOT_KEY_SEGMENT if folder_id is None else str(folder_id)
    return '{user_id}/{folder}/{unique}-{filename}'.format(
        user_id=user_id,
        folder=folder_segment,
        unique=uuid.uuid4(),
        filename=safe_filename(filename),
    )


def validate_storage_key(user_id: int, storage_key: str) -> None:
    """Validate storage key follows user isolation rules.

    Ensures the storage key starts with the user's ID to maintain
    multi-user isolation.

    Args:
        user_id: Owner's user ID.
        storage_key: Proposed storage key.

    Raises:
        ValidationError: If key doesn't start with user_id or is invalid.
    """
    if not storage_key:
        raise ValidationError('Storage key cannot be empty')

    first_component = storage_key.split('/', 1)[0]
    try:
        key_user_id = int(first_component)
    except ValueError as error:
        raise ValidationError(
            'Storage key must start with user ID',
        ) from error

    if key_user_id != user_id:
        raise ValidationError(
            f'Storage key user ID ({key_user_id}) does not match '
            f'owner ({user_id})',
        )
