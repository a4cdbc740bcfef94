"""Shared fixtures for gallery app tests."""

from io import BytesIO

import pytest
from botocore.exceptions import ClientError
from django.conf import settings as django_settings
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image as PILImage
from storages.backends.s3 import S3Storage

from server.apps.gallery.infrastructure.storage import ImageStorage
from server.apps.gallery.models import Folder, Image


def make_png(color: str = 'red') -> bytes:
    """Render a tiny PNG image.

    Args:
        color: Fill color.

    Returns:
        PNG file bytes.
    """
    buffer = BytesIO()
    PILImage.new('RGB', (4, 4), color=color).save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    """Bytes of a valid PNG image.

    Returns:
        PNG file bytes.
    """
    return make_png()


@pytest.fixture
def png_upload(png_bytes):
    """Uploaded PNG file, as Django hands it to views.

    Returns:
        SimpleUploadedFile with PNG content.
    """
    return SimpleUploadedFile(
        'beach.png',
        png_bytes,
        content_type='image/png',
    )


@pytest.fixture
def broken_storage(mock_s3):
    """Storage pointing at a bucket that does not exist.

    Every upload through it fails, like an unreachable storage
    service would.

    Returns:
        ImageStorage instance.
    """
    options = {
        **django_settings.STORAGES['default']['OPTIONS'],
        'bucket_name': 'missing-bucket',
    }
    return ImageStorage(**options)


@pytest.fixture
def folder(user):
    """Root-level folder of the test user.

    Returns:
        Folder instance.
    """
    return Folder.objects.create(user=user, name='Vacation')


@pytest.fixture
def subfolder(user, folder):
    """Folder nested under ``folder``.

    Returns:
        Folder instance.
    """
    return Folder.objects.create(
        user=user,
        name='Beach',
        parent_folder=folder,
    )


@pytest.fixture
def foreign_folder(other_user):
    """Folder owned by the other user.

    Returns:
        Folder instance.
    """
    return Folder.objects.create(user=other_user, name='Private')


@pytest.fixture
def failing_blob_delete(monkeypatch, mock_s3):
    """Make every S3 object delete fail with AccessDenied.

    Deletes of missing keys succeed on S3, so the failure is injected
    under ``ImageStorage`` instead of pointing at a missing bucket.
    """
    def delete(self, name):
        raise ClientError(
            {
                'Error': {'Code': 'AccessDenied', 'Message': 'Access Denied'},
                'ResponseMetadata': {'HTTPStatusCode': 403},
            },
            'DeleteObject',
        )

    monkeypatch.setattr(S3Storage, 'delete', delete)


@pytest.fixture
def image_factory(db):
    """Create Image records without touching storage.

    Returns:
        Function creating an Image for a user.
    """
    def factory(user, name, folder=None, key=None):
        storage_key = key or f'{user.id}/{folder.id if folder else "root"}/{name}'
        return Image.objects.create(
            user=user,
            name=name,
            folder=folder,
            storage_key=storage_key,
            url=f'https://image-drive.s3.amazonaws.com/{storage_key}',
            content_type='image/png',
            size_bytes=68,
            checksum_sha256='0' * 64,
        )
    return factory
