"""Django storage configuration for S3-compatible backends.

This module configures django-storages to work with:
- MinIO for local development
- AWS S3 for production

Uploaded images go to the ``default`` storage, which is the
``ImageStorage`` backend. Public image URLs are derived from the
bucket name (or ``AWS_S3_CUSTOM_DOMAIN``) and the storage key.
"""

from typing import Any, Final

from botocore.config import Config

from server.settings.components import config


def _blank_as_none(setting_value: str | None) -> str | None:
    return setting_value or None


# Storage calls must never hang a request: fail fast, no implicit retries
STORAGE_TIMEOUT_SECONDS: Final = config(
    'STORAGE_TIMEOUT_SECONDS',
    cast=int,
    default=5,
)
STORAGE_MAX_ATTEMPTS: Final = config(
    'STORAGE_MAX_ATTEMPTS',
    cast=int,
    default=1,
)

# Storage configuration dictionary
# Uses S3-compatible storage for images, local storage for static files
STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.gallery.infrastructure.storage.ImageStorage',
        'OPTIONS': {
            'bucket_name': config(
                'AWS_STORAGE_BUCKET_NAME',
                default='image-drive',
            ),
            'access_key': config('AWS_ACCESS_KEY_ID', default='minioadmin'),
            'secret_key': config(
                'AWS_SECRET_ACCESS_KEY',
                default='minioadmin',
            ),
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                cast=_blank_as_none,
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='us-east-1',
            ),
            'custom_domain': config(
                'AWS_S3_CUSTOM_DOMAIN',
                cast=_blank_as_none,
                default=None,
            ),
            'default_acl': config(
                'AWS_DEFAULT_ACL',
                cast=_blank_as_none,
                default=None,
            ),
            'querystring_auth': False,  # Image URLs are public and stable
            'file_overwrite': False,  # Prevent accidental overwrites
            'client_config': Config(
                connect_timeout=STORAGE_TIMEOUT_SECONDS,
                read_timeout=STORAGE_TIMEOUT_SECONDS,
                retries={
                    'max_attempts': STORAGE_MAX_ATTEMPTS,
                    'mode': 'standard',
                },
            ),
        },
    },
    'staticfiles': {
        # Keep static files separate from user images
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
