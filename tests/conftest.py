"""Fixtures shared by all test packages."""

import boto3
import pytest
from django.conf import settings as django_settings
from django.contrib.auth import get_user_model
from moto import mock_aws

from server.apps.identity.logic.token_manager import issue_token

User = get_user_model()

TEST_PASSWORD = 'testpass123'


@pytest.fixture(autouse=True)
def _fast_password_hasher(settings):
    """Use a cheap password hasher, PBKDF2 makes tests slow."""
    settings.PASSWORD_HASHERS = [
        'django.contrib.auth.hashers.MD5PasswordHasher',
    ]


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='testuser',
        password=TEST_PASSWORD,
        email='test@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='otheruser',
        password=TEST_PASSWORD,
        email='other@example.com',
    )


@pytest.fixture
def bucket_name():
    """Name of the bucket the default storage writes to.

    Returns:
        Bucket name from settings.
    """
    return django_settings.STORAGES['default']['OPTIONS']['bucket_name']


@pytest.fixture
def mock_s3(bucket_name):
    """Mock S3 service with the configured bucket.

    Yields:
        boto3 S3 resource with the bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket=bucket_name)

        yield conn


@pytest.fixture
def bucket_keys(mock_s3, bucket_name):
    """Callable listing keys currently stored in the mocked bucket.

    Returns:
        Function returning a set of keys.
    """
    def factory() -> set[str]:
        return {
            s3_object.key
            for s3_object in mock_s3.Bucket(bucket_name).objects.all()
        }
    return factory


@pytest.fixture
def auth_headers(user):
    """Authorization header with a fresh token of the test user.

    Returns:
        Headers dict for the Django test client.
    """
    issued = issue_token(user)
    return {'Authorization': f'Bearer {issued.token}'}
