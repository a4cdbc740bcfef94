"""Tests for account business logic."""

import pytest
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError

from server.apps.identity.exceptions import (
    InvalidCredentialsError,
    UsernameTakenError,
)
from server.apps.identity.logic.account_operations import (
    register_user,
    verify_credentials,
)

User = get_user_model()

STRONG_PASSWORD = 'correct-horse-battery'


@pytest.mark.django_db
class TestRegisterUser:
    """Tests for register_user."""

    def test_register_user(self):
        """Test user is created with a hashed password."""
        user = register_user('alice', STRONG_PASSWORD, 'alice@example.com')

        assert user.id is not None
        assert user.email == 'alice@example.com'
        assert user.password != STRONG_PASSWORD
        assert user.check_password(STRONG_PASSWORD)

    def test_username_taken(self, user):
        """Test duplicate usernames are rejected."""
        with pytest.raises(UsernameTakenError):
            register_user(user.username, STRONG_PASSWORD, 'x@example.com')

        assert User.objects.filter(username=user.username).count() == 1

    @pytest.mark.parametrize('password', ['short', '12345678901'])
    def test_weak_password(self, password):
        """Test passwords failing the validators are rejected."""
        with pytest.raises(ValidationError):
            register_user('alice', password, 'alice@example.com')

        assert not User.objects.filter(username='alice').exists()


@pytest.mark.django_db
class TestVerifyCredentials:
    """Tests for verify_credentials."""

    def test_valid_credentials(self, user):
        """Test matching credentials return the user."""
        assert verify_credentials(user.username, 'testpass123') == user

    def test_wrong_password(self, user):
        """Test wrong password is rejected."""
        with pytest.raises(InvalidCredentialsError):
            verify_credentials(user.username, 'wrong')

    def test_unknown_user(self, db):
        """Test unknown username is rejected."""
        with pytest.raises(InvalidCredentialsError):
            verify_credentials('nobody', 'whatever')

    def test_inactive_user(self, user):
        """Test inactive users cannot log in."""
        user.is_active = False
        user.save()

        with pytest.raises(InvalidCredentialsError):
            verify_credentials(user.username, 'testpass123')
