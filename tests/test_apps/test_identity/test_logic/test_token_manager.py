"""Tests for bearer token management."""

from datetime import timedelta

import pytest
from django.utils import timezone

from server.apps.identity.exceptions import InvalidTokenError
from server.apps.identity.logic.token_manager import (
    cleanup_expired_tokens,
    get_token_limit,
    get_token_ttl,
    get_user_tokens,
    hash_token,
    issue_token,
    revoke_token,
    revoke_user_tokens,
    validate_token,
)
from server.apps.identity.models import AccessToken


def _expire(issued):
    AccessToken.objects.filter(
        token_digest=hash_token(issued.token),
    ).update(expires_at=timezone.now() - timedelta(seconds=1))


class TestTokenManagerConfig:
    """Tests for token configuration."""

    def test_get_token_ttl_from_settings(self, settings):
        """Test token TTL from settings."""
        settings.API_TOKEN_TTL = 60

        assert get_token_ttl() == 60

    def test_get_token_ttl_default(self, settings):
        """Test default token TTL."""
        del settings.API_TOKEN_TTL

        assert get_token_ttl() == 86400

    def test_get_token_limit_from_settings(self, settings):
        """Test token limit from settings."""
        settings.API_TOKEN_LIMIT = 2

        assert get_token_limit() == 2

    def test_get_token_limit_default(self, settings):
        """Test default token limit."""
        del settings.API_TOKEN_LIMIT

        assert get_token_limit() == 5


@pytest.mark.django_db
class TestIssueToken:
    """Tests for issue_token."""

    def test_issue_token(self, user, settings):
        """Test a token is stored hashed with its expiry."""
        settings.API_TOKEN_TTL = 3600

        issued = issue_token(user)

        access_token = AccessToken.objects.get(user=user)
        assert access_token.token_digest == hash_token(issued.token)
        assert access_token.token_digest != issued.token
        assert access_token.expires_at == issued.expires_at
        remaining = issued.expires_at - timezone.now()
        assert timedelta(minutes=59) < remaining <= timedelta(hours=1)

    def test_tokens_are_unique(self, user):
        """Test every login gets a different token."""
        assert issue_token(user).token != issue_token(user).token

    def test_limit_rotates_oldest(self, user, settings):
        """Test the oldest token is revoked past the limit."""
        settings.API_TOKEN_LIMIT = 2
        first = issue_token(user)
        second = issue_token(user)
        third = issue_token(user)

        assert AccessToken.objects.filter(user=user).count() == 2
        with pytest.raises(InvalidTokenError):
            validate_token(first.token)
        assert validate_token(second.token) == user
        assert validate_token(third.token) == user

    @pytest.mark.parametrize('limit', [0, -1])
    def test_non_positive_limit_keeps_newest(self, user, settings, limit):
        """Test a limit below one still leaves the new token working."""
        settings.API_TOKEN_LIMIT = limit
        old = issue_token(user)
        new = issue_token(user)

        assert AccessToken.objects.filter(user=user).count() == 1
        assert validate_token(new.token) == user
        with pytest.raises(InvalidTokenError):
            validate_token(old.token)

    def test_limit_is_per_user(self, user, other_user, settings):
        """Test rotation never touches other users' tokens."""
        settings.API_TOKEN_LIMIT = 1
        foreign = issue_token(other_user)
        issue_token(user)

        assert validate_token(foreign.token) == other_user

    def test_issue_cleans_expired(self, user, other_user):
        """Test expired tokens are purged on login."""
        _expire(issue_token(other_user))

        issue_token(user)

        assert not AccessToken.objects.filter(user=other_user).exists()


@pytest.mark.django_db
class TestValidateToken:
    """Tests for validate_token."""

    def test_valid_token(self, user):
        """Test a fresh token resolves to its user."""
        issued = issue_token(user)

        assert validate_token(issued.token) == user
        assert AccessToken.objects.get(user=user).last_used_at is not None

    def test_unknown_token(self, db):
        """Test unknown tokens are rejected."""
        with pytest.raises(InvalidTokenError):
            validate_token('unknown')

    def test_expired_token(self, user):
        """Test expired tokens are rejected and deleted."""
        issued = issue_token(user)
        _expire(issued)

        with pytest.raises(InvalidTokenError, match='Token expired'):
            validate_token(issued.token)
        assert not AccessToken.objects.filter(user=user).exists()

    def test_inactive_user(self, user):
        """Test tokens of deactivated users are rejected."""
        issued = issue_token(user)
        user.is_active = False
        user.save()

        with pytest.raises(InvalidTokenError):
            validate_token(issued.token)


@pytest.mark.django_db
class TestRevokeTokens:
    """Tests for token revocation and cleanup."""

    def test_revoke_token(self, user):
        """Test a revoked token stops working."""
        issued = issue_token(user)

        assert revoke_token(issued.token)
        with pytest.raises(InvalidTokenError):
            validate_token(issued.token)

    def test_revoke_unknown_token(self, db):
        """Test revoking an unknown token is a no-op."""
        assert not revoke_token('unknown')

    def test_revoke_user_tokens(self, user, other_user):
        """Test all tokens of one user are revoked."""
        issue_token(user)
        issue_token(user)
        foreign = issue_token(other_user)

        assert revoke_user_tokens(user) == 2
        assert validate_token(foreign.token) == other_user

    def test_cleanup_expired_tokens(self, user):
        """Test only expired tokens are cleaned up."""
        live = issue_token(user)
        _expire(issue_token(user))

        assert cleanup_expired_tokens() == 1
        assert validate_token(live.token) == user

    def test_get_user_tokens(self, user):
        """Test listing skips expired tokens."""
        live = issue_token(user)
        _expire(issue_token(user))

        tokens = get_user_tokens(user)

        assert [token.token_digest for token in tokens] == [
            hash_token(live.token),
        ]
