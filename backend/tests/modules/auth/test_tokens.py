"""Tests for modules/auth/tokens.py."""

import pytest
from datetime import datetime, timedelta, timezone
import jwt

from modules.auth.exceptions import (
    AuthConfigurationError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
)
from modules.auth.models import AuthProvider, User
from modules.auth.tokens import TokenService


SECRET = "unit-test-secret"


@pytest.fixture
def service() -> TokenService:
    return TokenService(SECRET)


@pytest.fixture
def user() -> User:
    return User(id=42, username="alice", nickname="Alice", password_hash="x")


class TestIssue:
    def test_issue_round_trips_claims(self, service, user):
        """A freshly issued token should verify and carry the user's identity."""
        claims = service.verify(service.issue(user))
        assert claims.user_id == 42
        assert claims.sub == "42"
        assert claims.username == "alice"
        assert claims.nickname == "Alice"
        assert claims.provider == AuthProvider.LOCAL

    def test_token_valid_for_seven_days(self, service, user):
        """exp should be exactly seven days after iat."""
        claims = service.verify(service.issue(user))
        assert claims.exp - claims.iat == int(timedelta(days=7).total_seconds())

    def test_federated_user_claims(self, service):
        """Federated users have no username; provider is carried instead."""
        kakao_user = User(id=7, nickname="Kim", provider=AuthProvider.KAKAO, provider_id="123")
        claims = service.verify(service.issue(kakao_user))
        assert claims.username is None
        assert claims.provider == AuthProvider.KAKAO

    def test_tokens_are_unique(self, service, user):
        """Two tokens for the same user should differ."""
        assert service.issue(user) != service.issue(user)

    def test_issue_without_secret_fails(self, user):
        """Signing without a configured secret should be refused."""
        with pytest.raises(AuthConfigurationError):
            TokenService("").issue(user)


class TestVerify:
    def test_accepted_six_days_after_issue(self, service, user):
        """A token issued six days ago is still valid."""
        issued_at = datetime.now(timezone.utc) - timedelta(days=6)
        token = service.issue(user, issued_at=issued_at)
        assert service.verify(token).user_id == 42

    def test_rejected_eight_days_after_issue(self, service, user):
        """A token issued eight days ago has expired."""
        issued_at = datetime.now(timezone.utc) - timedelta(days=8)
        token = service.issue(user, issued_at=issued_at)
        with pytest.raises(ExpiredTokenError):
            service.verify(token)

    def test_wrong_secret(self, service, user):
        """A token signed with another secret should be invalid."""
        token = TokenService("some-other-secret").issue(user)
        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_malformed_token(self, service):
        with pytest.raises(InvalidTokenError):
            service.verify("not-a-valid-token")

    @pytest.mark.parametrize("token", ["", None])
    def test_missing_token(self, service, token):
        with pytest.raises(MissingTokenError):
            service.verify(token)

    def test_missing_exp_claim(self, service):
        """Tokens without an expiry are not accepted."""
        token = jwt.encode({"sub": "1", "iat": 1704067200}, SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_non_numeric_subject(self, service):
        """Tokens whose subject is not a user ID are rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "admin",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(hours=1)).timestamp()),
            },
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_algorithm_none_rejected(self, service):
        """Unsigned tokens are rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "1",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(hours=1)).timestamp()),
            },
            None,
            algorithm="none",
        )
        with pytest.raises(InvalidTokenError):
            service.verify(token)

    def test_verify_without_secret_fails(self, service, user):
        token = service.issue(user)
        with pytest.raises(AuthConfigurationError):
            TokenService("").verify(token)
