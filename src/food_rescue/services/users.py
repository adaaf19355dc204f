"""User authentication and profile provisioning."""

import logging
from dataclasses import dataclass
from typing import Protocol

from food_rescue.domain.errors import (
    NotAuthenticatedError,
    ProvisioningError,
    UserNotFoundError,
    UsernameTakenError,
)
from food_rescue.domain.models import STARTING_RANK, AuthSession, UserProfile

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_by_username(self, username: str) -> UserProfile | None:
        """Return the profile for a username, if present."""

    def get_by_uid(self, uid: str) -> UserProfile | None:
        """Return the profile for an auth uid, if present."""

    def upsert_profile(
        self, uid: str, email: str, username: str, rank: str
    ) -> UserProfile | None:
        """Create a zeroed profile keyed on uid; keep an existing one untouched."""


class AuthProvider(Protocol):
    """Email/password auth provider."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in and persist the session."""

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Create an auth account."""

    def current_uid(self, access_token: str | None = None) -> str | None:
        """Return the uid for a token, or for the persisted session."""

    def sign_out(self, access_token: str | None = None) -> None:
        """Revoke a token, or sign out and clear the persisted session."""

    def delete_account(self, uid: str) -> bool:
        """Delete an auth account; return False when not permitted."""


@dataclass
class UserService:
    """Application service for login, registration and profile lookups."""

    repository: UserRepository
    auth: AuthProvider

    def login_user(self, username: str, password: str) -> AuthSession:
        """Sign in with the email registered for a username."""
        profile = self.repository.get_by_username(username)
        if profile is None:
            raise UserNotFoundError("username", username)
        session = self.auth.sign_in(profile.email, password)
        _logger.info("User signed in: uid=%s", session.uid)
        return session

    def register_user(self, email: str, username: str, password: str) -> UserProfile:
        """Create an auth account and its profile.

        The profile write is an upsert keyed on the auth uid, so calling this
        again after a partial failure does not duplicate or reset the profile.
        If the profile cannot be written the auth account is deleted when the
        provider allows it.
        """
        if self.repository.get_by_username(username) is not None:
            raise UsernameTakenError(username)

        account = self.auth.sign_up(email, password)
        try:
            profile = self.repository.upsert_profile(
                uid=account.uid,
                email=account.email or email,
                username=username,
                rank=STARTING_RANK,
            )
            if profile is None:
                profile = self.repository.get_by_uid(account.uid)
            if profile is None:
                raise RuntimeError("Profile missing after upsert")
        except Exception as exc:
            _logger.exception("Profile provisioning failed: uid=%s", account.uid)
            compensated = self._compensate(account.uid)
            raise ProvisioningError(account.uid, compensated) from exc

        _logger.info("User registered: uid=%s username=%s", profile.uid, username)
        return profile

    def get_self(self, access_token: str | None = None) -> UserProfile:
        """Return the profile of the signed-in user."""
        uid = self.auth.current_uid(access_token)
        if uid is None:
            raise NotAuthenticatedError("No active session")
        return self.get_profile(uid)

    def get_profile(self, uid: str) -> UserProfile:
        """Return the profile for an auth uid."""
        profile = self.repository.get_by_uid(uid)
        if profile is None:
            raise UserNotFoundError("uid", uid)
        return profile

    def logout_user(self, access_token: str | None = None) -> None:
        """Revoke the given token, or end the persisted session."""
        self.auth.sign_out(access_token)

    def _compensate(self, uid: str) -> bool:
        try:
            deleted = self.auth.delete_account(uid)
        except Exception:
            _logger.exception("Failed to delete orphaned auth account: uid=%s", uid)
            return False
        if not deleted:
            _logger.warning("Orphaned auth account left in place: uid=%s", uid)
        return deleted
