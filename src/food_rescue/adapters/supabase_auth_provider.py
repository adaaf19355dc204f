"""Supabase Auth implementation of the auth provider."""

from dataclasses import dataclass

from supabase import Client
from supabase_auth.types import AuthResponse

from food_rescue.domain.models import AuthSession
from food_rescue.services.users import AuthProvider


@dataclass
class SupabaseAuthProvider(AuthProvider):
    """Email/password auth backed by Supabase Auth.

    `client` carries the user session and should be created with a persistent
    storage. `admin_client` uses the service-role key and is only needed to
    delete accounts whose profile could not be provisioned.
    """

    client: Client
    admin_client: Client | None = None

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        response = self.client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        return _to_session(response)

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Create a new account."""
        response = self.client.auth.sign_up({"email": email, "password": password})
        return _to_session(response)

    def current_uid(self, access_token: str | None = None) -> str | None:
        """Return the uid for a token or for the stored session."""
        response = self.client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return response.user.id

    def sign_out(self, access_token: str | None = None) -> None:
        """Revoke a token, or sign out and remove the stored session."""
        if access_token is not None:
            self.client.auth.admin.sign_out(access_token)
            return
        self.client.auth.sign_out()

    def delete_account(self, uid: str) -> bool:
        """Delete an account through the admin API, if configured."""
        if self.admin_client is None:
            return False
        self.admin_client.auth.admin.delete_user(uid)
        return True


def _to_session(response: AuthResponse) -> AuthSession:
    if response.user is None:
        raise RuntimeError("Supabase Auth returned no user")
    session = response.session
    return AuthSession(
        uid=response.user.id,
        email=response.user.email,
        access_token=session.access_token if session else None,
        refresh_token=session.refresh_token if session else None,
    )
