"""Supabase-backed user profile repository."""

from dataclasses import dataclass

from supabase import Client

from food_rescue.domain.models import ImpactCounters, UserProfile
from food_rescue.services.users import UserRepository

_USER_COLUMNS = (
    "id, uid, email, username, peringkat, impactSaving, impactReduce, impactTotal"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for the `users` table."""

    client: Client

    def get_by_username(self, username: str) -> UserProfile | None:
        """Return the profile for a username, if present."""
        return self._get_one("username", username)

    def get_by_uid(self, uid: str) -> UserProfile | None:
        """Return the profile for an auth uid, if present."""
        return self._get_one("uid", uid)

    def upsert_profile(
        self, uid: str, email: str, username: str, rank: str
    ) -> UserProfile | None:
        """Insert a zeroed profile unless one already exists for the uid."""
        response = (
            self.client.table("users")
            .upsert(
                {
                    "uid": uid,
                    "email": email,
                    "username": username,
                    "peringkat": rank,
                    "impactSaving": 0,
                    "impactReduce": 0,
                    "impactTotal": 0,
                },
                on_conflict="uid",
                ignore_duplicates=True,
            )
            .execute()
        )
        # An ignored duplicate returns no rows.
        if not response.data:
            return None
        return _row_to_profile(response.data[0])

    def _get_one(self, column: str, value: str) -> UserProfile | None:
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_profile(response.data[0])


def _row_to_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=str(row["id"]),
        uid=str(row["uid"]),
        email=str(row["email"]),
        username=str(row["username"]),
        rank=str(row.get("peringkat") or ""),
        impact=ImpactCounters(
            reduce=float(row.get("impactReduce") or 0),
            saving=int(row.get("impactSaving") or 0),
            total=float(row.get("impactTotal") or 0),
        ),
    )
