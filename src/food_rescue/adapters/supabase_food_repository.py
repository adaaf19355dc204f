"""Supabase-backed food repository."""

from dataclasses import dataclass

from supabase import Client

from food_rescue.domain.models import FoodItem
from food_rescue.services.food import FoodRepository

_FOOD_COLUMNS = "id, image, title, distance, price, discountedPrice, status"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for the `fnb` table."""

    client: Client

    def list_foods(self) -> list[FoodItem]:
        """Return every food row."""
        response = self.client.table("fnb").select(_FOOD_COLUMNS).execute()
        return [_row_to_food(row) for row in response.data or []]

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food row by id, if present."""
        response = (
            self.client.table("fnb")
            .select(_FOOD_COLUMNS)
            .eq("id", food_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_food(response.data[0])


def _row_to_food(row: dict[str, object]) -> FoodItem:
    return FoodItem(
        id=str(row["id"]),
        image=row.get("image"),
        title=str(row.get("title", "")),
        distance=row.get("distance"),
        price=float(row.get("price") or 0),
        discounted_price=float(row.get("discountedPrice") or 0),
        status=str(row.get("status", "")),
    )
