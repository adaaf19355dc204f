"""Food listing lookups."""

from dataclasses import dataclass
from typing import Protocol

from food_rescue.domain.errors import FoodNotFoundError
from food_rescue.domain.models import FoodItem


class FoodRepository(Protocol):
    """Persistence interface for food listings."""

    def list_foods(self) -> list[FoodItem]:
        """Return every food item."""

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food item by id, if present."""


@dataclass
class FoodService:
    """Application service for reading food listings."""

    repository: FoodRepository

    def list_foods(self) -> list[FoodItem]:
        """Return all food items in backend order."""
        return self.repository.list_foods()

    def get_food(self, food_id: str) -> FoodItem:
        """Return a food item or raise if it does not exist."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise FoodNotFoundError(food_id)
        return food
