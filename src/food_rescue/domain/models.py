"""Domain models for the food rescue backend."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

STARTING_RANK = "Warrior"
ORDER_STATUS_IN_TRANSIT = "Sedang Diantar"
DELIVERY_WINDOW = timedelta(days=7)
IMPACT_REDUCE_MAX = 10.0


@dataclass(frozen=True)
class FoodItem:
    """Represents a food listing stored in the `fnb` table."""

    id: str
    title: str
    price: float
    discounted_price: float
    status: str
    distance: str | None = None
    image: str | None = None

    def snapshot(self) -> dict[str, object]:
        """Return the food fields embedded into an order at purchase time."""
        return {
            "id": self.id,
            "image": self.image,
            "title": self.title,
            "distance": self.distance,
            "price": self.price,
            "discountedPrice": self.discounted_price,
            "status": self.status,
        }


@dataclass(frozen=True)
class ImpactCounters:
    """Cumulative impact of a user's purchases."""

    reduce: float = 0.0
    saving: int = 0
    total: float = 0.0


@dataclass(frozen=True)
class UserProfile:
    """User profile row linked to an auth account by `uid`."""

    id: str
    uid: str
    email: str
    username: str
    rank: str = STARTING_RANK
    impact: ImpactCounters = field(default_factory=ImpactCounters)


@dataclass(frozen=True)
class PurchaseRequest:
    """Input for placing an order."""

    food_id: str
    address: str
    address_detail: str
    order_method: str
    payment_method: str
    total: float
    quantity: int


@dataclass(frozen=True)
class Order:
    """Order row with the food snapshot taken when it was placed."""

    id: str
    user_id: str
    address: str
    address_detail: str
    status: str
    estimated_arrival: datetime
    order_method: str
    payment_method: str
    total: float
    quantity: int
    food: dict[str, object]


@dataclass(frozen=True)
class AuthSession:
    """Authenticated session returned by the auth provider."""

    uid: str
    email: str | None
    access_token: str | None = None
    refresh_token: str | None = None
