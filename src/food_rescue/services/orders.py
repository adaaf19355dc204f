"""Purchase flow and order history."""

import logging
import random
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from food_rescue.domain.errors import InvalidPurchaseError
from food_rescue.domain.models import (
    DELIVERY_WINDOW,
    IMPACT_REDUCE_MAX,
    ORDER_STATUS_IN_TRANSIT,
    FoodItem,
    ImpactCounters,
    Order,
    PurchaseRequest,
)
from food_rescue.services.food import FoodService
from food_rescue.services.users import UserService

_logger = logging.getLogger(__name__)


class OrderRepository(Protocol):
    """Persistence interface for orders."""

    def place_order(  # noqa: PLR0913
        self,
        user_id: str,
        food: FoodItem,
        request: PurchaseRequest,
        impact_delta: ImpactCounters,
        status: str,
        estimated_arrival: datetime,
    ) -> Order:
        """Apply the impact delta and insert the order in one transaction."""

    def list_orders(self, user_id: str) -> list[Order]:
        """Return orders referencing a user profile id."""


@dataclass
class PurchaseService:
    """Service that places orders and updates user impact."""

    user_service: UserService
    food_service: FoodService
    repository: OrderRepository
    rng: random.Random = field(default_factory=random.Random)

    def make_purchase(
        self, request: PurchaseRequest, access_token: str | None = None
    ) -> Order:
        """Place an order for the signed-in user."""
        _validate(request)
        profile = self.user_service.get_self(access_token)
        food = self.food_service.get_food(request.food_id)

        delta = ImpactCounters(
            reduce=self.rng.random() * IMPACT_REDUCE_MAX,
            saving=request.quantity,
            total=request.total,
        )
        order = self.repository.place_order(
            user_id=profile.id,
            food=food,
            request=request,
            impact_delta=delta,
            status=ORDER_STATUS_IN_TRANSIT,
            estimated_arrival=datetime.now(tz=UTC) + DELIVERY_WINDOW,
        )
        _logger.info(
            "Order placed: order_id=%s user_id=%s food_id=%s quantity=%s",
            order.id,
            profile.id,
            food.id,
            request.quantity,
        )
        return order

    def list_orders(self, uid: str) -> list[Order]:
        """Return every order of the user with the given auth uid."""
        profile = self.user_service.get_profile(uid)
        return self.repository.list_orders(profile.id)


def _validate(request: PurchaseRequest) -> None:
    if request.quantity < 1:
        raise InvalidPurchaseError("Quantity must be at least 1")
    if request.total < 0:
        raise InvalidPurchaseError("Total must not be negative")
