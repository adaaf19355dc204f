"""Supabase-backed order repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from food_rescue.domain.models import FoodItem, ImpactCounters, Order, PurchaseRequest
from food_rescue.services.orders import OrderRepository

_ORDER_COLUMNS = (
    "id, user, address, addressDetail, status, estimasiTiba, orderMethod, "
    "paymentMethod, total, quantity, fnb"
)


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation for the `order` table.

    Orders are written through the `place_order` database function, which
    increments the user's impact counters and inserts the order row in a single
    transaction.
    """

    client: Client

    def place_order(  # noqa: PLR0913
        self,
        user_id: str,
        food: FoodItem,
        request: PurchaseRequest,
        impact_delta: ImpactCounters,
        status: str,
        estimated_arrival: datetime,
    ) -> Order:
        """Call `place_order` and return the inserted order."""
        response = self.client.rpc(
            "place_order",
            {
                "p_user_id": user_id,
                "p_address": request.address,
                "p_address_detail": request.address_detail,
                "p_status": status,
                "p_estimasi_tiba": estimated_arrival.isoformat(),
                "p_order_method": request.order_method,
                "p_payment_method": request.payment_method,
                "p_total": request.total,
                "p_quantity": request.quantity,
                "p_fnb": food.snapshot(),
                "p_impact_saving": impact_delta.saving,
                "p_impact_reduce": impact_delta.reduce,
                "p_impact_total": impact_delta.total,
            },
        ).execute()
        row = response.data
        if isinstance(row, list):
            row = row[0] if row else None
        if not row:
            raise RuntimeError("Failed to place order")
        return _row_to_order(row)

    def list_orders(self, user_id: str) -> list[Order]:
        """Return every order referencing the user profile id."""
        response = (
            self.client.table("order")
            .select(_ORDER_COLUMNS)
            .eq("user", user_id)
            .execute()
        )
        return [_row_to_order(row) for row in response.data or []]


def _row_to_order(row: dict[str, object]) -> Order:
    arrival = row["estimasiTiba"]
    return Order(
        id=str(row["id"]),
        user_id=str(row["user"]),
        address=str(row.get("address") or ""),
        address_detail=str(row.get("addressDetail") or ""),
        status=str(row["status"]),
        estimated_arrival=(
            arrival if isinstance(arrival, datetime) else datetime.fromisoformat(arrival)
        ),
        order_method=str(row.get("orderMethod") or ""),
        payment_method=str(row.get("paymentMethod") or ""),
        total=float(row.get("total") or 0),
        quantity=int(row.get("quantity") or 0),
        food=dict(row.get("fnb") or {}),
    )
