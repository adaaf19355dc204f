"""Pydantic models for API request bodies."""

from pydantic import BaseModel, ConfigDict, Field

from food_rescue.domain.models import PurchaseRequest


class LoginBody(BaseModel):
    """Credentials for username sign-in."""

    username: str
    password: str


class RegisterBody(BaseModel):
    """New account details."""

    email: str
    username: str = Field(min_length=1)
    password: str = Field(min_length=6)


class PurchaseBody(BaseModel):
    """Order placement payload."""

    food_id: str = Field(alias="foodId")
    address: str
    address_detail: str = Field(default="", alias="addressDetail")
    order_method: str = Field(alias="orderMethod")
    payment_method: str = Field(alias="paymentMethod")
    total: float
    quantity: int

    model_config = ConfigDict(populate_by_name=True)

    def to_request(self) -> PurchaseRequest:
        return PurchaseRequest(
            food_id=self.food_id,
            address=self.address,
            address_detail=self.address_detail,
            order_method=self.order_method,
            payment_method=self.payment_method,
            total=self.total,
            quantity=self.quantity,
        )
