"""Shared test fixtures."""

import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import uuid4

import pytest
from supabase_auth.errors import AuthApiError

from food_rescue.config import Settings
from food_rescue.containers import AppContainer, RequestScope
from food_rescue.domain.models import (
    STARTING_RANK,
    AuthSession,
    FoodItem,
    ImpactCounters,
    Order,
    PurchaseRequest,
    UserProfile,
)
from food_rescue.services.food import FoodRepository, FoodService
from food_rescue.services.orders import OrderRepository, PurchaseService
from food_rescue.services.users import AuthProvider, UserRepository, UserService


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[str, FoodItem] = field(default_factory=dict)

    def add(self, food: FoodItem) -> FoodItem:
        self.foods[food.id] = food
        return food

    def list_foods(self) -> list[FoodItem]:
        return list(self.foods.values())

    def get_food(self, food_id: str) -> FoodItem | None:
        return self.foods.get(food_id)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    fail_upsert: bool = False
    upserts: int = 0

    def get_by_username(self, username: str) -> UserProfile | None:
        for profile in self.profiles.values():
            if profile.username == username:
                return profile
        return None

    def get_by_uid(self, uid: str) -> UserProfile | None:
        for profile in self.profiles.values():
            if profile.uid == uid:
                return profile
        return None

    def upsert_profile(
        self, uid: str, email: str, username: str, rank: str
    ) -> UserProfile | None:
        self.upserts += 1
        if self.fail_upsert:
            raise ConnectionError("profile write failed")
        if self.get_by_uid(uid) is not None:
            return None
        profile = UserProfile(
            id=str(uuid4()), uid=uid, email=email, username=username, rank=rank
        )
        self.profiles[profile.id] = profile
        return profile

    def add_user(self, uid: str, email: str, username: str) -> UserProfile:
        profile = UserProfile(
            id=str(uuid4()),
            uid=uid,
            email=email,
            username=username,
            rank=STARTING_RANK,
        )
        self.profiles[profile.id] = profile
        return profile


@dataclass
class InMemoryOrderRepository(OrderRepository):
    """In-memory order repository that updates impact with each order."""

    users: InMemoryUserRepository
    orders: dict[str, Order] = field(default_factory=dict)
    fail_next: bool = False

    def place_order(  # noqa: PLR0913
        self,
        user_id: str,
        food: FoodItem,
        request: PurchaseRequest,
        impact_delta: ImpactCounters,
        status: str,
        estimated_arrival: datetime,
    ) -> Order:
        if self.fail_next:
            self.fail_next = False
            raise ConnectionError("transaction aborted")
        profile = self.users.profiles[user_id]
        self.users.profiles[user_id] = replace(
            profile,
            impact=ImpactCounters(
                reduce=profile.impact.reduce + impact_delta.reduce,
                saving=profile.impact.saving + impact_delta.saving,
                total=profile.impact.total + impact_delta.total,
            ),
        )
        order = Order(
            id=str(uuid4()),
            user_id=user_id,
            address=request.address,
            address_detail=request.address_detail,
            status=status,
            estimated_arrival=estimated_arrival,
            order_method=request.order_method,
            payment_method=request.payment_method,
            total=request.total,
            quantity=request.quantity,
            food=food.snapshot(),
        )
        self.orders[order.id] = order
        return order

    def list_orders(self, user_id: str) -> list[Order]:
        return [order for order in self.orders.values() if order.user_id == user_id]


@dataclass
class FakeAuthProvider(AuthProvider):
    """Fake auth provider keeping accounts and one active session."""

    accounts: dict[str, tuple[str, str]] = field(default_factory=dict)
    tokens: dict[str, str] = field(default_factory=dict)
    current: str | None = None
    sign_in_calls: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    can_delete: bool = True

    def sign_in(self, email: str, password: str) -> AuthSession:
        self.sign_in_calls.append(email)
        for uid, (account_email, account_password) in self.accounts.items():
            if account_email == email and account_password == password:
                return self._start_session(uid, email)
        raise AuthApiError("Invalid login credentials", 400, "invalid_credentials")

    def sign_up(self, email: str, password: str) -> AuthSession:
        if any(account[0] == email for account in self.accounts.values()):
            raise AuthApiError("User already registered", 422, "user_already_exists")
        uid = str(uuid4())
        self.accounts[uid] = (email, password)
        return self._start_session(uid, email)

    def current_uid(self, access_token: str | None = None) -> str | None:
        if access_token is not None:
            return self.tokens.get(access_token)
        return self.current

    def sign_out(self, access_token: str | None = None) -> None:
        if access_token is not None:
            self.tokens.pop(access_token, None)
            return
        self.current = None

    def delete_account(self, uid: str) -> bool:
        if not self.can_delete:
            return False
        self.accounts.pop(uid, None)
        self.deleted.append(uid)
        if self.current == uid:
            self.current = None
        return True

    def _start_session(self, uid: str, email: str) -> AuthSession:
        token = f"token-{uid}"
        self.tokens[token] = uid
        self.current = uid
        return AuthSession(uid=uid, email=email, access_token=token)


def make_food(food_id: str = "1", **overrides: object) -> FoodItem:
    values: dict[str, object] = {
        "id": food_id,
        "image": "https://i.imgur.com/alpENn6.jpg",
        "title": "Nasi Goreng",
        "distance": "2 km",
        "price": 35000.0,
        "discounted_price": 30000.0,
        "status": "Available",
    }
    values.update(overrides)
    return FoodItem(**values)  # type: ignore[arg-type]


def make_purchase_request(food_id: str = "1", **overrides: object) -> PurchaseRequest:
    values: dict[str, object] = {
        "food_id": food_id,
        "address": "Jl. Merdeka 1",
        "address_detail": "Blue gate",
        "order_method": "delivery",
        "payment_method": "cash",
        "total": 50000.0,
        "quantity": 2,
    }
    values.update(overrides)
    return PurchaseRequest(**values)  # type: ignore[arg-type]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon-key",
        supabase_service_key="service-key",
        session_storage_path=str(tmp_path / "session.json"),
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    repository = InMemoryFoodRepository()
    repository.add(make_food("1"))
    repository.add(make_food("2", title="Roti Bakar", price=20000.0))
    return repository


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def order_repository(user_repository: InMemoryUserRepository) -> InMemoryOrderRepository:
    return InMemoryOrderRepository(users=user_repository)


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def food_service(food_repository: InMemoryFoodRepository) -> FoodService:
    return FoodService(food_repository)


@pytest.fixture
def user_service(
    user_repository: InMemoryUserRepository, auth_provider: FakeAuthProvider
) -> UserService:
    return UserService(user_repository, auth_provider)


@pytest.fixture
def purchase_service(
    user_service: UserService,
    food_service: FoodService,
    order_repository: InMemoryOrderRepository,
) -> PurchaseService:
    return PurchaseService(
        user_service=user_service,
        food_service=food_service,
        repository=order_repository,
        rng=random.Random(42),
    )


@pytest.fixture
def scoped_tokens() -> list[str]:
    return []


@pytest.fixture
def container(
    settings: Settings,
    food_service: FoodService,
    user_service: UserService,
    purchase_service: PurchaseService,
    scoped_tokens: list[str],
) -> AppContainer:
    def scope_for_token(access_token: str) -> RequestScope:
        scoped_tokens.append(access_token)
        return RequestScope(user_service=user_service, purchase_service=purchase_service)

    return AppContainer(
        settings=settings,
        food_service=food_service,
        user_service=user_service,
        purchase_service=purchase_service,
        scope_for_token=scope_for_token,
    )
