"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass

from supabase import Client, ClientOptions, create_client

from food_rescue.adapters.file_session_storage import FileSessionStorage
from food_rescue.adapters.supabase_auth_provider import SupabaseAuthProvider
from food_rescue.adapters.supabase_food_repository import SupabaseFoodRepository
from food_rescue.adapters.supabase_order_repository import SupabaseOrderRepository
from food_rescue.adapters.supabase_user_repository import SupabaseUserRepository
from food_rescue.config import Settings
from food_rescue.services.food import FoodService
from food_rescue.services.orders import PurchaseService
from food_rescue.services.users import UserService


@dataclass
class RequestScope:
    """Services whose database calls run under one caller's access token."""

    user_service: UserService
    purchase_service: PurchaseService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    user_service: UserService
    purchase_service: PurchaseService
    scope_for_token: Callable[[str], RequestScope]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url,
        resolved_settings.supabase_anon_key,
        options=ClientOptions(
            storage=FileSessionStorage(resolved_settings.session_storage_path),
            persist_session=True,
        ),
    )
    admin_client: Client | None = None
    if resolved_settings.supabase_service_key:
        admin_client = create_client(
            resolved_settings.supabase_url,
            resolved_settings.supabase_service_key,
            options=_stateless_options(),
        )

    food_service = FoodService(SupabaseFoodRepository(supabase_client))
    user_service, purchase_service = _build_user_services(
        supabase_client, admin_client, food_service
    )

    def scope_for_token(access_token: str) -> RequestScope:
        client = create_client(
            resolved_settings.supabase_url,
            resolved_settings.supabase_anon_key,
            options=_stateless_options(),
        )
        client.postgrest.auth(access_token)
        scoped_food_service = FoodService(SupabaseFoodRepository(client))
        scoped_user_service, scoped_purchase_service = _build_user_services(
            client, admin_client, scoped_food_service
        )
        return RequestScope(
            user_service=scoped_user_service,
            purchase_service=scoped_purchase_service,
        )

    return AppContainer(
        settings=resolved_settings,
        food_service=food_service,
        user_service=user_service,
        purchase_service=purchase_service,
        scope_for_token=scope_for_token,
    )


def _stateless_options() -> ClientOptions:
    return ClientOptions(persist_session=False, auto_refresh_token=False)


def _build_user_services(
    client: Client, admin_client: Client | None, food_service: FoodService
) -> tuple[UserService, PurchaseService]:
    user_service = UserService(
        SupabaseUserRepository(client),
        SupabaseAuthProvider(client, admin_client=admin_client),
    )
    purchase_service = PurchaseService(
        user_service=user_service,
        food_service=food_service,
        repository=SupabaseOrderRepository(client),
    )
    return user_service, purchase_service
