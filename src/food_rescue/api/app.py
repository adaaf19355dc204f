"""FastAPI application factory."""

import logging
from dataclasses import asdict

from fastapi import FastAPI, Header, Request, status
from fastapi.responses import JSONResponse
from supabase_auth.errors import AuthError

from food_rescue.api.models import LoginBody, PurchaseBody, RegisterBody
from food_rescue.app_logging import configure_logging
from food_rescue.containers import AppContainer
from food_rescue.domain.errors import (
    FoodRescueError,
    InvalidPurchaseError,
    NotAuthenticatedError,
    NotFoundError,
    ProvisioningError,
    UsernameTakenError,
)

_ERROR_STATUS: list[tuple[type[FoodRescueError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (UsernameTakenError, status.HTTP_409_CONFLICT),
    (InvalidPurchaseError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ProvisioningError, status.HTTP_502_BAD_GATEWAY),
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(FoodRescueError)
    async def handle_app_error(_request: Request, exc: FoodRescueError) -> JSONResponse:
        return JSONResponse(
            status_code=_status_for(exc), content={"detail": str(exc)}
        )

    @app.exception_handler(AuthError)
    async def handle_auth_error(_request: Request, exc: AuthError) -> JSONResponse:
        logger.info("Auth provider rejected request: %s", exc.message)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": exc.message}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods")
    def list_foods(request: Request) -> dict[str, object]:
        """Return every food listing."""
        state_container: AppContainer = request.app.state.container
        foods = state_container.food_service.list_foods()
        return {"foods": [asdict(food) for food in foods]}

    @app.get("/foods/{food_id}")
    def get_food(food_id: str, request: Request) -> dict[str, object]:
        """Return a single food listing."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.food_service.get_food(food_id))

    @app.post("/auth/login")
    def login(body: LoginBody, request: Request) -> dict[str, object]:
        """Sign in by username."""
        state_container: AppContainer = request.app.state.container
        session = state_container.user_service.login_user(body.username, body.password)
        return asdict(session)

    @app.post("/auth/register", status_code=status.HTTP_201_CREATED)
    def register(body: RegisterBody, request: Request) -> dict[str, object]:
        """Create an account and profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.user_service.register_user(
            body.email, body.username, body.password
        )
        return asdict(profile)

    @app.post("/auth/logout")
    def logout(
        request: Request, authorization: str | None = Header(default=None)
    ) -> dict[str, str]:
        """Revoke the caller's session."""
        state_container: AppContainer = request.app.state.container
        state_container.user_service.logout_user(_require_token(authorization))
        return {"status": "ok"}

    @app.get("/me")
    def me(
        request: Request, authorization: str | None = Header(default=None)
    ) -> dict[str, object]:
        """Return the signed-in user's profile."""
        state_container: AppContainer = request.app.state.container
        token = _require_token(authorization)
        scope = state_container.scope_for_token(token)
        profile = scope.user_service.get_self(token)
        return asdict(profile)

    @app.post("/orders", status_code=status.HTTP_201_CREATED)
    def make_purchase(
        body: PurchaseBody,
        request: Request,
        authorization: str | None = Header(default=None),
    ) -> dict[str, object]:
        """Place an order for the signed-in user."""
        state_container: AppContainer = request.app.state.container
        token = _require_token(authorization)
        scope = state_container.scope_for_token(token)
        order = scope.purchase_service.make_purchase(
            body.to_request(), access_token=token
        )
        return asdict(order)

    @app.get("/users/{uid}/orders")
    def list_orders(uid: str, request: Request) -> dict[str, object]:
        """Return a user's orders."""
        state_container: AppContainer = request.app.state.container
        orders = state_container.purchase_service.list_orders(uid)
        return {"orders": [asdict(order) for order in orders]}

    return app


def _status_for(exc: FoodRescueError) -> int:
    for error_type, code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _require_token(authorization: str | None) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise NotAuthenticatedError("Bearer token required")
    return token.strip()
