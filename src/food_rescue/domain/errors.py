"""Error types raised by food rescue services."""


class FoodRescueError(Exception):
    """Base class for application errors."""


class NotFoundError(FoodRescueError):
    """Raised when a lookup has no matching row."""


class FoodNotFoundError(NotFoundError):
    """Raised when a food item id is unknown."""

    def __init__(self, food_id: str) -> None:
        super().__init__(f"Food item not found: {food_id}")
        self.food_id = food_id


class UserNotFoundError(NotFoundError):
    """Raised when no user profile matches a username or uid."""

    def __init__(self, key: str, value: str) -> None:
        super().__init__(f"User not found for {key}={value}")
        self.key = key
        self.value = value


class NotAuthenticatedError(FoodRescueError):
    """Raised when an operation needs a signed-in user and there is none."""


class UsernameTakenError(FoodRescueError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username already taken: {username}")
        self.username = username


class InvalidPurchaseError(FoodRescueError):
    """Raised when a purchase request fails validation."""


class ProvisioningError(FoodRescueError):
    """Raised when an auth account was created but its profile was not."""

    def __init__(self, uid: str, compensated: bool) -> None:
        state = "removed" if compensated else "left in place"
        super().__init__(f"Failed to create profile for {uid}; auth account {state}")
        self.uid = uid
        self.compensated = compensated
