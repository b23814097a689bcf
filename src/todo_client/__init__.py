"""Todo backend client toolkit."""

from .client import DEFAULT_API_URL, TodoApiClient
from .exceptions import AuthError, FetchError, TodoClientError
from .schemas import ApiEnvelope, AuthResponse, Todo, User

__all__ = [
    "DEFAULT_API_URL",
    "TodoApiClient",
    "AuthError",
    "FetchError",
    "TodoClientError",
    "ApiEnvelope",
    "AuthResponse",
    "Todo",
    "User",
]
