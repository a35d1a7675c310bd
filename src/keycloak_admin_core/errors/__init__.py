"""Error handling for the Keycloak admin client.

``TransportError`` is httpx's own transport exception. Connection failures and
timeouts are never wrapped by this package; catching it here is equivalent to
catching ``httpx.TransportError``.
"""

from httpx import TransportError

from keycloak_admin_core.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConfigurationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)
from keycloak_admin_core.errors.handler import raise_for_status
from keycloak_admin_core.errors.models import KeycloakErrorBody

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "ConfigurationError",
    "ConflictError",
    "ForbiddenError",
    "KeycloakErrorBody",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "TransportError",
    "UnauthorizedError",
    "raise_for_status",
]
