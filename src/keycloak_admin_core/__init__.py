"""Keycloak Admin Core - authentication and request construction for the Keycloak admin API.

This library covers the part of an admin client that carries decisions:
- Credential strategies (password grant, client credentials, token callback)
- Authentication realm override for cross-realm administration
- Base URLs with or without the pre-17 ``/auth`` segment
- Pluggable JSON serialization bound to each request

Example:
    ```python
    from keycloak_admin_core import KeycloakClient

    async with KeycloakClient(
        "https://idp.example.com",
        client_secret="s3cr3t",
        include_auth_segment=False,
        authentication_realm="master",
    ) as client:
        base = await client.base_request("tenant-a")
        request = base.build("GET", "admin", "realms", "tenant-a", "groups")
    ```
"""

from keycloak_admin_core.auth.exceptions import AuthenticationError
from keycloak_admin_core.client import KeycloakClient
from keycloak_admin_core.config import ClientConfig
from keycloak_admin_core.errors.exceptions import ConfigurationError
from keycloak_admin_core.request import RequestFactory, ResolvedRequest
from keycloak_admin_core.serialization import JsonSerializer, KeycloakModel, SerializerPolicy

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "ClientConfig",
    "ConfigurationError",
    "JsonSerializer",
    "KeycloakClient",
    "KeycloakModel",
    "RequestFactory",
    "ResolvedRequest",
    "SerializerPolicy",
    "__version__",
]
