"""Keycloak admin API client.

Example:
    ```python
    from keycloak_admin_core import KeycloakClient

    async with KeycloakClient(
        "https://idp.example.com",
        username="admin",
        password="secret",
        include_auth_segment=False,  # Keycloak 17+
        authentication_realm="master",
    ) as client:
        users = await client.admin_request("GET", "tenant-a", "users", params={"max": 10})
    ```
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from keycloak_admin_core.auth.credentials import CredentialResolver
from keycloak_admin_core.auth.models import TokenProvider
from keycloak_admin_core.auth.strategies import DEFAULT_CLIENT_ID, create_credential_strategy
from keycloak_admin_core.config import ClientConfig
from keycloak_admin_core.errors.handler import raise_for_status
from keycloak_admin_core.realm import RealmResolver
from keycloak_admin_core.request import RequestFactory, ResolvedRequest
from keycloak_admin_core.serialization import SerializerPolicy
from keycloak_admin_core.urls import UrlBuilder

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class KeycloakClient:
    """Authenticated entry point to the Keycloak admin REST API.

    Exactly one credential mode must be passed: ``username`` and
    ``password``, ``client_secret``, or ``token_provider``.

    Args:
        base_url: Server URL, without ``/auth``.
        include_auth_segment: Set to False for Keycloak 17 and later.
        authentication_realm: Realm to authenticate against when it differs
            from the realm being managed.
        client_id: OAuth client used for the password and client credentials grants.
        serializer: Body serializer (defaults to camelCase, nulls omitted).
        transport: Optional httpx transport (retry layers, ``httpx.MockTransport``).
        timeout: Request timeout in seconds.

    Raises:
        ConfigurationError: If the credential configuration is missing or ambiguous.
    """

    def __init__(
        self,
        base_url: str,
        *,
        username: str | None = None,
        password: str | None = None,
        client_secret: str | None = None,
        token_provider: TokenProvider | None = None,
        include_auth_segment: bool = True,
        authentication_realm: str | None = None,
        client_id: str = DEFAULT_CLIENT_ID,
        serializer: SerializerPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        config = ClientConfig.create(
            base_url,
            username=username,
            password=password,
            client_secret=client_secret,
            token_provider=token_provider,
            include_auth_segment=include_auth_segment,
            authentication_realm=authentication_realm,
            client_id=client_id,
            serializer=serializer,
        )
        self._setup(config, transport=transport, timeout=timeout)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "KeycloakClient":
        client = cls.__new__(cls)
        client._setup(config, transport=transport, timeout=timeout)
        return client

    @classmethod
    def from_env(
        cls,
        resolver: CredentialResolver | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        **kwargs: Any,
    ) -> "KeycloakClient":
        """Create a client from ``KEYCLOAK_*`` settings; see ``ClientConfig.from_env``."""
        return cls.from_config(ClientConfig.from_env(resolver, **kwargs), transport=transport, timeout=timeout)

    def _setup(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None,
        timeout: float,
    ) -> None:
        self._config = config
        self._http = httpx.AsyncClient(transport=transport, timeout=timeout)
        urls = UrlBuilder(config.base_url, include_auth_segment=config.include_auth_segment)
        strategy = create_credential_strategy(
            config.credentials, urls=urls, http=self._http, client_id=config.client_id
        )
        self._requests = RequestFactory(
            urls=urls,
            realms=RealmResolver(config.authentication_realm),
            strategy=strategy,
            serializer=config.serializer,
        )
        logger.debug(f"Created Keycloak client for {config.base_url} using {type(strategy).__name__}")

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def serializer(self) -> SerializerPolicy:
        return self._requests.serializer

    def set_serializer(self, serializer: SerializerPolicy) -> None:
        """Replace the serializer used by subsequent requests.

        Raises:
            ConfigurationError: If ``serializer`` is None or invalid.
        """
        self._requests.set_serializer(serializer)

    async def base_request(self, realm: str) -> ResolvedRequest:
        """Return an authenticated request prefix for ``realm``."""
        return await self._requests.base_request(realm)

    async def request(
        self,
        method: str,
        realm: str,
        *segments: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
        response_model: type | None = None,
    ) -> Any:
        """Send ``method`` to ``segments`` below the server root.

        Returns:
            The decoded response body with keys as sent by the server,
            validated into ``response_model`` when given, or None for an
            empty body.

        Raises:
            AuthenticationError: If no token can be obtained.
            APIError: Subclass matching a non-2xx response status.
            pydantic.ValidationError: If the body does not match ``response_model``.
        """
        resolved = await self.base_request(realm)
        request = resolved.build(method, *segments, body=body, params=params)
        logger.debug(f"{request.method} {request.url}")

        response = await self._http.send(request)
        raise_for_status(response)
        data = resolved.serializer.deserialize(response.text)
        if response_model is not None and data is not None:
            return TypeAdapter(response_model).validate_python(data)
        return data

    async def admin_request(
        self,
        method: str,
        realm: str,
        *segments: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
        response_model: type | None = None,
    ) -> Any:
        """Send ``method`` to ``admin/realms/{realm}/{segments}``."""
        return await self.request(
            method,
            realm,
            "admin",
            "realms",
            realm,
            *segments,
            body=body,
            params=params,
            response_model=response_model,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "KeycloakClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
