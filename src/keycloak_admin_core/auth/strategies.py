"""Strategies for obtaining a bearer token.

Each strategy implements ``obtain_token(target_realm)``. The two grant
strategies post a form-encoded request to the realm's OpenID Connect token
endpoint and return its ``access_token``. A new token is requested on every
call; nothing is cached.

Example:
    ```python
    import httpx

    from keycloak_admin_core.auth.strategies import PasswordGrantStrategy
    from keycloak_admin_core.urls import UrlBuilder

    async with httpx.AsyncClient() as http:
        strategy = PasswordGrantStrategy(
            username="admin",
            password="secret",
            urls=UrlBuilder("https://idp.example.com", include_auth_segment=False),
            http=http,
        )
        token = await strategy.obtain_token("master")
    ```
"""

import inspect
import logging
from abc import ABC, abstractmethod

import httpx

from keycloak_admin_core.auth.exceptions import AuthenticationError
from keycloak_admin_core.auth.models import (
    ClientSecretCredentials,
    Credentials,
    PasswordCredentials,
    TokenProvider,
    TokenProviderCredentials,
)
from keycloak_admin_core.errors.exceptions import ConfigurationError
from keycloak_admin_core.errors.models import KeycloakErrorBody
from keycloak_admin_core.urls import UrlBuilder

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_ID = "admin-cli"


class CredentialStrategy(ABC):
    """Obtain a bearer token for a realm."""

    @abstractmethod
    async def obtain_token(self, target_realm: str) -> str:
        """Return a bearer token valid in ``target_realm``.

        Raises:
            AuthenticationError: If no token can be obtained.
        """


class TokenProviderStrategy(CredentialStrategy):
    """Use a token returned by an externally supplied callback.

    The callback may be a plain function or return an awaitable. Its value is
    passed through unchanged; an empty value is an error.
    """

    def __init__(self, token_provider: TokenProvider) -> None:
        self._token_provider = token_provider

    async def obtain_token(self, target_realm: str) -> str:
        token = self._token_provider()
        if inspect.isawaitable(token):
            token = await token

        if not token:
            raise AuthenticationError("Token provider returned an empty token", realm=target_realm)

        logger.debug(f"Using token from provider callback for realm '{target_realm}'")
        return token


class GrantStrategy(CredentialStrategy):
    """Base for strategies that call the realm token endpoint."""

    grant_type: str

    def __init__(self, *, client_id: str, urls: UrlBuilder, http: httpx.AsyncClient) -> None:
        self.client_id = client_id
        self._urls = urls
        self._http = http

    @abstractmethod
    def _form_data(self) -> dict[str, str]:
        """Grant-specific form fields."""

    async def obtain_token(self, target_realm: str) -> str:
        endpoint = self._urls.token_endpoint(target_realm)
        data = {"grant_type": self.grant_type, "client_id": self.client_id, **self._form_data()}

        logger.debug(f"Requesting {self.grant_type} token from realm '{target_realm}' (client_id={self.client_id})")
        # httpx.TransportError propagates unchanged
        response = await self._http.post(endpoint, data=data)

        if not response.is_success:
            error_body = KeycloakErrorBody.from_response(response)
            error = error_body.error if error_body else None
            description = error_body.error_description if error_body else None
            logger.warning(
                f"Token request to realm '{target_realm}' rejected with {response.status_code}"
                + (f" ({error})" if error else "")
            )
            message = f"Token request to realm '{target_realm}' failed with HTTP {response.status_code}"
            if description or error:
                message += f": {description or error}"
            raise AuthenticationError(
                message,
                realm=target_realm,
                status_code=response.status_code,
                error=error,
                error_description=description,
            )

        return self._extract_token(response, target_realm)

    def _extract_token(self, response: httpx.Response, target_realm: str) -> str:
        try:
            payload = response.json()
        except ValueError as e:
            raise AuthenticationError(
                f"Token endpoint of realm '{target_realm}' returned a non-JSON body",
                realm=target_realm,
                status_code=response.status_code,
            ) from e

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token or not isinstance(token, str):
            raise AuthenticationError(
                f"Token response from realm '{target_realm}' has no access_token",
                realm=target_realm,
                status_code=response.status_code,
            )
        return token


class PasswordGrantStrategy(GrantStrategy):
    """Resource owner password grant with a stored username and password."""

    grant_type = "password"

    def __init__(
        self,
        *,
        username: str,
        password: str,
        urls: UrlBuilder,
        http: httpx.AsyncClient,
        client_id: str = DEFAULT_CLIENT_ID,
    ) -> None:
        super().__init__(client_id=client_id, urls=urls, http=http)
        self.username = username
        self._password = password

    def _form_data(self) -> dict[str, str]:
        return {"username": self.username, "password": self._password}


class ClientCredentialsStrategy(GrantStrategy):
    """Client credentials grant with a stored client secret."""

    grant_type = "client_credentials"

    def __init__(
        self,
        *,
        client_secret: str,
        urls: UrlBuilder,
        http: httpx.AsyncClient,
        client_id: str = DEFAULT_CLIENT_ID,
    ) -> None:
        super().__init__(client_id=client_id, urls=urls, http=http)
        self._client_secret = client_secret

    def _form_data(self) -> dict[str, str]:
        return {"client_secret": self._client_secret}


def create_credential_strategy(
    credentials: Credentials,
    *,
    urls: UrlBuilder,
    http: httpx.AsyncClient,
    client_id: str = DEFAULT_CLIENT_ID,
) -> CredentialStrategy:
    """Select the strategy matching the configured credential variant."""
    match credentials:
        case TokenProviderCredentials(token_provider=provider):
            return TokenProviderStrategy(provider)
        case PasswordCredentials(username=username, password=password):
            return PasswordGrantStrategy(
                username=username, password=password, urls=urls, http=http, client_id=client_id
            )
        case ClientSecretCredentials(client_secret=secret):
            return ClientCredentialsStrategy(client_secret=secret, urls=urls, http=http, client_id=client_id)
        case _:
            raise ConfigurationError(f"Unsupported credentials type: {type(credentials).__name__}")
