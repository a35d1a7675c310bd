"""Immutable client configuration.

A ``ClientConfig`` carries everything needed to reach and authenticate
against one Keycloak server: the base URL, the ``/auth`` compatibility flag,
an optional authentication realm override, exactly one credential variant and
the initial serializer.

Example:
    ```python
    from keycloak_admin_core.config import ClientConfig

    config = ClientConfig.create(
        "https://idp.example.com",
        client_secret="s3cr3t",
        include_auth_segment=False,
        authentication_realm="master",
    )

    # Or from KEYCLOAK_* environment variables / .env
    config = ClientConfig.from_env()
    ```
"""

import logging
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from keycloak_admin_core.auth.credentials import CredentialResolver
from keycloak_admin_core.auth.models import (
    ClientSecretCredentials,
    Credentials,
    PasswordCredentials,
    TokenProvider,
    TokenProviderCredentials,
)
from keycloak_admin_core.auth.strategies import DEFAULT_CLIENT_ID
from keycloak_admin_core.errors.exceptions import ConfigurationError
from keycloak_admin_core.serialization import JsonSerializer, SerializerPolicy

logger = logging.getLogger(__name__)

ENV_PREFIX = "KEYCLOAK_"


def validate_serializer(serializer: object) -> SerializerPolicy:
    """Return ``serializer`` if it implements SerializerPolicy.

    Raises:
        ConfigurationError: If ``serializer`` is None or lacks serialize/deserialize.
    """
    if serializer is None:
        raise ConfigurationError("Serializer must not be None")
    if not isinstance(serializer, SerializerPolicy):
        raise ConfigurationError(
            f"Serializer {type(serializer).__name__} must implement serialize() and deserialize()"
        )
    return serializer


@dataclass(frozen=True)
class ClientConfig:
    """Connection and credential settings for one Keycloak server.

    Attributes:
        base_url: Server URL without the ``/auth`` segment.
        credentials: Exactly one credential variant.
        include_auth_segment: True for servers before version 17.
        authentication_realm: Realm to authenticate against when it differs
            from the realm being managed. Empty means "same realm".
        client_id: OAuth client used for password and client credentials grants.
        serializer: Serializer policy in effect when the client is created.
    """

    base_url: str
    credentials: Credentials
    include_auth_segment: bool = True
    authentication_realm: str | None = None
    client_id: str = DEFAULT_CLIENT_ID
    serializer: SerializerPolicy = field(default_factory=JsonSerializer)

    def __post_init__(self) -> None:
        parts = urlsplit(self.base_url or "")
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigurationError(f"Invalid Keycloak base URL: {self.base_url!r}")
        if parts.query or parts.fragment:
            raise ConfigurationError(f"Keycloak base URL must not carry a query or fragment: {self.base_url!r}")

        if not isinstance(self.credentials, Credentials):
            raise ConfigurationError(f"Unsupported credentials type: {type(self.credentials).__name__}")

        match self.credentials:
            case PasswordCredentials(username=username, password=password):
                if not username or not password:
                    raise ConfigurationError("Password credentials need both username and password")
            case ClientSecretCredentials(client_secret=secret):
                if not secret:
                    raise ConfigurationError("Client secret must not be empty")
            case TokenProviderCredentials(token_provider=provider):
                if not callable(provider):
                    raise ConfigurationError("Token provider must be callable")

        if not self.client_id:
            raise ConfigurationError("client_id must not be empty")

        validate_serializer(self.serializer)

    @classmethod
    def create(
        cls,
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
    ) -> "ClientConfig":
        """Build a config from keyword credentials.

        Exactly one credential mode must be given: ``username`` and
        ``password``, ``client_secret``, or ``token_provider``.

        Raises:
            ConfigurationError: If zero or several credential modes are given.
        """
        modes = []
        if username is not None or password is not None:
            modes.append(PasswordCredentials(username=username or "", password=password or ""))
        if client_secret is not None:
            modes.append(ClientSecretCredentials(client_secret=client_secret))
        if token_provider is not None:
            modes.append(TokenProviderCredentials(token_provider=token_provider))

        if not modes:
            raise ConfigurationError(
                "No credentials configured: pass username/password, client_secret or token_provider"
            )
        if len(modes) > 1:
            names = ", ".join(type(m).__name__ for m in modes)
            raise ConfigurationError(f"Ambiguous credentials configured ({names}); pass exactly one mode")

        return cls(
            base_url=base_url,
            credentials=modes[0],
            include_auth_segment=include_auth_segment,
            authentication_realm=authentication_realm,
            client_id=client_id,
            serializer=serializer if serializer is not None else JsonSerializer(),
        )

    @classmethod
    def from_env(
        cls,
        resolver: CredentialResolver | None = None,
        *,
        prefix: str = ENV_PREFIX,
        token_provider: TokenProvider | None = None,
        serializer: SerializerPolicy | None = None,
    ) -> "ClientConfig":
        """Build a config from ``KEYCLOAK_*`` environment variables and .env.

        Reads ``URL`` (required), ``USERNAME``/``PASSWORD``,
        ``CLIENT_SECRET`` or ``CLIENT_SECRET_FILE``, ``CLIENT_ID``,
        ``INCLUDE_AUTH_SEGMENT`` and ``AUTH_REALM`` under ``prefix``.
        A ``token_provider`` cannot come from the environment and may be
        passed directly instead of secrets.

        Raises:
            CredentialNotFoundError: If the server URL is not configured.
            ConfigurationError: If credentials are missing or ambiguous.
        """
        resolver = resolver or CredentialResolver()

        base_url = resolver.resolve(env_var_name=f"{prefix}URL", required=True, mask_in_logs=False)
        client_secret = resolver.resolve(env_var_name=f"{prefix}CLIENT_SECRET")
        if client_secret is None:
            client_secret = resolver.resolve_from_file(env_var_name=f"{prefix}CLIENT_SECRET_FILE")

        config = cls.create(
            base_url,
            username=resolver.resolve(env_var_name=f"{prefix}USERNAME", mask_in_logs=False),
            password=resolver.resolve(env_var_name=f"{prefix}PASSWORD"),
            client_secret=client_secret,
            token_provider=token_provider,
            include_auth_segment=resolver.resolve_bool(env_var_name=f"{prefix}INCLUDE_AUTH_SEGMENT", default=True),
            authentication_realm=resolver.resolve(env_var_name=f"{prefix}AUTH_REALM", mask_in_logs=False) or None,
            client_id=resolver.resolve(
                env_var_name=f"{prefix}CLIENT_ID", default=DEFAULT_CLIENT_ID, mask_in_logs=False
            ),
            serializer=serializer,
        )
        logger.debug(f"Loaded Keycloak config from environment: {config}")
        return config
