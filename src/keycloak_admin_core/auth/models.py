"""Credential variants accepted by the client.

Exactly one variant is configured per client. Secrets are excluded from
``repr`` so configs can be logged safely.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

TokenProvider = Callable[[], str | None | Awaitable[str | None]]


@dataclass(frozen=True)
class PasswordCredentials:
    """Resource owner password grant (``grant_type=password``)."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class ClientSecretCredentials:
    """Client credentials grant (``grant_type=client_credentials``)."""

    client_secret: str = field(repr=False)


@dataclass(frozen=True)
class TokenProviderCredentials:
    """Bearer token supplied by a zero-argument callback."""

    token_provider: TokenProvider = field(repr=False)


Credentials = PasswordCredentials | ClientSecretCredentials | TokenProviderCredentials
