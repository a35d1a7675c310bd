"""Authentication components for the Keycloak admin client.

This module provides:
- Credential variants (password, client secret, token callback)
- Token acquisition strategies for each variant
- Multi-source resolution of connection settings and secrets

Example:
    ```python
    from keycloak_admin_core.auth import CredentialResolver

    resolver = CredentialResolver()
    secret = resolver.resolve(env_var_name="KEYCLOAK_CLIENT_SECRET", required=True)
    ```
"""

from keycloak_admin_core.auth.credentials import CredentialResolver
from keycloak_admin_core.auth.exceptions import (
    AuthenticationError,
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)
from keycloak_admin_core.auth.models import (
    ClientSecretCredentials,
    Credentials,
    PasswordCredentials,
    TokenProviderCredentials,
)
from keycloak_admin_core.auth.strategies import (
    ClientCredentialsStrategy,
    CredentialStrategy,
    PasswordGrantStrategy,
    TokenProviderStrategy,
    create_credential_strategy,
)

__all__ = [
    "AuthenticationError",
    "ClientCredentialsStrategy",
    "ClientSecretCredentials",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "CredentialStrategy",
    "Credentials",
    "PasswordCredentials",
    "PasswordGrantStrategy",
    "TokenProviderCredentials",
    "TokenProviderStrategy",
    "create_credential_strategy",
]
