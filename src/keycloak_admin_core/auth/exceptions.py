"""Custom exceptions for credential resolution and authentication.

This module defines exceptions raised while resolving credentials from
configuration sources and while exchanging them for bearer tokens.

Example:
    ```python
    from keycloak_admin_core.auth.exceptions import AuthenticationError

    try:
        token = await strategy.obtain_token("master")
    except AuthenticationError as e:
        print(f"Login to realm {e.realm} failed: {e.error_description}")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any credential-related error.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required configuration value cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a secret file cannot be read."""

    pass


class AuthenticationError(CredentialError):
    """Raised when a bearer token cannot be obtained.

    Covers credentials rejected by the token endpoint, malformed token
    responses and empty tokens returned by a token provider callback.

    Attributes:
        realm: Realm the token was requested for (if known).
        status_code: HTTP status of the token endpoint response (if any).
        error: OAuth2 error code returned by the server (e.g. ``invalid_grant``).
        error_description: Human-readable description returned by the server.
    """

    def __init__(
        self,
        message: str,
        *,
        realm: str | None = None,
        status_code: int | None = None,
        error: str | None = None,
        error_description: str | None = None,
    ):
        super().__init__(message)
        self.realm = realm
        self.status_code = status_code
        self.error = error
        self.error_description = error_description
