"""Testing utilities for code built on the Keycloak admin client.

Helpers produce token endpoint responses and an ``httpx.MockTransport``
handler that records every token request, so tests can assert on the
endpoint and grant that were used without a running server.

Example:
    ```python
    import httpx

    from keycloak_admin_core import KeycloakClient
    from keycloak_admin_core.testing import token_endpoint_handler

    handler = token_endpoint_handler(token="abc")
    client = KeycloakClient(
        "https://idp.example.com",
        client_secret="s3cr3t",
        transport=httpx.MockTransport(handler),
    )
    base = await client.base_request("master")
    assert handler.token_requests[0].url.path == "/auth/realms/master/protocol/openid-connect/token"
    ```
"""

from collections.abc import Callable
from urllib.parse import parse_qs

import httpx

TOKEN_PATH_SUFFIX = "/protocol/openid-connect/token"


def create_token_response(token: str = "test-access-token", expires_in: int = 60) -> httpx.Response:
    """Successful token endpoint response."""
    return httpx.Response(
        200,
        json={
            "access_token": token,
            "expires_in": expires_in,
            "refresh_expires_in": 0,
            "token_type": "Bearer",
            "not-before-policy": 0,
            "scope": "profile email",
        },
    )


def create_error_response(
    status_code: int = 401,
    error: str = "invalid_grant",
    error_description: str = "Invalid user credentials",
) -> httpx.Response:
    """OAuth2 error response as returned by Keycloak's token endpoint."""
    return httpx.Response(status_code, json={"error": error, "error_description": error_description})


def form_data(request: httpx.Request) -> dict[str, str]:
    """Decode a form-encoded request body into a flat dict."""
    parsed = parse_qs(request.content.decode())
    return {key: values[0] for key, values in parsed.items()}


class TokenEndpointHandler:
    """``httpx.MockTransport`` handler that answers token requests.

    Token requests receive ``token_response``; every other request is passed
    to ``fallback`` (404 when none is given). All requests are recorded.
    """

    def __init__(
        self,
        token_response: httpx.Response,
        fallback: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> None:
        self.token_response = token_response
        self.fallback = fallback
        self.token_requests: list[httpx.Request] = []
        self.other_requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith(TOKEN_PATH_SUFFIX):
            self.token_requests.append(request)
            return httpx.Response(
                self.token_response.status_code,
                headers=self.token_response.headers,
                content=self.token_response.content,
            )

        self.other_requests.append(request)
        if self.fallback is not None:
            return self.fallback(request)
        return httpx.Response(404, json={"error": "Resource not found"})


def token_endpoint_handler(
    token: str = "test-access-token",
    *,
    response: httpx.Response | None = None,
    fallback: Callable[[httpx.Request], httpx.Response] | None = None,
) -> TokenEndpointHandler:
    """Create a TokenEndpointHandler returning ``token`` (or ``response``)."""
    return TokenEndpointHandler(response or create_token_response(token), fallback=fallback)


def failing_handler(request: httpx.Request) -> httpx.Response:
    """Handler that fails the test if any HTTP request is made."""
    raise AssertionError(f"Unexpected HTTP request: {request.method} {request.url}")


__all__ = [
    "TokenEndpointHandler",
    "create_error_response",
    "create_token_response",
    "failing_handler",
    "form_data",
    "token_endpoint_handler",
]
