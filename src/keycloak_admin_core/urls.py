"""Base URL construction for the Keycloak server.

Keycloak 17 (Quarkus distribution) dropped the ``/auth`` context path. Servers
before that serve both the admin API and the OpenID Connect endpoints under
``/auth``, so one flag controls every URL this client produces, token
requests included.
"""

import logging
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

AUTH_SEGMENT = "auth"


def quote_segment(segment: str) -> str:
    """Percent-encode a single path segment (``/`` included)."""
    return quote(str(segment), safe="")


class UrlBuilder:
    """Build the server root URL and realm token endpoints.

    Args:
        base_url: Scheme and host of the server, optionally with a path prefix.
        include_auth_segment: Append ``/auth`` (servers before version 17).

    Example:
        ```python
        urls = UrlBuilder("https://idp.example.com", include_auth_segment=True)
        str(urls.build())  # 'https://idp.example.com/auth/'
        str(urls.token_endpoint("master"))
        # 'https://idp.example.com/auth/realms/master/protocol/openid-connect/token'
        ```
    """

    def __init__(self, base_url: str, include_auth_segment: bool = True) -> None:
        self.base_url = base_url
        self.include_auth_segment = include_auth_segment

    def build(self) -> httpx.URL:
        """Return the root URL, always ending in ``/``."""
        url = httpx.URL(self.base_url)
        path = url.path.rstrip("/")
        if self.include_auth_segment:
            path = f"{path}/{AUTH_SEGMENT}"
        return url.copy_with(path=f"{path}/")

    def token_endpoint(self, realm: str) -> httpx.URL:
        """Return the OpenID Connect token endpoint of ``realm``."""
        url = self.build().join(f"realms/{quote_segment(realm)}/protocol/openid-connect/token")
        logger.debug(f"Token endpoint for realm '{realm}': {url}")
        return url
