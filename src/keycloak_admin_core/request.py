"""Authenticated base requests for the admin API.

``RequestFactory.base_request(realm)`` returns a ``ResolvedRequest``: the
server root URL with a bearer token for the effective authentication realm
and the serializer in effect at call time. Resource helpers append their own
path (``admin/realms/{realm}/users`` and so on), method and body.
"""

import logging
from dataclasses import dataclass, field, replace
from threading import Lock
from typing import Any

import httpx

from keycloak_admin_core.auth.strategies import CredentialStrategy
from keycloak_admin_core.config import validate_serializer
from keycloak_admin_core.realm import RealmResolver
from keycloak_admin_core.serialization import SerializerPolicy
from keycloak_admin_core.urls import UrlBuilder, quote_segment

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class ResolvedRequest:
    """An authenticated request prefix, rebuilt on every call.

    Attributes:
        url: Fully qualified URL, ending in ``/`` until segments are appended.
        headers: Request headers including ``Authorization``.
        serializer: Serializer snapshot used for bodies of this request.
        realm: Realm the token was obtained from.
    """

    url: httpx.URL
    headers: dict[str, str] = field(repr=False)
    serializer: SerializerPolicy
    realm: str

    @property
    def authorization_header(self) -> str:
        return self.headers["Authorization"]

    def append_path_segments(self, *segments: str) -> "ResolvedRequest":
        """Return a copy with percent-encoded ``segments`` appended to the path."""
        if not segments:
            return self
        path = "/".join(quote_segment(s) for s in segments)
        base = str(self.url)
        if not base.endswith("/"):
            base += "/"
        return replace(self, url=httpx.URL(base + path))

    def build(
        self,
        method: str,
        *segments: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Request:
        """Build an ``httpx.Request`` for ``method`` below this prefix.

        ``body`` is encoded with the bound serializer. ``None`` sends no body.
        """
        target = self.append_path_segments(*segments)
        headers = dict(self.headers)
        content = None
        if body is not None:
            content = self.serializer.serialize(body)
            headers["Content-Type"] = JSON_CONTENT_TYPE

        return httpx.Request(method.upper(), target.url, headers=headers, params=params, content=content)


class RequestFactory:
    """Compose realm resolution, URL building and token acquisition.

    The serializer reference is guarded by a lock: ``set_serializer`` and
    ``base_request`` never observe a half-replaced value, and each returned
    request keeps the serializer it was built with.
    """

    def __init__(
        self,
        *,
        urls: UrlBuilder,
        realms: RealmResolver,
        strategy: CredentialStrategy,
        serializer: SerializerPolicy,
    ) -> None:
        self._urls = urls
        self._realms = realms
        self._strategy = strategy
        self._serializer = validate_serializer(serializer)
        self._serializer_lock = Lock()

    @property
    def serializer(self) -> SerializerPolicy:
        with self._serializer_lock:
            return self._serializer

    def set_serializer(self, serializer: SerializerPolicy) -> None:
        """Replace the serializer for subsequent requests.

        Raises:
            ConfigurationError: If ``serializer`` is None or invalid. The
                previous serializer stays in effect.
        """
        validated = validate_serializer(serializer)
        with self._serializer_lock:
            self._serializer = validated
        logger.debug(f"Serializer replaced with {validated!r}")

    async def base_request(self, requested_realm: str) -> ResolvedRequest:
        """Return an authenticated request prefix for ``requested_realm``.

        Raises:
            AuthenticationError: Propagated from the credential strategy.
        """
        # Always valid: the constructor and set_serializer reject invalid values
        serializer = self.serializer
        effective_realm = self._realms.resolve(requested_realm)
        url = self._urls.build()

        if effective_realm != requested_realm:
            logger.debug(f"Authenticating against realm '{effective_realm}' to manage realm '{requested_realm}'")

        token = await self._strategy.obtain_token(effective_realm)

        return ResolvedRequest(
            url=url,
            headers={"Authorization": f"Bearer {token}", "Accept": JSON_CONTENT_TYPE},
            serializer=serializer,
            realm=effective_realm,
        )
