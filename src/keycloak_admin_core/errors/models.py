"""Models for error bodies returned by the Keycloak server."""

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class KeycloakErrorBody:
    """Error payload returned by Keycloak.

    The admin API answers with ``{"errorMessage": ..., "field": ..., "params": [...]}``
    while the OpenID Connect endpoints use the OAuth2 ``{"error": ..., "error_description": ...}``
    shape. Both are folded into one object.
    """

    error: str | None = None  # OAuth2 error code or admin API error key
    error_description: str | None = None
    error_message: str | None = None  # Admin API "errorMessage"
    field: str | None = None  # Attribute that failed validation
    params: list[Any] | None = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "KeycloakErrorBody | None":
        """Parse a Keycloak error body from an HTTP response.

        Args:
            response: HTTP response object

        Returns:
            KeycloakErrorBody or None if the body is not a recognised error object
        """
        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            return None

        if not isinstance(data, dict):
            return None

        known_fields = {"error", "error_description", "errorMessage", "field", "params"}
        if not any(field in data for field in known_fields):
            return None

        params = data.get("params")
        return cls(
            error=data.get("error"),
            error_description=data.get("error_description"),
            error_message=data.get("errorMessage"),
            field=data.get("field"),
            params=list(params) if isinstance(params, list) else None,
        )

    def to_exception_message(self) -> str:
        """Convert the error body to an exception message."""
        lines = []

        if self.error_message:
            lines.append(self.error_message)
        elif self.error_description:
            lines.append(self.error_description)
        elif self.error:
            lines.append(self.error)

        if self.error and self.error not in lines:
            lines.append(f"Error: {self.error}")

        if self.field:
            lines.append(f"Field: {self.field}")

        if self.params:
            lines.append(f"Params: {', '.join(str(p) for p in self.params)}")

        return "\n".join(lines) if lines else "Unknown Keycloak error"
