"""JSON serialization policies for admin API request and response bodies.

Keycloak representations use camelCase property names and treat an absent
property differently from an explicit ``null`` on update. The default policy
therefore renames *declared* fields of pydantic models and dataclasses to
camelCase and drops their ``None`` values. Keys of plain dicts (free-form maps
such as client ``attributes`` or mapper ``config``) and of decoded responses
are never renamed, so a body read with GET can be written back with PUT
unchanged.

Example:
    ```python
    from keycloak_admin_core.serialization import JsonSerializer, KeycloakModel


    class UserRepresentation(KeycloakModel):
        username: str
        first_name: str | None = None
        attributes: dict[str, list[str]] | None = None


    serializer = JsonSerializer()
    serializer.serialize(UserRepresentation(username="ada", attributes={"employee_id": ["7"]}))
    # '{"username":"ada","attributes":{"employee_id":["7"]}}'
    ```
"""

import dataclasses
from typing import Any, Protocol, TypeVar, runtime_checkable

import pydantic_core
from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel

T = TypeVar("T")


@runtime_checkable
class SerializerPolicy(Protocol):
    """Encodes request bodies and decodes response bodies."""

    def serialize(self, obj: Any) -> str: ...

    def deserialize(self, text: str) -> Any: ...


class KeycloakModel(BaseModel):
    """Base for Keycloak representations.

    Fields are declared in snake_case and exchanged in camelCase. Properties
    the model does not declare are kept under their original names, so
    representations from newer servers survive a read-modify-write cycle.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase
        extra="allow",
    )


class JsonSerializer:
    """JSON serializer with configurable field casing and null omission.

    Args:
        camel_case: Emit camelCase names for declared model and dataclass fields.
        omit_nulls: Drop declared fields whose value is ``None``.
    """

    def __init__(self, *, camel_case: bool = True, omit_nulls: bool = True) -> None:
        self.camel_case = camel_case
        self.omit_nulls = omit_nulls

    def __repr__(self) -> str:
        return f"JsonSerializer(camel_case={self.camel_case}, omit_nulls={self.omit_nulls})"

    def serialize(self, obj: Any) -> str:
        return pydantic_core.to_json(self._encode(obj)).decode()

    def deserialize(self, text: str) -> Any:
        """Decode a response body. Keys are returned as sent by the server."""
        if not text:
            return None
        return pydantic_core.from_json(text)

    def load(self, data: Any, model_type: type[T]) -> T:
        """Validate decoded data against ``model_type`` (e.g. a KeycloakModel)."""
        return TypeAdapter(model_type).validate_python(data)

    def _encode(self, value: Any) -> Any:
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json", by_alias=self.camel_case, exclude_none=self.omit_nulls)

        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            encoded = {}
            for f in dataclasses.fields(value):
                item = getattr(value, f.name)
                if item is None and self.omit_nulls:
                    continue
                encoded[to_camel(f.name) if self.camel_case else f.name] = self._encode(item)
            return encoded

        if isinstance(value, dict):
            return {key: self._encode(item) for key, item in value.items()}

        if isinstance(value, (list, tuple, set, frozenset)):
            return [self._encode(item) for item in value]

        return value
