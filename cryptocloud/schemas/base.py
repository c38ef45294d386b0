"""
Shared base schemas for the CryptoCloud API contract.

The gateway speaks camelCase JSON. Models accept either the wire alias or
the Python field name, and serialize back to the wire alias.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CryptocloudRequest(BaseModel):
    """Base for request bodies and query parameters sent to the gateway."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the JSON shape the gateway expects."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class CryptocloudResponse(BaseModel):
    """Base for gateway responses; unknown fields are preserved."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
