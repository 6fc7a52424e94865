"""Parsing and validation of inbound options requests."""

from dataclasses import dataclass
from typing import Any

from core.errors import InvalidSecret, MalformedRequestBody, MissingParameter


@dataclass
class OptionsRequest:
    app_token: Any = None
    table_id: Any = None
    field_name: Any = None
    token: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "OptionsRequest":
        if not isinstance(payload, dict):
            raise MalformedRequestBody("Request body must be a JSON object")
        return cls(
            app_token=payload.get("app_token"),
            table_id=payload.get("table_id"),
            field_name=payload.get("field_name"),
            token=payload.get("token"),
        )

    def validate(self, secret: str) -> None:
        """Check the shared secret, then the table and field identifiers.

        Raises:
            InvalidSecret: If token does not match secret exactly. An empty
                           secret matches nothing.
            MissingParameter: If app_token, table_id or field_name is missing.
        """
        if not secret or self.token != secret:
            raise InvalidSecret()

        if not self.app_token or not self.table_id or not self.field_name:
            raise MissingParameter()
