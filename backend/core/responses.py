from dataclasses import dataclass, field
from typing import Any


@dataclass
class Option:
    """One selectable choice offered to the approval form."""

    id: str
    value: str


@dataclass
class OptionsResult:
    """Result block of an options response. Only one page is ever returned."""

    options: list[Option] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "options": [{"id": o.id, "value": o.value} for o in self.options],
            "i18nResources": [],
            "hasMore": False,
            "nextPageToken": "",
        }


def make_envelope(code: int, msg: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    """Create the standard {code, msg, data} response body."""
    return {"code": code, "msg": msg, "data": data or {}}


def success_envelope(result: OptionsResult) -> dict[str, Any]:
    return make_envelope(0, "success", {"result": result.to_dict()})
