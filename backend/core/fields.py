"""Conversion of raw Base field values into option display strings.

A raw value coming from the records API is first classified into one of
four shapes, then rendered:

    Empty     None or ""; the record produces no option
    Sequence  a list; elements are rendered and joined with ", "
    Named     an object with a truthy "name"; rendered as that name
    Scalar    anything else; rendered in its canonical string form
"""

import json
from decimal import Decimal
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from core.responses import Option


SEPARATOR = ", "


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Sequence:
    items: tuple[Any, ...]


@dataclass(frozen=True)
class Named:
    name: Any


@dataclass(frozen=True)
class Scalar:
    value: Any


FieldValue = Empty | Sequence | Named | Scalar


def _name_of(value: Any) -> Any:
    if isinstance(value, dict):
        return value.get("name") or None
    return None


def classify(raw: Any) -> FieldValue:
    """Tag a raw field value with its shape."""
    if raw is None or raw == "":
        return Empty()
    if isinstance(raw, (list, tuple)):
        return Sequence(tuple(raw))
    name = _name_of(raw)
    if name is not None:
        return Named(name)
    return Scalar(raw)


def _float_text(value: float) -> str:
    """Format a float using its shortest round-trip digits.

    Plain notation is used for magnitudes in [1e-6, 1e21), exponent notation
    without zero padding (1e-7, 1.5e+21) outside it.
    """
    if value != value or value in (float("inf"), float("-inf")):
        return {"nan": "NaN", "inf": "Infinity", "-inf": "-Infinity"}[repr(value)]
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return f"{prefix}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{prefix}0.{'0' * -n}{digits}"

    e = n - 1
    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{prefix}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def to_text(value: Any) -> str:
    """Render a single value the way the options host displays it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def render(value: FieldValue) -> str | None:
    """Render a classified value, or None when it yields no option."""
    if isinstance(value, Empty):
        return None
    if isinstance(value, Sequence):
        parts = []
        for item in value.items:
            name = _name_of(item)
            parts.append(to_text(item if name is None else name))
        return SEPARATOR.join(parts)
    if isinstance(value, Named):
        return to_text(value.name)
    if isinstance(value, Scalar):
        return to_text(value.value)
    raise TypeError(f"Unknown field value shape: {value!r}")


def normalize(raw: Any) -> str | None:
    """Display string for a raw field value, or None to skip the record."""
    return render(classify(raw))


def build_options(records: Iterable[dict[str, Any]], field_name: str) -> list[Option]:
    """Build options from records, keeping the first record for each value."""
    options: list[Option] = []
    seen: set[str] = set()

    for record in records:
        fields = record.get("fields") or {}
        value = normalize(fields.get(field_name))
        if value is None or value in seen:
            continue
        seen.add(value)
        options.append(Option(id=record.get("id"), value=value))

    return options
