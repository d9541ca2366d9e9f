"""Conversion of domain objects to JSON-ready payloads.

Field names are emitted in camelCase, the convention of the Chari API.
"""

from dataclasses import fields, is_dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from chari_stub.models.enums import Absence


def camel_case(name: str) -> str:
    """Convert ``snake_case`` to ``camelCase``."""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def dataclass_to_dict(obj: Any, exclude: tuple[str, ...] = ()) -> dict:
    """Convert a dataclass to a camelCase dict with serialized values.

    Uses ``fields()`` + ``getattr`` so nested dataclasses are serialized
    through ``serialize_value`` rather than deep-copied by ``asdict``.
    """
    return {
        camel_case(f.name): serialize_value(getattr(obj, f.name))
        for f in fields(obj)
        if f.name not in exclude
    }


def format_timestamp(value: datetime) -> str:
    """ISO-8601 with a ``Z`` suffix for UTC values."""
    if value.tzinfo is not None and value.utcoffset() == timezone.utc.utcoffset(None):
        return value.replace(tzinfo=None).isoformat() + "Z"
    return value.isoformat()


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Absence):
        return None
    elif isinstance(value, Decimal):
        return float(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return format_timestamp(value)
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value
