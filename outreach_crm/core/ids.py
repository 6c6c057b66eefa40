"""Identifier-precision guard.

Primary keys can exceed 2**53, the largest integer a JavaScript client (or any
IEEE-754 double) represents exactly. IDs therefore travel on the wire as exact
decimal strings and are held as Python ``int`` internally, never ``float``.
"""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

from outreach_crm.core.errors import BadRequestError

# Largest value a BIGINT primary key column holds
MAX_STORED_ID = 2**63 - 1

ID_PATTERN = re.compile(r"^[0-9]{1,20}$")


def to_safe_id_string(value: Any) -> str | None:
    """Return the exact decimal string form of an identifier.

    Accepts ints, decimal strings and integral floats. ``None`` maps to
    ``None``. Never raises.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_safe_id_string_list(values: Any) -> list[str | None]:
    """Map ``to_safe_id_string`` over a list or tuple; anything else yields []."""
    if not isinstance(values, (list, tuple)):
        return []
    return [to_safe_id_string(v) for v in values]


def coerce_id(value: Any) -> int:
    """Convert an int or decimal string to an int without going through float.

    Raises:
        ValueError: if the value is not a non-negative integer identifier.
    """
    if isinstance(value, bool):
        raise ValueError("identifier must be an integer or decimal string")
    if isinstance(value, int):
        if 0 <= value <= MAX_STORED_ID:
            return value
        raise ValueError("identifier out of range")
    if isinstance(value, str):
        text = value.strip()
        if ID_PATTERN.match(text) and int(text) <= MAX_STORED_ID:
            return int(text)
    raise ValueError("identifier must be an integer or decimal string")


def parse_id(value: Any, label: str = "record") -> int:
    """Parse an identifier from a URL segment, query string or body field.

    Raises:
        BadRequestError: 400 ``INVALID_ID`` when the value is not an identifier.
    """
    try:
        return coerce_id(value)
    except ValueError:
        raise BadRequestError(f"Invalid {label} ID", code="INVALID_ID")


def parse_id_list(raw: str | None, label: str = "record") -> list[int]:
    """Parse a comma-separated ID list such as ``"1,2,1066067726706802699"``."""
    if not raw:
        return []
    return [parse_id(part, label) for part in raw.split(",") if part.strip()]


# Accepts JSON numbers or decimal strings; serializes to a decimal string in JSON.
SafeId = Annotated[
    int,
    BeforeValidator(coerce_id),
    PlainSerializer(to_safe_id_string, return_type=str, when_used="json"),
]

SafeIdList = list[SafeId]
