"""Shared pydantic building blocks for the Outreach CRM API.

Wire format is camelCase (``companyId``, ``dateOfContact``); snake_case is
accepted on input as well.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(word.capitalize() for word in components[1:])


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
        from_attributes=True,
    )


def blank_to_none(value: Any) -> Any:
    """Form inputs send "" for untouched optional fields."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalDate = Annotated[date | None, BeforeValidator(blank_to_none)]

# Whitespace is stripped before the length check, so "   " is rejected
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

CENT = Decimal("0.01")


def round_money(value: Any) -> Any:
    """Round a money amount to whole pence, as a NUMERIC(10,2) column would.

    Floats go through ``str`` so ``0.1 + 0.2`` becomes ``0.30``. Values that
    are not numbers are returned unchanged for the decimal validator to reject.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str) and not value.strip():
        return None
    try:
        return Decimal(str(value).strip()).quantize(CENT, rounding=ROUND_HALF_UP)
    except (ArithmeticError, ValueError):
        return value


Money = Annotated[
    Decimal,
    Field(ge=0, max_digits=10, decimal_places=2),
    BeforeValidator(round_money),
]


def unwrap_envelope(data: Any, key: str, siblings: tuple[str, ...] = ()) -> Any:
    """Accept both ``{"<key>": {...}, sibling: ...}`` and flat request bodies.

    Sibling keys (e.g. ``tagIds`` next to ``company``) are merged into the
    unwrapped object so one model can validate either shape.
    """
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        merged = dict(data[key])
        for sibling in siblings:
            if sibling in data:
                merged[sibling] = data[sibling]
        return merged
    return data
