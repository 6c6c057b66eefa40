"""Codec for label-list columns.

Some multi-valued attributes (tools delivered, sign-up categories, resources
sent) are stored as a single text column holding a JSON array of strings.
Older rows may hold comma-separated text, or the literal ``[object Object]``
left behind by a client serialization bug; both are read without error.
"""

import json
import logging
from typing import Annotated, Any, Iterable

from pydantic import BeforeValidator

logger = logging.getLogger(__name__)

CORRUPT_MARKER = "[object Object]"


def encode_labels(labels: Iterable[str] | None) -> str:
    """Encode labels as JSON array text. ``None`` or empty encodes to ``"[]"``."""
    return json.dumps([str(label) for label in (labels or [])])


def _clean(items: Iterable[Any]) -> list[str]:
    cleaned = []
    for item in items:
        if item is None or isinstance(item, (dict, list)):
            continue
        text = str(item).strip()
        if text and text != CORRUPT_MARKER:
            cleaned.append(text)
    return cleaned


def _split(text: str) -> list[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def decode_labels(value: Any) -> list[str]:
    """Decode a stored label list. Never raises; worst case returns []."""
    if isinstance(value, (list, tuple)):
        return _clean(value)
    if not isinstance(value, str):
        return []

    text = value.strip()
    if not text or text == CORRUPT_MARKER:
        return []

    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return _clean(parsed)

    logger.debug(f"Label list is not a JSON array, splitting on commas: {text!r}")
    return [part for part in _split(text) if part != CORRUPT_MARKER]


# Accepts a JSON array or legacy text form on input; always a list afterwards.
LabelList = Annotated[list[str], BeforeValidator(decode_labels)]
