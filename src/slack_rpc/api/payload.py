"""Compact JSON encoding for structured parameter values.

Blocks, attachments, dialogs and views travel as a single form parameter
holding JSON text. Absent (None) fields are dropped, no whitespace is emitted
and key order follows the model declaration, so the same value always encodes
to the same bytes.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel


def _strip_none(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return _strip_none(value.model_dump(mode="json", exclude_none=True, by_alias=True))
    if isinstance(value, dict):
        return {k: _strip_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_strip_none(v) for v in value]
    return value


def is_empty_payload(value: Any) -> bool:
    """True when a struct argument should not be sent at all."""
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def encode_payload(value: Any) -> str:
    return json.dumps(_strip_none(value), separators=(",", ":"), ensure_ascii=False)
