"""
app/mappers/transform_engine.py

Pure value-level transforms applied to mapped source fields.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

from app import failure_codes
from app.domain.mapping_config import TransformKind

NUMBER_FALLBACK = 0

# Plain ASCII decimal notation with an optional exponent.
_NUMERIC_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class TransformError(ValueError):
    """
    Raised when a value cannot be transformed; record-local, never fatal.
    """

    code = failure_codes.TRANSFORM_ERROR

    def __init__(self, *, source_field: str, value: Any, kind: TransformKind) -> None:
        self.source_field = source_field
        self.value = value
        self.kind = kind
        super().__init__(f'Field "{source_field}" could not be converted to {kind.value}')


def to_text(value: Any) -> str:
    """
    Textual representation used by the string transforms and record ids.
    """

    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def apply_transform(
    value: Any,
    kind: TransformKind | str | None,
    *,
    source_field: str,
) -> Any:
    """
    Apply ``kind`` to ``value``.

    ``None`` as the kind means identity. Raises TransformError for values the
    ``number`` transform cannot coerce.
    """

    resolved = TransformKind.NONE if kind is None else TransformKind(kind)

    if resolved is TransformKind.NONE:
        return value
    if resolved is TransformKind.UPPERCASE:
        return to_text(value).upper()
    if resolved is TransformKind.LOWERCASE:
        return to_text(value).lower()
    if resolved is TransformKind.TRIM:
        return to_text(value).strip()
    if resolved is TransformKind.NUMBER:
        return _to_number(value, source_field=source_field)
    raise ValueError(f"Unhandled transform kind: {resolved!r}")


def _to_number(value: Any, *, source_field: str) -> int | float:
    """
    Coerce ``value`` to a finite number.

    Text must be plain decimal notation; integral text without a fraction or
    exponent becomes ``int``. Blank text is ``0``.
    """

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _NUMERIC_TEXT.fullmatch(text):
            if text.lstrip("+-").isdigit():
                return int(text)
            parsed = float(text)
            if math.isfinite(parsed):
                return parsed

    raise TransformError(source_field=source_field, value=value, kind=TransformKind.NUMBER)
