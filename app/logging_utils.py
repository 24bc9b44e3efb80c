"""
app/logging_utils.py

Structured logging helpers for mapping and import workflows.

Each event is one log line holding a compact JSON object. Field values are
rendered by ``_json_default`` so enums, timestamps and sets stay readable, and
fields whose value is ``None`` are left out.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)


def format_event(event: str, **fields: Any) -> str:
    """
    Render ``event`` and its non-null fields as compact, key-sorted JSON.
    """

    payload = {key: value for key, value in fields.items() if value is not None}
    payload["event"] = event
    return json.dumps(payload, default=_json_default, sort_keys=True, separators=(",", ":"))


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    if logger.isEnabledFor(level):
        logger.log(level, format_event(event, **fields))
