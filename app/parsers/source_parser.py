"""
app/parsers/source_parser.py

Turns raw CSV or JSON source text into an ordered list of flat records.

The default CSV strategy is a plain comma split with no quoting support: a
comma inside a value is indistinguishable from a delimiter. Callers that need
RFC 4180 quoting opt into ``strict_csv``.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from app import failure_codes
from app.domain.mapping_config import SourceType

SourceRecord = dict[str, Any]


class SourceParseError(ValueError):
    """
    Base class for source parsing failures that abort an import.
    """

    code = failure_codes.MALFORMED_SOURCE


class UnsupportedSourceTypeError(SourceParseError):
    """
    Raised when the requested source type has no parser.
    """

    code = failure_codes.UNSUPPORTED_SOURCE_TYPE

    def __init__(self, source_type: object) -> None:
        super().__init__(f"Unsupported source type: {source_type}")
        self.source_type = source_type


class MalformedSourceError(SourceParseError):
    """
    Raised when source text cannot be parsed into records.
    """


def parse_source(
    raw: str,
    source_type: SourceType | str,
    *,
    strict_csv: bool = False,
) -> list[SourceRecord]:
    """
    Parse raw source text according to ``source_type``.
    """

    try:
        resolved = SourceType(source_type)
    except ValueError as exc:
        raise UnsupportedSourceTypeError(source_type) from exc

    if resolved is SourceType.CSV:
        return parse_csv_strict(raw) if strict_csv else parse_csv(raw)
    if resolved is SourceType.JSON:
        return parse_json(raw)
    raise UnsupportedSourceTypeError(source_type)


def parse_csv(raw: str) -> list[SourceRecord]:
    """
    Split on newlines and commas; the first non-blank line is the header row.
    """

    lines = [line for line in raw.strip().split("\n") if line.strip()]
    if len(lines) < 2:
        return []

    headers = [header.strip() for header in lines[0].split(",")]
    return [
        _align_row(headers, [value.strip() for value in line.split(",")])
        for line in lines[1:]
    ]


def parse_csv_strict(raw: str) -> list[SourceRecord]:
    """
    Quote-aware CSV parsing with the same header and padding rules as ``parse_csv``.
    """

    try:
        rows = [
            row
            for row in csv.reader(io.StringIO(raw.strip()))
            if any(cell.strip() for cell in row)
        ]
    except csv.Error as exc:
        raise MalformedSourceError(f"Invalid CSV format: {exc}") from exc

    if len(rows) < 2:
        return []

    headers = [header.strip() for header in rows[0]]
    return [_align_row(headers, [value.strip() for value in row]) for row in rows[1:]]


def parse_json(raw: str) -> list[SourceRecord]:
    """
    Accept an array of objects, an object wrapping one, or a single object.

    For a wrapping object the first key (in document order) whose value is an
    array supplies the records.
    """

    try:
        parsed = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError) as exc:
        raise MalformedSourceError(f"Invalid JSON: {exc}") from exc

    if isinstance(parsed, list):
        return _require_objects(parsed)

    if isinstance(parsed, dict):
        for value in parsed.values():
            if isinstance(value, list):
                return _require_objects(value)
        return [parsed]

    raise MalformedSourceError(
        f"JSON source must be an array or an object, got {type(parsed).__name__}."
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _align_row(headers: list[str], values: list[str]) -> SourceRecord:
    record: SourceRecord = {}
    for index, header in enumerate(headers):
        record[header] = values[index] if index < len(values) else ""
    return record


def _require_objects(items: list[Any]) -> list[SourceRecord]:
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise MalformedSourceError(
                f"Record at position {index} must be a JSON object, got {type(item).__name__}."
            )
    return list(items)
