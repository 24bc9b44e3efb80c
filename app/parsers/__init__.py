"""
app/parsers package marker.
"""

from app.parsers.source_parser import (
    MalformedSourceError,
    SourceParseError,
    UnsupportedSourceTypeError,
    parse_source,
)

__all__ = [
    "MalformedSourceError",
    "SourceParseError",
    "UnsupportedSourceTypeError",
    "parse_source",
]
