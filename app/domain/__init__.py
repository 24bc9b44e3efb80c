"""
app/domain package marker.
"""

from app.domain.mapping_config import (
    FieldMapping,
    MappingConfiguration,
    MappingOptions,
    SourceType,
    TransformKind,
)
from app.domain.records import ImportResult, ImportSummary, StandardizedRecord
from app.domain.target_schema import TargetSchema, TargetSchemaRegistry

__all__ = [
    "FieldMapping",
    "ImportResult",
    "ImportSummary",
    "MappingConfiguration",
    "MappingOptions",
    "SourceType",
    "StandardizedRecord",
    "TargetSchema",
    "TargetSchemaRegistry",
    "TransformKind",
]
