"""
app/schemas package marker.
"""

from app.schemas.mapping_config import (
    ExecuteConfigRequest,
    ExecuteConfigResponse,
    GenerateConfigRequest,
    GenerateConfigResponse,
    TargetSchemaListResponse,
)

__all__ = [
    "ExecuteConfigRequest",
    "ExecuteConfigResponse",
    "GenerateConfigRequest",
    "GenerateConfigResponse",
    "TargetSchemaListResponse",
]
