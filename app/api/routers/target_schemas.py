"""
app/api/routers/target_schemas.py

Read-only listing of the registered target schemas.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.domain.target_schema import TargetSchemaRegistry
from app.schemas.mapping_config import TargetSchemaListResponse, TargetSchemaResponse
from app.services.mapping_service import get_target_schema_registry

router = APIRouter(tags=["target-schemas"])


@router.get("/target-schemas", response_model=TargetSchemaListResponse)
def list_target_schemas(
    registry: TargetSchemaRegistry = Depends(get_target_schema_registry),
) -> TargetSchemaListResponse:
    return TargetSchemaListResponse(
        default=registry.default_name,
        schemas=[TargetSchemaResponse.model_validate(schema.to_dict()) for schema in registry],
    )
