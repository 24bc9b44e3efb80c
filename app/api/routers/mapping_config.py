"""
app/api/routers/mapping_config.py

Mapping configuration generation and execution endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.parsers.source_parser import SourceParseError
from app.schemas.mapping_config import (
    ExecuteConfigRequest,
    ExecuteConfigResponse,
    GenerateConfigRequest,
    GenerateConfigResponse,
    SourceInfoResponse,
)
from app.services.config_generation_service import (
    ConfigGenerationService,
    UnknownGenerationTargetError,
    get_config_generation_service,
)
from app.services.mapping_service import MappingService, get_mapping_service
from config_generation.adapter import LLMTransportError
from config_generation.retry import LLMRetryExhaustedError
from config_generation.validator import LLMOutputValidationError

router = APIRouter(tags=["mapping-config"])


@router.post("/generate/config", response_model=GenerateConfigResponse)
def generate_config(
    body: GenerateConfigRequest,
    generation_service: ConfigGenerationService = Depends(get_config_generation_service),
) -> GenerateConfigResponse:
    """
    Draft a candidate mapping configuration for the supplied source sample.
    """

    try:
        generated = generation_service.generate_config(
            source_file=body.source_file,
            source_type=body.file_type,
            target_repository=body.target_repository,
        )
    except SourceParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to parse source file: {exc}",
        ) from exc
    except UnknownGenerationTargetError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except LLMTransportError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Language model request failed.",
        ) from exc
    except (LLMRetryExhaustedError, LLMOutputValidationError) as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc

    return GenerateConfigResponse(
        config=generated.config,
        source_info=SourceInfoResponse.model_validate(generated.source_info.to_dict()),
    )


@router.post("/execute/config", response_model=ExecuteConfigResponse)
def execute_config(
    body: ExecuteConfigRequest,
    mapping_service: MappingService = Depends(get_mapping_service),
) -> ExecuteConfigResponse:
    """
    Validate a configuration; import the source when one is supplied.
    """

    if body.config is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="config is required",
        )

    outcome = mapping_service.execute_config(
        body.config,
        source_file=body.source_file,
        source_data=body.source_data,
    )
    return ExecuteConfigResponse.model_validate(outcome.to_dict())
