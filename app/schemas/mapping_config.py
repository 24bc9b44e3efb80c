"""
app/schemas/mapping_config.py

Request and response schemas for the mapping configuration endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

_API_MODEL_SETTINGS = ConfigDict(populate_by_name=True)


class GenerateConfigRequest(BaseModel):
    """
    Body for drafting a mapping configuration from a source sample.
    """

    model_config = _API_MODEL_SETTINGS

    source_file: str = Field(..., alias="sourceFile", min_length=1)
    file_type: Literal["csv", "json"] = Field(..., alias="fileType")
    target_repository: str | None = Field(default=None, alias="targetRepository")


class SourceInfoResponse(BaseModel):
    """
    Description of the parsed source sample.
    """

    model_config = _API_MODEL_SETTINGS

    fields: list[str]
    record_count: int = Field(..., alias="recordCount", ge=0)
    sample_records: list[dict[str, Any]] = Field(default_factory=list, alias="sampleRecords")


class GenerateConfigResponse(BaseModel):
    """
    Candidate configuration drafted by the LLM; not yet validated.
    """

    model_config = _API_MODEL_SETTINGS

    config: dict[str, Any]
    source_info: SourceInfoResponse = Field(..., alias="sourceInfo")


class ExecuteConfigRequest(BaseModel):
    """
    Body for validating a configuration and optionally running an import.

    ``config`` stays untyped here so that shape problems are reported by the
    mapping validator as ``valid=false`` instead of a request error.
    """

    model_config = _API_MODEL_SETTINGS

    config: Any = None
    source_file: str | None = Field(default=None, alias="sourceFile")
    source_data: list[Any] | None = Field(default=None, alias="sourceData")


class ConfigErrorResponse(BaseModel):
    path: str
    message: str
    code: str


class ImportSummaryResponse(BaseModel):
    model_config = _API_MODEL_SETTINGS

    total_records: int = Field(..., alias="totalRecords", ge=0)
    successful_imports: int = Field(..., alias="successfulImports", ge=0)
    failed_imports: int = Field(..., alias="failedImports", ge=0)
    target_repository: str = Field(..., alias="targetRepository")
    imported_at: datetime = Field(..., alias="importedAt")


class StandardizedRecordResponse(BaseModel):
    model_config = _API_MODEL_SETTINGS

    id: str
    type: str
    data: dict[str, Any]
    source_index: int = Field(..., alias="sourceIndex", ge=0)
    success: bool
    errors: list[str] = Field(default_factory=list)


class ConfigSummaryResponse(BaseModel):
    model_config = _API_MODEL_SETTINGS

    name: str
    target_repository: str = Field(..., alias="targetRepository")
    field_count: int = Field(..., alias="fieldCount", ge=0)
    mapped_fields: list[str] = Field(default_factory=list, alias="mappedFields")


class ExecuteConfigResponse(BaseModel):
    """
    Validation outcome and, for a valid configuration with a source, the import.
    """

    model_config = _API_MODEL_SETTINGS

    valid: bool
    errors: list[ConfigErrorResponse] | None = None
    summary: ImportSummaryResponse | None = None
    records: list[StandardizedRecordResponse] | None = None
    config_summary: ConfigSummaryResponse | None = Field(default=None, alias="configSummary")
    message: str | None = None


class TargetSchemaResponse(BaseModel):
    model_config = _API_MODEL_SETTINGS

    name: str
    required_fields: list[str] = Field(..., alias="requiredFields")
    optional_fields: list[str] = Field(default_factory=list, alias="optionalFields")
    id_field: str | None = Field(default=None, alias="idField")
    descriptions: dict[str, str] = Field(default_factory=dict)


class TargetSchemaListResponse(BaseModel):
    model_config = _API_MODEL_SETTINGS

    default: str | None = None
    schemas: list[TargetSchemaResponse]
