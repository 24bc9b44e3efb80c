"""
app/domain/mapping_config.py

Mapping configuration contract shared by the validator, importer and generator.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class SourceType(str, Enum):
    """
    Supported raw source formats.
    """

    CSV = "csv"
    JSON = "json"


class TransformKind(str, Enum):
    """
    Closed set of value-level transforms a field mapping may request.
    """

    NONE = "none"
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    TRIM = "trim"
    NUMBER = "number"


# Candidates are accepted in the camelCase wire shape only.
_CONFIG_MODEL_SETTINGS = ConfigDict(
    frozen=True,
    extra="ignore",
)


class FieldMapping(BaseModel):
    """
    One source-field to target-field mapping entry.
    """

    model_config = _CONFIG_MODEL_SETTINGS

    source_field: StrictStr = Field(alias="sourceField")
    target_field: StrictStr = Field(alias="targetField")
    # The key may be omitted; an explicit null is rejected.
    transform: TransformKind = TransformKind.NONE


class MappingOptions(BaseModel):
    """
    Import behavior switches.
    """

    model_config = _CONFIG_MODEL_SETTINGS

    skip_empty_fields: StrictBool = Field(alias="skipEmptyFields")
    validate_required: StrictBool = Field(alias="validateRequired")


class MappingConfiguration(BaseModel):
    """
    User- or LLM-authored description of how source fields become target fields.

    ``target_repository`` may be omitted only when the registry in use declares
    a default schema; the validator resolves it.
    """

    model_config = _CONFIG_MODEL_SETTINGS

    name: StrictStr
    source_type: SourceType = Field(alias="sourceType")
    target_repository: StrictStr | None = Field(default=None, alias="targetRepository")
    id_field: StrictStr = Field(alias="idField")
    field_mappings: tuple[FieldMapping, ...] = Field(alias="fieldMappings")
    options: MappingOptions

    @property
    def mapped_target_fields(self) -> list[str]:
        """
        Target field names in mapping order, duplicates included.
        """

        return [mapping.target_field for mapping in self.field_mappings]
