"""
app/validators/mapping_validator.py

Validation for candidate mapping configurations.

Two passes run in order: a structural shape check of the candidate, then (only
when the shape is sound) target-repository resolution and required-field
coverage against the injected registry. Every issue is collected; nothing
fails fast.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from app import failure_codes
from app.domain.mapping_config import MappingConfiguration
from app.domain.target_schema import TargetSchema, TargetSchemaRegistry


@dataclass(frozen=True)
class ConfigErrorDetail:
    """
    Structured configuration error detail.
    """

    path: str
    message: str
    code: str = failure_codes.SHAPE_ERROR

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message, "code": self.code}


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one candidate configuration.
    """

    config: MappingConfiguration | None = None
    schema: TargetSchema | None = None
    errors: tuple[ConfigErrorDetail, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return self.config is not None and not self.errors


class MappingConfigValidator:
    """
    Validates candidate mapping configurations against a target schema registry.
    """

    def __init__(self, *, registry: TargetSchemaRegistry) -> None:
        self._registry = registry

    def validate(self, candidate: Any) -> ValidationResult:
        """
        Classify ``candidate`` as a usable configuration or a list of errors.
        """

        try:
            config = MappingConfiguration.model_validate(candidate)
        except ValidationError as exc:
            return ValidationResult(errors=tuple(self._shape_errors(exc)))

        target_name = self._registry.resolve_name(config.target_repository)
        schema = self._registry.lookup(target_name)
        if schema is None:
            return ValidationResult(
                config=config,
                errors=(self._unknown_repository_error(target_name),),
            )

        errors: list[ConfigErrorDetail] = []
        if config.options.validate_required:
            missing = schema.missing_required(set(config.mapped_target_fields))
            errors.extend(
                ConfigErrorDetail(
                    path="fieldMappings",
                    message=f'Missing required target field: "{field_name}"',
                    code=failure_codes.MISSING_REQUIRED_FIELD,
                )
                for field_name in missing
            )

        return ValidationResult(config=config, schema=schema, errors=tuple(errors))

    @staticmethod
    def _shape_errors(exc: ValidationError) -> list[ConfigErrorDetail]:
        return [
            ConfigErrorDetail(
                path=".".join(str(part) for part in error["loc"]),
                message=error["msg"],
                code=failure_codes.SHAPE_ERROR,
            )
            for error in exc.errors()
        ]

    def _unknown_repository_error(self, target_name: str | None) -> ConfigErrorDetail:
        valid = ", ".join(self._registry.names)
        if target_name is None:
            message = f"targetRepository is required. Valid: {valid}"
        else:
            message = f'Unknown repository "{target_name}". Valid: {valid}'
        return ConfigErrorDetail(
            path="targetRepository",
            message=message,
            code=failure_codes.UNKNOWN_TARGET_REPOSITORY,
        )
