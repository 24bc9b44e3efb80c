"""
app/services/mapping_service.py

Service layer for the execute-config workflow: validate a candidate mapping
configuration, parse the source payload and run the record importer.

Configuration and source failures are returned as ``valid=False`` outcomes
with a structured error list; they are never raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from app import failure_codes
from app.config import get_mapping_settings
from app.domain.records import ImportSummary, StandardizedRecord
from app.domain.target_schema import TargetSchemaRegistry, build_registry
from app.logging_utils import log_event
from app.parsers.source_parser import SourceParseError, parse_source
from app.services.record_importer import RecordImporter
from app.validators.mapping_validator import ConfigErrorDetail, MappingConfigValidator

logger = logging.getLogger(__name__)

DRY_RUN_MESSAGE = "Config is valid. Provide sourceFile or sourceData to run the import."
EMPTY_SOURCE_MESSAGE = "Source file parsed but contains no records."


@dataclass(frozen=True)
class ConfigSummary:
    """
    Description of a valid configuration returned by dry validation.
    """

    name: str
    target_repository: str
    field_count: int
    mapped_fields: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "targetRepository": self.target_repository,
            "fieldCount": self.field_count,
            "mappedFields": list(self.mapped_fields),
        }


@dataclass(frozen=True)
class ExecutionOutcome:
    """
    Result of one execute-config call.
    """

    valid: bool
    errors: list[ConfigErrorDetail] = field(default_factory=list)
    summary: ImportSummary | None = None
    records: list[StandardizedRecord] | None = None
    config_summary: ConfigSummary | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"valid": self.valid}
        if self.errors:
            payload["errors"] = [error.to_dict() for error in self.errors]
        if self.summary is not None:
            payload["summary"] = self.summary.to_dict()
        if self.records is not None:
            payload["records"] = [record.to_dict() for record in self.records]
        if self.config_summary is not None:
            payload["configSummary"] = self.config_summary.to_dict()
        if self.message is not None:
            payload["message"] = self.message
        return payload


class MappingService:
    """
    Coordinates configuration validation, source parsing and record import.
    """

    def __init__(
        self,
        *,
        registry: TargetSchemaRegistry,
        strict_csv: bool = False,
        validator: MappingConfigValidator | None = None,
        importer: RecordImporter | None = None,
    ) -> None:
        self._registry = registry
        self._strict_csv = strict_csv
        self._validator = validator or MappingConfigValidator(registry=registry)
        self._importer = importer or RecordImporter(registry=registry)

    @property
    def registry(self) -> TargetSchemaRegistry:
        return self._registry

    def execute_config(
        self,
        candidate: Any,
        *,
        source_file: str | None = None,
        source_data: Sequence[Mapping[str, Any]] | None = None,
    ) -> ExecutionOutcome:
        """
        Validate ``candidate`` and, when a source is supplied, import it.

        ``source_file`` is raw text parsed per the configuration's source type;
        ``source_data`` is an already-parsed list of records. With neither, the
        call is a dry validation and returns a configuration summary.
        """

        result = self._validator.validate(candidate)
        if not result.is_valid or result.config is None or result.schema is None:
            log_event(
                logger,
                logging.INFO,
                "config_rejected",
                error_count=len(result.errors),
                codes=sorted({error.code for error in result.errors}),
            )
            return ExecutionOutcome(valid=False, errors=list(result.errors))

        config = result.config
        if source_file is None and source_data is None:
            return ExecutionOutcome(
                valid=True,
                config_summary=ConfigSummary(
                    name=config.name,
                    target_repository=result.schema.name,
                    field_count=len(config.field_mappings),
                    mapped_fields=config.mapped_target_fields,
                ),
                message=DRY_RUN_MESSAGE,
            )

        if source_file is not None:
            try:
                source_records = parse_source(
                    source_file,
                    config.source_type,
                    strict_csv=self._strict_csv,
                )
            except SourceParseError as exc:
                log_event(
                    logger,
                    logging.INFO,
                    "source_rejected",
                    source_type=config.source_type.value,
                    code=exc.code,
                    reason=str(exc),
                )
                return ExecutionOutcome(
                    valid=False,
                    errors=[
                        ConfigErrorDetail(
                            path="sourceFile",
                            message=f"Failed to parse: {exc}",
                            code=exc.code,
                        )
                    ],
                )
        else:
            source_records = list(source_data or [])
            bad_positions = [
                index
                for index, record in enumerate(source_records)
                if not isinstance(record, Mapping)
            ]
            if bad_positions:
                return ExecutionOutcome(
                    valid=False,
                    errors=[
                        _malformed_source_data_error(
                            f"Record at position {index} must be an object."
                        )
                        for index in bad_positions
                    ],
                )

        imported = self._importer.import_records(config, source_records)
        return ExecutionOutcome(
            valid=True,
            summary=imported.summary,
            records=imported.records,
            message=EMPTY_SOURCE_MESSAGE if not imported.records else None,
        )


def _malformed_source_data_error(message: str) -> ConfigErrorDetail:
    return ConfigErrorDetail(
        path="sourceData",
        message=message,
        code=failure_codes.MALFORMED_SOURCE,
    )


@lru_cache(maxsize=1)
def get_target_schema_registry() -> TargetSchemaRegistry:
    """
    Build and cache the process-wide registry selected by settings.
    """

    return build_registry(get_mapping_settings().target_catalog)


@lru_cache(maxsize=1)
def get_mapping_service() -> MappingService:
    """
    Build and cache the mapping service with env-driven settings.
    """

    settings = get_mapping_settings()
    return MappingService(
        registry=get_target_schema_registry(),
        strict_csv=settings.strict_csv,
    )
