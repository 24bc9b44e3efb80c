"""
app/services/record_importer.py

Applies a validated mapping configuration to parsed source records.

Each record is processed independently: a transform failure or a missing
identifier is attached to that record only and never aborts the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from app import failure_codes
from app.domain.mapping_config import MappingConfiguration
from app.domain.records import ImportResult, ImportSummary, StandardizedRecord
from app.domain.target_schema import TargetSchemaRegistry
from app.logging_utils import log_event
from app.mappers.transform_engine import NUMBER_FALLBACK, TransformError, apply_transform, to_text

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def is_empty_value(value: Any) -> bool:
    return value is None or value == ""


class RecordImporter:
    """
    Turns source records into standardized records plus an import summary.
    """

    def __init__(
        self,
        *,
        registry: TargetSchemaRegistry,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._registry = registry
        self._clock = clock or _utc_now

    def import_records(
        self,
        config: MappingConfiguration,
        source_records: Sequence[Mapping[str, Any]],
    ) -> ImportResult:
        """
        Map every source record in order and aggregate the outcomes.

        ``config`` must already have passed MappingConfigValidator.
        """

        imported_at = self._clock()
        target_repository = self._registry.resolve_name(config.target_repository)
        if target_repository is None or target_repository not in self._registry:
            raise ValueError(f"Unresolved target repository: {config.target_repository!r}")

        records = [
            self._import_one(
                config=config,
                source_record=source_record,
                index=index,
                target_repository=target_repository,
            )
            for index, source_record in enumerate(source_records)
        ]

        successful = sum(1 for record in records if record.success)
        summary = ImportSummary(
            total_records=len(records),
            successful_imports=successful,
            failed_imports=len(records) - successful,
            target_repository=target_repository,
            imported_at=imported_at,
        )
        log_event(
            logger,
            logging.INFO,
            "records_imported",
            config_name=config.name,
            target_repository=target_repository,
            total_records=summary.total_records,
            successful_imports=summary.successful_imports,
            failed_imports=summary.failed_imports,
        )
        return ImportResult(summary=summary, records=records)

    def _import_one(
        self,
        *,
        config: MappingConfiguration,
        source_record: Mapping[str, Any],
        index: int,
        target_repository: str,
    ) -> StandardizedRecord:
        errors: list[str] = []
        codes: list[str] = []

        raw_id = source_record.get(config.id_field)
        if is_empty_value(raw_id):
            errors.append(f'Missing identifier field "{config.id_field}"')
            codes.append(failure_codes.MISSING_IDENTIFIER)
            record_id = f"unknown-{index}"
        else:
            record_id = to_text(raw_id)

        data: dict[str, Any] = {}
        for mapping in config.field_mappings:
            value = source_record.get(mapping.source_field)

            if is_empty_value(value) and config.options.skip_empty_fields:
                continue

            if value is not None:
                try:
                    value = apply_transform(
                        value,
                        mapping.transform,
                        source_field=mapping.source_field,
                    )
                except TransformError as exc:
                    errors.append(str(exc))
                    codes.append(exc.code)
                    value = NUMBER_FALLBACK

            data[mapping.target_field] = value

        if errors:
            log_event(
                logger,
                logging.DEBUG,
                "record_failed",
                source_index=index,
                record_id=record_id,
                codes=codes,
                errors=errors,
            )

        return StandardizedRecord(
            id=record_id,
            type=target_repository,
            data=data,
            source_index=index,
            success=not errors,
            errors=tuple(errors),
        )
