"""
app/domain/records.py

Output units produced by the record importer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class StandardizedRecord:
    """
    One mapped output record and its import outcome.
    """

    id: str
    type: str
    data: dict[str, Any]
    source_index: int
    success: bool
    errors: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "data": dict(self.data),
            "sourceIndex": self.source_index,
            "success": self.success,
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class ImportSummary:
    """
    Aggregate outcome of one import batch.
    """

    total_records: int
    successful_imports: int
    failed_imports: int
    target_repository: str
    imported_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalRecords": self.total_records,
            "successfulImports": self.successful_imports,
            "failedImports": self.failed_imports,
            "targetRepository": self.target_repository,
            "importedAt": self.imported_at.isoformat(),
        }


@dataclass(frozen=True)
class ImportResult:
    """
    Summary plus standardized records for one import batch.
    """

    summary: ImportSummary
    records: list[StandardizedRecord] = field(default_factory=list)
