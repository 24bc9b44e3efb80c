"""
tests/test_mapping_service.py

Unit tests for MappingService.execute_config covering dry validation,
imports from raw text and pre-parsed records, and source failures.
"""

from __future__ import annotations

import copy
import unittest
from datetime import datetime, timedelta, timezone
from typing import Any

from app import failure_codes
from app.domain.target_schema import build_catalog_registry
from app.services.mapping_service import DRY_RUN_MESSAGE, EMPTY_SOURCE_MESSAGE, MappingService
from app.services.record_importer import RecordImporter

_CONFIG: dict[str, Any] = {
    "name": "User import",
    "sourceType": "csv",
    "targetRepository": "users",
    "idField": "user_id",
    "fieldMappings": [
        {"sourceField": "full_name", "targetField": "name", "transform": "trim"},
        {"sourceField": "email_address", "targetField": "email", "transform": "lowercase"},
    ],
    "options": {"skipEmptyFields": True, "validateRequired": True},
}

_CSV = "user_id,full_name,email_address\nu1,Alice Smith,ALICE@EXAMPLE.COM\nu2,Bob,\n"


class _StepClock:
    def __init__(self) -> None:
        self._now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self._now
        self._now += timedelta(minutes=1)
        return current


def _service(*, strict_csv: bool = False) -> MappingService:
    registry = build_catalog_registry()
    return MappingService(
        registry=registry,
        strict_csv=strict_csv,
        importer=RecordImporter(registry=registry, clock=_StepClock()),
    )


def _config(**overrides: Any) -> dict[str, Any]:
    payload = copy.deepcopy(_CONFIG)
    payload.update(overrides)
    return payload


class DryValidationTests(unittest.TestCase):
    def test_valid_config_without_source_returns_summary(self) -> None:
        outcome = _service().execute_config(_config())

        self.assertTrue(outcome.valid)
        self.assertEqual(outcome.errors, [])
        self.assertIsNone(outcome.summary)
        self.assertIsNone(outcome.records)
        self.assertEqual(outcome.message, DRY_RUN_MESSAGE)
        self.assertEqual(
            outcome.config_summary.to_dict(),
            {
                "name": "User import",
                "targetRepository": "users",
                "fieldCount": 2,
                "mappedFields": ["name", "email"],
            },
        )

    def test_invalid_config_returns_errors_without_import(self) -> None:
        outcome = _service().execute_config(
            _config(targetRepository="invoices"),
            source_file=_CSV,
        )

        self.assertFalse(outcome.valid)
        self.assertIsNone(outcome.records)
        self.assertEqual(outcome.errors[0].path, "targetRepository")
        self.assertEqual(outcome.to_dict()["valid"], False)
        self.assertNotIn("records", outcome.to_dict())

    def test_abort_level_errors_use_configuration_failure_codes(self) -> None:
        outcomes = [
            _service().execute_config(_config(targetRepository="invoices")),
            _service().execute_config(_config(idField=None)),
            _service().execute_config(_config(sourceType="json"), source_file="{"),
            _service().execute_config(_config(), source_data=["x"]),
        ]

        for outcome in outcomes:
            self.assertFalse(outcome.valid)
            for error in outcome.errors:
                self.assertIn(error.code, failure_codes.CONFIGURATION_FAILURES)
                self.assertNotIn(error.code, failure_codes.RECORD_FAILURES)


class SourceFileTests(unittest.TestCase):
    def test_imports_csv_source(self) -> None:
        outcome = _service().execute_config(_config(), source_file=_CSV)

        self.assertTrue(outcome.valid)
        self.assertIsNone(outcome.message)
        self.assertEqual(outcome.summary.total_records, 2)
        self.assertEqual(outcome.summary.successful_imports, 2)
        self.assertEqual(outcome.records[0].data, {"name": "Alice Smith", "email": "alice@example.com"})
        self.assertEqual(outcome.records[1].data, {"name": "Bob"})

    def test_parse_failure_is_reported_on_source_file(self) -> None:
        outcome = _service().execute_config(
            _config(sourceType="json"),
            source_file="{not json",
        )

        self.assertFalse(outcome.valid)
        self.assertEqual(len(outcome.errors), 1)
        self.assertEqual(outcome.errors[0].path, "sourceFile")
        self.assertTrue(outcome.errors[0].message.startswith("Failed to parse: "))
        self.assertEqual(outcome.errors[0].code, failure_codes.MALFORMED_SOURCE)

    def test_header_only_source_reports_empty_import(self) -> None:
        outcome = _service().execute_config(_config(), source_file="user_id,full_name\n")

        self.assertTrue(outcome.valid)
        self.assertEqual(outcome.records, [])
        self.assertEqual(outcome.summary.total_records, 0)
        self.assertEqual(outcome.message, EMPTY_SOURCE_MESSAGE)

    def test_strict_csv_honours_quoted_commas(self) -> None:
        source = 'user_id,full_name,email_address\nu1,"Smith, Alice",a@x.io\n'

        outcome = _service(strict_csv=True).execute_config(_config(), source_file=source)

        self.assertEqual(outcome.records[0].data["name"], "Smith, Alice")


class SourceDataTests(unittest.TestCase):
    def test_imports_pre_parsed_records(self) -> None:
        outcome = _service().execute_config(
            _config(),
            source_data=[{"user_id": 5, "full_name": "  Carol ", "email_address": "C@X.IO"}],
        )

        self.assertTrue(outcome.valid)
        self.assertEqual(outcome.records[0].id, "5")
        self.assertEqual(outcome.records[0].data, {"name": "Carol", "email": "c@x.io"})

    def test_source_file_takes_precedence_over_source_data(self) -> None:
        outcome = _service().execute_config(
            _config(),
            source_file=_CSV,
            source_data=[{"user_id": "ignored"}],
        )

        self.assertEqual([record.id for record in outcome.records], ["u1", "u2"])

    def test_non_object_entries_are_rejected(self) -> None:
        outcome = _service().execute_config(
            _config(),
            source_data=[{"user_id": "a"}, "b", 3],
        )

        self.assertFalse(outcome.valid)
        self.assertEqual([error.path for error in outcome.errors], ["sourceData", "sourceData"])
        self.assertIn("position 1", outcome.errors[0].message)

    def test_repeat_runs_differ_only_in_timestamp(self) -> None:
        service = _service()
        first = service.execute_config(_config(), source_file=_CSV).to_dict()
        second = service.execute_config(_config(), source_file=_CSV).to_dict()

        self.assertNotEqual(first["summary"]["importedAt"], second["summary"]["importedAt"])
        first["summary"].pop("importedAt")
        second["summary"].pop("importedAt")
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
