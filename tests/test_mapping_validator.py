from __future__ import annotations

import copy
import unittest
from typing import Any

from app.domain.mapping_config import TransformKind
from app.domain.target_schema import build_catalog_registry, build_order_registry
from app.validators.mapping_validator import MappingConfigValidator


def _candidate(**overrides: Any) -> dict[str, Any]:
    candidate: dict[str, Any] = {
        "name": "Product feed",
        "sourceType": "csv",
        "targetRepository": "products",
        "idField": "sku",
        "fieldMappings": [
            {"sourceField": "title", "targetField": "name", "transform": "trim"},
            {"sourceField": "unit_price", "targetField": "price", "transform": "number"},
        ],
        "options": {"skipEmptyFields": True, "validateRequired": True},
    }
    candidate.update(overrides)
    return candidate


class TestMappingConfigValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = MappingConfigValidator(registry=build_catalog_registry())

    def test_accepts_complete_configuration(self) -> None:
        result = self.validator.validate(_candidate())

        self.assertTrue(result.is_valid)
        self.assertEqual(result.errors, ())
        assert result.config is not None
        self.assertEqual(result.config.field_mappings[1].transform, TransformKind.NUMBER)
        self.assertEqual(result.schema.name, "products")

    def test_collects_every_shape_error(self) -> None:
        candidate = _candidate(
            name=42,
            sourceType="xml",
            fieldMappings=[
                {"sourceField": "title", "targetField": "name", "transform": "reverse"},
            ],
            options={"skipEmptyFields": True},
        )

        result = self.validator.validate(candidate)

        self.assertFalse(result.is_valid)
        paths = {error.path for error in result.errors}
        self.assertEqual(
            paths,
            {"name", "sourceType", "fieldMappings.0.transform", "options.validateRequired"},
        )
        self.assertEqual({error.code for error in result.errors}, {"shape_error"})

    def test_rejects_snake_case_keys(self) -> None:
        candidate = {
            "name": "Product feed",
            "source_type": "csv",
            "target_repository": "products",
            "id_field": "sku",
            "field_mappings": [{"source_field": "title", "target_field": "name"}],
            "options": {"skip_empty_fields": True, "validate_required": True},
        }

        result = self.validator.validate(candidate)

        self.assertFalse(result.is_valid)
        self.assertEqual(
            {error.path for error in result.errors},
            {
                "sourceType",
                "idField",
                "fieldMappings",
                "options.skipEmptyFields",
                "options.validateRequired",
            },
        )

    def test_rejects_explicit_null_transform(self) -> None:
        result = self.validator.validate(
            _candidate(
                fieldMappings=[
                    {"sourceField": "title", "targetField": "name", "transform": None},
                    {"sourceField": "unit_price", "targetField": "price"},
                ]
            )
        )

        self.assertFalse(result.is_valid)
        self.assertEqual([error.path for error in result.errors], ["fieldMappings.0.transform"])

    def test_omitted_transform_defaults_to_none_kind(self) -> None:
        result = self.validator.validate(
            _candidate(
                fieldMappings=[
                    {"sourceField": "title", "targetField": "name"},
                    {"sourceField": "unit_price", "targetField": "price"},
                ]
            )
        )

        self.assertTrue(result.is_valid)
        self.assertEqual(result.config.field_mappings[0].transform, TransformKind.NONE)

    def test_rejects_non_object_candidate(self) -> None:
        result = self.validator.validate(["not", "a", "config"])

        self.assertFalse(result.is_valid)
        self.assertEqual(len(result.errors), 1)

    def test_does_not_coerce_string_booleans(self) -> None:
        result = self.validator.validate(
            _candidate(options={"skipEmptyFields": "true", "validateRequired": False})
        )

        self.assertEqual([error.path for error in result.errors], ["options.skipEmptyFields"])

    def test_unknown_repository_lists_valid_names(self) -> None:
        result = self.validator.validate(_candidate(targetRepository="invoices"))

        self.assertFalse(result.is_valid)
        self.assertEqual(len(result.errors), 1)
        error = result.errors[0]
        self.assertEqual(error.path, "targetRepository")
        self.assertEqual(error.code, "unknown_target_repository")
        self.assertIn('"invoices"', error.message)
        self.assertIn("users, products, orders", error.message)

    def test_omitted_repository_without_default_is_reported(self) -> None:
        candidate = _candidate()
        del candidate["targetRepository"]

        result = self.validator.validate(candidate)

        self.assertEqual([error.path for error in result.errors], ["targetRepository"])

    def test_coverage_is_skipped_when_shape_fails(self) -> None:
        result = self.validator.validate(_candidate(targetRepository="invoices", idField=None))

        self.assertEqual([error.path for error in result.errors], ["idField"])

    def test_missing_required_field_is_reported_at_field_mappings(self) -> None:
        candidate = _candidate(
            fieldMappings=[{"sourceField": "title", "targetField": "name"}],
        )

        result = self.validator.validate(candidate)

        self.assertFalse(result.is_valid)
        self.assertEqual(len(result.errors), 1)
        self.assertEqual(result.errors[0].path, "fieldMappings")
        self.assertEqual(result.errors[0].code, "missing_required_field")
        self.assertIn('"price"', result.errors[0].message)

    def test_identifier_field_is_exempt_from_coverage(self) -> None:
        result = self.validator.validate(_candidate())

        self.assertNotIn("sku", " ".join(error.message for error in result.errors))
        self.assertTrue(result.is_valid)

    def test_missing_required_is_ignored_when_validation_disabled(self) -> None:
        candidate = _candidate(
            fieldMappings=[],
            options={"skipEmptyFields": False, "validateRequired": False},
        )

        self.assertTrue(self.validator.validate(candidate).is_valid)

    def test_order_registry_accepts_omitted_repository(self) -> None:
        validator = MappingConfigValidator(registry=build_order_registry())
        candidate = _candidate(
            idField="order_id",
            fieldMappings=[{"sourceField": "amount", "targetField": "totalAmount", "transform": "number"}],
        )
        del candidate["targetRepository"]

        result = validator.validate(candidate)

        self.assertTrue(result.is_valid)
        self.assertEqual(result.schema.name, "orders")

    def test_does_not_mutate_candidate(self) -> None:
        candidate = _candidate(fieldMappings=[{"sourceField": "title", "targetField": "name"}])
        snapshot = copy.deepcopy(candidate)

        self.validator.validate(candidate)

        self.assertEqual(candidate, snapshot)


if __name__ == "__main__":
    unittest.main()
