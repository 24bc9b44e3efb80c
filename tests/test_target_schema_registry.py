from __future__ import annotations

import unittest

from app.domain.target_schema import (
    TargetSchema,
    TargetSchemaRegistry,
    build_catalog_registry,
    build_order_registry,
    build_registry,
)


class TestTargetSchemaRegistry(unittest.TestCase):
    def test_catalog_declares_users_products_orders(self) -> None:
        registry = build_catalog_registry()

        self.assertEqual(registry.names, ("users", "products", "orders"))
        self.assertIsNone(registry.default_name)
        self.assertEqual(registry.lookup("products").required_fields, frozenset({"sku", "name", "price"}))

    def test_lookup_of_unknown_name_returns_none(self) -> None:
        registry = build_catalog_registry()

        self.assertIsNone(registry.lookup("invoices"))
        self.assertIsNone(registry.lookup(None))
        self.assertNotIn("invoices", registry)

    def test_order_registry_resolves_omitted_name_to_default(self) -> None:
        registry = build_order_registry()

        self.assertEqual(len(registry), 1)
        self.assertEqual(registry.resolve_name(None), "orders")
        self.assertEqual(registry.resolve_name("orders"), "orders")
        self.assertEqual(registry.lookup("orders").required_fields, frozenset({"orderId"}))

    def test_missing_required_exempts_identifier_field(self) -> None:
        schema = TargetSchema(
            name="orders",
            required_fields=frozenset({"orderId", "customerId", "total"}),
            id_field="orderId",
        )

        self.assertEqual(schema.missing_required({"total"}), ["customerId"])
        self.assertEqual(schema.missing_required({"customerId", "total"}), [])

    def test_rejects_empty_registry_and_unknown_default(self) -> None:
        with self.assertRaises(ValueError):
            TargetSchemaRegistry([])

        with self.assertRaises(ValueError):
            TargetSchemaRegistry(
                [TargetSchema(name="users", required_fields=frozenset({"id"}))],
                default_name="orders",
            )

    def test_build_registry_selects_catalog_by_name(self) -> None:
        self.assertEqual(build_registry("catalog").names, ("users", "products", "orders"))
        self.assertEqual(build_registry(" Orders ").default_name, "orders")

        with self.assertRaises(ValueError):
            build_registry("inventory")


if __name__ == "__main__":
    unittest.main()
