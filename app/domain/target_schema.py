"""
app/domain/target_schema.py

Named target schemas and the read-only registry that resolves them.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class TargetSchema:
    """
    Required and optional field names for one output record type.

    ``id_field`` names the target field filled from the configuration's
    ``idField``; it is exempt from required-field coverage checks.
    """

    name: str
    required_fields: frozenset[str]
    optional_fields: frozenset[str] = frozenset()
    id_field: str | None = None
    descriptions: Mapping[str, str] = field(default_factory=dict)

    @property
    def all_fields(self) -> frozenset[str]:
        return self.required_fields | self.optional_fields

    def missing_required(self, mapped_fields: set[str] | frozenset[str]) -> list[str]:
        """
        Required fields not covered by ``mapped_fields``, sorted by name.
        """

        exempt = {self.id_field} if self.id_field else set()
        return sorted(self.required_fields - set(mapped_fields) - exempt)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "requiredFields": sorted(self.required_fields),
            "optionalFields": sorted(self.optional_fields),
            "idField": self.id_field,
            "descriptions": dict(self.descriptions),
        }


class TargetSchemaRegistry:
    """
    Immutable lookup table of target schemas, built once and shared.
    """

    def __init__(
        self,
        schemas: Mapping[str, TargetSchema] | list[TargetSchema],
        *,
        default_name: str | None = None,
    ) -> None:
        if isinstance(schemas, Mapping):
            table = dict(schemas)
        else:
            table = {schema.name: schema for schema in schemas}
        if not table:
            raise ValueError("TargetSchemaRegistry requires at least one schema.")
        if default_name is not None and default_name not in table:
            raise ValueError(f"Default schema '{default_name}' is not registered.")
        self._schemas = MappingProxyType(table)
        self._default_name = default_name

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._schemas.keys())

    @property
    def default_name(self) -> str | None:
        return self._default_name

    def lookup(self, name: str | None) -> TargetSchema | None:
        if name is None:
            return None
        return self._schemas.get(name)

    def resolve_name(self, name: str | None) -> str | None:
        """
        Return ``name`` or, when omitted, the registry default.
        """

        return name if name is not None else self._default_name

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[TargetSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)


CATALOG_SCHEMAS: tuple[TargetSchema, ...] = (
    TargetSchema(
        name="users",
        required_fields=frozenset({"id", "email", "name"}),
        optional_fields=frozenset({"phone", "address", "role"}),
        id_field="id",
        descriptions={
            "id": "Unique user identifier",
            "email": "User email address",
            "name": "User full name",
            "phone": "Contact phone number",
            "address": "Postal address as a single string",
            "role": "Application role",
        },
    ),
    TargetSchema(
        name="products",
        required_fields=frozenset({"sku", "name", "price"}),
        optional_fields=frozenset({"description", "category", "stock"}),
        id_field="sku",
        descriptions={
            "sku": "Stock keeping unit",
            "name": "Product name",
            "price": "Unit price (number)",
            "description": "Free-text description",
            "category": "Product category",
            "stock": "Units in stock (number)",
        },
    ),
    TargetSchema(
        name="orders",
        required_fields=frozenset({"orderId", "customerId", "total"}),
        optional_fields=frozenset({"status", "createdAt", "items"}),
        id_field="orderId",
        descriptions={
            "orderId": "Unique order identifier",
            "customerId": "Customer identifier",
            "total": "Order total (number)",
            "status": "Order status",
            "createdAt": "Order creation timestamp (ISO 8601)",
            "items": "Number of items in order",
        },
    ),
)

ORDER_IMPORT_SCHEMA = TargetSchema(
    name="orders",
    required_fields=frozenset({"orderId"}),
    optional_fields=frozenset(
        {
            "customerId",
            "customerEmail",
            "customerName",
            "totalAmount",
            "currency",
            "status",
            "itemCount",
            "shippingAddress",
            "shippingCity",
            "shippingCountry",
            "createdAt",
            "updatedAt",
            "notes",
        }
    ),
    id_field="orderId",
    descriptions={
        "orderId": "Unique order identifier (string)",
        "customerId": "Customer identifier (string)",
        "customerEmail": "Customer email address (string)",
        "customerName": "Customer full name",
        "totalAmount": "Total order amount in cents as integer (e.g. 2999 for $29.99)",
        "currency": '3-letter currency code (e.g. "USD", "EUR", "GBP")',
        "status": "One of: pending, confirmed, processing, shipped, delivered, cancelled, refunded",
        "itemCount": "Number of items in order",
        "shippingAddress": "Full shipping address",
        "shippingCity": "Shipping city",
        "shippingCountry": "Shipping country code",
        "createdAt": "ISO 8601 timestamp",
        "updatedAt": "ISO 8601 timestamp",
        "notes": "Order notes or special instructions",
    },
)

TARGET_CATALOGS = ("catalog", "orders")


def build_catalog_registry() -> TargetSchemaRegistry:
    """
    Closed catalog of users, products and orders.
    """

    return TargetSchemaRegistry(list(CATALOG_SCHEMAS))


def build_order_registry() -> TargetSchemaRegistry:
    """
    Single implicit orders schema; configurations may omit ``targetRepository``.
    """

    return TargetSchemaRegistry([ORDER_IMPORT_SCHEMA], default_name=ORDER_IMPORT_SCHEMA.name)


def build_registry(catalog: str) -> TargetSchemaRegistry:
    normalized = catalog.strip().lower()
    if normalized == "catalog":
        return build_catalog_registry()
    if normalized == "orders":
        return build_order_registry()
    raise ValueError(
        f"Unknown target catalog '{catalog}'. Allowed values: {', '.join(TARGET_CATALOGS)}."
    )
