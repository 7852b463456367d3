from __future__ import annotations

import pytest


@pytest.fixture
def raw_schema() -> dict:
    """A small shop schema: customers, orders, order_items, products, audit_log."""
    return {
        "tables": [
            {
                "table_name": "customers",
                "columns": [
                    {"column_name": "id", "data_type": "int", "is_pk": True, "is_fk": False},
                    {"column_name": "name", "data_type": "text", "is_pk": False, "is_fk": False},
                    {"column_name": "email", "data_type": "text", "is_pk": False, "is_fk": False},
                ],
            },
            {
                "table_name": "orders",
                "columns": [
                    {"column_name": "id", "data_type": "int", "is_pk": True, "is_fk": False},
                    {
                        "column_name": "customer_id",
                        "data_type": "int",
                        "is_pk": False,
                        "is_fk": "true",
                        "fk_cardinality": "many-to-one",
                        "references_table": "customers",
                    },
                    {"column_name": "placed_at", "data_type": "timestamp", "is_pk": False, "is_fk": False},
                ],
            },
            {
                "table_name": "order_items",
                "columns": [
                    {
                        "column_name": "order_id",
                        "data_type": "int",
                        "is_pk": True,
                        "is_fk": True,
                        "fk_cardinality": "many-to-one",
                        "references_table": "orders",
                    },
                    {"column_name": "line_no", "data_type": "int", "is_pk": True, "is_fk": False},
                    {
                        "column_name": "product_id",
                        "data_type": "int",
                        "is_pk": False,
                        "is_fk": True,
                        "fk_cardinality": "one-to-one",
                        "references_table": "products",
                    },
                ],
            },
            {
                "table_name": "products",
                "columns": [
                    {"column_name": "sku", "data_type": "varchar", "is_pk": True, "is_fk": False},
                    {"column_name": "title", "data_type": "text", "is_pk": False, "is_fk": False},
                ],
            },
            {
                "table_name": "audit_log",
                "columns": [
                    {"column_name": "message", "data_type": "text", "is_pk": False, "is_fk": False},
                ],
            },
        ],
        "relationship_index": [
            {"from_table": "orders", "from_column": "customer_id", "to_table": "customers", "type": "one-to-one"},
            {"from_table": "order_items", "from_column": "order_id", "to_table": "orders", "type": "many-to-one"},
            {"from_table": "order_items", "from_column": "product_id", "to_table": "products", "type": "many-to-one"},
        ],
    }
