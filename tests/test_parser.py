"""Tests for the schema model builder.

Covers: node creation and column split, link construction, cardinality and
target-column resolution, quiet degradation on bad lookups, visible subsets.
"""
from __future__ import annotations

import pytest

from erd_viewer.layout import GRID_GAP_X, GRID_GAP_Y, GRID_ROW_HEIGHT
from erd_viewer.parser import build_schema, select_nodes
from erd_viewer.sizing import MIN_TABLE_HEIGHT, TABLE_WIDTH


# ============================================================================
# Nodes
# ============================================================================


class TestNodes:
    def test_creates_one_node_per_table_in_input_order(self, raw_schema):
        schema = build_schema(raw_schema)
        assert [n.id for n in schema.nodes] == [
            "customers", "orders", "order_items", "products", "audit_log",
        ]
        assert all(n.id == n.name for n in schema.nodes)

    def test_splits_primary_key_columns_from_the_rest(self, raw_schema):
        items = build_schema(raw_schema).nodes[2]
        assert [c.name for c in items.pk_columns] == ["order_id", "line_no"]
        assert [c.name for c in items.other_columns] == ["product_id"]
        assert all(c.is_pk for c in items.pk_columns)
        assert not any(c.is_pk for c in items.other_columns)

    def test_keeps_column_types(self, raw_schema):
        orders = build_schema(raw_schema).nodes[1]
        assert orders.other_columns[1].type == "timestamp"

    def test_accepts_string_and_bool_foreign_key_flags(self, raw_schema):
        schema = build_schema(raw_schema)
        assert schema.nodes[1].other_columns[0].is_fk is True
        assert schema.nodes[2].other_columns[0].is_fk is True
        assert schema.nodes[0].other_columns[0].is_fk is False

    @pytest.mark.parametrize("flag", ["false", "False", "", "no", "0"])
    def test_false_like_strings_are_not_foreign_keys(self, flag):
        raw = {
            "tables": [{
                "table_name": "t",
                "columns": [{"column_name": "c", "data_type": "int", "is_pk": False, "is_fk": flag}],
            }],
            "relationship_index": [],
        }
        assert build_schema(raw).nodes[0].other_columns[0].is_fk is False

    @pytest.mark.parametrize("flag", ["false", "False", "", "no", "0"])
    def test_false_like_strings_are_not_primary_keys(self, flag):
        raw = {
            "tables": [{
                "table_name": "t",
                "columns": [{"column_name": "id", "data_type": "int", "is_pk": flag, "is_fk": False}],
            }],
            "relationship_index": [],
        }
        node = build_schema(raw).nodes[0]
        assert node.pk_columns == []
        assert [c.name for c in node.other_columns] == ["id"]
        assert node.other_columns[0].is_pk is False

    def test_string_true_primary_key_flag_is_honoured(self):
        raw = {
            "tables": [{
                "table_name": "t",
                "columns": [{"column_name": "id", "data_type": "int", "is_pk": "true", "is_fk": False}],
            }],
            "relationship_index": [],
        }
        assert [c.name for c in build_schema(raw).nodes[0].pk_columns] == ["id"]

    def test_uses_constant_width(self, raw_schema):
        assert {n.width for n in build_schema(raw_schema).nodes} == {TABLE_WIDTH}

    def test_initial_positions_follow_the_grid(self, raw_schema):
        nodes = build_schema(raw_schema).nodes
        assert (nodes[0].x, nodes[0].y) == (0, 0)
        assert (nodes[1].x, nodes[1].y) == (TABLE_WIDTH + GRID_GAP_X, 0)
        assert (nodes[4].x, nodes[4].y) == (4 * (TABLE_WIDTH + GRID_GAP_X), 0)

    def test_sixth_table_starts_a_new_grid_row(self, raw_schema):
        raw_schema["tables"].append({"table_name": "extra", "columns": []})
        sixth = build_schema(raw_schema).nodes[5]
        assert (sixth.x, sixth.y) == (0, GRID_ROW_HEIGHT + GRID_GAP_Y)

    def test_heights_respect_show_columns(self, raw_schema):
        shown = build_schema(raw_schema, show_columns=True)
        hidden = build_schema(raw_schema, show_columns=False)
        assert all(n.height == MIN_TABLE_HEIGHT for n in hidden.nodes)
        assert shown.nodes[0].height > MIN_TABLE_HEIGHT

    def test_duplicate_table_names_keep_the_first_table(self, raw_schema):
        raw_schema["tables"].append({"table_name": "customers", "columns": []})
        schema = build_schema(raw_schema)
        assert [n.id for n in schema.nodes].count("customers") == 1
        assert len(schema.nodes[0].other_columns) == 2

    def test_empty_document_builds_an_empty_schema(self):
        schema = build_schema({"tables": [], "relationship_index": []})
        assert schema.nodes == []
        assert schema.links == []


# ============================================================================
# Links
# ============================================================================


class TestLinks:
    def test_creates_one_link_per_relationship(self, raw_schema):
        links = build_schema(raw_schema).links
        assert len(links) == 3
        assert links[0].source == "orders"
        assert links[0].target == "customers"
        assert links[0].from_column == "customer_id"

    def test_link_ids_combine_index_and_tables(self, raw_schema):
        links = build_schema(raw_schema).links
        assert [l.id for l in links] == [
            "link-0-orders-customers",
            "link-1-order_items-orders",
            "link-2-order_items-products",
        ]

    def test_link_ids_stay_unique_for_repeated_pairs(self, raw_schema):
        raw_schema["relationship_index"].append(dict(raw_schema["relationship_index"][0]))
        ids = [l.id for l in build_schema(raw_schema).links]
        assert len(ids) == len(set(ids))

    def test_cardinality_comes_from_the_source_column(self, raw_schema):
        links = build_schema(raw_schema).links
        # The relationship record says one-to-one; the column says many-to-one
        assert links[0].cardinality == "many-to-one"
        assert links[2].cardinality == "one-to-one"

    def test_target_column_is_first_primary_key(self, raw_schema):
        links = build_schema(raw_schema).links
        assert links[0].to_column == "id"
        assert links[1].to_column == "id"
        assert links[2].to_column == "sku"

    def test_target_without_primary_key_gives_empty_column(self, raw_schema):
        raw_schema["relationship_index"].append(
            {"from_table": "orders", "from_column": "id", "to_table": "audit_log", "type": "x"}
        )
        assert build_schema(raw_schema).links[-1].to_column == ""

    def test_false_like_primary_key_strings_are_not_target_columns(self, raw_schema):
        raw_schema["tables"].append({
            "table_name": "notes",
            "columns": [
                {"column_name": "body", "data_type": "text", "is_pk": "false", "is_fk": False},
                {"column_name": "note_id", "data_type": "int", "is_pk": "yes", "is_fk": False},
            ],
        })
        raw_schema["relationship_index"].append(
            {"from_table": "orders", "from_column": "id", "to_table": "notes", "type": "x"}
        )
        assert build_schema(raw_schema).links[-1].to_column == "note_id"

    def test_unknown_source_column_gives_no_cardinality(self, raw_schema):
        raw_schema["relationship_index"].append(
            {"from_table": "orders", "from_column": "missing", "to_table": "customers", "type": "x"}
        )
        assert build_schema(raw_schema).links[-1].cardinality is None

    def test_unrecognised_cardinality_is_dropped(self, raw_schema):
        raw_schema["tables"][1]["columns"][1]["fk_cardinality"] = "several"
        assert build_schema(raw_schema).links[0].cardinality is None

    def test_links_to_missing_tables_are_kept_without_error(self, raw_schema):
        raw_schema["relationship_index"].append(
            {"from_table": "orders", "from_column": "ghost_id", "to_table": "ghosts", "type": "x"}
        )
        link = build_schema(raw_schema).links[-1]
        assert link.target == "ghosts"
        assert link.to_column == ""
        assert link.cardinality is None


# ============================================================================
# Visible subsets
# ============================================================================


class TestSelectNodes:
    def test_keeps_only_visible_tables_and_links_between_them(self, raw_schema):
        schema = build_schema(raw_schema)
        subset = select_nodes(schema, {"orders", "order_items"})
        assert [n.id for n in subset.nodes] == ["orders", "order_items"]
        assert [l.id for l in subset.links] == ["link-1-order_items-orders"]

    def test_does_not_modify_the_original_schema(self, raw_schema):
        schema = build_schema(raw_schema)
        select_nodes(schema, ["customers"])
        assert len(schema.nodes) == 5
        assert len(schema.links) == 3
