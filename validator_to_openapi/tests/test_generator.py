"""
Tests for the top-level generator: dispatch, overrides, nullability,
recursive kinds and graceful degradation.
"""

from __future__ import annotations

import unittest
from dataclasses import dataclass
from typing import ClassVar

from validator_to_openapi.generator import PARSERS, generate_schema, generate_schemas
from validator_to_openapi.validator_ast import (
    UNSUPPORTED_KINDS,
    Check,
    NumberNode,
    RecordNode,
    ValidatorNode,
    openapi,
)
from validator_to_openapi.validator_ast import builders as v


@dataclass
class CustomNode(ValidatorNode):
    kind: ClassVar[str] = "custom"


class TestOverrides(unittest.TestCase):
    def test_single_override_is_merged(self):
        node = v.string().openapi({"description": "Name", "example": "Ada"})
        self.assertEqual(generate_schema(node), {"type": "string", "description": "Name", "example": "Ada"})

    def test_override_list_later_wins(self):
        node = openapi(v.string(), [{"description": "first", "example": "a"}, {"description": "second"}])
        self.assertEqual(generate_schema(node), {"type": "string", "description": "second", "example": "a"})

    def test_override_replaces_generated_key(self):
        node = v.number().openapi({"type": "integer"})
        self.assertEqual(generate_schema(node), {"type": "integer"})

    def test_override_merges_into_nested_properties(self):
        node = v.object_({"name": v.string()}).openapi({"properties": {"name": {"maxLength": 10}}})
        self.assertEqual(
            generate_schema(node),
            {
                "type": "object",
                "properties": {"name": {"type": "string", "maxLength": 10}},
                "required": ["name"],
            },
        )

    def test_non_mapping_override_entries_are_skipped(self):
        node = openapi(v.boolean(), [{"description": "flag"}, "bogus"])
        with self.assertLogs("validator_to_openapi.generator", level="WARNING"):
            schema = generate_schema(node)
        self.assertEqual(schema, {"type": "boolean", "description": "flag"})

    def test_generation_does_not_mutate_annotation(self):
        node = v.string().openapi({"externalDocs": {"url": "https://example.com"}})
        schema = generate_schema(node)
        schema["externalDocs"]["url"] = "changed"
        self.assertEqual(node.openapi_schema, {"externalDocs": {"url": "https://example.com"}})


class TestNullability(unittest.TestCase):
    def test_nullable_marker_injected(self):
        self.assertEqual(generate_schema(v.string().nullable()), {"type": "string", "nullable": True})

    def test_override_can_clear_nullable(self):
        node = v.string().nullable().openapi({"nullable": False})
        self.assertEqual(generate_schema(node), {"type": "string", "nullable": False})

    def test_optional_adds_no_marker(self):
        self.assertEqual(generate_schema(v.string().optional()), {"type": "string"})

    def test_optional_of_nullable_keeps_marker(self):
        self.assertEqual(generate_schema(v.string().nullable().optional()), {"type": "string", "nullable": True})

    def test_union_with_null_is_nullable(self):
        schema = generate_schema(v.union(v.string(), v.null()))
        self.assertTrue(schema["nullable"])
        self.assertEqual(
            schema["oneOf"],
            [{"type": "string"}, {"type": "string", "format": "null", "nullable": True}],
        )


class TestRecursiveKinds(unittest.TestCase):
    def test_required_excludes_optional_and_never(self):
        node = v.object_({"a": v.string(), "b": v.string().optional(), "c": v.never()})
        self.assertEqual(
            generate_schema(node),
            {
                "type": "object",
                "properties": {
                    "a": {"type": "string"},
                    "b": {"type": "string"},
                    "c": {"readOnly": True},
                },
                "required": ["a"],
            },
        )

    def test_required_keeps_declaration_order(self):
        node = v.object_({"z": v.number(), "m": v.any_(), "a": v.boolean()})
        self.assertEqual(generate_schema(node)["required"], ["z", "a"])

    def test_nullable_field_is_still_required(self):
        node = v.object_({"deleted_at": v.date().nullable()})
        self.assertEqual(generate_schema(node)["required"], ["deleted_at"])

    def test_nested_object(self):
        node = v.object_({"address": v.object_({"city": v.string(), "zip": v.string().optional()})})
        self.assertEqual(
            generate_schema(node)["properties"]["address"],
            {
                "type": "object",
                "properties": {"city": {"type": "string"}, "zip": {"type": "string"}},
                "required": ["city"],
            },
        )

    def test_record_without_shape(self):
        self.assertEqual(generate_schema(v.record(v.number())), {"type": "object", "properties": {}, "required": []})

    def test_record_with_declared_shape(self):
        node = RecordNode(value_type=v.string(), shape={"id": v.string().uuid()})
        self.assertEqual(
            generate_schema(node),
            {
                "type": "object",
                "properties": {"id": {"type": "string", "format": "uuid"}},
                "required": ["id"],
            },
        )

    def test_array(self):
        self.assertEqual(generate_schema(v.boolean().array()), {"type": "array", "items": {"type": "boolean"}})

    def test_array_of_union(self):
        node = v.array(v.union(v.string(), v.number()))
        self.assertEqual(
            generate_schema(node),
            {"type": "array", "items": {"oneOf": [{"type": "string"}, {"type": "number"}]}},
        )

    def test_union_keeps_branch_order_and_overrides(self):
        node = v.union(v.literal("a"), v.number().int(), v.boolean()).openapi({"description": "mixed"})
        self.assertEqual(
            generate_schema(node),
            {
                "oneOf": [
                    {"type": "string", "enum": ["a"]},
                    {"type": "integer"},
                    {"type": "boolean"},
                ],
                "description": "mixed",
            },
        )

    def test_intersection(self):
        node = v.intersection(v.object_({"a": v.string()}), v.object_({"b": v.number()}))
        self.assertEqual(
            generate_schema(node),
            {
                "allOf": [
                    {"type": "object", "properties": {"a": {"type": "string"}}, "required": ["a"]},
                    {"type": "object", "properties": {"b": {"type": "number"}}, "required": ["b"]},
                ]
            },
        )

    def test_child_annotations_apply_to_child_only(self):
        node = v.object_({"name": v.string().openapi({"example": "Ada"})})
        schema = generate_schema(node)
        self.assertEqual(schema["properties"]["name"], {"type": "string", "example": "Ada"})
        self.assertNotIn("example", schema)


class TestDegradation(unittest.TestCase):
    def test_every_unsupported_kind_is_registered(self):
        for kind in UNSUPPORTED_KINDS:
            self.assertIn(kind, PARSERS)

    def test_unsupported_kind_returns_overrides_only(self):
        for node in (v.tuple_(v.string()), v.map_(v.string(), v.number()), v.lazy(v.string), v.promise(v.string())):
            self.assertEqual(generate_schema(openapi(node, {"foo": "bar"})), {"foo": "bar"})

    def test_unsupported_kind_without_override_is_empty(self):
        self.assertEqual(generate_schema(v.function()), {})
        self.assertEqual(generate_schema(v.void()), {})

    def test_any_is_nullable_pass_through(self):
        self.assertEqual(generate_schema(v.any_()), {"nullable": True})

    def test_unknown_kind_logs_and_falls_back(self):
        node = openapi(CustomNode(), {"foo": "bar"})
        with self.assertLogs("validator_to_openapi.generator", level="WARNING") as logs:
            schema = generate_schema(node)
        self.assertEqual(schema, {"foo": "bar"})
        self.assertIn("custom", logs.output[0])

    def test_parser_error_logs_and_falls_back(self):
        # A non-numeric exclusive bound makes the number parser raise
        node = NumberNode(checks=[Check("max", "ten", inclusive=False)]).openapi({"description": "broken"})
        with self.assertLogs("validator_to_openapi.generator", level="ERROR") as logs:
            schema = generate_schema(node)
        self.assertEqual(schema, {"description": "broken"})
        self.assertIn("NumberNode", logs.output[0])

    def test_error_in_child_only_degrades_child(self):
        broken = NumberNode(checks=[Check("min", None, inclusive=False)])
        with self.assertLogs("validator_to_openapi.generator", level="ERROR"):
            schema = generate_schema(v.object_({"ok": v.string(), "broken": broken}))
        self.assertEqual(schema["properties"], {"ok": {"type": "string"}, "broken": {}})
        self.assertEqual(schema["required"], ["ok", "broken"])

    def test_non_node_input_never_raises(self):
        with self.assertLogs("validator_to_openapi.generator", level="ERROR"):
            self.assertEqual(generate_schema(None), {})


class TestDeterminism(unittest.TestCase):
    def test_repeated_calls_are_equal(self):
        node = v.object_(
            {
                "id": v.string().uuid(),
                "tags": v.array(v.enum_(["a", "b"])).optional(),
                "size": v.number().transform(str),
            }
        )
        for use_output in (False, True):
            first = generate_schema(node, use_output)
            second = generate_schema(node, use_output)
            self.assertEqual(first, second)
            self.assertIsNot(first, second)

    def test_generate_schemas_keeps_order(self):
        schemas = generate_schemas({"B": v.boolean(), "A": v.bigint()})
        self.assertEqual(list(schemas), ["B", "A"])
        self.assertEqual(schemas["A"], {"type": "integer", "format": "int64"})


if __name__ == "__main__":
    unittest.main()
