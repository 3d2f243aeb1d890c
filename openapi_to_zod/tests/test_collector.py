"""
Tests for transitive schema collection and the registry.
"""

from __future__ import annotations

from pathlib import Path

from openapi_to_zod.pipeline.analyzer import (
    DocumentCache,
    ReferenceResolver,
    SchemaCollector,
    SchemaRegistry,
    iter_references,
)
from openapi_to_zod.pipeline.diagnostics import SCHEMA_NAME_CONFLICT, Diagnostics
from openapi_to_zod.pipeline.schema_ast import SchemaKind, SchemaNode, SchemaParser

SPECS_DIR = Path(__file__).parent / "test_data" / "specs"


def collect_file(filename, base_dir=SPECS_DIR):
    """Collect the schemas of a document, returning the registry and diagnostics."""
    diagnostics = Diagnostics()
    cache = DocumentCache(diagnostics)
    resolver = ReferenceResolver(cache, base_dir, diagnostics)
    document = cache.load(filename, base_dir)
    registry = SchemaCollector(resolver, diagnostics).collect_all(document.schemas)
    return registry, diagnostics


class TestIterReferences:
    """Tests for reference discovery inside a node."""

    def setup_method(self):
        self.parser = SchemaParser()

    def test_follows_properties_items_and_allof(self):
        node = self.parser.parse(
            {
                "allOf": [
                    {"$ref": "#/components/schemas/Base"},
                    {
                        "type": "object",
                        "properties": {
                            "tags": {"type": "array", "items": {"$ref": "#/components/schemas/Tag"}},
                            "owner": {"$ref": "common.yaml#/components/schemas/Owner"},
                        },
                    },
                ]
            }
        )
        assert list(iter_references(node)) == [
            "#/components/schemas/Base",
            "#/components/schemas/Tag",
            "common.yaml#/components/schemas/Owner",
        ]

    def test_does_not_follow_union_members(self):
        node = self.parser.parse({"oneOf": [{"$ref": "#/components/schemas/Cat"}, {"$ref": "#/components/schemas/Dog"}]})
        assert list(iter_references(node)) == []

    def test_does_not_follow_additional_properties(self):
        node = self.parser.parse({"type": "object", "additionalProperties": {"$ref": "#/components/schemas/Value"}})
        assert list(iter_references(node)) == []


class TestSchemaCollector:
    """Tests for SchemaCollector."""

    def test_root_document_only(self):
        diagnostics = Diagnostics()
        resolver = ReferenceResolver(DocumentCache(diagnostics), SPECS_DIR, diagnostics)
        schemas = SchemaParser().parse_schemas(
            {
                "Pet": {"type": "object", "properties": {"status": {"$ref": "#/components/schemas/Status"}}},
                "Status": {"type": "string", "enum": ["on", "off"]},
            }
        )

        registry = SchemaCollector(resolver, diagnostics).collect_all(schemas)

        assert list(registry.schemas) == ["Pet", "Status"]
        assert registry.root_names == ["Pet", "Status"]
        assert registry.sources == {"Pet": None, "Status": None}
        assert registry.external == {}
        assert len(diagnostics) == 0

    def test_external_document_is_merged(self):
        registry, diagnostics = collect_file("petstore.yaml")

        assert list(registry.schemas) == ["Pet", "PetStatus", "PetList", "Owner", "Address"]
        assert registry.root_names == ["Pet", "PetStatus", "PetList"]
        assert registry.sources["Owner"] == "common.yaml"
        assert registry.sources["Address"] == "common.yaml"
        assert registry.external["common.yaml#/components/schemas/Owner"] is registry.schemas["Owner"]
        assert len(diagnostics) == 0

    def test_mutually_referencing_files_terminate(self):
        registry, diagnostics = collect_file("cycle_a.yaml")

        assert set(registry.schemas) == {"Node", "Link"}
        assert registry.root_names == ["Node"]
        assert "cycle_b.yaml#/components/schemas/Link" in registry.external
        assert len(diagnostics) == 0

    def test_name_conflict_keeps_root_definition(self):
        registry, diagnostics = collect_file("conflict.yaml")

        assert registry.sources["Address"] is None
        assert list(registry.schemas["Address"].properties) == ["line1"]
        assert "Contact" in registry

        conflicts = diagnostics.by_code(SCHEMA_NAME_CONFLICT)
        assert len(conflicts) == 1
        assert conflicts[0].reference == "Address"
        assert "keeping root document" in conflicts[0].message

    def test_unresolved_internal_reference_is_silent(self):
        diagnostics = Diagnostics()
        resolver = ReferenceResolver(DocumentCache(diagnostics), SPECS_DIR, diagnostics)
        schemas = SchemaParser().parse_schemas(
            {"Pet": {"type": "object", "properties": {"kind": {"$ref": "#/components/schemas/Missing"}}}}
        )

        registry = SchemaCollector(resolver, diagnostics).collect_all(schemas)

        assert list(registry.schemas) == ["Pet"]
        assert len(diagnostics) == 0


class TestSchemaRegistry:
    """Tests for SchemaRegistry conflict policy."""

    def test_first_definition_wins(self):
        diagnostics = Diagnostics()
        registry = SchemaRegistry()
        first = SchemaNode(kind=SchemaKind.PRIMITIVE, type_name="string")
        second = SchemaNode(kind=SchemaKind.PRIMITIVE, type_name="number")

        assert registry.add("Id", first, None, diagnostics)
        assert not registry.add("Id", second, "ids.yaml", diagnostics)

        assert registry.get("Id") is first
        assert len(diagnostics.by_code(SCHEMA_NAME_CONFLICT)) == 1
        assert diagnostics.items[0].message == (
            "Schema Id from ids.yaml conflicts with the one from root document, keeping root document"
        )

    def test_identical_definition_is_accepted(self):
        diagnostics = Diagnostics()
        registry = SchemaRegistry()

        registry.add("Id", SchemaNode(kind=SchemaKind.PRIMITIVE, type_name="string"), "a.yaml", diagnostics)
        registry.add("Id", SchemaNode(kind=SchemaKind.PRIMITIVE, type_name="string"), "b.yaml", diagnostics)

        assert len(registry) == 1
        assert registry.sources["Id"] == "a.yaml"
        assert len(diagnostics) == 0

    def test_merge_keeps_existing_external_entries(self):
        diagnostics = Diagnostics()
        node = SchemaNode(kind=SchemaKind.OBJECT)
        other_node = SchemaNode(kind=SchemaKind.UNTYPED)

        registry = SchemaRegistry(external={"a.yaml#/X": node})
        other = SchemaRegistry(
            schemas={"Y": other_node},
            sources={"Y": "a.yaml"},
            external={"a.yaml#/X": other_node, "a.yaml#/Y": other_node},
        )
        registry.merge(other, diagnostics)

        assert registry.external["a.yaml#/X"] is node
        assert registry.external["a.yaml#/Y"] is other_node
        assert registry.sources["Y"] == "a.yaml"
