"""
OpenAPI schema parser that builds schema nodes.

Classifies each raw mapping into exactly one ``SchemaKind`` using a
fixed precedence, and parses children recursively. No reference is
resolved here.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from .nodes import SchemaKind, SchemaNode


def _enum_value(value: Any) -> Any:
    """YAML loads unquoted dates and timestamps as objects; enums keep them as ISO strings."""
    if isinstance(value, date):
        return value.isoformat()
    return value


class SchemaParser:
    """Parses raw ``components.schemas`` entries into schema nodes."""

    UNION_KEYWORDS = ("oneOf", "anyOf")

    def parse_schemas(self, schemas: Any) -> dict[str, SchemaNode]:
        """
        Parse a ``components.schemas`` mapping.

        Args:
            schemas: Mapping of schema name to raw schema (anything else counts as empty)

        Returns:
            Ordered mapping of schema name to SchemaNode
        """
        if not isinstance(schemas, Mapping):
            return {}
        return {str(name): self.parse(raw) for name, raw in schemas.items()}

    def parse(self, schema: Any) -> SchemaNode:
        """
        Parse one raw schema recursively.

        Args:
            schema: The raw schema value (normally a mapping)

        Returns:
            SchemaNode tagged with its kind
        """
        if not isinstance(schema, Mapping):
            return SchemaNode(kind=SchemaKind.UNTYPED)

        type_name = schema.get("type")
        description = schema.get("description")
        node = SchemaNode(
            type_name=type_name if isinstance(type_name, str) else None,
            format=schema.get("format"),
            description=description if isinstance(description, str) else None,
        )

        if "$ref" in schema:
            node.kind = SchemaKind.REFERENCE
            node.ref = str(schema["$ref"])
            return node

        for keyword in self.UNION_KEYWORDS:
            if keyword in schema:
                node.kind = SchemaKind.UNION
                node.union_keyword = keyword
                node.members = self._parse_list(schema[keyword])
                return node

        if "allOf" in schema:
            node.kind = SchemaKind.MERGE
            node.members = self._parse_list(schema["allOf"])
            return node

        if "enum" in schema:
            node.kind = SchemaKind.ENUM
            values = schema["enum"]
            node.enum_values = [_enum_value(v) for v in values] if isinstance(values, list) else []
            return node

        if type_name is not None and node.type_name is None:
            # A list of types (OpenAPI 3.1 nullable form) has no single Zod primitive
            node.kind = SchemaKind.PRIMITIVE
            return node

        if node.type_name is None:
            # Objects are often written without "type"
            if "properties" in schema or "additionalProperties" in schema:
                self._parse_object(schema, node)
            else:
                node.kind = SchemaKind.UNTYPED
            return node

        if node.type_name == "array":
            node.kind = SchemaKind.ARRAY
            if "items" in schema:
                node.items = self.parse(schema["items"])
            return node

        if node.type_name == "object":
            self._parse_object(schema, node)
            return node

        node.kind = SchemaKind.PRIMITIVE
        return node

    def _parse_list(self, members: Any) -> list[SchemaNode]:
        if not isinstance(members, list):
            return []
        return [self.parse(member) for member in members]

    def _parse_object(self, schema: Mapping, node: SchemaNode) -> None:
        node.kind = SchemaKind.OBJECT

        properties = schema.get("properties") or {}
        if isinstance(properties, Mapping):
            node.properties = {str(name): self.parse(prop) for name, prop in properties.items()}

        required = schema.get("required") or []
        if isinstance(required, list):
            node.required = [str(name) for name in required]

        additional = schema.get("additionalProperties")
        if isinstance(additional, bool):
            node.additional_properties = additional
        elif isinstance(additional, Mapping):
            node.additional_properties = self.parse(additional)
