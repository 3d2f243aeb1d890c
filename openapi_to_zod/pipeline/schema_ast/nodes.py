"""
AST node definitions for OpenAPI schemas.

A schema node is a closed tagged variant: ``kind`` says which of the
populated fields is meaningful, so conversion can match on the kind
instead of probing raw dictionary keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SchemaKind(str, Enum):
    """Kind of a schema node, in conversion precedence order."""

    REFERENCE = "reference"  # $ref
    UNION = "union"  # oneOf / anyOf
    MERGE = "merge"  # allOf
    ENUM = "enum"  # enum
    UNTYPED = "untyped"  # no structural signal at all
    PRIMITIVE = "primitive"  # string, number, integer, boolean, or an unknown type name
    ARRAY = "array"
    OBJECT = "object"


@dataclass
class SchemaNode:
    """One parsed schema."""

    kind: SchemaKind = SchemaKind.UNTYPED

    # Declared "type" (primitive name, "array", "object", or None)
    type_name: str | None = None
    format: str | None = None
    description: str | None = None

    # REFERENCE
    ref: str = ""

    # UNION ("oneOf" or "anyOf") and MERGE members, in declaration order
    members: list[SchemaNode] = field(default_factory=list)
    union_keyword: str = ""

    # ENUM
    enum_values: list[Any] = field(default_factory=list)

    # ARRAY
    items: SchemaNode | None = None

    # OBJECT: properties keep declaration order
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    # None (absent), True/False, or a value schema
    additional_properties: bool | SchemaNode | None = None

    @property
    def is_reference(self) -> bool:
        return self.kind == SchemaKind.REFERENCE
