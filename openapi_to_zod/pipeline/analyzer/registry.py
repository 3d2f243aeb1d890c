"""
Schema registry: the flat name -> schema mapping of one run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..diagnostics import SCHEMA_NAME_CONFLICT, Diagnostics
from ..schema_ast import SchemaNode


@dataclass
class SchemaRegistry:
    """All schemas known to a run.

    Attributes:
        schemas: Schema name -> node, root document first, then external documents
        sources: Schema name -> document it came from (None for the root document)
        external: External reference identifier -> resolved node
        root_names: Names of the root document's schemas, in document order
    """

    schemas: dict[str, SchemaNode] = field(default_factory=dict)
    sources: dict[str, str | None] = field(default_factory=dict)
    external: dict[str, SchemaNode] = field(default_factory=dict)
    root_names: list[str] = field(default_factory=list)

    def add(self, name: str, node: SchemaNode, source: str | None, diagnostics: Diagnostics) -> bool:
        """
        Register a named schema.

        The first definition of a name wins. A different definition arriving
        later is dropped and reported as a conflict.

        Returns:
            True if the schema was registered
        """
        existing = self.schemas.get(name)
        if existing is None:
            self.schemas[name] = node
            self.sources[name] = source
            return True

        if existing != node:
            kept = self.sources.get(name) or "root document"
            dropped = source or "root document"
            diagnostics.warn(
                SCHEMA_NAME_CONFLICT,
                f"Schema {name} from {dropped} conflicts with the one from {kept}, keeping {kept}",
                reference=name,
            )
        return False

    def merge(self, other: SchemaRegistry, diagnostics: Diagnostics) -> None:
        """Merge another registry (collected from an external document) into this one."""
        for name, node in other.schemas.items():
            self.add(name, node, other.sources.get(name), diagnostics)
        for key, node in other.external.items():
            self.external.setdefault(key, node)

    def get(self, name: str) -> SchemaNode | None:
        return self.schemas.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.schemas

    def __len__(self) -> int:
        return len(self.schemas)
