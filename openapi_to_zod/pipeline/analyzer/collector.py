"""
Transitive collector.

Discovers every named schema reachable from the root document, following
references into external documents, and builds the run's registry.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from ..diagnostics import Diagnostics
from ..schema_ast import SchemaKind, SchemaNode
from .reference_resolver import Reference, ReferenceResolver
from .registry import SchemaRegistry


def iter_references(node: SchemaNode) -> Iterator[str]:
    """
    Yield the $ref strings embedded in a node.

    Follows object properties, array items and allOf members. Union members
    are not followed: they are resolved when converted.
    """
    match node.kind:
        case SchemaKind.REFERENCE:
            yield node.ref
        case SchemaKind.OBJECT:
            for prop in node.properties.values():
                yield from iter_references(prop)
        case SchemaKind.ARRAY:
            if node.items is not None:
                yield from iter_references(node.items)
        case SchemaKind.MERGE:
            for member in node.members:
                yield from iter_references(member)


class SchemaCollector:
    """Worklist collection of reachable schemas."""

    def __init__(self, resolver: ReferenceResolver, diagnostics: Diagnostics):
        """
        Initialize the collector.

        Args:
            resolver: Resolver used for external references
            diagnostics: Collector receiving name conflicts
        """
        self.resolver = resolver
        self.diagnostics = diagnostics
        # External documents whose schema collection has been merged
        self._expanded_files: set[str] = set()

    def collect_all(self, root_schemas: Mapping[str, SchemaNode], source: str | None = None) -> SchemaRegistry:
        """
        Collect every schema reachable from ``root_schemas``.

        Args:
            root_schemas: Named schemas of the document being collected
            source: Document path for external documents, None for the root

        Returns:
            SchemaRegistry seeded with ``root_schemas`` and extended with
            everything they reach
        """
        registry = SchemaRegistry()
        if source is None:
            registry.root_names = list(root_schemas)
        for name, node in root_schemas.items():
            registry.add(name, node, source, self.diagnostics)

        # Insertion-ordered work queue keyed by reference identifier
        pending: dict[str, Reference] = {}
        processed: set[str] = set()

        for node in root_schemas.values():
            self._enqueue(node, pending)

        while pending:
            key = next(iter(pending))
            reference = pending.pop(key)
            if key in processed:
                continue
            processed.add(key)

            if reference.is_external:
                node = self._resolve_external(reference, registry)
            else:
                node = registry.get(reference.name)

            if node is None:
                continue

            self._enqueue(node, pending)
            if reference.is_external:
                registry.external[key] = node

        return registry

    def _enqueue(self, node: SchemaNode, pending: dict[str, Reference]) -> None:
        for ref in iter_references(node):
            reference = Reference.parse(ref)
            pending.setdefault(reference.key, reference)

    def _resolve_external(self, reference: Reference, registry: SchemaRegistry) -> SchemaNode | None:
        """Resolve an external reference, merging its document's schemas on first use."""
        file_key = str(self.resolver.document_path(reference))
        if file_key not in self._expanded_files:
            # Marked before recursing so mutually referencing files terminate
            self._expanded_files.add(file_key)
            sub_registry = self.collect_all(self.resolver.load_schemas(reference), source=reference.file_path)
            registry.merge(sub_registry, self.diagnostics)
        return self.resolver.resolve_external(reference)
