"""
Reference resolver for $ref resolution.

Classifies a $ref as internal (``#/components/schemas/Name``) or external
(``common.yaml#/components/schemas/Name``) and resolves it to a schema node.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ..diagnostics import UNRESOLVED_REFERENCE, Diagnostics
from ..schema_ast import SchemaNode
from .document_cache import DocumentCache

# File extensions that mark a $ref as pointing into another document
EXTERNAL_EXTENSIONS = (".yaml", ".yml")


def _unescape(segment: str) -> str:
    """Decode JSON pointer escapes."""
    return segment.replace("~1", "/").replace("~0", "~")


@dataclass(frozen=True)
class Reference:
    """A parsed $ref string."""

    raw: str
    is_external: bool = False
    file_path: str = ""  # External document path (external only)
    pointer: tuple[str, ...] = field(default_factory=tuple)  # Decoded pointer segments

    @staticmethod
    def parse(ref: str) -> Reference:
        file_part, sep, fragment = ref.partition("#")
        if sep and any(file_part.endswith(ext) for ext in EXTERNAL_EXTENSIONS):
            segments = tuple(_unescape(s) for s in fragment.split("/") if s)
            return Reference(raw=ref, is_external=True, file_path=file_part, pointer=segments)
        return Reference(raw=ref, pointer=tuple(_unescape(s) for s in ref.split("/")))

    @property
    def name(self) -> str:
        """Name of the referenced schema (last pointer segment)."""
        return self.pointer[-1] if self.pointer else ""

    @property
    def key(self) -> str:
        """
        Identifier used for collection and cycle detection.

        Internal references are identified by schema name, external ones by
        file and pointer.
        """
        if self.is_external:
            return f"{self.file_path}#/{'/'.join(self.pointer)}"
        return self.name


class ReferenceResolver:
    """Resolves $ref strings to schema nodes."""

    def __init__(self, cache: DocumentCache, base_dir: Path, diagnostics: Diagnostics):
        """
        Initialize the resolver.

        Args:
            cache: Document cache for external files
            base_dir: Directory of the root document; every external path,
                including nested ones, is resolved against it
            diagnostics: Collector receiving unresolved references
        """
        self.cache = cache
        self.base_dir = Path(base_dir)
        self.diagnostics = diagnostics
        self._external_nodes: dict[str, SchemaNode | None] = {}

    def resolve(self, ref: str | Reference, local_schemas: Mapping[str, SchemaNode] | None = None) -> SchemaNode | None:
        """
        Resolve a reference.

        Args:
            ref: The $ref string (or an already parsed Reference)
            local_schemas: Named schemas used for internal references

        Returns:
            The referenced SchemaNode, or None if it cannot be found
        """
        reference = ref if isinstance(ref, Reference) else Reference.parse(ref)
        if reference.is_external:
            return self.resolve_external(reference)
        if local_schemas is None:
            return None
        return local_schemas.get(reference.name)

    def resolve_external(self, reference: Reference) -> SchemaNode | None:
        """Load the referenced document and walk the pointer into it."""
        if reference.key in self._external_nodes:
            return self._external_nodes[reference.key]

        document = self.cache.load(reference.file_path, self.base_dir)
        if reference.pointer[:2] == ("components", "schemas") and len(reference.pointer) == 3:
            # Same node object as the document's named schema
            node = document.schemas.get(reference.name)
            if node is not None:
                self._external_nodes[reference.key] = node
                return node

        target = document.raw
        for part in reference.pointer:
            if not isinstance(target, Mapping) or part not in target:
                target = None
                break
            target = target[part]

        node = None
        if isinstance(target, Mapping):
            node = self.cache.parser.parse(target)
        else:
            self.diagnostics.warn(
                UNRESOLVED_REFERENCE,
                f"Could not resolve external reference {reference.raw}, falling back to z.any()",
                reference=reference.raw,
            )

        self._external_nodes[reference.key] = node
        return node

    def load_schemas(self, reference: Reference) -> dict[str, SchemaNode]:
        """Return the named schemas of the document an external reference points into."""
        return self.cache.load(reference.file_path, self.base_dir).schemas

    def document_path(self, reference: Reference) -> Path:
        return (self.base_dir / reference.file_path).resolve()
