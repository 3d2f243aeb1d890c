"""
Document cache for external schema files.

Loads and parses schema documents by path, memoized by resolved path
for the lifetime of one generator run.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..diagnostics import DOCUMENT_LOAD_FAILED, Diagnostics
from ..schema_ast import SchemaNode, SchemaParser


@dataclass
class Document:
    """A parsed schema document."""

    path: Path | None = None
    raw: dict[str, Any] = field(default_factory=dict)
    schemas: dict[str, SchemaNode] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.raw


def schemas_section(raw: Mapping) -> Any:
    """Return the raw ``components.schemas`` mapping of a document, if any."""
    components = raw.get("components")
    if not isinstance(components, Mapping):
        return {}
    return components.get("schemas") or {}


def build_document(raw: Any, path: Path | None = None, parser: SchemaParser | None = None) -> Document:
    """Wrap a deserialized document and parse its named schemas."""
    if not isinstance(raw, Mapping):
        return Document(path=path)
    parser = parser or SchemaParser()
    return Document(path=path, raw=dict(raw), schemas=parser.parse_schemas(schemas_section(raw)))


class DocumentCache:
    """Loads external documents once per resolved path."""

    def __init__(self, diagnostics: Diagnostics, parser: SchemaParser | None = None):
        """
        Initialize the cache.

        Args:
            diagnostics: Collector receiving load failures
            parser: Schema parser used for the documents' named schemas
        """
        self.diagnostics = diagnostics
        self.parser = parser or SchemaParser()
        self._documents: dict[Path, Document] = {}

    def load(self, path: str, base_dir: Path) -> Document:
        """
        Load a document relative to ``base_dir``.

        Failures are reported as diagnostics and produce an empty document,
        which is cached like any other so a broken file is read only once.

        Args:
            path: Document path as written in the reference
            base_dir: Directory the path is relative to

        Returns:
            The parsed (possibly empty) Document
        """
        full_path = (Path(base_dir) / path).resolve()
        if full_path in self._documents:
            return self._documents[full_path]

        document = self._read(path, full_path)
        self._documents[full_path] = document
        return document

    def _read(self, path: str, full_path: Path) -> Document:
        try:
            with open(full_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self.diagnostics.warn(
                DOCUMENT_LOAD_FAILED,
                f"Could not load external schema {path}: {e}",
                reference=path,
            )
            return Document(path=full_path)

        if raw is not None and not isinstance(raw, Mapping):
            self.diagnostics.warn(
                DOCUMENT_LOAD_FAILED,
                f"External schema {path} is not a mapping, ignoring it",
                reference=path,
            )
            return Document(path=full_path)

        return build_document(raw or {}, full_path, self.parser)

    @property
    def loaded_paths(self) -> list[Path]:
        return list(self._documents)

    def __contains__(self, full_path: Path) -> bool:
        return full_path in self._documents
