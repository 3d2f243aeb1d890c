"""
Analyzer module.

Contains document loading, reference resolution and transitive collection.
"""

from __future__ import annotations

from .collector import SchemaCollector, iter_references
from .document_cache import Document, DocumentCache, build_document
from .reference_resolver import Reference, ReferenceResolver
from .registry import SchemaRegistry

__all__ = [
    "Document",
    "DocumentCache",
    "build_document",
    "Reference",
    "ReferenceResolver",
    "SchemaCollector",
    "SchemaRegistry",
    "iter_references",
]
