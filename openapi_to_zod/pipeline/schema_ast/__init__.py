"""
Schema AST module.

Contains the schema node definitions and the parser for OpenAPI schemas.
"""

from __future__ import annotations

from .nodes import SchemaKind, SchemaNode
from .parser import SchemaParser

__all__ = [
    "SchemaKind",
    "SchemaNode",
    "SchemaParser",
]
