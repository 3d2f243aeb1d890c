"""
Exceptions raised by the generator pipeline.

Recoverable problems (missing files, unresolved references, cycles) are
not exceptions: they are recorded as diagnostics and degrade to permissive
types. Only failures that leave nothing sensible to generate are raised.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for generator errors."""


class SchemaDocumentError(GenerationError):
    """Raised when the root schema document cannot be read or parsed."""


class OutputValidationError(GenerationError):
    """Raised when generated code fails the pre-write sanity check."""
